"""Terminal output using rich."""

from contextlib import contextmanager
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt
from rich.table import Table

from ..domain.models import RenderedReport, ReportTable

PIPE_WIDTH = 160


class ModernCLI:
    """Minimal CLI interface with rich formatting."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        # Pipes default to 80 columns, which folds the weekly grid
        if not self.console.is_terminal and self.console.width < PIPE_WIDTH:
            self.console.width = PIPE_WIDTH

    def show_info(self, message: str) -> None:
        self.console.print(f"[green]{escape(message)}[/green]")

    def show_error(self, error: str) -> None:
        """Show error message."""
        self.console.print(f"[red bold]{escape(error)}[/red bold]")

    def show_warning(self, message: str) -> None:
        """Show warning message."""
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def show_line(self, text: str = "") -> None:
        self.console.print(escape(text))

    def show_report(self, report: RenderedReport) -> None:
        """Draw every block of a rendered worklog report."""
        for index, block in enumerate(report.blocks):
            if index and block.heading:
                self.console.print()
            if block.heading:
                self.console.print(f"[green]{escape(block.heading)}[/green]")
            if block.table is not None:
                self.console.print(self._build_table(block.table))
            if block.notice:
                self.show_warning(block.notice)

    def _build_table(self, report_table: ReportTable) -> Table:
        table = Table(
            title=escape(report_table.title) if report_table.title else None,
            box=box.ASCII,
            show_lines=False,
        )
        for header in report_table.headers:
            table.add_column(escape(header), no_wrap=True)

        for row in report_table.rows:
            table.add_row(*(escape(cell) for cell in row))

        if report_table.footer is not None:
            table.add_section()
            table.add_row(
                *(escape(cell) for cell in report_table.footer), style="green"
            )
        return table

    def ask(self, message: str, default: Optional[str] = None) -> str:
        """Prompt for a value; an empty answer returns the default or ''."""
        answer = Prompt.ask(
            escape(message),
            console=self.console,
            default=default if default is not None else "",
            show_default=default is not None,
        )
        return answer.strip()

    def choose(self, message: str, choices: Sequence[str], error: str = "{} is invalid.") -> str:
        """Prompt until a listed choice is picked by number or by name."""
        self.console.print(escape(message))
        for number, choice in enumerate(choices):
            self.console.print(f"  \\[{number}] {escape(choice)}")

        while True:
            answer = Prompt.ask(">", console=self.console).strip()
            if answer.isdigit() and int(answer) < len(choices):
                return choices[int(answer)]
            if answer in choices:
                return answer
            self.show_error(error.format(answer))

    @contextmanager
    def progress_spinner(self, description: str):
        """Context manager for showing a spinner with description.

        Nothing is drawn when the console is not a terminal, so piped output
        stays free of the spinner's blank line.
        """
        if not self.console.is_terminal:
            yield None
            return

        with Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            task = progress.add_task(description, total=None)
            try:
                yield progress
            finally:
                progress.remove_task(task)

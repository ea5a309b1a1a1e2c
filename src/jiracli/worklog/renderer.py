"""Report layouts for aggregated worklogs.

Everything here is a pure function of the aggregate: no I/O and no clock.
Cells are returned as preformatted strings so the console layer only has to
draw them.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple, Union
import calendar

from ..domain.models import (
    DailyAggregate,
    DayEntry,
    IssueTime,
    Period,
    RenderedReport,
    ReportBlock,
    ReportTable,
)

WEEKDAY_HEADERS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
CALENDAR_HEADERS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
ISSUE_HEADERS = ("Issue", "Hours", "Summary")
PLACEHOLDER = "-"

NO_WORKLOGS = {
    Period.DAILY: "No worklogs found for this day.",
    Period.WEEKLY: "No worklogs found for this week.",
    Period.BIWEEKLY: "No worklogs found for this period.",
    Period.MONTHLY: "No worklogs found for this month.",
}


def to_hours(seconds: int) -> float:
    return round(seconds / 3600, 2)


def format_hours(seconds: int) -> str:
    """Format seconds as hours with at most two decimals, e.g. 5400 -> '1.5'."""
    return f"{to_hours(seconds):.2f}".rstrip("0").rstrip(".")


def render_report(
    aggregate: DailyAggregate, period: Union[Period, str], detailed: bool
) -> RenderedReport:
    """Lay out an aggregate as the report shape of a period.

    Args:
        aggregate: Per-day worklog totals
        period: Report period; unknown values render as daily
        detailed: Render the per-issue breakdown

    Returns:
        Rendered report with its total in seconds
    """
    period = Period.parse(period)
    days = aggregate.days

    if period is Period.WEEKLY:
        return render_weekly(days, detailed)
    if period is Period.BIWEEKLY:
        return render_biweekly(days, detailed)
    if period is Period.MONTHLY:
        return render_monthly(days, detailed)
    return render_daily(days, detailed)


def render_daily(days: Dict[str, DayEntry], detailed: bool) -> RenderedReport:
    if not days:
        return RenderedReport.empty(NO_WORKLOGS[Period.DAILY])

    day = next(iter(days))
    entry = days[day]
    title = f"Work Log - {day}"

    if detailed:
        if not entry.issues:
            return RenderedReport.empty(NO_WORKLOGS[Period.DAILY])
        rows = tuple(
            (issue_key, format_hours(item.seconds), item.summary)
            for issue_key, item in entry.issues.items()
        )
        total = entry.seconds
        table = ReportTable(
            title=title,
            headers=ISSUE_HEADERS,
            rows=rows,
            footer=("Total", format_hours(total), ""),
        )
        return RenderedReport(blocks=(ReportBlock(table=table),), total_seconds=total)

    table = ReportTable(
        title=title,
        headers=("Date", "Hours"),
        rows=((day, format_hours(entry.seconds)),),
    )
    return RenderedReport(blocks=(ReportBlock(table=table),), total_seconds=entry.seconds)


def render_weekly(
    days: Dict[str, DayEntry], detailed: bool, heading: Optional[str] = None
) -> RenderedReport:
    """Lay out up to a week of days in Monday..Sunday columns.

    Days land in the column of their ISO weekday, so partial weeks keep their
    alignment.
    """
    if not days:
        return _notice(NO_WORKLOGS[Period.WEEKLY], heading)

    # label -> seconds per weekday column (index 0 = Monday)
    grid: Dict[str, List[int]] = {}

    if detailed:
        for day, entry in days.items():
            column = _weekday_index(day)
            for issue_key, item in entry.issues.items():
                grid.setdefault(issue_key, [0] * 7)[column] += item.seconds
        if not grid:
            return _notice(NO_WORKLOGS[Period.WEEKLY], heading)
    else:
        totals = grid.setdefault("Total", [0] * 7)
        for day, entry in days.items():
            totals[_weekday_index(day)] += entry.seconds

    column_totals = [sum(cells[i] for cells in grid.values()) for i in range(7)]
    rows = tuple((label, *(_cell(seconds) for seconds in cells)) for label, cells in grid.items())

    table = ReportTable(
        title="Weekly Work Log",
        headers=("", *WEEKDAY_HEADERS),
        rows=rows,
        footer=("Total", *(_cell(seconds) for seconds in column_totals)),
    )
    return RenderedReport(
        blocks=(ReportBlock(heading=heading, table=table),),
        total_seconds=sum(column_totals),
    )


def render_biweekly(days: Dict[str, DayEntry], detailed: bool) -> RenderedReport:
    if not days:
        return RenderedReport.empty(NO_WORKLOGS[Period.BIWEEKLY])

    split = date.fromisoformat(min(days)) + timedelta(days=7)
    first_week = {day: entry for day, entry in days.items() if date.fromisoformat(day) < split}
    second_week = {day: entry for day, entry in days.items() if date.fromisoformat(day) >= split}

    first = render_weekly(first_week, detailed, heading="Week 1:")
    second = render_weekly(second_week, detailed, heading="Week 2:")
    return RenderedReport(
        blocks=first.blocks + second.blocks,
        total_seconds=first.total_seconds + second.total_seconds,
    )


def render_monthly(days: Dict[str, DayEntry], detailed: bool) -> RenderedReport:
    if not days:
        return RenderedReport.empty(NO_WORKLOGS[Period.MONTHLY])

    first_date = date.fromisoformat(min(days))
    year, month = first_date.year, first_date.month
    _, last_day = calendar.monthrange(year, month)

    total = 0
    rows: List[Tuple[str, ...]] = []
    week = [""] * 7
    for day_number in range(1, last_day + 1):
        current = date(year, month, day_number)
        column = current.isoweekday() - 1

        cell = str(day_number)
        entry = days.get(current.isoformat())
        if entry is not None:
            seconds = entry.seconds
            total += seconds
            if to_hours(seconds) > 0:
                cell += f"\n{format_hours(seconds)} h"
        week[column] = cell

        if column == 6 or day_number == last_day:
            rows.append(tuple(week))
            week = [""] * 7

    month_title = f"{calendar.month_name[month]} {year}"
    blocks = [
        ReportBlock(
            table=ReportTable(
                title=f"Monthly Work Log - {month_title}",
                headers=CALENDAR_HEADERS,
                rows=tuple(rows),
            )
        )
    ]

    if detailed and total > 0:
        breakdown = _issue_breakdown(days)
        blocks.append(
            ReportBlock(
                heading="Issue Breakdown:",
                table=ReportTable(
                    headers=ISSUE_HEADERS,
                    rows=tuple(
                        (issue_key, format_hours(item.seconds), item.summary)
                        for issue_key, item in breakdown
                    ),
                    footer=("Total", format_hours(total), ""),
                ),
            )
        )

    return RenderedReport(blocks=tuple(blocks), total_seconds=total)


def _issue_breakdown(days: Dict[str, DayEntry]) -> List[Tuple[str, IssueTime]]:
    """Sum each issue over all days, largest first; ties keep encounter order."""
    summed: Dict[str, IssueTime] = {}
    for entry in days.values():
        for issue_key, item in entry.issues.items():
            bucket = summed.setdefault(issue_key, IssueTime(summary=item.summary))
            bucket.seconds += item.seconds
    return sorted(summed.items(), key=lambda pair: pair[1].seconds, reverse=True)


def _weekday_index(day: str) -> int:
    return date.fromisoformat(day).isoweekday() - 1


def _cell(seconds: int) -> str:
    return format_hours(seconds) if to_hours(seconds) > 0 else PLACEHOLDER


def _notice(message: str, heading: Optional[str]) -> RenderedReport:
    return RenderedReport(blocks=(ReportBlock(heading=heading, notice=message),), total_seconds=0)

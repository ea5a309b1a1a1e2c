"""Command-line interface for jira-cli."""

import logging
import re
import time
from contextlib import contextmanager
from typing import Iterator, Optional

import requests
import typer

from ..api.jira_client import JiraClient, from_adf, to_adf
from ..config import AppConfig, get_config_manager, is_provided, load_config
from ..factories.client_factory import ClientFactory
from ..utils.logging import StructuredLogger, setup_console_logging
from ..worklog.date_range import calculate_date_range
from ..worklog.fetcher import WorklogFetcher
from ..worklog.renderer import format_hours, render_report
from .console import ModernCLI

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="jira-cli",
    help="Work with Jira issues, projects and worklogs from the terminal.",
    add_completion=False,
    no_args_is_help=True,
)


def get_jira_client(config: AppConfig) -> JiraClient:
    """Create the Jira client for a command."""
    return ClientFactory.create_jira_client(config)


def _require_client(cli: ModernCLI, config: AppConfig) -> JiraClient:
    try:
        return get_jira_client(config)
    except ValueError as e:
        cli.show_error(f"Configuration error: {e}")
        raise typer.Exit(code=1)


@contextmanager
def _api_errors(cli: ModernCLI, message: str) -> Iterator[None]:
    """Turn a failed Jira request into an error message and exit code 1."""
    try:
        yield
    except requests.RequestException as e:
        cli.show_error(f"{message} {e}")
        raise typer.Exit(code=1)


def _value_or_prompt(
    cli: ModernCLI, value: Optional[str], question: str, default: Optional[str] = None
) -> str:
    if value is not None:
        return value
    return cli.ask(question, default=default)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR); defaults to LOG_LEVEL"
    ),
) -> None:
    """Work with Jira issues, projects and worklogs from the terminal."""
    config = load_config()
    setup_console_logging(log_level or config.logging.level)


@app.command("show-work-log")
def show_work_log(
    period: str = typer.Option(
        "daily", "--period", help="The period for worklogs (daily, weekly, biweekly, monthly)"
    ),
    detailed: bool = typer.Option(
        False, "--detailed", help="Show detailed worklog breakdown by issue"
    ),
    account_id: Optional[str] = typer.Option(
        None, "--accountId", help="The accountId of the user to show worklogs for"
    ),
) -> None:
    """Show the user's worklog totals for a period."""
    cli = ModernCLI()
    config = load_config()

    if not is_provided(account_id):
        account_id = config.jira.account_id
    if not is_provided(account_id):
        cli.show_error("Please provide an accountId using the --accountId option.")
        raise typer.Exit(code=1)

    jira_client = _require_client(cli, config)

    date_range = calculate_date_range(period)
    time_range = {
        "from": date_range.start.strftime("%Y-%m-%d"),
        "to": date_range.end.strftime("%Y-%m-%d"),
    }
    cli.show_info(f"Time period: {time_range['from']} to {time_range['to']}")
    cli.show_line()

    structured = StructuredLogger(config.logging)
    structured.log_report_start(account_id, period, time_range, detailed=detailed)
    started = time.time()

    fetcher = WorklogFetcher(jira_client)
    with cli.progress_spinner("Fetching worklogs..."):
        aggregate = fetcher.fetch(account_id, date_range, detailed)
    if fetcher.last_error:
        structured.log_api_error("jira", fetcher.last_error)

    report = render_report(aggregate, period, detailed)
    cli.show_report(report)
    cli.show_info(f"Total: {format_hours(report.total_seconds)} hours")

    structured.log_report_complete(
        duration_ms=int((time.time() - started) * 1000),
        period=period,
        time_range=time_range,
        total_seconds=report.total_seconds,
        status="partial" if fetcher.last_error else "success",
        error=fetcher.last_error,
    )


@app.command("list-projects")
def list_projects() -> None:
    """List all available Jira projects."""
    cli = ModernCLI()
    jira_client = _require_client(cli, load_config())

    with _api_errors(cli, "Failed to fetch projects."):
        projects = jira_client.get_projects()

    if not projects:
        cli.show_error("No projects found.")
        return

    for project in projects:
        cli.show_line(f"{project['key']}: {project.get('name', '')}")


@app.command("create-project")
def create_project(
    name: Optional[str] = typer.Option(None, "--name", help="The name of the project"),
    key: Optional[str] = typer.Option(None, "--key", help="The project key"),
    project_type_key: Optional[str] = typer.Option(
        None, "--projectTypeKey", help="The type of the project (e.g., software, business)"
    ),
    lead: Optional[str] = typer.Option(
        None, "--lead", help="The account ID of the project lead"
    ),
) -> None:
    """Create a new project in Jira."""
    cli = ModernCLI()
    jira_client = _require_client(cli, load_config())

    name = _value_or_prompt(cli, name, "Enter project name")
    key = _value_or_prompt(cli, key, "Enter project key")
    project_type_key = _value_or_prompt(
        cli, project_type_key, "Enter project type (e.g., software, business)"
    )
    lead = _value_or_prompt(cli, lead, "Enter project lead account ID")

    with _api_errors(cli, f"Failed to create project '{name}'."):
        jira_client.create_project(name, key, project_type_key, lead)

    cli.show_info(f"Project '{name}' created successfully with key '{key}'.")


@app.command("list-issues")
def list_issues(
    project: Optional[str] = typer.Option(None, "--project", "-p", help="The project key"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter issues by status"),
    window: str = typer.Option(
        "0-9", "--range", "-r", help='Range of issues to show, e.g. "5-10"'
    ),
) -> None:
    """List issues of a project."""
    cli = ModernCLI()

    if not is_provided(project):
        cli.show_error("Error: The --project option is required.")
        raise typer.Exit(code=1)

    match = re.fullmatch(r"\s*(\d+)\s*-\s*(\d+)\s*", window)
    if match is None or int(match.group(2)) < int(match.group(1)):
        cli.show_error(f"Error: Invalid range '{window}', expected e.g. \"0-9\".")
        raise typer.Exit(code=1)
    start_at = int(match.group(1))
    max_results = int(match.group(2)) - start_at + 1

    jira_client = _require_client(cli, load_config())
    with _api_errors(cli, "Failed to fetch issues."):
        issues = jira_client.get_issues_by_project(project, status, start_at, max_results)

    if not issues:
        cli.show_error("No issues found.")
        return

    for issue in issues:
        fields = issue.get("fields", {})
        status_name = (fields.get("status") or {}).get("name", "")
        cli.show_line(f"{issue['key']} ({status_name}): {fields.get('summary', '')}")


@app.command("show-issue")
def show_issue(
    issue_key: Optional[str] = typer.Option(
        None, "--issueKey", help="The ID or key of the Jira issue"
    ),
) -> None:
    """Show details for a specific issue."""
    cli = ModernCLI()

    if not is_provided(issue_key):
        cli.show_error("Error: The --issueKey option is required.")
        raise typer.Exit(code=1)

    jira_client = _require_client(cli, load_config())
    with _api_errors(cli, f"Error: Issue with key '{issue_key}' not found or could not be retrieved."):
        issue = jira_client.get_issue(issue_key)

    fields = issue.get("fields", {})
    description = from_adf(fields.get("description")) or "No description available"
    cli.show_line(f"Issue Key: {issue['key']}")
    cli.show_line(f"Summary: {fields.get('summary', '')}")
    cli.show_line(f"Status: {(fields.get('status') or {}).get('name', '')}")
    cli.show_line(f"Description: {description}")


@app.command("create-issue")
def create_issue(
    project: Optional[str] = typer.Option(None, "--project", help="The project key"),
    summary: Optional[str] = typer.Option(None, "--summary", help="The issue summary"),
    description: Optional[str] = typer.Option(
        None, "--description", help="The issue description"
    ),
    issue_type: str = typer.Option("Task", "--type", help="The issue type"),
    priority: str = typer.Option("Medium", "--priority", help="The issue priority"),
) -> None:
    """Create a new issue in Jira."""
    cli = ModernCLI()
    jira_client = _require_client(cli, load_config())

    project = _value_or_prompt(cli, project, "Enter the project key")
    summary = _value_or_prompt(cli, summary, "Enter the issue summary")
    description = _value_or_prompt(cli, description, "Enter the issue description (optional)")

    if not is_provided(project) or not is_provided(summary):
        cli.show_error("A project key and a summary are required.")
        raise typer.Exit(code=1)

    with _api_errors(cli, "Failed to create the issue."):
        issue = jira_client.create_issue(project, summary, description, issue_type, priority)

    cli.show_info(f"Issue created successfully with key: {issue['key']}")


@app.command("edit-issue")
def edit_issue(
    issue_key: Optional[str] = typer.Option(None, "--issueKey", help="The key of the issue to edit"),
    summary: Optional[str] = typer.Option(None, "--summary", help="The new summary of the issue"),
    description: Optional[str] = typer.Option(
        None, "--description", help="The new description of the issue"
    ),
    assignee: Optional[str] = typer.Option(
        None, "--assignee", help="The account ID to assign the issue to"
    ),
    issue_type: Optional[str] = typer.Option(None, "--type", help="The new issue type"),
    priority: Optional[str] = typer.Option(
        None, "--priority", help="The new priority level of the issue"
    ),
) -> None:
    """Edit an issue in Jira.

    Options that are not given are prompted for; a blank answer keeps the
    current value.
    """
    cli = ModernCLI()
    jira_client = _require_client(cli, load_config())

    issue_key = _value_or_prompt(cli, issue_key, "Enter the issue key to edit")
    keep = "(leave blank to keep unchanged)"
    summary = _value_or_prompt(cli, summary, f"Enter the new summary {keep}")
    description = _value_or_prompt(cli, description, f"Enter the new description {keep}")
    assignee = _value_or_prompt(cli, assignee, f"Enter the account ID to assign {keep}")
    issue_type = _value_or_prompt(
        cli, issue_type, f"Enter the new issue type (e.g., Bug, Task, Story) {keep}"
    )
    priority = _value_or_prompt(
        cli, priority, f"Enter the new priority (e.g., Low, Medium, High) {keep}"
    )

    fields: dict = {}
    if is_provided(summary):
        fields["summary"] = summary
    if is_provided(description):
        fields["description"] = to_adf(description)
    if is_provided(assignee):
        fields["assignee"] = {"accountId": assignee}
    if is_provided(issue_type):
        fields["issuetype"] = {"name": issue_type}
    if is_provided(priority):
        fields["priority"] = {"name": priority}

    if not fields:
        cli.show_error("No fields provided for update.")
        raise typer.Exit(code=1)

    with _api_errors(cli, f"Failed to update issue {issue_key}."):
        jira_client.edit_issue(issue_key, fields)

    cli.show_info(f"Issue {issue_key} updated successfully.")


@app.command("delete-issue")
def delete_issue(
    issue_key: Optional[str] = typer.Option(
        None, "--issueKey", help="The key of the issue to delete"
    ),
) -> None:
    """Delete an issue in Jira."""
    cli = ModernCLI()
    jira_client = _require_client(cli, load_config())

    issue_key = _value_or_prompt(cli, issue_key, "Enter the issue key to delete")

    with _api_errors(cli, f"Failed to delete issue {issue_key}."):
        jira_client.delete_issue(issue_key)

    cli.show_info(f"Issue {issue_key} deleted successfully.")


@app.command("assign-issue")
def assign_issue(
    issue_key: Optional[str] = typer.Option(
        None, "--issueKey", help="The key of the issue to assign"
    ),
    assignee: Optional[str] = typer.Option(
        None, "--assignee", help="The account ID of the user to assign to the issue"
    ),
) -> None:
    """Assign a user to a Jira issue."""
    cli = ModernCLI()
    jira_client = _require_client(cli, load_config())

    issue_key = _value_or_prompt(cli, issue_key, "Enter issue key")
    selected_name = assignee

    if not is_provided(assignee):
        project_key = issue_key.split("-")[0]
        with _api_errors(cli, "Failed to fetch assignable users."):
            users = jira_client.get_assignable_users(project_key)

        if not users:
            cli.show_error("No assignable users found for the project.")
            raise typer.Exit(code=1)

        names = [user["name"] for user in users]
        selected_name = cli.choose("Select assignee:", names, error="Assignee {} is invalid.")
        assignee = next(user["accountId"] for user in users if user["name"] == selected_name)

    with _api_errors(cli, f"Failed to assign issue '{issue_key}' to '{selected_name}'."):
        jira_client.assign_issue(issue_key, assignee)

    cli.show_info(f"Issue '{issue_key}' assigned to '{selected_name}' successfully.")


@app.command("show-user-detail")
def show_user_detail() -> None:
    """Show details of the currently authenticated Jira user."""
    cli = ModernCLI()
    jira_client = _require_client(cli, load_config())

    with _api_errors(cli, "Failed to retrieve user details."):
        user = jira_client.get_myself()

    cli.show_info("User Details:")
    cli.show_line(f"Account ID: {user.get('accountId', 'N/A')}")
    cli.show_line(f"Display Name: {user.get('displayName', 'N/A')}")
    cli.show_line(f"Email Address: {user.get('emailAddress') or 'N/A'}")
    cli.show_line(f"Time Zone: {user.get('timeZone') or 'N/A'}")
    cli.show_line(f"Locale: {user.get('locale') or 'N/A'}")


@app.command("configure-account-id")
def configure_account_id() -> None:
    """Fetch your Jira accountId and store it in the .env file as JIRA_ACCOUNT_ID."""
    cli = ModernCLI()
    jira_client = _require_client(cli, load_config())

    with _api_errors(cli, "Failed to retrieve accountId. Please check your Jira credentials."):
        user = jira_client.get_myself()

    account_id = user.get("accountId")
    if not is_provided(account_id):
        cli.show_error("Failed to retrieve accountId. Please check your Jira credentials.")
        raise typer.Exit(code=1)

    try:
        env_file = get_config_manager().set_config("jira.account_id", account_id)
    except OSError as e:
        cli.show_error(f"Failed to set JIRA_ACCOUNT_ID in .env file: {e}")
        raise typer.Exit(code=1)

    logger.info(f"Stored JIRA_ACCOUNT_ID in {env_file}")
    cli.show_info(f"JIRA_ACCOUNT_ID set to '{account_id}' in .env file.")

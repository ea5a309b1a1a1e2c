"""Paginated worklog retrieval and per-day aggregation."""

import logging
from typing import Any, Iterator, Optional

import requests

from ..api.jira_client import JiraClient
from ..domain.models import DailyAggregate, DateRange

logger = logging.getLogger(__name__)

ISSUE_BATCH_SIZE = 50
WORKLOG_BATCH_SIZE = 100


class WorklogFetcher:
    """Collects a user's logged time per day from Jira."""

    def __init__(
        self,
        jira_client: JiraClient,
        issue_batch_size: int = ISSUE_BATCH_SIZE,
        worklog_batch_size: int = WORKLOG_BATCH_SIZE,
    ) -> None:
        """Initialize fetcher.

        Args:
            jira_client: Client used for issue search and worklog listing
            issue_batch_size: Issues requested per search page
            worklog_batch_size: Worklogs requested per worklog page
        """
        self.jira_client = jira_client
        self.issue_batch_size = issue_batch_size
        self.worklog_batch_size = worklog_batch_size
        self.last_error: Optional[str] = None

    def fetch(
        self, account_id: str, date_range: DateRange, detailed: bool = False
    ) -> DailyAggregate:
        """Aggregate the user's worklogs for every day of a range.

        A failing request stops the fetch; whatever was aggregated until then
        is returned and the error is kept in ``last_error``.

        Args:
            account_id: Account ID of the worklog author
            date_range: Days to cover
            detailed: Break each day down by issue

        Returns:
            Aggregate with one entry per day in the range
        """
        self.last_error = None
        aggregate = DailyAggregate.seeded(date_range, detailed)

        jql = (
            f'worklogAuthor = "{account_id}" AND '
            f'worklogDate >= "{date_range.start.strftime("%Y-%m-%d")}" AND '
            f'worklogDate <= "{date_range.end.strftime("%Y-%m-%d")}"'
        )

        issues_seen = 0
        worklogs_counted = 0
        try:
            for issue in self._iter_issues(jql):
                issues_seen += 1
                issue_key = issue["key"]
                summary = (issue.get("fields") or {}).get("summary") or ""

                for worklog in self._iter_worklogs(issue_key):
                    author = (worklog.get("author") or {}).get("accountId")
                    if author != account_id:
                        continue

                    day = (worklog.get("started") or "")[:10]
                    seconds = int(worklog.get("timeSpentSeconds") or 0)
                    if aggregate.add(day, issue_key, summary, seconds):
                        worklogs_counted += 1
        except requests.RequestException as e:
            self.last_error = str(e)
            logger.warning(f"Worklog fetch stopped early, report is partial: {e}")

        logger.info(
            f"Aggregated {worklogs_counted} worklogs from {issues_seen} issues "
            f"over {len(aggregate)} days"
        )
        return aggregate

    def _iter_issues(self, jql: str) -> Iterator[dict[str, Any]]:
        """Yield issues matching the JQL, page by page."""
        start_at = 0
        while True:
            page = self.jira_client.search_issues(
                jql,
                start_at=start_at,
                max_results=self.issue_batch_size,
                fields=["summary"],
            )
            issues = page.get("issues") or []
            if not issues:
                break

            yield from issues

            start_at += len(issues)
            if start_at >= page.get("total", start_at):
                break

    def _iter_worklogs(self, issue_key: str) -> Iterator[dict[str, Any]]:
        """Yield all worklogs of an issue, page by page."""
        start_at = 0
        while True:
            page = self.jira_client.get_issue_worklogs(
                issue_key, start_at=start_at, max_results=self.worklog_batch_size
            )
            worklogs = page.get("worklogs") or []
            if not worklogs:
                break

            yield from worklogs

            start_at += len(worklogs)
            if start_at >= page.get("total", start_at):
                break

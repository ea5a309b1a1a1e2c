"""Jira Cloud REST client for issues, projects, users and worklogs."""

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class JiraClient:
    """Simple Jira API client."""

    def __init__(self, base_url: str, email: str, api_token: str) -> None:
        """Initialize Jira client.

        Args:
            base_url: Jira base URL
            email: User email for authentication
            api_token: Jira API token
        """
        self.base_url = base_url.rstrip("/")
        self.email = email
        self.api_token = api_token
        self.headers = {"Accept": "application/json", "Content-Type": "application/json"}

    def _make_request(self, method: str, endpoint: str, **kwargs: Any) -> requests.Response:
        """Make authenticated request to Jira API.

        Args:
            method: HTTP method
            endpoint: API endpoint
            **kwargs: Additional request arguments

        Returns:
            Response object
        """
        url = f"{self.base_url}/rest/api/3{endpoint}"
        auth = (self.email, self.api_token)

        try:
            response = requests.request(
                method, url, headers=self.headers, auth=auth, timeout=30, **kwargs
            )
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"Jira API request failed: {e}")
            raise

    def get_projects(self) -> list[dict[str, Any]]:
        """Get all projects visible to the user.

        Returns:
            List of projects
        """
        response = self._make_request("GET", "/project")
        return response.json()

    def create_project(
        self, name: str, key: str, project_type_key: str, lead_account_id: str
    ) -> dict[str, Any]:
        """Create a project.

        Args:
            name: Project name
            key: Project key
            project_type_key: Project type (e.g., 'software', 'business')
            lead_account_id: Account ID of the project lead

        Returns:
            Created project reference (id, key, self)
        """
        payload = {
            "name": name,
            "key": key,
            "projectTypeKey": project_type_key,
            "leadAccountId": lead_account_id,
        }
        response = self._make_request("POST", "/project", json=payload)
        logger.info(f"Created project {key}")
        return response.json()

    def get_issue(self, issue_key: str, fields: list[str] | None = None) -> dict[str, Any]:
        """Get issue details.

        Args:
            issue_key: Issue key or ID (e.g., 'PROJ-123' or '10386')
            fields: Specific fields to fetch (e.g., ['summary', 'status'])

        Returns:
            Issue data
        """
        params = {}
        if fields:
            params["fields"] = ",".join(fields)

        response = self._make_request("GET", f"/issue/{issue_key}", params=params)
        return response.json()

    def get_issues_by_project(
        self,
        project_key: str,
        status: str | None = None,
        start_at: int = 0,
        max_results: int = 10,
    ) -> list[dict[str, Any]]:
        """Get a window of a project's issues, newest first.

        Args:
            project_key: Project key
            status: Only return issues in this status
            start_at: Index of the first issue
            max_results: Maximum number of issues

        Returns:
            List of issues
        """
        jql = f'project = "{project_key}"'
        if status is not None:
            jql += f' AND status = "{status}"'
        jql += " ORDER BY created DESC"

        data = self.search_issues(jql, start_at=start_at, max_results=max_results)
        return data.get("issues", [])

    def create_issue(
        self,
        project_key: str,
        summary: str,
        description: str,
        issue_type: str,
        priority: str,
    ) -> dict[str, Any]:
        """Create an issue.

        Args:
            project_key: Project key
            summary: Issue summary
            description: Plain text description, may be empty
            issue_type: Issue type name (e.g., 'Task', 'Bug')
            priority: Priority name (e.g., 'Medium')

        Returns:
            Created issue reference (id, key, self)
        """
        fields: dict[str, Any] = {
            "project": {"key": project_key},
            "summary": summary,
            "issuetype": {"name": issue_type},
            "priority": {"name": priority},
        }
        if description:
            fields["description"] = to_adf(description)

        response = self._make_request("POST", "/issue", json={"fields": fields})
        created = response.json()
        logger.info(f"Created issue {created.get('key')}")
        return created

    def edit_issue(self, issue_key: str, fields: dict[str, Any]) -> None:
        """Update fields of an issue.

        Args:
            issue_key: Issue key
            fields: Jira field payload (e.g., {'summary': 'New title'})
        """
        self._make_request("PUT", f"/issue/{issue_key}", json={"fields": fields})
        logger.info(f"Updated issue {issue_key}: {', '.join(fields)}")

    def delete_issue(self, issue_key: str) -> None:
        """Delete an issue.

        Args:
            issue_key: Issue key
        """
        self._make_request("DELETE", f"/issue/{issue_key}")
        logger.info(f"Deleted issue {issue_key}")

    def get_assignable_users(self, project_key: str) -> list[dict[str, str]]:
        """Get users that can be assigned to issues of a project.

        Args:
            project_key: Project key

        Returns:
            List of {'name': display name, 'accountId': account ID}
        """
        response = self._make_request(
            "GET",
            "/user/assignable/search",
            params={"project": project_key, "maxResults": 50},
        )
        return [
            {"name": user.get("displayName", ""), "accountId": user["accountId"]}
            for user in response.json()
        ]

    def assign_issue(self, issue_key: str, account_id: str) -> None:
        """Assign an issue to a user.

        Args:
            issue_key: Issue key
            account_id: Account ID of the assignee
        """
        self._make_request(
            "PUT", f"/issue/{issue_key}/assignee", json={"accountId": account_id}
        )
        logger.info(f"Assigned {issue_key} to {account_id}")

    def get_myself(self) -> dict[str, Any]:
        """Get details of the authenticated user.

        Returns:
            User data including accountId
        """
        response = self._make_request("GET", "/myself")
        return response.json()

    def search_issues(
        self,
        jql: str,
        start_at: int = 0,
        max_results: int = 50,
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        """Fetch one page of a JQL search.

        Args:
            jql: JQL query string
            start_at: Index of the first issue
            max_results: Page size
            fields: Fields to fetch

        Returns:
            Search page with 'issues' and 'total'
        """
        params: dict[str, Any] = {"jql": jql, "startAt": start_at, "maxResults": max_results}
        if fields:
            params["fields"] = ",".join(fields)

        response = self._make_request("GET", "/search", params=params)
        data = response.json()
        logger.debug(
            f"Search fetched {len(data.get('issues', []))} of {data.get('total')} issues"
        )
        return data

    def get_issue_worklogs(
        self, issue_key: str, start_at: int = 0, max_results: int = 100
    ) -> dict[str, Any]:
        """Fetch one page of an issue's worklogs.

        Args:
            issue_key: Issue key
            start_at: Index of the first worklog
            max_results: Page size

        Returns:
            Worklog page with 'worklogs' and 'total'
        """
        response = self._make_request(
            "GET",
            f"/issue/{issue_key}/worklog",
            params={"startAt": start_at, "maxResults": max_results},
        )
        return response.json()


def to_adf(text: str) -> dict[str, Any]:
    """Wrap plain text in an Atlassian Document Format document."""
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": line}]}
            for line in text.splitlines()
            if line
        ],
    }


def from_adf(node: Any) -> str:
    """Flatten an Atlassian Document Format node to plain text."""
    if node is None:
        return ""
    if isinstance(node, str):
        return node
    if node.get("type") == "text":
        return node.get("text", "")
    parts = [from_adf(child) for child in node.get("content", [])]
    separator = "\n" if node.get("type") == "doc" else ""
    return separator.join(parts)

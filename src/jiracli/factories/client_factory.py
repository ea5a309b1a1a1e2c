"""Factory for creating API clients."""

from ..api.jira_client import JiraClient
from ..config import AppConfig


class ClientFactory:
    """Factory for creating API clients with configuration."""

    @staticmethod
    def create_jira_client(config: AppConfig) -> JiraClient:
        """Create Jira API client.

        Raises:
            ValueError: If the configuration fails validation
        """
        is_valid, errors = config.validate()
        if not is_valid:
            raise ValueError("; ".join(errors))
        return JiraClient(
            config.jira.base_url, config.jira.user_email, config.jira.api_token
        )

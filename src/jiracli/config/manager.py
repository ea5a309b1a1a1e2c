"""Configuration manager backed by environment variables and a .env file."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import find_dotenv, load_dotenv, set_key

# config key -> (environment variable, default)
ENV_MAPPINGS: Dict[str, Tuple[str, Any]] = {
    "jira.base_url": ("JIRA_BASE_URL", ""),
    "jira.user_email": ("JIRA_USER_EMAIL", ""),
    "jira.api_token": ("JIRA_API_TOKEN", ""),
    "jira.account_id": ("JIRA_ACCOUNT_ID", None),
    "logging.level": ("LOG_LEVEL", "WARNING"),
    "logging.log_dir": ("LOG_DIR", None),
}


@dataclass
class JiraConfig:
    base_url: str
    user_email: str
    api_token: str
    account_id: Optional[str] = None


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    log_dir: Optional[str] = None


@dataclass
class AppConfig:
    jira: JiraConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate required configuration fields.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors: List[str] = []

        if not self.jira.base_url:
            errors.append("JIRA_BASE_URL is required")
        if not self.jira.user_email:
            errors.append("JIRA_USER_EMAIL is required")
        if not self.jira.api_token:
            errors.append("JIRA_API_TOKEN is required")

        return len(errors) == 0, errors


def is_provided(value: Optional[str]) -> bool:
    """Whether a setting carries a value; unset and blank both count as missing."""
    return value is not None and value.strip() != ""


class ConfigManager:
    """Configuration manager reading the environment, seeded from a .env file."""

    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            env_file: Path to the .env file; searched upward from the
                working directory when omitted
        """
        found = env_file or find_dotenv(usecwd=True)
        self.env_file: Optional[Path] = Path(found) if found else None
        if self.env_file is not None and self.env_file.exists():
            load_dotenv(self.env_file, override=False)

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key (e.g., 'jira.base_url')
            default: Default value if not found

        Returns:
            Configuration value
        """
        env_key, mapped_default = ENV_MAPPINGS.get(
            key, (key.replace(".", "_").upper(), None)
        )
        value = os.getenv(env_key)
        if is_provided(value):
            return value.strip()
        return default if default is not None else mapped_default

    def set_config(self, key: str, value: str) -> Path:
        """Persist a configuration value in the .env file.

        The file is created in the working directory if none exists.

        Args:
            key: Configuration key
            value: Configuration value

        Returns:
            Path of the .env file written
        """
        env_key = ENV_MAPPINGS[key][0] if key in ENV_MAPPINGS else key
        if self.env_file is None:
            self.env_file = Path.cwd() / ".env"
        self.env_file.touch(exist_ok=True)

        set_key(str(self.env_file), env_key, value, quote_mode="never")
        os.environ[env_key] = value
        return self.env_file

    def load_app_config(self) -> AppConfig:
        """Load complete application configuration.

        Returns:
            AppConfig instance with all configuration sections
        """
        jira_config = JiraConfig(
            base_url=self.get_config("jira.base_url"),
            user_email=self.get_config("jira.user_email"),
            api_token=self.get_config("jira.api_token"),
            account_id=self.get_config("jira.account_id"),
        )

        logging_config = LoggingConfig(
            level=self.get_config("logging.level"),
            log_dir=self.get_config("logging.log_dir"),
        )

        return AppConfig(jira=jira_config, logging=logging_config)

"""Configuration management module for jira-cli."""

from typing import Optional

from .manager import (
    ConfigManager,
    AppConfig,
    JiraConfig,
    LoggingConfig,
    is_provided,
)

# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config() -> AppConfig:
    """Load configuration from the environment and the .env file."""
    return get_config_manager().load_app_config()


__all__ = [
    "ConfigManager",
    "AppConfig",
    "JiraConfig",
    "LoggingConfig",
    "get_config_manager",
    "is_provided",
    "load_config",
]

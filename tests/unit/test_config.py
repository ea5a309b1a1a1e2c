"""Tests for configuration loading and persistence."""

import pytest

from jiracli.config import AppConfig, ConfigManager, JiraConfig, is_provided

JIRA_VARS = ("JIRA_BASE_URL", "JIRA_USER_EMAIL", "JIRA_API_TOKEN", "JIRA_ACCOUNT_ID", "LOG_LEVEL", "LOG_DIR")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in JIRA_VARS:
        monkeypatch.delenv(name, raising=False)


class TestIsProvided:
    def test_values(self):
        assert is_provided("abc")
        assert not is_provided(None)
        assert not is_provided("")
        assert not is_provided("   ")


class TestConfigManager:
    """Test ConfigManager."""

    def test_reads_env_file(self, tmp_path):
        """Values from the .env file are loaded."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "JIRA_BASE_URL=https://example.atlassian.net\n"
            "JIRA_USER_EMAIL=me@example.com\n"
            "JIRA_API_TOKEN=token\n"
            "JIRA_ACCOUNT_ID=acc-1\n"
        )
        config = ConfigManager(str(env_file)).load_app_config()

        assert config.jira.base_url == "https://example.atlassian.net"
        assert config.jira.user_email == "me@example.com"
        assert config.jira.api_token == "token"
        assert config.jira.account_id == "acc-1"
        assert config.logging.level == "WARNING"
        assert config.logging.log_dir is None

    def test_environment_wins_over_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("JIRA_ACCOUNT_ID=from-file\n")
        monkeypatch.setenv("JIRA_ACCOUNT_ID", "from-env")

        assert ConfigManager(str(env_file)).get_config("jira.account_id") == "from-env"

    def test_blank_value_is_missing(self, tmp_path, monkeypatch):
        """A blank variable falls back to the default."""
        monkeypatch.setenv("JIRA_ACCOUNT_ID", "   ")
        monkeypatch.setenv("LOG_LEVEL", "")
        manager = ConfigManager(str(tmp_path / ".env"))

        assert manager.get_config("jira.account_id") is None
        assert manager.get_config("logging.level") == "WARNING"

    def test_set_config_updates_existing_file(self, tmp_path, monkeypatch):
        """set_config replaces the key and keeps other lines."""
        env_file = tmp_path / ".env"
        env_file.write_text("JIRA_BASE_URL=https://example.atlassian.net\nJIRA_ACCOUNT_ID=old\n")
        manager = ConfigManager(str(env_file))

        written = manager.set_config("jira.account_id", "new-id")

        assert written == env_file
        content = env_file.read_text()
        assert "JIRA_ACCOUNT_ID=new-id" in content
        assert "JIRA_ACCOUNT_ID=old" not in content
        assert "JIRA_BASE_URL=https://example.atlassian.net" in content
        assert manager.get_config("jira.account_id") == "new-id"

    def test_set_config_creates_file(self, tmp_path, monkeypatch):
        """Without a .env file one is created in the working directory."""
        monkeypatch.chdir(tmp_path)
        manager = ConfigManager()
        manager.env_file = None

        written = manager.set_config("jira.account_id", "acc-1")

        assert written == tmp_path / ".env"
        assert "JIRA_ACCOUNT_ID=acc-1" in written.read_text()


class TestAppConfig:
    def test_validate_reports_missing_credentials(self):
        config = AppConfig(jira=JiraConfig(base_url="", user_email="me@example.com", api_token=""))
        is_valid, errors = config.validate()

        assert not is_valid
        assert errors == ["JIRA_BASE_URL is required", "JIRA_API_TOKEN is required"]

    def test_validate_complete(self):
        config = AppConfig(
            jira=JiraConfig(base_url="https://example.atlassian.net", user_email="me", api_token="t")
        )
        assert config.validate() == (True, [])

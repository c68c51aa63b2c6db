"""Tests for settings and logging setup."""

import logging

from accounts.config import get_settings, reset_settings
from accounts.logging_config import setup_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = get_settings()

        assert settings.service_name == "user"
        assert settings.host == "127.0.0.1"
        assert settings.port == 8084
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.tracing_enabled is True

    def test_get_settings_returns_singleton(self):
        assert get_settings() is get_settings()

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ACCOUNTS_SERVICE_NAME", "accounts")
        monkeypatch.setenv("ACCOUNTS_PORT", "9000")
        monkeypatch.setenv("ACCOUNTS_TRACING", "false")
        reset_settings()

        settings = get_settings()

        assert settings.service_name == "accounts"
        assert settings.port == 9000
        assert settings.tracing_enabled is False


class TestLoggingSetup:
    """Tests for setup_logging."""

    @staticmethod
    def bare_root(monkeypatch):
        """Root logger with no handlers for the rest of the test; restored on teardown."""
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)
        return root

    def test_configures_console_and_file(self, monkeypatch, tmp_path):
        root = self.bare_root(monkeypatch)
        logfile = tmp_path / "accounts.log"

        setup_logging("debug", str(logfile))

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        logging.getLogger("accounts.test").debug("hello")
        for handler in root.handlers:
            handler.close()
        assert "hello" in logfile.read_text(encoding="utf-8")

    def test_is_idempotent(self, monkeypatch):
        root = self.bare_root(monkeypatch)

        setup_logging("INFO")
        setup_logging("INFO")

        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        root = self.bare_root(monkeypatch)

        setup_logging("chatty")

        assert root.level == logging.INFO

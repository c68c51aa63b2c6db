"""Centralized configuration for the account service.

Settings are read from ``ACCOUNTS_*`` environment variables the first
time ``get_settings()`` is called; set the variables before that, or
call ``reset_settings()`` to re-read them (tests do).
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Service settings loaded from environment variables."""

    service_name: str = field(default_factory=lambda: os.environ.get("ACCOUNTS_SERVICE_NAME", "user"))
    host: str = field(default_factory=lambda: os.environ.get("ACCOUNTS_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.environ.get("ACCOUNTS_PORT", "8084")))
    log_level: str = field(default_factory=lambda: os.environ.get("ACCOUNTS_LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.environ.get("ACCOUNTS_LOG_FILE") or None)
    tracing_enabled: bool = field(default_factory=lambda: _env_flag("ACCOUNTS_TRACING", "true"))


_settings = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None

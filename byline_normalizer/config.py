"""Centralized configuration for the byline normalizer.

This module reads environment variables (optionally from a .env file) and
exposes simple constants. The cleaning pipeline itself reads none of these;
they only steer logging, telemetry and the command line.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# If a .env file is present, load it without overriding the real environment.
_env_path = Path(".") / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=str(_env_path))

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


# Runtime / deployment context
APP_ENV: str = os.getenv("APP_ENV", os.getenv("ENVIRONMENT", "local"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Decision telemetry (disabled unless explicitly requested)
BYLINE_TELEMETRY_ENABLED: bool = _env_bool("BYLINE_TELEMETRY_ENABLED", False)
TELEMETRY_DATABASE_URL: str = os.getenv(
    "TELEMETRY_DATABASE_URL", "sqlite:///byline_telemetry.db"
)
TELEMETRY_ASYNC_WRITES: bool = _env_bool("TELEMETRY_ASYNC_WRITES", True)


def get_config() -> dict[str, object]:
    """Return a snapshot of the active configuration values."""
    return {
        "app_env": APP_ENV,
        "log_level": LOG_LEVEL,
        "telemetry": {
            "enabled": BYLINE_TELEMETRY_ENABLED,
            "database_url": TELEMETRY_DATABASE_URL,
            "async_writes": TELEMETRY_ASYNC_WRITES,
        },
    }

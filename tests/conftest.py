"""Pytest-wide fixtures and hooks for byline normalizer tests."""

from __future__ import annotations

import logging
import os

import pytest
import structlog

# Set BEFORE any imports of byline_normalizer.config so module constants
# pick up test settings instead of a developer's .env.
if "TELEMETRY_ASYNC_WRITES" not in os.environ:
    os.environ["TELEMETRY_ASYNC_WRITES"] = "false"
if "TELEMETRY_DATABASE_URL" not in os.environ:
    os.environ["TELEMETRY_DATABASE_URL"] = "sqlite:///:memory:"
if "BYLINE_TELEMETRY_ENABLED" not in os.environ:
    os.environ["BYLINE_TELEMETRY_ENABLED"] = "false"


@pytest.fixture(autouse=True)
def reset_structured_logging():
    """Drop the root handler and context that setup_logging leaves behind."""
    from byline_normalizer.utils.logging_config import HANDLER_NAME

    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def sqlite_telemetry_url(tmp_path):
    """File-backed SQLite URL for tests that read telemetry back."""
    return f"sqlite:///{tmp_path / 'telemetry.db'}"

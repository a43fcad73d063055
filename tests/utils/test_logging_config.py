"""Tests for structured logging configuration."""

import json
import logging

import structlog

from byline_normalizer.utils import logging_config
from byline_normalizer.utils.logging_config import (
    HANDLER_NAME,
    command_context,
    get_logger,
    is_cloud_environment,
    setup_logging,
)


def _owned_handlers():
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


def test_is_cloud_environment_local(monkeypatch):
    for var in logging_config.CLOUD_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(logging_config, "APP_ENV", "local")

    assert is_cloud_environment() is False


def test_is_cloud_environment_cloud_run(monkeypatch):
    monkeypatch.setenv("K_SERVICE", "byline-normalizer")

    assert is_cloud_environment() is True


def test_production_app_env_counts_as_cloud(monkeypatch):
    for var in logging_config.CLOUD_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(logging_config, "APP_ENV", "Production")

    assert is_cloud_environment() is True


def test_setup_logging_sets_root_level():
    setup_logging(level="DEBUG")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging(level="INFO")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_unknown_level_defaults_to_info():
    setup_logging(level="LOUD")

    assert logging.getLogger().level == logging.INFO


def test_setup_logging_replaces_its_own_handler():
    setup_logging(level="INFO")
    setup_logging(level="INFO")

    assert len(_owned_handlers()) == 1


def test_setup_logging_quiets_sqlalchemy():
    setup_logging(level="DEBUG")

    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_setup_logging_binds_service_name():
    setup_logging(level="INFO", service_name="byline-worker")

    assert structlog.contextvars.get_contextvars()["service"] == "byline-worker"


def test_stdlib_records_render_as_json_with_context(capsys):
    setup_logging(level="INFO", force_json=True, service_name="byline-worker")

    with command_context("clean", source="stdin"):
        logging.getLogger("byline_normalizer.utils.byline_cleaner").info(
            "Byline dropped at %s", "navigation_menu"
        )

    line = capsys.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "Byline dropped at navigation_menu"
    assert event["logger"] == "byline_normalizer.utils.byline_cleaner"
    assert event["level"] == "info"
    assert event["service"] == "byline-worker"
    assert event["command"] == "clean"
    assert event["source"] == "stdin"


def test_structlog_events_render_key_values(capsys):
    setup_logging(level="INFO", force_json=True)

    get_logger("byline_normalizer.cli").info("bylines_cleaned", total=3)

    event = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert event["event"] == "bylines_cleaned"
    assert event["total"] == 3


def test_command_context_is_scoped_to_block():
    with command_context("redundant", site=None) as run_id:
        context = structlog.contextvars.get_contextvars()
        assert context["command"] == "redundant"
        assert context["run_id"] == run_id
        assert "site" not in context

    assert "command" not in structlog.contextvars.get_contextvars()


def test_command_context_run_ids_differ():
    with command_context("clean") as first:
        pass
    with command_context("clean") as second:
        pass

    assert first != second

"""Structured logging for byline normalizer runs.

The cleaning modules log through plain ``logging.getLogger(__name__)``.
``setup_logging`` installs one root handler whose formatter runs those
records through the same structlog chain as structlog loggers, so a drop
decision logged deep in the pipeline still carries the run context the CLI
bound for it (service, command, run id).

Rendering is JSON lines in cloud or production environments and the
structlog console renderer everywhere else.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from byline_normalizer.config import APP_ENV

CLOUD_ENV_VARS = ("KUBERNETES_SERVICE_HOST", "K_SERVICE", "GAE_ENV")
PRODUCTION_APP_ENVS = frozenset({"production", "prod"})

# Name of the root handler owned by setup_logging; replaced on every call.
HANDLER_NAME = "byline-normalizer"

# Per-statement SQL echo from the telemetry store is never useful here.
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def is_cloud_environment() -> bool:
    """True on GKE, Cloud Run or App Engine, or when APP_ENV is production."""
    if any(os.getenv(name) for name in CLOUD_ENV_VARS):
        return True
    return APP_ENV.strip().lower() in PRODUCTION_APP_ENVS


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_chain(use_json: bool) -> list[Any]:
    if use_json:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    # ConsoleRenderer formats exceptions itself.
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def setup_logging(
    level: str = "INFO",
    force_json: bool = False,
    service_name: str | None = None,
) -> None:
    """Configure structlog and route standard-library records through it.

    Safe to call repeatedly: the handler installed by a previous call is
    replaced, not duplicated.

    Args:
        level: Logging level name; unknown names fall back to INFO
        force_json: Render JSON even outside cloud environments
        service_name: Bound as ``service`` on every following event
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    use_json = force_json or is_cloud_environment()
    pre_chain = _pre_chain()

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta]
        + _render_chain(use_json),
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger; use after ``setup_logging``."""
    return structlog.get_logger(name)


@contextmanager
def command_context(command: str, **fields: Any) -> Iterator[str]:
    """Bind ``command``, a fresh ``run_id`` and any non-empty ``fields``.

    Everything logged inside the block, including standard-library records
    from the cleaning modules, carries the binding. Yields the run id.
    """
    run_id = uuid.uuid4().hex[:12]
    context = {"command": command, "run_id": run_id}
    context.update({key: value for key, value in fields.items() if value is not None})

    with structlog.contextvars.bound_contextvars(**context):
        yield run_id

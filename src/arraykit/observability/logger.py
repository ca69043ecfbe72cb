"""Structured logging for the ``arraykit`` logger hierarchy.

Library modules log through plain ``logging.getLogger(__name__)``; this
module routes those records through structlog so they render as JSON (or
a console layout) next to the application's own structlog events.

Nothing here runs on import. Applications opt in by calling
:func:`setup_logging` or :func:`setup_logging_from_settings`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from arraykit.core.config import Settings, get_settings

PACKAGE_LOGGER = "arraykit"


def _add_library(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: tag entries with the emitting library."""
    event_dict.setdefault("library", PACKAGE_LOGGER)
    return event_dict


def setup_logging(
    level: str = "WARNING",
    format: str = "console",
) -> None:
    """Configure structured logging for the ``arraykit`` loggers.

    Calling it again replaces the previous handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine-readable output, "console" for humans.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_library,
    ]

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False


def setup_logging_from_settings(settings: Settings | None = None) -> None:
    """Apply ``settings.observability`` (process-wide settings by default)."""
    observability = (settings or get_settings()).observability
    setup_logging(level=observability.log_level, format=observability.log_format)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)

"""
Structured logging for cargo-examples.

Diagnostics are written to stderr with structlog so that stdout carries
nothing but example names (``--list`` / ``--print``) and whatever ``cargo``
itself prints.

Architecture:
    ::

        configure_logging(level="WARNING", json_format=None)
            ↓
        structlog processor chain:
          1. merge_contextvars
          2. TimeStamper (iso)
          3. add_log_level
          4. JSONRenderer (non-tty) or ConsoleRenderer (tty)

        logger = get_logger(__name__)
        logger.debug("runner.exec", example="foo", command="cargo run ...")

Examples:
    >>> from cargo_examples.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False)
    >>> get_logger(__name__).debug("discovery.scan", path="examples")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "cargo-examples"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the tool name to every record."""
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def _level_number(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {level!r}")
    return value


def configure_logging(
    level: str = "WARNING",
    json_format: bool | None = None,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog for one invocation.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if stderr is not a tty)
        add_timestamp: Include ISO timestamp in logs
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    # Loggers are not cached: the stream is bound here, per invocation.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``).

    The name is bound as the ``logger_name`` key. The proxy stays lazy, so it
    picks up whatever ``configure_logging`` installed last.
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(logger_name=name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]

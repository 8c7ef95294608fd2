"""
Structured logging for quicksql, built on structlog.

Library code only ever calls :func:`get_logger`; applications decide the
output format once at startup with :func:`configure_logging`. Until then
structlog's defaults apply and every debug event is printed, so call
``configure_logging()`` (or ``QuickSQLSettings().configure_logging()``)
before using a Session in a long-running process.

Architecture:
    ::

        Configuration Flow:
        ┌────────────────────────────────────────────────────────────┐
        │ configure_logging(level="INFO", json_format=True,          │
        │                   service="billing-api")                   │
        │                                                            │
        │     ↓                                                      │
        │ structlog configured with processor chain:                 │
        │   1. merge_contextvars                                     │
        │   2. add_log_level                                         │
        │   3. TimeStamper  (@timestamp for JSON, timestamp else)    │
        │   4. _drop_unset  (None-valued fields removed)             │
        │   5. _ServiceFields (service.name, ECS log.level for JSON) │
        │   6. JSONRenderer (or ConsoleRenderer for dev)             │
        └────────────────────────────────────────────────────────────┘

        Events emitted by quicksql.session:
        ┌────────────────────────────────────────────────────────────┐
        │ select_executed      debug   rows, table                   │
        │ record_created       debug   table, last_insert_id         │
        │ record_saved         debug   table, rows_affected          │
        │ record_deleted       debug   table, rows_affected          │
        │ last_insert_id_unavailable   debug                         │
        │ no_rows_affected     warning table, operation              │
        │ statement            debug   operation, sql (opt-in)       │
        └────────────────────────────────────────────────────────────┘

Examples:
    >>> from quicksql.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False, service="etl")
    >>> logger = get_logger(__name__)
    >>> logger.debug("select_executed", rows=3)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


def _drop_unset(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Remove fields logged as ``None`` (e.g. ``table`` on an untagged select)."""
    return {key: value for key, value in event_dict.items() if value is not None}


class _ServiceFields:
    """Stamp ``service.name``; in ECS mode rename ``level`` to ``log.level``."""

    def __init__(self, service: str, ecs: bool) -> None:
        self.service = service
        self.ecs = ecs

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service.name", self.service)
        if self.ecs and "level" in event_dict:
            event_dict["log.level"] = event_dict.pop("level")
        return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "quicksql",
) -> None:
    """Configure structlog output for quicksql events.

    Args:
        level: Minimum level emitted (DEBUG, INFO, WARNING, ERROR).
        json_format: True for ECS-style JSON, False for console, None for
                     JSON when stdout is not a terminal.
        service: Value of the ``service.name`` field.

    Raises:
        ValueError: ``level`` is not a standard logging level name.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level {level!r}")

    if json_format is None:
        json_format = not sys.stdout.isatty()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(
            fmt="iso", key="@timestamp" if json_format else "timestamp"
        ),
        _drop_unset,
        _ServiceFields(service, ecs=json_format),
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structlog bound logger (usually ``get_logger(__name__)``).

    The name is carried as the ECS ``log.logger`` field of every event.
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(**{"log.logger": name})


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Scoped logging context; on exit the previous values are restored.

    Example:
        with LogContext(request_id="abc123"):
            session.save(record)
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> LogContext:
        self._tokens = dict(structlog.contextvars.bind_contextvars(**self._context))
        return self

    def __exit__(self, *exc_info: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]

"""structlog configuration with OpenTelemetry trace correlation.

Logs always go to stderr: stdout is reserved for the generated YAML stream.
When a span is active, ``trace_id`` and ``span_id`` are added to every event.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any, Literal

import structlog
from opentelemetry import trace
from opentelemetry.trace import INVALID_SPAN_ID, INVALID_TRACE_ID

EventDict = MutableMapping[str, Any]

LogFormat = Literal["console", "json"]

_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def add_trace_context(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Add trace context from the active span to a structlog event.

    Args:
        logger: The logger instance (unused, required by structlog processor API).
        method_name: The log method name (unused).
        event_dict: The event dictionary to enrich.

    Returns:
        The event dictionary with trace_id and span_id when a span is active.
    """
    ctx = trace.get_current_span().get_span_context()

    if ctx.trace_id != INVALID_TRACE_ID and ctx.span_id != INVALID_SPAN_ID:
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")

    return event_dict


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:  # noqa: ARG001
    # Resolve sys.stderr per logger so redirected streams are honoured.
    return structlog.PrintLogger(file=sys.stderr)


def resolve_level(log_level: str) -> int:
    """Map a level name to its numeric value.

    Raises:
        ValueError: If the level name is unknown.
    """
    try:
        return _LEVELS[log_level.upper()]
    except KeyError:
        msg = f"Unknown log level: {log_level}. Expected one of: {sorted(_LEVELS)}"
        raise ValueError(msg) from None


def configure_logging(log_level: str = "WARNING", log_format: LogFormat = "console") -> None:
    """Configure structlog for the CLI.

    Args:
        log_level: Minimum level to emit (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: ``console`` for human-readable lines, ``json`` for one JSON
            object per line.

    Example:
        >>> configure_logging(log_level="INFO", log_format="json")
        >>> structlog.get_logger().info("configured")
    """
    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_trace_context,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(log_level)),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


__all__ = ["LogFormat", "add_trace_context", "configure_logging", "resolve_level"]

"""Structured logging for invoker-core.

This module provides structured logging functions on top of the
``invoker_core`` stdlib logger. Fields are normalized to strings and
attached to each record under ``record.fields``.

Example:
    >>> from invoker_core import log_debug, LogContext
    >>>
    >>> log_debug("Dispatching to invokable processor", {
    ...     "handler_id": "app.create_user",
    ...     "operation": "create_user",
    ... })
    >>>
    >>> log_debug("Parameter resolved", LogContext(parameter="companyId"))
"""

from __future__ import annotations

import logging as _logging
import sys
from typing import Any

from .types import LogContext

TRACE = 5
_logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "invoker_core"
_logger = _logging.getLogger(LOGGER_NAME)

_LEVELS = {
    "trace": TRACE,
    "debug": _logging.DEBUG,
    "info": _logging.INFO,
    "warn": _logging.WARNING,
    "error": _logging.ERROR,
}


class FieldsFormatter(_logging.Formatter):
    """Formatter that appends structured fields as key=value pairs."""

    def format(self, record: _logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, "fields", None)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
        return line


def configure_logging(level: str = "info", stream: Any = None) -> _logging.Logger:
    """Install a stream handler on the invoker_core logger.

    Calling this again replaces the previously installed handler.

    Args:
        level: One of trace, debug, info, warn, error.
        stream: Output stream, defaults to stderr.

    Returns:
        The configured logger.

    Raises:
        ValueError: If level is not a known level name.
    """
    if level not in _LEVELS:
        raise ValueError(f"Unknown log level '{level}', expected one of {sorted(_LEVELS)}")

    for handler in list(_logger.handlers):
        if getattr(handler, "_invoker_core", False):
            _logger.removeHandler(handler)

    handler = _logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        FieldsFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    handler._invoker_core = True  # type: ignore[attr-defined]
    _logger.addHandler(handler)
    _logger.setLevel(_LEVELS[level])
    return _logger


def log_error(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an ERROR level message with structured fields.

    Use this for failures surfaced to the caller of a bridge.

    Args:
        message: The log message.
        fields: Optional structured fields, a dict or a LogContext.
    """
    _emit(_logging.ERROR, message, fields)


def log_warn(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a WARN level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields.
    """
    _emit(_logging.WARNING, message, fields)


def log_info(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an INFO level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields.
    """
    _emit(_logging.INFO, message, fields)


def log_debug(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a DEBUG level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields.
    """
    _emit(_logging.DEBUG, message, fields)


def log_trace(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a TRACE level message with structured fields.

    Used for per-parameter resolution detail; disabled unless the logger
    is configured at trace level.

    Args:
        message: The log message.
        fields: Optional structured fields.
    """
    _emit(TRACE, message, fields)


def _emit(level: int, message: str, fields: dict[str, Any] | LogContext | None) -> None:
    if not _logger.isEnabledFor(level):
        return
    _logger.log(level, message, extra={"fields": _normalize_fields(fields) or {}})


def _normalize_fields(
    fields: dict[str, Any] | LogContext | None,
) -> dict[str, str] | None:
    """Normalize fields to a dict of strings.

    Args:
        fields: Input fields as dict, LogContext, or None.

    Returns:
        Dict with string values, or None if no fields.
    """
    if fields is None:
        return None

    if isinstance(fields, LogContext):
        return {k: str(v) for k, v in fields.model_dump().items() if v is not None}

    return {k: str(v) for k, v in fields.items() if v is not None}


__all__ = [
    "TRACE",
    "configure_logging",
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]

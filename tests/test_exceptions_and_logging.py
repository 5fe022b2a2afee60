"""Exception hierarchy and logging tests.

These tests verify:
- InvokerError is the base exception class
- Configuration errors also subclass the matching builtin
- Logging functions accept fields and LogContext
- configure_logging installs a single structured handler
"""

from __future__ import annotations

import io
import logging

import pytest

from invoker_core import (
    AmbiguousConstructionError,
    ConfigurationError,
    ConstructionTypeMismatchError,
    InvalidResultShapeError,
    InvalidTaggedStrategyError,
    InvokerError,
    LogContext,
    MissingCarrierError,
    NoConstructionStrategyError,
    RejectedValueError,
    UnresolvedArgumentError,
    configure_logging,
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
)
from invoker_core.logging import LOGGER_NAME, TRACE

RUNTIME_ERRORS = [
    InvalidTaggedStrategyError,
    NoConstructionStrategyError,
    AmbiguousConstructionError,
    ConstructionTypeMismatchError,
    MissingCarrierError,
    InvalidResultShapeError,
    UnresolvedArgumentError,
]


@pytest.fixture
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestExceptionHierarchy:
    """Test exception class hierarchy."""

    def test_configuration_errors(self):
        """Test every binding error is a ConfigurationError and InvokerError."""
        for exc_class in [*RUNTIME_ERRORS, RejectedValueError]:
            assert issubclass(exc_class, ConfigurationError)
            assert issubclass(exc_class, InvokerError)

    def test_builtin_bases(self):
        """Test errors are catchable as their builtin counterparts."""
        for exc_class in RUNTIME_ERRORS:
            assert issubclass(exc_class, RuntimeError)
        assert issubclass(RejectedValueError, ValueError)

    def test_can_catch_by_base_class(self):
        """Test exceptions can be caught by base class."""
        with pytest.raises(InvokerError):
            raise AmbiguousConstructionError("Ambiguous factories for OrderRef")

    def test_to_dict(self):
        """Test structured error details."""
        error = NoConstructionStrategyError("No usable constructor", metadata={"target": "x.Y"})

        assert error.to_dict() == {
            "error_type": "NoConstructionStrategyError",
            "message": "No usable constructor",
            "retryable": False,
            "metadata": {"target": "x.Y"},
        }
        assert str(error) == "No usable constructor"

    def test_metadata_defaults_empty(self):
        """Test metadata defaults to an empty dict."""
        assert MissingCarrierError("no request").metadata == {}


class TestLogging:
    """Test logging functions."""

    def test_log_functions_callable(self):
        """Test every log function is callable without raising."""
        log_error("Error message")
        log_warn("Warning", {"handler_id": "app.user"})
        log_info("Info", LogContext(operation="get_user"))
        log_debug("Debug", {"parameter": "id"})
        log_trace("Trace", None)

    def test_trace_level_registered(self):
        """Test the TRACE level name."""
        assert logging.getLevelName(TRACE) == "TRACE"

    def test_fields_attached(self, caplog):
        """Test fields are normalized and attached to the record."""
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            log_debug("Resolved", {"parameter": "id", "count": 3, "skip": None})

        record = caplog.records[-1]
        assert record.message == "Resolved"
        assert record.fields == {"parameter": "id", "count": "3"}

    def test_log_context_fields(self, caplog):
        """Test LogContext fields drop unset values."""
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            log_info("Dispatching", LogContext(handler_id="app.user"))

        assert caplog.records[-1].fields == {"handler_id": "app.user"}

    def test_configure_logging(self, restore_logger):
        """Test the installed handler formats fields."""
        stream = io.StringIO()
        logger = configure_logging("debug", stream)
        configure_logging("debug", stream)

        installed = [h for h in logger.handlers if getattr(h, "_invoker_core", False)]
        assert len(installed) == 1

        log_debug("Dispatching", {"handler_id": "app.user"})
        assert "[DEBUG] invoker_core: Dispatching handler_id=app.user" in stream.getvalue()

    def test_configure_logging_trace(self, restore_logger):
        """Test the trace level enables trace records."""
        stream = io.StringIO()
        configure_logging("trace", stream)

        log_trace("Chain step")
        assert "[TRACE]" in stream.getvalue()

    def test_configure_logging_unknown_level(self, restore_logger):
        """Test unknown levels are rejected."""
        with pytest.raises(ValueError):
            configure_logging("verbose")

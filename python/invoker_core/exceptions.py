"""Custom exceptions for the invoker-core binding engine.

This module provides the hierarchy of exceptions raised while binding
raw named values to handler parameters and dispatching invokable
processors and providers.

Every error here is a configuration or programming error: none of them
is retried, and the conventional (fixed-interface) dispatch path never
raises them.

Example:
    >>> from invoker_core import AmbiguousConstructionError, InvokerError
    >>>
    >>> try:
    ...     instantiator.instantiate(OrderRef, "ord-1")
    ... except AmbiguousConstructionError as e:
    ...     print(e.metadata["candidates"])
    ... except InvokerError as e:
    ...     print(f"Binding failed: {e}")
"""

from __future__ import annotations

from typing import Any


class InvokerError(Exception):
    """Base exception for all invoker-core errors.

    Attributes:
        message: Human-readable error message.
        retryable: Always False; binding errors never succeed on retry.
        metadata: Additional error context (target class, method, ...).
    """

    retryable: bool = False

    def __init__(self, message: str, *, metadata: dict[str, Any] | None = None) -> None:
        """Initialize the error.

        Args:
            message: Error message.
            metadata: Additional context.
        """
        super().__init__(message)
        self.message = message
        self.metadata = metadata or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for structured logging.

        Returns:
            Dictionary with error details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "retryable": self.retryable,
            "metadata": self.metadata,
        }


class ConfigurationError(InvokerError):
    """Base class for errors caused by handler or value-object declarations."""

    pass


class InvalidTaggedStrategyError(ConfigurationError, RuntimeError):
    """Raised when a construction tag names an unusable method.

    The tagged method must exist, be public, be a staticmethod or
    classmethod, and take exactly one required parameter.

    Example:
        >>> @constructed_by("_hidden")
        ... class Slug: ...
        >>> instantiator.instantiate(Slug, "x")
        Traceback (most recent call last):
        InvalidTaggedStrategyError: Invalid construction method Slug._hidden().
    """

    pass


class RejectedValueError(ConfigurationError, ValueError):
    """Raised when a raw value is not accepted by the tagged factory's parameter."""

    pass


class NoConstructionStrategyError(ConfigurationError, RuntimeError):
    """Raised when an untagged type has no usable constructor or factory."""

    pass


class AmbiguousConstructionError(ConfigurationError, RuntimeError):
    """Raised when an untagged type has two or more usable construction candidates.

    The engine never picks one silently. Tag the class with
    ``@constructed_by("method")`` to disambiguate.
    """

    pass


class ConstructionTypeMismatchError(ConfigurationError, RuntimeError):
    """Raised when a constructor or factory produces an instance of another type."""

    pass


class MissingCarrierError(ConfigurationError, RuntimeError):
    """Raised when an invokable handler is called without a request carrier.

    Invokable processors and providers are request-only: the carrier is
    where raw values, the payload and the operation are propagated.
    """

    pass


class InvalidResultShapeError(ConfigurationError, RuntimeError):
    """Raised when an invokable handler returns a value of the wrong shape.

    Processors must return an object. Providers must return None, an
    object, or a collection.
    """

    pass


class UnresolvedArgumentError(ConfigurationError, RuntimeError):
    """Raised when no resolver produces a value for a required parameter."""

    pass


__all__ = [
    "InvokerError",
    "ConfigurationError",
    "InvalidTaggedStrategyError",
    "RejectedValueError",
    "NoConstructionStrategyError",
    "AmbiguousConstructionError",
    "ConstructionTypeMismatchError",
    "MissingCarrierError",
    "InvalidResultShapeError",
    "UnresolvedArgumentError",
]

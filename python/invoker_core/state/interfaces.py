"""Fixed-signature state handler contracts.

Conventional handlers implement one of these abstract base classes.
Anything else that is callable is an invokable handler and is called
through the binding engine instead.

Example:
    >>> class PublishArticleProcessor(ProcessorInterface):
    ...     def process(self, data, operation, uri_variables=None, context=None):
    ...         data.published = True
    ...         return data
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..types import Operation


class ProcessorInterface(ABC):
    """Write contract: persist or transform the payload of an operation."""

    @abstractmethod
    def process(
        self,
        data: Any,
        operation: Operation,
        uri_variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        """Process the payload.

        Args:
            data: The deserialized input object.
            operation: The matched operation.
            uri_variables: Raw named values from the route.
            context: Call context; ``context["request"]`` holds the carrier.

        Returns:
            The processed object.
        """
        ...


class ProviderInterface(ABC):
    """Read contract: load the data an operation exposes."""

    @abstractmethod
    def provide(
        self,
        operation: Operation,
        uri_variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        """Provide the data.

        Returns:
            None, an object, or a collection.
        """
        ...


class HandlerKind(str, Enum):
    """How a registered handler is invoked."""

    CONVENTIONAL = "conventional"
    """Implements the fixed contract; called through it."""

    DYNAMIC = "dynamic"
    """Freeform callable; arguments resolved by the binding engine."""


def classify_handler(handler: Any, contract: type) -> HandlerKind:
    """Decide how a registered handler value is invoked.

    Args:
        handler: The value looked up in the container.
        contract: ProcessorInterface or ProviderInterface.

    Returns:
        DYNAMIC for a plain callable that does not implement the
        contract, CONVENTIONAL otherwise. Classes are never dynamic.
    """
    if isinstance(handler, contract) or isinstance(handler, type):
        return HandlerKind.CONVENTIONAL
    if callable(handler):
        return HandlerKind.DYNAMIC
    return HandlerKind.CONVENTIONAL


__all__ = ["ProcessorInterface", "ProviderInterface", "HandlerKind", "classify_handler"]

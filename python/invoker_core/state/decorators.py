"""Dispatch decorators for the fixed processor and provider contracts.

Each decorator implements its contract and wraps an inner
implementation of the same contract. Per call:

1. Read the handler identifier from the operation (processor or
   provider). Missing or unknown to the container: inner, unchanged.
2. Look up the handler value in the container.
3. A plain callable that does not implement the contract is DYNAMIC:
   it is called through the invocation bridge.
4. Anything else is CONVENTIONAL: inner is called with the original
   arguments; the looked-up value is not used here.
"""

from __future__ import annotations

from typing import Any

from ..container import HandlerLookup
from ..events import EventBridge, EventNames
from ..logging import log_debug
from ..types import InvokerConfig, Operation
from .interfaces import HandlerKind, ProcessorInterface, ProviderInterface, classify_handler
from .invoker import ProcessorInvoker, ProviderInvoker


class InvokableProcessorDecorator(ProcessorInterface):
    """Routes invokable processors through the binding engine.

    Example:
        >>> processor = InvokableProcessorDecorator(inner, container, ProcessorInvoker())
        >>> processor.process(user, Post(processor="app.create_user"), {"companyId": "acme"},
        ...                   {"request": request})
    """

    def __init__(
        self,
        inner: ProcessorInterface,
        container: HandlerLookup,
        invoker: ProcessorInvoker | None = None,
        config: InvokerConfig | None = None,
        events: EventBridge | None = None,
    ) -> None:
        self._inner = inner
        self._container = container
        self._invoker = invoker or ProcessorInvoker(config=config, events=events)
        self._events = events

    @property
    def inner(self) -> ProcessorInterface:
        return self._inner

    def process(
        self,
        data: Any,
        operation: Operation,
        uri_variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        uri_variables = uri_variables if uri_variables is not None else {}
        context = context if context is not None else {}

        handler_id = getattr(operation, "processor", None)
        kind, handler = _lookup(self._container, handler_id, ProcessorInterface)
        _announce(self._events, handler_id, kind)

        if kind is HandlerKind.DYNAMIC:
            return self._invoker(handler, data, operation, uri_variables, context)
        return self._inner.process(data, operation, uri_variables, context)


class InvokableProviderDecorator(ProviderInterface):
    """Routes invokable providers through the binding engine."""

    def __init__(
        self,
        inner: ProviderInterface,
        container: HandlerLookup,
        invoker: ProviderInvoker | None = None,
        config: InvokerConfig | None = None,
        events: EventBridge | None = None,
    ) -> None:
        self._inner = inner
        self._container = container
        self._invoker = invoker or ProviderInvoker(config=config, events=events)
        self._events = events

    @property
    def inner(self) -> ProviderInterface:
        return self._inner

    def provide(
        self,
        operation: Operation,
        uri_variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        uri_variables = uri_variables if uri_variables is not None else {}
        context = context if context is not None else {}

        handler_id = getattr(operation, "provider", None)
        kind, handler = _lookup(self._container, handler_id, ProviderInterface)
        _announce(self._events, handler_id, kind)

        if kind is HandlerKind.DYNAMIC:
            return self._invoker(handler, operation, uri_variables, context)
        return self._inner.provide(operation, uri_variables, context)


def _lookup(container: HandlerLookup, handler_id: Any, contract: type) -> tuple[HandlerKind, Any]:
    if not isinstance(handler_id, str) or not container.has(handler_id):
        return HandlerKind.CONVENTIONAL, None

    handler = container.get(handler_id)
    kind = classify_handler(handler, contract)
    log_debug(
        f"Dispatching '{handler_id}' via {kind.value} path",
        {"handler_id": handler_id},
    )
    return kind, handler


def _announce(events: EventBridge | None, handler_id: Any, kind: HandlerKind) -> None:
    if isinstance(handler_id, str):
        (events or EventBridge.instance()).publish(EventNames.HANDLER_DISPATCHED, handler_id, kind)


__all__ = ["InvokableProcessorDecorator", "InvokableProviderDecorator"]

"""Invocation bridges for invokable processors and providers.

A bridge prepares the request carrier, resolves the handler's
arguments through the ArgumentResolver, calls the handler and checks
the shape of what it returned.

Carrier preparation:
1. ``context["request"]`` must hold a Request (MissingCarrierError otherwise)
2. Each raw named value is copied into the attributes unless the key
   is already present (the framework's own values win)
3. The merged raw values are stored under the route-params key and the
   operation under the operation key
4. Processors also store the payload under the payload key

Result shapes:
- ProcessorInvoker: a non-None object
- ProviderInvoker: None, an object, or a collection
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ..binding.argument_resolver import ArgumentResolver
from ..binding.param_type import is_array, is_object
from ..binding.resolver_chain import ValueResolverChain
from ..carrier import Request
from ..events import EventBridge, EventNames
from ..exceptions import InvalidResultShapeError, MissingCarrierError
from ..logging import log_debug, log_error
from ..types import InvokerConfig, Operation


class _InvocationBridge:
    """Shared carrier preparation and invocation for both bridges."""

    handler_label = "handler"

    def __init__(
        self,
        argument_resolver: ArgumentResolver | None = None,
        config: InvokerConfig | None = None,
        events: EventBridge | None = None,
    ) -> None:
        self._config = config or InvokerConfig()
        self._arguments = argument_resolver or ArgumentResolver(
            ValueResolverChain.default(self._config)
        )
        self._events = events

    @property
    def argument_resolver(self) -> ArgumentResolver:
        return self._arguments

    @property
    def config(self) -> InvokerConfig:
        return self._config

    def _prepare(
        self,
        operation: Operation,
        uri_variables: Mapping[str, Any] | None,
        context: Mapping[str, Any] | None,
    ) -> Request:
        request = (context or {}).get("request")
        if not isinstance(request, Request):
            message = (
                f"No Request in context; invokable {self.handler_label}s are request-only. "
                f"Ensure the framework passes the request."
            )
            operation_name = getattr(operation, "name", None)
            log_error(message, {"operation": operation_name})
            raise MissingCarrierError(message, metadata={"operation": operation_name})

        attributes = request.attributes
        raw_values = dict(uri_variables or {})

        for key, value in raw_values.items():
            if not attributes.has(key):
                attributes.set(key, value)

        existing = attributes.get(self._config.route_params_key)
        merged = {**(existing if isinstance(existing, Mapping) else {}), **raw_values}
        attributes.set(self._config.route_params_key, merged)
        attributes.set(self._config.operation_key, operation)
        return request

    def _invoke(self, handler: Callable[..., Any], request: Request) -> Any:
        args, kwargs = self._arguments.get_arguments(request, handler)
        log_debug(
            f"Invoking {self.handler_label} {_handler_name(handler)} "
            f"with {len(args) + len(kwargs)} argument(s)"
        )
        try:
            return handler(*args, **kwargs)
        except Exception as e:
            self._publish(EventNames.INVOCATION_FAILED, handler, e)
            raise

    def _reject(self, handler: Callable[..., Any], message: str, result: Any) -> None:
        full = f"{message} {_handler_name(handler)} returned {type(result).__name__}."
        log_error(full)
        error = InvalidResultShapeError(
            full,
            metadata={"handler": _handler_name(handler), "result_type": type(result).__name__},
        )
        self._publish(EventNames.INVOCATION_FAILED, handler, error)
        raise error

    def _publish(self, event: str, *args: Any) -> None:
        (self._events or EventBridge.instance()).publish(event, *args)


class ProcessorInvoker(_InvocationBridge):
    """Invokes a callable processor with the current request and operation.

    Example:
        >>> invoker = ProcessorInvoker()
        >>> invoker(create_user, user, Post(), {"companyId": "acme-corp"}, {"request": request})
    """

    handler_label = "processor"

    def __call__(
        self,
        handler: Callable[..., Any],
        data: Any,
        operation: Operation,
        uri_variables: Mapping[str, Any] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> Any:
        """Invoke a processor handler.

        Raises:
            MissingCarrierError: If the context holds no Request.
            UnresolvedArgumentError: If a required parameter stays unresolved.
            InvalidResultShapeError: If the handler does not return an object.
        """
        request = self._prepare(operation, uri_variables, context)
        request.attributes.set(self._config.payload_key, data)

        result = self._invoke(handler, request)
        if not is_object(result):
            self._reject(handler, "Processor must return an object (DTO/Resource).", result)

        self._publish(EventNames.INVOCATION_COMPLETED, handler, result)
        return result


class ProviderInvoker(_InvocationBridge):
    """Invokes a callable provider with the current request and operation.

    Example:
        >>> invoker = ProviderInvoker()
        >>> invoker(load_user, Get(), {"id": "42"}, {"request": request})
    """

    handler_label = "provider"

    def __call__(
        self,
        handler: Callable[..., Any],
        operation: Operation,
        uri_variables: Mapping[str, Any] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> Any:
        """Invoke a provider handler.

        Raises:
            MissingCarrierError: If the context holds no Request.
            UnresolvedArgumentError: If a required parameter stays unresolved.
            InvalidResultShapeError: If the handler returns a scalar.
        """
        request = self._prepare(operation, uri_variables, context)

        result = self._invoke(handler, request)
        if result is not None and not is_object(result) and not is_array(result):
            self._reject(
                handler, "Provider must return an object or iterable (or None).", result
            )

        self._publish(EventNames.INVOCATION_COMPLETED, handler, result)
        return result


def _handler_name(handler: Callable[..., Any]) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__qualname__


__all__ = ["ProcessorInvoker", "ProviderInvoker"]

"""
Invoker Core

Parameter binding and dispatch for typed handler callables. A handler
declares what it needs through its signature; the engine resolves each
argument from the route values, the payload, the matched operation and
the request, building value objects where a parameter asks for one.

Example:
    >>> from typing import Annotated
    >>> from invoker_core import (
    ...     HandlerContainer, Post, Request, UriVar, build_processor, constructed_by,
    ... )
    >>>
    >>> @constructed_by("from_string")
    ... class CompanyId:
    ...     def __init__(self, value: str) -> None:
    ...         self.value = value
    ...     @classmethod
    ...     def from_string(cls, value: str) -> "CompanyId":
    ...         return cls(value.lower())
    >>>
    >>> def create_user(data: User, company: Annotated[CompanyId, UriVar("companyId")]) -> User:
    ...     data.company = company
    ...     return data
    >>>
    >>> container = HandlerContainer({"app.create_user": create_user})
    >>> processor = build_processor(PersistProcessor(), container)
    >>> processor.process(user, Post(processor="app.create_user"),
    ...                   {"companyId": "acme-corp"}, {"request": Request("POST", "/users")})
"""

from __future__ import annotations

from invoker_core.binding import (
    UNRESOLVED,
    ArgumentResolver,
    OperationValueResolver,
    PayloadValueResolver,
    RequestValueResolver,
    StrategyRegistry,
    UriVar,
    UriVarValueResolver,
    ValueObjectInstantiator,
    ValueResolver,
    ValueResolverChain,
    accepts,
    coerce,
    constructed_by,
    describe_parameters,
)
from invoker_core.bootstrap import (
    bootstrap,
    build_argument_resolver,
    build_processor,
    build_provider,
    load_container,
)
from invoker_core.carrier import ParameterBag, Request
from invoker_core.container import HandlerContainer, HandlerLookup
from invoker_core.events import EventBridge, EventNames
from invoker_core.exceptions import (
    AmbiguousConstructionError,
    ConfigurationError,
    ConstructionTypeMismatchError,
    InvalidResultShapeError,
    InvalidTaggedStrategyError,
    InvokerError,
    MissingCarrierError,
    NoConstructionStrategyError,
    RejectedValueError,
    UnresolvedArgumentError,
)
from invoker_core.logging import (
    configure_logging,
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
)
from invoker_core.state import (
    HandlerKind,
    InvokableProcessorDecorator,
    InvokableProviderDecorator,
    ProcessorInterface,
    ProcessorInvoker,
    ProviderInterface,
    ProviderInvoker,
    classify_handler,
)
from invoker_core.types import (
    Delete,
    Get,
    GetCollection,
    InvokerConfig,
    LogContext,
    Operation,
    Patch,
    Post,
    Put,
)

__version__ = "0.1.0"


def version() -> str:
    """Return the package version."""
    return __version__


__all__ = [
    # Version
    "__version__",
    "version",
    # Binding
    "UriVar",
    "constructed_by",
    "accepts",
    "coerce",
    "describe_parameters",
    "StrategyRegistry",
    "ValueObjectInstantiator",
    "ValueResolver",
    "UriVarValueResolver",
    "PayloadValueResolver",
    "OperationValueResolver",
    "RequestValueResolver",
    "ValueResolverChain",
    "UNRESOLVED",
    "ArgumentResolver",
    # Wiring
    "bootstrap",
    "build_argument_resolver",
    "build_processor",
    "build_provider",
    "load_container",
    # Carrier
    "ParameterBag",
    "Request",
    # Container
    "HandlerContainer",
    "HandlerLookup",
    # Events
    "EventBridge",
    "EventNames",
    # Exceptions
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
    # Logging
    "configure_logging",
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
    # State handlers
    "ProcessorInterface",
    "ProviderInterface",
    "HandlerKind",
    "classify_handler",
    "ProcessorInvoker",
    "ProviderInvoker",
    "InvokableProcessorDecorator",
    "InvokableProviderDecorator",
    # Types
    "InvokerConfig",
    "LogContext",
    "Operation",
    "Get",
    "GetCollection",
    "Post",
    "Put",
    "Patch",
    "Delete",
]

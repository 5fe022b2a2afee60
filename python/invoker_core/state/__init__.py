"""State handler contracts, invocation bridges and dispatch decorators."""

from __future__ import annotations

from .decorators import InvokableProcessorDecorator, InvokableProviderDecorator
from .interfaces import HandlerKind, ProcessorInterface, ProviderInterface, classify_handler
from .invoker import ProcessorInvoker, ProviderInvoker

__all__ = [
    "ProcessorInterface",
    "ProviderInterface",
    "HandlerKind",
    "classify_handler",
    "ProcessorInvoker",
    "ProviderInvoker",
    "InvokableProcessorDecorator",
    "InvokableProviderDecorator",
]

"""Wiring for the dispatch decorators.

Builds a decorator, its invocation bridge and the default resolver
chain from one InvokerConfig, sharing a single construction
instantiator so construction plans are cached once per class.

Example:
    >>> from invoker_core import InvokerConfig, build_processor, load_container
    >>>
    >>> config = InvokerConfig.from_file("config/invoker.yaml")
    >>> container = load_container(config)
    >>> processor = build_processor(PersistProcessor(), container, config)
"""

from __future__ import annotations

from .binding.argument_resolver import ArgumentResolver
from .binding.instantiator import ValueObjectInstantiator
from .binding.resolver_chain import ValueResolverChain
from .container import HandlerContainer, HandlerLookup
from .events import EventBridge
from .logging import configure_logging, log_info
from .state.decorators import InvokableProcessorDecorator, InvokableProviderDecorator
from .state.interfaces import ProcessorInterface, ProviderInterface
from .state.invoker import ProcessorInvoker, ProviderInvoker
from .types import InvokerConfig


def build_argument_resolver(
    config: InvokerConfig | None = None,
    instantiator: ValueObjectInstantiator | None = None,
) -> ArgumentResolver:
    """Build an ArgumentResolver over the default resolver chain."""
    chain = ValueResolverChain.default(config, instantiator or ValueObjectInstantiator())
    return ArgumentResolver(chain)


def build_processor(
    inner: ProcessorInterface,
    container: HandlerLookup,
    config: InvokerConfig | None = None,
    events: EventBridge | None = None,
) -> InvokableProcessorDecorator:
    """Decorate a conventional processor with invokable dispatch.

    Args:
        inner: Fallback processor for the conventional path.
        container: Handler lookup keyed by Operation.processor.
        config: Optional engine configuration.
        events: Optional event bridge (defaults to the singleton).

    Returns:
        The decorated processor.
    """
    config = config or InvokerConfig()
    invoker = ProcessorInvoker(build_argument_resolver(config), config, events)
    return InvokableProcessorDecorator(inner, container, invoker, config, events)


def build_provider(
    inner: ProviderInterface,
    container: HandlerLookup,
    config: InvokerConfig | None = None,
    events: EventBridge | None = None,
) -> InvokableProviderDecorator:
    """Decorate a conventional provider with invokable dispatch."""
    config = config or InvokerConfig()
    invoker = ProviderInvoker(build_argument_resolver(config), config, events)
    return InvokableProviderDecorator(inner, container, invoker, config, events)


def load_container(config: InvokerConfig, container: HandlerContainer | None = None) -> HandlerContainer:
    """Register every handler class path listed in config.handlers.

    Class paths are imported lazily on first lookup.

    Raises:
        ValueError: If an entry is not a module.path.ClassName class path.
    """
    container = container if container is not None else HandlerContainer()
    for handler_id, class_path in config.handlers.items():
        container.register(handler_id, class_path)
    log_info(f"Loaded {len(config.handlers)} handler(s) from config")
    return container


def bootstrap(config: InvokerConfig | None = None) -> tuple[InvokerConfig, HandlerContainer]:
    """Configure logging and load the handler container from config.

    Args:
        config: Engine configuration; read from INVOKER_* variables if omitted.

    Returns:
        The effective config and the populated container.
    """
    config = config or InvokerConfig.from_env()
    configure_logging(config.log_level)
    return config, load_container(config)


__all__ = [
    "bootstrap",
    "build_argument_resolver",
    "build_processor",
    "build_provider",
    "load_container",
]

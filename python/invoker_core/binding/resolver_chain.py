"""Value Resolver Chain - Priority-Ordered Argument Resolution.

The ValueResolverChain resolves one handler parameter by trying value
resolvers in priority order until one yields a value.

Resolution Contract:
1. Resolvers are tried in priority order (lower = first)
2. A resolver whose can_resolve() is False is skipped
3. The first value yielded wins (None included)
4. If every resolver declines, the parameter is UNRESOLVED

Default Chain (when using .default()):
- Priority 10: UriVarValueResolver     - raw named values
- Priority 20: PayloadValueResolver    - the write payload
- Priority 30: OperationValueResolver  - the matched operation
- Priority 40: RequestValueResolver    - the request carrier

Usage:
    chain = ValueResolverChain.default()
    chain.add_resolver(TenantResolver())  # external resolvers plug in anywhere

    value = chain.resolve(descriptor, request)
    if value is UNRESOLVED:
        ...
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from ..logging import log_trace
from ..types import InvokerConfig

if TYPE_CHECKING:
    from ..carrier import Request
    from .base_resolver import ValueResolver
    from .descriptor import ParameterDescriptor
    from .instantiator import ValueObjectInstantiator


class _Unresolved:
    """Marker for a parameter no resolver produced a value for."""

    _instance: _Unresolved | None = None

    def __new__(cls) -> _Unresolved:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNRESOLVED"

    def __bool__(self) -> bool:
        return False


UNRESOLVED: Any = _Unresolved()


class ValueResolverChain:
    """Priority-ordered chain of argument value resolvers.

    Attributes:
        resolvers: List of resolvers in priority order.
        resolvers_by_name: Mapping of resolver names to resolvers.
    """

    def __init__(self) -> None:
        """Initialize an empty resolver chain."""
        self._resolvers: list[ValueResolver] = []
        self._resolvers_by_name: dict[str, ValueResolver] = {}
        self._lock = threading.RLock()

    @classmethod
    def default(
        cls,
        config: InvokerConfig | None = None,
        instantiator: ValueObjectInstantiator | None = None,
    ) -> ValueResolverChain:
        """Create a chain with the core resolvers.

        Args:
            config: Reserved attribute keys and payload aliases.
            instantiator: Shared value object instantiator.

        Returns:
            Chain with UriVar + Payload + Operation + Request resolvers.
        """
        from .resolvers import (
            OperationValueResolver,
            PayloadValueResolver,
            RequestValueResolver,
            UriVarValueResolver,
        )

        config = config or InvokerConfig()
        chain = cls()
        chain.add_resolver(UriVarValueResolver(instantiator, config))
        chain.add_resolver(PayloadValueResolver(config))
        chain.add_resolver(OperationValueResolver(config))
        chain.add_resolver(RequestValueResolver())
        return chain

    def add_resolver(self, resolver: ValueResolver) -> ValueResolverChain:
        """Add a resolver to the chain.

        Resolvers are kept sorted by priority (lower = first); equal
        priorities keep insertion order. A resolver with the name of an
        existing one replaces it.

        Args:
            resolver: Resolver to add.

        Returns:
            Self for method chaining.
        """
        with self._lock:
            existing = self._resolvers_by_name.get(resolver.name)
            if existing is not None:
                self._resolvers.remove(existing)
            self._resolvers.append(resolver)
            self._resolvers.sort(key=lambda r: r.priority)
            self._resolvers_by_name[resolver.name] = resolver
        return self

    def remove_resolver(self, name: str) -> ValueResolver | None:
        """Remove a resolver by name.

        Args:
            name: Resolver name to remove.

        Returns:
            Removed resolver or None if not found.
        """
        with self._lock:
            resolver = self._resolvers_by_name.pop(name, None)
            if resolver:
                self._resolvers.remove(resolver)
            return resolver

    def get_resolver(self, name: str) -> ValueResolver | None:
        return self._resolvers_by_name.get(name)

    def resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> Any:
        """Resolve one parameter.

        Args:
            descriptor: Parameter to resolve.
            carrier: The request carrier.

        Returns:
            The first value yielded, or UNRESOLVED.
        """
        for resolver in list(self._resolvers):
            if not resolver.can_resolve(descriptor, carrier):
                continue

            for value in resolver.resolve(descriptor, carrier):
                log_trace(
                    f"ValueResolverChain: Resolved '{descriptor.name}' via '{resolver.name}'",
                    {"parameter": descriptor.name, "resolver": resolver.name},
                )
                return value

        log_trace(f"ValueResolverChain: No resolver could handle '{descriptor.name}'")
        return UNRESOLVED

    def chain_info(self) -> list[dict[str, Any]]:
        """Get chain info for debugging.

        Returns:
            List of resolver info dicts.
        """
        return [
            {"name": resolver.name, "priority": resolver.priority}
            for resolver in self._resolvers
        ]

    def __len__(self) -> int:
        """Return number of resolvers in chain."""
        return len(self._resolvers)

    @property
    def resolver_names(self) -> list[str]:
        return [r.name for r in self._resolvers]

    def list_resolvers(self) -> list[tuple[str, int]]:
        """List resolvers with their priorities.

        Returns:
            List of (name, priority) tuples in priority order.
        """
        return [(r.name, r.priority) for r in self._resolvers]


__all__ = ["ValueResolverChain", "UNRESOLVED"]

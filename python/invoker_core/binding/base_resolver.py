"""Abstract base class for handler argument value resolvers.

Resolvers are tried in priority order by the ValueResolverChain until
one produces a value for a parameter.

Resolution Contract:
1. name - Human-readable identifier for logging/debugging
2. priority - Lower numbers = tried first
3. can_resolve() - Quick check if this resolver might handle the parameter
4. resolve() - Yield zero or one value for the parameter

Yielding nothing means "decline"; yielding None is a real value.

Example Implementation:
    class TenantResolver(ValueResolver):
        @property
        def name(self) -> str:
            return "tenant"

        @property
        def priority(self) -> int:
            return 25

        def can_resolve(self, descriptor, carrier) -> bool:
            return Tenant in descriptor.declared_types

        def resolve(self, descriptor, carrier):
            tenant = carrier.attributes.get("tenant")
            if tenant is not None:
                yield tenant
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..carrier import Request
    from .descriptor import ParameterDescriptor


class ValueResolver(ABC):
    """Abstract base class for argument value resolvers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this resolver (for logging/debugging)."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Resolution priority (lower = tried first).

        Core priorities:
        - 10: URI variables
        - 20: Payload
        - 30: Operation metadata
        - 40: Request carrier
        """
        ...

    def can_resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> bool:
        """Quick eligibility check (called before resolve).

        Args:
            descriptor: Parameter being resolved.
            carrier: The request carrier.

        Returns:
            True if this resolver might produce a value.
        """
        return True

    @abstractmethod
    def resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> Iterable[Any]:
        """Yield zero or one value for the parameter.

        Args:
            descriptor: Parameter being resolved.
            carrier: The request carrier.

        Returns:
            Iterable with at most one value.
        """
        ...


__all__ = ["ValueResolver"]

"""Request carrier resolver (priority 40).

Injects the carrier itself into parameters declared as Request (or a
subclass the carrier is an instance of).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from ...carrier import Request
from ..base_resolver import ValueResolver
from ..descriptor import ParameterDescriptor


class RequestValueResolver(ValueResolver):
    """Resolves Request-typed parameters to the current carrier."""

    @property
    def name(self) -> str:
        return "request"

    @property
    def priority(self) -> int:
        return 40

    def can_resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> bool:
        return any(
            isinstance(t, type) and issubclass(t, Request) for t in descriptor.declared_types
        )

    def resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> Iterator[Any]:
        for declared in descriptor.declared_types:
            if isinstance(declared, type) and issubclass(declared, Request) and isinstance(
                carrier, declared
            ):
                yield carrier
                return


__all__ = ["RequestValueResolver"]

"""Operation metadata resolver (priority 30).

Injects the matched Operation into parameters declared as Operation or
one of its subclasses. A nullable parameter of this kind always
resolves: to the operation when it matches, otherwise to None.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from ...types import InvokerConfig, Operation
from ..base_resolver import ValueResolver

if TYPE_CHECKING:
    from ...carrier import Request
    from ..descriptor import ParameterDescriptor


class OperationValueResolver(ValueResolver):
    """Resolves Operation-typed parameters."""

    def __init__(self, config: InvokerConfig | None = None) -> None:
        self._config = config or InvokerConfig()

    @property
    def name(self) -> str:
        return "operation"

    @property
    def priority(self) -> int:
        return 30

    def can_resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> bool:
        return _operation_type(descriptor) is not None

    def resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> Iterator[Any]:
        declared = _operation_type(descriptor)
        if declared is None:
            return

        operation = carrier.attributes.get(self._config.operation_key)

        if operation is None and descriptor.nullable:
            yield None
            return

        if not isinstance(operation, Operation):
            return

        if declared is Operation or isinstance(operation, declared):
            yield operation
            return

        if descriptor.nullable:
            yield None


def _operation_type(descriptor: ParameterDescriptor) -> type[Operation] | None:
    for declared in descriptor.declared_types:
        if isinstance(declared, type) and issubclass(declared, Operation):
            return declared
    return None


__all__ = ["OperationValueResolver"]

"""URI variable resolver (priority 10).

Feeds handler parameters from raw named values (route segments):

- A parameter tagged ``Annotated[T, UriVar("key")]`` reads ``key``.
- An untagged parameter reads the raw value of the same name, but only
  when the merged route params contain that name ("magic" matching).

A missing key declines rather than failing: absence may be legitimate
for an optional parameter, and later resolvers or the parameter's
default take over. Unannotated parameters are left to other resolvers.

Primitive parameters are coerced; class-typed parameters are built
through the ValueObjectInstantiator.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from ...exceptions import RejectedValueError
from ...logging import log_trace, log_warn
from ...types import InvokerConfig
from ..base_resolver import ValueResolver
from ..instantiator import ValueObjectInstantiator
from ..param_type import accepts, coerce, primitive_kind

if TYPE_CHECKING:
    from ...carrier import Request
    from ..descriptor import ParameterDescriptor

_MISSING = object()


class UriVarValueResolver(ValueResolver):
    """Resolves parameters from raw named values."""

    def __init__(
        self,
        instantiator: ValueObjectInstantiator | None = None,
        config: InvokerConfig | None = None,
    ) -> None:
        self._instantiator = instantiator or ValueObjectInstantiator()
        self._config = config or InvokerConfig()

    @property
    def name(self) -> str:
        return "uri_var"

    @property
    def priority(self) -> int:
        return 10

    @property
    def instantiator(self) -> ValueObjectInstantiator:
        return self._instantiator

    def can_resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> bool:
        return descriptor.is_typed and not descriptor.is_variadic

    def resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> Iterator[Any]:
        if descriptor.binding_tag is not None:
            key = descriptor.binding_tag
        elif descriptor.name in self._route_params(carrier):
            key = descriptor.name
        else:
            return

        value = self._lookup(carrier, key)
        if value is _MISSING:
            return

        log_trace(
            f"Binding raw value '{key}' to parameter '{descriptor.name}'",
            {"parameter": descriptor.name, "resolver": self.name},
        )
        yield self._convert(descriptor, key, value)

    def _route_params(self, carrier: Request) -> Mapping[str, Any]:
        route_params = carrier.attributes.get(self._config.route_params_key)
        return route_params if isinstance(route_params, Mapping) else {}

    def _lookup(self, carrier: Request, key: str) -> Any:
        if carrier.attributes.has(key):
            return carrier.attributes.get(key)
        return self._route_params(carrier).get(key, _MISSING)

    def _convert(self, descriptor: ParameterDescriptor, key: str, value: Any) -> Any:
        if value is None and descriptor.nullable:
            return None

        declared_types = descriptor.declared_types
        if len(declared_types) == 1:
            declared = declared_types[0]
            kind = primitive_kind(declared)
            if kind is not None:
                return coerce(kind, value)
            if type(value) is declared:
                return value
            return self._instantiator.instantiate(declared, value)

        # Unions: pass accepted values through untouched, otherwise build
        # the only class branch if there is exactly one.
        if accepts(descriptor, value):
            return value
        class_types = [t for t in declared_types if primitive_kind(t) is None]
        if len(class_types) == 1:
            return self._instantiator.instantiate(class_types[0], value)
        log_warn(
            f"Raw value '{key}' not accepted by parameter '{descriptor.name}'",
            {"parameter": descriptor.name, "resolver": self.name},
        )
        raise RejectedValueError(
            f"Raw value '{key}'={value!r} not accepted by parameter '{descriptor.name}'.",
            metadata={"parameter": descriptor.name, "key": key},
        )


__all__ = ["UriVarValueResolver"]

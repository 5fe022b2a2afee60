"""Payload resolver (priority 20).

Yields the write payload (the deserialized input object) when the
parameter is named after one of the payload aliases (``data``,
``input`` by default) or is declared with a class the payload is an
instance of.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from ...types import InvokerConfig
from ..base_resolver import ValueResolver
from ..param_type import is_object, primitive_kind

if TYPE_CHECKING:
    from ...carrier import Request
    from ..descriptor import ParameterDescriptor


class PayloadValueResolver(ValueResolver):
    """Resolves the payload parameter of invokable processors."""

    def __init__(self, config: InvokerConfig | None = None) -> None:
        self._config = config or InvokerConfig()

    @property
    def name(self) -> str:
        return "payload"

    @property
    def priority(self) -> int:
        return 20

    def can_resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> bool:
        return carrier.attributes.get(self._config.payload_key) is not None

    def resolve(self, descriptor: ParameterDescriptor, carrier: Request) -> Iterator[Any]:
        payload = carrier.attributes.get(self._config.payload_key)
        if payload is None:
            return

        if descriptor.name in self._config.payload_aliases:
            yield payload
            return

        if not is_object(payload):
            return

        for declared in descriptor.declared_types:
            if primitive_kind(declared) is None and _is_instance(payload, declared):
                yield payload
                return


def _is_instance(value: Any, declared: Any) -> bool:
    try:
        return isinstance(value, declared)
    except TypeError:
        return False


__all__ = ["PayloadValueResolver"]

"""Argument list assembly for invokable handlers.

Drives the ValueResolverChain over every declared parameter of a
handler, in declaration order, and applies the fallbacks for
parameters no resolver produced a value for:

- parameter with a default: the default is used
- ``*args`` / ``**kwargs``: nothing is passed
- nullable parameter: None
- anything else: UnresolvedArgumentError

Positional parameters end up in ``args``; keyword-only parameters in
``kwargs``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..exceptions import UnresolvedArgumentError
from ..logging import log_warn
from .descriptor import describe_parameters
from .resolver_chain import UNRESOLVED, ValueResolverChain

if TYPE_CHECKING:
    from ..carrier import Request
    from .descriptor import ParameterDescriptor


class ArgumentResolver:
    """Builds the call arguments of a handler from a request carrier.

    Example:
        >>> resolver = ArgumentResolver(ValueResolverChain.default())
        >>> args, kwargs = resolver.get_arguments(request, handler)
        >>> result = handler(*args, **kwargs)
    """

    def __init__(self, chain: ValueResolverChain | None = None) -> None:
        self._chain = chain if chain is not None else ValueResolverChain.default()

    @property
    def chain(self) -> ValueResolverChain:
        return self._chain

    def get_arguments(
        self, carrier: Request, handler: Callable[..., Any]
    ) -> tuple[list[Any], dict[str, Any]]:
        """Resolve every parameter of ``handler``.

        Args:
            carrier: The request carrier.
            handler: The callable to build arguments for.

        Returns:
            (args, kwargs) ready for ``handler(*args, **kwargs)``.

        Raises:
            UnresolvedArgumentError: If a required parameter stays unresolved.
        """
        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for descriptor in describe_parameters(handler):
            if descriptor.is_variadic:
                continue

            value = self._chain.resolve(descriptor, carrier)
            if value is UNRESOLVED:
                value = self._fallback(descriptor, handler)
                if value is UNRESOLVED:
                    continue

            if descriptor.is_keyword_only:
                kwargs[descriptor.name] = value
            else:
                args.append(value)

        return args, kwargs

    def _fallback(self, descriptor: ParameterDescriptor, handler: Callable[..., Any]) -> Any:
        if descriptor.has_default:
            # Keyword-only defaults are left to Python; positional ones
            # must be passed to keep later arguments in place.
            return UNRESOLVED if descriptor.is_keyword_only else descriptor.default

        if descriptor.nullable:
            return None

        handler_name = _handler_name(handler)
        log_warn(
            f"Could not resolve argument '{descriptor.name}' of {handler_name}",
            {"parameter": descriptor.name},
        )
        raise UnresolvedArgumentError(
            f"Could not resolve argument '{descriptor.name}' of {handler_name}: "
            f"no resolver produced a value and it has no default.",
            metadata={"parameter": descriptor.name, "handler": handler_name},
        )


def _handler_name(handler: Callable[..., Any]) -> str:
    name = getattr(handler, "__qualname__", None)
    if name is None:
        name = type(handler).__qualname__
    return f"{name}()"


__all__ = ["ArgumentResolver"]

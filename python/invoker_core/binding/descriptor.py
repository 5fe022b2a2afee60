"""Handler parameter descriptors.

A ParameterDescriptor is derived once per handler signature through
introspection and cached for the lifetime of the process. Descriptors
are immutable; concurrent recomputation of a cache entry is harmless
because the result is deterministic.

Example:
    >>> def handler(data: UserResource, company: Annotated[CompanyId, UriVar("companyId")]): ...
    >>> [d.name for d in describe_parameters(handler)]
    ['data', 'company']
    >>> describe_parameters(handler)[1].binding_tag
    'companyId'
"""

from __future__ import annotations

import functools
import inspect
import threading
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..logging import log_warn
from .attributes import UriVar
from .param_type import split_annotation


@dataclass(frozen=True)
class ParameterDescriptor:
    """Static description of one handler parameter.

    Attributes:
        name: Parameter name, unique within the signature.
        declared_types: Declared types; more than one means a union.
            Empty for an unannotated parameter.
        nullable: Whether None is an allowed value.
        binding_tag: Raw key named by an ``UriVar`` binding tag.
        is_variadic: ``*args`` or ``**kwargs`` parameter.
        has_default: Whether the parameter declares a default.
        default: The declared default, if any.
        kind: The inspect.Parameter kind.
    """

    name: str
    declared_types: tuple[Any, ...] = ()
    nullable: bool = False
    binding_tag: str | None = None
    is_variadic: bool = False
    has_default: bool = False
    default: Any = field(default=None, compare=False)
    kind: inspect._ParameterKind = inspect.Parameter.POSITIONAL_OR_KEYWORD

    @property
    def is_union(self) -> bool:
        return len(self.declared_types) > 1

    @property
    def is_typed(self) -> bool:
        return bool(self.declared_types)

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is inspect.Parameter.KEYWORD_ONLY

    @property
    def is_required(self) -> bool:
        return not self.has_default and not self.is_variadic

    @classmethod
    def from_parameter(cls, parameter: inspect.Parameter, annotation: Any) -> ParameterDescriptor:
        """Build a descriptor from an inspect.Parameter and its resolved annotation."""
        declared_types, nullable, metadata = split_annotation(annotation)
        tags = [m.name for m in metadata if isinstance(m, UriVar)]
        has_default = parameter.default is not inspect.Parameter.empty

        return cls(
            name=parameter.name,
            declared_types=declared_types,
            nullable=nullable,
            binding_tag=tags[0] if tags else None,
            is_variadic=parameter.kind
            in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD),
            has_default=has_default,
            default=parameter.default if has_default else None,
            kind=parameter.kind,
        )


_cache: dict[tuple[Any, bool], tuple[ParameterDescriptor, ...]] = {}
_cache_lock = threading.RLock()


def describe_parameters(handler: Callable[..., Any]) -> tuple[ParameterDescriptor, ...]:
    """Return the ordered parameter descriptors of a callable.

    Works for functions, bound methods and instances defining
    ``__call__``. Results are cached per underlying function.

    Args:
        handler: The callable to describe.

    Returns:
        Descriptors in declaration order (``self`` excluded).
    """
    function, bound = _underlying_function(handler)
    # Partials carry per-instance signatures; only plain functions are cached.
    cacheable = inspect.isfunction(function) and not isinstance(handler, functools.partial)
    key = (function, bound)

    if cacheable:
        cached = _cache.get(key)
        if cached is not None:
            return cached

    descriptors = _introspect(handler, function)
    if cacheable:
        with _cache_lock:
            _cache[key] = descriptors
    return descriptors


def clear_descriptor_cache() -> None:
    """Drop every cached descriptor (test isolation)."""
    with _cache_lock:
        _cache.clear()


def resolve_type_hints(function: Callable[..., Any], localns: dict[str, Any] | None = None) -> dict[str, Any]:
    """Resolve a function's annotations, keeping ``Annotated`` extras.

    Forward references that cannot be resolved are dropped with a
    warning; the affected parameters behave as unannotated.
    """
    try:
        return typing.get_type_hints(function, localns=localns, include_extras=True)
    except (NameError, TypeError) as e:
        log_warn(
            f"Could not resolve annotations of {getattr(function, '__qualname__', function)}: {e}"
        )
        raw = getattr(function, "__annotations__", {}) or {}
        return {k: v for k, v in raw.items() if not isinstance(v, str)}


def _underlying_function(handler: Callable[..., Any]) -> tuple[Any, bool]:
    if isinstance(handler, functools.partial):
        return _underlying_function(handler.func)[0], True
    if inspect.isfunction(handler) or inspect.isbuiltin(handler):
        return handler, False
    if inspect.ismethod(handler):
        return handler.__func__, True
    call = getattr(type(handler), "__call__", None)
    if call is not None and not isinstance(handler, type):
        return call, True
    return handler, False


def _introspect(handler: Callable[..., Any], function: Any) -> tuple[ParameterDescriptor, ...]:
    signature = inspect.signature(handler)
    hints = resolve_type_hints(function)

    descriptors = []
    for parameter in signature.parameters.values():
        annotation = hints.get(parameter.name, inspect.Parameter.empty)
        if annotation is inspect.Parameter.empty and not isinstance(parameter.annotation, str):
            annotation = parameter.annotation
        descriptors.append(ParameterDescriptor.from_parameter(parameter, annotation))
    return tuple(descriptors)


__all__ = [
    "ParameterDescriptor",
    "describe_parameters",
    "clear_descriptor_cache",
    "resolve_type_hints",
]

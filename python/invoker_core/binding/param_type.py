"""Type acceptance and coercion rules.

This is the single place where the engine decides whether a raw value
satisfies a declared parameter type, and how a raw value is narrowed to
a primitive kind. Both the URI variable resolver and the construction
resolver go through it, so the two call sites never disagree.

Primitive kinds:
    string  str
    int     int (bool is not an int here)
    float   float
    bool    bool
    array   list, tuple, dict
    object  anything that is not None, a scalar, or an array
    any     typing.Any

Acceptance is lenient for a single declared type and strict per branch
for a union of two or more types:

    >>> accepts(int, "123")
    True
    >>> accepts(int, "abc")
    False
    >>> accepts(str | int, 1.5)
    False
    >>> accepts(str | None, None)
    True
"""

from __future__ import annotations

import inspect
import math
import re
import types
from collections.abc import Mapping
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

STRING = "string"
INT = "int"
FLOAT = "float"
BOOL = "bool"
ARRAY = "array"
OBJECT = "object"
ANY = "any"

PRIMITIVE_KINDS: dict[Any, str] = {
    str: STRING,
    int: INT,
    float: FLOAT,
    bool: BOOL,
    list: ARRAY,
    tuple: ARRAY,
    dict: ARRAY,
    object: OBJECT,
    Any: ANY,
}

TRUE_LITERALS = frozenset({"true", "1"})
FALSE_LITERALS = frozenset({"false", "0"})

_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)
_ARRAY_TYPES = (list, tuple, dict)
_NONE_TYPE = type(None)

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$", re.ASCII)
_DEFAULT_STR = (object.__str__, BaseModel.__str__)


# =============================================================================
# Annotation handling
# =============================================================================


def split_annotation(annotation: Any) -> tuple[tuple[Any, ...], bool, tuple[Any, ...]]:
    """Split a type annotation into its declared types.

    Args:
        annotation: A resolved annotation, or inspect.Parameter.empty.

    Returns:
        (declared_types, nullable, metadata) where declared_types excludes
        NoneType and metadata collects every ``Annotated`` extra.

    Example:
        >>> split_annotation(int | None)
        ((<class 'int'>,), True, ())
    """
    if annotation is inspect.Parameter.empty:
        return (), False, ()

    metadata: list[Any] = []
    declared: list[Any] = []
    nullable = False

    def visit(hint: Any) -> None:
        nonlocal nullable
        origin = get_origin(hint)
        if origin is Annotated:
            base, *extras = get_args(hint)
            metadata.extend(extras)
            visit(base)
        elif origin is Union or (origin is types.UnionType):
            for member in get_args(hint):
                visit(member)
        elif hint is None or hint is _NONE_TYPE:
            nullable = True
        else:
            resolved = origin if isinstance(origin, type) else hint
            if resolved not in declared:
                declared.append(resolved)

    visit(annotation)
    return tuple(declared), nullable, tuple(metadata)


def primitive_kind(declared: Any) -> str | None:
    """Return the primitive kind of a declared type, or None for class references."""
    try:
        return PRIMITIVE_KINDS.get(declared)
    except TypeError:
        return None


def is_builtin(declared: Any) -> bool:
    return primitive_kind(declared) is not None


# =============================================================================
# Value predicates
# =============================================================================


def is_numeric(value: Any) -> bool:
    """Check for an int/float (not bool) or a decimal numeric string."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and _NUMERIC_RE.match(value) is not None


def is_array(value: Any) -> bool:
    return isinstance(value, _ARRAY_TYPES)


def is_object(value: Any) -> bool:
    """Check the value is an object: not None, not a scalar, not an array."""
    return value is not None and not isinstance(value, _SCALAR_TYPES + _ARRAY_TYPES)


def is_stringable(value: Any) -> bool:
    """Check for an object defining its own ``__str__``.

    The field dump pydantic models inherit does not count.
    """
    return is_object(value) and type(value).__str__ not in _DEFAULT_STR


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _matches_kind(kind: str, value: Any, lenient: bool) -> bool:
    if kind == STRING:
        return isinstance(value, str) or (
            lenient
            and (isinstance(value, (int, float)) or is_stringable(value))
        )
    if kind == INT:
        return _is_int(value) or (lenient and isinstance(value, str) and _parse_int(value) is not None)
    if kind == FLOAT:
        return isinstance(value, float) or (
            lenient and (_is_int(value) or (isinstance(value, str) and is_numeric(value)))
        )
    if kind == BOOL:
        return isinstance(value, bool) or (
            lenient
            and (
                (isinstance(value, str) and value in TRUE_LITERALS | FALSE_LITERALS)
                or (_is_int(value) and value in (0, 1))
            )
        )
    if kind == ARRAY:
        return is_array(value)
    if kind == OBJECT:
        return is_object(value)
    return kind == ANY


def _is_instance(value: Any, declared: Any) -> bool:
    if value is None:
        return False
    try:
        return isinstance(value, declared)
    except TypeError:
        # Literal, TypeVar and other non-class hints never match.
        return False


def _normalize(declared: Any) -> tuple[tuple[Any, ...], bool]:
    if hasattr(declared, "declared_types") and hasattr(declared, "nullable"):
        return tuple(declared.declared_types), bool(declared.nullable)
    if isinstance(declared, (tuple, list)):
        members = tuple(t for t in declared if t is not None and t is not _NONE_TYPE)
        return members, len(members) != len(declared)
    declared_types, nullable, _ = split_annotation(declared)
    return declared_types, nullable


# =============================================================================
# Acceptance and coercion
# =============================================================================


def accepts(declared: Any, value: Any) -> bool:
    """Check whether ``value`` satisfies the declared type(s).

    Args:
        declared: A ParameterDescriptor, a tuple of types, or an annotation.
        value: The raw value.

    Returns:
        True if the value is acceptable.
    """
    declared_types, nullable = _normalize(declared)

    if not declared_types:
        return True

    if value is None:
        return nullable or Any in declared_types

    lenient = len(declared_types) == 1
    for declared_type in declared_types:
        kind = primitive_kind(declared_type)
        if kind is not None:
            if _matches_kind(kind, value, lenient):
                return True
        elif _is_instance(value, declared_type):
            return True
    return False


def coerce(kind: str, value: Any) -> Any:
    """Narrow ``value`` to a primitive kind.

    Values that cannot be narrowed are returned unchanged, except for
    the array and object kinds which wrap their input.

    Example:
        >>> coerce("int", "456")
        456
        >>> coerce("bool", "0")
        False
    """
    if kind == STRING:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)) or is_stringable(value):
            return str(value)
        return value
    if kind == INT:
        parsed = _parse_int(value)
        return value if parsed is None else parsed
    if kind == FLOAT:
        return float(value) if is_numeric(value) else value
    if kind == BOOL:
        if isinstance(value, bool):
            return value
        if (isinstance(value, str) and value in TRUE_LITERALS) or (_is_int(value) and value == 1):
            return True
        if (isinstance(value, str) and value in FALSE_LITERALS) or (_is_int(value) and value == 0):
            return False
        return bool(value)
    if kind == ARRAY:
        return value if is_array(value) else [value]
    if kind == OBJECT:
        if is_object(value):
            return value
        if value is None:
            return types.SimpleNamespace()
        if isinstance(value, Mapping):
            return types.SimpleNamespace(**{str(k): v for k, v in value.items()})
        return types.SimpleNamespace(scalar=value)
    return value


def coerce_to_declared(declared: Any, value: Any) -> Any:
    """Coerce ``value`` to a single declared primitive kind.

    Unions, class references and untyped declarations leave the value
    unchanged; so does a None value.
    """
    declared_types, _ = _normalize(declared)
    if value is None or len(declared_types) != 1:
        return value
    kind = primitive_kind(declared_types[0])
    if kind is None:
        return value
    return coerce(kind, value)


def _parse_int(value: Any) -> int | None:
    """Parse a numeric value as an int; None when it has no finite int form."""
    if not is_numeric(value):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            # Exponents, decimals and strings past the int digit limit.
            value = float(value)
    return int(value) if math.isfinite(value) else None


__all__ = [
    "PRIMITIVE_KINDS",
    "accepts",
    "coerce",
    "coerce_to_declared",
    "is_array",
    "is_builtin",
    "is_numeric",
    "is_object",
    "is_stringable",
    "primitive_kind",
    "split_annotation",
]

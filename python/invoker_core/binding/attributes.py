"""Declarative binding and construction tags.

Two pieces of metadata steer the binding engine:

- ``UriVar(name)``: parameter-level binding tag, placed inside
  ``typing.Annotated``, naming the raw key that feeds the parameter.
- ``@constructed_by(method)``: class-level construction tag naming the
  single authoritative factory used to build the class from a raw value.

Example:
    >>> @constructed_by("from_string")
    ... class CompanyId:
    ...     def __init__(self, value: str) -> None:
    ...         self.value = value
    ...
    ...     @classmethod
    ...     def from_string(cls, value: str) -> CompanyId:
    ...         return cls(value.lower())
    ...
    >>> def handler(company: Annotated[CompanyId, UriVar("companyId")]): ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T", bound=type)

CONSTRUCTION_TAG_ATTR = "__invoker_constructor__"


@dataclass(frozen=True)
class UriVar:
    """Binding tag: read the parameter from the raw value named ``name``.

    Attributes:
        name: Raw named value key (e.g. a route segment).
    """

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("UriVar name must be a non-empty string")


def constructed_by(method: str) -> Callable[[T], T]:
    """Class decorator tagging the authoritative construction method.

    The tag is not inherited: a subclass must carry its own tag.

    Args:
        method: Name of a public staticmethod/classmethod taking exactly
            one required parameter.

    Returns:
        Decorator returning the class unchanged apart from the tag.
    """
    if not isinstance(method, str) or not method:
        raise ValueError("constructed_by() requires a method name")

    def decorate(cls: T) -> T:
        setattr(cls, CONSTRUCTION_TAG_ATTR, method)
        return cls

    return decorate


def construction_tag(cls: type) -> str | None:
    """Return the construction method declared directly on ``cls``, if any."""
    tag = vars(cls).get(CONSTRUCTION_TAG_ATTR)
    return tag if isinstance(tag, str) else None


__all__ = ["UriVar", "constructed_by", "construction_tag", "CONSTRUCTION_TAG_ATTR"]

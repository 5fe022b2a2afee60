"""Typed construction of value objects from raw values.

Given a target class and a raw value, the instantiator selects exactly
one construction strategy and builds the instance:

1. Explicit: the class carries ``@constructed_by("method")``. Only that
   method is considered; it must be public, a staticmethod or
   classmethod, and take exactly one required parameter accepting the
   raw value.
2. Otherwise the candidates are the class's own constructor and every
   public staticmethod/classmethod annotated to return the class (or
   ``Self``), each taking exactly one required parameter that accepts
   the raw value. One candidate is used; none or several is an error.

The raw value is coerced to the chosen candidate's own declared
parameter kind right before the call, and the result must be an
instance of exactly the target class.

Candidate sets are pure functions of the class declaration and are
cached per class in a StrategyRegistry; acceptance is evaluated per
raw value.

Example:
    >>> instantiator = ValueObjectInstantiator()
    >>> instantiator.instantiate(CompanyId, "acme-corp").value
    'acme-corp'
"""

from __future__ import annotations

import inspect
import threading
import typing
from dataclasses import dataclass
from typing import Any

from ..exceptions import (
    AmbiguousConstructionError,
    ConstructionTypeMismatchError,
    InvalidTaggedStrategyError,
    NoConstructionStrategyError,
    RejectedValueError,
)
from ..logging import log_error, log_trace, log_warn
from .attributes import construction_tag
from .descriptor import ParameterDescriptor, resolve_type_hints
from .param_type import accepts, coerce_to_declared

_SELF = getattr(typing, "Self", None)


@dataclass(frozen=True)
class Candidate:
    """One way of building ``target`` from a single raw value.

    Attributes:
        target: Class being built.
        name: Factory method name, or ``__init__`` for the constructor.
        parameter: The single required parameter of the callable.
    """

    target: type
    name: str
    parameter: ParameterDescriptor

    @property
    def is_constructor(self) -> bool:
        return self.name == "__init__"

    @property
    def label(self) -> str:
        if self.is_constructor:
            return f"{self.target.__qualname__}()"
        return f"{self.target.__qualname__}.{self.name}()"

    def build(self, value: Any) -> Any:
        """Coerce ``value`` to this candidate's parameter and call it."""
        argument = coerce_to_declared(self.parameter, value)
        factory = self.target if self.is_constructor else getattr(self.target, self.name)
        if self.parameter.is_keyword_only:
            return factory(**{self.parameter.name: argument})
        return factory(argument)


@dataclass(frozen=True)
class ConstructionPlan:
    """Cached construction strategies of one class.

    Attributes:
        target: The class.
        tag: Method named by the construction tag, if any.
        tagged: Validated candidate for the tag, if the tagged method is usable.
        tag_problem: Why the tagged method is unusable.
        candidates: Constructor/factory candidates (untagged classes only).
    """

    target: type
    tag: str | None = None
    tagged: Candidate | None = None
    tag_problem: str | None = None
    candidates: tuple[Candidate, ...] = ()


class StrategyRegistry:
    """Process-wide cache of construction plans keyed by class.

    Thread-safe; a plan may be computed twice under contention, which
    is harmless because the computation is deterministic.
    """

    def __init__(self) -> None:
        self._plans: dict[type, ConstructionPlan] = {}
        self._lock = threading.RLock()

    def plan_for(self, target: type) -> ConstructionPlan:
        plan = self._plans.get(target)
        if plan is None:
            plan = self.inspect(target)
            with self._lock:
                self._plans[target] = plan
        return plan

    def clear(self) -> None:
        with self._lock:
            self._plans.clear()

    def __len__(self) -> int:
        return len(self._plans)

    def __contains__(self, target: object) -> bool:
        return target in self._plans

    @classmethod
    def inspect(cls, target: type) -> ConstructionPlan:
        """Introspect ``target`` and build its construction plan."""
        localns = {target.__name__: target}
        tag = construction_tag(target)

        if tag is not None:
            tagged, problem = _tagged_candidate(target, tag, localns)
            return ConstructionPlan(target=target, tag=tag, tagged=tagged, tag_problem=problem)

        candidates: list[Candidate] = []
        constructor = _constructor_candidate(target, localns)
        if constructor is not None:
            candidates.append(constructor)

        for name in sorted(dir(target)):
            if name.startswith("_"):
                continue
            raw = inspect.getattr_static(target, name, None)
            if not isinstance(raw, (staticmethod, classmethod)):
                continue
            hints = resolve_type_hints(raw.__func__, localns)
            if not _returns_target(raw.__func__, hints, target):
                continue
            parameter = _single_required_parameter(getattr(target, name), hints)
            if parameter is not None:
                candidates.append(Candidate(target, name, parameter))

        return ConstructionPlan(target=target, candidates=tuple(candidates))


class ValueObjectInstantiator:
    """Builds typed value objects from raw values.

    Example:
        >>> ValueObjectInstantiator().instantiate(UserId, "456").to_int()
        456
    """

    def __init__(self, registry: StrategyRegistry | None = None) -> None:
        self._registry = registry if registry is not None else StrategyRegistry()

    @property
    def registry(self) -> StrategyRegistry:
        return self._registry

    def instantiate(self, target: type, value: Any) -> Any:
        """Build an instance of ``target`` from ``value``.

        Args:
            target: The class to build.
            value: The raw value.

        Returns:
            An instance of exactly ``target``.

        Raises:
            InvalidTaggedStrategyError: The tagged method is unusable.
            RejectedValueError: The tagged method does not accept the value.
            NoConstructionStrategyError: No usable constructor or factory.
            AmbiguousConstructionError: Several usable constructors/factories.
            ConstructionTypeMismatchError: The result is not exactly ``target``.
        """
        if not isinstance(target, type):
            raise NoConstructionStrategyError(
                f"Cannot construct {target!r}: not a class.",
                metadata={"target": repr(target)},
            )

        plan = self._registry.plan_for(target)
        if plan.tag is not None:
            return self._instantiate_tagged(plan, value)

        eligible = [c for c in plan.candidates if accepts(c.parameter, value)]
        name = target.__qualname__

        if len(eligible) == 1:
            return self._build(eligible[0], value)

        if not eligible:
            log_warn(f"No usable constructor/factory for {name}", {"target": _qualified(target)})
            raise NoConstructionStrategyError(
                f"No usable constructor/factory for {name}.",
                metadata={"target": _qualified(target)},
            )

        labels = [c.label for c in eligible]
        log_warn(
            f"Ambiguous factories for {name}: {', '.join(labels)}",
            {"target": _qualified(target)},
        )
        raise AmbiguousConstructionError(
            f"Ambiguous factories for {name} ({', '.join(labels)}); "
            f"add @constructed_by(...) to disambiguate.",
            metadata={"target": _qualified(target), "candidates": labels},
        )

    def _instantiate_tagged(self, plan: ConstructionPlan, value: Any) -> Any:
        target = plan.target
        method = f"{target.__qualname__}.{plan.tag}()"

        if plan.tagged is None:
            log_warn(f"Invalid construction method {method}", {"target": _qualified(target)})
            raise InvalidTaggedStrategyError(
                f"Invalid construction method {method}: {plan.tag_problem}.",
                metadata={"target": _qualified(target), "method": plan.tag},
            )

        if not accepts(plan.tagged.parameter, value):
            log_warn(f"Value {value!r} not accepted by {method}", {"target": _qualified(target)})
            raise RejectedValueError(
                f"Value {value!r} not accepted by {method}.",
                metadata={"target": _qualified(target), "method": plan.tag},
            )

        return self._build(plan.tagged, value)

    def _build(self, candidate: Candidate, value: Any) -> Any:
        result = candidate.build(value)
        if type(result) is not candidate.target:
            log_error(
                f"{candidate.label} returned {type(result).__qualname__}",
                {"target": _qualified(candidate.target)},
            )
            raise ConstructionTypeMismatchError(
                f"{candidate.label} did not return an instance of "
                f"{candidate.target.__qualname__} (got {type(result).__qualname__}).",
                metadata={"target": _qualified(candidate.target), "method": candidate.name},
            )
        log_trace(f"Constructed {candidate.target.__qualname__} via {candidate.label}")
        return result


def _qualified(target: type) -> str:
    return f"{target.__module__}.{target.__qualname__}"


def _tagged_candidate(
    target: type, tag: str, localns: dict[str, Any]
) -> tuple[Candidate | None, str | None]:
    raw = inspect.getattr_static(target, tag, None)
    if raw is None:
        return None, "method does not exist"
    if tag.startswith("_"):
        return None, "method is not public"
    if not isinstance(raw, (staticmethod, classmethod)):
        return None, "method is not a staticmethod or classmethod"

    hints = resolve_type_hints(raw.__func__, localns)
    parameter = _single_required_parameter(getattr(target, tag), hints)
    if parameter is None:
        return None, "method must take exactly one required parameter"
    return Candidate(target, tag, parameter), None


def _constructor_candidate(target: type, localns: dict[str, Any]) -> Candidate | None:
    if target.__init__ is object.__init__ and target.__new__ is object.__new__:
        return None

    try:
        signature_target = inspect.signature(target)
    except (TypeError, ValueError):
        return None

    init = target.__init__ if target.__init__ is not object.__init__ else target.__new__
    hints = resolve_type_hints(init, localns) if inspect.isfunction(init) else {}
    parameter = _single_required_parameter(signature_target, hints)
    if parameter is None:
        return None
    return Candidate(target, "__init__", parameter)


def _single_required_parameter(
    callable_or_signature: Any, hints: dict[str, Any]
) -> ParameterDescriptor | None:
    if isinstance(callable_or_signature, inspect.Signature):
        signature = callable_or_signature
    else:
        try:
            signature = inspect.signature(callable_or_signature)
        except (TypeError, ValueError):
            return None

    required = [
        p
        for p in signature.parameters.values()
        if p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        and p.default is inspect.Parameter.empty
    ]
    if len(required) != 1:
        return None

    parameter = required[0]
    annotation = hints.get(parameter.name, inspect.Parameter.empty)
    if annotation is inspect.Parameter.empty and not isinstance(parameter.annotation, str):
        annotation = parameter.annotation
    return ParameterDescriptor.from_parameter(parameter, annotation)


def _returns_target(function: Any, hints: dict[str, Any], target: type) -> bool:
    returned = hints.get("return")
    if returned is not None:
        return returned is target or (_SELF is not None and returned is _SELF)

    raw = getattr(function, "__annotations__", {}).get("return")
    return isinstance(raw, str) and raw in (target.__name__, target.__qualname__, "Self")


__all__ = [
    "Candidate",
    "ConstructionPlan",
    "StrategyRegistry",
    "ValueObjectInstantiator",
]

r"""Parameter binding infrastructure.

This package turns raw named values, a payload and an operation into
the arguments of a freeform handler callable.

Components, leaf to root:
- param_type: type acceptance and coercion rules
- instantiator: typed construction of value objects (ValueObjectInstantiator)
- resolvers: UriVar, Payload, Operation and Request value resolvers
- resolver_chain: priority-ordered ValueResolverChain
- argument_resolver: full argument list assembly (ArgumentResolver)

Declaring bindings:

    from typing import Annotated
    from invoker_core.binding import UriVar, constructed_by

    @constructed_by("from_string")
    class CompanyId:
        ...

    def create_user(
        data: UserResource,
        company: Annotated[CompanyId, UriVar("companyId")],
        request: Request,
    ) -> UserResource:
        ...

Custom Resolvers:
Extend ValueResolver and add it to the chain:

    chain = ValueResolverChain.default()
    chain.add_resolver(TenantResolver())
"""

from __future__ import annotations

from .argument_resolver import ArgumentResolver
from .attributes import UriVar, constructed_by, construction_tag
from .base_resolver import ValueResolver
from .descriptor import ParameterDescriptor, clear_descriptor_cache, describe_parameters
from .instantiator import Candidate, ConstructionPlan, StrategyRegistry, ValueObjectInstantiator
from .param_type import accepts, coerce, coerce_to_declared, is_builtin, primitive_kind
from .resolver_chain import UNRESOLVED, ValueResolverChain
from .resolvers import (
    OperationValueResolver,
    PayloadValueResolver,
    RequestValueResolver,
    UriVarValueResolver,
)

__all__ = [
    # Tags
    "UriVar",
    "constructed_by",
    "construction_tag",
    # Type acceptance
    "accepts",
    "coerce",
    "coerce_to_declared",
    "is_builtin",
    "primitive_kind",
    # Descriptors
    "ParameterDescriptor",
    "describe_parameters",
    "clear_descriptor_cache",
    # Construction
    "Candidate",
    "ConstructionPlan",
    "StrategyRegistry",
    "ValueObjectInstantiator",
    # Resolvers
    "ValueResolver",
    "UriVarValueResolver",
    "PayloadValueResolver",
    "OperationValueResolver",
    "RequestValueResolver",
    # Chain
    "ValueResolverChain",
    "UNRESOLVED",
    "ArgumentResolver",
]

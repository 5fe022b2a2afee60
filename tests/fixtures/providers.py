"""Invokable and conventional providers."""

from __future__ import annotations

from typing import Annotated, Any

from invoker_core import GetCollection, Operation, ProviderInterface, UriVar

from .resources import UserResource
from .value_objects import CompanyId, UserId


def user_provider(id: int) -> UserResource:
    user = UserResource(name=f"user-{id}")
    user.id = id
    return user


def company_users_provider(
    company: Annotated[CompanyId, UriVar("companyId")],
    operation: GetCollection,
) -> list[UserResource]:
    user = UserResource(name="alice")
    user.company = company
    return [user]


def missing_user_provider(userId: UserId) -> UserResource | None:
    return None


def scalar_provider(id: int) -> int:
    return id


class RecordingProvider(ProviderInterface):
    """Conventional provider recording the arguments it received."""

    def __init__(self, result: Any = None) -> None:
        self.result = result
        self.calls: list[tuple[Any, ...]] = []

    def provide(
        self,
        operation: Operation,
        uri_variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        self.calls.append((operation, uri_variables, context))
        return self.result


class TraditionalUserProvider(ProviderInterface):
    def provide(
        self,
        operation: Operation,
        uri_variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        return UserResource(name="traditional")

"""Invokable and conventional processors."""

from __future__ import annotations

from typing import Annotated, Any

from invoker_core import Operation, Post, ProcessorInterface, Request, UriVar

from .resources import ArticleResource, UserResource
from .value_objects import CompanyId, IntUserId


def create_user_processor(
    data: UserResource,
    company: Annotated[CompanyId, UriVar("companyId")],
) -> UserResource:
    data.company = company
    return data


def assign_user_processor(user: UserResource, userId: IntUserId) -> UserResource:
    user.id = userId
    return user


def string_result_processor(data: UserResource) -> str:
    return "done"


def none_result_processor(data: UserResource) -> None:
    return None


def failing_processor(data: UserResource) -> UserResource:
    raise LookupError("user store unavailable")


class PublishArticleProcessor:
    """Invokable class: dispatched through ``__call__``."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def __call__(
        self,
        article: ArticleResource,
        operation: Post,
        request: Request,
        notify: bool = False,
    ) -> ArticleResource:
        self.calls.append((article, operation, request, notify))
        article.published = True
        return article


class RecordingProcessor(ProcessorInterface):
    """Conventional processor recording the arguments it received."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def process(
        self,
        data: Any,
        operation: Operation,
        uri_variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        self.calls.append((data, operation, uri_variables, context))
        return data


class TraditionalUserProcessor(ProcessorInterface):
    """Fixed-interface processor registered in the container."""

    invoked = False

    def process(
        self,
        data: Any,
        operation: Operation,
        uri_variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> Any:
        type(self).invoked = True
        return data

"""Request carrier threaded through an invokable handler call.

The carrier is the mutable request-like object owned by the host
framework. The bridges copy raw named values, the payload and the
operation into its attribute bag; value resolvers read them back.

Example:
    >>> request = Request(method="POST", path="/companies/acme-corp/users")
    >>> request.attributes.set("companyId", "acme-corp")
    >>> request.attributes.get("companyId")
    'acme-corp'
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class ParameterBag:
    """Mutable string-keyed attribute container."""

    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        self._parameters: dict[str, Any] = dict(parameters or {})

    def has(self, key: str) -> bool:
        return key in self._parameters

    def get(self, key: str, default: Any = None) -> Any:
        return self._parameters.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._parameters[key] = value

    def remove(self, key: str) -> None:
        self._parameters.pop(key, None)

    def all(self) -> dict[str, Any]:
        """Return a shallow copy of every attribute."""
        return dict(self._parameters)

    def keys(self) -> list[str]:
        return list(self._parameters)

    def __contains__(self, key: object) -> bool:
        return key in self._parameters

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"ParameterBag({self._parameters!r})"


class Request:
    """Request-like carrier object.

    Attributes:
        method: HTTP method.
        path: Request path.
        query: Query string parameters.
        headers: Request headers.
        attributes: Framework and routing attributes, shared with resolvers.
    """

    def __init__(
        self,
        method: str = "GET",
        path: str = "/",
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        self.method = method.upper()
        self.path = path
        self.query = ParameterBag(query)
        self.headers = ParameterBag(headers)
        self.attributes = ParameterBag(attributes)

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.path}>"


__all__ = ["ParameterBag", "Request"]

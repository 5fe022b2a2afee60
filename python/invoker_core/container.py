"""Handler container: identifier to handler service lookup.

The dispatch decorators only need ``has(id)`` and ``get(id)``; any
object providing those works. HandlerContainer is the bundled
implementation.

Supports registering:
- Handler instances (returned as-is)
- Handler classes (instantiated once, on first get)
- Dotted class paths "package.module.ClassName" (imported, then
  instantiated once, on first get)

Example:
    >>> container = HandlerContainer()
    >>> container.register("app.create_user", CreateUserProcessor)
    >>> container.register("app.user_provider", "myapp.providers.UserProvider")
    >>> container.has("app.create_user")
    True
"""

from __future__ import annotations

import importlib
import re
import threading
from collections.abc import Mapping
from typing import Any, Protocol

from .logging import log_debug, log_info, log_warn

# module.path.ClassName: at least one dot, capitalized last component.
CLASS_PATH_PATTERN = re.compile(
    r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)*\.[A-Z][a-zA-Z0-9_]*$"
)


class HandlerLookup(Protocol):
    """Minimal container contract consumed by the dispatch decorators."""

    def has(self, handler_id: str) -> bool: ...

    def get(self, handler_id: str) -> Any: ...


class HandlerContainer:
    """Thread-safe registry of handler services keyed by identifier."""

    def __init__(self, handlers: Mapping[str, Any] | None = None) -> None:
        self._entries: dict[str, Any] = {}
        self._services: dict[str, Any] = {}
        self._lock = threading.RLock()
        for handler_id, handler in (handlers or {}).items():
            self.register(handler_id, handler)

    def register(self, handler_id: str, handler: Any) -> None:
        """Register a handler.

        Args:
            handler_id: Identifier referenced by Operation.processor/provider.
            handler: Handler instance, class, or dotted class path.

        Raises:
            ValueError: If handler is a string that is not a class path.
        """
        if isinstance(handler, str) and not CLASS_PATH_PATTERN.match(handler):
            raise ValueError(f"'{handler}' is not a module.path.ClassName class path")

        with self._lock:
            if handler_id in self._entries:
                log_warn(f"Overwriting existing handler: {handler_id}")
            self._entries[handler_id] = handler
            self._services.pop(handler_id, None)
        log_info(f"Registered handler: {handler_id} -> {_describe(handler)}")

    def unregister(self, handler_id: str) -> bool:
        """Unregister a handler.

        Returns:
            True if the handler was removed, False if not found.
        """
        with self._lock:
            if handler_id not in self._entries:
                return False
            del self._entries[handler_id]
            self._services.pop(handler_id, None)
        log_debug(f"Unregistered handler: {handler_id}")
        return True

    def has(self, handler_id: str) -> bool:
        return handler_id in self._entries

    def get(self, handler_id: str) -> Any:
        """Return the handler service for an identifier.

        Classes and class paths are instantiated on first access and
        the same instance is returned afterwards.

        Raises:
            KeyError: If nothing is registered under handler_id.
            ImportError: If a class path cannot be imported.
        """
        service = self._services.get(handler_id)
        if service is not None:
            return service

        with self._lock:
            if handler_id not in self._entries:
                raise KeyError(f"No handler registered for '{handler_id}'")
            if handler_id not in self._services:
                self._services[handler_id] = self._build(self._entries[handler_id])
            return self._services[handler_id]

    def registered_ids(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._services.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, handler_id: object) -> bool:
        return handler_id in self._entries

    def _build(self, entry: Any) -> Any:
        if isinstance(entry, str):
            entry = _import_class(entry)
        if isinstance(entry, type):
            return entry()
        return entry


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    handler_class = getattr(module, class_name, None)
    if not isinstance(handler_class, type):
        raise ImportError(f"'{class_path}' does not name a class")
    return handler_class


def _describe(handler: Any) -> str:
    if isinstance(handler, str):
        return handler
    if isinstance(handler, type):
        return handler.__name__
    return type(handler).__name__


__all__ = ["HandlerContainer", "HandlerLookup", "CLASS_PATH_PATTERN"]

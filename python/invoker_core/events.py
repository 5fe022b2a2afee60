"""In-process event bridge for dispatch observation.

This module provides the EventBridge class that wraps pyee's
EventEmitter so hosts can observe dispatch decisions and invocation
outcomes without touching the call path.

Example:
    >>> from invoker_core import EventBridge, EventNames
    >>>
    >>> bridge = EventBridge.instance()
    >>> bridge.start()
    >>>
    >>> def on_dispatch(handler_id, kind):
    ...     print(f"{handler_id} dispatched via {kind.value}")
    ...
    >>> bridge.subscribe(EventNames.HANDLER_DISPATCHED, on_dispatch)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pyee.base import EventEmitter

from .logging import log_debug, log_info


class EventNames:
    """Constants for event names used in the event bridge.

    Attributes:
        HANDLER_DISPATCHED: A decorator picked the dynamic or conventional path.
        INVOCATION_COMPLETED: An invokable handler returned a valid result.
        INVOCATION_FAILED: An invokable handler call raised.
    """

    HANDLER_DISPATCHED = "handler.dispatched"
    INVOCATION_COMPLETED = "invocation.completed"
    INVOCATION_FAILED = "invocation.failed"


class EventBridge:
    """In-process event bus for dispatch observation.

    Implemented as a singleton so decorators and bridges share one bus.
    Events are dropped silently while the bridge is inactive.

    Events:
        handler.dispatched: (handler_id, HandlerKind)
        invocation.completed: (handler, result)
        invocation.failed: (handler, Exception)
    """

    _instance: EventBridge | None = None

    def __init__(self) -> None:
        """Initialize the EventBridge.

        Prefer using EventBridge.instance() to get the singleton.
        """
        self._emitter = EventEmitter()
        self._active = False
        self._event_schema: dict[str, str] = {
            EventNames.HANDLER_DISPATCHED: "tuple[str, HandlerKind]",
            EventNames.INVOCATION_COMPLETED: "tuple[Callable, Any]",
            EventNames.INVOCATION_FAILED: "tuple[Callable, Exception]",
        }

    @classmethod
    def instance(cls) -> EventBridge:
        """Get the singleton EventBridge instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance.

        Stops the current instance if active before resetting.
        """
        if cls._instance is not None:
            cls._instance.stop()
        cls._instance = None

    def start(self) -> None:
        """Activate the event bridge (no-op if already active)."""
        if self._active:
            return
        self._active = True
        log_info("EventBridge started")

    def stop(self) -> None:
        """Deactivate the event bridge and remove all listeners."""
        if not self._active:
            return
        self._active = False
        self._emitter.remove_all_listeners()
        log_info("EventBridge stopped")

    def subscribe(self, event: str, handler: Callable[..., Any]) -> None:
        """Subscribe to an event.

        Args:
            event: Event name to subscribe to.
            handler: Callback invoked with the published arguments.
        """
        self._emitter.on(event, handler)
        log_debug(f"Subscribed to {event}: {getattr(handler, '__name__', handler)}")

    def unsubscribe(self, event: str, handler: Callable[..., Any]) -> None:
        """Unsubscribe from an event.

        Args:
            event: Event name to unsubscribe from.
            handler: The handler callback to remove.
        """
        self._emitter.remove_listener(event, handler)
        log_debug(f"Unsubscribed from {event}: {getattr(handler, '__name__', handler)}")

    def publish(self, event: str, *args: Any, **kwargs: Any) -> None:
        """Publish an event to all subscribers.

        Events are only delivered when the bridge is active.

        Args:
            event: Event name to publish.
            *args: Positional arguments passed to handlers.
            **kwargs: Keyword arguments passed to handlers.
        """
        if not self._active:
            return
        self._emitter.emit(event, *args, **kwargs)

    def listener_count(self, event: str) -> int:
        return len(self._emitter.listeners(event))

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def event_schema(self) -> dict[str, str]:
        """Get the event schema documentation."""
        return self._event_schema.copy()


__all__ = ["EventBridge", "EventNames"]

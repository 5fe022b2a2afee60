"""pytest configuration and fixtures for invoker_core tests.

This module provides shared fixtures for testing the binding engine,
including the EventBridge, a handler container, request carriers and
operations.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from invoker_core import EventBridge, HandlerContainer, Request


@pytest.fixture(scope="session")
def invoker_core_module():
    """Provide the invoker_core module as a fixture."""
    import invoker_core

    return invoker_core


@pytest.fixture(autouse=True)
def clear_descriptor_cache() -> Generator[None, None, None]:
    """Drop cached parameter descriptors around every test."""
    from invoker_core.binding import clear_descriptor_cache

    clear_descriptor_cache()
    yield
    clear_descriptor_cache()


@pytest.fixture
def event_bridge() -> Generator[EventBridge, None, None]:
    """Provide a fresh EventBridge for each test.

    The bridge is automatically started and cleaned up after the test.
    """
    from invoker_core import EventBridge

    EventBridge.reset_instance()
    bridge = EventBridge.instance()
    bridge.start()
    yield bridge
    bridge.stop()
    EventBridge.reset_instance()


@pytest.fixture
def container() -> Generator[HandlerContainer, None, None]:
    """Provide an empty HandlerContainer, cleared after the test."""
    from invoker_core import HandlerContainer

    handlers = HandlerContainer()
    yield handlers
    handlers.clear()


@pytest.fixture
def request_carrier() -> Request:
    """Provide a POST request carrier with no attributes."""
    from invoker_core import Request

    return Request("POST", "/companies/acme-corp/users")


# Markers for test categorization
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "end_to_end: full decorator to handler flows",
    )

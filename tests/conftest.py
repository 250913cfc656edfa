"""Pytest configuration and fixtures."""

import pytest

from topicbus.config import get_settings
from topicbus.domain.subscriptions import ErrorPolicy
from topicbus.infrastructure.messaging import AsyncEventBus, EventBus, reset_event_bus


@pytest.fixture
def event_bus():
    """Fresh fail-fast EventBus."""
    return EventBus()


@pytest.fixture
def isolating_bus():
    """Fresh EventBus that keeps notifying after a subscriber fails."""
    return EventBus(error_policy=ErrorPolicy.ISOLATE)


@pytest.fixture
def async_event_bus():
    """Fresh fail-fast AsyncEventBus."""
    return AsyncEventBus()


@pytest.fixture
def calls():
    """Shared call log: list of (handler_name, topic, args)."""
    return []


@pytest.fixture
def make_handler(calls):
    """Factory for subscribers that record into ``calls``."""

    def factory(name):
        def handler(topic, args):
            calls.append((name, topic, args))

        handler.__qualname__ = f"handler_{name}"
        return handler

    return factory


@pytest.fixture
def clean_settings(monkeypatch):
    """Drop cached settings and TOPICBUS_ env vars; reset the default bus."""
    for var in (
        "TOPICBUS_ENVIRONMENT",
        "TOPICBUS_DEBUG",
        "TOPICBUS_EVENT_BUS_ERROR_POLICY",
        "TOPICBUS_LOG_LEVEL",
        "TOPICBUS_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    monkeypatch.undo()
    get_settings.cache_clear()
    reset_event_bus()

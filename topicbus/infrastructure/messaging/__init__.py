"""Messaging infrastructure - topic Event Bus."""

from .async_event_bus import AsyncEventBus
from .event_bus import BaseEventBus, EventBus, get_event_bus, reset_event_bus

__all__ = ["AsyncEventBus", "BaseEventBus", "EventBus", "get_event_bus", "reset_event_bus"]

"""topicbus - in-process topic publish/subscribe.

Usage:
    from topicbus import EventBus

    bus = EventBus()
    token = bus.subscribe("/login", lambda topic, args: print(topic, args))
    bus.publish("/login", {"username": "test"})  # True
    bus.unsubscribe(token)
    bus.publish("/login", {"username": "test"})  # False
"""

__version__ = "1.0.0"

from .domain.shared import (  # noqa: E402
    EventBusError,
    InvalidCallback,
    InvalidPayload,
    InvalidTopic,
    SubscriberFailure,
)
from .domain.subscriptions import ErrorPolicy, Subscription, TypedTopic  # noqa: E402
from .infrastructure.messaging import (  # noqa: E402
    AsyncEventBus,
    EventBus,
    get_event_bus,
    reset_event_bus,
)

__all__ = [
    "__version__",
    # Buses
    "EventBus",
    "AsyncEventBus",
    "get_event_bus",
    "reset_event_bus",
    # Model
    "ErrorPolicy",
    "Subscription",
    "TypedTopic",
    # Exceptions
    "EventBusError",
    "InvalidTopic",
    "InvalidCallback",
    "InvalidPayload",
    "SubscriberFailure",
]

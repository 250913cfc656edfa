"""Domain Layer - subscription model with no infrastructure dependencies.

- shared: ValueObject base and the EventBusError hierarchy
- subscriptions: Subscription, TypedTopic, ErrorPolicy, SubscriptionRegistry
"""

from .shared import EventBusError
from .subscriptions import Subscription, SubscriptionRegistry, TypedTopic

__all__ = [
    "EventBusError",
    "Subscription",
    "SubscriptionRegistry",
    "TypedTopic",
]

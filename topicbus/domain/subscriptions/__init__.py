"""Subscriptions bounded context - topics, tokens and the registry."""

from .error_policy import ErrorPolicy
from .registry import SubscriptionRegistry
from .subscription import (
    SubscriberCallback,
    Subscription,
    TopicRef,
    TypedTopic,
    topic_name,
    validate_topic,
)

__all__ = [
    "ErrorPolicy",
    "SubscriptionRegistry",
    "SubscriberCallback",
    "Subscription",
    "TopicRef",
    "TypedTopic",
    "topic_name",
    "validate_topic",
]

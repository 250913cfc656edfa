"""Shared Kernel - base classes for the domain layer.

- ValueObject: Immutable object compared by value
- EventBusError: Base of all bus errors
"""

from .exceptions import (
    EventBusError,
    InvalidCallback,
    InvalidPayload,
    InvalidTopic,
    SubscriberFailure,
)
from .value_object import ValueObject

__all__ = [
    # Base classes
    "ValueObject",
    # Exceptions
    "EventBusError",
    "InvalidTopic",
    "InvalidCallback",
    "InvalidPayload",
    "SubscriberFailure",
]

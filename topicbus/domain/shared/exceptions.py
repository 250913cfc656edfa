"""Base event bus exceptions.

Each exception carries keyword context (topic, token, ...) that is appended
to its string form, so a log line or traceback says which subscription
was involved.
"""

from typing import Any


class EventBusError(Exception):
    """Base exception for all event bus errors.

    Example:
        >>> raise EventBusError("Cannot subscribe", topic="")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize event bus exception.

        Args:
            message: Human-readable error message.
            **context: Additional context (topic, token, etc).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context.

        Returns:
            Error message with context if available.
        """
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidTopic(EventBusError):
    """Exception raised when a topic name is empty or not a string.

    Example:
        >>> bus.subscribe("", handler)
        Traceback (most recent call last):
        InvalidTopic: Topic must be a non-empty string (topic='')
    """

    pass


class InvalidCallback(EventBusError):
    """Exception raised when a subscriber is not callable."""

    pass


class InvalidPayload(EventBusError):
    """Exception raised when a payload does not match its TypedTopic.

    Raised before any subscriber is invoked.
    """

    pass


class SubscriberFailure(EventBusError):
    """Exception raised when a subscriber callback raises during publish.

    Only raised under the ``propagate`` error policy. The original exception
    is available as ``__cause__``; ``topic`` and ``token`` identify the
    subscription that failed.

    Example:
        >>> try:
        ...     bus.publish("/login", {"username": "test"})
        ... except SubscriberFailure as exc:
        ...     log.error("login handler broke", token=exc.token, cause=exc.__cause__)
    """

    def __init__(self, message: str, *, topic: str, token: str, **context: Any) -> None:
        super().__init__(message, topic=topic, token=token, **context)
        self.topic = topic
        self.token = token

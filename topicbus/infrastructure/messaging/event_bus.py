"""Event Bus - topic-based publish/subscribe.

Event Bus decouples producers from consumers:
- Producers publish args on a named topic
- Consumers subscribe callbacks to topic names and keep a token
- Neither side holds a reference to the other
"""

import logging
import threading
from typing import Any, Iterable

from topicbus.config import get_settings
from topicbus.domain.shared import SubscriberFailure
from topicbus.domain.subscriptions import (
    ErrorPolicy,
    SubscriberCallback,
    Subscription,
    SubscriptionRegistry,
    TopicRef,
    TypedTopic,
    topic_name,
)

logger = logging.getLogger(__name__)


class BaseEventBus:
    """Subscription management shared by the sync and async buses."""

    def __init__(
        self,
        error_policy: ErrorPolicy | str = ErrorPolicy.PROPAGATE,
    ) -> None:
        """Initialize event bus.

        Args:
            error_policy: What publish does when a subscriber raises.
        """
        self.error_policy = ErrorPolicy(error_policy)
        self._registry = SubscriptionRegistry()
        logger.info(
            "event_bus.initialized",
            extra={"bus": type(self).__name__, "error_policy": str(self.error_policy)},
        )

    def subscribe(self, topic: TopicRef, callback: SubscriberCallback) -> str:
        """Subscribe callback to topic.

        Args:
            topic: Topic name (e.g. "/login") or TypedTopic.
            callback: Called as ``callback(topic, args)`` on every publish.

        Returns:
            Token identifying this subscription until unsubscribed.

        Raises:
            InvalidTopic: If topic is empty or not a string.
            InvalidCallback: If callback is not callable.

        Example:
            >>> def on_login(topic, args):
            ...     print(f"{args['username']} logged in")

            >>> token = event_bus.subscribe("/login", on_login)
        """
        subscription = self._registry.add(topic_name(topic), callback)
        logger.info(
            "event_bus.subscription_added",
            extra={
                "topic": subscription.topic,
                "token": subscription.token,
                "handler": subscription.callback_name,
            },
        )
        return subscription.token

    def unsubscribe(self, token: str) -> str:
        """Remove the subscription identified by token.

        Unknown or already removed tokens are a no-op.

        Args:
            token: Token returned by subscribe().

        Returns:
            The token, unchanged.
        """
        removed = self._registry.remove(token) if isinstance(token, str) else None
        if removed is None:
            logger.debug("event_bus.unknown_token", extra={"token": token})
            return token

        logger.info(
            "event_bus.subscription_removed",
            extra={
                "topic": removed.topic,
                "token": removed.token,
                "handler": removed.callback_name,
            },
        )
        return token

    def has_subscribers(self, topic: TopicRef) -> bool:
        return self.get_subscribers_count(topic) > 0

    def get_subscribers_count(self, topic: TopicRef) -> int:
        """Get number of subscribers for topic.

        Args:
            topic: Topic name or TypedTopic.

        Returns:
            Number of subscribed callbacks (0 for non-string names).
        """
        name = topic_name(topic)
        return self._registry.count(name) if isinstance(name, str) else 0

    def topics(self) -> list[str]:
        """Topics with at least one subscriber, in creation order."""
        return self._registry.topics()

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing).

        Tokens issued before the clear are never handed out again.
        """
        self._registry.clear()
        logger.info("event_bus.cleared", extra={"bus": type(self).__name__})

    def _prepare(self, topic: TopicRef, args: Any) -> tuple[Subscription, ...]:
        """Validate args and snapshot subscribers for one publish call."""
        name = topic_name(topic)
        if isinstance(topic, TypedTopic):
            topic.check(args)

        subscriptions = self._registry.snapshot(name) if isinstance(name, str) else ()
        if not subscriptions:
            logger.debug("event_bus.no_subscribers", extra={"topic": name})
            return ()

        logger.info(
            "event_bus.publishing",
            extra={"topic": name, "handlers_count": len(subscriptions)},
        )
        return subscriptions

    def _handle_failure(self, subscription: Subscription, error: Exception) -> None:
        """Apply the error policy to a subscriber that raised."""
        extra = {
            "topic": subscription.topic,
            "token": subscription.token,
            "handler": subscription.callback_name,
            "error": str(error),
            "error_policy": str(self.error_policy),
        }
        if self.error_policy is ErrorPolicy.PROPAGATE:
            logger.error("event_bus.handler_failed", extra=extra)
            raise SubscriberFailure(
                "Subscriber raised during publish",
                topic=subscription.topic,
                token=subscription.token,
                handler=subscription.callback_name,
            ) from error

        # Log error but continue with other handlers
        logger.error("event_bus.handler_failed", extra=extra, exc_info=error)


class EventBus(BaseEventBus):
    """Synchronous topic-based event bus.

    Callbacks run on the publishing thread, one after another, in the order
    they were subscribed. publish() returns once every callback returned.

    Example:
        >>> event_bus = EventBus()
        >>> token = event_bus.subscribe("/login", send_welcome)
        >>> event_bus.subscribe("/login", update_stats)

        >>> event_bus.publish("/login", {"username": "test"})
        True
        >>> # send_welcome("/login", {...}) then update_stats("/login", {...})

        >>> event_bus.unsubscribe(token)
        >>> event_bus.publish("/nonexistent", None)
        False
    """

    def publish(self, topic: TopicRef, args: Any = None) -> bool:
        """Publish args to every current subscriber of topic.

        Subscribers added or removed by a callback during this call take
        effect from the next publish.

        Args:
            topic: Topic name or TypedTopic.
            args: Payload passed to each callback.

        Returns:
            False if topic has no subscribers, True otherwise.

        Raises:
            InvalidPayload: If topic is a TypedTopic and args does not match.
            SubscriberFailure: If a callback raises and the error policy is
                ``propagate``. Remaining callbacks are not invoked.
        """
        subscriptions = self._prepare(topic, args)
        if not subscriptions:
            return False

        name = subscriptions[0].topic
        for subscription in subscriptions:
            try:
                subscription.callback(name, args)
                logger.debug(
                    "event_bus.handler_success",
                    extra={"topic": name, "handler": subscription.callback_name},
                )
            except Exception as e:
                self._handle_failure(subscription, e)
        return True

    def publish_all(self, events: Iterable[tuple[TopicRef, Any]]) -> int:
        """Publish multiple (topic, args) events in order.

        Args:
            events: Iterable of (topic, args) pairs.

        Returns:
            Number of events that reached at least one subscriber.
        """
        events = list(events)
        if not events:
            return 0

        logger.info("event_bus.publishing_batch", extra={"events_count": len(events)})
        return sum(1 for topic, args in events if self.publish(topic, args))


# Process-wide default bus (explicit EventBus() instances are preferred)
_event_bus_instance: EventBus | None = None
_event_bus_lock = threading.Lock()


def get_event_bus() -> EventBus:
    """Get the process-wide default event bus, creating it on first use.

    The error policy comes from ``Settings.event_bus_error_policy``.

    Returns:
        EventBus instance.
    """
    global _event_bus_instance
    with _event_bus_lock:
        if _event_bus_instance is None:
            _event_bus_instance = _new_default_bus()
        return _event_bus_instance


def reset_event_bus() -> EventBus:
    """Reset the default event bus (for testing).

    Creates a new instance, dropping all subscribers.

    Returns:
        The new EventBus instance.
    """
    global _event_bus_instance
    with _event_bus_lock:
        _event_bus_instance = _new_default_bus()
    logger.info("event_bus.reset")
    return _event_bus_instance


def _new_default_bus() -> EventBus:
    return EventBus(error_policy=get_settings().event_bus_error_policy)

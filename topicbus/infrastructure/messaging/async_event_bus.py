"""Async Event Bus - awaitable publish with the same ordering guarantees."""

import inspect
import logging
from typing import Any, Iterable

from topicbus.domain.subscriptions import TopicRef

from .event_bus import BaseEventBus

logger = logging.getLogger(__name__)


class AsyncEventBus(BaseEventBus):
    """Event bus whose publish awaits coroutine subscribers.

    Subscribers may be plain functions or ``async def`` functions. Each one
    is awaited before the next starts, so subscribe order is preserved and
    publish() returns only after every subscriber completed.

    Example:
        >>> event_bus = AsyncEventBus()
        >>> async def send_notification(topic, args):
        ...     await telegram.send(f"{args['username']} logged in")

        >>> event_bus.subscribe("/login", send_notification)
        >>> await event_bus.publish("/login", {"username": "test"})
        True
    """

    async def publish(self, topic: TopicRef, args: Any = None) -> bool:
        """Publish args to every current subscriber of topic.

        Args:
            topic: Topic name or TypedTopic.
            args: Payload passed to each callback.

        Returns:
            False if topic has no subscribers, True otherwise.

        Raises:
            InvalidPayload: If topic is a TypedTopic and args does not match.
            SubscriberFailure: If a callback raises and the error policy is
                ``propagate``.
        """
        subscriptions = self._prepare(topic, args)
        if not subscriptions:
            return False

        name = subscriptions[0].topic
        for subscription in subscriptions:
            try:
                result = subscription.callback(name, args)
                if inspect.isawaitable(result):
                    await result
                logger.debug(
                    "event_bus.handler_success",
                    extra={"topic": name, "handler": subscription.callback_name},
                )
            except Exception as e:
                self._handle_failure(subscription, e)
        return True

    async def publish_all(self, events: Iterable[tuple[TopicRef, Any]]) -> int:
        """Publish multiple (topic, args) events in order.

        Returns:
            Number of events that reached at least one subscriber.
        """
        events = list(events)
        if not events:
            return 0

        logger.info("event_bus.publishing_batch", extra={"events_count": len(events)})
        delivered = 0
        for topic, args in events:
            if await self.publish(topic, args):
                delivered += 1
        return delivered

"""SubscriptionRegistry - topic -> ordered subscriptions store.

Shared by EventBus and AsyncEventBus. Owns the token counter, so tokens are
unique for the lifetime of a registry and never reused after unsubscribe.
"""

import itertools
import threading

from topicbus.domain.shared import InvalidCallback

from .subscription import SubscriberCallback, Subscription, validate_topic


class SubscriptionRegistry:
    """Thread-safe registry of subscriptions grouped by topic.

    Invariants:
    - every token maps to at most one Subscription
    - each Subscription is stored in exactly one topic list
    - topic lists keep subscribe order

    All mutations and snapshots hold one re-entrant lock; callers run
    callbacks on the snapshot, outside the lock.
    """

    def __init__(self) -> None:
        self._topics: dict[str, list[Subscription]] = {}
        self._token_topics: dict[str, str] = {}
        self._counter = itertools.count()
        self._lock = threading.RLock()

    def add(self, topic: str, callback: SubscriberCallback) -> Subscription:
        """Register callback on topic under a fresh token.

        Raises:
            InvalidTopic: If topic is not a non-empty string.
            InvalidCallback: If callback is not callable.
        """
        name = validate_topic(topic)
        if not callable(callback):
            raise InvalidCallback(
                "Subscriber must be callable",
                topic=name,
                callback=type(callback).__name__,
            )

        with self._lock:
            subscription = Subscription(
                token=str(next(self._counter)),
                topic=name,
                callback=callback,
            )
            self._topics.setdefault(name, []).append(subscription)
            self._token_topics[subscription.token] = name
        return subscription

    def remove(self, token: str) -> Subscription | None:
        """Remove the subscription with this token.

        Returns:
            The removed Subscription, or None if token is unknown.
        """
        with self._lock:
            name = self._token_topics.pop(token, None)
            if name is None:
                return None
            subscriptions = self._topics[name]
            for index, subscription in enumerate(subscriptions):
                if subscription.token == token:
                    return subscriptions.pop(index)
        return None

    def snapshot(self, topic: str) -> tuple[Subscription, ...]:
        """Current subscribers of topic, in subscribe order."""
        with self._lock:
            return tuple(self._topics.get(topic, ()))

    def count(self, topic: str) -> int:
        with self._lock:
            return len(self._topics.get(topic, ()))

    def topics(self) -> list[str]:
        """Topics with at least one subscriber, in creation order."""
        with self._lock:
            return [name for name, subs in self._topics.items() if subs]

    def clear(self) -> None:
        """Drop all subscriptions. Issued tokens stay retired."""
        with self._lock:
            self._topics.clear()
            self._token_topics.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._token_topics)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._token_topics

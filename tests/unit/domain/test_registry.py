"""Tests for SubscriptionRegistry."""

import threading

import pytest

from topicbus.domain.shared import InvalidCallback
from topicbus.domain.subscriptions import SubscriptionRegistry


def handler(topic, args):
    pass


@pytest.fixture
def registry():
    return SubscriptionRegistry()


class TestSubscriptionRegistry:
    def test_add_assigns_monotonic_tokens(self, registry):
        tokens = [registry.add("/t", handler).token for _ in range(3)]

        assert tokens == ["0", "1", "2"]

    def test_snapshot_keeps_order_and_is_detached(self, registry):
        # Arrange
        first = registry.add("/t", handler)
        second = registry.add("/t", handler)

        # Act
        snapshot = registry.snapshot("/t")
        registry.add("/t", handler)

        # Assert
        assert snapshot == (first, second)
        assert registry.count("/t") == 3

    def test_remove_returns_subscription_once(self, registry):
        # Arrange
        subscription = registry.add("/t", handler)

        # Act / Assert
        assert registry.remove(subscription.token) == subscription
        assert registry.remove(subscription.token) is None
        assert subscription.token not in registry
        assert len(registry) == 0

    def test_each_token_lives_in_one_topic(self, registry):
        # Arrange
        a = registry.add("/a", handler)
        b = registry.add("/b", handler)

        # Act
        registry.remove(a.token)

        # Assert
        assert registry.snapshot("/a") == ()
        assert registry.snapshot("/b") == (b,)
        assert registry.topics() == ["/b"]

    def test_rejects_non_callable(self, registry):
        with pytest.raises(InvalidCallback):
            registry.add("/t", 123)

    def test_concurrent_adds_yield_unique_tokens(self, registry):
        # Arrange
        tokens = []
        lock = threading.Lock()

        def worker():
            for _ in range(200):
                token = registry.add("/t", handler).token
                with lock:
                    tokens.append(token)

        threads = [threading.Thread(target=worker) for _ in range(4)]

        # Act
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Assert
        assert len(tokens) == 800
        assert len(set(tokens)) == 800
        assert registry.count("/t") == 800

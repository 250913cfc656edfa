"""Tests for Subscription, TypedTopic and topic validation."""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from topicbus.domain.shared import EventBusError, InvalidPayload, InvalidTopic
from topicbus.domain.subscriptions import (
    Subscription,
    TypedTopic,
    topic_name,
    validate_topic,
)


@dataclass
class Login:
    username: str


def on_login(topic, args):
    pass


class TestTypedTopic:
    def test_check_returns_matching_payload(self):
        login = TypedTopic("/login", Login)
        payload = Login(username="test")

        assert login.check(payload) is payload

    def test_check_rejects_other_type(self):
        login = TypedTopic("/login", Login)

        with pytest.raises(InvalidPayload) as exc_info:
            login.check({"username": "test"})

        assert exc_info.value.context == {
            "topic": "/login",
            "expected": "Login",
            "actual": "dict",
        }

    def test_empty_name_rejected(self):
        with pytest.raises(InvalidTopic):
            TypedTopic("", Login)

    def test_equal_by_value(self):
        assert TypedTopic("/login", Login) == TypedTopic("/login", Login)
        assert str(TypedTopic("/login", Login)) == "/login"


class TestSubscription:
    def test_is_immutable(self):
        subscription = Subscription(token="0", topic="/login", callback=on_login)

        with pytest.raises(FrozenInstanceError):
            subscription.token = "1"

    def test_callback_name(self):
        subscription = Subscription(token="0", topic="/login", callback=on_login)

        assert subscription.callback_name == "on_login"


class TestTopicValidation:
    @pytest.mark.parametrize("topic", ["", None, 42])
    def test_invalid_topics(self, topic):
        with pytest.raises(InvalidTopic):
            validate_topic(topic)

    def test_typed_topic_name(self):
        assert validate_topic(TypedTopic("/login", Login)) == "/login"
        assert topic_name(TypedTopic("/login", Login)) == "/login"
        assert topic_name("/logout") == "/logout"

    def test_error_message_includes_context(self):
        error = EventBusError("Cannot subscribe", topic="")

        assert str(error) == "Cannot subscribe (topic='')"
        assert str(EventBusError("plain")) == "plain"

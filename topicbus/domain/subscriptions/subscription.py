"""Subscription and TypedTopic value objects."""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from topicbus.domain.shared import InvalidPayload, InvalidTopic, ValueObject

P = TypeVar("P")

# Subscriber signature: receives the topic name and the published args.
# AsyncEventBus also accepts callbacks returning an awaitable.
SubscriberCallback = Callable[[str, Any], Any]


@dataclass(frozen=True)
class TypedTopic(ValueObject, Generic[P]):
    """Topic name bound to the payload type published on it.

    Accepted anywhere a plain topic name is. Publishing through a TypedTopic
    checks the payload type before any subscriber runs; subscribing through
    it is the same as subscribing to ``name``.

    Example:
        >>> @dataclass
        ... class Login:
        ...     username: str

        >>> LOGIN = TypedTopic("/login", Login)
        >>> bus.subscribe(LOGIN, on_login)
        >>> bus.publish(LOGIN, Login(username="test"))
        True
        >>> bus.publish(LOGIN, {"username": "test"})  # InvalidPayload!
    """

    name: str
    payload_type: type[P]

    def __post_init__(self) -> None:
        validate_topic(self.name)

    def check(self, payload: Any) -> P:
        """Return payload unchanged if it matches ``payload_type``.

        Raises:
            InvalidPayload: If payload is not an instance of payload_type.
        """
        if not isinstance(payload, self.payload_type):
            raise InvalidPayload(
                "Payload does not match topic payload type",
                topic=self.name,
                expected=self.payload_type.__name__,
                actual=type(payload).__name__,
            )
        return payload

    def __str__(self) -> str:
        return self.name


TopicRef = Union[str, TypedTopic[Any]]


@dataclass(frozen=True)
class Subscription(ValueObject):
    """Binding of one callback to one topic, identified by a token.

    The token is the only handle the subscriber keeps; the bus owns the
    callback reference until the token is unsubscribed.
    """

    token: str
    topic: str
    callback: SubscriberCallback

    @property
    def callback_name(self) -> str:
        """Readable callback name for logs."""
        return getattr(self.callback, "__qualname__", None) or repr(self.callback)


def validate_topic(topic: Any) -> str:
    """Return the topic name, raising InvalidTopic if it is unusable.

    Args:
        topic: Topic name or TypedTopic.

    Raises:
        InvalidTopic: If the name is not a non-empty string.
    """
    name = topic.name if isinstance(topic, TypedTopic) else topic
    if not isinstance(name, str) or not name:
        raise InvalidTopic("Topic must be a non-empty string", topic=name)
    return name


def topic_name(topic: TopicRef) -> str:
    """Return the plain topic name for a topic reference (no validation)."""
    return topic.name if isinstance(topic, TypedTopic) else topic

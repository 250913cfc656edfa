"""Base ValueObject class for the bus domain model.

ValueObject - an immutable object compared by the values of its attributes,
not by identity.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True, eq=True)
class ValueObject(ABC):
    """Base class for all domain value objects.

    ValueObject characteristics:
    - **Immutable**: cannot be changed after creation (frozen=True)
    - **Equality by value**: compared by attribute values
    - **Replaceable**: to change one, create a new one

    Example:
        >>> @dataclass(frozen=True)
        ... class TopicName(ValueObject):
        ...     value: str
        ...
        ...     def __post_init__(self):
        ...         if not self.value:
        ...             raise InvalidTopic("Topic must be a non-empty string")
    """

    def __post_init__(self) -> None:
        """Hook for validation after initialization.

        Override this method to add validation rules.
        """
        pass

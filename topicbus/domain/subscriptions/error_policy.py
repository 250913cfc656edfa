"""Error Policy - what publish does when a subscriber raises."""

from enum import Enum


class ErrorPolicy(str, Enum):
    """Subscriber failure policy.

    - PROPAGATE: Stop at the first failing subscriber and raise
      SubscriberFailure (remaining subscribers are not notified)
    - ISOLATE: Log the failure and keep notifying remaining subscribers
    """

    PROPAGATE = "propagate"
    ISOLATE = "isolate"

    def __str__(self) -> str:
        return self.value

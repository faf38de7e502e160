"""
Notifier protocol for publishing donation events.

Anything with notify() and close() is a valid Notifier. The Kafka
implementation lives in donations.notifiers.kafka; tests pass a
MagicMock(spec=Notifier) or a simple recording class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from donations.types import DonationEvent


@runtime_checkable
class Notifier(Protocol):
    """
    Protocol for donation event publishers.

    Example:
        class RecordingNotifier:
            def __init__(self):
                self.events = []

            def notify(self, event, timeout):
                self.events.append(event)

            def close(self):
                pass
    """

    def notify(self, event: DonationEvent, timeout: float) -> None:
        """
        Publish an event and wait for the broker to acknowledge it.

        Args:
            event: The event to publish
            timeout: Seconds to wait before giving up

        Raises:
            NotificationTimeoutError: No acknowledgement within timeout
            NotificationError: Any other publish failure
        """
        ...

    def close(self) -> None:
        """Flush and release broker connections."""
        ...

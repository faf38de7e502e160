"""
Donation event publishers.

get_notifier() returns the process-wide notifier built from settings, or
None when no broker is configured. The notifier is created on first use and
reused by every request afterwards.

Usage:
    from donations.notifiers import get_notifier

    notifier = get_notifier()
    if notifier is not None:
        notifier.notify(event, timeout=settings.DONATION_PUBLISH_TIMEOUT_SECONDS)
"""

from __future__ import annotations

import atexit
import threading

from django.conf import settings

from donations.notifiers.base import Notifier
from donations.notifiers.kafka import KafkaNotifier

__all__ = [
    "KafkaNotifier",
    "Notifier",
    "close_notifier",
    "get_notifier",
]

_notifier: Notifier | None = None
_lock = threading.Lock()


def get_notifier() -> Notifier | None:
    """
    Return the shared notifier, creating it on first call.

    Returns:
        The notifier, or None if KAFKA_BOOTSTRAP_SERVERS is empty

    Raises:
        NotificationError: The producer could not be created. The next
            call tries again.
    """
    global _notifier

    if not settings.KAFKA_BOOTSTRAP_SERVERS:
        return None

    with _lock:
        if _notifier is None:
            _notifier = KafkaNotifier.from_config(
                bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
                topic=settings.CUSTOMERS_TOPIC,
                username=settings.KAFKA_USERNAME,
                password=settings.KAFKA_PASSWORD,
                sasl_mechanism=settings.KAFKA_SASL_MECHANISM,
                publish_timeout=settings.DONATION_PUBLISH_TIMEOUT_SECONDS,
            )
            atexit.register(close_notifier)
        return _notifier


def close_notifier() -> None:
    """Close and forget the shared notifier."""
    global _notifier

    with _lock:
        if _notifier is not None:
            _notifier.close()
            _notifier = None

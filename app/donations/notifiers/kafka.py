"""
Kafka publisher for donation events.

Each DonationEvent is written as one record:
- topic: CUSTOMERS_TOPIC
- key: the Stripe customer ID (so a customer's donations share a partition)
- value: the event as UTF-8 JSON

The producer sends immediately (no batching delay) and notify() blocks on
the send future for at most the publish timeout.

Configuration (via settings):
- KAFKA_BOOTSTRAP_SERVERS: Broker list
- CUSTOMERS_TOPIC: Destination topic
- KAFKA_USERNAME / KAFKA_PASSWORD: SASL credentials (optional)
- KAFKA_SASL_MECHANISM: SASL mechanism when credentials are set
- DONATION_PUBLISH_TIMEOUT_SECONDS: Publish deadline
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kafka import KafkaProducer
from kafka.errors import KafkaError, KafkaTimeoutError

from donations.exceptions import NotificationError, NotificationTimeoutError

if TYPE_CHECKING:
    from donations.types import DonationEvent


logger = logging.getLogger(__name__)


def build_producer_config(
    bootstrap_servers: list[str],
    username: str = "",
    password: str = "",
    sasl_mechanism: str = "SCRAM-SHA-256",
    max_block_seconds: float = 0.5,
) -> dict[str, Any]:
    """
    Build KafkaProducer keyword arguments.

    Without credentials the connection is plaintext. With credentials it is
    SASL over TLS, which is what hosted brokers expect.

    Args:
        bootstrap_servers: host:port strings
        username: SASL username
        password: SASL password
        sasl_mechanism: SCRAM-SHA-256, SCRAM-SHA-512 or PLAIN
        max_block_seconds: Upper bound for send() blocking on metadata

    Returns:
        Dict suitable for KafkaProducer(**config)
    """
    config: dict[str, Any] = {
        "bootstrap_servers": bootstrap_servers,
        "client_id": "donation-server",
        "acks": 1,
        "linger_ms": 0,
        "retries": 0,
        "max_block_ms": int(max_block_seconds * 1000),
        # Broker version probe runs in the constructor; keep it inside the deadline
        "api_version_auto_timeout_ms": int(max_block_seconds * 1000),
    }

    if username or password:
        config.update(
            security_protocol="SASL_SSL",
            sasl_mechanism=sasl_mechanism,
            sasl_plain_username=username,
            sasl_plain_password=password,
        )

    return config


class KafkaNotifier:
    """
    Publishes DonationEvents to a Kafka topic.

    The wrapped KafkaProducer is thread-safe, so one instance is shared by
    all request threads.

    Usage:
        notifier = KafkaNotifier.from_config(["broker:9092"], topic="customers")
        notifier.notify(event, timeout=0.5)
        notifier.close()
    """

    def __init__(self, producer: KafkaProducer, topic: str):
        self._producer = producer
        self.topic = topic

    @classmethod
    def from_config(
        cls,
        bootstrap_servers: list[str],
        topic: str,
        username: str = "",
        password: str = "",
        sasl_mechanism: str = "SCRAM-SHA-256",
        publish_timeout: float = 0.5,
    ) -> KafkaNotifier:
        """
        Connect a producer and wrap it.

        Raises:
            NotificationError: The producer could not be created
                (no reachable broker, bad credentials)
        """
        logger.info(
            "Creating Kafka producer",
            extra={
                "bootstrap_servers": bootstrap_servers,
                "topic": topic,
                "sasl": bool(username or password),
            },
        )

        config = build_producer_config(
            bootstrap_servers,
            username=username,
            password=password,
            sasl_mechanism=sasl_mechanism,
            max_block_seconds=publish_timeout,
        )

        try:
            producer = KafkaProducer(**config)
        except KafkaError as e:
            logger.error(
                f"Failed to create Kafka producer: {type(e).__name__}",
                extra={"bootstrap_servers": bootstrap_servers},
                exc_info=True,
            )
            raise NotificationError(
                "Could not connect to the donation broker.",
                details={"error": str(e)},
            ) from e

        return cls(producer, topic)

    def notify(self, event: DonationEvent, timeout: float) -> None:
        """
        Publish one event and wait for the broker acknowledgement.

        Args:
            event: The event to publish
            timeout: Seconds to wait for the acknowledgement

        Raises:
            NotificationTimeoutError: No acknowledgement within timeout
            NotificationError: The broker rejected the record
        """
        log_context = {
            "topic": self.topic,
            "customer_id": event.customer_id,
            "timeout": timeout,
        }

        try:
            future = self._producer.send(
                self.topic,
                key=event.customer_id.encode("utf-8"),
                value=event.to_json(),
            )
            metadata = future.get(timeout=timeout)
        except KafkaTimeoutError as e:
            logger.error("Timed out publishing donation event", extra=log_context)
            raise NotificationTimeoutError(
                f"Could not produce to {self.topic} within {timeout}s.",
                details={"error": str(e)},
            ) from e
        except KafkaError as e:
            logger.error(
                f"Failed to publish donation event: {type(e).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise NotificationError(
                f"Could not produce to {self.topic}.",
                details={"error": str(e)},
            ) from e

        logger.info(
            "Donation event published",
            extra={
                **log_context,
                "partition": metadata.partition,
                "offset": metadata.offset,
            },
        )

    def close(self) -> None:
        self._producer.close()

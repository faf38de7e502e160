"""
Tests for the Kafka notifier.

Tests cover:
- Producer configuration (plaintext and SASL)
- Publishing: record key/value, acknowledgement wait
- Error translation for timeouts and broker errors
- The shared notifier built from settings
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from django.test import override_settings
from kafka.errors import KafkaError, KafkaTimeoutError, NoBrokersAvailable

import donations.notifiers as notifiers
from donations.exceptions import NotificationError, NotificationTimeoutError
from donations.notifiers import KafkaNotifier, Notifier, close_notifier, get_notifier
from donations.notifiers.kafka import build_producer_config
from donations.types import DonationEvent


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def event():
    return DonationEvent(
        customer_id="cus_test123",
        customer_name="Ana Horvat",
        customer_email="ana@example.com",
        amount=25.0,
        currency="eur",
    )


@pytest.fixture
def producer():
    """KafkaProducer double whose send() future resolves immediately."""
    producer = MagicMock()
    producer.send.return_value.get.return_value = MagicMock(partition=0, offset=42)
    return producer


@pytest.fixture
def reset_shared_notifier():
    """Forget the process-wide notifier before and after each test."""
    notifiers._notifier = None
    with patch("donations.notifiers.atexit"):
        yield
    notifiers._notifier = None


# =============================================================================
# Producer Configuration Tests
# =============================================================================


class TestBuildProducerConfig:
    """Tests for build_producer_config."""

    def test_plaintext_without_credentials(self):
        config = build_producer_config(["localhost:9092"])

        assert config["bootstrap_servers"] == ["localhost:9092"]
        assert config["linger_ms"] == 0
        assert config["retries"] == 0
        assert config["max_block_ms"] == 500
        assert "security_protocol" not in config
        assert "sasl_mechanism" not in config

    def test_sasl_with_credentials(self):
        """Credentials switch the connection to SASL over TLS."""
        config = build_producer_config(
            ["broker.example.com:9093"],
            username="donations",
            password="s3cret",
            sasl_mechanism="SCRAM-SHA-512",
        )

        assert config["security_protocol"] == "SASL_SSL"
        assert config["sasl_mechanism"] == "SCRAM-SHA-512"
        assert config["sasl_plain_username"] == "donations"
        assert config["sasl_plain_password"] == "s3cret"

    def test_max_block_follows_publish_timeout(self):
        config = build_producer_config(["localhost:9092"], max_block_seconds=2)

        assert config["max_block_ms"] == 2000

    def test_version_probe_bounded_by_publish_timeout(self):
        """An unreachable broker must not hold a request past the deadline."""
        config = build_producer_config(["localhost:9092"], max_block_seconds=0.5)

        assert config["api_version_auto_timeout_ms"] == 500


# =============================================================================
# KafkaNotifier Tests
# =============================================================================


class TestKafkaNotifierFromConfig:
    """Tests for KafkaNotifier.from_config."""

    def test_creates_producer(self):
        with patch("donations.notifiers.kafka.KafkaProducer") as mock_producer:
            notifier = KafkaNotifier.from_config(
                ["localhost:9092"],
                topic="customers",
                publish_timeout=0.5,
            )

        assert notifier.topic == "customers"
        kwargs = mock_producer.call_args.kwargs
        assert kwargs["bootstrap_servers"] == ["localhost:9092"]
        assert kwargs["max_block_ms"] == 500
        assert kwargs["api_version_auto_timeout_ms"] == 500

    def test_no_brokers_raises_notification_error(self):
        with patch(
            "donations.notifiers.kafka.KafkaProducer",
            side_effect=NoBrokersAvailable(),
        ):
            with pytest.raises(NotificationError):
                KafkaNotifier.from_config(["localhost:9092"], topic="customers")

    def test_satisfies_notifier_protocol(self, producer):
        assert isinstance(KafkaNotifier(producer, "customers"), Notifier)


class TestKafkaNotifierNotify:
    """Tests for KafkaNotifier.notify."""

    def test_sends_keyed_json_record(self, producer, event):
        """Key is the customer ID; value is the camelCase JSON event."""
        notifier = KafkaNotifier(producer, "customers")

        notifier.notify(event, timeout=0.5)

        producer.send.assert_called_once()
        args, kwargs = producer.send.call_args
        assert args == ("customers",)
        assert kwargs["key"] == b"cus_test123"
        assert json.loads(kwargs["value"]) == {
            "customerID": "cus_test123",
            "customerName": "Ana Horvat",
            "customerEmail": "ana@example.com",
            "amount": 25.0,
            "currency": "eur",
        }

    def test_waits_for_acknowledgement_with_timeout(self, producer, event):
        KafkaNotifier(producer, "customers").notify(event, timeout=0.25)

        producer.send.return_value.get.assert_called_once_with(timeout=0.25)

    def test_timeout_raises_notification_timeout_error(self, producer, event):
        producer.send.return_value.get.side_effect = KafkaTimeoutError()

        with pytest.raises(NotificationTimeoutError) as exc_info:
            KafkaNotifier(producer, "customers").notify(event, timeout=0.5)

        assert exc_info.value.status_code == 500
        assert "customers" in exc_info.value.message

    def test_metadata_timeout_on_send_raises_timeout_error(self, producer, event):
        """send() itself blocks on metadata and may time out first."""
        producer.send.side_effect = KafkaTimeoutError()

        with pytest.raises(NotificationTimeoutError):
            KafkaNotifier(producer, "customers").notify(event, timeout=0.5)

    def test_broker_error_raises_notification_error(self, producer, event):
        producer.send.return_value.get.side_effect = KafkaError("broker down")

        with pytest.raises(NotificationError) as exc_info:
            KafkaNotifier(producer, "customers").notify(event, timeout=0.5)

        assert not isinstance(exc_info.value, NotificationTimeoutError)

    def test_close_closes_producer(self, producer):
        KafkaNotifier(producer, "customers").close()

        producer.close.assert_called_once()


# =============================================================================
# Shared Notifier Tests
# =============================================================================


@pytest.mark.usefixtures("reset_shared_notifier")
class TestGetNotifier:
    """Tests for get_notifier and close_notifier."""

    @override_settings(KAFKA_BOOTSTRAP_SERVERS=[])
    def test_no_servers_returns_none(self):
        with patch("donations.notifiers.KafkaNotifier") as mock_notifier:
            assert get_notifier() is None

        mock_notifier.from_config.assert_not_called()

    @override_settings(
        KAFKA_BOOTSTRAP_SERVERS=["localhost:9092"],
        CUSTOMERS_TOPIC="donations",
        KAFKA_USERNAME="user",
        KAFKA_PASSWORD="pass",
        KAFKA_SASL_MECHANISM="SCRAM-SHA-256",
        DONATION_PUBLISH_TIMEOUT_SECONDS=0.5,
    )
    def test_created_once_from_settings(self):
        with patch("donations.notifiers.KafkaNotifier") as mock_notifier:
            first = get_notifier()
            second = get_notifier()

        assert first is second
        mock_notifier.from_config.assert_called_once_with(
            bootstrap_servers=["localhost:9092"],
            topic="donations",
            username="user",
            password="pass",
            sasl_mechanism="SCRAM-SHA-256",
            publish_timeout=0.5,
        )

    @override_settings(KAFKA_BOOTSTRAP_SERVERS=["localhost:9092"])
    def test_failed_creation_is_retried(self):
        """A failed connect does not poison later requests."""
        with patch("donations.notifiers.KafkaNotifier") as mock_notifier:
            mock_notifier.from_config.side_effect = [
                NotificationError("Could not connect to the donation broker."),
                MagicMock(),
            ]

            with pytest.raises(NotificationError):
                get_notifier()

            assert get_notifier() is not None

        assert mock_notifier.from_config.call_count == 2

    @override_settings(KAFKA_BOOTSTRAP_SERVERS=["localhost:9092"])
    def test_close_notifier_closes_and_forgets(self):
        with patch("donations.notifiers.KafkaNotifier") as mock_notifier:
            notifier = get_notifier()
            close_notifier()

            notifier.close.assert_called_once()
            assert notifiers._notifier is None

            get_notifier()

        assert mock_notifier.from_config.call_count == 2

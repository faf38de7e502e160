"""
Pytest fixtures shared by the donations test packages.

Sections:
    - Mock Stripe Objects
    - Mock Stripe Error Fixtures
    - Mock Stripe Client Fixtures
    - Notifier Fixtures
"""

from dataclasses import dataclass
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import stripe

from donations.notifiers import Notifier


# =============================================================================
# Mock Stripe Objects
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object with to_dict support."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@dataclass
class MockStripeList:
    """Mock Stripe list response with data attribute."""

    items: list[MockStripeObject]
    has_more: bool = False

    @property
    def data(self) -> list[MockStripeObject]:
        return self.items


@pytest.fixture
def mock_payment_intent():
    """Create a mock PaymentIntent response."""

    def _create(
        id: str = "pi_test123456",
        status: str = "requires_payment_method",
        amount: int = 2500,
        currency: str = "eur",
        client_secret: str = "pi_test123456_secret_abc123",
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "payment_intent",
                "status": status,
                "amount": amount,
                "currency": currency,
                "client_secret": client_secret,
            }
        )

    return _create


@pytest.fixture
def mock_customer():
    """Create a mock Customer response."""

    def _create(
        id: str = "cus_test123",
        email: str | None = "ana@example.com",
        name: str | None = "Ana Horvat",
        deleted: bool | None = None,
    ) -> MockStripeObject:
        data = {
            "id": id,
            "object": "customer",
            "email": email,
            "name": name,
        }
        if deleted is not None:
            data["deleted"] = deleted
        return MockStripeObject(data)

    return _create


@pytest.fixture
def mock_customer_list(mock_customer):
    """Create a mock Customer list response."""

    def _create(*customers: MockStripeObject) -> MockStripeList:
        return MockStripeList(items=list(customers))

    return _create


# =============================================================================
# Mock Stripe Error Fixtures
# =============================================================================


@pytest.fixture
def card_error():
    """Create a Stripe CardError."""
    error = stripe.error.CardError(
        message="Your card was declined.",
        param=None,
        code="card_declined",
    )
    error.decline_code = "generic_decline"
    return error


@pytest.fixture
def invalid_request_error():
    """Create a Stripe InvalidRequestError."""

    def _create(
        message: str = "No such customer: 'cus_missing'",
        param: str | None = "id",
        code: str = "resource_missing",
    ) -> stripe.error.InvalidRequestError:
        return stripe.error.InvalidRequestError(
            message=message,
            param=param,
            code=code,
        )

    return _create


@pytest.fixture
def rate_limit_error():
    return stripe.error.RateLimitError(
        message="Too many requests hit the API too quickly.",
    )


@pytest.fixture
def api_connection_error():
    return stripe.error.APIConnectionError(
        message="Could not connect to Stripe.",
    )


@pytest.fixture
def api_error():
    return stripe.error.APIError(
        message="Something went wrong on Stripe's end.",
    )


@pytest.fixture
def authentication_error():
    return stripe.error.AuthenticationError(
        message="Invalid API Key provided.",
    )


@pytest.fixture
def signature_verification_error():
    return stripe.error.SignatureVerificationError(
        message="Unable to verify webhook signature.",
        sig_header="bad_signature",
    )


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def mock_stripe_http_client():
    """Mock stripe.http_client.RequestsClient."""
    with patch("stripe.http_client.RequestsClient") as mock:
        yield mock


@pytest.fixture
def mock_stripe_payment_intent(mock_payment_intent, mock_stripe_http_client):
    """Mock stripe.PaymentIntent API."""
    with patch("stripe.PaymentIntent") as mock:
        mock.create.return_value = mock_payment_intent()
        yield mock


@pytest.fixture
def mock_stripe_customer(mock_customer, mock_stripe_http_client):
    """Mock stripe.Customer API."""
    with patch("stripe.Customer") as mock:
        mock.retrieve.return_value = mock_customer()
        mock.list.return_value = MockStripeList(items=[])
        mock.create.return_value = mock_customer(id="cus_created123")
        yield mock


@pytest.fixture
def mock_stripe_webhook():
    """Mock stripe.Webhook API."""
    with patch("stripe.Webhook") as mock:
        mock.construct_event.return_value = MockStripeObject(
            {
                "id": "evt_test123",
                "type": "charge.succeeded",
                "data": {"object": {"id": "ch_test123", "object": "charge"}},
            }
        )
        yield mock


# =============================================================================
# Notifier Fixtures
# =============================================================================


@pytest.fixture
def notifier():
    """A notifier double that records every call."""
    return MagicMock(spec=Notifier)

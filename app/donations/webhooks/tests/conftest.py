"""
Pytest fixtures for webhook tests.

Provides mock Stripe event payloads for the two donation event types and
patches for the customer resolver's Stripe calls and the shared notifier.
"""

from unittest.mock import patch

import pytest

from donations.adapters import CustomerResult


# =============================================================================
# Event Payload Fixtures
# =============================================================================


@pytest.fixture
def checkout_session_completed_event():
    """Create a checkout.session.completed event payload."""

    def _create(**session_overrides) -> dict:
        session = {
            "id": "cs_test123",
            "object": "checkout.session",
            "customer": "cus_test123",
            "customer_details": {
                "name": "Ana Horvat",
                "email": "ana@example.com",
            },
            "amount_total": 2500,
            "currency": "eur",
        }
        session.update(session_overrides)
        return {
            "id": "evt_checkout123",
            "type": "checkout.session.completed",
            "data": {"object": session},
        }

    return _create


@pytest.fixture
def charge_succeeded_event():
    """Create a charge.succeeded event payload."""

    def _create(**charge_overrides) -> dict:
        charge = {
            "id": "ch_test123",
            "object": "charge",
            "customer": None,
            "billing_details": {
                "name": "Ana Horvat",
                "email": "ana@example.com",
            },
            "receipt_email": None,
            "amount": 1000,
            "currency": "eur",
        }
        charge.update(charge_overrides)
        return {
            "id": "evt_charge123",
            "type": "charge.succeeded",
            "data": {"object": charge},
        }

    return _create


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def mock_resolver_stripe():
    """Patch the Stripe calls made by CustomerResolver."""
    with patch("donations.services.StripeAdapter") as mock:
        mock.retrieve_customer.return_value = CustomerResult(
            id="cus_test123",
            email="ana@example.com",
            name="Ana Horvat",
        )
        mock.list_customers_by_email.return_value = []
        mock.create_customer.return_value = CustomerResult(
            id="cus_created123",
            email="ana@example.com",
            name="Ana Horvat",
        )
        yield mock


@pytest.fixture
def mock_get_notifier(notifier):
    """Make the handlers publish to the recording notifier."""
    with patch("donations.webhooks.handlers.get_notifier") as mock:
        mock.return_value = notifier
        yield mock

"""
Test fixtures for the donation endpoints.
"""

from unittest.mock import patch

import pytest
from rest_framework.test import APIClient

from donations.adapters import PaymentIntentResult


@pytest.fixture
def api_client() -> APIClient:
    """Unauthenticated API client; every donation endpoint is public."""
    return APIClient()


@pytest.fixture
def mock_create_payment_intent():
    """Patch StripeAdapter.create_payment_intent as seen by the views."""
    with patch("donations.views.StripeAdapter.create_payment_intent") as mock:
        mock.return_value = PaymentIntentResult(
            id="pi_test123456",
            status="requires_payment_method",
            amount_cents=2500,
            currency="eur",
            client_secret="pi_test123456_secret_abc123",
        )
        yield mock

"""
Adapters for external payment services.

All Stripe API calls go through StripeAdapter to ensure consistent error
handling, timeouts, and logging.

Usage:
    from donations.adapters import StripeAdapter, CreatePaymentIntentParams

    result = StripeAdapter.create_payment_intent(
        CreatePaymentIntentParams(amount_cents=5000, currency="eur")
    )
"""

from donations.adapters.stripe_adapter import (
    CreateCustomerParams,
    CreatePaymentIntentParams,
    CustomerResult,
    PaymentIntentResult,
    StripeAdapter,
)

__all__ = [
    "CreateCustomerParams",
    "CreatePaymentIntentParams",
    "CustomerResult",
    "PaymentIntentResult",
    "StripeAdapter",
]

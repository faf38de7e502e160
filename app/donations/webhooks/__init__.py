"""
Webhook handling for donation events from Stripe.

Webhooks are verified, translated into a DonationEvent, and published to
the broker within the request.

Usage:
    # In urls.py
    from donations.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhook", stripe_webhook, name="webhook"),
    ]
"""

from donations.webhooks.handlers import dispatch_webhook, register_handler
from donations.webhooks.views import stripe_webhook

__all__ = [
    "dispatch_webhook",
    "register_handler",
    "stripe_webhook",
]

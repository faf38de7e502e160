"""
URL configuration for the donations app.

Routes:
    - GET  config                 - Stripe publishable key
    - POST create-payment-intent  - Create a PaymentIntent
    - POST webhook                - Stripe webhook endpoint

The paths are mounted at the site root (no trailing slash) because the
donation page and the Stripe dashboard are configured with these exact URLs.
"""

from django.urls import path

from donations.views import ConfigView, CreatePaymentIntentView
from donations.webhooks.views import stripe_webhook

app_name = "donations"

urlpatterns = [
    path("config", ConfigView.as_view(), name="config"),
    path(
        "create-payment-intent",
        CreatePaymentIntentView.as_view(),
        name="create_payment_intent",
    ),
    # Webhook endpoints
    path("webhook", stripe_webhook, name="webhook"),
]

"""
Donations app configuration.
"""

import logging

from django.apps import AppConfig


logger = logging.getLogger(__name__)


class DonationsConfig(AppConfig):
    """Configuration for the donations application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "donations"
    verbose_name = "Donations"

    def ready(self):
        import stripe
        from django.conf import settings

        stripe.set_app_info(
            "donation-server",
            version=settings.APP_VERSION,
        )

        if not settings.STRIPE_WEBHOOK_SECRET:
            logger.warning("STRIPE_WEBHOOK_SECRET is not set.")
        if not settings.KAFKA_BOOTSTRAP_SERVERS:
            logger.warning(
                "KAFKA_BOOTSTRAP_SERVERS is not set; the webhook endpoint is disabled."
            )

"""
Service layer for the donation pipeline.

CustomerResolver finds or creates the Stripe customer behind a donation.
DonationNotificationService turns a resolved donation into a DonationEvent
and publishes it.

Both are plain Stripe/Kafka glue: every call blocks, nothing is retried,
and nothing is rolled back if a later step fails.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings

from core.services import BaseService, ServiceResult
from donations.adapters import CreateCustomerParams, CustomerResult, StripeAdapter
from donations.types import DonationEvent

if TYPE_CHECKING:
    from donations.notifiers import Notifier
    from donations.types import ParsedDonation


INVALID_WEBHOOK_PAYLOAD = "INVALID_WEBHOOK_PAYLOAD"


class CustomerResolver(BaseService):
    """
    Resolve the Stripe customer for a donation.

    Order of lookups:
        1. By customer ID, if the event carries one
        2. By email; with several matches prefer an exact name match,
           otherwise take the first
        3. Create a new customer from email and name

    Usage:
        result = CustomerResolver.resolve(parsed)
        if result:
            customer = result.data
    """

    @classmethod
    def resolve(cls, parsed: ParsedDonation) -> ServiceResult[CustomerResult]:
        """
        Find or create the customer for a parsed donation.

        Returns:
            ServiceResult with the CustomerResult, or a failure with
            INVALID_WEBHOOK_PAYLOAD when there is nothing to look up by

        Raises:
            StripeError: Any Stripe call failed
        """
        logger = cls.get_logger()

        if parsed.customer_id:
            customer = StripeAdapter.retrieve_customer(parsed.customer_id)
            if customer is not None:
                logger.info(
                    "Reusing customer found by ID",
                    extra={"customer_id": customer.id},
                )
                return ServiceResult.success(customer)

        if not parsed.customer_email:
            return ServiceResult.failure(
                "customer email is missing",
                error_code=INVALID_WEBHOOK_PAYLOAD,
            )

        matches = StripeAdapter.list_customers_by_email(parsed.customer_email)
        if matches:
            customer = cls.pick_best_match(matches, parsed.customer_name)
            logger.info(
                "Reusing customer found by email",
                extra={"customer_id": customer.id, "match_count": len(matches)},
            )
            return ServiceResult.success(customer)

        customer = StripeAdapter.create_customer(
            CreateCustomerParams(
                email=parsed.customer_email,
                name=parsed.customer_name,
            )
        )
        logger.info("Created customer", extra={"customer_id": customer.id})
        return ServiceResult.success(customer)

    @staticmethod
    def pick_best_match(matches: list[CustomerResult], name: str) -> CustomerResult:
        """Prefer the customer whose name equals ``name``, else the first."""
        for customer in matches:
            if name and customer.name == name:
                return customer
        return matches[0]


class DonationNotificationService(BaseService):
    """Build and publish the DonationEvent for a resolved donation."""

    @classmethod
    def publish(
        cls,
        parsed: ParsedDonation,
        customer: CustomerResult,
        notifier: Notifier,
    ) -> DonationEvent:
        """
        Publish the donation event with the configured deadline.

        Customer fields prefer Stripe's record and fall back to what the
        donor typed at checkout.

        Raises:
            NotificationError: The broker did not accept the event in time
        """
        event = DonationEvent.from_parsed(
            parsed,
            customer_id=customer.id,
            customer_name=customer.name or parsed.customer_name,
            customer_email=customer.email or parsed.customer_email,
        )

        notifier.notify(event, timeout=settings.DONATION_PUBLISH_TIMEOUT_SECONDS)

        cls.get_logger().info(
            "Donation event sent",
            extra={
                "customer_id": event.customer_id,
                "amount": event.amount,
                "currency": event.currency,
            },
        )
        return event

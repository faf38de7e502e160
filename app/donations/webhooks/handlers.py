"""
Webhook event handlers for Stripe donation events.

This module provides a handler registry and the handlers for the two
event types that mean "a donation succeeded":

    checkout.session.completed - Stripe Checkout flow
    charge.succeeded           - Payment Element flow

Each handler extracts the donation fields from the untyped event payload,
resolves the Stripe customer, and publishes a DonationEvent.

Usage:
    from donations.webhooks.handlers import dispatch_webhook, register_handler

    @register_handler("custom.event")
    def handle_custom_event(event_data: dict) -> ServiceResult:
        ...

    result = dispatch_webhook(event_data)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from core.exceptions import ServiceUnavailableError, ValidationError
from core.services import ServiceResult
from donations.notifiers import get_notifier
from donations.services import (
    INVALID_WEBHOOK_PAYLOAD,
    CustomerResolver,
    DonationNotificationService,
)
from donations.types import ParsedDonation

if TYPE_CHECKING:
    from donations.types import DonationEvent


logger = logging.getLogger(__name__)


# =============================================================================
# Handler Registry
# =============================================================================


WebhookHandler = Callable[[dict[str, Any]], ServiceResult]

# Maps event type strings to handler functions
WEBHOOK_HANDLERS: dict[str, WebhookHandler] = {}


def register_handler(event_type: str) -> Callable[[WebhookHandler], WebhookHandler]:
    """
    Decorator to register a webhook event handler.

    Args:
        event_type: The Stripe event type (e.g., "charge.succeeded")
    """

    def decorator(func: WebhookHandler) -> WebhookHandler:
        WEBHOOK_HANDLERS[event_type] = func
        logger.debug(f"Registered webhook handler for {event_type}")
        return func

    return decorator


def dispatch_webhook(event_data: dict[str, Any]) -> ServiceResult:
    """
    Dispatch a verified webhook event to its handler.

    Event types without a handler are acknowledged and ignored.

    Args:
        event_data: The verified Stripe event as a dict

    Returns:
        ServiceResult from the handler, or success(None) if no handler
    """
    event_type = event_data.get("type")
    handler = WEBHOOK_HANDLERS.get(event_type)

    if not handler:
        logger.info(
            f"No handler registered for event type: {event_type}",
            extra={"stripe_event_id": event_data.get("id")},
        )
        return ServiceResult.success(None)

    logger.info(
        f"Dispatching {event_type} to handler",
        extra={"stripe_event_id": event_data.get("id")},
    )

    return handler(event_data)


# =============================================================================
# Payload Extraction
# =============================================================================


def _get_object(event_data: dict[str, Any]) -> dict[str, Any]:
    data = event_data.get("data")
    if not isinstance(data, dict):
        raise ValidationError("event data is missing")
    obj = data.get("object")
    if not isinstance(obj, dict):
        raise ValidationError("event data.object is missing")
    return obj


def _optional_dict(container: dict[str, Any], key: str) -> dict[str, Any]:
    value = container.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError(f"{key} must be an object")
    return value


def _optional_str(container: dict[str, Any], key: str) -> str:
    value = container.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


def _required_str(container: dict[str, Any], key: str) -> str:
    value = _optional_str(container, key)
    if not value:
        raise ValidationError(f"{key} is missing")
    return value


def _required_int(container: dict[str, Any], key: str) -> int:
    value = container.get(key)
    # bool is an int subclass; Stripe never sends one for an amount
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    return value


def _customer_id(obj: dict[str, Any]) -> str | None:
    # Expanded events carry the customer object instead of its ID
    customer = obj.get("customer")
    if isinstance(customer, dict):
        customer = customer.get("id")
    if customer is not None and not isinstance(customer, str):
        raise ValidationError("customer must be a string")
    return customer or None


def parse_checkout_session(event_data: dict[str, Any]) -> ParsedDonation:
    """
    Extract donation fields from a checkout.session.completed event.

    Raises:
        ValidationError: A required field is missing or has the wrong type
    """
    session = _get_object(event_data)
    details = _optional_dict(session, "customer_details")

    return ParsedDonation(
        customer_id=_customer_id(session),
        customer_name=_optional_str(details, "name"),
        customer_email=_optional_str(details, "email")
        or _optional_str(session, "customer_email"),
        amount_minor=_required_int(session, "amount_total"),
        currency=_required_str(session, "currency"),
    )


def parse_charge(event_data: dict[str, Any]) -> ParsedDonation:
    """
    Extract donation fields from a charge.succeeded event.

    Raises:
        ValidationError: A required field is missing or has the wrong type
    """
    charge = _get_object(event_data)
    billing = _optional_dict(charge, "billing_details")

    return ParsedDonation(
        customer_id=_customer_id(charge),
        customer_name=_optional_str(billing, "name"),
        customer_email=_optional_str(billing, "email")
        or _optional_str(charge, "receipt_email"),
        amount_minor=_required_int(charge, "amount"),
        currency=_required_str(charge, "currency"),
    )


# =============================================================================
# Donation Handlers
# =============================================================================


def _publish_donation(
    event_data: dict[str, Any],
    parse: Callable[[dict[str, Any]], ParsedDonation],
) -> ServiceResult[DonationEvent]:
    stripe_event_id = event_data.get("id")

    try:
        parsed = parse(event_data)
    except ValidationError as e:
        logger.warning(
            f"{event_data.get('type')}: invalid payload",
            extra={"stripe_event_id": stripe_event_id, "error": e.message},
        )
        return ServiceResult.failure(e.message, error_code=INVALID_WEBHOOK_PAYLOAD)

    resolved = CustomerResolver.resolve(parsed)
    if not resolved:
        logger.warning(
            f"{event_data.get('type')}: could not resolve customer",
            extra={"stripe_event_id": stripe_event_id, "error": resolved.error},
        )
        return resolved

    notifier = get_notifier()
    if notifier is None:
        raise ServiceUnavailableError("Donation notifications are not configured.")

    event = DonationNotificationService.publish(parsed, resolved.data, notifier)
    return ServiceResult.success(event)


@register_handler("checkout.session.completed")
def handle_checkout_session_completed(event_data: dict[str, Any]) -> ServiceResult:
    """
    Handle a completed Stripe Checkout session.

    Returns:
        ServiceResult with the published DonationEvent, or a failure for
        a malformed payload

    Raises:
        StripeError: Customer lookup or creation failed
        NotificationError: Publishing failed
    """
    logger.info("Checkout Session completed")
    return _publish_donation(event_data, parse_checkout_session)


@register_handler("charge.succeeded")
def handle_charge_succeeded(event_data: dict[str, Any]) -> ServiceResult:
    """
    Handle a successful charge from the Payment Element flow.

    Returns:
        ServiceResult with the published DonationEvent, or a failure for
        a malformed payload

    Raises:
        StripeError: Customer lookup or creation failed
        NotificationError: Publishing failed
    """
    logger.info("Charge succeeded")
    return _publish_donation(event_data, parse_charge)

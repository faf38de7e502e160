"""
Donation-specific exceptions.

Exception Hierarchy:
    DonationError (base for the donation domain)
    ├── WebhookSignatureError - Missing or invalid Stripe-Signature (400)
    ├── StripeError - Base for all Stripe errors (raised by StripeAdapter)
    │   ├── StripeCardDeclinedError - Card declined
    │   ├── StripeInvalidRequestError - Invalid parameters or unknown resource
    │   ├── StripeRateLimitError - Rate limited
    │   ├── StripeAPIUnavailableError - Network or Stripe server error
    │   └── StripeUnexpectedError - Anything the SDK did not classify
    └── NotificationError - Publishing a DonationEvent failed
        └── NotificationTimeoutError - Publish deadline exceeded

Nothing here is retried. Stripe errors raised while creating a payment
intent are reported to the client as 400 with Stripe's message, except
StripeUnexpectedError which is a 500. During webhook processing every
StripeError and NotificationError is a 500.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError, ExternalServiceError

if TYPE_CHECKING:
    from typing import Any


class DonationError(BaseApplicationError):
    """Base exception for the donation domain."""

    default_error_code: str = "DONATION_ERROR"


class WebhookSignatureError(DonationError):
    """
    Raised when a webhook body cannot be authenticated.

    Covers a missing Stripe-Signature header, a signature that does not
    match the shared secret, and a body Stripe's library cannot parse.
    """

    default_error_code: str = "INVALID_WEBHOOK_SIGNATURE"
    status_code: int = 400


# =============================================================================
# Stripe Exceptions
# =============================================================================


class StripeError(DonationError, ExternalServiceError):
    """
    Base exception for all Stripe-related errors.

    Attributes:
        stripe_code: Stripe's error code, when Stripe supplied one
        decline_code: Card decline code (card errors only)
    """

    default_error_code: str = "STRIPE_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        stripe_code: str | None = None,
        decline_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if stripe_code:
            details["stripe_code"] = stripe_code
        if decline_code:
            details["decline_code"] = decline_code
        super().__init__(message, error_code=error_code, details=details)
        self.stripe_code = stripe_code
        self.decline_code = decline_code


class StripeCardDeclinedError(StripeError):
    """Card was declined by the issuing bank."""

    default_error_code: str = "CARD_DECLINED"


class StripeInvalidRequestError(StripeError):
    """
    Invalid request sent to Stripe.

    Also raised for authentication failures (bad API key) since those are
    operational problems the request cannot fix.
    """

    default_error_code: str = "INVALID_STRIPE_REQUEST"


class StripeRateLimitError(StripeError):
    """Rate limited by the Stripe API."""

    default_error_code: str = "STRIPE_RATE_LIMITED"


class StripeAPIUnavailableError(StripeError):
    """Stripe could not be reached or answered with a server error."""

    default_error_code: str = "STRIPE_UNAVAILABLE"


class StripeUnexpectedError(StripeError):
    """An error the Stripe SDK did not classify, or not a Stripe error at all."""

    default_error_code: str = "STRIPE_UNEXPECTED_ERROR"


# =============================================================================
# Notification Exceptions
# =============================================================================


class NotificationError(DonationError, ExternalServiceError):
    """
    Raised when a DonationEvent could not be handed to the broker.

    Example:
        try:
            notifier.notify(event, timeout=0.5)
        except NotificationError as e:
            return JsonResponse(e.to_response(), status=e.status_code)
    """

    default_error_code: str = "NOTIFICATION_FAILED"
    status_code: int = 500


class NotificationTimeoutError(NotificationError):
    """
    The broker did not acknowledge the event within the publish deadline.

    The record may still be delivered later; the request is reported as
    failed regardless.
    """

    default_error_code: str = "NOTIFICATION_TIMEOUT"

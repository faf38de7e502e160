"""
Stripe API adapter for donation operations.

This module provides the StripeAdapter class which encapsulates all
Stripe API interactions. All Stripe calls go through this adapter to
ensure consistent error handling, timeouts, and observability.

Features:
- Configurable timeout on all API calls
- Automatic error translation to domain exceptions
- Structured logging with timing metrics
- No retries: every call is a single blocking request

Configuration (via settings):
- STRIPE_SECRET_KEY: Stripe API secret key
- STRIPE_WEBHOOK_SECRET: Webhook signing secret
- STRIPE_API_TIMEOUT_SECONDS: API call timeout (default: 10)

Usage:
    from donations.adapters import StripeAdapter, CreatePaymentIntentParams

    result = StripeAdapter.create_payment_intent(
        CreatePaymentIntentParams(amount_cents=2500, currency="eur")
    )
    result.client_secret

    customer = StripeAdapter.retrieve_customer("cus_xxx")
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import stripe
from django.conf import settings

from donations.exceptions import (
    StripeAPIUnavailableError,
    StripeCardDeclinedError,
    StripeInvalidRequestError,
    StripeRateLimitError,
    StripeUnexpectedError,
    WebhookSignatureError,
)


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CreatePaymentIntentParams:
    """
    Parameters for creating a Stripe PaymentIntent.

    Attributes:
        amount_cents: Amount in smallest currency unit (e.g., cents)
        currency: ISO 4217 currency code
        metadata: Key-value pairs to attach to the PaymentIntent
        automatic_payment_methods: Let Stripe pick payment methods (default: True)
    """

    amount_cents: int
    currency: str
    metadata: dict[str, str] = field(default_factory=dict)
    automatic_payment_methods: bool = True

    def __post_init__(self) -> None:
        if self.amount_cents <= 0:
            raise ValueError("amount_cents must be positive")
        if not self.currency:
            raise ValueError("currency is required")


@dataclass
class PaymentIntentResult:
    """
    Result from Stripe PaymentIntent operations.

    Attributes:
        id: PaymentIntent ID (pi_xxx)
        status: Current status (requires_payment_method, succeeded, etc.)
        amount_cents: Amount in cents
        currency: Currency code
        client_secret: Secret for client-side confirmation
        raw_response: Full Stripe response dict (for debugging)
    """

    id: str
    status: str
    amount_cents: int
    currency: str
    client_secret: str | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)


@dataclass
class CreateCustomerParams:
    """
    Parameters for creating a Stripe Customer.

    Attributes:
        email: Customer email (required)
        name: Customer display name
        metadata: Key-value pairs to attach to the Customer
    """

    email: str
    name: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.email:
            raise ValueError("email is required")


@dataclass
class CustomerResult:
    """
    Result from Stripe Customer operations.

    Attributes:
        id: Customer ID (cus_xxx)
        email: Customer email (empty if Stripe has none)
        name: Customer name (empty if Stripe has none)
        raw_response: Full Stripe response dict
    """

    id: str
    email: str = ""
    name: str = ""
    raw_response: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_stripe(cls, customer: Any) -> CustomerResult:
        return cls(
            id=customer.id,
            email=customer.email or "",
            name=customer.name or "",
            raw_response=customer.to_dict(),
        )


# =============================================================================
# Stripe Adapter
# =============================================================================


class StripeAdapter:
    """
    Adapter for Stripe API operations.

    All methods are class methods - no instance state is maintained.
    Safe to call concurrently from request threads.

    Usage:
        result = StripeAdapter.create_payment_intent(params)
        customer = StripeAdapter.retrieve_customer("cus_xxx")
        matches = StripeAdapter.list_customers_by_email("ana@example.com")
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    @staticmethod
    def _configure_stripe() -> None:
        """Configure Stripe client with API key and timeout."""
        stripe.api_key = settings.STRIPE_SECRET_KEY
        timeout = getattr(settings, "STRIPE_API_TIMEOUT_SECONDS", 10)
        stripe.default_http_client = stripe.http_client.RequestsClient(timeout=timeout)

    @classmethod
    def get_logger(cls) -> logging.Logger:
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Payment Intents
    # =========================================================================

    @classmethod
    def create_payment_intent(
        cls,
        params: CreatePaymentIntentParams,
    ) -> PaymentIntentResult:
        """
        Create a Stripe PaymentIntent.

        Args:
            params: Parameters for creating the PaymentIntent

        Returns:
            PaymentIntentResult including the client_secret

        Raises:
            StripeCardDeclinedError: Card was declined
            StripeInvalidRequestError: Invalid parameters
            StripeAPIUnavailableError: Stripe service unavailable
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "create_payment_intent",
            "amount_cents": params.amount_cents,
            "currency": params.currency,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            intent = stripe.PaymentIntent.create(
                amount=params.amount_cents,
                currency=params.currency,
                metadata=params.metadata,
                automatic_payment_methods={"enabled": params.automatic_payment_methods},
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "payment_intent_id": intent.id,
                    "status": intent.status,
                    "duration_ms": duration_ms,
                },
            )

            return PaymentIntentResult(
                id=intent.id,
                status=intent.status,
                amount_cents=intent.amount,
                currency=intent.currency,
                client_secret=intent.client_secret,
                raw_response=intent.to_dict(),
            )

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Customers
    # =========================================================================

    @classmethod
    def retrieve_customer(cls, customer_id: str) -> CustomerResult | None:
        """
        Retrieve a Customer by ID.

        A customer Stripe does not know about, or one that has been
        deleted, is reported as None rather than as an error.

        Args:
            customer_id: Stripe Customer ID (cus_xxx)

        Returns:
            CustomerResult, or None if the customer does not exist
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "retrieve_customer",
            "customer_id": customer_id,
        }

        start_time = time.time()
        logger.debug("Starting Stripe operation", extra=log_context)

        try:
            customer = stripe.Customer.retrieve(customer_id)
        except stripe.error.InvalidRequestError as e:
            if e.code != "resource_missing":
                duration_ms = (time.time() - start_time) * 1000
                cls._handle_stripe_error(e, log_context, duration_ms)
            logger.info("Stripe customer not found", extra=log_context)
            return None
        except Exception as e:
            cls._handle_stripe_error(e, log_context, (time.time() - start_time) * 1000)
            raise

        duration_ms = (time.time() - start_time) * 1000
        if getattr(customer, "deleted", False):
            logger.info(
                "Stripe customer is deleted",
                extra={**log_context, "duration_ms": duration_ms},
            )
            return None

        logger.debug(
            "Stripe operation completed",
            extra={**log_context, "duration_ms": duration_ms},
        )
        return CustomerResult.from_stripe(customer)

    @classmethod
    def list_customers_by_email(
        cls,
        email: str,
        limit: int = 10,
    ) -> list[CustomerResult]:
        """
        List Customers whose email matches exactly.

        Args:
            email: Email address to look up
            limit: Maximum number to return (default: 10, max: 100)

        Returns:
            List of CustomerResult objects in Stripe's order (newest first)
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "list_customers_by_email",
            "limit": limit,
        }

        start_time = time.time()
        logger.debug("Starting Stripe operation", extra=log_context)

        try:
            customers = stripe.Customer.list(email=email, limit=min(limit, 100))

            duration_ms = (time.time() - start_time) * 1000
            logger.debug(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "count": len(customers.data),
                    "duration_ms": duration_ms,
                },
            )

            return [CustomerResult.from_stripe(customer) for customer in customers.data]

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    @classmethod
    def create_customer(cls, params: CreateCustomerParams) -> CustomerResult:
        """
        Create a Customer.

        Args:
            params: Email, name and metadata for the new customer

        Returns:
            CustomerResult for the created customer
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {"operation": "create_customer"}

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            customer = stripe.Customer.create(
                email=params.email,
                name=params.name,
                metadata=params.metadata,
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "customer_id": customer.id,
                    "duration_ms": duration_ms,
                },
            )

            return CustomerResult.from_stripe(customer)

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Webhook Verification
    # =========================================================================

    @classmethod
    def verify_webhook_signature(
        cls,
        payload: bytes,
        signature: str,
    ) -> dict[str, Any]:
        """
        Verify and parse a Stripe webhook event.

        Args:
            payload: Raw webhook payload bytes
            signature: Stripe-Signature header value

        Returns:
            Parsed event data dict

        Raises:
            WebhookSignatureError: Invalid signature or unparseable body
        """
        try:
            event = stripe.Webhook.construct_event(
                payload,
                signature,
                settings.STRIPE_WEBHOOK_SECRET,
            )
            return event.to_dict()
        except stripe.error.SignatureVerificationError as e:
            raise WebhookSignatureError(
                "Invalid webhook signature",
                details={"error": str(e)},
            ) from e
        except ValueError as e:
            raise WebhookSignatureError(
                "Invalid webhook payload",
                details={"error": str(e)},
            ) from e
        except Exception as e:
            # Signed JSON that is not an event object (e.g. a list)
            raise WebhookSignatureError(
                "Invalid webhook payload",
                details={"error": f"{type(e).__name__}: {e}"},
            ) from e

    # =========================================================================
    # Error Handling
    # =========================================================================

    @classmethod
    def _handle_stripe_error(
        cls,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate Stripe exceptions to domain exceptions.

        Args:
            error: The Stripe exception
            log_context: Logging context dict
            duration_ms: Operation duration for logging

        Raises:
            StripeCardDeclinedError: Card was declined
            StripeInvalidRequestError: Invalid request or authentication failure
            StripeRateLimitError: Rate limited
            StripeAPIUnavailableError: Network or Stripe server error
            StripeUnexpectedError: Anything else
        """
        logger = cls.get_logger()
        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, stripe.error.CardError):
            decline_code = getattr(error, "decline_code", None)
            logger.warning(
                "Card error from Stripe",
                extra={**log_context, "decline_code": decline_code},
            )
            raise StripeCardDeclinedError(
                str(error.user_message or error),
                stripe_code=error.code,
                decline_code=decline_code,
            ) from error

        elif isinstance(error, stripe.error.InvalidRequestError):
            logger.error(
                "Invalid request to Stripe",
                extra={**log_context, "stripe_code": error.code},
            )
            raise StripeInvalidRequestError(
                str(error.user_message or error),
                stripe_code=error.code,
            ) from error

        elif isinstance(error, stripe.error.RateLimitError):
            logger.warning("Rate limited by Stripe", extra=log_context)
            raise StripeRateLimitError(
                "Stripe rate limit exceeded.",
                stripe_code="rate_limit",
            ) from error

        elif isinstance(error, stripe.error.APIConnectionError):
            logger.error(
                "Connection error to Stripe",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                "Could not connect to Stripe.",
                stripe_code="api_connection_error",
            ) from error

        elif isinstance(error, stripe.error.APIError):
            logger.error("Stripe API error", extra=log_context, exc_info=True)
            raise StripeAPIUnavailableError(
                "Stripe service error.",
                stripe_code="api_error",
            ) from error

        elif isinstance(error, stripe.error.AuthenticationError):
            logger.critical(
                "Stripe authentication failed - check API key",
                extra=log_context,
            )
            raise StripeInvalidRequestError(
                "Stripe authentication failed",
                stripe_code="authentication_error",
            ) from error

        else:
            logger.error(
                f"Unexpected error from Stripe: {type(error).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise StripeUnexpectedError(
                f"Unexpected Stripe error: {error}",
                stripe_code="unknown_error",
            ) from error

"""
DRF views for the donation app.

Endpoints:
    GET  /config                          - Stripe publishable key
    POST /create-payment-intent?amount=N  - Create a PaymentIntent for N cents
    POST /webhook                         - Stripe webhook (see webhooks.views)

Security:
    - All endpoints are public; the donation page calls them from the browser
    - The webhook verifies Stripe's signature instead of authenticating
"""

from __future__ import annotations

import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import ValidationError, error_envelope
from donations.adapters import CreatePaymentIntentParams, StripeAdapter
from donations.exceptions import StripeError, StripeUnexpectedError

from .serializers import (
    ConfigSerializer,
    CreatePaymentIntentQuerySerializer,
    ErrorResponseSerializer,
    PaymentIntentSerializer,
)

logger = logging.getLogger(__name__)


def get_amount(query_params) -> int:
    """
    Read the single ``amount`` query parameter.

    Raises:
        ValidationError: Missing, repeated, not an integer, or below 1
    """
    amounts = query_params.getlist("amount")
    if not amounts:
        raise ValidationError("missing amount query parameter")
    if len(amounts) > 1:
        raise ValidationError("more than one amount is specified")

    serializer = CreatePaymentIntentQuerySerializer(data={"amount": amounts[0]})
    if not serializer.is_valid():
        message = serializer.errors["amount"][0]
        raise ValidationError(f"invalid amount: {message}")

    return serializer.validated_data["amount"]


class ConfigView(APIView):
    """
    Return the public key the donation page needs to load Stripe.js.

    GET /config

    Returns:
        {"publishableKey": "pk_test_..."}
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(responses={200: ConfigSerializer})
    def get(self, request):
        logger.info("/config called")
        return Response({"publishableKey": settings.STRIPE_PUBLISHABLE_KEY})


class CreatePaymentIntentView(APIView):
    """
    Create a Stripe PaymentIntent for a donation.

    POST /create-payment-intent?amount=2500

    Returns:
        {"clientSecret": "pi_xxx_secret_yyy"}

    Errors:
        400: amount missing/invalid, or Stripe rejected the request
        500: Unexpected failure
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        parameters=[
            OpenApiParameter(
                "amount",
                int,
                OpenApiParameter.QUERY,
                required=True,
                description="Donation amount in cents.",
            )
        ],
        request=None,
        responses={
            200: PaymentIntentSerializer,
            400: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
    )
    def post(self, request):
        try:
            amount = get_amount(request.query_params)
        except ValidationError as e:
            logger.info(f"Amount was not set correctly: {e.message}")
            return Response(e.to_response(), status=e.status_code)

        logger.info("Creating payment intent", extra={"amount_cents": amount})

        try:
            intent = StripeAdapter.create_payment_intent(
                CreatePaymentIntentParams(
                    amount_cents=amount,
                    currency=settings.DONATION_CURRENCY,
                )
            )
        except StripeUnexpectedError as e:
            logger.error(f"Other error occurred: {e}")
            return Response(
                error_envelope("Unknown server error"),
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except StripeError as e:
            logger.warning(f"Stripe error occurred: {e}")
            return Response(
                error_envelope(e.message),
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response({"clientSecret": intent.client_secret})

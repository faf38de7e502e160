"""
Webhook endpoint view for Stripe.

The view:
1. Verifies the webhook signature
2. Dispatches the event to its handler (customer resolution + publish)
3. Answers with {} or a JSON error body

Processing is synchronous: the response status tells Stripe whether the
donation event reached the broker.

Usage:
    # In urls.py
    from donations.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhook", stripe_webhook, name="webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from core.exceptions import BaseApplicationError, error_envelope
from donations.adapters import StripeAdapter
from donations.exceptions import WebhookSignatureError
from donations.webhooks.handlers import dispatch_webhook


logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest) -> JsonResponse:
    """
    Receive a Stripe webhook and publish the donation it describes.

    Returns:
        JsonResponse with status:
        - 200: Event handled, or event type ignored
        - 400: Missing/invalid signature or malformed payload
        - 500: Stripe or broker failure
        - 503: No broker configured

    Example Stripe-Signature header:
        t=1614556800,v1=xxx,v0=yyy
    """
    logger.info("Webhook is called")

    if not settings.KAFKA_BOOTSTRAP_SERVERS:
        logger.warning("Webhook received but no broker is configured")
        return JsonResponse(
            error_envelope("Donation notifications are not configured."),
            status=503,
        )

    payload = request.body
    signature = request.headers.get("Stripe-Signature", "")

    if not signature:
        logger.warning("Webhook received without Stripe-Signature header")
        return JsonResponse(error_envelope("Missing signature"), status=400)

    try:
        event_data = StripeAdapter.verify_webhook_signature(payload, signature)
    except WebhookSignatureError as e:
        logger.warning(
            "Webhook signature verification failed",
            extra={"error": str(e)},
        )
        return JsonResponse(e.to_response(), status=e.status_code)

    event_type = event_data.get("type")
    if not event_type:
        logger.warning("Webhook missing event type")
        return JsonResponse(error_envelope("Invalid event"), status=400)

    logger.info(
        f"Received Stripe webhook: {event_type}",
        extra={"stripe_event_id": event_data.get("id"), "event_type": event_type},
    )

    try:
        result = dispatch_webhook(event_data)
    except BaseApplicationError as e:
        logger.error(
            f"Failed to handle {event_type}: {e}",
            extra={"stripe_event_id": event_data.get("id"), **e.details},
        )
        return JsonResponse(e.to_response(), status=e.status_code)
    except Exception as e:
        logger.error(
            f"Unexpected error handling {event_type}: {type(e).__name__}",
            extra={"stripe_event_id": event_data.get("id")},
            exc_info=True,
        )
        return JsonResponse(error_envelope("Unknown server error"), status=500)

    if not result:
        return JsonResponse(result.to_response(), status=400)

    return JsonResponse({})

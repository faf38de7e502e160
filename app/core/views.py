"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the donation domain but are
needed to run the service, such as health checks.
"""

from django.conf import settings
from django.http import JsonResponse


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    The service keeps no local state, so health is a configuration check:
    - stripe: whether STRIPE_SECRET_KEY is set
    - broker: whether any Kafka bootstrap server is set

    HTTP Status Codes:
        200: Stripe is configured (the broker is optional)
        503: Stripe is not configured

    Example Response:
        {
            "status": "healthy",
            "stripe": "configured",
            "broker": "not_configured"
        }
    """
    stripe_ok = bool(settings.STRIPE_SECRET_KEY)
    broker_ok = bool(settings.KAFKA_BOOTSTRAP_SERVERS)

    health_status = {
        "status": "healthy" if stripe_ok else "unhealthy",
        "stripe": "configured" if stripe_ok else "not_configured",
        "broker": "configured" if broker_ok else "not_configured",
    }

    return JsonResponse(health_status, status=200 if stripe_ok else 503)

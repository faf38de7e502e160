"""
URL configuration for the donation server.

URL Structure:
    /config                  - Stripe publishable key (GET)
    /create-payment-intent   - Create a PaymentIntent (POST, ?amount=<cents>)
    /webhook                 - Stripe webhook endpoint (POST)
    /health/                 - Health check endpoint (load balancers, Docker)
    /schema/                 - OpenAPI schema (YAML)
    /docs/                   - ReDoc API documentation

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

urlpatterns = [
    # Documentation
    path("docs/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # Donation flow, mounted at the root
    path("", include("donations.urls")),
]

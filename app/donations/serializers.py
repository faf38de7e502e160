"""
Serializers for the donation endpoints.
"""

from rest_framework import serializers


class ConfigSerializer(serializers.Serializer):
    """Response body of GET /config."""

    publishableKey = serializers.CharField()


class CreatePaymentIntentQuerySerializer(serializers.Serializer):
    """Query parameters of POST /create-payment-intent."""

    amount = serializers.IntegerField(
        min_value=1,
        help_text="Donation amount in the smallest currency unit (cents).",
    )


class PaymentIntentSerializer(serializers.Serializer):
    """Response body of POST /create-payment-intent."""

    clientSecret = serializers.CharField()


class ErrorMessageSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    """Body of every failed response: {"error": {"message": "..."}}."""

    error = ErrorMessageSerializer()

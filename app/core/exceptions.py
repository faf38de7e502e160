"""
Base exception classes for application-wide error handling.

Every error raised by the application derives from BaseApplicationError so
views can turn it into the JSON error envelope used by all endpoints:

    {"error": {"message": "..."}}

Exception Hierarchy:
    BaseApplicationError (base, 500)
    ├── ValidationError - Malformed client input (400)
    ├── ServiceUnavailableError - A required collaborator is not configured (503)
    └── ExternalServiceError - Third-party service failures (500)

Usage:
    from core.exceptions import ValidationError

    raise ValidationError(
        "missing amount query parameter",
        details={"param": "amount"},
    )

    # In a view
    try:
        ...
    except BaseApplicationError as e:
        return JsonResponse(e.to_response(), status=e.status_code)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description (sent to the client)
        error_code: Machine-readable code used in logs
        details: Additional error context for logs (never sent to the client)
        status_code: HTTP status the error maps to
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> dict[str, Any]:
        """
        Convert the exception to the JSON error envelope.

        Returns:
            {"error": {"message": "<message>"}}
        """
        return error_envelope(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when client input is malformed.

    Use for missing or mistyped query parameters and webhook payload fields.
    """

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class ServiceUnavailableError(BaseApplicationError):
    """
    Raised when an endpoint depends on a collaborator that is not configured.

    Example:
        if notifier is None:
            raise ServiceUnavailableError("Donation notifications are not configured.")
    """

    default_error_code: str = "SERVICE_UNAVAILABLE"
    status_code: int = 503


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Stripe and Kafka failures inherit from this class. They are surfaced to
    the client as 500 responses and are never retried.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    status_code: int = 500


def error_envelope(message: str) -> dict[str, Any]:
    """Build the JSON body sent with every failed response."""
    return {"error": {"message": message}}

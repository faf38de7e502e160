"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with a per-class logger

Pattern Comparison:
    - ServiceResult: Use for expected failures (malformed webhook payloads)
    - Exceptions: Use for unexpected failures (Stripe or broker outages)

Usage:
    from core.services import BaseService, ServiceResult

    class CustomerResolver(BaseService):
        @classmethod
        def resolve(cls, details) -> ServiceResult[CustomerResult]:
            if not details.email:
                return ServiceResult.failure(
                    "customer email is missing",
                    error_code="INVALID_WEBHOOK_PAYLOAD",
                )
            ...
            return ServiceResult.success(customer)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from core.exceptions import error_envelope

if TYPE_CHECKING:
    from typing import Any

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed or nothing to return)
        error: Error message if failed
        error_code: Machine-readable error code

    Usage:
        result = dispatch_webhook(event_data)
        if not result:
            return JsonResponse(result.to_response(), status=400)
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code
        """
        return cls(success=False, error=error, error_code=error_code)

    def to_response(self) -> dict[str, Any]:
        """
        Convert a failed result to the JSON error envelope.

        Successful results render as an empty object, which is what the
        webhook endpoint returns on success.
        """
        if self.success:
            return {}
        return error_envelope(self.error or "Unknown error")

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Services are stateless: use @classmethod and keep collaborators as
    arguments so tests can pass doubles in.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Return a logger named after the service class."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

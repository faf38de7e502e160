"""
Core Application - Infrastructure & Base Classes

Generic, reusable building blocks with no donation-specific logic.

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with HTTP status and error envelope
    - ValidationError: Malformed client input
    - ServiceUnavailableError: Required collaborator not configured
    - ExternalServiceError: Third-party service failures

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Views (import from core.views):
    - health_check: Configuration health endpoint
"""

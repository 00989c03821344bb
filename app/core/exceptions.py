"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- A single place that decides which HTTP status an error maps to

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Malformed or missing input (400)
    ├── AuthenticationError - Caller could not be authenticated (401)
    ├── PermissionDeniedError - Authenticated but not allowed (403)
    ├── NotFoundError - Resource not found (404)
    ├── ConflictError - State conflicts (409)
    ├── PersistenceError - Data store write failed (500)
    └── ExternalServiceError - Third-party service failures (502)

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Payment metadata missing")

    # Raise with error code and details
    raise NotFoundError(
        f"Order {order_id} not found",
        error_code="ORDER_NOT_FOUND",
        details={"order_id": str(order_id)},
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.http_status)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, JWT authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, identifiers, etc.)
        http_status: Status code views use when surfacing this error
    """

    default_error_code: str = "APPLICATION_ERROR"
    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Order 42 not found",
                "error_code": "ORDER_NOT_FOUND",
                "details": {"order_id": "42"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Malformed webhook payloads (invalid JSON, missing metadata)
    - Unknown accounts referenced by a payment event
    - Field-level validation errors in service calls

    Note:
        For request body validation in views, use DRF serializers and
        convert their errors into this exception at the service boundary.
    """

    default_error_code: str = "VALIDATION_ERROR"
    http_status: int = 400


class AuthenticationError(BaseApplicationError):
    """
    Raised when the caller of an endpoint cannot be authenticated.

    Use for:
    - Webhook signature mismatches
    - Missing or wrong service-to-service bearer tokens

    Note:
        Raised before any state is read or written. Callers must reject
        the request outright.
    """

    default_error_code: str = "AUTHENTICATION_FAILED"
    http_status: int = 401


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        order = Order.objects.filter(id=order_id).first()
        if not order:
            raise NotFoundError(
                f"Order {order_id} not found",
                error_code="ORDER_NOT_FOUND",
                details={"order_id": str(order_id)},
            )
    """

    default_error_code: str = "NOT_FOUND"
    http_status: int = 404


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when an authenticated user lacks permission for an operation.

    Example:
        if order.seller_id != actor.pk:
            raise PermissionDeniedError(
                "Only the seller can confirm payment",
                error_code="NOT_ORDER_SELLER",
            )
    """

    default_error_code: str = "PERMISSION_DENIED"
    http_status: int = 403


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with current resource state.

    Use for:
    - Invalid state transitions
    - Duplicate entries (unique constraint violations)
    - Concurrent modification conflicts

    Note:
        HTTP 409 Conflict is the appropriate status for these errors.
    """

    default_error_code: str = "CONFLICT"
    http_status: int = 409


class PersistenceError(BaseApplicationError):
    """
    Raised when a data store write fails.

    The remaining steps of the current operation are aborted. Writes
    committed before the failure are not rolled back, so callers order
    their writes so that a partial failure leaves the smallest footprint.

    Example:
        try:
            Subscription.objects.update_or_create(...)
        except DatabaseError as e:
            raise PersistenceError(
                "Could not update subscription",
                details={"account_id": str(account_id), "error": str(e)},
            ) from e
    """

    default_error_code: str = "PERSISTENCE_ERROR"
    http_status: int = 500


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Use for:
    - Payment gateway failures
    - Push gateway failures
    - Network timeouts

    Note:
        Log the original error for debugging but don't expose
        internal details to clients in production.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    http_status: int = 502

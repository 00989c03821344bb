"""
Order-specific exceptions.
"""

from __future__ import annotations

from core.exceptions import ConflictError


class InvalidTransitionError(ConflictError):
    """
    Raised when an order event is not allowed from the order's current status.

    Nothing is persisted when this is raised.

    Example:
        raise InvalidTransitionError(
            "Cannot mark_sent an order in 'pending'",
            details={"current_status": "pending", "event": "mark_sent"},
        )
    """

    default_error_code: str = "INVALID_TRANSITION"

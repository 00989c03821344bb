"""
Notification delivery exceptions.

Delivery failures never propagate past the dispatcher: they are recorded
on the outbox row and logged, and the change that triggered the
notification stands.
"""

from __future__ import annotations

from core.exceptions import ExternalServiceError


class NotificationDeliveryError(ExternalServiceError):
    """The push gateway could not be reached or rejected the message."""

    default_error_code: str = "PUSH_DELIVERY_FAILED"

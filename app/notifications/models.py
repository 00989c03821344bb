"""
Push notification outbox.

A PushNotification row is written in the same transaction as the change
that triggers it, then delivered after commit by a Celery task. Rows that
miss their task (worker down, lost ``on_commit`` hook) are picked up by the
outbox drain.

Status flow:
    pending → sending → sent | failed | skipped

Delivery is attempted once. Failed rows are kept for inspection and never
retried.
"""

from __future__ import annotations

from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel
from notifications.templates import NotificationKind


class PushStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    SENDING = "sending", "Sending"
    SENT = "sent", "Sent"
    FAILED = "failed", "Failed"
    SKIPPED = "skipped", "Skipped"


class PushNotification(UUIDPrimaryKeyMixin, BaseModel):
    """
    One rendered push notification for one recipient.

    Fields:
        recipient: Profile the notification is for
        kind: Template the title and body were rendered from
        title: Rendered title
        body: Rendered body
        payload: Deep-link data sent with the push
        status: Delivery progress
        failure_reason: Why delivery failed or was skipped
        sent_at: When the gateway accepted the message
    """

    recipient = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="push_notifications",
    )
    kind = models.CharField(max_length=30, choices=NotificationKind.choices)
    title = models.CharField(max_length=200)
    body = models.TextField()
    payload = models.JSONField(default=dict, blank=True)
    status = models.CharField(
        max_length=10,
        choices=PushStatus.choices,
        default=PushStatus.PENDING,
    )
    failure_reason = models.TextField(blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "push_notifications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="push_outbox_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.kind} → {self.recipient_id} ({self.status})"

"""
Celery tasks for notification delivery.

Tasks:
    send_push_notification: Deliver one outbox row
    drain_outbox: Deliver pending rows whose task never ran
    send_expiry_warnings: Daily plan expiry warnings
    send_trending_alerts: Hourly trending item alerts
    send_daily_visitor_digest: Nightly visitor counts

Design:
    - Tasks receive notification_id (UUID string)
    - Delivery is attempted once; failures are recorded, never retried
    - Tasks are idempotent: a row that is not pending is left alone
"""

from __future__ import annotations

import logging
from datetime import timedelta

from celery import shared_task
from django.utils import timezone

from notifications import sweeps
from notifications.models import PushNotification, PushStatus
from notifications.services import NotificationDispatcher

logger = logging.getLogger(__name__)

OUTBOX_GRACE_PERIOD = timedelta(minutes=1)
OUTBOX_DRAIN_LIMIT = 500


@shared_task
def send_push_notification(notification_id: str) -> str | None:
    """Send one outbox row. Returns the final status, or None if already handled."""
    return NotificationDispatcher.deliver(notification_id)


@shared_task
def drain_outbox() -> dict:
    """
    Deliver pending rows older than a minute.

    Covers rows whose ``on_commit`` task was never queued or was lost.
    """
    cutoff = timezone.now() - OUTBOX_GRACE_PERIOD
    pending_ids = list(
        PushNotification.objects.filter(status=PushStatus.PENDING, created_at__lte=cutoff)
        .order_by("created_at")
        .values_list("id", flat=True)[:OUTBOX_DRAIN_LIMIT]
    )

    results = dict.fromkeys(PushStatus.values, 0)
    for notification_id in pending_ids:
        status = NotificationDispatcher.deliver(notification_id)
        if status:
            results[status] += 1

    if pending_ids:
        logger.info(
            f"Drained {len(pending_ids)} outbox rows",
            extra={"drained": len(pending_ids), **results},
        )
    return {"drained": len(pending_ids), **results}


@shared_task
def send_expiry_warnings() -> dict:
    return sweeps.expiry_warnings()


@shared_task
def send_trending_alerts() -> dict:
    return sweeps.trending_alerts()


@shared_task
def send_daily_visitor_digest() -> dict:
    return sweeps.daily_visitor_digest()

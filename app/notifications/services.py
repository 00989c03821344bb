"""
Notification dispatcher.

Turns domain events into outbox rows and delivers them to the Expo push
gateway. Delivery failures are recorded and logged, never raised.

Usage:
    from notifications.services import NotificationDispatcher
    from notifications.templates import NotificationKind

    # Inside the transaction that makes the change
    NotificationDispatcher.enqueue(
        recipient=order.seller,
        kind=NotificationKind.NEW_ORDER,
        context={"order_id": str(order.id)},
    )
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from django.db import transaction
from django.utils import timezone

from authentication.models import Profile
from core.exceptions import ValidationError
from core.services import BaseService
from notifications.exceptions import NotificationDeliveryError
from notifications.models import PushNotification, PushStatus
from notifications.push_client import ExpoPushClient, PushMessage
from notifications.templates import MONEY_EVENT_KINDS, NotificationKind, render

if TYPE_CHECKING:
    from uuid import UUID


class NotificationDispatcher(BaseService):
    """
    Outbox writer and push deliverer.

    Methods:
        enqueue: Render a template and write an outbox row
        dispatch_row_change: Notify the owner of a new like, comment, order or follow
        dispatch_money_event: Notify about a payout or refund
        deliver: Send one outbox row to the push gateway
    """

    @classmethod
    def enqueue(
        cls,
        recipient: Profile,
        kind: str,
        context: dict[str, Any] | None = None,
    ) -> PushNotification:
        """
        Write an outbox row for ``recipient`` and schedule its delivery.

        Call inside the transaction that makes the triggering change; the
        delivery task is only queued once that transaction commits.
        """
        from notifications.tasks import send_push_notification

        rendered = render(kind, context or {})
        notification = PushNotification.objects.create(
            recipient=recipient,
            kind=kind,
            title=rendered.title,
            body=rendered.body,
            payload=rendered.data,
        )
        notification_id = str(notification.id)
        transaction.on_commit(lambda: cls._queue_delivery(send_push_notification, notification_id))

        cls.get_logger().info(
            f"Queued {kind} notification",
            extra={"notification_id": notification_id, "recipient_id": str(recipient.pk)},
        )
        return notification

    @classmethod
    def _queue_delivery(cls, task, notification_id: str) -> None:
        # drain_outbox picks the row up if the broker is unreachable
        try:
            task.delay(notification_id)
        except Exception as e:
            cls.get_logger().error(
                f"Failed to queue push delivery: {e}",
                extra={"notification_id": notification_id, "error": str(e)},
            )

    @classmethod
    def dispatch_row_change(cls, table: str, record: dict[str, Any]) -> PushNotification | None:
        """
        Notify the owner of a newly inserted row.

        Supported tables:
            product_likes, product_comments: the product's seller
            orders: the order's seller
            follows: the profile being followed

        Returns:
            The outbox row, or None when the table is not handled or the
            target no longer exists
        """
        from marketplace.models import Product

        logger = cls.get_logger()
        log_context = {"table": table}

        if table in ("product_likes", "product_comments"):
            product = (
                Product.objects.select_related("seller").filter(pk=record.get("product_id")).first()
            )
            if product is None:
                logger.info("Row change for unknown product ignored", extra=log_context)
                return None
            kind = NotificationKind.LIKE if table == "product_likes" else NotificationKind.COMMENT
            return cls.enqueue(
                recipient=product.seller,
                kind=kind,
                context={"product_id": str(product.pk), "product_name": product.name},
            )

        if table == "orders":
            seller = Profile.objects.filter(pk=record.get("seller_id")).first()
            if seller is None:
                logger.info("Row change for unknown seller ignored", extra=log_context)
                return None
            return cls.enqueue(
                recipient=seller,
                kind=NotificationKind.NEW_ORDER,
                context={"order_id": str(record.get("id", ""))},
            )

        if table == "follows":
            followed = Profile.objects.filter(pk=record.get("following_id")).first()
            if followed is None:
                logger.info("Row change for unknown profile ignored", extra=log_context)
                return None
            follower = Profile.objects.filter(pk=record.get("follower_id")).first()
            return cls.enqueue(
                recipient=followed,
                kind=NotificationKind.NEW_FOLLOWER,
                context={
                    "follower_id": str(record.get("follower_id")),
                    "display_name": follower.display_name if follower else "",
                    "slug": follower.slug if follower else "",
                },
            )

        logger.debug("Row change for unhandled table ignored", extra=log_context)
        return None

    @classmethod
    def dispatch_money_event(
        cls,
        event_type: str,
        user_id: UUID | str,
        amount: Decimal | int | str,
        order_id: UUID | str,
    ) -> PushNotification | None:
        """
        Notify ``user_id`` about money moving for ``order_id``.

        Raises:
            ValidationError: ``event_type`` is not a money event
        """
        if event_type not in MONEY_EVENT_KINDS:
            raise ValidationError(
                f"Unsupported money event: {event_type}",
                error_code="UNKNOWN_MONEY_EVENT",
            )

        recipient = Profile.objects.filter(pk=user_id).first()
        if recipient is None:
            cls.get_logger().info(
                "Money event for unknown profile ignored",
                extra={"user_id": str(user_id), "order_id": str(order_id)},
            )
            return None

        return cls.enqueue(
            recipient=recipient,
            kind=event_type,
            context={"amount": amount, "order_id": str(order_id)},
        )

    @classmethod
    def deliver(cls, notification_id: UUID | str) -> str | None:
        """
        Send one pending outbox row.

        The row is claimed with a conditional update so that the task and
        the outbox drain never both send it.

        Returns:
            Final status, or None if the row was missing or already claimed
        """
        logger = cls.get_logger()
        log_context = {"notification_id": str(notification_id)}

        claimed = PushNotification.objects.filter(
            pk=notification_id,
            status=PushStatus.PENDING,
        ).update(status=PushStatus.SENDING)
        if not claimed:
            logger.info("Notification already claimed or missing", extra=log_context)
            return None

        notification = PushNotification.objects.select_related("recipient").get(pk=notification_id)
        token = notification.recipient.push_token

        if not token:
            cls._finish(notification, PushStatus.SKIPPED, "Recipient has no push token")
            return PushStatus.SKIPPED

        message = PushMessage(
            to=token,
            title=notification.title,
            body=notification.body,
            data=notification.payload,
        )
        try:
            ExpoPushClient.send(message)
        except NotificationDeliveryError as e:
            cls._finish(notification, PushStatus.FAILED, e.message)
            logger.warning(
                f"Push delivery failed: {e.error_code}",
                extra={**log_context, "kind": notification.kind},
            )
            return PushStatus.FAILED

        cls._finish(notification, PushStatus.SENT)
        logger.info("Push delivered", extra={**log_context, "kind": notification.kind})
        return PushStatus.SENT

    @staticmethod
    def _finish(notification: PushNotification, status: str, reason: str = "") -> None:
        notification.status = status
        notification.failure_reason = reason
        if status == PushStatus.SENT:
            notification.sent_at = timezone.now()
        notification.save(update_fields=["status", "failure_reason", "sent_at", "updated_at"])

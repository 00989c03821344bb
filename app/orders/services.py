"""
Order service layer.

OrderService is the only writer of ``Order.status``. Every status change
is applied in a single database transaction that:

1. Locks the order row (``select_for_update``)
2. Checks the acting profile is allowed to trigger the event
3. Applies the django-fsm transition and saves the order
4. Mirrors the new status into the deal conversation

The order write is committed first in intent: if the conversation write
still fails after bounded retries (each inside its own savepoint), the
order change stands and ``reconcile_deal_statuses`` repairs the drift.

Usage:
    from orders.services import OrderService

    result = OrderService.create_order(buyer, seller, Decimal("15000.00"))
    order = OrderService.transition(order.id, "confirm_payment", actor=seller)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone
from django_fsm import TransitionNotAllowed

from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.services import BaseService, ServiceResult

from chat.models import Conversation
from chat.services import ConversationService
from orders.exceptions import InvalidTransitionError
from orders.models import Order

if TYPE_CHECKING:
    from uuid import UUID

    from authentication.models import Profile

logger = logging.getLogger(__name__)


# Event name -> side of the deal allowed to trigger it
EVENT_ACTORS: dict[str, str] = {
    "confirm_payment": "seller",
    "cancel": "seller",
    "mark_sent": "seller",
    "confirm_receipt": "buyer",
}

CONVERSATION_SYNC_ATTEMPTS = 3


class OrderService(BaseService):
    """
    Order lifecycle operations.

    Methods:
        create_order: Place an order and open its conversation
        transition: Apply a buyer/seller event to an order
        reconcile_deal_statuses: Repair conversations that drifted from their order
    """

    @classmethod
    def create_order(
        cls,
        buyer: Profile,
        seller: Profile,
        total_amount: Decimal,
        delivery_address: str = "",
    ) -> ServiceResult[Order]:
        """
        Create an order in ``pending`` with its deal conversation.

        The seller's NEW_ORDER notification is written to the outbox in
        the same transaction and delivered after commit.

        Returns:
            ServiceResult with the created Order, or a failure for
            self-purchases and non-positive totals.
        """
        from notifications.services import NotificationDispatcher
        from notifications.templates import NotificationKind

        if buyer.pk == seller.pk:
            return ServiceResult.failure(
                "Buyer and seller must be different accounts",
                error_code="SELF_PURCHASE",
            )
        if total_amount <= 0:
            return ServiceResult.failure(
                "Order total must be positive",
                error_code="INVALID_AMOUNT",
                errors={"total_amount": ["Must be greater than zero."]},
            )

        with cls.atomic():
            order = Order.objects.create(
                buyer=buyer,
                seller=seller,
                total_amount=total_amount,
                delivery_address=delivery_address,
            )
            ConversationService.open_for_order(order)
            NotificationDispatcher.enqueue(
                recipient=seller,
                kind=NotificationKind.NEW_ORDER,
                context={"order_id": str(order.pk)},
            )

        cls.get_logger().info(
            "Order created",
            extra={
                "order_id": str(order.pk),
                "buyer_id": str(buyer.pk),
                "seller_id": str(seller.pk),
                "total_amount": str(total_amount),
            },
        )
        return ServiceResult.success(order)

    @classmethod
    def transition(cls, order_id: UUID | str, event: str, actor: Profile) -> Order:
        """
        Apply ``event`` to the order on behalf of ``actor``.

        Args:
            order_id: Order to act on
            event: One of confirm_payment, cancel, mark_sent, confirm_receipt
            actor: Profile performing the action

        Returns:
            The updated Order

        Raises:
            ValidationError: Unknown event name
            NotFoundError: No such order
            PermissionDeniedError: Actor is not the side allowed to act
            InvalidTransitionError: Event not allowed from the current status
        """
        role = EVENT_ACTORS.get(event)
        if role is None:
            raise ValidationError(
                f"Unknown order event '{event}'",
                error_code="UNKNOWN_ORDER_EVENT",
                details={"event": event, "allowed": sorted(EVENT_ACTORS)},
            )

        log = cls.get_logger()

        with cls.atomic():
            order = Order.objects.select_for_update().filter(pk=order_id).first()
            if order is None:
                raise NotFoundError(
                    f"Order {order_id} not found",
                    error_code="ORDER_NOT_FOUND",
                    details={"order_id": str(order_id)},
                )

            expected_actor_id = order.seller_id if role == "seller" else order.buyer_id
            if actor.pk != expected_actor_id:
                raise PermissionDeniedError(
                    f"Only the {role} can {event.replace('_', ' ')}",
                    error_code=f"NOT_ORDER_{role.upper()}",
                    details={"order_id": str(order.pk), "event": event},
                )

            previous_status = order.status
            try:
                getattr(order, event)()
            except TransitionNotAllowed as e:
                raise InvalidTransitionError(
                    f"Cannot {event} an order in '{previous_status}'",
                    details={
                        "order_id": str(order.pk),
                        "current_status": previous_status,
                        "event": event,
                    },
                ) from e

            order.save()
            cls._sync_conversation(order)

        log.info(
            "Order transitioned",
            extra={
                "order_id": str(order.pk),
                "event": event,
                "from_status": previous_status,
                "to_status": order.status,
                "actor_id": str(actor.pk),
            },
        )
        return order

    @classmethod
    def _sync_conversation(cls, order: Order) -> bool:
        """
        Mirror the order's status into its conversation.

        Each attempt runs in a savepoint so a failed write does not poison
        the enclosing transaction. Returns False when every attempt failed.
        """
        log = cls.get_logger()
        for attempt in range(1, CONVERSATION_SYNC_ATTEMPTS + 1):
            try:
                with transaction.atomic():
                    ConversationService.mirror_order_status(order)
                return True
            except DatabaseError as e:
                log.warning(
                    "Conversation sync failed",
                    extra={
                        "order_id": str(order.pk),
                        "attempt": attempt,
                        "error": str(e),
                    },
                )

        log.error(
            "Conversation left out of sync with order; reconciliation will repair it",
            extra={"order_id": str(order.pk), "status": order.status},
        )
        return False

    @classmethod
    def reconcile_deal_statuses(cls) -> dict[str, int]:
        """
        Correct every conversation whose deal_status differs from its order.

        Returns:
            Dict with ``checked`` and ``corrected`` counts
        """
        drifted = Conversation.objects.exclude(deal_status=F("order__status")).select_related(
            "order"
        )

        checked = 0
        corrected = 0
        for conversation in drifted.iterator():
            checked += 1
            order = conversation.order
            rows = Conversation.objects.filter(
                pk=conversation.pk,
                deal_status=conversation.deal_status,
            ).update(deal_status=order.status, deal_updated_at=timezone.now())
            if rows:
                corrected += 1
                logger.info(
                    "Repaired drifted deal status",
                    extra={
                        "order_id": str(order.pk),
                        "conversation_id": conversation.pk,
                        "from_status": conversation.deal_status,
                        "to_status": order.status,
                    },
                )

        return {"checked": checked, "corrected": corrected}

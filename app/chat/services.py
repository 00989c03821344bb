"""
Chat service layer.

ConversationService owns the conversation side of an order: creating the
thread at checkout and mirroring each status change into it.

All methods here are called inside the caller's transaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.utils import timezone

from core.services import BaseService

from chat.models import Conversation, Message, MessageType

if TYPE_CHECKING:
    from orders.models import Order

logger = logging.getLogger(__name__)


def status_message(status: str) -> str:
    """System message text announcing a deal status."""
    return f"ORDER STATUS: {status.upper()}"


class ConversationService(BaseService):
    """
    Conversation lifecycle for orders.

    Methods:
        open_for_order: Create the conversation when an order is placed
        mirror_order_status: Copy the order's status and post a system message
    """

    @classmethod
    def open_for_order(cls, order: Order) -> Conversation:
        """Create the deal conversation for a new order."""
        conversation = Conversation.objects.create(
            order=order,
            buyer_id=order.buyer_id,
            seller_id=order.seller_id,
            deal_status=order.status,
            deal_updated_at=timezone.now(),
        )
        cls.get_logger().info(
            "Opened deal conversation",
            extra={"order_id": str(order.pk), "conversation_id": conversation.pk},
        )
        return conversation

    @classmethod
    def mirror_order_status(cls, order: Order) -> Conversation:
        """
        Bring the order's conversation to the order's current status.

        Creates the conversation if the order somehow has none. Posts a
        system message announcing the new status.

        Raises:
            DatabaseError: If either write fails; the caller decides
                whether to retry.
        """
        conversation, _ = Conversation.objects.update_or_create(
            order=order,
            defaults={
                "deal_status": order.status,
                "deal_updated_at": timezone.now(),
            },
            create_defaults={
                "buyer_id": order.buyer_id,
                "seller_id": order.seller_id,
                "deal_status": order.status,
                "deal_updated_at": timezone.now(),
            },
        )
        Message.objects.create(
            conversation=conversation,
            sender=None,
            message_type=MessageType.SYSTEM,
            content=status_message(order.status),
        )
        return conversation

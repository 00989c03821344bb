"""
Chat models.

This module defines:
- Conversation: The deal thread between an order's buyer and seller
- Message: A message within a conversation (user text or system event)

Design Decisions:
    - Conversation is one-to-one with Order; the order is the source of
      truth and ``deal_status`` is a mirror kept in step by OrderService
    - System messages have no sender
"""

from __future__ import annotations

from django.db import models

from core.models import BaseModel
from orders.models import OrderStatus


class MessageType(models.TextChoices):
    """
    Type of message content.

    TEXT: Regular user message
    SYSTEM: Auto-generated event message (e.g., "ORDER STATUS: CONFIRMED")
    """

    TEXT = "text", "Text"
    SYSTEM = "system", "System"


class Conversation(BaseModel):
    """
    The chat thread attached to an order.

    Fields:
        order: The order this conversation negotiates
        buyer / seller: Participants (copied from the order)
        deal_status: Mirror of the order's status
        deal_updated_at: When deal_status last changed
    """

    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="conversation",
    )
    buyer = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="buyer_conversations",
    )
    seller = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="seller_conversations",
    )
    deal_status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )
    deal_updated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "conversations"
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return f"Conversation(order={self.order_id}, deal={self.deal_status})"


class Message(BaseModel):
    """
    A message within a conversation.

    Message Types:
        TEXT: Regular message from a participant
        SYSTEM: Auto-generated event message (sender is NULL)
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="messages",
    )
    sender = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="chat_messages",
    )
    message_type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.TEXT,
    )
    content = models.TextField()

    class Meta:
        db_table = "messages"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"Message({self.message_type}, {self.content[:40]!r})"

    @property
    def is_system(self) -> bool:
        return self.message_type == MessageType.SYSTEM

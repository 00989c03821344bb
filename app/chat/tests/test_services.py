"""
Tests for ConversationService.
"""

import pytest

from chat.models import Conversation, Message
from chat.services import ConversationService, status_message
from orders.models import OrderStatus
from orders.tests.factories import OrderFactory


def test_status_message_is_upper_cased():
    assert status_message("delivered") == "ORDER STATUS: DELIVERED"


@pytest.mark.django_db
class TestConversationService:
    def test_open_for_order_copies_parties_and_status(self):
        order = OrderFactory(conversation=None)

        conversation = ConversationService.open_for_order(order)

        assert conversation.order == order
        assert conversation.buyer_id == order.buyer_id
        assert conversation.seller_id == order.seller_id
        assert conversation.deal_status == OrderStatus.PENDING
        assert conversation.deal_updated_at is not None

    def test_mirror_updates_status_and_posts_system_message(self):
        order = OrderFactory(status=OrderStatus.DELIVERED)

        conversation = ConversationService.mirror_order_status(order)

        assert conversation.deal_status == OrderStatus.DELIVERED
        message = Message.objects.get(conversation=conversation)
        assert message.is_system
        assert message.content == "ORDER STATUS: DELIVERED"

    def test_mirror_creates_missing_conversation(self):
        order = OrderFactory(conversation=None, status=OrderStatus.CONFIRMED)

        ConversationService.mirror_order_status(order)

        conversation = Conversation.objects.get(order=order)
        assert conversation.deal_status == OrderStatus.CONFIRMED
        assert conversation.buyer_id == order.buyer_id

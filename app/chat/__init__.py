"""
Chat app for buyer/seller deal conversations.

Every order has exactly one conversation. The conversation mirrors the
order's status as ``deal_status`` so the chat screen can render the deal
without reading the order, and receives a system message on every change.

Usage:
    from chat.services import ConversationService

    ConversationService.mirror_order_status(order)
"""

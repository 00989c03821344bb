"""
Orders application.

Drives an order through its bounded lifecycle and keeps the linked chat
conversation in step with it. Completing an order makes it eligible for a
seller payout after a configurable delay.

Usage:
    from orders.models import Order, OrderStatus, PayoutStatus
    from orders.services import OrderService
"""

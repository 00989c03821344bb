"""
Push notification templates.

Every kind has a fixed title, a body rendered from a small context dict,
and a ``data`` payload the mobile client uses for deep linking.

Usage:
    from notifications.templates import NotificationKind, render

    rendered = render(NotificationKind.LIKE, {"product_id": "...", "product_name": "Denim Jacket"})
    rendered.title  # "✨ New Like"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from django.db import models


class NotificationKind(models.TextChoices):
    LIKE = "LIKE", "New like"
    COMMENT = "COMMENT", "New comment"
    NEW_ORDER = "NEW_ORDER", "New order"
    NEW_FOLLOWER = "NEW_FOLLOWER", "New follower"
    SUBSCRIPTION_ACTIVE = "SUBSCRIPTION_ACTIVE", "Subscription active"
    PAYOUT_SUCCESS = "PAYOUT_SUCCESS", "Payout sent"
    REFUND_BUYER = "REFUND_BUYER", "Refund issued"
    REFUND_SELLER_ALERT = "REFUND_SELLER_ALERT", "Order refunded"
    EXPIRY_WARNING = "EXPIRY_WARNING", "Plan expiring"
    TRENDING_ITEM = "TRENDING_ITEM", "Trending item"
    DAILY_VISITORS = "DAILY_VISITORS", "Daily visitors"


MONEY_EVENT_KINDS = (
    NotificationKind.PAYOUT_SUCCESS,
    NotificationKind.REFUND_BUYER,
    NotificationKind.REFUND_SELLER_ALERT,
)


@dataclass(frozen=True)
class RenderedNotification:
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)


def format_naira(amount: Decimal | int | float | str) -> str:
    """Thousands-separated amount, kobo shown only when non-zero: 5000 -> "5,000"."""
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def order_ref(order_id: Any) -> str:
    return str(order_id)[:8]


def _like(ctx):
    return RenderedNotification(
        title="✨ New Like",
        body=f"Someone liked your item: {ctx['product_name']}",
        data={"productId": str(ctx["product_id"])},
    )


def _comment(ctx):
    return RenderedNotification(
        title="💬 New Comment",
        body=f"Someone commented on your item: {ctx['product_name']}",
        data={"productId": str(ctx["product_id"])},
    )


def _new_order(ctx):
    return RenderedNotification(
        title="💰 New Order",
        body="You have a new order! Tap to view details and chat with the buyer.",
        data={"screen": "orders"},
    )


def _new_follower(ctx):
    name = ctx.get("display_name") or ctx.get("slug") or "Someone"
    return RenderedNotification(
        title="👤 New Follower",
        body=f"{name} started following you.",
        data={"screen": "profile", "userId": str(ctx["follower_id"])},
    )


def _subscription_active(ctx):
    return RenderedNotification(
        title="👑 PLAN ACTIVATED",
        body=f"Your {str(ctx['plan']).upper()} plan is now active. Your shop is open for business!",
        data={"screen": "seller/settings"},
    )


def _payout_success(ctx):
    return RenderedNotification(
        title="💰 MONEY SENT TO BANK",
        body=(
            f"Success! ₦{format_naira(ctx['amount'])} has been transferred to your bank "
            f"for Order #{order_ref(ctx['order_id'])}."
        ),
        data={"orderId": str(ctx["order_id"]), "type": NotificationKind.PAYOUT_SUCCESS.value},
    )


def _refund_buyer(ctx):
    return RenderedNotification(
        title="🔙 REFUND SUCCESSFUL",
        body=(
            f"₦{format_naira(ctx['amount'])} has been sent back to your original payment "
            f"method for Order #{order_ref(ctx['order_id'])}."
        ),
        data={"orderId": str(ctx["order_id"]), "type": NotificationKind.REFUND_BUYER.value},
    )


def _refund_seller_alert(ctx):
    return RenderedNotification(
        title="⚠️ ORDER REFUNDED",
        body=(
            f"Order #{order_ref(ctx['order_id'])} was refunded. "
            f"₦{format_naira(ctx['amount'])} has been returned to the buyer."
        ),
        data={"orderId": str(ctx["order_id"]), "type": NotificationKind.REFUND_SELLER_ALERT.value},
    )


def _expiry_warning(ctx):
    days = ctx.get("days", 3)
    return RenderedNotification(
        title="Plan Expiring",
        body=f"Your {ctx['plan']} plan expires in {days} days. Renew now to keep your shop active!",
        data={"screen": "seller/settings"},
    )


def _trending_item(ctx):
    return RenderedNotification(
        title="🔥 YOUR ITEM IS TRENDING!",
        body=f"Your '{ctx['product_name']}' has received {ctx['view_count']} views today. It's hot! ⚡",
        data={"screen": "ProductDetails", "productId": str(ctx["product_id"])},
    )


def _daily_visitors(ctx):
    count = ctx["count"]
    people = "person" if count == 1 else "people"
    action, target = ("visited", "store") if ctx.get("is_seller") else ("viewed", "profile")
    return RenderedNotification(
        title="👁️ TODAY'S VISITOR LOG",
        body=f"{count} {people} {action} your {target} today. See who they are!",
        data={"screen": "Activity"},
    )


_RENDERERS = {
    NotificationKind.LIKE: _like,
    NotificationKind.COMMENT: _comment,
    NotificationKind.NEW_ORDER: _new_order,
    NotificationKind.NEW_FOLLOWER: _new_follower,
    NotificationKind.SUBSCRIPTION_ACTIVE: _subscription_active,
    NotificationKind.PAYOUT_SUCCESS: _payout_success,
    NotificationKind.REFUND_BUYER: _refund_buyer,
    NotificationKind.REFUND_SELLER_ALERT: _refund_seller_alert,
    NotificationKind.EXPIRY_WARNING: _expiry_warning,
    NotificationKind.TRENDING_ITEM: _trending_item,
    NotificationKind.DAILY_VISITORS: _daily_visitors,
}


def render(kind: str, context: dict[str, Any]) -> RenderedNotification:
    """
    Render the template for ``kind``.

    Raises:
        ValueError: Unknown kind
        KeyError: A placeholder missing from ``context``
    """
    return _RENDERERS[NotificationKind(kind)](context)

"""
Scheduled notification sweeps.

Each sweep builds one PushMessage per recipient and hands the whole list to
``ExpoPushClient.send_batch``. Sweeps bypass the outbox: a lost batch is
not redelivered.

Sweeps:
    expiry_warnings: Subscriptions expiring EXPIRY_WARNING_DAYS from today
    trending_alerts: Products with TRENDING_VIEW_THRESHOLD+ unique viewers today
    daily_visitor_digest: Per-profile count of today's unique visitors
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from django.conf import settings
from django.core.cache import cache
from django.db.models import Count
from django.utils import timezone

from authentication.models import Profile
from marketplace.models import Product, ProductView, ProfileView
from notifications.push_client import ExpoPushClient, PushMessage
from notifications.templates import NotificationKind, render
from payments.models import Subscription, SubscriptionStatus

logger = logging.getLogger(__name__)

TRENDING_ALERT_TTL_SECONDS = 2 * 24 * 60 * 60


def _message(token: str, kind: str, context: dict) -> PushMessage:
    rendered = render(kind, context)
    return PushMessage(to=token, title=rendered.title, body=rendered.body, data=rendered.data)


def _today() -> date:
    return timezone.localdate()


def expiry_warnings(today: date | None = None) -> dict:
    """Warn subscribers whose plan expires on ``today + EXPIRY_WARNING_DAYS``."""
    today = today or _today()
    days = settings.EXPIRY_WARNING_DAYS
    target = today + timedelta(days=days)

    subscriptions = (
        Subscription.objects.filter(status=SubscriptionStatus.ACTIVE, expiry__date=target)
        .exclude(account__push_token="")
        .select_related("account")
    )

    messages = [
        _message(
            sub.account.push_token,
            NotificationKind.EXPIRY_WARNING,
            {"plan": sub.plan, "days": days},
        )
        for sub in subscriptions
    ]
    sent = ExpoPushClient.send_batch(messages) if messages else 0

    logger.info(
        f"Expiry warnings sent to {sent} of {len(messages)} shop owners",
        extra={"target_date": target.isoformat(), "candidates": len(messages), "sent": sent},
    )
    return {"candidates": len(messages), "sent": sent}


def trending_alerts(today: date | None = None) -> dict:
    """
    Alert sellers whose products crossed the trending threshold today.

    At most one alert per product per day: the cache key is taken with
    ``cache.add`` before the message is built.
    """
    today = today or _today()

    hot = (
        ProductView.objects.filter(view_date=today)
        .values("product")
        .annotate(view_count=Count("viewer", distinct=True))
        .filter(view_count__gte=settings.TRENDING_VIEW_THRESHOLD)
        .order_by()
    )
    view_counts = {row["product"]: row["view_count"] for row in hot}

    products = (
        Product.objects.filter(pk__in=view_counts)
        .exclude(seller__push_token="")
        .select_related("seller")
    )

    messages = []
    for product in products:
        if not cache.add(f"trending-alert:{product.pk}:{today.isoformat()}", 1, TRENDING_ALERT_TTL_SECONDS):
            continue
        messages.append(
            _message(
                product.seller.push_token,
                NotificationKind.TRENDING_ITEM,
                {
                    "product_id": str(product.pk),
                    "product_name": product.name,
                    "view_count": view_counts[product.pk],
                },
            )
        )

    sent = ExpoPushClient.send_batch(messages) if messages else 0
    logger.info(
        f"Trending alerts sent to {sent} sellers",
        extra={"trending": len(view_counts), "candidates": len(messages), "sent": sent},
    )
    return {"trending": len(view_counts), "candidates": len(messages), "sent": sent}


def daily_visitor_digest(today: date | None = None) -> dict:
    """Tell each viewed profile how many unique visitors it had today."""
    today = today or _today()

    visits = (
        ProfileView.objects.filter(view_date=today)
        .values("profile")
        .annotate(visitors=Count("viewer", distinct=True))
        .order_by()
    )
    counts = {row["profile"]: row["visitors"] for row in visits}

    profiles = Profile.objects.filter(pk__in=counts).exclude(push_token="")
    sellers = set(
        Subscription.objects.filter(account_id__in=counts, is_seller=True).values_list(
            "account_id", flat=True
        )
    )

    messages = [
        _message(
            profile.push_token,
            NotificationKind.DAILY_VISITORS,
            {"count": counts[profile.pk], "is_seller": profile.pk in sellers},
        )
        for profile in profiles
    ]
    sent = ExpoPushClient.send_batch(messages) if messages else 0

    logger.info(
        f"Visitor digests sent to {sent} users",
        extra={"viewed_profiles": len(counts), "candidates": len(messages), "sent": sent},
    )
    return {"candidates": len(messages), "sent": sent}

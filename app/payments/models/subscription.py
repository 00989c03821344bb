"""
Subscription model for seller plans.

A subscription is upgraded by a verified ``charge.success`` webhook and
lasts a fixed window from the time the payment is processed. There is at
most one Subscription per profile; each payment overwrites plan, weight and
expiry.

Usage:
    from payments.models import Subscription

    sub = Subscription.objects.get(account=profile)
    if sub.is_active:
        ...
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from core.models import BaseModel

class PlanType(models.TextChoices):
    """Paid plans. Diamond ranks above standard in search and feeds."""

    STANDARD = "standard", "Standard"
    DIAMOND = "diamond", "Diamond"

class SubscriptionStatus(models.TextChoices):
    INACTIVE = "inactive", "Inactive"
    ACTIVE = "active", "Active"

def prestige_weight_for(plan_type: str) -> int:
    """Ranking weight granted by ``plan_type``: 3 for diamond, otherwise 2."""
    return 3 if plan_type == PlanType.DIAMOND else 2

class Subscription(BaseModel):
    """
    An account's current plan.

    Fields:
        account: Profile the plan belongs to
        plan: Plan type from the last processed payment
        prestige_weight: Ranking weight (3 diamond, 2 otherwise)
        expiry: End of the paid window
        status: active after an upgrade; inactive before any payment
        is_seller: Whether the account has shop features enabled
    """

    account = models.OneToOneField(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="subscription",
    )
    plan = models.CharField(max_length=20, blank=True)
    prestige_weight = models.PositiveSmallIntegerField(default=0)
    expiry = models.DateTimeField(null=True, blank=True, db_index=True)
    status = models.CharField(
        max_length=10,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.INACTIVE,
        db_index=True,
    )
    is_seller = models.BooleanField(default=False)

    class Meta:
        db_table = "subscriptions"
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return f"Subscription({self.account_id}, {self.plan or 'none'}, {self.status})"

    @property
    def is_active(self) -> bool:
        return (
            self.status == SubscriptionStatus.ACTIVE
            and self.expiry is not None
            and self.expiry > timezone.now()
        )

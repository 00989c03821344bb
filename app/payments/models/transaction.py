"""
Transaction model.

One row per processed gateway payment. The unique ``reference`` is what
makes webhook processing idempotent: a replayed event finds its row and is
acknowledged without touching the subscription again.
"""

from __future__ import annotations

from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class TransactionStatus(models.TextChoices):
    SUCCESS = "success", "Success"
    FAILED = "failed", "Failed"


class TransactionType(models.TextChoices):
    SUBSCRIPTION_UPGRADE = "SUBSCRIPTION_UPGRADE", "Subscription Upgrade"


class Transaction(UUIDPrimaryKeyMixin, BaseModel):
    """
    Record of a processed payment.

    Fields:
        owner: Profile that paid
        amount: Amount in major currency units (gateway minor units / 100)
        plan_type: Plan purchased
        status: Outcome recorded for the payment
        reference: Gateway payment reference (unique)
        type: What the payment was for
    """

    owner = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    plan_type = models.CharField(max_length=20)
    status = models.CharField(
        max_length=10,
        choices=TransactionStatus.choices,
        default=TransactionStatus.SUCCESS,
    )
    reference = models.CharField(
        max_length=100,
        unique=True,
        help_text="Gateway payment reference; one transaction per reference",
    )
    type = models.CharField(
        max_length=40,
        choices=TransactionType.choices,
        default=TransactionType.SUBSCRIPTION_UPGRADE,
    )

    class Meta:
        db_table = "transactions"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Transaction({self.reference}, {self.amount}, {self.status})"

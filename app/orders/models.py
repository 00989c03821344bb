"""
Order model and its lifecycle.

Status State Machine:
    pending → confirmed → delivered → completed
    pending → cancelled

    completed and cancelled are terminal.

Payout Status:
    none → pending (on completion)
    pending/retry_queued → processing (claim by the payout scheduler)
    processing → paid | retry_queued | failed | manual_review
    processing → processing (gateway timeout, resolved by reconciliation)

    paid, failed and manual_review are terminal for automated processing.

Design Decisions:
    - ``status`` is a django-fsm field; transitions are the only writers
    - ``payout_status`` is a plain field written through conditional
      ``QuerySet.update()`` calls, so it doubles as the payout lock
    - ``payout_eligible_at`` only moves forward
"""

from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone
from django_fsm import FSMField, transition

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class OrderStatus(models.TextChoices):
    """
    States for the Order lifecycle.

    Terminal states: COMPLETED, CANCELLED
    """

    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"
    DELIVERED = "delivered", "Delivered"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class PayoutStatus(models.TextChoices):
    """
    Seller payout progress for an order.

    PROCESSING is the claim marker: exactly one scheduler run owns the
    transfer call while an order is in this state.
    """

    NONE = "none", "None"
    PENDING = "pending", "Pending"
    PROCESSING = "processing", "Processing"
    RETRY_QUEUED = "retry_queued", "Retry Queued"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    MANUAL_REVIEW = "manual_review", "Manual Review"


TERMINAL_PAYOUT_STATUSES = frozenset(
    {PayoutStatus.PAID, PayoutStatus.FAILED, PayoutStatus.MANUAL_REVIEW}
)

CLAIMABLE_PAYOUT_STATUSES = (PayoutStatus.PENDING, PayoutStatus.RETRY_QUEUED)


class Order(UUIDPrimaryKeyMixin, BaseModel):
    """
    A purchase from one seller by one buyer.

    Fields:
        buyer / seller: Profiles on each side of the deal
        total_amount: Amount in major currency units (e.g. naira)
        delivery_address: Free-text address captured at checkout
        status: Lifecycle state (django-fsm)
        completed_at: When the buyer confirmed receipt
        payout_status: Seller payout progress
        payout_eligible_at: Earliest time the payout scheduler may pick it up
        payout_error_log: Last gateway error or operator note
        payout_attempts: Number of transfer claims made so far
        payout_reference: Reference sent with the latest transfer request
        payout_claimed_at: When the current claim was taken

    Usage:
        order.confirm_payment()
        order.save()
    """

    buyer = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.PROTECT,
        related_name="purchases",
    )
    seller = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.PROTECT,
        related_name="sales",
    )
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Order total in major currency units",
    )
    delivery_address = models.TextField(blank=True)

    status = FSMField(
        default=OrderStatus.PENDING,
        choices=OrderStatus.choices,
        db_index=True,
        help_text="Current state of the order (managed by FSM)",
    )
    completed_at = models.DateTimeField(null=True, blank=True)

    # ==========================================================================
    # Payout
    # ==========================================================================

    payout_status = models.CharField(
        max_length=20,
        choices=PayoutStatus.choices,
        default=PayoutStatus.NONE,
        db_index=True,
    )
    payout_eligible_at = models.DateTimeField(null=True, blank=True, db_index=True)
    payout_error_log = models.TextField(null=True, blank=True)
    payout_attempts = models.PositiveIntegerField(default=0)
    payout_reference = models.CharField(max_length=100, blank=True, db_index=True)
    payout_claimed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["status", "payout_status", "payout_eligible_at"],
                name="order_payout_due_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_amount__gt=0),
                name="order_total_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"Order #{self.short_id} ({self.status}, payout {self.payout_status})"

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(field=status, source=OrderStatus.PENDING, target=OrderStatus.CONFIRMED)
    def confirm_payment(self):
        """Seller confirms the buyer's payment arrived."""

    @transition(field=status, source=OrderStatus.PENDING, target=OrderStatus.CANCELLED)
    def cancel(self):
        """Seller cancels an order that was never paid."""

    @transition(field=status, source=OrderStatus.CONFIRMED, target=OrderStatus.DELIVERED)
    def mark_sent(self):
        """Seller hands the item over for delivery."""

    @transition(field=status, source=OrderStatus.DELIVERED, target=OrderStatus.COMPLETED)
    def confirm_receipt(self):
        """
        Buyer confirms the item arrived.

        Opens the payout: ``payout_status`` becomes pending and the order
        becomes eligible once the configured delay has passed. An existing
        eligibility time is never moved backwards.
        """
        now = timezone.now()
        eligible_at = now + timedelta(minutes=settings.PAYOUT_ELIGIBILITY_DELAY_MINUTES)
        if self.payout_eligible_at and self.payout_eligible_at > eligible_at:
            eligible_at = self.payout_eligible_at

        self.completed_at = now
        self.payout_status = PayoutStatus.PENDING
        self.payout_eligible_at = eligible_at

    @property
    def is_payout_terminal(self) -> bool:
        return self.payout_status in TERMINAL_PAYOUT_STATUSES

    @property
    def payout_reason(self) -> str:
        """Transfer narration shown on the seller's bank statement."""
        return f"Payout for Order #{self.short_id}"

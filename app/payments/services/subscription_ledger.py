"""
Subscription ledger: applies verified payments to account plans.

A payment is applied at most once per gateway reference. The reference
check, the Subscription write, the Transaction insert and the outbox row
for the confirmation push all happen in one database transaction, with the
unique constraint on ``Transaction.reference`` as the final guard against
two deliveries of the same event racing each other.

Usage:
    from payments.services import SubscriptionLedger

    result = SubscriptionLedger.apply_upgrade(
        account_id=profile.pk,
        plan_type="diamond",
        amount_minor_units=500000,
        reference="ref_123",
    )
    if result.data.replayed:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import DatabaseError, IntegrityError
from django.utils import timezone

from authentication.models import Profile
from core.exceptions import PersistenceError, ValidationError
from core.services import BaseService, ServiceResult
from notifications.services import NotificationDispatcher
from notifications.templates import NotificationKind
from payments.models import (
    Subscription,
    SubscriptionStatus,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from payments.models.subscription import prestige_weight_for

if TYPE_CHECKING:
    from uuid import UUID


@dataclass
class UpgradeResult:
    """
    Outcome of applying a payment.

    Attributes:
        transaction: The Transaction recorded for the reference
        subscription: The account's Subscription (None on replay)
        replayed: True when the reference had already been applied
    """

    transaction: Transaction
    subscription: Subscription | None = None
    replayed: bool = False


def minor_to_major(amount_minor_units: int) -> Decimal:
    """Kobo to naira: 500000 -> Decimal("5000.00")."""
    return (Decimal(amount_minor_units) / Decimal(100)).quantize(Decimal("0.01"))


class SubscriptionLedger(BaseService):
    """Idempotent application of subscription payments."""

    @classmethod
    def apply_upgrade(
        cls,
        account_id: UUID | str,
        plan_type: str,
        amount_minor_units: int,
        reference: str,
    ) -> ServiceResult[UpgradeResult]:
        """
        Upgrade ``account_id`` to ``plan_type`` for one payment.

        Sets plan, prestige weight, a fresh expiry window, active status and
        seller access; records a Transaction; queues the confirmation push.
        A reference that was already applied is reported as a replay and
        changes nothing.

        Raises:
            ValidationError: No profile with ``account_id``
            PersistenceError: The Subscription write failed
        """
        logger = cls.get_logger()
        log_context = {
            "account_id": str(account_id),
            "plan_type": plan_type,
            "reference": reference,
        }

        prior = cls._find_applied(reference)
        if prior is not None:
            logger.info("Payment reference already applied", extra=log_context)
            return ServiceResult.success(UpgradeResult(transaction=prior, replayed=True))

        profile = Profile.objects.filter(pk=account_id).first()
        if profile is None:
            raise ValidationError(
                "Unknown account",
                error_code="UNKNOWN_ACCOUNT",
                details={"account_id": str(account_id)},
            )

        expiry = timezone.now() + timedelta(days=settings.SUBSCRIPTION_PERIOD_DAYS)

        try:
            with cls.atomic():
                prior = cls._find_applied(reference, lock=True)
                if prior is not None:
                    logger.info("Payment reference applied concurrently", extra=log_context)
                    return ServiceResult.success(UpgradeResult(transaction=prior, replayed=True))

                subscription = cls._write_subscription(profile, plan_type, expiry)

                transaction_row = Transaction.objects.create(
                    owner=profile,
                    amount=minor_to_major(amount_minor_units),
                    plan_type=plan_type,
                    status=TransactionStatus.SUCCESS,
                    reference=reference,
                    type=TransactionType.SUBSCRIPTION_UPGRADE,
                )

                NotificationDispatcher.enqueue(
                    recipient=profile,
                    kind=NotificationKind.SUBSCRIPTION_ACTIVE,
                    context={"plan": plan_type},
                )
        except IntegrityError:
            # Lost the insert race on Transaction.reference
            prior = cls._find_applied(reference)
            if prior is None:
                raise
            logger.info("Payment reference applied concurrently", extra=log_context)
            return ServiceResult.success(UpgradeResult(transaction=prior, replayed=True))

        logger.info(
            "Subscription upgraded",
            extra={
                **log_context,
                "prestige_weight": subscription.prestige_weight,
                "expiry": expiry.isoformat(),
                "transaction_id": str(transaction_row.id),
            },
        )
        return ServiceResult.success(
            UpgradeResult(transaction=transaction_row, subscription=subscription)
        )

    @classmethod
    def _find_applied(cls, reference: str, lock: bool = False) -> Transaction | None:
        queryset = Transaction.objects.filter(reference=reference)
        if lock:
            queryset = queryset.select_for_update()
        return queryset.first()

    @classmethod
    def _write_subscription(cls, profile: Profile, plan_type: str, expiry) -> Subscription:
        try:
            subscription, _ = Subscription.objects.update_or_create(
                account=profile,
                defaults={
                    "plan": plan_type,
                    "prestige_weight": prestige_weight_for(plan_type),
                    "expiry": expiry,
                    "status": SubscriptionStatus.ACTIVE,
                    "is_seller": True,
                },
            )
        except DatabaseError as e:
            raise PersistenceError(
                "Could not update subscription",
                details={"account_id": str(profile.pk), "error": str(e)},
            ) from e
        return subscription

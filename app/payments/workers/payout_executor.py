"""
Payout executor worker for paying sellers of completed orders.

This module provides Celery tasks that move money from the platform's
Paystack balance to sellers once an order's payout eligibility window has
passed.

Tasks:
- process_due_payouts: Periodic task that claims due orders and transfers funds
- reconcile_stuck_payouts: Periodic task that settles claims whose transfer
  outcome was never learned

Ownership of a transfer is decided by a single conditional UPDATE on
``Order.payout_status``: a worker that affects zero rows lost the claim and
must not call the gateway.

Usage:
    # Typically called via celery-beat schedule
    from payments.workers import process_due_payouts

    process_due_payouts.delay()
"""

from __future__ import annotations

import logging
import uuid
from datetime import timedelta
from decimal import ROUND_FLOOR, Decimal

from celery import shared_task
from django.conf import settings
from django.db.models import F
from django.utils import timezone

from notifications.services import NotificationDispatcher
from notifications.templates import NotificationKind
from orders.models import CLAIMABLE_PAYOUT_STATUSES, Order, OrderStatus, PayoutStatus
from payments.adapters import PaystackAdapter, TransferVerification
from payments.exceptions import GatewayError, GatewayTimeoutError, TransientGatewayError
from payments.services.transfer_policy import (
    Failed,
    ManualReview,
    Paid,
    RetryQueued,
    TransferOutcome,
    apply_retry_cap,
    classify,
    next_eligible_at,
    retry_later,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MISSING_RECIPIENT_ERROR = "Seller has no payout recipient registered"

SUMMARY_KEYS = ("selected", "paid", "retry_queued", "failed", "manual_review", "skipped", "ambiguous")


def to_minor_units(amount: Decimal) -> int:
    """Naira to kobo, rounding down: Decimal("19999.99") -> 1999999."""
    return int((Decimal(amount) * 100).to_integral_value(rounding=ROUND_FLOOR))


def transfer_reference(order: Order) -> str:
    """Fresh per claim; Paystack rejects a reused reference."""
    return f"po_{order.id.hex}_{uuid.uuid4().hex[:8]}"


def _retry_delay() -> timedelta:
    return timedelta(minutes=settings.PAYOUT_RETRY_DELAY_MINUTES)


# =============================================================================
# Periodic Task: Process Due Payouts
# =============================================================================


@shared_task
def process_due_payouts() -> dict:
    """
    Transfer funds for completed orders whose payout is due.

    The task:
    1. Selects completed orders in pending/retry_queued with
       payout_eligible_at <= now, oldest first, up to PAYOUT_BATCH_SIZE
    2. Fails orders whose seller has no recipient code, without a transfer
    3. Claims each remaining order (conditional update to processing)
    4. Requests the transfer and persists the classified outcome

    Returns:
        Dict with counts for selected, paid, retry_queued, failed,
        manual_review, skipped (claim lost) and ambiguous (no answer)
    """
    now = timezone.now()
    summary = dict.fromkeys(SUMMARY_KEYS, 0)

    due_orders = list(
        Order.objects.filter(
            status=OrderStatus.COMPLETED,
            payout_status__in=CLAIMABLE_PAYOUT_STATUSES,
            payout_eligible_at__lte=now,
        )
        .select_related("seller")
        .order_by("payout_eligible_at", "created_at")[: settings.PAYOUT_BATCH_SIZE]
    )
    summary["selected"] = len(due_orders)

    logger.info("Starting payout scan", extra={"due_count": len(due_orders)})

    for order in due_orders:
        result = _process_order(order)
        summary[result] += 1

    logger.info(
        f"Payout scan complete: paid {summary['paid']} of {summary['selected']}",
        extra=summary,
    )
    return summary


def _process_order(order: Order) -> str:
    """Run one order through claim, transfer and outcome. Returns a summary key."""
    log_context = {"order_id": str(order.id), "seller_id": str(order.seller_id)}
    recipient = order.seller.payout_recipient_code

    if not recipient:
        updated = Order.objects.filter(pk=order.pk, payout_status=order.payout_status).update(
            payout_status=PayoutStatus.FAILED,
            payout_error_log=MISSING_RECIPIENT_ERROR,
        )
        if not updated:
            return "skipped"
        logger.warning("Payout failed: seller has no recipient", extra=log_context)
        return "failed"

    attempt = order.payout_attempts + 1
    reference = transfer_reference(order)
    now = timezone.now()

    claimed = Order.objects.filter(
        pk=order.pk,
        payout_status=order.payout_status,
        payout_attempts=order.payout_attempts,
    ).update(
        payout_status=PayoutStatus.PROCESSING,
        payout_attempts=F("payout_attempts") + 1,
        payout_reference=reference,
        payout_claimed_at=now,
    )
    if claimed != 1:
        logger.info("Payout claim lost to another worker", extra=log_context)
        return "skipped"

    amount_minor = to_minor_units(order.total_amount)
    log_context = {**log_context, "transfer_reference": reference, "attempt": attempt}
    logger.info(
        "Payout claimed, requesting transfer",
        extra={**log_context, "amount_minor": amount_minor},
    )

    try:
        response = PaystackAdapter.initiate_transfer(
            amount_minor=amount_minor,
            recipient=recipient,
            reason=order.payout_reason,
            reference=reference,
        )
    except GatewayTimeoutError as e:
        Order.objects.filter(pk=order.pk, payout_status=PayoutStatus.PROCESSING).update(
            payout_error_log=f"Transfer outcome ambiguous, awaiting reconciliation: {e.message}",
        )
        logger.warning("Transfer outcome ambiguous", extra=log_context)
        return "ambiguous"
    except TransientGatewayError as e:
        outcome = retry_later(e.gateway_message, timezone.now(), _retry_delay(), order.payout_eligible_at)
    else:
        outcome = classify(
            response,
            now=timezone.now(),
            retry_delay=_retry_delay(),
            previous_eligible_at=order.payout_eligible_at,
        )
    outcome = apply_retry_cap(outcome, attempt, settings.PAYOUT_MAX_RETRY_ATTEMPTS)
    return _persist_outcome(order, reference, outcome, log_context)


def _persist_outcome(order: Order, reference: str, outcome: TransferOutcome, log_context: dict) -> str:
    """Write ``outcome`` if this worker's claim still stands."""
    claim = Order.objects.filter(
        pk=order.pk,
        payout_status=PayoutStatus.PROCESSING,
        payout_reference=reference,
    )

    if isinstance(outcome, Paid):
        updated = claim.update(payout_status=PayoutStatus.PAID, payout_error_log=None)
        if updated:
            logger.info("Payout paid", extra=log_context)
            _notify_paid(order)
        key = "paid"
    elif isinstance(outcome, RetryQueued):
        updated = claim.update(
            payout_status=PayoutStatus.RETRY_QUEUED,
            payout_eligible_at=outcome.eligible_at,
            payout_error_log=outcome.reason,
        )
        logger.warning(
            "Payout queued for retry",
            extra={**log_context, "retry_at": outcome.eligible_at.isoformat()},
        )
        key = "retry_queued"
    elif isinstance(outcome, ManualReview):
        updated = claim.update(
            payout_status=PayoutStatus.MANUAL_REVIEW,
            payout_error_log=outcome.reason,
        )
        logger.error("Payout retry limit reached, needs manual review", extra=log_context)
        key = "manual_review"
    else:
        updated = claim.update(
            payout_status=PayoutStatus.FAILED,
            payout_error_log=outcome.reason,
        )
        logger.error(
            "Payout failed",
            extra={**log_context, "gateway_message": outcome.reason},
        )
        key = "failed"

    if not updated:
        logger.warning("Payout claim changed before outcome was written", extra=log_context)
        return "skipped"
    return key


def _notify_paid(order: Order) -> None:
    try:
        NotificationDispatcher.dispatch_money_event(
            event_type=NotificationKind.PAYOUT_SUCCESS,
            user_id=order.seller_id,
            amount=order.total_amount,
            order_id=order.id,
        )
    except Exception:
        logger.exception(
            "Could not queue payout notification",
            extra={"order_id": str(order.id)},
        )


# =============================================================================
# Periodic Task: Reconcile Stuck Payouts
# =============================================================================


@shared_task
def reconcile_stuck_payouts() -> dict:
    """
    Settle claims left in processing longer than PAYOUT_STUCK_AFTER_MINUTES.

    Each stuck order is verified against the gateway by its transfer
    reference:
    - success → paid
    - failed / reversed → failed
    - not found → retry_queued (no money moved)
    - pending → left alone

    Returns:
        Dict with counts for checked, paid, failed, retry_queued, pending, errors
    """
    cutoff = timezone.now() - timedelta(minutes=settings.PAYOUT_STUCK_AFTER_MINUTES)
    summary = dict.fromkeys(("checked", "paid", "failed", "retry_queued", "pending", "errors"), 0)

    stuck_orders = Order.objects.filter(
        payout_status=PayoutStatus.PROCESSING,
        payout_claimed_at__lte=cutoff,
    ).order_by("payout_claimed_at")[: settings.PAYOUT_BATCH_SIZE]

    for order in stuck_orders:
        summary["checked"] += 1
        log_context = {"order_id": str(order.id), "transfer_reference": order.payout_reference}

        try:
            state = PaystackAdapter.verify_transfer(order.payout_reference)
        except GatewayError as e:
            logger.warning(
                f"Could not verify stuck payout: {e.error_code}",
                extra=log_context,
            )
            summary["errors"] += 1
            continue

        claim = Order.objects.filter(
            pk=order.pk,
            payout_status=PayoutStatus.PROCESSING,
            payout_reference=order.payout_reference,
        )

        if state == TransferVerification.SUCCESS:
            if claim.update(payout_status=PayoutStatus.PAID, payout_error_log=None):
                logger.info("Stuck payout confirmed paid", extra=log_context)
                _notify_paid(order)
                summary["paid"] += 1
        elif state in (TransferVerification.FAILED, TransferVerification.REVERSED):
            if claim.update(
                payout_status=PayoutStatus.FAILED,
                payout_error_log=f"Transfer {state} at gateway",
            ):
                logger.error("Stuck payout failed at gateway", extra=log_context)
                summary["failed"] += 1
        elif state == TransferVerification.NOT_FOUND:
            now = timezone.now()
            if claim.update(
                payout_status=PayoutStatus.RETRY_QUEUED,
                payout_eligible_at=next_eligible_at(order.payout_eligible_at, now, timedelta(0)),
                payout_error_log="Transfer not found at gateway, requeued",
            ):
                logger.warning("Stuck payout not found at gateway, requeued", extra=log_context)
                summary["retry_queued"] += 1
        else:
            summary["pending"] += 1

    logger.info("Stuck payout reconciliation complete", extra=summary)
    return summary

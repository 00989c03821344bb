"""
Celery tasks for payment processing.

The payout tasks live in ``payments.workers``; they are re-exported here so
Celery's autodiscovery registers them.

Usage:
    from payments.tasks import process_due_payouts

    process_due_payouts.delay()
"""

from payments.workers.payout_executor import process_due_payouts, reconcile_stuck_payouts

__all__ = [
    "process_due_payouts",
    "reconcile_stuck_payouts",
]

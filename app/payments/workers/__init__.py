"""
Workers for async payment processing.

This module contains Celery tasks for background payout operations:
- process_due_payouts: Claims due orders and transfers funds to sellers
- reconcile_stuck_payouts: Verifies ambiguous transfers against the gateway

Usage:
    from payments.workers import process_due_payouts, reconcile_stuck_payouts

    process_due_payouts.delay()
    reconcile_stuck_payouts.delay()
"""

from payments.workers.payout_executor import (
    process_due_payouts,
    reconcile_stuck_payouts,
    to_minor_units,
)

__all__ = [
    "process_due_payouts",
    "reconcile_stuck_payouts",
    "to_minor_units",
]

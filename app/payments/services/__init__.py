"""
Payment services.

This module provides:
- SubscriptionLedger: Applies verified payments to subscriptions, once per reference
- transfer_policy: Pure classification of transfer responses into payout outcomes

Usage:
    from payments.services import SubscriptionLedger

    result = SubscriptionLedger.apply_upgrade(
        account_id=profile.pk,
        plan_type="standard",
        amount_minor_units=250000,
        reference="ref_abc",
    )
"""

from payments.services.subscription_ledger import SubscriptionLedger, UpgradeResult, minor_to_major
from payments.services.transfer_policy import (
    Failed,
    ManualReview,
    Paid,
    RetryQueued,
    TransferOutcome,
    apply_retry_cap,
    classify,
    next_eligible_at,
)

__all__ = [
    "Failed",
    "ManualReview",
    "Paid",
    "RetryQueued",
    "SubscriptionLedger",
    "TransferOutcome",
    "UpgradeResult",
    "apply_retry_cap",
    "classify",
    "minor_to_major",
    "next_eligible_at",
]

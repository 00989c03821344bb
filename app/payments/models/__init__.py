"""
Payment domain models.

This module contains:
- Subscription: The account's paid plan (one per profile)
- Transaction: Append-only record of each processed payment, unique per
  gateway reference
"""

from payments.models.subscription import PlanType, Subscription, SubscriptionStatus
from payments.models.transaction import Transaction, TransactionStatus, TransactionType

__all__ = [
    "PlanType",
    "Subscription",
    "SubscriptionStatus",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
]

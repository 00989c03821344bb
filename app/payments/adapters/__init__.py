"""
Payment adapters for external services.

All outbound Paystack calls go through PaystackAdapter so that timeouts,
error translation and logging are consistent.

Usage:
    from payments.adapters import PaystackAdapter

    response = PaystackAdapter.initiate_transfer(
        amount_minor=500000,
        recipient="RCP_abc123",
        reason="Payout for Order #1a2b3c4d",
        reference="po_1a2b3c4d_9f8e7d6c",
    )
"""

from payments.adapters.paystack_adapter import (
    PaystackAdapter,
    TransferResponse,
    TransferVerification,
)

__all__ = [
    "PaystackAdapter",
    "TransferResponse",
    "TransferVerification",
]

"""
Paystack webhook handling.

- signature: HMAC-SHA512 verification of the raw body
- events: typed PaymentEvent parsing
- views: the HTTP endpoint
"""

from payments.webhooks.events import CHARGE_SUCCESS, PaymentEvent, PaymentMetadata, parse_event
from payments.webhooks.signature import compute_signature, verify_signature

__all__ = [
    "CHARGE_SUCCESS",
    "PaymentEvent",
    "PaymentMetadata",
    "compute_signature",
    "parse_event",
    "verify_signature",
]

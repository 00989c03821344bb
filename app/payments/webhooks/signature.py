"""
Paystack webhook signature verification.

Paystack signs the raw request body with HMAC-SHA512 keyed by the account's
secret key and sends the hex digest in the ``x-paystack-signature`` header.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

from core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def compute_signature(body: bytes, secret: str) -> str:
    """Hex HMAC-SHA512 of ``body`` keyed by ``secret``."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha512).hexdigest()


def verify_signature(body: bytes, signature: str | None, secret: str | None) -> None:
    """
    Check ``signature`` against the body's expected HMAC.

    Comparison is constant-time. The claimed signature is never logged.

    Raises:
        AuthenticationError: Secret not configured, header missing, or mismatch
    """
    if not secret:
        logger.warning("Paystack secret not configured, rejecting webhook")
        raise AuthenticationError("Webhook secret not configured", error_code="SIGNATURE_UNVERIFIABLE")

    if not signature:
        logger.warning("Webhook received without signature header")
        raise AuthenticationError("Missing signature", error_code="SIGNATURE_MISSING")

    expected = compute_signature(body, secret)
    if not hmac.compare_digest(expected, signature.strip().lower()):
        logger.warning("Webhook signature verification failed", extra={"body_bytes": len(body)})
        raise AuthenticationError("Invalid signature", error_code="SIGNATURE_MISMATCH")

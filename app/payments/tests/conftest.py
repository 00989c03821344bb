"""
Fixtures for payment tests.

Provides:
- Charge webhook payload builders and signing helpers
- Canned Paystack transfer responses
"""

import json

import pytest
from django.conf import settings

from authentication.tests.factories import ProfileFactory
from payments.adapters import TransferResponse
from payments.webhooks.signature import compute_signature


# =============================================================================
# Webhook Fixtures
# =============================================================================


@pytest.fixture
def account(db):
    """Profile paying for a plan."""
    return ProfileFactory()


@pytest.fixture
def charge_payload():
    """Build a charge.success payload dict."""

    def _payload(profile_id, plan_type="diamond", amount=500000, reference="ref_scn_b"):
        return {
            "event": "charge.success",
            "data": {
                "reference": reference,
                "amount": amount,
                "metadata": {"profile_id": str(profile_id), "plan_type": plan_type},
            },
        }

    return _payload


@pytest.fixture
def sign():
    """Serialize a payload and sign it with the configured secret."""

    def _sign(payload: dict) -> tuple[bytes, str]:
        body = json.dumps(payload).encode("utf-8")
        return body, compute_signature(body, settings.PAYSTACK_SECRET_KEY)

    return _sign


# =============================================================================
# Transfer Fixtures
# =============================================================================


@pytest.fixture
def transfer_ok():
    return TransferResponse(
        ok=True,
        message="Transfer has been queued",
        status_code=200,
        data={"transfer_code": "TRF_1ptvuv321ahaa7q", "status": "success"},
    )


@pytest.fixture
def transfer_low_balance():
    return TransferResponse(
        ok=False,
        message="Your balance is not enough to fulfil this request",
        status_code=400,
    )


@pytest.fixture
def transfer_bad_recipient():
    return TransferResponse(ok=False, message="Recipient specified is invalid", status_code=400)

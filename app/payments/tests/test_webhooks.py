"""
Tests for the Paystack webhook endpoint.

Requests are built with RequestFactory and signed with the test secret.
"""

import json
from uuid import uuid4

import pytest
from django.test import RequestFactory
from django.urls import reverse
from kombu.exceptions import OperationalError

from notifications.models import PushNotification
from payments.models import Subscription, Transaction
from payments.webhooks.signature import compute_signature
from payments.webhooks.views import paystack_webhook


@pytest.fixture
def rf():
    return RequestFactory()


def _post(rf, body: bytes, signature: str | None = None, header="HTTP_X_PAYSTACK_SIGNATURE"):
    extra = {header: signature} if signature is not None else {}
    request = rf.post(
        reverse("payments:paystack_webhook"),
        data=body,
        content_type="application/json",
        **extra,
    )
    return paystack_webhook(request)


@pytest.mark.django_db
class TestSignatureGate:
    def test_bad_signature_is_rejected_with_empty_body(self, rf, account, charge_payload):
        body = json.dumps(charge_payload(account.pk)).encode()

        response = _post(rf, body, "0" * 128)

        assert response.status_code == 401
        assert response.content == b""
        assert not Transaction.objects.exists()
        assert not Subscription.objects.exists()

    def test_missing_signature_is_rejected(self, rf, account, charge_payload):
        response = _post(rf, json.dumps(charge_payload(account.pk)).encode())

        assert response.status_code == 401

    def test_unconfigured_secret_rejects(self, rf, settings, account, charge_payload, sign):
        body, signature = sign(charge_payload(account.pk))
        settings.PAYSTACK_SECRET_KEY = ""

        response = _post(rf, body, signature)

        assert response.status_code == 401
        assert not Transaction.objects.exists()

    def test_alternate_signature_header_is_accepted(self, rf, account, charge_payload, sign):
        body, signature = sign(charge_payload(account.pk))

        response = _post(rf, body, signature, header="HTTP_X_SIGNATURE")

        assert response.status_code == 200

    def test_get_is_not_allowed(self, rf):
        response = paystack_webhook(rf.get(reverse("payments:paystack_webhook")))

        assert response.status_code == 405


@pytest.mark.django_db
class TestChargeSuccess:
    def test_applies_upgrade(self, rf, account, charge_payload, sign):
        body, signature = sign(charge_payload(account.pk))

        response = _post(rf, body, signature)

        assert response.status_code == 200
        assert json.loads(response.content) == {"status": "Success"}
        subscription = Subscription.objects.get(account=account)
        assert subscription.plan == "diamond"
        assert subscription.prestige_weight == 3
        assert Transaction.objects.get(reference="ref_scn_b").owner == account

    def test_replay_is_acknowledged_once_applied(self, rf, account, charge_payload, sign):
        body, signature = sign(charge_payload(account.pk))

        first = _post(rf, body, signature)
        second = _post(rf, body, signature)

        assert first.status_code == 200
        assert second.status_code == 200
        assert json.loads(second.content) == {"status": "Success"}
        assert Transaction.objects.filter(reference="ref_scn_b").count() == 1

    @pytest.mark.django_db(transaction=True)
    def test_broker_outage_after_commit_still_succeeds(self, rf, account, charge_payload, sign, mocker):
        mocker.patch(
            "notifications.tasks.send_push_notification.delay",
            side_effect=OperationalError("broker down"),
        )
        body, signature = sign(charge_payload(account.pk))

        response = _post(rf, body, signature)

        assert response.status_code == 200
        assert json.loads(response.content) == {"status": "Success"}
        assert Subscription.objects.get(account=account).plan == "diamond"
        assert PushNotification.objects.filter(recipient=account).count() == 1

    def test_unknown_profile_is_rejected(self, rf, charge_payload, sign):
        body, signature = sign(charge_payload(uuid4()))

        response = _post(rf, body, signature)

        assert response.status_code == 400
        assert json.loads(response.content)["error_code"] == "UNKNOWN_ACCOUNT"
        assert not Transaction.objects.exists()

    def test_missing_metadata_is_rejected(self, rf, sign):
        body, signature = sign({"event": "charge.success", "data": {"reference": "r", "amount": 100}})

        response = _post(rf, body, signature)

        assert response.status_code == 400
        payload = json.loads(response.content)
        assert payload["error"] == "Payment metadata missing."


@pytest.mark.django_db
class TestOtherEvents:
    def test_other_events_are_acknowledged_without_effect(self, rf, sign):
        body, signature = sign({"event": "transfer.success", "data": {"reference": "TRF_1"}})

        response = _post(rf, body, signature)

        assert response.status_code == 200
        assert json.loads(response.content) == {"status": "Event Received"}
        assert not Transaction.objects.exists()

    def test_malformed_json_is_rejected(self, rf, settings):
        body = b"{not json"

        response = _post(rf, body, compute_signature(body, settings.PAYSTACK_SECRET_KEY))

        assert response.status_code == 400
        assert json.loads(response.content)["error_code"] == "INVALID_JSON"

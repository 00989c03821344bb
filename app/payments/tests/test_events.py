"""Tests for parsing webhook bodies into PaymentEvents."""

import json
from uuid import uuid4

import pytest

from core.exceptions import ValidationError
from payments.webhooks.events import CHARGE_SUCCESS, parse_event


def _body(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


class TestParseEvent:
    def test_parses_charge_success(self):
        profile_id = uuid4()
        event = parse_event(
            _body(
                {
                    "event": "charge.success",
                    "data": {
                        "reference": "ref_abc",
                        "amount": 500000,
                        "metadata": {"profile_id": str(profile_id), "plan_type": "diamond"},
                    },
                }
            )
        )

        assert event.kind == CHARGE_SUCCESS
        assert event.is_charge_success
        assert event.reference == "ref_abc"
        assert event.amount == 500000
        assert event.metadata.account_id == profile_id
        assert event.metadata.plan_type == "diamond"

    def test_other_event_kinds_carry_no_payload(self):
        event = parse_event(_body({"event": "transfer.success", "data": {"reference": "x"}}))

        assert event.kind == "transfer.success"
        assert not event.is_charge_success
        assert event.metadata is None

    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_event(b"{not json")

        assert exc_info.value.error_code == "INVALID_JSON"

    def test_non_object_body(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_event(_body(["charge.success"]))

        assert exc_info.value.error_code == "INVALID_PAYLOAD"

    def test_missing_event_name(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_event(_body({"data": {}}))

        assert exc_info.value.error_code == "INVALID_PAYLOAD"

    def test_charge_without_metadata(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_event(_body({"event": "charge.success", "data": {"reference": "r", "amount": 100}}))

        assert exc_info.value.error_code == "INVALID_CHARGE_PAYLOAD"
        assert exc_info.value.message == "Payment metadata missing."

    def test_charge_with_malformed_profile_id(self):
        payload = {
            "event": "charge.success",
            "data": {
                "reference": "r",
                "amount": 100,
                "metadata": {"profile_id": "not-a-uuid", "plan_type": "standard"},
            },
        }

        with pytest.raises(ValidationError) as exc_info:
            parse_event(_body(payload))

        assert "metadata" in exc_info.value.details

    def test_charge_with_negative_amount(self):
        payload = {
            "event": "charge.success",
            "data": {
                "reference": "r",
                "amount": -1,
                "metadata": {"profile_id": str(uuid4()), "plan_type": "standard"},
            },
        }

        with pytest.raises(ValidationError):
            parse_event(_body(payload))

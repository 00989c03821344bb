"""
Typed payment events parsed from Paystack webhook bodies.

Only ``charge.success`` carries data the ledger acts on; every other event
kind parses to a PaymentEvent with no payload and is acknowledged as-is.

Usage:
    event = parse_event(request.body)
    if event.is_charge_success:
        SubscriptionLedger.apply_upgrade(
            account_id=event.metadata.account_id,
            plan_type=event.metadata.plan_type,
            amount_minor_units=event.amount,
            reference=event.reference,
        )
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from uuid import UUID

from rest_framework import serializers

from core.exceptions import ValidationError

CHARGE_SUCCESS = "charge.success"


@dataclass(frozen=True)
class PaymentMetadata:
    account_id: UUID
    plan_type: str


@dataclass(frozen=True)
class PaymentEvent:
    """
    A verified gateway notification. Never stored verbatim.

    Attributes:
        kind: Gateway event name (e.g. "charge.success")
        reference: Gateway payment reference (charge.success only)
        amount: Amount in minor units, e.g. kobo (charge.success only)
        metadata: Account and plan the payment was for (charge.success only)
    """

    kind: str
    reference: str | None = None
    amount: int | None = None
    metadata: PaymentMetadata | None = None

    @property
    def is_charge_success(self) -> bool:
        return self.kind == CHARGE_SUCCESS


class ChargeMetadataSerializer(serializers.Serializer):
    profile_id = serializers.UUIDField()
    plan_type = serializers.CharField(max_length=20)


class ChargeDataSerializer(serializers.Serializer):
    reference = serializers.CharField(max_length=100)
    amount = serializers.IntegerField(min_value=0)
    metadata = ChargeMetadataSerializer()


class EventEnvelopeSerializer(serializers.Serializer):
    event = serializers.CharField()
    data = serializers.DictField(required=False, default=dict)


def parse_event(body: bytes) -> PaymentEvent:
    """
    Parse a raw webhook body into a PaymentEvent.

    Raises:
        ValidationError: Body is not a JSON object, has no event name, or is
            a charge.success missing reference, amount or metadata
    """
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError("Invalid JSON payload", error_code="INVALID_JSON") from e

    if not isinstance(payload, dict):
        raise ValidationError("Webhook payload must be a JSON object", error_code="INVALID_PAYLOAD")

    envelope = EventEnvelopeSerializer(data=payload)
    if not envelope.is_valid():
        raise ValidationError(
            "Webhook event name missing",
            error_code="INVALID_PAYLOAD",
            details=envelope.errors,
        )

    kind = envelope.validated_data["event"]
    if kind != CHARGE_SUCCESS:
        return PaymentEvent(kind=kind)

    charge = ChargeDataSerializer(data=envelope.validated_data["data"])
    if not charge.is_valid():
        raise ValidationError(
            "Payment metadata missing.",
            error_code="INVALID_CHARGE_PAYLOAD",
            details=charge.errors,
        )

    data = charge.validated_data
    return PaymentEvent(
        kind=kind,
        reference=data["reference"],
        amount=data["amount"],
        metadata=PaymentMetadata(
            account_id=data["metadata"]["profile_id"],
            plan_type=data["metadata"]["plan_type"],
        ),
    )

"""
Serializers for the notification dispatch endpoint.

The endpoint accepts three request shapes:
    {"table": "...", "record": {...}}               row change
    {"type": "EXPIRY_CHECK"}                       expiry sweep
    {"type": "...", "userId", "amount", "orderId"} money event
"""

from __future__ import annotations

from rest_framework import serializers

from notifications.templates import MONEY_EVENT_KINDS

EXPIRY_CHECK = "EXPIRY_CHECK"


class DispatchRequestSerializer(serializers.Serializer):
    table = serializers.CharField(required=False, max_length=100)
    record = serializers.DictField(required=False)
    type = serializers.CharField(required=False, max_length=40)
    userId = serializers.UUIDField(required=False)
    amount = serializers.DecimalField(required=False, max_digits=14, decimal_places=2, min_value=0)
    orderId = serializers.UUIDField(required=False)

    def validate(self, attrs):
        if attrs.get("table"):
            if "record" not in attrs:
                raise serializers.ValidationError({"record": "Required with table."})
            return attrs

        event_type = attrs.get("type")
        if event_type == EXPIRY_CHECK:
            return attrs
        if event_type in MONEY_EVENT_KINDS:
            missing = [name for name in ("userId", "amount", "orderId") if attrs.get(name) is None]
            if missing:
                raise serializers.ValidationError({name: "Required for money events." for name in missing})
            return attrs

        raise serializers.ValidationError(
            "Expected a row change (table, record), EXPIRY_CHECK, or a money event type."
        )


class DispatchResponseSerializer(serializers.Serializer):
    status = serializers.CharField()
    notification_id = serializers.UUIDField(required=False)
    notified = serializers.IntegerField(required=False)


class DispatchErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField(help_text="Error description")

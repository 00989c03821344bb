"""
Serializers for the orders API.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from authentication.models import Profile
from orders.models import Order


class OrderSerializer(serializers.ModelSerializer):
    """Read representation of an order, including payout progress."""

    short_id = serializers.CharField(read_only=True)
    deal_status = serializers.CharField(source="conversation.deal_status", read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            "id",
            "short_id",
            "buyer",
            "seller",
            "total_amount",
            "delivery_address",
            "status",
            "deal_status",
            "completed_at",
            "payout_status",
            "payout_eligible_at",
            "payout_error_log",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CreateOrderSerializer(serializers.Serializer):
    """Checkout payload. The buyer is always the authenticated caller."""

    seller = serializers.PrimaryKeyRelatedField(queryset=Profile.objects.all())
    total_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.01"),
    )
    delivery_address = serializers.CharField(required=False, allow_blank=True, default="")


class ErrorResponseSerializer(serializers.Serializer):
    """Shape of BaseApplicationError.to_dict()."""

    error = serializers.CharField()
    error_code = serializers.CharField()
    details = serializers.DictField(required=False)

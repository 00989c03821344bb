"""
Payment admin configuration.

Subscriptions and transactions are written by the webhook ledger only, so
both are read-only here.
"""

from django.contrib import admin

from payments.models import Subscription, Transaction


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = [
        "account",
        "plan",
        "prestige_weight",
        "status",
        "is_seller",
        "expiry",
        "updated_at",
    ]
    list_filter = ["status", "plan", "is_seller"]
    search_fields = ["account__user__email", "account__display_name", "account__slug"]
    readonly_fields = [
        "account",
        "plan",
        "prestige_weight",
        "expiry",
        "status",
        "is_seller",
        "created_at",
        "updated_at",
    ]
    ordering = ["-updated_at"]


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    Admin configuration for Transaction.

    Search by gateway reference to answer "was this payment applied?".
    """

    list_display = ["reference", "owner", "amount", "plan_type", "status", "type", "created_at"]
    list_filter = ["status", "type", "plan_type"]
    search_fields = ["reference", "owner__user__email"]
    readonly_fields = [
        "id",
        "owner",
        "amount",
        "plan_type",
        "status",
        "reference",
        "type",
        "created_at",
        "updated_at",
    ]
    ordering = ["-created_at"]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

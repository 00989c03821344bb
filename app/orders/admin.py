"""
Django admin configuration for orders.

Operators triage payouts here: filter by payout status to find
``failed`` and ``manual_review`` orders. Payout fields are read-only;
the "Requeue payout" action is the only supported way back into the queue.
"""

from django.contrib import admin, messages
from django.db.models import F, Value
from django.db.models.functions import Coalesce, Greatest
from django.utils import timezone

from orders.models import Order, PayoutStatus


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "short_id",
        "buyer",
        "seller",
        "total_amount",
        "status",
        "payout_status",
        "payout_attempts",
        "payout_eligible_at",
    )
    list_filter = ("status", "payout_status")
    search_fields = ("id", "payout_reference", "seller__display_name", "buyer__display_name")
    raw_id_fields = ("buyer", "seller")
    readonly_fields = (
        "status",
        "completed_at",
        "payout_status",
        "payout_eligible_at",
        "payout_error_log",
        "payout_attempts",
        "payout_reference",
        "payout_claimed_at",
        "created_at",
        "updated_at",
    )
    actions = ["requeue_payout"]

    @admin.action(description="Requeue payout (failed / manual review only)")
    def requeue_payout(self, request, queryset):
        now = timezone.now()
        rows = queryset.filter(
            payout_status__in=[PayoutStatus.FAILED, PayoutStatus.MANUAL_REVIEW]
        ).update(
            payout_status=PayoutStatus.RETRY_QUEUED,
            payout_eligible_at=Greatest(Coalesce(F("payout_eligible_at"), Value(now)), Value(now)),
            payout_attempts=0,
            payout_error_log=f"Requeued by {request.user}",
            updated_at=now,
        )
        self.message_user(request, f"Requeued {rows} payout(s).", messages.SUCCESS)

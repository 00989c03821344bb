"""
Django admin configuration for the push notification outbox.
"""

from django.contrib import admin

from notifications.models import PushNotification


@admin.register(PushNotification)
class PushNotificationAdmin(admin.ModelAdmin):
    """
    Admin configuration for PushNotification.

    Read-only: rows are written by the dispatcher and settled by delivery.
    """

    list_display = ["id", "recipient", "kind", "status", "created_at", "sent_at"]
    list_filter = ["status", "kind"]
    search_fields = ["id", "recipient__user__email", "title"]
    readonly_fields = [
        "id",
        "recipient",
        "kind",
        "title",
        "body",
        "payload",
        "status",
        "failure_reason",
        "sent_at",
        "created_at",
        "updated_at",
    ]
    ordering = ["-created_at"]

    def has_add_permission(self, request):
        return False

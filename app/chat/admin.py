"""
Django admin configuration for chat models.
"""

from django.contrib import admin

from chat.models import Conversation, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ("message_type", "sender", "content", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ("order", "buyer", "seller", "deal_status", "deal_updated_at")
    list_filter = ("deal_status",)
    raw_id_fields = ("order", "buyer", "seller")
    inlines = [MessageInline]

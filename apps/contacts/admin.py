from django.contrib import admin
from django.utils import timezone

from apps.common.admin import BaseModelAdmin

from .models import MESSAGE_REPLIED, ContactMessage


@admin.register(ContactMessage)
class ContactMessageAdmin(BaseModelAdmin):
    list_display = ("message_id", "name", "email", "subject", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("name", "email", "subject", "message")
    actions = ("mark_replied",)

    @admin.display(description="Message ID")
    def message_id(self, obj):
        return obj.message_id

    @admin.action(description="Mark selected messages as replied")
    def mark_replied(self, request, queryset):
        updated = queryset.update(status=MESSAGE_REPLIED, updated_at=timezone.now())
        self.message_user(request, f"{updated} message(s) marked replied")

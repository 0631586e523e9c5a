"""Admin registration for notifications."""

from __future__ import annotations

from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "recipient", "type", "response", "is_read", "related_booking", "created_at")
    list_filter = ("type", "response", "is_read")
    search_fields = ("recipient__email", "message")

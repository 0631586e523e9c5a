"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "display_name",
        "owner",
        "status",
        "start_date",
        "end_date",
        "is_split",
        "original_booking",
        "created_at",
    )
    list_filter = ("status", "is_split", "start_date")
    search_fields = ("display_name", "owner__email", "original_request_id")
    readonly_fields = (
        "original_request_id",
        "original_booking",
        "is_split",
        "created_at",
        "updated_at",
    )

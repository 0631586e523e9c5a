"""FilterSet definitions for the booking calendar."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Calendar window, owner and status filters for the booking list."""

    # Bookings that share at least one night with [start, end)
    start = django_filters.DateFilter(field_name="end_date", lookup_expr="gt")
    end = django_filters.DateFilter(field_name="start_date", lookup_expr="lt")
    owner = django_filters.NumberFilter(field_name="owner_id", lookup_expr="exact")
    status = django_filters.MultipleChoiceFilter(choices=Booking.Status.choices)
    original_request_id = django_filters.UUIDFilter(field_name="original_request_id")

    class Meta:
        model = Booking
        fields = ["start", "end", "owner", "status", "original_request_id"]

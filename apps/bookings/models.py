"""Booking model for the shared holiday home calendar."""

from __future__ import annotations

import uuid

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange


class Booking(models.Model):
    """One contiguous stay of a household member.

    A single booking request can produce several rows (segments) that share
    ``original_request_id``. Segments that collide with another member's
    stay are stored as ``pending`` and point at the colliding booking via
    ``original_booking``.
    """

    class Status(models.TextChoices):
        BOOKED = "booked", _("Gebucht")
        RESERVED = "reserved", _("Reserviert")
        PENDING = "pending", _("Angefragt")
        CANCELLED = "cancelled", _("Storniert")

    ACTIVE_STATUSES = (Status.BOOKED, Status.RESERVED)
    REQUESTABLE_STATUSES = (Status.BOOKED, Status.RESERVED)

    start_date = models.DateField()
    end_date = models.DateField(help_text=_("Abreisetag, nicht mehr belegt."))
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    display_name = models.CharField(max_length=150)
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.BOOKED,
    )
    is_split = models.BooleanField(default=False)
    original_request_id = models.UUIDField(default=uuid.uuid4, db_index=True)
    original_booking = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="dependent_requests",
        help_text=_("Buchung, mit der sich dieses angefragte Segment überschneidet."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Buchung")
        verbose_name_plural = _("Buchungen")
        ordering = ["start_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["start_date", "end_date"], name="booking_dates_idx"),
            models.Index(fields=["owner", "status"], name="booking_owner_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.display_name}: {self.start_date} - {self.end_date} ({self.status})"

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def is_active(self) -> bool:
        return self.status in self.ACTIVE_STATUSES

"""Notification model.

Notifications are created by the booking resolver when a request collides
with someone else's stay, and again when that person answers. They are
shown in the web interface and, optionally, e-mailed after commit.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Notification(models.Model):
    """A message sent to a household member about an overlap."""

    class Type(models.TextChoices):
        OVERLAP_REQUEST = "overlap_request", _("Überschneidungsanfrage")
        OVERLAP_REJECTED = "overlap_rejected", _("Anfrage abgelehnt")
        OVERLAP_ACKNOWLEDGED = "overlap_acknowledged", _("Anfrage zur Kenntnis genommen")

    class Response(models.TextChoices):
        PENDING = "pending", _("Offen")
        ACKNOWLEDGED = "acknowledged", _("Zur Kenntnis genommen")
        REJECTED = "rejected", _("Abgelehnt")

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    type = models.CharField(max_length=32, choices=Type.choices)
    message = models.TextField()
    related_booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
        help_text=_("Das angefragte Segment, um das es geht."),
    )
    overlap_start = models.DateField(null=True, blank=True)
    overlap_end = models.DateField(null=True, blank=True)
    response = models.CharField(
        max_length=16,
        choices=Response.choices,
        default=Response.PENDING,
    )
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['recipient', 'is_read'], name='notif_recipient_read_idx'),
        ]

    def __str__(self) -> str:
        return f"Notification to {self.recipient_id}: {self.type}"

    @property
    def is_actionable(self) -> bool:
        return self.type == self.Type.OVERLAP_REQUEST and self.response == self.Response.PENDING

"""Errors raised by the booking resolver.

They subclass DRF's ``APIException`` so the default exception handler
renders them with the right status code.
"""

from __future__ import annotations

from django.utils.translation import gettext_lazy as _  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException, NotFound, PermissionDenied, ValidationError  # type: ignore


class BookingValidationError(ValidationError):
    """Bad date range, status or action (400)."""


class BookingPermissionError(PermissionDenied):
    """Actor is neither the owner of the booking nor an admin (403)."""

    default_detail = _("Sie sind nicht berechtigt, diese Buchung zu ändern.")


class BookingNotFoundError(NotFound):
    default_detail = _("Buchung nicht gefunden.")


class TargetUserNotFoundError(NotFound):
    default_detail = _("Der angegebene Benutzer wurde nicht gefunden.")


class NotificationNotFoundError(NotFound):
    default_detail = _("Benachrichtigung nicht gefunden.")


class AlreadyRespondedError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Auf diese Benachrichtigung wurde bereits geantwortet.")
    default_code = "already_responded"


class BookingConcurrencyError(APIException):
    """The transaction failed and was rolled back (500)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("Die Buchung konnte nicht gespeichert werden. Bitte erneut versuchen.")
    default_code = "transaction_failed"

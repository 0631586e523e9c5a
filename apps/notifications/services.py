"""Notification texts and e-mail delivery."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from shared.domain.value_objects import DateRange
    from .models import Notification

logger = logging.getLogger(__name__)


def _fmt(dates: "DateRange") -> str:
    return f"{dates.start_date.isoformat()} bis {dates.end_date.isoformat()}"


def overlap_request_message(requester_name: str, dates: "DateRange") -> str:
    return (
        f"{requester_name} möchte den Zeitraum {_fmt(dates)} buchen, "
        f"der sich mit Ihrer Buchung überschneidet."
    )


def overlap_rejected_message(responder_name: str, dates: "DateRange") -> str:
    return f"Ihre Buchungsanfrage für {_fmt(dates)} wurde von {responder_name} abgelehnt."


def overlap_acknowledged_message(responder_name: str, dates: "DateRange") -> str:
    return (
        f"{responder_name} hat Ihre Buchungsanfrage für {_fmt(dates)} zur Kenntnis genommen. "
        f"Der Zeitraum bleibt angefragt."
    )


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send one notification e-mail.

    Args:
        recipient_email: address of the recipient
        subject: subject line
        context: must contain ``message`` when no HTML version is given
        html_message: optional HTML version of the mail

    Returns:
        bool: True if the mail was handed to the backend
    """
    try:
        if html_message:
            text_message = strip_tags(html_message)
        else:
            text_message = context.get("message", "")

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


SUBJECTS = {
    "overlap_request": "Neue Überschneidungsanfrage",
    "overlap_rejected": "Ihre Buchungsanfrage wurde abgelehnt",
    "overlap_acknowledged": "Ihre Buchungsanfrage wurde zur Kenntnis genommen",
}


def send_notification_email(notification: "Notification") -> bool:
    """E-mail a stored notification to its recipient."""
    recipient = notification.recipient
    if not recipient.email:
        logger.warning(f"User {recipient.pk} has no e-mail address, skipping notification {notification.pk}")
        return False

    html_message = f"""
    <html>
    <body>
        <p>Hallo {recipient.display_name},</p>
        <p>{notification.message}</p>
        <p>Details und Antwortmöglichkeiten finden Sie im Hauskalender.</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=recipient.email,
        subject=f"[Hauskalender] {SUBJECTS.get(notification.type, 'Benachrichtigung')}",
        context={"message": notification.message},
        html_message=html_message,
    )

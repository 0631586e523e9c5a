"""Message bus handlers that deliver overlap notifications after commit."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore

from apps.bookings.domain.events import OverlapRequested, OverlapResponded
from shared.application.message_bus import MessageBus

logger = logging.getLogger(__name__)


def queue_notification_email(event) -> None:
    if not getattr(settings, "NOTIFICATIONS_EMAIL_ENABLED", False):
        return

    from .tasks import deliver_notification_email

    deliver_notification_email.delay(event.notification_id)
    logger.debug(f"Queued e-mail for notification {event.notification_id}")


def register_handlers(bus: MessageBus) -> None:
    bus.register_event_handler(OverlapRequested, queue_notification_email)
    bus.register_event_handler(OverlapResponded, queue_notification_email)

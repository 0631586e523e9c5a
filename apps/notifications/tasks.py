"""Celery tasks for notification delivery."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .models import Notification
from .services import send_notification_email

logger = logging.getLogger(__name__)


@shared_task(name="notifications.deliver_notification_email")
def deliver_notification_email(notification_id: int) -> bool:
    """E-mail a notification; it may have been deleted since it was queued."""
    try:
        notification = Notification.objects.select_related("recipient").get(pk=notification_id)
    except Notification.DoesNotExist:
        logger.info(f"Notification {notification_id} is gone, nothing to deliver")
        return False

    return send_notification_email(notification)

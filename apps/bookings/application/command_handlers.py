"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Request a date range, split around other stays
- UpdateBookingCommand: Reschedule, re-status, reassign or cancel a booking
- DeleteBookingCommand: Remove a booking and reconcile its dependents
- RespondToOverlapCommand: Acknowledge or reject an overlap request
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional, Tuple
import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.utils.translation import gettext_lazy as _

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange
from apps.bookings.domain.events import OverlapResponded
from apps.bookings.exceptions import (
    AlreadyRespondedError,
    BookingConcurrencyError,
    BookingNotFoundError,
    BookingPermissionError,
    BookingValidationError,
    NotificationNotFoundError,
    TargetUserNotFoundError,
)
from apps.bookings.models import Booking
from apps.bookings import services
from apps.notifications.models import Notification
from apps.notifications.services import overlap_acknowledged_message, overlap_rejected_message

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to request a booking

    ``owner_id`` lets an admin book on behalf of another household member.
    """
    actor: Any
    start_date: date
    end_date: date
    status: str = Booking.Status.BOOKED
    owner_id: Optional[int] = None


@dataclass
class UpdateBookingCommand:
    """Command to change a booking; fields left as None stay as they are"""
    actor: Any
    booking_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[str] = None
    owner_id: Optional[int] = None


@dataclass
class DeleteBookingCommand:
    """Command to delete a booking"""
    actor: Any
    booking_id: int


@dataclass
class RespondToOverlapCommand:
    """Command to answer an overlap request (``acknowledged`` or ``rejected``)"""
    actor: Any
    notification_id: int
    action: str


@dataclass
class DeleteResult:
    booking_id: int
    cancelled_dependents: int


# ===== Helpers =====

def _is_admin(user) -> bool:
    return bool(getattr(user, "is_admin", False))


def _check_dates(start: date, end: date) -> DateRange:
    if start >= end:
        raise BookingValidationError(
            {"end_date": [_("Das Enddatum muss nach dem Startdatum liegen.")]}
        )
    return DateRange(start, end)


def _resolve_owner(actor, owner_id: Optional[int]):
    """The user a booking is written for; only admins may name someone else."""
    if owner_id is None or owner_id == actor.pk:
        return actor
    if not _is_admin(actor):
        raise BookingPermissionError(_("Nur Administratoren dürfen für andere buchen."))

    User = get_user_model()
    try:
        return User.objects.get(pk=owner_id, is_active=True)
    except User.DoesNotExist:
        raise TargetUserNotFoundError()


def _check_may_modify(actor, booking: Booking) -> None:
    if booking.owner_id != actor.pk and not _is_admin(actor):
        raise BookingPermissionError()


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Strategy:
    1. Validate the interval and the requested status
    2. Start database transaction (atomic)
    3. Merge with the owner's touching stays and segment around other owners'
       stays (SELECT FOR UPDATE on the rows involved)
    4. Commit transaction
    5. Publish events (after commit)
    """

    def handle(self, command: CreateBookingCommand) -> List[Booking]:
        """
        Handle booking creation

        Returns: the segments written for the request

        Raises:
            BookingValidationError: end <= start or a status that cannot be requested
            BookingPermissionError: a non-admin booking for someone else
            TargetUserNotFoundError: unknown owner_id
            BookingConcurrencyError: the transaction failed
        """
        requested = _check_dates(command.start_date, command.end_date)
        if command.status not in Booking.REQUESTABLE_STATUSES:
            raise BookingValidationError(
                {"status": [_("Nur 'booked' oder 'reserved' können angefragt werden.")]}
            )
        owner = _resolve_owner(command.actor, command.owner_id)

        logger.info(
            f"Creating {command.status} booking for user {owner.pk} "
            f"(by {command.actor.pk}), dates {requested}"
        )

        try:
            with DjangoUnitOfWork() as uow:
                segments = services.resolve_booking_request(
                    uow,
                    owner=owner,
                    requested=requested,
                    status=command.status,
                )
        except DatabaseError as e:
            logger.error(f"Booking request for user {owner.pk} failed: {e}", exc_info=True)
            raise BookingConcurrencyError() from e

        return segments


class UpdateBookingHandler:
    """
    Handler for UpdateBooking command

    A change of dates, status or owner deletes the row, reconciles its
    dependents and re-runs the create flow. A plain switch to ``cancelled``
    keeps the row and only reconciles.
    """

    def handle(self, command: UpdateBookingCommand) -> List[Booking]:
        if (command.start_date is None) != (command.end_date is None):
            raise BookingValidationError(
                {"non_field_errors": [_("Start- und Enddatum müssen zusammen angegeben werden.")]}
            )
        if command.status is not None and command.status not in (
            *Booking.REQUESTABLE_STATUSES, Booking.Status.CANCELLED,
        ):
            raise BookingValidationError(
                {"status": [_("Ungültiger Status für eine Änderung.")]}
            )

        try:
            with DjangoUnitOfWork() as uow:
                return self._apply(uow, command)
        except DatabaseError as e:
            logger.error(f"Update of booking {command.booking_id} failed: {e}", exc_info=True)
            raise BookingConcurrencyError() from e

    def _apply(self, uow: DjangoUnitOfWork, command: UpdateBookingCommand) -> List[Booking]:
        actor = command.actor
        booking = services.lock_booking(command.booking_id)
        if booking is None:
            raise BookingNotFoundError()
        _check_may_modify(actor, booking)

        owner = booking.owner
        if command.owner_id is not None and command.owner_id != booking.owner_id:
            if not _is_admin(actor):
                raise BookingPermissionError(_("Nur Administratoren dürfen den Besitzer ändern."))
            owner = _resolve_owner(actor, command.owner_id)

        if command.start_date is not None:
            dates = _check_dates(command.start_date, command.end_date)
        else:
            dates = booking.date_range

        dates_changed = dates != booking.date_range
        owner_changed = owner.pk != booking.owner_id

        if command.status == Booking.Status.CANCELLED:
            if dates_changed or owner_changed:
                raise BookingValidationError(
                    {"status": [_("Eine Stornierung kann nicht mit anderen Änderungen kombiniert werden.")]}
                )
            if booking.status != Booking.Status.CANCELLED:
                services.cancel_booking(booking)
                logger.info(f"Booking {booking.pk} cancelled by user {actor.pk}")
            return [booking]

        status_changed = command.status is not None and command.status != booking.status
        if not (dates_changed or owner_changed or status_changed):
            logger.debug(f"Update of booking {booking.pk} changes nothing")
            return [booking]

        if command.status is not None:
            status = command.status
        elif booking.is_active:
            status = booking.status
        else:
            status = Booking.Status.BOOKED

        old_id = booking.pk
        services.remove_booking(booking)
        segments = services.resolve_booking_request(
            uow, owner=owner, requested=dates, status=status,
        )
        logger.info(
            f"Booking {old_id} replaced by {[s.pk for s in segments]} (by user {actor.pk})"
        )
        return segments


class DeleteBookingHandler:
    """Handler for DeleteBooking command"""

    def handle(self, command: DeleteBookingCommand) -> DeleteResult:
        try:
            with DjangoUnitOfWork():
                booking = services.lock_booking(command.booking_id)
                if booking is None:
                    raise BookingNotFoundError()
                _check_may_modify(command.actor, booking)

                booking_id = booking.pk
                cancelled = services.remove_booking(booking)
        except DatabaseError as e:
            logger.error(f"Deleting booking {command.booking_id} failed: {e}", exc_info=True)
            raise BookingConcurrencyError() from e

        logger.info(
            f"Booking {booking_id} deleted by user {command.actor.pk}, "
            f"{cancelled} dependent request(s) cancelled"
        )
        return DeleteResult(booking_id=booking_id, cancelled_dependents=cancelled)


class RespondToOverlapHandler:
    """
    Handler for RespondToOverlap command

    State machine per request: pending -> acknowledged | rejected.
    Rejecting cancels the pending segment, acknowledging leaves it pending.
    Either way the requester gets an informational notification.
    """

    ACTIONS = {
        Notification.Response.ACKNOWLEDGED: Notification.Type.OVERLAP_ACKNOWLEDGED,
        Notification.Response.REJECTED: Notification.Type.OVERLAP_REJECTED,
    }

    def handle(self, command: RespondToOverlapCommand) -> Tuple[Notification, Booking]:
        if command.action not in self.ACTIONS:
            raise BookingValidationError(
                {"action": [_("Erlaubt sind 'acknowledged' oder 'rejected'.")]}
            )

        try:
            with DjangoUnitOfWork() as uow:
                return self._apply(uow, command)
        except DatabaseError as e:
            logger.error(
                f"Response to notification {command.notification_id} failed: {e}", exc_info=True
            )
            raise BookingConcurrencyError() from e

    def _apply(self, uow: DjangoUnitOfWork, command: RespondToOverlapCommand):
        actor = command.actor
        notification = services.lock_notification(command.notification_id, actor)
        if notification is None:
            raise NotificationNotFoundError()
        if notification.type != Notification.Type.OVERLAP_REQUEST:
            raise BookingValidationError(
                {"detail": [_("Auf diese Benachrichtigung kann nicht geantwortet werden.")]}
            )
        if notification.response != Notification.Response.PENDING:
            raise AlreadyRespondedError()

        booking = None
        if notification.related_booking_id is not None:
            booking = services.lock_booking(notification.related_booking_id)
        if booking is None:
            raise BookingNotFoundError(_("Die angefragte Buchung existiert nicht mehr."))
        if booking.status != Booking.Status.PENDING:
            raise BookingValidationError(
                {"detail": [_("Die Buchung ist nicht mehr angefragt.")]}
            )

        notification.response = command.action
        notification.is_read = True
        notification.save(update_fields=["response", "is_read"])

        if command.action == Notification.Response.REJECTED:
            booking.status = Booking.Status.CANCELLED
            booking.save(update_fields=["status", "updated_at"])
            message = overlap_rejected_message(actor.display_name, booking.date_range)
        else:
            message = overlap_acknowledged_message(actor.display_name, booking.date_range)

        reply = Notification.objects.create(
            recipient_id=booking.owner_id,
            type=self.ACTIONS[command.action],
            message=message,
            related_booking=booking,
            overlap_start=booking.start_date,
            overlap_end=booking.end_date,
            response=command.action,
        )
        uow.record(OverlapResponded(
            aggregate_id=booking.pk,
            notification_id=reply.pk,
            recipient_id=booking.owner_id,
            response=command.action,
        ))

        logger.info(
            f"User {actor.pk} {command.action} overlap request {notification.pk} "
            f"for booking {booking.pk}"
        )
        return notification, booking

"""Domain services for booking workflows.

Every function here expects to run inside an open ``DjangoUnitOfWork``;
they read with row locks where the backend supports it and leave commit
and rollback to the caller.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Iterable, List

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import QuerySet  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.notifications.models import Notification
from apps.notifications.services import overlap_request_message
from shared.domain.value_objects import DateRange

from .domain.events import OverlapRequested
from .domain.segmentation import BookingSlot, merge_envelope, plan_segments
from .models import Booking

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from shared.application.uow import DjangoUnitOfWork

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset: QuerySet) -> QuerySet:
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def lock_booking(booking_id) -> Booking | None:
    return _lock_queryset_if_possible(Booking.objects.filter(pk=booking_id)).first()


def lock_notification(notification_id, recipient) -> Notification | None:
    qs = Notification.objects.filter(pk=notification_id, recipient=recipient)
    return _lock_queryset_if_possible(qs).first()


def lock_calendar() -> None:
    """
    Serialize every write to the calendar

    Locks all member rows in primary key order. A free date range has no
    row to lock, so two members requesting it at once are ordered here.
    """
    User = get_user_model()
    qs = User.objects.order_by("pk").values_list("pk", flat=True)
    list(_lock_queryset_if_possible(qs))


def _slot(booking: Booking) -> BookingSlot:
    return BookingSlot(booking_id=booking.pk, owner_id=booking.owner_id, dates=booking.date_range)


def touching_active_bookings(owner, dates: DateRange) -> List[Booking]:
    """The owner's active stays that overlap or are adjacent to ``dates``."""
    qs = Booking.objects.filter(
        owner=owner,
        status__in=Booking.ACTIVE_STATUSES,
        start_date__lte=dates.end_date,
        end_date__gte=dates.start_date,
    ).order_by("start_date", "pk")
    return list(_lock_queryset_if_possible(qs))


def overlapping_active_bookings(dates: DateRange) -> List[Booking]:
    """Active stays of any owner sharing at least one day with ``dates``."""
    qs = Booking.objects.filter(
        status__in=Booking.ACTIVE_STATUSES,
        start_date__lt=dates.end_date,
        end_date__gt=dates.start_date,
    ).order_by("start_date", "pk")
    return list(_lock_queryset_if_possible(qs))


def _covering_request(owner, conflict_id: int, dates: DateRange) -> Booking | None:
    """The owner's pending segment on ``conflict_id`` that already spans ``dates``."""
    qs = Booking.objects.filter(
        owner=owner,
        status=Booking.Status.PENDING,
        original_booking_id=conflict_id,
        start_date__lte=dates.start_date,
        end_date__gte=dates.end_date,
    ).order_by("pk")
    return _lock_queryset_if_possible(qs).first()


def _pending_dependents(booking_ids: Iterable[int]) -> List[Booking]:
    qs = Booking.objects.filter(
        original_booking_id__in=list(booking_ids),
        status=Booking.Status.PENDING,
    ).order_by("start_date", "pk")
    return list(_lock_queryset_if_possible(qs))


def _drop_open_requests(booking_ids: Iterable[int]) -> int:
    deleted, _ = Notification.objects.filter(
        related_booking_id__in=list(booking_ids),
        type=Notification.Type.OVERLAP_REQUEST,
        response=Notification.Response.PENDING,
    ).delete()
    return deleted


def reconcile_dependents(booking: Booking) -> int:
    """
    Release the pending requests that collide with ``booking``

    Called before ``booking`` is deleted, cancelled or rescheduled: every
    pending segment pointing at it loses the reference and is cancelled,
    and the still unanswered overlap requests for those segments are
    removed. Returns the number of cancelled segments.
    """
    dependents = _pending_dependents([booking.pk])
    if not dependents:
        return 0

    ids = [d.pk for d in dependents]
    _drop_open_requests(ids)
    for dependent in dependents:
        dependent.status = Booking.Status.CANCELLED
        dependent.original_booking = None
        dependent.save(update_fields=["status", "original_booking", "updated_at"])

    logger.info(f"Cancelled {len(ids)} pending request(s) depending on booking {booking.pk}")
    return len(ids)


def detach_notifications(booking: Booking) -> None:
    """
    Clean up notifications before ``booking`` is deleted

    Overlap requests about the booking go away with it; every other
    notification keeps its row and loses the link.
    """
    Notification.objects.filter(
        related_booking=booking,
        type=Notification.Type.OVERLAP_REQUEST,
    ).delete()
    Notification.objects.filter(related_booking=booking).update(related_booking=None)


def remove_booking(booking: Booking) -> int:
    """Delete a booking row after reconciling everything that refers to it."""
    cancelled = reconcile_dependents(booking)
    detach_notifications(booking)
    booking.delete()
    return cancelled


def cancel_booking(booking: Booking) -> Booking:
    """Mark a booking cancelled in place, without re-segmentation."""
    reconcile_dependents(booking)
    _drop_open_requests([booking.pk])
    booking.status = Booking.Status.CANCELLED
    booking.save(update_fields=["status", "updated_at"])
    return booking


def _reattach(dependents: List[Booking], segments: List[Booking]) -> None:
    """
    Point requests that hung on absorbed stays at the merged segment

    A dependent with no active segment left underneath it is cancelled
    the same way ``reconcile_dependents`` does it.
    """
    active_segments = [s for s in segments if s.is_active]
    orphans = []
    for dependent in dependents:
        target = next(
            (s for s in active_segments if s.date_range.overlaps_with(dependent.date_range)),
            None,
        )
        if target is None:
            orphans.append(dependent)
            continue
        dependent.original_booking = target
        dependent.save(update_fields=["original_booking", "updated_at"])

    if orphans:
        _drop_open_requests([o.pk for o in orphans])
        for orphan in orphans:
            orphan.status = Booking.Status.CANCELLED
            orphan.original_booking = None
            orphan.save(update_fields=["status", "original_booking", "updated_at"])


def resolve_booking_request(
    uow: "DjangoUnitOfWork",
    *,
    owner,
    requested: DateRange,
    status: str,
) -> List[Booking]:
    """
    Write a booking request as non-overlapping segments

    0. Take the calendar lock so concurrent writers are ordered.
    1. Merge the request with the owner's touching active stays and delete
       those stays (requests from others that hung on them are re-attached).
    2. Sweep the merged interval against other owners' active stays.
    3. Persist the segments under one ``original_request_id`` and raise an
       overlap request for every pending segment. A pending piece the
       owner already asked for reuses the existing segment.
    """
    if status not in Booking.REQUESTABLE_STATUSES:
        raise ValueError(f"Cannot request a booking with status {status!r}")

    lock_calendar()

    absorbed = touching_active_bookings(owner, requested)
    effective = merge_envelope(requested, [b.date_range for b in absorbed])
    dependents = _pending_dependents([b.pk for b in absorbed])
    for stay in absorbed:
        Notification.objects.filter(related_booking=stay).update(related_booking=None)
        stay.delete()
    if absorbed:
        logger.info(
            f"Merged {len(absorbed)} booking(s) of user {owner.pk} into {effective!r}"
        )

    conflicts = overlapping_active_bookings(effective)
    own = [c for c in conflicts if c.owner_id == owner.pk]
    if own:
        logger.warning(
            f"Booking(s) {[c.pk for c in own]} of user {owner.pk} survived merging, ignoring them"
        )
    others = {c.pk: c for c in conflicts if c.owner_id != owner.pk}

    plans = plan_segments(effective, status, owner.pk, [_slot(c) for c in others.values()])
    request_id = uuid.uuid4()
    segments: List[Booking] = []

    for plan in plans:
        if plan.is_pending:
            existing = _covering_request(owner, plan.conflict.booking_id, plan.dates)
            if existing is not None:
                logger.info(
                    f"User {owner.pk} already asked for {plan.dates!r} in booking {existing.pk}"
                )
                segments.append(existing)
                continue

        segment = Booking.objects.create(
            start_date=plan.dates.start_date,
            end_date=plan.dates.end_date,
            owner=owner,
            display_name=owner.display_name,
            status=plan.status,
            is_split=plan.is_split,
            original_request_id=request_id,
            original_booking=others[plan.conflict.booking_id] if plan.is_pending else None,
        )
        segments.append(segment)

        if plan.is_pending:
            primary = others[plan.conflict.booking_id]
            notification = Notification.objects.create(
                recipient_id=primary.owner_id,
                type=Notification.Type.OVERLAP_REQUEST,
                message=overlap_request_message(owner.display_name, plan.dates),
                related_booking=segment,
                overlap_start=plan.dates.start_date,
                overlap_end=plan.dates.end_date,
            )
            uow.record(OverlapRequested(
                aggregate_id=segment.pk,
                notification_id=notification.pk,
                recipient_id=primary.owner_id,
                requester_id=owner.pk,
                overlap_start=plan.dates.start_date,
                overlap_end=plan.dates.end_date,
            ))

    if dependents:
        _reattach(dependents, segments)

    pending_count = sum(1 for p in plans if p.is_pending)
    logger.info(
        f"Request {request_id} of user {owner.pk} for {effective!r} "
        f"written as {len(segments)} segment(s), {pending_count} pending"
    )
    return segments

"""
Booking Segmentation

Pure interval logic behind the overlap resolver, free of ORM access:

1. merge_envelope(): coalesce a request with the same owner's stays that
   overlap or touch it, so consecutive days end up as one booking.
2. plan_segments(): sweep the merged interval against other owners' active
   stays and cut it into free segments (requested status) and pending
   segments (one per collision).

Ranges are half-open [start, end). Adjacent stays of different owners
never conflict; adjacent stays of the same owner always merge.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from shared.domain.value_objects import DateRange

PENDING = 'pending'


@dataclass(frozen=True)
class BookingSlot:
    """Snapshot of a stored booking, as far as segmentation cares."""
    booking_id: int
    owner_id: int
    dates: DateRange


@dataclass(frozen=True)
class SegmentPlan:
    """
    One segment to be written for the requester

    ``conflict`` is set for pending segments only and names the stay the
    segment collides with; the same sub-range is what its owner is asked
    about.
    """
    dates: DateRange
    status: str
    is_split: bool = False
    conflict: Optional[BookingSlot] = None

    @property
    def is_pending(self) -> bool:
        return self.conflict is not None


def merge_envelope(requested: DateRange, own_stays: Iterable[DateRange]) -> DateRange:
    """
    Effective interval of a request after absorbing the owner's own stays

    Only stays that touch the request are absorbed; callers are expected to
    pass exactly those, anything else raises ValueError because it would
    bridge a gap the owner never asked for.
    """
    stays = list(own_stays)
    for stay in stays:
        if not stay.touches(requested):
            raise ValueError(f"{stay!r} does not touch the requested range {requested!r}")
    if not stays:
        return requested
    return requested.envelope(*stays)


def plan_segments(
    effective: DateRange,
    status: str,
    owner_id: int,
    conflicts: Sequence[BookingSlot],
) -> List[SegmentPlan]:
    """
    Cut the effective interval into segments around other owners' stays

    Walks a cursor from left to right over the conflicts in ascending start
    order. Free stretches before a conflict keep the requested status, the
    stretch shared with a conflict becomes a pending segment referencing it.
    Conflicts owned by the requester are ignored: merging has already
    absorbed them.

    The returned segments are ordered, pairwise disjoint and cover
    ``effective`` exactly.
    """
    others = sorted(
        (c for c in conflicts if c.owner_id != owner_id),
        key=lambda c: (c.dates.start_date, c.booking_id),
    )
    if not others:
        return [SegmentPlan(dates=effective, status=status)]

    pieces: List[tuple] = []
    cursor = effective.start_date
    end = effective.end_date

    for conflict in others:
        if cursor >= end:
            break

        gap_end = min(end, conflict.dates.start_date)
        if cursor < gap_end:
            pieces.append((DateRange(cursor, gap_end), status, None))

        overlap = DateRange(cursor, end).intersection(conflict.dates)
        if overlap is not None:
            pieces.append((overlap, PENDING, conflict))
            cursor = max(cursor, overlap.end_date)
        else:
            cursor = max(cursor, gap_end)

    if cursor < end:
        pieces.append((DateRange(cursor, end), status, None))

    is_split = len(pieces) > 1
    return [
        SegmentPlan(dates=dates, status=piece_status, is_split=is_split, conflict=conflict)
        for dates, piece_status, conflict in pieces
    ]

"""Unit tests for the pure segmentation functions."""

from __future__ import annotations

from datetime import date

import pytest

from apps.bookings.domain.segmentation import (
    PENDING,
    BookingSlot,
    merge_envelope,
    plan_segments,
)
from shared.domain.value_objects import DateRange

REQUESTER = 1
OTHER = 2
THIRD = 3


def d(day: int) -> date:
    return date(2025, 7, day)


def r(start: int, end: int) -> DateRange:
    return DateRange(d(start), d(end))


def slot(booking_id: int, owner_id: int, start: int, end: int) -> BookingSlot:
    return BookingSlot(booking_id=booking_id, owner_id=owner_id, dates=r(start, end))


def covered(plans) -> list:
    return [(p.dates.start_date.day, p.dates.end_date.day, p.status) for p in plans]


def test_merge_without_own_stays_keeps_request():
    assert merge_envelope(r(3, 8), []) == r(3, 8)


def test_merge_absorbs_overlapping_and_adjacent_stays():
    assert merge_envelope(r(3, 8), [r(1, 5), r(8, 12)]) == r(1, 12)


def test_merge_rejects_stay_that_does_not_touch():
    with pytest.raises(ValueError):
        merge_envelope(r(3, 8), [r(9, 12)])


def test_no_conflicts_gives_single_unsplit_segment():
    plans = plan_segments(r(1, 8), "booked", REQUESTER, [])

    assert covered(plans) == [(1, 8, "booked")]
    assert plans[0].is_split is False
    assert plans[0].conflict is None


def test_own_conflicts_are_ignored():
    plans = plan_segments(r(1, 8), "booked", REQUESTER, [slot(10, REQUESTER, 2, 4)])

    assert covered(plans) == [(1, 8, "booked")]


def test_full_overlap_is_one_pending_segment():
    conflict = slot(10, OTHER, 10, 15)

    plans = plan_segments(r(10, 15), "booked", REQUESTER, [conflict])

    assert covered(plans) == [(10, 15, PENDING)]
    assert plans[0].conflict == conflict
    assert plans[0].is_split is False


def test_partial_overlap_at_the_end():
    plans = plan_segments(r(1, 7), "booked", REQUESTER, [slot(10, OTHER, 5, 10)])

    assert covered(plans) == [(1, 5, "booked"), (5, 7, PENDING)]
    assert all(p.is_split for p in plans)


def test_conflict_in_the_middle_splits_into_three():
    plans = plan_segments(r(1, 20), "reserved", REQUESTER, [slot(10, OTHER, 5, 10)])

    assert covered(plans) == [(1, 5, "reserved"), (5, 10, PENDING), (10, 20, "reserved")]


def test_conflicts_are_processed_in_start_order():
    conflicts = [slot(11, THIRD, 12, 14), slot(10, OTHER, 3, 5)]

    plans = plan_segments(r(1, 20), "booked", REQUESTER, conflicts)

    assert covered(plans) == [
        (1, 3, "booked"),
        (3, 5, PENDING),
        (5, 12, "booked"),
        (12, 14, PENDING),
        (14, 20, "booked"),
    ]
    assert [p.conflict.booking_id for p in plans if p.is_pending] == [10, 11]


def test_conflicts_overlapping_each_other_do_not_double_cover():
    conflicts = [slot(10, OTHER, 5, 10), slot(11, THIRD, 7, 12)]

    plans = plan_segments(r(1, 15), "booked", REQUESTER, conflicts)

    assert covered(plans) == [
        (1, 5, "booked"),
        (5, 10, PENDING),
        (10, 12, PENDING),
        (12, 15, "booked"),
    ]


def test_adjacent_foreign_stay_is_not_a_conflict():
    plans = plan_segments(r(5, 10), "booked", REQUESTER, [slot(10, OTHER, 1, 5)])

    assert covered(plans) == [(5, 10, "booked")]
    assert plans[0].is_split is False


def test_conflict_extending_past_both_ends():
    plans = plan_segments(r(5, 8), "booked", REQUESTER, [slot(10, OTHER, 1, 20)])

    assert covered(plans) == [(5, 8, PENDING)]


@pytest.mark.parametrize(
    "conflicts",
    [
        [slot(10, OTHER, 2, 4)],
        [slot(10, OTHER, 1, 3), slot(11, THIRD, 6, 9)],
        [slot(10, OTHER, 1, 30)],
        [slot(10, OTHER, 4, 6), slot(11, THIRD, 5, 7), slot(12, OTHER, 9, 10)],
    ],
)
def test_segments_are_disjoint_and_cover_the_interval(conflicts):
    effective = r(1, 10)

    plans = plan_segments(effective, "booked", REQUESTER, conflicts)

    for left, right in zip(plans, plans[1:]):
        assert left.dates.end_date == right.dates.start_date
    assert plans[0].dates.start_date == effective.start_date
    assert plans[-1].dates.end_date == effective.end_date
    assert sum(len(p.dates) for p in plans) == len(effective)

"""Unit tests for shared value objects."""

from __future__ import annotations

from datetime import date

import pytest

from shared.domain.value_objects import DateRange


def r(start: int, end: int) -> DateRange:
    return DateRange(date(2025, 3, start), date(2025, 3, end))


def test_empty_or_inverted_range_is_rejected():
    with pytest.raises(ValueError):
        r(5, 5)
    with pytest.raises(ValueError):
        r(6, 5)


def test_adjacent_ranges_touch_but_do_not_overlap():
    assert not r(1, 5).overlaps_with(r(5, 9))
    assert r(1, 5).touches(r(5, 9))
    assert r(5, 9).touches(r(1, 5))


def test_overlap_and_intersection():
    assert r(1, 6).overlaps_with(r(5, 9))
    assert r(1, 6).intersection(r(5, 9)) == r(5, 6)
    assert r(1, 5).intersection(r(5, 9)) is None


def test_envelope_covers_all_ranges():
    assert r(4, 6).envelope(r(1, 2), r(8, 10)) == r(1, 10)


def test_contains_is_half_open():
    dates = r(1, 5)
    assert dates.contains(date(2025, 3, 1))
    assert not dates.contains(date(2025, 3, 5))


def test_len_counts_nights():
    assert len(r(1, 8)) == 7

"""
Common Value Objects

- DateRange: a half-open range of calendar days [start_date, end_date)
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods, conflict checks and notification sub-ranges.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Two ranges overlap if they share any dates.
        Note: end_date is exclusive, so adjacent ranges don't overlap.

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return (self.start_date < other.end_date and
                self.end_date > other.start_date)

    def touches(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with or is adjacent to another

        DateRange(25, 28) touches DateRange(28, 31), because together they
        form one continuous stay. Used for merging bookings of one owner.
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check adjacency with another DateRange")

        return (self.start_date <= other.end_date and
                self.end_date >= other.start_date)

    def intersection(self, other: 'DateRange') -> Optional['DateRange']:
        """Return the shared sub-range, or None when the ranges share no day."""
        start = max(self.start_date, other.start_date)
        end = min(self.end_date, other.end_date)
        if start >= end:
            return None
        return DateRange(start, end)

    def envelope(self, *others: 'DateRange') -> 'DateRange':
        """Smallest range covering this range and all others."""
        ranges = (self,) + others
        return DateRange(
            min(r.start_date for r in ranges),
            max(r.end_date for r in ranges),
        )

    def contains(self, check_date: date) -> bool:
        """
        Check if a date is within this range

        Note: start_date is inclusive, end_date is exclusive
        """
        return self.start_date <= check_date < self.end_date

    def __len__(self) -> int:
        """Number of days (nights) in this range"""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.strftime('%d.%m.%Y')} - {self.end_date.strftime('%d.%m.%Y')}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Tuple

from ..engines.leap_count import days_in_month, is_leap_year


@dataclass(frozen=True, order=True)
class CalendarValue:
    """
    Broken-down calendar instant.

    Fields are not validated on construction: an out-of-range combination
    is a normal transient state until it is passed through
    CalendarSystem.adjust(). Ordering is lexicographic over the fields in
    declaration order, and == compares all of them (fraction included).
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    fraction: float = 0.0

    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    def days_in_month(self) -> int:
        """Corrected for the leap day; month must be in 1..12."""
        return days_in_month(self.year, self.month)

    def calendar_fields(self) -> Tuple[int, int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute, self.second)

    def minute_fields(self) -> Tuple[int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute)

    def equals_exact(self, other: CalendarValue) -> bool:
        return self.calendar_fields() == other.calendar_fields() and self.fraction == other.fraction

    def equals_calendar(self, other: CalendarValue) -> bool:
        """Equality ignoring the fractional second."""
        return self.calendar_fields() == other.calendar_fields()

    def shifted(
        self,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        fraction: float = 0.0,
    ) -> CalendarValue:
        """Add raw deltas field by field. The result is usually not valid until adjusted."""
        return replace(
            self,
            year=self.year + years,
            month=self.month + months,
            day=self.day + days,
            hour=self.hour + hours,
            minute=self.minute + minutes,
            second=self.second + seconds,
            fraction=self.fraction + fraction,
        )

    def __str__(self) -> str:
        from ..format import to_string
        return to_string(self)


@dataclass(frozen=True)
class LeapEvent:
    """An inserted leap second: the instant (second == 60) and its epoch counter value."""
    instant: CalendarValue
    delta: int

"""
leaptime.engines.leap_count
---------------------------
Counting of Gregorian leap days and tabulated leap seconds.

Leap days are counted with the closed form

    L(y) = y//4 - y//100 + y//400

which is the number of leap days in years 1..y. Every count below is a
difference of two such values, so the origin cancels.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from ..core.constants import (
    FEBRUARY,
    SECONDS_PER_DAY,
    SECONDS_PER_YEAR,
    TYPICAL_DAYS,
)


class _YMD(Protocol):
    year: int
    month: int
    day: int


def is_leap_year(year: int) -> bool:
    # divisible by 4, except centuries not divisible by 400
    return (year % 4 == 0) and ((year % 400 == 0) or (year % 100 != 0))


def days_in_month(year: int, month: int) -> int:
    if month == FEBRUARY and is_leap_year(year):
        return TYPICAL_DAYS[FEBRUARY - 1] + 1
    return TYPICAL_DAYS[month - 1]


def _closed_form(y: int) -> int:
    return y // 4 - y // 100 + y // 400


def leap_days_before(year: int, month: int, day: int) -> int:
    """
    Leap days strictly before the given date (counted from the closed-form origin).

    In a leap year whose Feb 29 has not yet been passed (January, or February
    up to and including day 29) the year is decremented so that leap day is
    not counted.
    """
    y = year
    if is_leap_year(year) and (month == 1 or (month == FEBRUARY and day <= 29)):
        y -= 1
    return _closed_form(y)


def leap_days_between(start: _YMD, end: _YMD) -> int:
    """Signed number of Feb 29ths in [start, end); negative when end precedes start."""
    return (
        leap_days_before(end.year, end.month, end.day)
        - leap_days_before(start.year, start.month, start.day)
    )


def leap_days_between_years(start_year: int, end_year: int) -> int:
    """Leap days between Jan 1 of start_year and Jan 1 of end_year."""
    start = start_year - 1 if is_leap_year(start_year) else start_year
    end = end_year - 1 if is_leap_year(end_year) else end_year
    return _closed_form(end) - _closed_form(start)


def seconds_between_epochs(start_year: int, end_year: int) -> int:
    """Flat (leap-second-free) seconds from Jan 1 00:00:00 of start_year to that of end_year."""
    return (end_year - start_year) * SECONDS_PER_YEAR + leap_days_between_years(start_year, end_year) * SECONDS_PER_DAY


def leap_seconds_between_offsets(deltas: Iterable[int], start: int, end: int) -> int:
    """
    Signed count of tabulated leap seconds crossed walking from start to end.

    Both endpoints are inclusive. Walking backward subtracts the same
    crossings a forward walk over [end, start] would add.
    """
    if end > start:
        return sum(1 for d in deltas if start <= d <= end)
    if end < start:
        return -sum(1 for d in deltas if end <= d <= start)
    return 0


def leap_seconds_before(instants: Sequence, value) -> int:
    """
    Leap seconds inserted strictly before value.

    An instant that is calendar-equal to value (i.e. value is the leap
    second itself, whatever its fraction) is not counted.
    """
    key = value.calendar_fields()
    return sum(1 for inst in instants if inst.calendar_fields() < key)


def is_leap_minute(leap_minutes, value) -> bool:
    """leap_minutes: collection of (year, month, day, hour, minute) tuples of leap instants."""
    return value.minute_fields() in leap_minutes

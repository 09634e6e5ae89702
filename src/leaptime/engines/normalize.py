"""
leaptime.engines.normalize
--------------------------
The adjust() pipeline: repairs an arbitrary field combination into the
canonical valid calendar value denoting the same instant.

Stages run in the fixed order of PIPELINE. Each one expects every larger
unit to be in range already (fix_day needs a valid year and month,
fix_second a valid year through minute), and each carries its overflow into
the next larger unit by re-running that unit's stage.

Days and seconds have variable moduli (leap days, leap seconds). Their
stages work in two steps:

  coarse  divide by the typical period (365-day year, 60-second minute) and
          jump in one go. Constant time, but off by the leap days/seconds
          walked through.
  exact   count exactly those leap days/seconds, take them back out, and
          sweep one month/minute at a time with the true lengths. The sweep
          only runs for a handful of steps because the irregularities are
          at most one per period.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable, Tuple

from ..core.constants import (
    END_FRACTION,
    END_HOUR,
    END_MINUTE,
    END_MONTH,
    END_YEAR,
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    MONTHS_PER_YEAR,
    START_DAY,
    START_FRACTION,
    START_HOUR,
    START_MINUTE,
    START_MONTH,
    START_SECOND,
    TYPICAL_DAYS,
    TYPICAL_DAYS_PER_YEAR,
    TYPICAL_SECONDS_PER_MINUTE,
)
from ..core.types import CalendarValue
from .epoch import to_epoch
from .leap_count import days_in_month, leap_days_between, leap_seconds_between_offsets

Stage = Callable[[object, CalendarValue], CalendarValue]


# ============================================================
# Range checks
# ============================================================

def seconds_in_minute(system, value: CalendarValue) -> int:
    return 61 if system.is_leap_minute(value) else TYPICAL_SECONDS_PER_MINUTE


def _year_ok(system, v: CalendarValue) -> bool:
    return system.epoch_year <= v.year <= END_YEAR


def _month_ok(v: CalendarValue) -> bool:
    return START_MONTH <= v.month <= END_MONTH


def _day_ok(v: CalendarValue) -> bool:
    return START_DAY <= v.day <= START_DAY + v.days_in_month() - 1


def _hour_ok(v: CalendarValue) -> bool:
    return START_HOUR <= v.hour <= END_HOUR


def _minute_ok(v: CalendarValue) -> bool:
    return START_MINUTE <= v.minute <= END_MINUTE


def _second_ok(system, v: CalendarValue) -> bool:
    return START_SECOND <= v.second <= START_SECOND + seconds_in_minute(system, v) - 1


def _fraction_ok(v: CalendarValue) -> bool:
    return START_FRACTION <= v.fraction < END_FRACTION


def is_valid(system, v: CalendarValue) -> bool:
    # short-circuit order matters: day/second bounds need the larger units in range
    return (
        _year_ok(system, v)
        and _month_ok(v)
        and _day_ok(v)
        and _hour_ok(v)
        and _minute_ok(v)
        and _second_ok(system, v)
        and _fraction_ok(v)
    )


# ============================================================
# Month
# ============================================================

def fix_month(system, v: CalendarValue) -> CalendarValue:
    if _month_ok(v):
        return v
    count = (v.month - START_MONTH) // MONTHS_PER_YEAR
    return replace(v, year=v.year + count, month=v.month - count * MONTHS_PER_YEAR)


def _step_months(system, v: CalendarValue, month_length: Callable[[int, int], int]) -> CalendarValue:
    """Bring day into 1..month_length by stepping the month forward or back."""
    while v.day > START_DAY + month_length(v.year, v.month) - 1:
        v = fix_month(system, replace(v, day=v.day - month_length(v.year, v.month), month=v.month + 1))
    while v.day < START_DAY:
        v = fix_month(system, replace(v, month=v.month - 1))
        v = replace(v, day=v.day + month_length(v.year, v.month))
    return v


def _typical_month_length(year: int, month: int) -> int:
    return TYPICAL_DAYS[month - 1]


# ============================================================
# Day
# ============================================================

def coarse_day(system, v: CalendarValue) -> CalendarValue:
    """Jump whole 365-day years, then step typical months. Leaves the leap days walked through uncorrected."""
    count = (v.day - START_DAY) // TYPICAL_DAYS_PER_YEAR
    v = replace(v, year=v.year + count, day=v.day - count * TYPICAL_DAYS_PER_YEAR)
    return _step_months(system, v, _typical_month_length)


def exact_day(system, origin: CalendarValue, v: CalendarValue) -> CalendarValue:
    """Remove the leap days walked through from origin to the coarse result v, then step true months."""
    v = replace(v, day=v.day - leap_days_between(origin, v))
    return _step_months(system, v, days_in_month)


def fix_day(system, v: CalendarValue) -> CalendarValue:
    if _day_ok(v):
        return v
    # march from the first day of the month, which is never a leap day
    origin = replace(v, day=START_DAY)
    return exact_day(system, origin, coarse_day(system, v))


# ============================================================
# Hour / minute
# ============================================================

def fix_hour(system, v: CalendarValue) -> CalendarValue:
    if _hour_ok(v):
        return v
    count = (v.hour - START_HOUR) // HOURS_PER_DAY
    v = replace(v, day=v.day + count, hour=v.hour - count * HOURS_PER_DAY)
    return fix_day(system, v)


def fix_minute(system, v: CalendarValue) -> CalendarValue:
    if _minute_ok(v):
        return v
    count = (v.minute - START_MINUTE) // MINUTES_PER_HOUR
    v = replace(v, hour=v.hour + count, minute=v.minute - count * MINUTES_PER_HOUR)
    return fix_hour(system, v)


# ============================================================
# Second
# ============================================================

def coarse_second(system, v: CalendarValue, seconds: int) -> CalendarValue:
    """Add `seconds` to v (which must sit at second 0) as whole 60-second minutes plus a remainder."""
    count = (seconds - START_SECOND) // TYPICAL_SECONDS_PER_MINUTE
    v = fix_minute(system, replace(v, minute=v.minute + count))
    return replace(v, second=seconds - count * TYPICAL_SECONDS_PER_MINUTE)


def exact_second(system, start_epoch: int, v: CalendarValue) -> CalendarValue:
    """Take back the leap seconds crossed since start_epoch, then sweep minute by minute with true lengths."""
    crossed = leap_seconds_between_offsets(system.leap_deltas, start_epoch, to_epoch(system, v))
    v = fix_minute(system, replace(v, second=v.second - crossed))

    while v.second > START_SECOND + seconds_in_minute(system, v) - 1:
        v = fix_minute(system, replace(v, second=v.second - seconds_in_minute(system, v), minute=v.minute + 1))
    while v.second < START_SECOND:
        v = fix_minute(system, replace(v, minute=v.minute - 1))
        v = replace(v, second=v.second + seconds_in_minute(system, v))
    return v


def fix_second(system, v: CalendarValue) -> CalendarValue:
    if _second_ok(system, v):
        return v
    seconds = v.second
    # march from the first second of the minute
    v = replace(v, second=START_SECOND)
    start_epoch = to_epoch(system, v)
    return exact_second(system, start_epoch, coarse_second(system, v, seconds))


# ============================================================
# Fractional second
# ============================================================

def fix_fraction(system, v: CalendarValue) -> CalendarValue:
    if _fraction_ok(v):
        return v
    count = math.floor(v.fraction - START_FRACTION)
    fraction = v.fraction - count
    if fraction >= END_FRACTION:
        # e.g. -1e-20 - (-1) rounds to exactly 1.0
        count += 1
        fraction -= 1.0
    return fix_second(system, replace(v, second=v.second + count, fraction=fraction))


# ============================================================
# Pipeline
# ============================================================

PIPELINE: Tuple[Stage, ...] = (
    fix_month,
    fix_day,
    fix_hour,
    fix_minute,
    fix_second,
    fix_fraction,
)


def adjust(system, v: CalendarValue) -> CalendarValue:
    """
    Canonical valid form of v.

    Any field may be out of range by any amount. Valid values are returned
    unchanged, so adjust(adjust(v)) == adjust(v). Years outside
    [epoch_year, 9999] are carried like any other field but not rejected.
    """
    if is_valid(system, v):
        return v
    for stage in PIPELINE:
        v = stage(system, v)
    return v

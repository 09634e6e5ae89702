"""
leaptime.engines.epoch
----------------------
Mapping between calendar values and the leap-inclusive epoch counter.

The counter ticks once per elapsed SI second since the first instant of the
system's epoch year, the inserted leap seconds included. Unlike Unix or NTP
timestamps it never repeats or skips a value.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Tuple

from ..core.constants import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_YEAR,
    START_DAY,
    START_HOUR,
    START_MINUTE,
    START_SECOND,
    TYPICAL_DAYS,
    TYPICAL_SECONDS_PER_MINUTE,
)
from ..core.types import CalendarValue
from .leap_count import leap_days_between, leap_seconds_before


def to_epoch(system, value: CalendarValue) -> int:
    """Whole seconds elapsed from system.epoch to value. Year, month, day, hour and minute must be in range."""
    # Typical month lengths only: correcting here would see the leap day of
    # the current year but not those of the years walked through since the
    # epoch. The full correction is the leap_days_between term below.
    total = sum(TYPICAL_DAYS[: value.month - 1]) * SECONDS_PER_DAY
    total += (value.year - system.epoch_year) * SECONDS_PER_YEAR
    total += (value.day - START_DAY) * SECONDS_PER_DAY
    total += (value.hour - START_HOUR) * SECONDS_PER_HOUR
    total += (value.minute - START_MINUTE) * TYPICAL_SECONDS_PER_MINUTE
    total += leap_days_between(system.epoch, value) * SECONDS_PER_DAY
    total += leap_seconds_before(system.leap_instants, value)
    return total + value.second - START_SECOND


def to_epoch_with_fraction(system, value: CalendarValue) -> Tuple[int, float]:
    return to_epoch(system, value), value.fraction


def from_epoch(system, offset: int, fraction: Optional[float] = None) -> CalendarValue:
    """Calendar value `offset` seconds (plus `fraction`) after system.epoch."""
    from .normalize import adjust

    start = system.epoch
    value = replace(start, second=start.second + offset)
    if fraction is not None:
        value = replace(value, fraction=value.fraction + fraction)
    return adjust(system, value)


def difference(system, a: CalendarValue, b: CalendarValue) -> float:
    """Real elapsed seconds from b to a (negative when a precedes b)."""
    ea, fa = to_epoch_with_fraction(system, a)
    eb, fb = to_epoch_with_fraction(system, b)
    return float(ea - eb) + (fa - fb)

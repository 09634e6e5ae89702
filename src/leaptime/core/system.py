from __future__ import annotations

import time
import warnings
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import cached_property
from typing import FrozenSet, Optional, Tuple

from .constants import (
    DEFAULT_EPOCH_YEAR,
    START_DAY,
    START_FRACTION,
    START_HOUR,
    START_MINUTE,
    START_MONTH,
    START_SECOND,
)
from .errors import NotInitializedWarning
from .types import CalendarValue, LeapEvent
from ..engines import epoch as _epoch
from ..engines import leap_count as _lc
from ..engines import normalize as _norm


@dataclass(frozen=True)
class CalendarSystem:
    """
    Epoch configuration plus leap-second table.

    Built once (see leaptime.initialize) and read-only afterwards. Every
    operation whose result depends on leap seconds or on the epoch year is a
    method here; several systems with different epochs can coexist.
    """
    epoch_year: int = DEFAULT_EPOCH_YEAR
    leap_events: Tuple[LeapEvent, ...] = ()
    initialized: bool = False

    @property
    def epoch(self) -> CalendarValue:
        """First instant of the epoch year."""
        return CalendarValue(
            self.epoch_year, START_MONTH, START_DAY, START_HOUR, START_MINUTE, START_SECOND, START_FRACTION
        )

    @cached_property
    def leap_instants(self) -> Tuple[CalendarValue, ...]:
        return tuple(e.instant for e in self.leap_events)

    @cached_property
    def leap_deltas(self) -> Tuple[int, ...]:
        return tuple(e.delta for e in self.leap_events)

    @cached_property
    def leap_minutes(self) -> FrozenSet[Tuple[int, int, int, int, int]]:
        return frozenset(e.instant.minute_fields() for e in self.leap_events)

    # ------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------

    def is_valid(self, value: CalendarValue) -> bool:
        return _norm.is_valid(self, value)

    def is_leap_minute(self, value: CalendarValue) -> bool:
        return _lc.is_leap_minute(self.leap_minutes, value)

    def seconds_in_minute(self, value: CalendarValue) -> int:
        """60, or 61 for a minute holding an inserted leap second."""
        return _norm.seconds_in_minute(self, value)

    # ------------------------------------------------------------
    # Normalization and epoch conversion
    # ------------------------------------------------------------

    def adjust(self, value: CalendarValue) -> CalendarValue:
        return _norm.adjust(self, value)

    def to_epoch(self, value: CalendarValue) -> int:
        return _epoch.to_epoch(self, value)

    def to_epoch_with_fraction(self, value: CalendarValue) -> Tuple[int, float]:
        return _epoch.to_epoch_with_fraction(self, value)

    def from_epoch(self, offset: int, fraction: Optional[float] = None) -> CalendarValue:
        check_initialized(self)
        return _epoch.from_epoch(self, offset, fraction)

    def difference(self, a: CalendarValue, b: CalendarValue) -> float:
        return _epoch.difference(self, a, b)

    def leap_days_between(self, start: CalendarValue, end: CalendarValue) -> int:
        return _lc.leap_days_between(start, end)

    def leap_seconds_between_offsets(self, start: int, end: int) -> int:
        return _lc.leap_seconds_between_offsets(self.leap_deltas, start, end)

    # ------------------------------------------------------------
    # Host time adapters
    # ------------------------------------------------------------

    def from_struct_time(self, tm: time.struct_time, fraction: Optional[float] = None) -> CalendarValue:
        """Fields of a time.struct_time (full year, 1-based month). tm_sec may be 60."""
        check_initialized(self)
        return CalendarValue(
            tm.tm_year, tm.tm_mon, tm.tm_mday, tm.tm_hour, tm.tm_min, tm.tm_sec,
            START_FRACTION if fraction is None else fraction,
        )

    def from_datetime(self, dt: datetime) -> CalendarValue:
        """Aware datetimes are converted to UTC first; naive ones are taken as UTC."""
        check_initialized(self)
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return CalendarValue(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second, dt.microsecond / 1e6)


DEFAULT_SYSTEM = CalendarSystem()

_advised = False


def check_initialized(system: CalendarSystem) -> bool:
    """
    Warn, once per process, when conversions run on a system without a leap table.

    Such a system still works but treats every minute as 60 seconds long.
    The flag is shared by every CalendarSystem: after the first advisory,
    other uninitialized systems (any epoch year) convert silently too.
    """
    global _advised
    if system.initialized:
        return True
    if not _advised:
        _advised = True
        warnings.warn(
            f"leaptime calendar system not initialized: no leap second handling "
            f"and epoch year {system.epoch_year}.",
            NotInitializedWarning,
            stacklevel=3,
        )
    return False

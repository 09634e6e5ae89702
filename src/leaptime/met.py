"""
leaptime.met
------------
Mission elapsed time (MET) <-> calendar conversion.

MET is the leap-inclusive seconds count since a mission start instant, so it
is just the system's epoch counter shifted by the start's own epoch value.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .core.system import CalendarSystem
from .core.types import CalendarValue


class MissionTimeConverter:
    """
    Example:
        system = leaptime.initialize(1990, "leap-seconds.list")
        conv = MissionTimeConverter(system, CalendarValue(2001, 1, 1))
        met = conv.to_integral_met(CalendarValue(2012, 7, 12, 10, 51, 18))
        conv.to_utc(met)
    """

    def __init__(self, system: CalendarSystem, start: CalendarValue) -> None:
        self.system = system
        self.start = system.adjust(start)
        self.start_epoch, self.start_fraction = system.to_epoch_with_fraction(self.start)

    @classmethod
    def from_epoch(cls, system: CalendarSystem, offset: int, fraction: Optional[float] = None) -> MissionTimeConverter:
        """Mission start given as the system's epoch counter."""
        return cls(system, system.from_epoch(offset, fraction))

    def to_met(self, value: CalendarValue) -> float:
        return self.system.difference(value, self.start)

    def to_met_parts(self, value: CalendarValue) -> Tuple[int, float]:
        """Whole MET seconds and a fraction in [0, 1)."""
        epoch, fraction = self.system.to_epoch_with_fraction(value)
        whole = epoch - self.start_epoch
        frac = fraction - self.start_fraction
        if frac < 0.0:
            whole -= 1
            frac += 1.0
        return whole, frac

    def to_integral_met(self, value: CalendarValue) -> int:
        return self.to_met_parts(value)[0]

    def to_utc(self, met: float) -> CalendarValue:
        whole = math.floor(met)
        return self.to_utc_parts(whole, met - whole)

    def to_utc_parts(self, whole: int, fraction: float = 0.0) -> CalendarValue:
        return self.system.from_epoch(self.start_epoch + whole, self.start_fraction + fraction)

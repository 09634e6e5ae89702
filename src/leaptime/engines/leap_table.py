"""
leaptime.engines.leap_table
---------------------------
Builds a CalendarSystem from the leap-second offsets published in
leap-seconds.list.

Published offsets are NTP timestamps: seconds since 1900-01-01 counted the
Unix way, i.e. with no room for leap seconds. Each one is the midnight at
which the new TAI-UTC value takes effect; the inserted second is the
23:59:60 just before it. This system counts leap seconds, so every offset
accepted into the table pushes the later ones forward by one.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from ..core.constants import REFERENCE_YEAR
from ..core.system import CalendarSystem
from ..core.types import LeapEvent
from .epoch import from_epoch
from .leap_count import seconds_between_epochs


def build_system(epoch_year: int, offsets: Iterable[int]) -> CalendarSystem:
    """Offsets at or before the start of epoch_year are dropped."""
    ref_to_epoch = seconds_between_epochs(REFERENCE_YEAR, epoch_year)

    events: List[LeapEvent] = []
    system = CalendarSystem(epoch_year=epoch_year, initialized=True)
    for flat in offsets:
        if flat <= ref_to_epoch:
            continue
        accepted = len(events)
        delta = flat - ref_to_epoch + accepted

        # the second before the insertion reads 23:59:59 ...
        before = from_epoch(system, delta - 1)
        # ... and the inserted one is its repeat at 60
        events.append(LeapEvent(replace(before, second=before.second + 1), delta))
        system = CalendarSystem(epoch_year=epoch_year, leap_events=tuple(events), initialized=True)

    return system

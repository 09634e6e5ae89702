from __future__ import annotations

import logging
import os
from typing import IO, Iterable, Union

from .core.constants import DEFAULT_EPOCH_YEAR
from .core.errors import LeapSourceError
from .core.system import CalendarSystem, check_initialized
from .engines.leap_count import is_leap_year, leap_days_between_years
from .engines.leap_table import build_system
from .reference.leap_source import ENV_VAR, find_leap_file, parse_offsets, read_leap_offsets

log = logging.getLogger(__name__)

LeapSource = Union[str, "os.PathLike[str]", IO[str]]

__all__ = [
    "initialize",
    "initialize_from_offsets",
    "load_default",
    "check_initialized",
    "is_leap_year",
    "leap_days_between_years",
]


def initialize_from_offsets(epoch_year: int, offsets: Iterable[int]) -> CalendarSystem:
    return build_system(epoch_year, offsets)


def initialize(epoch_year: int, leap_source: LeapSource) -> CalendarSystem:
    """
    Calendar system counting from Jan 1 of epoch_year, with leap seconds
    read from leap_source (a path or an open text stream in leap-seconds.list
    format).

    If the source cannot be read the failure is logged and an uninitialized
    system (default epoch year, no leap seconds) is returned; conversions on
    it emit a one-time NotInitializedWarning.
    """
    try:
        if hasattr(leap_source, "readline"):
            offsets = parse_offsets(leap_source)
        else:
            offsets = read_leap_offsets(leap_source)
    except LeapSourceError as e:
        log.error("%s", e)
        return CalendarSystem()

    system = build_system(epoch_year, offsets)
    log.debug("initialized epoch %d with %d leap seconds", epoch_year, len(system.leap_events))
    return system


def load_default(epoch_year: int = DEFAULT_EPOCH_YEAR) -> CalendarSystem:
    """initialize() from the first leap list found by find_leap_file()."""
    path = find_leap_file()
    if path is None:
        log.error("No leap-seconds.list found (set %s or run `leaptime update-leap-seconds`)", ENV_VAR)
        return CalendarSystem()
    return initialize(epoch_year, path)

"""leaptime public API.

Keep this surface small: users should mostly interact with the names re-exported here.
"""

from .api import (
    initialize,
    initialize_from_offsets,
    load_default,
    check_initialized,
    is_leap_year,
    leap_days_between_years,
)
from .core.errors import LeaptimeError, LeapSourceError, NotInitializedWarning
from .core.system import CalendarSystem, DEFAULT_SYSTEM
from .core.types import CalendarValue, LeapEvent
from .format import to_string
from .met import MissionTimeConverter

__all__ = [
    "initialize",
    "initialize_from_offsets",
    "load_default",
    "check_initialized",
    "is_leap_year",
    "leap_days_between_years",
    "CalendarSystem",
    "CalendarValue",
    "LeapEvent",
    "DEFAULT_SYSTEM",
    "MissionTimeConverter",
    "to_string",
    "LeaptimeError",
    "LeapSourceError",
    "NotInitializedWarning",
]

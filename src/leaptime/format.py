"""Display formatting for calendar values (diagnostics and logging only)."""

from __future__ import annotations

DEFAULT_DATE_SEPARATOR = "/"


def date_to_string(value, sep: str = DEFAULT_DATE_SEPARATOR) -> str:
    return f"{value.year:04d}{sep}{value.month:02d}{sep}{value.day:02d}"


def time_to_string(value) -> str:
    """HH:MM:SS, with the fractional second appended when non-zero (shortest round-tripping repr)."""
    if value.fraction == 0.0:
        secs = f"{value.second:02d}"
    else:
        combined = value.second + value.fraction
        secs = repr(combined)
        if 0.0 <= combined < 10.0:
            secs = "0" + secs
    return f"{value.hour:02d}:{value.minute:02d}:{secs}"


def to_string(value, sep: str = DEFAULT_DATE_SEPARATOR) -> str:
    return date_to_string(value, sep) + " " + time_to_string(value)

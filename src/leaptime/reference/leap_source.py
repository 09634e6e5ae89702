"""
leaptime.reference.leap_source

Reader for leap-second lists in the IERS/IANA `leap-seconds.list` format:

    # comment
    2272060800	10	# 1 Jan 1972
    2287785600	11	# 1 Jul 1972

Only the leading decimal digits of each line matter (the flat NTP offset of
the insertion), after any leading whitespace; the rest of the line is
ignored. A line without such digits is skipped with a warning.

Search order for the list (see find_leap_file):
  1) LEAPTIME_LEAP_SECONDS environment variable (path)
  2) user cache ($XDG_CACHE_HOME/leaptime/leap-seconds.list or ~/.cache/leaptime/...)
  3) packaged snapshot (leaptime/reference/data/leap-seconds.list)
"""

from __future__ import annotations

import importlib.resources
import logging
import os
import re
from pathlib import Path
from typing import IO, Iterator, List, Optional, Union

from ..core.errors import LeapSourceError

ENV_VAR = "LEAPTIME_LEAP_SECONDS"
FILE_NAME = "leap-seconds.list"

log = logging.getLogger(__name__)

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def _read_line(stream: IO[str]) -> Optional[str]:
    """One physical line without its terminator, or None at end of input."""
    line = stream.readline()
    if line == "":
        return None
    return line.rstrip("\r\n")


def next_line(stream: IO[str]) -> Optional[str]:
    """
    Next line that is neither blank nor a comment ('#' in the first column).

    A final line without a trailing newline is still returned. Open files
    should be opened with newline=None (the default) so that bare '\\r'
    terminators are split as well.
    """
    while True:
        line = _read_line(stream)
        if line is None:
            return None
        if not line or line[0] == "#":
            continue
        return line


def iter_lines(stream: IO[str]) -> Iterator[str]:
    while True:
        line = next_line(stream)
        if line is None:
            return
        yield line


def parse_offsets(stream: IO[str]) -> List[int]:
    """Flat NTP offsets, one per line carrying one, in file order."""
    out: List[int] = []
    for line in iter_lines(stream):
        m = _LEADING_DIGITS.match(line)
        if m is None:
            log.warning("Skipping leap list line without an NTP offset: %r", line)
            continue
        out.append(int(m.group(1)))
    return out


def read_leap_offsets(path: Union[str, os.PathLike]) -> List[int]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_offsets(f)
    except OSError as e:
        raise LeapSourceError(f"Failed to open {os.fspath(path)}: {e}") from e


def cache_path() -> Path:
    xdg = os.environ.get("XDG_CACHE_HOME", "").strip()
    base = (Path(xdg).expanduser() / "leaptime") if xdg else (Path.home() / ".cache" / "leaptime")
    return base / FILE_NAME


def packaged_path() -> Path:
    return Path(str(importlib.resources.files("leaptime").joinpath("reference").joinpath("data").joinpath(FILE_NAME)))


def find_leap_file() -> Optional[Path]:
    """First existing leap list in search order, or None."""
    p = os.environ.get(ENV_VAR, "").strip()
    if p:
        path = Path(p).expanduser()
        if path.is_file():
            return path

    path = cache_path()
    if path.is_file():
        return path

    path = packaged_path()
    if path.is_file():
        return path
    return None

from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from .core.constants import DEFAULT_EPOCH_YEAR
from .core.types import CalendarValue


_DATETIME_RE = re.compile(
    r"^(-?\d+)-(\d{1,2})-(\d{1,2})"
    r"(?:[T ](\d{1,2}):(\d{1,2})(?::(\d{1,2})(\.\d+)?)?)?$"
)


def parse_datetime(s: str) -> CalendarValue:
    """YYYY-MM-DD[THH:MM[:SS[.fff]]]; second 60 is accepted. Not validated."""
    m = _DATETIME_RE.match(s.strip())
    if m is None:
        raise ValueError(f"Expected YYYY-MM-DD[THH:MM[:SS[.fff]]], got {s!r}")
    y, mo, d, hh, mm, ss, frac = m.groups()
    return CalendarValue(
        int(y), int(mo), int(d),
        int(hh or 0), int(mm or 0), int(ss or 0),
        float(frac) if frac else 0.0,
    )


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _add_system_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--epoch-year", type=int, default=DEFAULT_EPOCH_YEAR, help=f"epoch year (default: {DEFAULT_EPOCH_YEAR})")
    p.add_argument("--leap-file", default=None, help="leap-seconds.list path (default: search env, cache, packaged)")
    p.add_argument("--sep", default="/", help="date separator for output (default: /)")


def _system(args: argparse.Namespace):
    import leaptime

    if args.leap_file:
        return leaptime.initialize(args.epoch_year, args.leap_file)
    return leaptime.load_default(args.epoch_year)


def cmd_to_epoch(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="leaptime to-epoch", description="Calendar instant -> leap-inclusive seconds since epoch")
    p.add_argument("datetime", help="YYYY-MM-DDTHH:MM:SS[.fff]")
    _add_system_args(p)
    args = p.parse_args(argv)

    system = _system(args)
    value = system.adjust(parse_datetime(args.datetime))
    epoch, frac = system.to_epoch_with_fraction(value)
    print(f"{epoch}" if frac == 0.0 else f"{epoch} + {frac!r}")
    return 0


def cmd_from_epoch(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="leaptime from-epoch", description="Seconds since epoch -> calendar instant")
    p.add_argument("offset", type=int)
    p.add_argument("--fraction", type=float, default=None)
    _add_system_args(p)
    args = p.parse_args(argv)

    from .format import to_string

    system = _system(args)
    print(to_string(system.from_epoch(args.offset, args.fraction), args.sep))
    return 0


def cmd_adjust(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="leaptime adjust", description="Normalize out-of-range calendar fields")
    for name in ("year", "month", "day", "hour", "minute", "second"):
        p.add_argument(name, type=int)
    p.add_argument("--fraction", type=float, default=0.0)
    _add_system_args(p)
    args = p.parse_args(argv)

    from .format import to_string

    system = _system(args)
    raw = CalendarValue(args.year, args.month, args.day, args.hour, args.minute, args.second, args.fraction)
    out = system.adjust(raw)
    print(to_string(out, args.sep))
    if not system.is_valid(out):
        print(f"note: year {out.year} outside supported range [{system.epoch_year}, 9999]")
    return 0


def cmd_met(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="leaptime met", description="Calendar instant -> mission elapsed time")
    p.add_argument("datetime", help="YYYY-MM-DDTHH:MM:SS[.fff]")
    p.add_argument("--start", required=True, help="mission start, YYYY-MM-DDTHH:MM:SS[.fff]")
    _add_system_args(p)
    args = p.parse_args(argv)

    from .met import MissionTimeConverter

    system = _system(args)
    conv = MissionTimeConverter(system, parse_datetime(args.start))
    whole, frac = conv.to_met_parts(system.adjust(parse_datetime(args.datetime)))
    print(f"{whole}" if frac == 0.0 else f"{whole + frac!r}")
    return 0


def cmd_utc(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="leaptime utc", description="Mission elapsed time -> calendar instant")
    p.add_argument("met", type=float)
    p.add_argument("--start", required=True, help="mission start, YYYY-MM-DDTHH:MM:SS[.fff]")
    _add_system_args(p)
    args = p.parse_args(argv)

    from .format import to_string
    from .met import MissionTimeConverter

    system = _system(args)
    conv = MissionTimeConverter(system, parse_datetime(args.start))
    print(to_string(conv.to_utc(args.met), args.sep))
    return 0


def cmd_leap_table(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="leaptime leap-table", description="List the leap seconds after the epoch")
    _add_system_args(p)
    args = p.parse_args(argv)

    from .format import to_string

    system = _system(args)
    print(f"epoch: {to_string(system.epoch, args.sep)}   initialized: {system.initialized}")
    for ev in system.leap_events:
        print(f"  {to_string(ev.instant, args.sep)}   {ev.delta:>12d}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="leaptime", description="Leap-second-aware calendar and epoch counter CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("to-epoch", help="Calendar instant -> seconds since epoch")
    sub.add_parser("from-epoch", help="Seconds since epoch -> calendar instant")
    sub.add_parser("adjust", help="Normalize out-of-range calendar fields")
    sub.add_parser("met", help="Calendar instant -> mission elapsed time")
    sub.add_parser("utc", help="Mission elapsed time -> calendar instant")
    sub.add_parser("leap-table", help="List the leap seconds after the epoch")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["round-trip"], help="Which diagnostic to run")

    sub.add_parser("update-leap-seconds", help="Download the current leap-seconds.list into the user cache")

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "to-epoch":
        return cmd_to_epoch(rest)

    if args.cmd == "from-epoch":
        return cmd_from_epoch(rest)

    if args.cmd == "adjust":
        return cmd_adjust(rest)

    if args.cmd == "met":
        return cmd_met(rest)

    if args.cmd == "utc":
        return cmd_utc(rest)

    if args.cmd == "leap-table":
        return cmd_leap_table(rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "leaptime.diagnostics.round_trip",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "update-leap-seconds":
        return _run_module_main("leaptime.reference.update_leap_seconds", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())

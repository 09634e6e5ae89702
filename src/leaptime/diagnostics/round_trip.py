from __future__ import annotations

import argparse
import random
from typing import Optional

import leaptime
from leaptime.core.system import CalendarSystem
from leaptime.format import to_string


def roundtrip_test(system: CalendarSystem, N: int, start_year: int, end_year: int, seed: int, *, max_failures: int) -> int:
    """epoch -> calendar -> epoch on random offsets, plus one-second steps from each value."""
    random.seed(seed)
    failures = 0

    lo = system.to_epoch(leaptime.CalendarValue(start_year, 1, 1))
    hi = system.to_epoch(leaptime.CalendarValue(end_year + 1, 1, 1)) - 1

    for _ in range(N):
        e0 = random.randint(lo, hi)
        v = system.from_epoch(e0)
        e1 = system.to_epoch(v)
        nxt = system.adjust(v.shifted(seconds=1))
        if not system.is_valid(v) or e1 != e0 or system.to_epoch(nxt) != e0 + 1:
            failures += 1
            print("\nFAIL")
            print("offset:", e0)
            print("value:", to_string(v), "valid:", system.is_valid(v))
            print("back:", e1)
            print("next:", to_string(nxt), system.to_epoch(nxt))
            if failures >= max_failures:
                return failures

    return failures


def leap_sweep_test(system: CalendarSystem, *, span: int, max_failures: int) -> int:
    """Every second within +-span of each tabulated leap second."""
    failures = 0
    for ev in system.leap_events:
        for e0 in range(ev.delta - span, ev.delta + span + 1):
            v = system.from_epoch(e0)
            if system.to_epoch(v) != e0 or (e0 == ev.delta) != v.equals_calendar(ev.instant):
                failures += 1
                print("\nFAIL (leap sweep)")
                print("leap:", to_string(ev.instant), ev.delta)
                print("offset:", e0, "value:", to_string(v), "back:", system.to_epoch(v))
                if failures >= max_failures:
                    return failures
    return failures


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: epoch -> calendar -> epoch.")
    p.add_argument("--epoch-year", type=int, default=1900)
    p.add_argument("--leap-file", default=None, help="leap-seconds.list (default: search env, cache, packaged)")
    p.add_argument("--N", type=int, default=20000, help="Random trials.")
    p.add_argument("--start", type=int, default=None, help="First year (default: epoch year).")
    p.add_argument("--end", type=int, default=2100, help="Last year.")
    p.add_argument("--span", type=int, default=120, help="Seconds swept around each leap second.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per test.")
    args = p.parse_args(argv)

    if args.leap_file:
        system = leaptime.initialize(args.epoch_year, args.leap_file)
    else:
        system = leaptime.load_default(args.epoch_year)

    start = args.epoch_year if args.start is None else args.start
    if args.end < start:
        raise SystemExit("--end must be >= --start")

    print(f"Epoch {args.epoch_year}, {len(system.leap_events)} leap seconds, years {start}..{args.end}")
    total_fail = roundtrip_test(system, args.N, start, args.end, args.seed, max_failures=args.max_failures)
    total_fail += leap_sweep_test(system, span=args.span, max_failures=args.max_failures)

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

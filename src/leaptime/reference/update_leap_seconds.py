#!/usr/bin/env python3
from __future__ import annotations

import argparse
import io
import logging
import urllib.request
from pathlib import Path
from typing import List, Optional

from .leap_source import ENV_VAR, cache_path, packaged_path, parse_offsets

log = logging.getLogger(__name__)

LEAP_SECONDS_URL = "https://data.iana.org/time-zones/data/leap-seconds.list"


def _fetch(url: str) -> str:
    with urllib.request.urlopen(url) as r:
        return r.read().decode("utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Update the leaptime leap-seconds.list from IANA.")
    p.add_argument("--url", default=LEAP_SECONDS_URL, help="Source URL")
    p.add_argument("--out", default=None, help="Output path (default: ~/.cache/leaptime/leap-seconds.list)")
    p.add_argument("--also-write-package", action="store_true",
                   help="Also overwrite src/leaptime/reference/data/leap-seconds.list (for repo maintenance).")
    args = p.parse_args(argv)

    print(f"Downloading {args.url} ...")
    text = _fetch(args.url)

    # refuse to cache something that would not load
    offsets = parse_offsets(io.StringIO(text))
    if not offsets:
        raise RuntimeError("Downloaded leap-seconds.list has no entries")
    log.debug("parsed %d entries", len(offsets))

    out = Path(args.out) if args.out else cache_path()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    print(f"Wrote: {out} ({len(offsets)} entries)")

    if args.also_write_package:
        pkg = packaged_path()
        pkg.write_text(text, encoding="utf-8")
        print(f"Also wrote package list: {pkg}")

    print("\nThe user cache is picked up automatically; to pin another file, set:")
    print(f'  export {ENV_VAR}="{out}"')
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

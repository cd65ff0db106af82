#!/usr/bin/env python3
"""Interactive checker: reads lines from stdin and reports profane words."""
from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import List, Optional, TextIO

from profiles import build_group, parse_names


def main(argv: Optional[List[str]] = None, stdin: TextIO = None, stdout: TextIO = None) -> None:
    parser = argparse.ArgumentParser(description="Check text lines for obfuscated profanity.")
    parser.add_argument(
        "--profiles",
        default=os.getenv("ANTISWEAR_PROFILES", "en,ru"),
        help="Comma separated profile names in priority order. Default: en,ru.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    antiswear = build_group(parse_names(args.profiles))

    for line in stdin:
        started = time.perf_counter()
        result = antiswear.check(line)
        elapsed_ms = (time.perf_counter() - started) * 1000

        if result is not None:
            print(f'Found profane word "{result.word}" at index {result.index}', file=stdout)
        else:
            print("Not found", file=stdout)
        print(f"Checked in: {elapsed_ms:.3f} ms\n", file=stdout)


if __name__ == "__main__":
    main()

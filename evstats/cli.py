"""Replay a recorded event stream through an :class:`EventCounter`.

Input format, one entry per line::

    # comments and blank lines are ignored
    1 login
    10 login
    10 logout
    @ 3601          <- move the clock without recording anything

Timestamps are seconds since the Unix epoch and must not go backwards.
"""

import argparse
import json
import math
import sys
from typing import Iterable, List, Optional, TextIO

from loguru import logger

from evstats.clock import ManualClock
from evstats.core.statistic import EventCounter
from evstats.errors import ClockError, EvstatsError, ReplayError
from evstats.logging import setup_logger
from evstats.settings import LOG_LEVELS

MOVE_MARKER = "@"


def _parse_seconds(token: str, line_no: int, line: str) -> float:
    try:
        seconds = float(token)
    except ValueError:
        seconds = math.nan
    if not math.isfinite(seconds):
        raise ReplayError(
            f"line {line_no}: {token!r} is not a timestamp",
            data={"line_no": line_no, "line": line},
        )
    return seconds


def replay(lines: Iterable[str], counter: Optional[EventCounter] = None) -> EventCounter:
    """Feed *lines* into *counter* (a fresh one driven by a ManualClock by default)."""
    clock: Optional[ManualClock] = None
    if counter is not None:
        if not isinstance(counter.clock, ManualClock):
            raise ReplayError("replay needs a counter driven by a ManualClock")
        clock = counter.clock

    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(None, 1)
        if parts[0] == MOVE_MARKER:
            if len(parts) != 2:
                raise ReplayError(
                    f"line {line_no}: '@' needs a timestamp",
                    data={"line_no": line_no, "line": line},
                )
            seconds = _parse_seconds(parts[1].strip(), line_no, line)
            name = None
        else:
            if len(parts) != 2:
                raise ReplayError(
                    f"line {line_no}: expected '<seconds> <event-name>'",
                    data={"line_no": line_no, "line": line},
                )
            seconds = _parse_seconds(parts[0], line_no, line)
            name = parts[1].strip()

        try:
            if clock is None:
                clock = ManualClock(seconds)
                counter = EventCounter(clock)
            else:
                clock.set(seconds)
        except ClockError as exc:
            raise ReplayError(
                f"line {line_no}: {exc.message}",
                data={"line_no": line_no, "line": line, **exc.data},
            ) from exc

        if name is not None:
            counter.record_event(name)

    if counter is None:
        counter = EventCounter(ManualClock())
    return counter


def _print_rates(counter: EventCounter, out: TextIO) -> None:
    for name, rate in counter.list_rates():
        out.write(f"{name} {rate:.6f}\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Replay timestamped events and print hourly statistics")
    parser.add_argument("file", nargs="?", help="Replay file (defaults to stdin)")
    parser.add_argument("--rates", action="store_true", help="Also print per-minute rates")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level for stderr output",
    )
    args = parser.parse_args(argv)

    setup_logger(level=args.log_level)

    try:
        if args.file:
            with open(args.file, encoding="utf-8") as fh:
                counter = replay(fh)
        else:
            counter = replay(sys.stdin)
    except OSError as exc:
        print(f"Cannot read {args.file or 'stdin'}: {exc}", file=sys.stderr)
        return 1
    except EvstatsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1

    logger.info("Replayed {} distinct event name(s)", len(counter))
    counter.report(sys.stdout)
    if args.rates:
        _print_rates(counter, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())

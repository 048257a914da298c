"""A selectable number of counters fed with names from shared memory."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Sequence
from typing import TextIO

from icefactory.shm_layout import DEFAULT_SEGMENT, read_segment
from icefactory.stations import Station, run_stations

DEFAULT_DELAY = 2.0
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def counter_stations() -> list[Station]:
    """Return all ten counters in their fixed order."""
    return [
        Station(1, "CONE COUNTER", announces_order=True),
        Station(2, "CREAM COUNTER"),
        Station(3, "Chocolate COUNTER"),
        Station(4, "Mango COUNTER"),
        Station(5, "Stawbery COUNTER", phase="PACKAGING"),
        Station(6, "Vanila COUNTER", announces_order=True),
        Station(7, "Kulfa COUNTER"),
        Station(8, "EXTRA TOPPING COUNTER"),
        Station(9, "SPECIAL FLAVOURED CREAM COUNTER"),
        Station(10, "PACKAGING AND SERVING COUNTER", phase="PACKAGING", finishes=True),
    ]


def selected_counters(count: int) -> list[tuple[Station, ...]]:
    """Return the batches of counters run for a request of ``count`` counters.

    Asking for five counters runs the first five and then the first six.
    """
    stations = counter_stations()
    if not 1 <= count <= len(stations):
        raise ValueError(f"number of counters must be 1 to {len(stations)}, got {count}")
    batches = [tuple(stations[:count])]
    if count == 5:
        batches.append(tuple(stations[:6]))
    return batches


def run_counters(
    count: int,
    names: Sequence[str] | None = None,
    delay: float = DEFAULT_DELAY,
    out: TextIO | None = None,
) -> None:
    """Run the selected counters, each on the name stored for its position."""
    batches = selected_counters(count)
    if names is None:
        names = read_segment(DEFAULT_SEGMENT)
    for batch in batches:
        if len(names) < len(batch):
            raise ValueError(f"{len(batch)} counters need names but only {len(names)} given")
        run_stations(batch, list(names[: len(batch)]), out, delay)


def _parse_count(line: str) -> int | None:
    match = _LEADING_INT.match(line)
    return int(match.group(1)) if match else None


def main(argv: Sequence[str] | None = None) -> int:
    """Read the counter names from shared memory and run the requested counters."""
    parser = argparse.ArgumentParser(
        prog="icefactory-counters",
        description="Run up to ten ice-cream counters named from shared memory.",
    )
    parser.add_argument("--segment", default=DEFAULT_SEGMENT, help="segment name")
    parser.add_argument("--count", type=int, default=None, help="number of counters")
    parser.add_argument(
        "--delay", type=float, default=DEFAULT_DELAY, help="seconds spent at each counter"
    )
    args = parser.parse_args(argv)
    try:
        names = read_segment(args.segment)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"shared memory attached at segment {args.segment}")

    count = args.count
    if count is None:
        print("enter number of counters you want")
        sys.stdout.flush()
        count = _parse_count(sys.stdin.readline())
    if count is None:
        print("error")
        return 1
    try:
        run_counters(count, names, args.delay)
    except ValueError:
        print("error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""The five-counter ice-cream line, run for a fixed number of rounds."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import TextIO

from icefactory.stations import Station, run_stations

DEFAULT_ROUNDS = 2
DEFAULT_DELAY = 2.0


def build_line() -> list[tuple[Station, str]]:
    """Return the counters of the line, each paired with the item it handles."""
    return [
        (Station(1, "CONE COUNTER", announces_order=True), "Cone"),
        (Station(2, "CREAM COUNTER"), "Cream"),
        (Station(3, "EXTRA TOPPING COUNTER"), "Extra Topping"),
        (Station(4, "SPECIAL FLAVOURED CREAM COUNTER"), "Special Flavor"),
        (
            Station(
                5,
                "PACKAGING AND SERVING COUNTER",
                phase="PACKAGING",
                finishes=True,
            ),
            "Distribution and Packaging",
        ),
    ]


def run_factory(
    rounds: int = DEFAULT_ROUNDS,
    delay: float = DEFAULT_DELAY,
    out: TextIO | None = None,
) -> None:
    """Run every counter of the line concurrently, ``rounds`` times over."""
    if rounds < 0:
        raise ValueError(f"rounds must not be negative, got {rounds}")
    line = build_line()
    stations = [station for station, _ in line]
    items = [item for _, item in line]
    for _ in range(rounds):
        run_stations(stations, items, out, delay)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ice-cream line from the command line."""
    parser = argparse.ArgumentParser(
        prog="icefactory",
        description="Simulate the ice-cream factory line with one thread per counter.",
    )
    parser.add_argument(
        "--rounds", type=int, default=DEFAULT_ROUNDS, help="how many times to run the line"
    )
    parser.add_argument(
        "--delay", type=float, default=DEFAULT_DELAY, help="seconds spent at each counter"
    )
    args = parser.parse_args(argv)
    try:
        run_factory(args.rounds, args.delay)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
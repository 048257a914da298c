"""Counters of the ice-cream line and the shared critical region they use."""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

READY_MESSAGE = "\n.....CONGRATULATION Sir, ICE-CREAM is ready.....\n\n"


@dataclass(frozen=True)
class Station:
    """One counter of the factory line."""

    number: int
    title: str
    announces_order: bool = False
    phase: str = "manufacturing"
    finishes: bool = False

    def messages(self, item: str) -> tuple[str, str]:
        """Return the text printed on entering and on leaving the counter."""
        lead = "order of icecream arrived" if self.announces_order else "icecream arrived"
        before = (
            f"\n{lead} at COUNTER{self.number} '{self.title}' with delay of 2 seconds\n"
            f"COUNTER{self.number}: Now in critical region...\n"
            f"{item} counter is processing\n"
            f"ice-cream is in {self.phase} process, wait please\n"
        )
        after = f"\n{item} counter of icecream factory is passed Sir\n\n"
        if self.finishes:
            after += READY_MESSAGE
        return before, after

    def process(
        self,
        item: str,
        lock: threading.Lock,
        out: TextIO | None = None,
        delay: float = 2.0,
    ) -> str:
        """Work on ``item`` inside the critical region guarded by ``lock``.

        Returns the full text written for this counter.
        """
        stream = sys.stdout if out is None else out
        before, after = self.messages(item)
        with lock:
            stream.write(before)
            stream.flush()
            time.sleep(delay)
            stream.write(after)
            stream.flush()
        return before + after


def run_stations(
    stations: Sequence[Station],
    items: Sequence[str],
    out: TextIO | None = None,
    delay: float = 2.0,
) -> None:
    """Run every station in its own thread, one at a time in the critical region."""
    if len(stations) != len(items):
        raise ValueError(
            f"{len(stations)} stations but {len(items)} items to process"
        )
    lock = threading.Lock()
    threads = [
        threading.Thread(target=station.process, args=(item, lock, out, delay))
        for station, item in zip(stations, items)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
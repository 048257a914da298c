"""Layout of the flavour-name table kept in a shared memory segment.

The segment starts with a fixed header of ten native ``int`` slots. Each slot
holds the stored size of one name, including its terminating NUL. The header
is followed by the names themselves, packed back to back as NUL-terminated
strings.
"""

from __future__ import annotations

import argparse
import os
import struct
import sys
from collections.abc import Iterable, Sequence
from multiprocessing import resource_tracker
from multiprocessing.shared_memory import SharedMemory

SEGMENT_SIZE = 2048
HEADER_SLOTS = 10
_HEADER = struct.Struct(f"={HEADER_SLOTS}i")
HEADER_SIZE = _HEADER.size
DEFAULT_SEGMENT = "icefactory-6166529"

DEFAULT_NAMES: tuple[str, ...] = (
    "Cone",
    "Cream",
    "Choclolate ",
    "Mango Flavour",
    "Stawbery Flavour",
    "Vanila Flavour",
    "Kulfa Flavour",
    "Extra Topping",
    "Special Flavoured Cream",
    "Packaging and Serving",
)


def pack_names(names: Iterable[str]) -> bytes:
    """Return the header and NUL-terminated names as one block of bytes."""
    encoded = []
    for name in names:
        raw = name.encode("utf-8")
        if b"\x00" in raw:
            raise ValueError(f"name {name!r} contains a NUL character")
        encoded.append(raw + b"\x00")
    if len(encoded) > HEADER_SLOTS:
        raise ValueError(
            f"at most {HEADER_SLOTS} names fit in the header, got {len(encoded)}"
        )
    sizes = [len(raw) for raw in encoded]
    sizes += [0] * (HEADER_SLOTS - len(sizes))
    block = _HEADER.pack(*sizes) + b"".join(encoded)
    if len(block) > SEGMENT_SIZE:
        raise ValueError(
            f"names need {len(block)} bytes, the segment holds {SEGMENT_SIZE}"
        )
    return block


def unpack_names(data: bytes | bytearray | memoryview, count: int = HEADER_SLOTS) -> list[str]:
    """Read ``count`` names back from a block laid out by :func:`pack_names`."""
    if not 0 <= count <= HEADER_SLOTS:
        raise ValueError(f"count must be between 0 and {HEADER_SLOTS}, got {count}")
    raw = bytes(data)
    if len(raw) < HEADER_SIZE:
        raise ValueError(
            f"block of {len(raw)} bytes is shorter than the {HEADER_SIZE}-byte header"
        )
    sizes = _HEADER.unpack_from(raw)
    names = []
    offset = HEADER_SIZE
    for index, size in enumerate(sizes[:count]):
        if size < 1:
            raise ValueError(f"slot {index} holds an invalid size {size}")
        end = offset + size
        if end > len(raw):
            raise ValueError(f"name {index} runs past the end of the block")
        text, _, _ = raw[offset:end].partition(b"\x00")
        names.append(text.decode("utf-8"))
        offset = end
    return names


def _untrack(segment: SharedMemory) -> None:
    """Keep the segment alive after this process exits."""
    if os.name == "posix":
        resource_tracker.unregister(f"/{segment.name}", "shared_memory")


def write_segment(name: str = DEFAULT_SEGMENT, names: Sequence[str] = DEFAULT_NAMES) -> int:
    """Store ``names`` in the named segment, creating it if needed.

    Returns the number of bytes written.
    """
    block = pack_names(names)
    try:
        segment = SharedMemory(name=name, create=True, size=SEGMENT_SIZE)
    except FileExistsError:
        segment = SharedMemory(name=name)
    _untrack(segment)
    try:
        if segment.size < len(block):
            raise ValueError(
                f"segment {name!r} holds {segment.size} bytes, need {len(block)}"
            )
        segment.buf[: len(block)] = block
    finally:
        segment.close()
    return len(block)


def read_segment(name: str = DEFAULT_SEGMENT, count: int = HEADER_SLOTS) -> list[str]:
    """Read ``count`` names from an existing segment."""
    segment = SharedMemory(name=name)
    _untrack(segment)
    try:
        return unpack_names(segment.buf, count)
    finally:
        segment.close()


def remove_segment(name: str = DEFAULT_SEGMENT) -> None:
    """Delete the named segment."""
    segment = SharedMemory(name=name)
    try:
        segment.unlink()
    finally:
        segment.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Write the flavour table to shared memory, or remove it."""
    parser = argparse.ArgumentParser(
        prog="icefactory-shm",
        description="Publish the ice-cream counter names in shared memory.",
    )
    parser.add_argument("--name", default=DEFAULT_SEGMENT, help="segment name")
    parser.add_argument(
        "--remove", action="store_true", help="delete the segment instead"
    )
    args = parser.parse_args(argv)
    try:
        if args.remove:
            remove_segment(args.name)
            print(f"shared memory segment {args.name} removed")
        else:
            size = write_segment(args.name)
            print(f"shared memory attached at segment {args.name}")
            print(f"{size} bytes written")
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Factory client: connects, introduces its counter and prints the replies."""

from __future__ import annotations

import argparse
import socket
import sys
import time
from collections.abc import Sequence
from typing import TextIO

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8888
BUFFER_SIZE = 2000
EXCHANGES = 3
SEND_ON = 2
DEFAULT_LINGER = 2.0

_MESSAGES = {
    1: "....................I am client one , i make 'CONES' of icecreams "
    ".....................\n",
    2: "....................I am client two , i make 'CREAMS' of icecreams "
    ".....................\n",
    3: "....................I am client three , i give 'Extra-Topping' to icecreams "
    ".....................\n",
    4: "....................I am client four , i give 'Special-Flavour' to icecreams "
    ".....................\n",
    5: "....................I am client five , i do 'Packaging And Distribution' "
    "of icecreams .....................\n",
}


def client_message(number: int) -> str:
    """Return the introduction sent by client ``number`` (1 to 5)."""
    try:
        return _MESSAGES[number]
    except KeyError:
        raise ValueError(f"client number must be 1 to {len(_MESSAGES)}, got {number}") from None


def run_client(
    number: int,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    out: TextIO | None = None,
    linger: float = DEFAULT_LINGER,
) -> list[str]:
    """Talk to the server as client ``number`` and return the replies received."""
    message = client_message(number).encode()
    stream = sys.stdout if out is None else out
    replies: list[str] = []
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        print("Socket created", file=stream)
        sock.connect((host, port))
        print("Connected\n", file=stream)
        for remaining in range(EXCHANGES, 0, -1):
            if remaining == SEND_ON:
                sock.sendall(message)
            try:
                data = sock.recv(BUFFER_SIZE)
            except OSError:
                print("recv failed", file=stream)
                break
            reply = data.decode("utf-8", errors="replace")
            replies.append(reply)
            print("Server reply :", file=stream)
            print(reply, file=stream)
            stream.write("\n ")
        stream.flush()
        time.sleep(linger)
    return replies


def main(argv: Sequence[str] | None = None) -> int:
    """Run one factory client from the command line."""
    parser = argparse.ArgumentParser(
        prog="icefactory-client",
        description="Connect to the factory server as one of its five counters.",
    )
    parser.add_argument("number", type=int, choices=sorted(_MESSAGES), help="client number")
    parser.add_argument("--host", default=DEFAULT_HOST, help="server address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server port")
    parser.add_argument(
        "--linger", type=float, default=DEFAULT_LINGER, help="seconds to wait before closing"
    )
    args = parser.parse_args(argv)
    try:
        run_client(args.number, args.host, args.port, linger=args.linger)
    except OSError as exc:
        print(f"connect failed. Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""TCP server that greets each factory client and acknowledges its messages."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
from collections.abc import Sequence
from typing import TextIO

DEFAULT_PORT = 8888
BACKLOG = 3
BUFFER_SIZE = 2000
_POLL_INTERVAL = 0.2

GREETING = (
    "Hello Client , I have received your connection. "
    "And now I will assign a handler for you\n"
)
HANDLER_GREETING = (
    "........................Greetings! I am your connection handler"
    "........................\n"
)
ACKNOWLEDGEMENT = (
    "...................................ok_i_GOT_it"
    ".........................................\n"
)


def handle_connection(conn: socket.socket, out: TextIO | None = None) -> None:
    """Greet one client, then acknowledge each message until it disconnects."""
    stream = sys.stdout if out is None else out
    try:
        conn.sendall(HANDLER_GREETING.encode())
        while True:
            data = conn.recv(BUFFER_SIZE)
            if not data:
                print("Client disconnected", file=stream)
                stream.flush()
                return
            print(data.decode("utf-8", errors="replace"), file=stream)
            conn.sendall(ACKNOWLEDGEMENT.encode())
    except OSError as exc:
        print(f"recv failed: {exc}", file=sys.stderr)
    finally:
        conn.close()


class FactoryServer:
    """Listening socket that hands each accepted client to its own thread."""

    def __init__(
        self,
        host: str = "",
        port: int = DEFAULT_PORT,
        out: TextIO | None = None,
        backlog: int = BACKLOG,
    ) -> None:
        self._out = out
        self._stop = threading.Event()
        self._serving = False
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._socket.bind((host, port))
            self._socket.listen(backlog)
        except OSError:
            self._socket.close()
            raise
        self._socket.settimeout(_POLL_INTERVAL)

    @property
    def address(self) -> tuple[str, int]:
        """The host and port the server listens on."""
        host, port = self._socket.getsockname()[:2]
        return host, port

    def _print(self, text: str) -> None:
        stream = sys.stdout if self._out is None else self._out
        print(text, file=stream)
        stream.flush()

    def serve_forever(self) -> None:
        """Accept clients until :meth:`shutdown` is called."""
        self._serving = True
        self._print("Waiting for incoming connections...")
        try:
            while not self._stop.is_set():
                try:
                    conn, _ = self._socket.accept()
                except TimeoutError:
                    continue
                except OSError:
                    if self._stop.is_set():
                        break
                    raise
                conn.settimeout(None)
                self._print("Connection accepted")
                try:
                    conn.sendall(GREETING.encode())
                except OSError:
                    conn.close()
                    continue
                threading.Thread(
                    target=handle_connection, args=(conn, self._out), daemon=True
                ).start()
                self._print("Handler assigned")
        finally:
            self._socket.close()

    def shutdown(self) -> None:
        """Stop accepting clients and release the listening socket."""
        self._stop.set()
        if not self._serving:
            self._socket.close()

    def __enter__(self) -> FactoryServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the factory server until interrupted."""
    parser = argparse.ArgumentParser(
        prog="icefactory-server",
        description="Accept ice-cream factory clients, one handler thread each.",
    )
    parser.add_argument("--host", default="", help="address to bind, all by default")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to bind")
    args = parser.parse_args(argv)
    try:
        server = FactoryServer(args.host, args.port)
    except OSError:
        print("bind failed")
        return 1
    print("bind done")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        server.shutdown()
    except OSError as exc:
        print(f"accept failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
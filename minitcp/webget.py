"""Fetch a URL over HTTP and copy the raw response to an output stream."""

from __future__ import annotations

import socket
import sys
from typing import BinaryIO, Optional, Sequence

_HTTP_PORT = 80
_CHUNK_SIZE = 4096


def get_url(host: str, path: str, out: Optional[BinaryIO] = None) -> None:
    """Request ``path`` from ``host`` and write everything the server sends to ``out``."""
    if out is None:
        out = sys.stdout.buffer
    request = f"GET {path} HTTP/1.1\r\nHOST: {host}\r\nConnection: close\r\n\r\n".encode()
    with socket.create_connection((host, _HTTP_PORT)) as conn:
        conn.sendall(request)
        while chunk := conn.recv(_CHUNK_SIZE):
            out.write(chunk)
    out.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point: ``webget HOST PATH``."""
    prog = "webget"
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print(f"Usage: {prog} HOST PATH", file=sys.stderr)
        print(f"\tExample: {prog} stanford.edu /class/cs144", file=sys.stderr)
        return 1
    host, path = args
    try:
        get_url(host, path)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
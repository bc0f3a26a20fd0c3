"""A bounded, in-memory stream of bytes with a writing and a reading side."""

from __future__ import annotations

from collections import deque


class ByteStream:
    """A byte pipe holding at most ``capacity`` unread bytes.

    The writing side pushes data and eventually closes the stream; the reading
    side peeks at and pops buffered bytes.  Data pushed beyond the available
    capacity is silently dropped.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._chunks: deque[bytes] = deque()
        self._offset = 0
        self._pushed = 0
        self._popped = 0
        self._closed = False
        self._error = False

    # Writing side

    def push(self, data: bytes) -> None:
        """Append as much of ``data`` as the available capacity allows."""
        available = self.available_capacity()
        if available == 0 or not data:
            return
        chunk = bytes(data[:available])
        self._chunks.append(chunk)
        self._pushed += len(chunk)

    def close(self) -> None:
        """Signal that nothing more will be written."""
        self._closed = True

    def set_error(self) -> None:
        """Signal that the stream suffered an error."""
        self._error = True

    def is_closed(self) -> bool:
        return self._closed

    def available_capacity(self) -> int:
        """How many bytes can be pushed right now."""
        return self._capacity - self.bytes_buffered()

    def bytes_pushed(self) -> int:
        """Total number of bytes ever accepted by the stream."""
        return self._pushed

    # Reading side

    def peek(self) -> bytes:
        """Return the next contiguous run of buffered bytes (may be a prefix of all)."""
        if not self._chunks:
            return b""
        return self._chunks[0][self._offset:]

    def pop(self, length: int) -> None:
        """Discard ``length`` bytes from the front; ignored if fewer are buffered."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length > self.bytes_buffered():
            return
        self._popped += length
        while length:
            remaining = len(self._chunks[0]) - self._offset
            if remaining <= length:
                length -= remaining
                self._chunks.popleft()
                self._offset = 0
            else:
                self._offset += length
                length = 0

    def is_finished(self) -> bool:
        """True once the stream is closed and every byte has been popped."""
        return self._closed and self.bytes_buffered() == 0

    def has_error(self) -> bool:
        return self._error

    def bytes_buffered(self) -> int:
        """Number of bytes pushed but not yet popped."""
        return self._pushed - self._popped

    def bytes_popped(self) -> int:
        """Total number of bytes ever popped."""
        return self._popped


def read(stream: ByteStream, length: int) -> bytes:
    """Peek and pop up to ``length`` bytes from ``stream`` and return them."""
    parts: list[bytes] = []
    collected = 0
    while stream.bytes_buffered() and collected < length:
        view = stream.peek()
        if not view:
            raise RuntimeError("peek() returned no data while bytes are buffered")
        view = view[: length - collected]
        parts.append(view)
        collected += len(view)
        stream.pop(len(view))
    return b"".join(parts)
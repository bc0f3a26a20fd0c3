"""Reassembly of indexed, possibly overlapping substrings into a byte stream."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import NamedTuple

from minitcp.byte_stream import ByteStream


class _Segment(NamedTuple):
    start: int
    end: int  # inclusive
    data: bytes


class Reassembler:
    """Puts out-of-order, overlapping pieces of a stream back in order.

    Bytes that come next in the stream are written to the output at once;
    bytes that fit within the output's capacity but follow a gap are held
    until the gap is filled; anything beyond the capacity is discarded.
    """

    def __init__(self) -> None:
        self._pending = 0
        self._next_index = 0
        self._segments: list[_Segment] = []
        self._had_last = False

    def insert(self, first_index: int, data: bytes, is_last_substring: bool, output: ByteStream) -> None:
        """Insert ``data`` starting at stream index ``first_index``."""
        data = bytes(data)
        if not data:
            if is_last_substring:
                output.close()
            return

        left = first_index
        right = first_index + len(data)  # exclusive
        limit = self._next_index + output.available_capacity()
        if right < self._next_index or limit <= first_index:
            return

        if limit < right:
            right = limit
            data = data[: limit - left]
            is_last_substring = False
        if left < self._next_index:
            data = data[self._next_index - first_index :]
            left = self._next_index

        segments = self._segments
        if left == self._next_index and (not segments or right < segments[0].end):
            if segments:
                data = data[: min(right, segments[0].start) - left]
            self._write(data, output)
        else:
            self._store(data, left, right - 1)

        self._had_last |= is_last_substring
        self._flush(output)

    def bytes_pending(self) -> int:
        """Number of bytes held inside the reassembler."""
        return self._pending

    def _write(self, data: bytes, output: ByteStream) -> None:
        self._next_index += len(data)
        output.push(data)

    def _store(self, data: bytes, begin: int, end: int) -> None:
        segments = self._segments
        lo = bisect_left(segments, begin, key=lambda seg: seg.end)
        hi = bisect_right(segments, end, lo=lo, key=lambda seg: seg.start)
        start, stop = begin, end
        if lo < len(segments):
            start = min(start, segments[lo].start)
        if hi != lo:
            stop = max(stop, segments[hi - 1].end)

        size = stop - start + 1
        self._pending += size
        if len(data) == size and lo == hi:
            segments.insert(lo, _Segment(start, stop, data))
            return

        merged = bytearray(size)
        for seg in segments[lo:hi]:
            self._pending -= len(seg.data)
            offset = seg.start - start
            merged[offset : offset + len(seg.data)] = seg.data
        offset = begin - start
        merged[offset : offset + len(data)] = data
        segments[lo:hi] = [_Segment(start, stop, bytes(merged))]

    def _flush(self, output: ByteStream) -> None:
        segments = self._segments
        while segments and segments[0].start == self._next_index:
            seg = segments.pop(0)
            self._pending -= len(seg.data)
            self._write(seg.data, output)
        if self._had_last and not segments:
            output.close()
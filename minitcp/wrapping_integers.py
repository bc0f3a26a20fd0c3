"""32-bit sequence numbers that wrap around relative to a zero point."""

from __future__ import annotations

from dataclasses import dataclass

_MOD = 1 << 32


@dataclass(frozen=True)
class Wrap32:
    """An unsigned 32-bit value that wraps back to zero after 2**32 - 1."""

    raw_value: int

    def __post_init__(self) -> None:
        if not 0 <= self.raw_value < _MOD:
            raise ValueError(f"raw value {self.raw_value} does not fit in 32 bits")

    @staticmethod
    def wrap(n: int, zero_point: Wrap32) -> Wrap32:
        """Wrap the absolute sequence number ``n`` relative to ``zero_point``."""
        if n < 0:
            raise ValueError("absolute sequence numbers are non-negative")
        return Wrap32((zero_point.raw_value + n) % _MOD)

    def unwrap(self, zero_point: Wrap32, checkpoint: int) -> int:
        """Return the absolute sequence number closest to ``checkpoint`` that wraps to this value."""
        if checkpoint < 0:
            raise ValueError("checkpoint must not be negative")
        check = (zero_point.raw_value + checkpoint) % _MOD
        behind = (check - self.raw_value) % _MOD
        ahead = (self.raw_value - check) % _MOD
        if behind < ahead and checkpoint >= behind:
            return checkpoint - behind
        return checkpoint + ahead

    def __add__(self, n: int) -> Wrap32:
        return Wrap32((self.raw_value + n) % _MOD)
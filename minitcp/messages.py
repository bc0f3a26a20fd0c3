"""Segments exchanged between a TCP sender and a TCP receiver."""

from dataclasses import dataclass, field

from minitcp.wrapping_integers import Wrap32


@dataclass(frozen=True)
class TCPSenderMessage:
    """A sender segment: sequence number, SYN and FIN flags, and payload."""

    seqno: Wrap32 = field(default_factory=lambda: Wrap32(0))
    syn: bool = False
    payload: bytes = b""
    fin: bool = False

    def sequence_length(self) -> int:
        """Count the sequence numbers this segment uses; SYN and FIN take one each."""
        return len(self.payload) + int(self.syn) + int(self.fin)


@dataclass(frozen=True)
class TCPReceiverMessage:
    """A receiver reply: optional acknowledgement number and advertised window."""

    ackno: Wrap32 | None = None
    window_size: int = 0
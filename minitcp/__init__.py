"""TCP building blocks: byte streams, reassembly, wrapping sequence numbers, segments, sender, receiver and an HTTP fetch tool."""

__version__ = "0.1.0"

__all__ = [
    "byte_stream",
    "messages",
    "reassembler",
    "tcp_receiver",
    "tcp_sender",
    "webget",
    "wrapping_integers",
]
"""The receiving side of TCP: feeds segments into a reassembler and acknowledges them."""

from __future__ import annotations

from typing import Optional

from minitcp.byte_stream import ByteStream
from minitcp.messages import TCPReceiverMessage, TCPSenderMessage
from minitcp.reassembler import Reassembler
from minitcp.wrapping_integers import Wrap32

_MAX_WINDOW = 0xFFFF


class TCPReceiver:
    """Turns incoming sender messages into stream bytes and produces acknowledgements."""

    def __init__(self) -> None:
        self._syn = False
        self._isn = Wrap32(0)

    def receive(self, message: TCPSenderMessage, reassembler: Reassembler, inbound_stream: ByteStream) -> None:
        """Insert the payload of ``message`` at its stream index."""
        if message.syn:
            self._syn = True
            self._isn = message.seqno
        if not self._syn:
            return
        absolute = message.seqno.unwrap(self._isn, reassembler.bytes_pending())
        stream_index = absolute + int(message.syn) - 1
        if stream_index < 0:
            # The ISN itself without SYN carries no stream bytes.
            return
        reassembler.insert(stream_index, message.payload, message.fin, inbound_stream)

    def send(self, inbound_stream: ByteStream) -> TCPReceiverMessage:
        """Report the next needed sequence number and the available window."""
        ackno: Optional[Wrap32] = None
        if self._syn:
            absolute = 1 + int(inbound_stream.is_closed()) + inbound_stream.bytes_pushed()
            ackno = Wrap32.wrap(absolute, self._isn)
        window = min(inbound_stream.available_capacity(), _MAX_WINDOW)
        return TCPReceiverMessage(ackno=ackno, window_size=window)
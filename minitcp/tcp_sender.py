"""The sending side of TCP: segmentation, windowing and retransmission."""

from __future__ import annotations

import random
from collections import deque
from typing import Optional

from minitcp.byte_stream import ByteStream, read
from minitcp.messages import TCPReceiverMessage, TCPSenderMessage
from minitcp.wrapping_integers import Wrap32

MAX_PAYLOAD_SIZE = 1000
MAX_RETX_ATTEMPTS = 8
DEFAULT_RT_TIMEOUT = 1000


class RetransmissionTimer:
    """A countdown with a retransmission timeout that can back off exponentially."""

    def __init__(self, initial_rto_ms: int) -> None:
        self._initial_rto = initial_rto_ms
        self._rto = initial_rto_ms
        self._elapsed = 0
        self._running = False

    def start(self) -> None:
        """(Re)start counting from zero."""
        self._running = True
        self._elapsed = 0

    def stop(self) -> None:
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def is_expired(self) -> bool:
        return self._running and self._elapsed >= self._rto

    def tick(self, ms_since_last_tick: int) -> None:
        if self._running:
            self._elapsed += ms_since_last_tick

    def double_rto(self) -> None:
        self._rto *= 2

    def reset_rto(self) -> None:
        self._rto = self._initial_rto


class TCPSender:
    """Reads from an outbound stream and produces segments that fit the peer's window."""

    def __init__(self, initial_rto_ms: int = DEFAULT_RT_TIMEOUT, fixed_isn: Optional[Wrap32] = None) -> None:
        self._isn = fixed_isn if fixed_isn is not None else Wrap32(random.SystemRandom().getrandbits(32))
        self._initial_rto = initial_rto_ms
        self._syn_sent = False
        self._fin_sent = False
        self._retransmissions = 0
        self._acked_seqno = 0
        self._next_seqno = 0
        self._window_size = 1
        self._in_flight = 0
        self._outstanding: deque[TCPSenderMessage] = deque()
        self._queued: deque[TCPSenderMessage] = deque()
        self._timer = RetransmissionTimer(initial_rto_ms)

    def sequence_numbers_in_flight(self) -> int:
        """How many sequence numbers are sent but not yet acknowledged."""
        return self._in_flight

    def consecutive_retransmissions(self) -> int:
        return self._retransmissions

    def maybe_send(self) -> Optional[TCPSenderMessage]:
        """Return the next segment waiting to go out, or None."""
        if not self._queued:
            return None
        if not self._timer.is_running():
            self._timer.start()
        return self._queued.popleft()

    def push(self, outbound_stream: ByteStream) -> None:
        """Fill the window with segments built from the outbound stream."""
        window = self._window_size or 1
        while self._in_flight < window:
            syn = False
            if not self._syn_sent:
                self._syn_sent = syn = True
                self._in_flight += 1
            seqno = Wrap32.wrap(self._next_seqno, self._isn)

            payload = read(outbound_stream, min(MAX_PAYLOAD_SIZE, window - self._in_flight))
            self._in_flight += len(payload)

            fin = False
            if not self._fin_sent and outbound_stream.is_finished() and self._in_flight < window:
                self._fin_sent = fin = True
                self._in_flight += 1

            msg = TCPSenderMessage(seqno=seqno, syn=syn, payload=payload, fin=fin)
            if msg.sequence_length() == 0:
                break

            self._queued.append(msg)
            self._next_seqno += msg.sequence_length()
            self._outstanding.append(msg)

            if msg.fin or outbound_stream.bytes_buffered() == 0:
                break

    def send_empty_message(self) -> TCPSenderMessage:
        """A segment with no payload or flags, carrying the next sequence number."""
        return TCPSenderMessage(seqno=Wrap32.wrap(self._next_seqno, self._isn))

    def receive(self, msg: TCPReceiverMessage) -> None:
        """Take in the peer's acknowledgement and window size."""
        self._window_size = msg.window_size
        if msg.ackno is None:
            return
        ackno = msg.ackno.unwrap(self._isn, self._next_seqno)
        if ackno > self._next_seqno:
            return
        self._acked_seqno = ackno

        while self._outstanding:
            front = self._outstanding[0]
            end = front.seqno.unwrap(self._isn, self._next_seqno) + front.sequence_length()
            if end > self._acked_seqno:
                break
            self._in_flight -= front.sequence_length()
            self._outstanding.popleft()
            self._timer.reset_rto()
            if self._outstanding:
                self._timer.start()
            self._retransmissions = 0
        if not self._outstanding:
            self._timer.stop()

    def tick(self, ms_since_last_tick: int) -> None:
        """Advance time, retransmitting the oldest outstanding segment on expiry."""
        self._timer.tick(ms_since_last_tick)
        if not self._timer.is_expired():
            return
        if not self._outstanding:
            self._timer.stop()
            return
        self._queued.append(self._outstanding[0])
        if self._window_size != 0:
            self._retransmissions += 1
            self._timer.double_rto()
        self._timer.start()
# minitcp

The pieces of a TCP implementation, written as plain Python objects that you drive by hand:

- `minitcp.byte_stream.ByteStream` is a bounded, in-memory byte pipe with a writing side and a reading side; `minitcp.byte_stream.read` drains up to a given number of bytes from it.
- `minitcp.reassembler.Reassembler` takes indexed substrings that may arrive out of order or overlap, and writes them to a `ByteStream` in order.
- `minitcp.wrapping_integers.Wrap32` is a 32-bit sequence number that wraps around, with conversion to and from absolute sequence numbers.
- `minitcp.messages` holds the two segment types, `TCPSenderMessage` and `TCPReceiverMessage`.
- `minitcp.tcp_receiver.TCPReceiver` turns incoming segments into stream bytes and reports the acknowledgement number and window.
- `minitcp.tcp_sender.TCPSender` splits an outgoing stream into segments, follows the peer's window and retransmits with exponential back-off, using `RetransmissionTimer`.
- `webget` is a command-line tool that fetches a URL over HTTP/1.1.

The package has no dependencies beyond the standard library and needs Python 3.10 or later.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Byte streams

```python
from minitcp.byte_stream import ByteStream, read

stream = ByteStream(15)
stream.push(b"cat")
stream.close()
assert stream.bytes_buffered() == 3
assert read(stream, 3) == b"cat"
assert stream.is_finished()
```

`push` accepts only as many bytes as `available_capacity()` allows and drops the rest. `peek` returns buffered bytes at the front of the stream without removing them (possibly only part of what is buffered); `pop` removes bytes, and does nothing if asked for more than are buffered. `bytes_pushed`, `bytes_popped` and `bytes_buffered` count bytes; `close`, `is_closed`, `is_finished`, `set_error` and `has_error` report the stream's state.

## Reassembling out-of-order data

```python
from minitcp.byte_stream import ByteStream, read
from minitcp.reassembler import Reassembler

stream = ByteStream(65000)
reassembler = Reassembler()
reassembler.insert(1, b"b", True, stream)
assert reassembler.bytes_pending() == 1
reassembler.insert(0, b"a", False, stream)
assert read(stream, 2) == b"ab"
assert stream.is_finished()
```

Bytes that fall beyond the stream's available capacity are discarded, and bytes already written are ignored. Held bytes are counted by `bytes_pending`. The stream is closed once the last substring has been written in full.

## Sequence numbers

```python
from minitcp.wrapping_integers import Wrap32

isn = Wrap32(2**32 - 2)
seqno = Wrap32.wrap(5, isn)
assert seqno == Wrap32(3)
assert seqno.unwrap(isn, 0) == 5
```

`unwrap` returns the absolute sequence number closest to the checkpoint that wraps to the value. Adding an integer to a `Wrap32` wraps modulo 2**32.

## Receiver

```python
from minitcp.byte_stream import ByteStream
from minitcp.messages import TCPSenderMessage
from minitcp.reassembler import Reassembler
from minitcp.tcp_receiver import TCPReceiver
from minitcp.wrapping_integers import Wrap32

receiver = TCPReceiver()
reassembler = Reassembler()
inbound = ByteStream(100)
receiver.receive(TCPSenderMessage(seqno=Wrap32(0), syn=True, payload=b"hi"), reassembler, inbound)
reply = receiver.send(inbound)
assert reply.ackno == Wrap32(3)
assert reply.window_size == 98
```

Segments that arrive before a SYN are ignored, and until then `send` reports no acknowledgement number. The advertised window is the stream's available capacity, capped at 65535.

## Sender

```python
from minitcp.byte_stream import ByteStream
from minitcp.messages import TCPReceiverMessage
from minitcp.tcp_sender import TCPSender
from minitcp.wrapping_integers import Wrap32

sender = TCPSender(fixed_isn=Wrap32(0))
outbound = ByteStream(100)

sender.push(outbound)
assert sender.maybe_send().syn

sender.receive(TCPReceiverMessage(ackno=Wrap32(1), window_size=10))
outbound.push(b"hello")
outbound.close()
sender.push(outbound)
segment = sender.maybe_send()
assert segment.payload == b"hello" and segment.fin
assert sender.sequence_numbers_in_flight() == 6
```

`TCPSender(initial_rto_ms=1000, fixed_isn=None)` picks a random initial sequence number when none is given. Payloads are at most `MAX_PAYLOAD_SIZE` (1000) bytes, and a zero window is treated as a window of one. `tick` advances the retransmission timer; when it expires, the oldest unacknowledged segment is queued again and, if the peer's window is not zero, the timeout doubles and `consecutive_retransmissions` goes up. An acknowledgement of new data resets both. `send_empty_message` gives a segment without payload or flags that carries the next sequence number. The module also defines `MAX_RETX_ATTEMPTS` (8) for callers that want to give up after too many retransmissions; the sender itself never gives up.

## webget

```
webget HOST PATH
```

For example:

```
webget example.com /index.html
```

This connects to port 80 on HOST with the operating system's own TCP, sends a `GET` request for PATH with `Connection: close`, and writes everything the server sends back to standard output until the connection ends. It exits with status 1 on a wrong number of arguments or a network error. From Python, `minitcp.webget.get_url(host, path, out)` does the same and writes to any binary stream.

## What the package does not do

The sender and receiver work on segment objects only: there is no network interface, no ARP, no IP routing and no code that puts segments on a real network or reads them from one, so they cannot be used to open an actual connection. `webget` does not use them.
import copy
import random

import pytest

from minitcp.byte_stream import ByteStream, read


def _contents(bs: ByteStream) -> bytes:
    clone = copy.deepcopy(bs)
    parts = []
    while clone.bytes_buffered():
        view = clone.peek()
        assert view, "peek() returned empty data while bytes are buffered"
        parts.append(view)
        clone.pop(len(view))
    return b"".join(parts)


def _counters(bs: ByteStream) -> tuple:
    return (bs.bytes_popped(), bs.bytes_pushed(), bs.available_capacity(), bs.bytes_buffered())


def _apply(bs: ByteStream, step) -> None:
    kind, *args = step
    match kind:
        case "push":
            bs.push(args[0])
        case "pop":
            bs.pop(args[0])
        case "close":
            bs.close()
        case "error":
            bs.set_error()
        case "has_error":
            assert bs.has_error() is args[0]
        case "pushed":
            assert bs.bytes_pushed() == args[0]
        case "buffered":
            assert bs.bytes_buffered() == args[0]
        case "contents":
            assert _contents(bs) == args[0]
        case "state":
            closed, finished, *counters = args
            assert (bs.is_closed(), bs.is_finished()) == (closed, finished)
            assert _counters(bs) == tuple(counters)
        case _:
            raise AssertionError(f"unknown step {kind!r}")


T, F = True, False


def _check(closed, finished, popped, pushed, available, buffered, contents=None):
    steps = [("state", closed, finished, popped, pushed, available, buffered)]
    if contents is not None:
        steps.append(("contents", contents))
    return steps


CAT = [("push", b"cat"), *_check(F, F, 0, 3, 12, 3, b"cat")]
CLOSE = [("close",)]
EMPTY15 = _check(F, F, 0, 0, 15, 0)
DONE3 = _check(T, T, 3, 3, 15, 0)
DONE6 = _check(T, T, 6, 6, 15, 0)

SCENARIOS = {
    "construction": (15, EMPTY15 + [("has_error", F)]),
    "close": (15, CLOSE + _check(T, T, 0, 0, 15, 0) + [("has_error", F)]),
    "set-error": (15, [("error",)] + EMPTY15 + [("has_error", T)]),
    "overwrite": (
        2,
        [("push", b"cat")] + _check(F, F, 0, 2, 0, 2, b"ca") + [("push", b"t")] + _check(F, F, 0, 2, 0, 2, b"ca"),
    ),
    "overwrite-clear-overwrite": (
        2,
        [("push", b"cat"), ("pushed", 2), ("pop", 2), ("push", b"tac")] + _check(F, F, 2, 4, 0, 2, b"ta"),
    ),
    "overwrite-pop-overwrite": (
        2,
        [("push", b"cat"), ("pushed", 2), ("pop", 1), ("push", b"tac")] + _check(F, F, 1, 3, 0, 2, b"at"),
    ),
    "peeks": (
        2,
        [("push", b"")] * 5
        + [("push", b"cat")]
        + [("push", b"")] * 5
        + [("contents", b"ca")] * 2
        + [("buffered", 2)]
        + [("contents", b"ca")] * 2
        + [("pop", 1)]
        + [("push", b"")] * 3
        + [("contents", b"a")] * 2
        + [("buffered", 1)],
    ),
    "write-end-pop": (15, CAT + CLOSE + _check(T, F, 0, 3, 12, 3, b"cat") + [("pop", 3)] + DONE3),
    "write-pop-end": (15, CAT + [("pop", 3)] + _check(F, F, 3, 3, 15, 0) + CLOSE + DONE3),
    "write-pop2-end": (
        15,
        CAT
        + [("pop", 1)]
        + _check(F, F, 1, 3, 13, 2, b"at")
        + [("pop", 2)]
        + _check(F, F, 3, 3, 15, 0)
        + CLOSE
        + DONE3,
    ),
    "write-write-end-pop-pop": (
        15,
        CAT
        + [("push", b"tac")]
        + _check(F, F, 0, 6, 9, 6, b"cattac")
        + CLOSE
        + _check(T, F, 0, 6, 9, 6, b"cattac")
        + [("pop", 2)]
        + _check(T, F, 2, 6, 11, 4, b"ttac")
        + [("pop", 4)]
        + DONE6,
    ),
    "write-pop-write-end-pop": (
        15,
        CAT
        + [("pop", 2)]
        + _check(F, F, 2, 3, 14, 1, b"t")
        + [("push", b"tac")]
        + _check(F, F, 2, 6, 11, 4, b"ttac")
        + CLOSE
        + _check(T, F, 2, 6, 11, 4, b"ttac")
        + [("pop", 4)]
        + DONE6,
    ),
}


@pytest.mark.parametrize("capacity, steps", list(SCENARIOS.values()), ids=list(SCENARIOS))
def test_scenario(capacity, steps):
    bs = ByteStream(capacity)
    for step in steps:
        _apply(bs, step)


def test_many_writes():
    rng = random.Random(2024)
    nreps, min_write, max_write = 1000, 10, 200
    capacity = max_write * nreps
    bs = ByteStream(capacity)
    acc = 0
    for _ in range(nreps):
        size = min_write + rng.randrange(max_write - min_write)
        bs.push(bytes(rng.randrange(26) + ord("a") for _ in range(size)))
        acc += size
        for step in _check(F, F, 0, acc, capacity - acc, acc):
            _apply(bs, step)


@pytest.mark.parametrize(
    "input_len, capacity, seed",
    [(19, 3, 10110), (18, 17, 12345), (1111, 17, 98765), (4097, 4096, 11101)],
)
def test_stress(input_len, capacity, seed):
    rng = random.Random(seed)
    data = rng.randbytes(input_len)
    bs = ByteStream(capacity)
    pushed = popped = 0
    available = capacity
    while pushed < len(data) or popped < len(data):
        assert _counters(bs) == (popped, pushed, available, pushed - popped)

        amount = rng.randint(0, len(data) - pushed)
        bs.push(data[pushed : pushed + amount])
        accepted = min(amount, available)
        pushed += accepted
        available -= accepted
        assert (bs.bytes_pushed(), bs.available_capacity()) == (pushed, available)

        if pushed == len(data):
            bs.close()

        view = bs.peek()
        if pushed != popped:
            assert view
        assert popped + len(view) <= pushed
        assert view == data[popped : popped + len(view)]

        amount = rng.randint(0, len(view))
        bs.pop(amount)
        popped += amount
        available += amount
        assert bs.bytes_popped() == popped

    assert (bs.is_closed(), bs.is_finished()) == (True, True)


def test_pop_more_than_buffered_is_ignored():
    bs = ByteStream(10)
    bs.push(b"abc")
    bs.pop(5)
    assert (bs.bytes_buffered(), bs.bytes_popped(), bs.peek()) == (3, 0, b"abc")


def test_pop_negative_raises():
    bs = ByteStream(10)
    with pytest.raises(ValueError):
        bs.pop(-1)


def test_negative_capacity_raises():
    with pytest.raises(ValueError):
        ByteStream(-1)


def test_peek_returns_front_chunk_after_partial_pop():
    bs = ByteStream(10)
    bs.push(b"ab")
    bs.push(b"cd")
    views = []
    for _ in range(2):
        bs.pop(1)
        views.append(bs.peek())
    assert views == [b"b", b"cd"]


def test_read_across_chunks():
    bs = ByteStream(20)
    bs.push(b"hello")
    bs.push(b" world")
    assert read(bs, 7) == b"hello w"
    assert bs.bytes_popped() == 7
    assert read(bs, 100) == b"orld"
    assert bs.bytes_buffered() == 0


def test_read_empty_stream():
    bs = ByteStream(4)
    assert read(bs, 3) == b""
    assert bs.bytes_popped() == 0
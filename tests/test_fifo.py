import threading

import pytest

from eggbot.fifo import Fifo


def test_new_fifo_is_empty():
    fifo = Fifo(4)
    assert fifo.empty()
    assert not fifo.full()
    assert len(fifo) == 0
    assert fifo.free() == fifo.length - 1


def test_holds_one_less_than_length():
    fifo = Fifo(4)
    for item in "abc":
        fifo.put(item)
    assert fifo.full()
    assert fifo.free() == 0
    with pytest.raises(OverflowError):
        fifo.put("d")


def test_first_in_first_out():
    fifo = Fifo(5)
    for item in [10, 20, 30]:
        fifo.put(item)
    assert [fifo.get() for _ in range(3)] == [10, 20, 30]
    assert fifo.empty()


def test_get_from_empty_raises():
    with pytest.raises(IndexError):
        Fifo(3).get()


def test_used_plus_free_is_capacity_through_wraparound():
    fifo = Fifo(3)
    received = []
    for value in range(10):
        fifo.put(value)
        assert len(fifo) + fifo.free() == fifo.length - 1
        if fifo.full():
            received.append(fifo.get())
    while not fifo.empty():
        received.append(fifo.get())
    assert received == list(range(10))


def test_length_one_is_always_full_and_empty():
    fifo = Fifo(1)
    assert fifo.empty() and fifo.full()
    with pytest.raises(OverflowError):
        fifo.put(1)


def test_invalid_length():
    with pytest.raises(ValueError):
        Fifo(0)


def test_concurrent_producers_lose_nothing():
    fifo = Fifo(1001)

    def produce(start):
        for value in range(start, start + 250):
            fifo.put(value)

    threads = [threading.Thread(target=produce, args=(n * 250,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert sorted(fifo.get() for _ in range(len(fifo))) == list(range(1000))
from threading import Thread

import pytest

from agriswarm.services.history import HistoryBuffer


def test_fifo_eviction_after_overflow():
    buf = HistoryBuffer(5)
    for i in range(12):
        buf.append(i)
        assert len(buf) <= 5

    assert buf.snapshot() == (7, 8, 9, 10, 11)


def test_latest_returns_most_recent_last():
    buf = HistoryBuffer(10, items=range(6))
    assert buf.latest(3) == [3, 4, 5]
    assert buf.latest(0) == []
    assert buf.latest(50) == [0, 1, 2, 3, 4, 5]


def test_snapshot_is_not_affected_by_later_writes():
    buf = HistoryBuffer(3)
    buf.extend([1, 2])
    snap = buf.snapshot()
    buf.append(3)
    assert snap == (1, 2)


def test_initial_items_are_trimmed_to_capacity():
    buf = HistoryBuffer(90, items=range(200))
    assert len(buf) == 90
    assert buf.snapshot()[0] == 110


@pytest.mark.parametrize("capacity", [0, -1])
def test_rejects_non_positive_capacity(capacity):
    with pytest.raises(ValueError):
        HistoryBuffer(capacity)


def test_concurrent_appends_respect_capacity():
    buf = HistoryBuffer(100)

    def writer(offset):
        for i in range(500):
            buf.append(offset + i)

    threads = [Thread(target=writer, args=(n * 1000,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(buf) == 100

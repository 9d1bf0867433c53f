# backend/agriswarm/services/history.py
from collections import deque
from threading import Lock
from typing import Deque, Generic, Iterable, List, Tuple, TypeVar

T = TypeVar("T")


class HistoryBuffer(Generic[T]):
    """
    Bounded FIFO of past readings or prices, most recent last.

    Appends are serialized by a lock; readers work on an immutable
    snapshot so they never block on, or observe, a half-finished write.
    """

    def __init__(self, capacity: int, items: Iterable[T] = ()):
        if capacity <= 0:
            raise ValueError("capacity must be a positive integer")
        self._capacity = capacity
        self._lock = Lock()
        self._items: Deque[T] = deque(items, maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def extend(self, items: Iterable[T]) -> None:
        with self._lock:
            self._items.extend(items)

    def snapshot(self) -> Tuple[T, ...]:
        with self._lock:
            return tuple(self._items)

    def latest(self, n: int) -> List[T]:
        if n <= 0:
            return []
        items = self.snapshot()
        return list(items[-n:])

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

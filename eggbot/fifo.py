"""A bounded, thread-safe first-in first-out queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, TypeVar

T = TypeVar("T")


class Fifo(Generic[T]):
    """A FIFO of ``length`` slots that holds at most ``length - 1`` items.

    One slot is always left free so that full and empty are distinct.
    """

    def __init__(self, length: int) -> None:
        if length < 1:
            raise ValueError("length must be at least 1")
        self.length = length
        self._items: Deque[T] = deque()
        self._lock = threading.Lock()

    def put(self, item: T) -> None:
        """Append ``item``; raise OverflowError if the FIFO is full."""
        with self._lock:
            if len(self._items) >= self.length - 1:
                raise OverflowError("fifo is full")
            self._items.append(item)

    def get(self) -> T:
        """Remove and return the oldest item; raise IndexError if empty."""
        with self._lock:
            if not self._items:
                raise IndexError("fifo is empty")
            return self._items.popleft()

    def empty(self) -> bool:
        """True when there is nothing to remove."""
        return not self._items

    def full(self) -> bool:
        """True when there is no room to insert."""
        return len(self._items) >= self.length - 1

    def __len__(self) -> int:
        return len(self._items)

    def free(self) -> int:
        """Number of items that can still be inserted."""
        return self.length - 1 - len(self._items)
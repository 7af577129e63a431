# pathlab/core/heap.py
#!/usr/bin/env python3
"""
Binary min-heap ordered by an injected comparator.

The ordering is not a fixed field: A* orders by g + h, Dijkstra by g and
Greedy by h alone, so callers hand in `compare(a, b)` returning a negative
number, zero, or a positive number (like the old `cmp`).

No decrease-key. Items are expected to be immutable snapshots; a cheaper
route is pushed as a new item and the stale one is skipped by the caller
when it surfaces.
"""

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, T], int]


class PriorityQueue(Generic[T]):
    def __init__(self, compare: Comparator):
        self._compare = compare
        self._items: List[T] = []

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    def push(self, item: T) -> None:
        self._items.append(item)
        self._sift_up(len(self._items) - 1)

    def peek(self) -> T:
        if not self._items:
            raise IndexError("peek at an empty priority queue")
        return self._items[0]

    def pop(self) -> T:
        """Remove and return the minimum. Guard with `count` first."""
        if not self._items:
            raise IndexError("pop from an empty priority queue")
        items = self._items
        last = items.pop()
        if not items:
            return last
        top = items[0]
        items[0] = last
        self._sift_down(0)
        return top

    def clear(self) -> None:
        self._items.clear()

    # -------------------- heap shape --------------------

    def _less(self, i: int, j: int) -> bool:
        return self._compare(self._items[i], self._items[j]) < 0

    def _sift_up(self, i: int) -> None:
        items = self._items
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(i, parent):
                break
            items[i], items[parent] = items[parent], items[i]
            i = parent

    def _sift_down(self, i: int) -> None:
        items = self._items
        n = len(items)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            smallest = left
            right = left + 1
            if right < n and self._less(right, left):
                smallest = right
            if not self._less(smallest, i):
                break
            items[i], items[smallest] = items[smallest], items[i]
            i = smallest


def compare_keys(a, b) -> int:
    """Three-way compare for tuple sort keys."""
    return (a > b) - (a < b)

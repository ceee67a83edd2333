"""
Frontier containers for the search strategies.

All three hold FrontierEntry value records and can present their
contents as a snapshot in the order the container itself would serve
them.
"""

from __future__ import annotations

import heapq
from collections import deque
from itertools import count

from pathfinder.trace.events import FrontierEntry, FrontierSnapshot


class FIFOFrontier:
    """Queue for BFS. Snapshots run front to back."""

    def __init__(self) -> None:
        self._queue: deque[FrontierEntry] = deque()

    def push(self, entry: FrontierEntry) -> None:
        self._queue.append(entry)

    def pop(self) -> FrontierEntry:
        return self._queue.popleft()

    def snapshot(self) -> FrontierSnapshot:
        return tuple(self._queue)

    def __len__(self) -> int:
        return len(self._queue)


class LIFOFrontier:
    """Stack for DFS. Snapshots run top to bottom."""

    def __init__(self) -> None:
        self._stack: list[FrontierEntry] = []

    def push(self, entry: FrontierEntry) -> None:
        self._stack.append(entry)

    def pop(self) -> FrontierEntry:
        return self._stack.pop()

    def snapshot(self) -> FrontierSnapshot:
        return tuple(reversed(self._stack))

    def __len__(self) -> int:
        return len(self._stack)


class PriorityFrontier:
    """
    Min-heap keyed by entry.priority, for Dijkstra and A*.

    Duplicate entries for the same key are allowed; callers discard stale
    ones when they are popped. Equal priorities pop in insertion order.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, FrontierEntry]] = []
        self._counter = count()

    def push(self, entry: FrontierEntry) -> None:
        if entry.priority is None:
            raise ValueError(f"Priority frontier entry for {entry.key!r} has no priority")
        heapq.heappush(self._heap, (entry.priority, next(self._counter), entry))

    def pop(self) -> FrontierEntry:
        return heapq.heappop(self._heap)[2]

    def snapshot(self) -> FrontierSnapshot:
        """All entries (stale ones included) in ascending priority."""
        return tuple(item[2] for item in sorted(self._heap, key=lambda item: item[:2]))

    def __len__(self) -> int:
        return len(self._heap)

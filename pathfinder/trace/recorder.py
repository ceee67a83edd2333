"""
Trace recorder used by the search strategies.

The recorder renders each event into a log line as it happens and keeps
one frontier snapshot per visit, then freezes everything into a Trace.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from pathfinder.substrate.base import PositionKey
from pathfinder.trace.events import (
    EventKind,
    FrontierEntry,
    FrontierSnapshot,
    Trace,
    TraceEvent,
)

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    """Render integral costs without decimals and others with two."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


class TraceRecorder:
    """
    Collects the events of one engine run.

    Frontier snapshots attach to the most recent visit; a visit that
    never receives one gets an empty snapshot when the trace is built.
    """

    def __init__(self, title: str, label: Callable[[PositionKey], str] = str) -> None:
        """
        Initialize the recorder.

        Args:
            title: Algorithm title used in the start line (e.g. "BFS")
            label: Renders a position key for log lines
        """
        self._title = title
        self._label = label
        self._events: list[TraceEvent] = []
        self._snapshots: list[FrontierSnapshot | None] = []

    @property
    def visit_count(self) -> int:
        return len(self._snapshots)

    def _record(self, kind: EventKind, key: PositionKey | None, message: str, cost=None) -> None:
        self._events.append(TraceEvent(kind=kind, key=key, message=message, cost=cost))
        logger.debug(message)

    def start(self, key: PositionKey) -> None:
        self._record(EventKind.START, key, f"{self._title}: start at {self._label(key)}")

    def visit(self, key: PositionKey) -> None:
        self._record(EventKind.VISIT, key, f"Visit {self._label(key)}")
        self._snapshots.append(None)

    def enqueue(self, key: PositionKey, depth: int) -> None:
        self._record(EventKind.ENQUEUE, key, f"Enqueue {self._label(key)}", cost=depth)

    def push(self, key: PositionKey, depth: int) -> None:
        self._record(EventKind.PUSH, key, f"Push {self._label(key)}", cost=depth)

    def relax(
        self,
        key: PositionKey,
        cost: float,
        heuristic: float | None = None,
    ) -> None:
        """Record a cost improvement; A* passes its heuristic to show g/h/f."""
        if heuristic is None:
            message = f"Relax {self._label(key)} newDist={format_number(cost)}"
        else:
            message = (
                f"Relax {self._label(key)} g={format_number(cost)} "
                f"h={format_number(heuristic)} f={format_number(cost + heuristic)}"
            )
        self._record(EventKind.RELAX, key, message, cost=cost)

    def goal_reached(self, path_length: int) -> None:
        self._record(
            EventKind.GOAL_REACHED,
            None,
            f"Reached the end; path length = {path_length}",
        )

    def no_path(self, message: str = "No path") -> None:
        self._record(EventKind.NO_PATH, None, message)

    def snapshot(self, entries: Iterable[FrontierEntry]) -> None:
        """
        Record the frontier contents after the current visit.

        Raises:
            RuntimeError: If no visit has been recorded yet
        """
        if not self._snapshots:
            raise RuntimeError("Frontier snapshot recorded before any visit")
        self._snapshots[-1] = tuple(entries)

    def build(self) -> Trace:
        """Freeze the recorded events into an immutable Trace."""
        return Trace(
            events=tuple(self._events),
            frontier_snapshots=tuple(s if s is not None else () for s in self._snapshots),
        )

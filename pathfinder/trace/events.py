"""
Trace dataclasses: events, frontier entries, and the finished trace.

Every event renders exactly one log line, so an event's index in the
trace is also its log line index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pathfinder.substrate.base import PositionKey
from pathfinder.trace.pseudocode import PseudocodeLine


class EventKind(str, Enum):
    """Kinds of algorithmic events recorded during a search."""

    START = "start"
    VISIT = "visit"
    ENQUEUE = "enqueue"
    PUSH = "push"
    RELAX = "relax"
    GOAL_REACHED = "goal_reached"
    NO_PATH = "no_path"


# Pseudocode category highlighted for each event kind
EVENT_LINES: dict[EventKind, PseudocodeLine] = {
    EventKind.START: PseudocodeLine.INIT,
    EventKind.VISIT: PseudocodeLine.VISIT,
    EventKind.ENQUEUE: PseudocodeLine.UPDATE,
    EventKind.PUSH: PseudocodeLine.UPDATE,
    EventKind.RELAX: PseudocodeLine.UPDATE,
    EventKind.GOAL_REACHED: PseudocodeLine.GOAL,
    EventKind.NO_PATH: PseudocodeLine.LOOP,
}


@dataclass(frozen=True)
class FrontierEntry:
    """
    One entry of a frontier container, copied by value.

    Attributes:
        key: Position key of the node
        label: Display label for the node
        cost: Hop count (BFS/DFS), distance (Dijkstra) or g (A*)
        heuristic: h for A*, None otherwise
        priority: Ordering key for priority frontiers (cost or g + h)
    """

    key: PositionKey
    label: str
    cost: float
    heuristic: float | None = None
    priority: float | None = None

    def to_dict(self) -> dict:
        data = {"id": self.key, "label": self.label, "cost": self.cost}
        if self.heuristic is not None:
            data["h"] = self.heuristic
        if self.priority is not None:
            data["priority"] = self.priority
        return data


# A frontier's contents in presentation order
FrontierSnapshot = tuple[FrontierEntry, ...]


@dataclass(frozen=True)
class TraceEvent:
    """
    A single recorded event.

    Attributes:
        kind: What happened
        key: Node involved (None for NO_PATH / GOAL_REACHED)
        message: Rendered log line
        cost: New cost for ENQUEUE/PUSH/RELAX
    """

    kind: EventKind
    key: PositionKey | None
    message: str
    cost: float | None = None

    @property
    def line(self) -> PseudocodeLine:
        return EVENT_LINES[self.kind]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "key": self.key,
            "message": self.message,
            "cost": self.cost,
            "line": int(self.line),
        }


@dataclass(frozen=True)
class Trace:
    """
    Complete, immutable record of one engine run.

    Attributes:
        events: Ordered events (one log line each)
        frontier_snapshots: Frontier contents after each visit, by visit index
    """

    events: tuple[TraceEvent, ...] = ()
    frontier_snapshots: tuple[FrontierSnapshot, ...] = ()
    _visit_indices: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        indices = tuple(i for i, e in enumerate(self.events) if e.kind == EventKind.VISIT)
        object.__setattr__(self, "_visit_indices", indices)

    @property
    def log_lines(self) -> list[str]:
        return [e.message for e in self.events]

    @property
    def visit_count(self) -> int:
        return len(self._visit_indices)

    @property
    def no_path(self) -> bool:
        """Whether the run ended without reaching the goal."""
        return any(e.kind == EventKind.NO_PATH for e in self.events)

    def visit_event_index(self, visit_index: int) -> int:
        """Index of the VISIT event for the given visit."""
        return self._visit_indices[visit_index]

    def visit_span(self, visit_index: int) -> tuple[int, int]:
        """
        Event index range [begin, end) that belongs to one visit.

        The first visit also owns the events before it (START); the last
        visit owns every trailing event (GOAL_REACHED / NO_PATH).
        """
        begin = 0 if visit_index == 0 else self._visit_indices[visit_index]
        if visit_index + 1 < len(self._visit_indices):
            end = self._visit_indices[visit_index + 1]
        else:
            end = len(self.events)
        return begin, end

    def snapshot_at(self, visit_index: int) -> FrontierSnapshot:
        if 0 <= visit_index < len(self.frontier_snapshots):
            return self.frontier_snapshots[visit_index]
        return ()

    def to_dict(self) -> dict:
        return {
            "events": [e.to_dict() for e in self.events],
            "frontierSnapshots": [[entry.to_dict() for entry in s] for s in self.frontier_snapshots],
            "logLines": self.log_lines,
        }

"""
Search algorithm base class and result type.

All strategies implement _search() over a Substrate and return a
SearchResult with the visit order, the reconstructed path, the full
trace, and algorithm-specific debug maps.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from pathfinder.substrate.base import PositionKey, Substrate
from pathfinder.trace.events import Trace
from pathfinder.trace.recorder import TraceRecorder

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    Output of one engine run.

    Attributes:
        algorithm: Registry name of the algorithm ("bfs", "astar", ...)
        visited_order: Keys in the order they were visited
        shortest_path: Start-to-goal keys, empty if the goal was not reached
        trace: Events, log lines and frontier snapshots
        meta: Debug maps (dist/parent, or g/h/f/parent for A*)
        cost: Cost of the goal as known to the algorithm (hop count for
            BFS/DFS), None if unreached
    """

    algorithm: str
    visited_order: list[PositionKey]
    shortest_path: list[PositionKey]
    trace: Trace
    meta: dict = field(default_factory=dict)
    cost: float | None = None

    @property
    def found(self) -> bool:
        return bool(self.shortest_path)

    def to_dict(self) -> dict:
        return {
            "algorithm": self.algorithm,
            "visitedOrder": list(self.visited_order),
            "shortestPath": list(self.shortest_path),
            "trace": self.trace.to_dict(),
            "meta": self.meta,
            "cost": self.cost,
        }


def reconstruct_path(
    parent: dict[PositionKey, PositionKey],
    start: PositionKey,
    goal: PositionKey,
) -> list[PositionKey]:
    """
    Walk parent pointers from goal back to start.

    Returns:
        Keys from start to goal, or an empty list if goal was never reached
    """
    if start == goal:
        return [start]

    path = []
    current = goal
    seen = set()
    while current is not None and current != start:
        if current in seen:
            return []
        seen.add(current)
        path.append(current)
        current = parent.get(current)

    if current != start:
        return []
    path.append(start)
    path.reverse()
    return path


class SearchAlgorithm(ABC):
    """
    Abstract base class for the step-recording search strategies.

    run() handles the shared short-circuit for unset or unresolved
    endpoints; subclasses implement the search loop itself.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry identifier (e.g., 'bfs', 'astar')."""
        ...

    @property
    @abstractmethod
    def title(self) -> str:
        """Display title used in the first log line (e.g., 'BFS', 'A*')."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the strategy."""
        ...

    @property
    def guarantees_shortest(self) -> bool:
        """Whether the reported path is guaranteed minimal for this strategy."""
        return True

    def run(self, substrate: Substrate) -> SearchResult:
        """
        Search from substrate.start to substrate.goal, recording every event.

        Never raises for an unreachable or missing goal: both end the trace
        with a NO_PATH event and an empty path.
        """
        recorder = TraceRecorder(self.title, substrate.label)

        if not substrate.endpoints_resolved():
            logger.warning(f"{self.title}: start/goal not resolved on {substrate!r}")
            recorder.no_path(substrate.missing_endpoints_message)
            return SearchResult(
                algorithm=self.name,
                visited_order=[],
                shortest_path=[],
                trace=recorder.build(),
            )

        logger.info(f"Running {self.title}: {substrate.start} -> {substrate.goal}")
        result = self._search(substrate, recorder)

        if result.found:
            logger.info(
                f"{self.title} reached goal after {len(result.visited_order)} visits "
                f"(path length {len(result.shortest_path)})"
            )
        else:
            logger.info(f"{self.title}: no path after {len(result.visited_order)} visits")
        return result

    @abstractmethod
    def _search(self, substrate: Substrate, recorder: TraceRecorder) -> SearchResult:
        """
        Run the search loop. Endpoints are guaranteed to be resolved.

        Args:
            substrate: Graph or grid view to search
            recorder: Recorder to emit events and frontier snapshots into

        Returns:
            SearchResult built from recorder.build()
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

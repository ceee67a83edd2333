"""
Unweighted strategies: breadth-first and depth-first search.

Both ignore edge weights and mark nodes as seen when they enter the
frontier, so every node is discovered at most once and its hop count is
fixed at discovery.
"""

from __future__ import annotations

import logging
from abc import abstractmethod

from pathfinder.search.base import SearchAlgorithm, SearchResult, reconstruct_path
from pathfinder.search.frontier import FIFOFrontier, LIFOFrontier
from pathfinder.substrate.base import PositionKey, Substrate
from pathfinder.trace.events import FrontierEntry
from pathfinder.trace.recorder import TraceRecorder

logger = logging.getLogger(__name__)


class UnweightedSearch(SearchAlgorithm):
    """
    Shared loop for BFS and DFS.

    Subclasses pick the frontier container, the event recorded on
    discovery, and whether the search stops when the goal is discovered
    (BFS) or only when it is popped (DFS).
    """

    stop_on_discovery = False

    @abstractmethod
    def _new_frontier(self) -> FIFOFrontier | LIFOFrontier:
        """Empty frontier container for one run."""
        ...

    @abstractmethod
    def _record_discovery(self, recorder: TraceRecorder, key: PositionKey, depth: int) -> None:
        """Record the ENQUEUE or PUSH event for a newly discovered node."""
        ...

    def _search(self, substrate: Substrate, recorder: TraceRecorder) -> SearchResult:
        start, goal = substrate.start, substrate.goal

        frontier = self._new_frontier()
        dist: dict[PositionKey, int] = {start: 0}
        parent: dict[PositionKey, PositionKey] = {}
        visited_order: list[PositionKey] = []

        frontier.push(FrontierEntry(start, substrate.label(start), 0))
        recorder.start(start)

        found = False
        while frontier:
            entry = frontier.pop()
            u = entry.key
            visited_order.append(u)
            recorder.visit(u)

            if u == goal:
                found = True
                break

            for v, _weight in substrate.neighbors(u):
                if v in dist:
                    continue
                dist[v] = dist[u] + 1
                parent[v] = u
                frontier.push(FrontierEntry(v, substrate.label(v), dist[v]))
                self._record_discovery(recorder, v, dist[v])

                if self.stop_on_discovery and v == goal:
                    found = True
                    break

            recorder.snapshot(frontier.snapshot())
            if found:
                break

        shortest_path = reconstruct_path(parent, start, goal) if found else []
        if shortest_path:
            recorder.goal_reached(len(shortest_path))
        else:
            recorder.no_path()

        return SearchResult(
            algorithm=self.name,
            visited_order=visited_order,
            shortest_path=shortest_path,
            trace=recorder.build(),
            meta={"dist": dist, "parent": parent},
            cost=dist.get(goal) if shortest_path else None,
        )


class BreadthFirstSearch(UnweightedSearch):
    """
    BFS over a FIFO queue.

    Stops the moment the goal is discovered as a neighbor, which already
    fixes its minimal hop count; the goal itself is therefore not visited
    (unless start == goal).
    """

    stop_on_discovery = True

    @property
    def name(self) -> str:
        return "bfs"

    @property
    def title(self) -> str:
        return "BFS"

    @property
    def description(self) -> str:
        return "Breadth-first search (fewest moves, ignores weights)"

    def _new_frontier(self) -> FIFOFrontier:
        return FIFOFrontier()

    def _record_discovery(self, recorder: TraceRecorder, key: PositionKey, depth: int) -> None:
        recorder.enqueue(key, depth)


class DepthFirstSearch(UnweightedSearch):
    """DFS over a LIFO stack. Reports the first path it finds, not the shortest."""

    @property
    def name(self) -> str:
        return "dfs"

    @property
    def title(self) -> str:
        return "DFS"

    @property
    def description(self) -> str:
        return "Depth-first search (first path found, no optimality)"

    @property
    def guarantees_shortest(self) -> bool:
        return False

    def _new_frontier(self) -> LIFOFrontier:
        return LIFOFrontier()

    def _record_discovery(self, recorder: TraceRecorder, key: PositionKey, depth: int) -> None:
        recorder.push(key, depth)

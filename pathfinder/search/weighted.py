"""
Weighted strategies: Dijkstra and A*.

Both keep a min-priority frontier that may hold several entries for the
same node. A relaxation pushes a fresh entry instead of updating the
old one; entries whose cost no longer matches the best known cost are
skipped as stale when popped.
"""

from __future__ import annotations

import logging
import math

from pathfinder.search.base import SearchAlgorithm, SearchResult, reconstruct_path
from pathfinder.search.frontier import PriorityFrontier
from pathfinder.substrate.base import PositionKey, Substrate
from pathfinder.trace.events import FrontierEntry
from pathfinder.trace.recorder import TraceRecorder

logger = logging.getLogger(__name__)


class WeightedSearch(SearchAlgorithm):
    """
    Shared best-first loop, ordered by cost + estimate.

    Dijkstra's estimate is always 0; A* uses the substrate heuristic.
    """

    uses_heuristic = False

    def _estimate(self, substrate: Substrate, key: PositionKey) -> float:
        return 0

    def _entry(self, substrate: Substrate, key: PositionKey, cost: float) -> FrontierEntry:
        if not self.uses_heuristic:
            return FrontierEntry(key, substrate.label(key), cost, priority=cost)
        h = self._estimate(substrate, key)
        return FrontierEntry(key, substrate.label(key), cost, heuristic=h, priority=cost + h)

    def _search(self, substrate: Substrate, recorder: TraceRecorder) -> SearchResult:
        start, goal = substrate.start, substrate.goal

        frontier = PriorityFrontier()
        best_cost: dict[PositionKey, float] = {start: 0}
        parent: dict[PositionKey, PositionKey] = {}
        estimates: dict[PositionKey, float] = {}
        visited_order: list[PositionKey] = []
        stale_skipped = 0

        first = self._entry(substrate, start, 0)
        if first.heuristic is not None:
            estimates[start] = first.heuristic
        frontier.push(first)
        recorder.start(start)

        found = False
        while frontier:
            entry = frontier.pop()
            u = entry.key
            if entry.cost != best_cost.get(u):
                stale_skipped += 1
                continue

            visited_order.append(u)
            recorder.visit(u)
            if u == goal:
                found = True
                break

            for v, weight in substrate.neighbors(u):
                new_cost = entry.cost + weight
                if new_cost < best_cost.get(v, math.inf):
                    best_cost[v] = new_cost
                    parent[v] = u
                    fresh = self._entry(substrate, v, new_cost)
                    if fresh.heuristic is not None:
                        estimates[v] = fresh.heuristic
                    frontier.push(fresh)
                    recorder.relax(v, new_cost, fresh.heuristic)

            recorder.snapshot(frontier.snapshot())

        shortest_path = reconstruct_path(parent, start, goal) if found else []
        if shortest_path:
            recorder.goal_reached(len(shortest_path))
        else:
            recorder.no_path()

        if stale_skipped:
            logger.debug(f"{self.title}: skipped {stale_skipped} stale frontier entries")

        return SearchResult(
            algorithm=self.name,
            visited_order=visited_order,
            shortest_path=shortest_path,
            trace=recorder.build(),
            meta=self._meta(best_cost, estimates, parent, stale_skipped),
            cost=best_cost.get(goal) if shortest_path else None,
        )

    def _meta(self, best_cost, estimates, parent, stale_skipped) -> dict:
        return {"dist": best_cost, "parent": parent, "stale_skipped": stale_skipped}


class DijkstraSearch(WeightedSearch):
    """Dijkstra's algorithm: cheapest accumulated cost first."""

    @property
    def name(self) -> str:
        return "dijkstra"

    @property
    def title(self) -> str:
        return "Dijkstra"

    @property
    def description(self) -> str:
        return "Dijkstra (cheapest path by accumulated weight)"


class AStarSearch(WeightedSearch):
    """
    A*: cheapest g + h first.

    Both substrate heuristics are consistent (weight-adjusted Manhattan on
    the grid, Euclidean scaled by the cheapest weight per unit length on a
    graph), so no visited key is ever relaxed again and the reported path
    is a shortest one.
    """

    uses_heuristic = True

    @property
    def name(self) -> str:
        return "astar"

    @property
    def title(self) -> str:
        return "A*"

    @property
    def description(self) -> str:
        return "A* (accumulated weight + heuristic to the goal)"

    def _estimate(self, substrate: Substrate, key: PositionKey) -> float:
        return substrate.heuristic(key)

    def _meta(self, best_cost, estimates, parent, stale_skipped) -> dict:
        return {
            "g": best_cost,
            "h": estimates,
            "f": {key: g + estimates.get(key, 0) for key, g in best_cost.items()},
            "parent": parent,
            "stale_skipped": stale_skipped,
        }

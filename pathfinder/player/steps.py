"""
Step dataclass and step building from a search result.

Steps come in two phases: one per visit (frontier shown, no path yet),
then one per path node (frontier cleared, path growing). All steps of a
run share the same visit-order and path tuples and only record how much
of each they reveal.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pathfinder.search.base import SearchResult
from pathfinder.substrate.base import PositionKey
from pathfinder.trace.events import FrontierSnapshot
from pathfinder.trace.pseudocode import PseudocodeLine


@dataclass(frozen=True)
class Step:
    """
    One directly renderable state of the animation.

    Attributes:
        visited_count: How many nodes of the visit order are revealed
        path_count: How many nodes of the path are revealed
        frontier: Frontier contents shown at this step
        log_count: Number of log lines revealed
        pseudocode_line: Pseudocode category to highlight
    """

    visited_count: int
    path_count: int
    frontier: FrontierSnapshot
    log_count: int
    pseudocode_line: PseudocodeLine
    order: tuple[PositionKey, ...] = field(default=(), repr=False)
    full_path: tuple[PositionKey, ...] = field(default=(), repr=False)

    @property
    def visited(self) -> tuple[PositionKey, ...]:
        return self.order[: self.visited_count]

    @property
    def path(self) -> tuple[PositionKey, ...]:
        return self.full_path[: self.path_count]


def build_steps(result: SearchResult) -> tuple[Step, ...]:
    """
    Project a search result into the explore-then-reveal step sequence.

    A run with no visits (unresolved endpoints) produces no steps.
    """
    trace = result.trace
    events = trace.events
    order = tuple(result.visited_order)
    path = tuple(result.shortest_path)
    steps: list[Step] = []

    for i in range(len(order)):
        _begin, end = trace.visit_span(i)
        steps.append(
            Step(
                visited_count=i + 1,
                path_count=0,
                frontier=trace.snapshot_at(i),
                log_count=end,
                pseudocode_line=events[end - 1].line,
                order=order,
                full_path=path,
            )
        )

    final_line = events[-1].line if events else PseudocodeLine.INIT
    for j in range(len(path)):
        steps.append(
            Step(
                visited_count=len(order),
                path_count=j + 1,
                frontier=(),
                log_count=len(events),
                pseudocode_line=final_line,
                order=order,
                full_path=path,
            )
        )

    return tuple(steps)

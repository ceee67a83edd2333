"""
Substrate base class: the read-only view the search engine runs over.

A substrate exposes neighbors, edge weights, a heuristic and node
identity uniformly, whether the nodes are grid cells or graph nodes.
Every node is identified by a string position key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

# Grid cells and graph nodes are both normalized to string keys
PositionKey = str


def cell_key(row: int, col: int) -> PositionKey:
    """Position key for a grid cell."""
    return f"{row},{col}"


def parse_cell_key(key: PositionKey) -> tuple[int, int]:
    """Inverse of cell_key()."""
    row, col = key.split(",")
    return int(row), int(col)


class Substrate(ABC):
    """
    Abstract read-only view over a grid or a graph.

    Substrates are built fresh for every engine run and must not change
    while a search is in progress.
    """

    @property
    @abstractmethod
    def start(self) -> PositionKey | None:
        """Key of the start node, or None if unset."""
        ...

    @property
    @abstractmethod
    def goal(self) -> PositionKey | None:
        """Key of the goal node, or None if unset."""
        ...

    @abstractmethod
    def contains(self, key: PositionKey) -> bool:
        """Whether key names an existing, passable node."""
        ...

    @abstractmethod
    def neighbors(self, key: PositionKey) -> list[tuple[PositionKey, float]]:
        """
        Neighbors of a node with the cost of moving to each.

        Args:
            key: Node to expand

        Returns:
            List of (neighbor_key, edge_weight) pairs
        """
        ...

    @abstractmethod
    def heuristic(self, key: PositionKey) -> float:
        """Non-negative estimate of the remaining cost from key to the goal."""
        ...

    @abstractmethod
    def label(self, key: PositionKey) -> str:
        """Human-readable name for log lines and frontier panels."""
        ...

    @abstractmethod
    def path_cost(self, path: list[PositionKey]) -> float:
        """Total cost of walking a path from its first node to its last."""
        ...

    @property
    def missing_endpoints_message(self) -> str:
        """Log line explaining why a run could not start."""
        return "Please set Start and End."

    def endpoints_resolved(self) -> bool:
        """Whether both start and goal are set and name passable nodes."""
        return (
            self.start is not None
            and self.goal is not None
            and self.contains(self.start)
            and self.contains(self.goal)
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(start={self.start!r}, goal={self.goal!r})"

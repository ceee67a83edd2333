"""
Editable node/edge graph, its JSON contract, and its substrate adapter.

Edges are undirected and carry an integer weight >= 1. The A* heuristic
is the straight-line distance between node coordinates, scaled by the
cheapest weight per unit of drawn length so it never overestimates.

Usage:
    from pathfinder.substrate.graph import GraphModel, GraphSubstrate

    graph = GraphModel()
    a = graph.add_node(0, 0)
    b = graph.add_node(100, 0)
    graph.connect(a, b, weight=3)
    graph.set_start(a)
    graph.set_end(b)
    substrate = GraphSubstrate(graph)
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field

from pathfinder.config import (
    DEFAULT_EDGE_WEIGHT,
    GRAPH_NODE_ID_ALPHABET,
    GRAPH_SNAP_SIZE,
)
from pathfinder.substrate.base import PositionKey, Substrate

logger = logging.getLogger(__name__)


class GraphFormatError(ValueError):
    """Raised when an imported graph document is malformed."""


@dataclass
class GraphNode:
    """A node drawn on the canvas."""

    id: str
    x: float
    y: float


@dataclass
class GraphEdge:
    """
    An undirected weighted edge.

    Attributes:
        id: Edge identifier ("<from>-<to>" when created by connect())
        source: One endpoint (serialized as "from")
        target: Other endpoint (serialized as "to")
        weight: Integer cost >= 1, shared by both directions
    """

    id: str
    source: str
    target: str
    weight: int = DEFAULT_EDGE_WEIGHT

    def touches(self, node_id: str) -> bool:
        return node_id in (self.source, self.target)

    def joins(self, a: str, b: str) -> bool:
        return {self.source, self.target} == {a, b}

    def to_dict(self) -> dict:
        return {"id": self.id, "from": self.source, "to": self.target, "weight": self.weight}


def _coerce_weight(value) -> int:
    """Integer weight >= 1; anything unparseable becomes 1."""
    try:
        return max(1, int(float(value)))
    except (TypeError, ValueError):
        return DEFAULT_EDGE_WEIGHT


@dataclass
class GraphModel:
    """
    Mutable graph built by the editor.

    Edits that make no sense (self loops, duplicate edges, unknown ids)
    are silently rejected: edit methods return False (or None) and leave
    the graph unchanged.
    """

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    start_id: str | None = None
    end_id: str | None = None
    snap: bool = True

    # =========================================================================
    # Lookups
    # =========================================================================

    def node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_node(self, node_id: str | None) -> bool:
        return node_id is not None and self.node(node_id) is not None

    def edge(self, edge_id: str) -> GraphEdge | None:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def edge_between(self, a: str, b: str) -> GraphEdge | None:
        for edge in self.edges:
            if edge.joins(a, b):
                return edge
        return None

    def _new_node_id(self) -> str:
        used = {node.id for node in self.nodes}
        for ch in GRAPH_NODE_ID_ALPHABET:
            if ch not in used:
                return ch
        i = 1
        while str(i) in used:
            i += 1
        return str(i)

    def _snapped(self, value: float) -> float:
        step = GRAPH_SNAP_SIZE if self.snap else 1
        return round(value / step) * step

    # =========================================================================
    # Edits
    # =========================================================================

    def add_node(self, x: float, y: float) -> str:
        """Add a node at (x, y), snapped to the grid if enabled. Returns its id."""
        node_id = self._new_node_id()
        self.nodes.append(GraphNode(node_id, self._snapped(x), self._snapped(y)))
        return node_id

    def move_node(self, node_id: str, x: float, y: float) -> bool:
        node = self.node(node_id)
        if node is None:
            return False
        node.x = self._snapped(x)
        node.y = self._snapped(y)
        return True

    def connect(self, from_id: str, to_id: str, weight=DEFAULT_EDGE_WEIGHT) -> str | None:
        """
        Add an undirected edge between two existing nodes.

        Returns:
            The new edge id, or None if rejected (self loop, duplicate,
            unknown endpoint)
        """
        if not from_id or not to_id or from_id == to_id:
            return None
        if not self.has_node(from_id) or not self.has_node(to_id):
            return None
        if self.edge_between(from_id, to_id) is not None:
            return None

        edge_id = f"{from_id}-{to_id}"
        self.edges.append(GraphEdge(edge_id, from_id, to_id, _coerce_weight(weight)))
        return edge_id

    def set_edge_weight(self, edge_id: str, weight) -> bool:
        edge = self.edge(edge_id)
        if edge is None:
            return False
        edge.weight = _coerce_weight(weight)
        return True

    def delete_node(self, node_id: str) -> bool:
        """Remove a node, its edges, and any start/end marker on it."""
        if not self.has_node(node_id):
            return False
        self.nodes = [n for n in self.nodes if n.id != node_id]
        self.edges = [e for e in self.edges if not e.touches(node_id)]
        if self.start_id == node_id:
            self.start_id = None
        if self.end_id == node_id:
            self.end_id = None
        return True

    def delete_edge(self, edge_id: str) -> bool:
        if self.edge(edge_id) is None:
            return False
        self.edges = [e for e in self.edges if e.id != edge_id]
        return True

    def set_start(self, node_id: str | None) -> bool:
        if node_id is not None and not self.has_node(node_id):
            return False
        self.start_id = node_id
        return True

    def set_end(self, node_id: str | None) -> bool:
        if node_id is not None and not self.has_node(node_id):
            return False
        self.end_id = node_id
        return True

    def clear(self) -> None:
        self.nodes = []
        self.edges = []
        self.start_id = None
        self.end_id = None
        self.snap = True

    # =========================================================================
    # JSON contract
    # =========================================================================

    def to_dict(self) -> dict:
        return {
            "nodes": [asdict(n) for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "startId": self.start_id,
            "endId": self.end_id,
            "snap": self.snap,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict) -> GraphModel:
        """
        Build a graph from an exported document.

        Ids are coerced to strings, coordinates to floats and weights to
        integers >= 1.

        Raises:
            GraphFormatError: If nodes/edges are missing or malformed
        """
        if not isinstance(data, dict):
            raise GraphFormatError("Graph document must be an object")
        if not isinstance(data.get("nodes"), list) or not isinstance(data.get("edges"), list):
            raise GraphFormatError("Graph document needs 'nodes' and 'edges' lists")

        try:
            nodes = [GraphNode(str(n["id"]), float(n["x"]), float(n["y"])) for n in data["nodes"]]
            edges = [
                GraphEdge(
                    id=str(e["id"]),
                    source=str(e["from"]),
                    target=str(e["to"]),
                    weight=_coerce_weight(e.get("weight", DEFAULT_EDGE_WEIGHT)),
                )
                for e in data["edges"]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise GraphFormatError(f"Malformed node or edge: {e}") from e

        start_id = data.get("startId")
        end_id = data.get("endId")
        return cls(
            nodes=nodes,
            edges=edges,
            start_id=str(start_id) if start_id is not None else None,
            end_id=str(end_id) if end_id is not None else None,
            snap=bool(data.get("snap", False)),
        )

    @classmethod
    def from_json(cls, text: str) -> GraphModel:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise GraphFormatError(f"Invalid JSON: {e}") from e
        return cls.from_dict(data)


class GraphSubstrate(Substrate):
    """
    Undirected weighted view over a GraphModel.

    Both endpoints of every edge see each other at the edge's weight.

    The heuristic is the Euclidean distance to the end node multiplied by
    ``scale``, the smallest weight / length ratio over edges of non-zero
    length. Every edge then costs at least scale times its drawn length,
    so the heuristic is admissible and consistent however the graph was
    laid out. With no such edge the scale is 0 and A* behaves as Dijkstra.
    """

    def __init__(self, graph: GraphModel) -> None:
        self._positions: dict[str, tuple[float, float]] = {
            n.id: (n.x, n.y) for n in graph.nodes
        }
        self._adjacency: dict[str, list[tuple[str, int]]] = {n.id: [] for n in graph.nodes}
        self._weights: dict[frozenset, int] = {}
        ratios = []
        for edge in graph.edges:
            if edge.source not in self._adjacency or edge.target not in self._adjacency:
                logger.warning(f"Skipping edge '{edge.id}' with unknown endpoint")
                continue
            self._adjacency[edge.source].append((edge.target, edge.weight))
            self._adjacency[edge.target].append((edge.source, edge.weight))
            pair = frozenset((edge.source, edge.target))
            self._weights[pair] = min(edge.weight, self._weights.get(pair, edge.weight))
            length = self._distance(edge.source, edge.target)
            if length > 0:
                ratios.append(edge.weight / length)

        self.scale = max(0.0, min(ratios)) if ratios else 0.0
        logger.debug(f"Graph heuristic scale {self.scale:.4f} over {len(ratios)} edges")

        self._start = graph.start_id
        self._goal = graph.end_id

    @property
    def start(self) -> PositionKey | None:
        return self._start

    @property
    def goal(self) -> PositionKey | None:
        return self._goal

    def contains(self, key: PositionKey) -> bool:
        return key in self._positions

    def neighbors(self, key: PositionKey) -> list[tuple[PositionKey, float]]:
        return list(self._adjacency.get(key, []))

    def heuristic(self, key: PositionKey) -> float:
        if self._goal not in self._positions or key not in self._positions:
            return 0.0
        return self.scale * self._distance(key, self._goal)

    def _distance(self, a: str, b: str) -> float:
        x1, y1 = self._positions[a]
        x2, y2 = self._positions[b]
        return math.hypot(x1 - x2, y1 - y2)

    def label(self, key: PositionKey) -> str:
        return key

    def path_cost(self, path: list[PositionKey]) -> float:
        """Sum of edge weights between consecutive path nodes (0 for missing edges)."""
        total = 0
        for a, b in zip(path, path[1:]):
            total += self._weights.get(frozenset((a, b)), 0)
        return total

    @property
    def missing_endpoints_message(self) -> str:
        return "[Graph] Please set Start and End nodes."

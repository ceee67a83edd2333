"""
Substrate module.

Provides the editable inputs and the read-only views the search engine
runs over:
- GridModel / GridSubstrate: Weighted 4-connected grid
- GraphModel / GraphSubstrate: Undirected weighted node/edge graph
- Substrate: Common neighbor/weight/heuristic interface
"""

from pathfinder.substrate.base import PositionKey, Substrate, cell_key, parse_cell_key
from pathfinder.substrate.graph import (
    GraphEdge,
    GraphFormatError,
    GraphModel,
    GraphNode,
    GraphSubstrate,
)
from pathfinder.substrate.grid import CellKind, GridModel, GridSubstrate

__all__ = [
    "PositionKey",
    "Substrate",
    "cell_key",
    "parse_cell_key",
    "CellKind",
    "GridModel",
    "GridSubstrate",
    "GraphEdge",
    "GraphFormatError",
    "GraphModel",
    "GraphNode",
    "GraphSubstrate",
]

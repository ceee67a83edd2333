"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import random
from pathlib import Path

import pytest

from pathfinder.substrate import GraphModel, GridModel


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_grid():
    """Return a factory for grids given walls, weights and endpoint positions."""

    def _make(
        rows: int,
        cols: int,
        walls=(),
        weights=None,
        start=(0, 0),
        end=None,
        endpoint_weight: int = 1,
    ) -> GridModel:
        end = end if end is not None else (rows - 1, cols - 1)
        weights = weights or {}
        cells = []
        for r in range(rows):
            row = []
            for c in range(cols):
                if (r, c) == start:
                    row.append({"kind": "start", "weight": endpoint_weight})
                elif (r, c) == end:
                    row.append({"kind": "end", "weight": endpoint_weight})
                elif (r, c) in walls:
                    row.append({"kind": "wall"})
                else:
                    row.append({"kind": "path", "weight": weights.get((r, c), 1)})
            cells.append(row)
        return GridModel.from_cells(cells)

    return _make


@pytest.fixture
def open_grid(make_grid) -> GridModel:
    """3x3 grid, every cell (endpoints included) weight 1, no walls."""
    return make_grid(3, 3)


@pytest.fixture
def walled_grid(make_grid) -> GridModel:
    """3x3 grid with a wall in the center."""
    return make_grid(3, 3, walls={(1, 1)})


@pytest.fixture
def weighted_grid(make_grid) -> GridModel:
    """2x2 grid where (0,1) costs 10 and (1,0) costs 1; endpoints cost 0."""
    return make_grid(2, 2, weights={(0, 1): 10, (1, 0): 1}, endpoint_weight=0)


@pytest.fixture
def sample_grid_text() -> str:
    """A small maze in the text format."""
    return "\n".join(
        [
            "S..#....",
            ".#.#.##.",
            ".#...#5.",
            ".####.#.",
            "...9....",
            "##.#.##E",
        ]
    )


@pytest.fixture
def triangle_graph() -> GraphModel:
    """A-B (1), B-C (1), A-C (5), laid out one unit apart on a line."""
    return GraphModel.from_dict(
        {
            "nodes": [
                {"id": "A", "x": 0, "y": 0},
                {"id": "B", "x": 1, "y": 0},
                {"id": "C", "x": 2, "y": 0},
            ],
            "edges": [
                {"id": "A-B", "from": "A", "to": "B", "weight": 1},
                {"id": "B-C", "from": "B", "to": "C", "weight": 1},
                {"id": "A-C", "from": "A", "to": "C", "weight": 5},
            ],
            "startId": "A",
            "endId": "C",
        }
    )


@pytest.fixture
def disconnected_graph(triangle_graph: GraphModel) -> GraphModel:
    """Triangle graph plus an isolated node D as the end."""
    triangle_graph.snap = False
    triangle_graph.add_node(5, 5)
    triangle_graph.set_end("D")
    return triangle_graph


@pytest.fixture
def stale_graph() -> GraphModel:
    """
    Graph where Dijkstra pops a stale entry.

    C is first reached at cost 5 (via A) then improved to 2 (via B); E hangs
    off C with weight 10, so the stale C(5) entry surfaces before E(12).
    """
    return GraphModel.from_dict(
        {
            "nodes": [
                {"id": "A", "x": 0, "y": 0},
                {"id": "B", "x": 0, "y": 0},
                {"id": "C", "x": 0, "y": 0},
                {"id": "E", "x": 0, "y": 0},
            ],
            "edges": [
                {"id": "A-B", "from": "A", "to": "B", "weight": 1},
                {"id": "A-C", "from": "A", "to": "C", "weight": 5},
                {"id": "B-C", "from": "B", "to": "C", "weight": 1},
                {"id": "C-E", "from": "C", "to": "E", "weight": 10},
            ],
            "startId": "A",
            "endId": "E",
        }
    )


@pytest.fixture
def editor_graph() -> GraphModel:
    """
    Graph drawn with the editor at snapped pixel coordinates.

    The direct A-B edge costs 3 but the detour A-C-B costs 2, so the
    cheapest route to D is A-C-B-D at cost 3.
    """
    graph = GraphModel()
    a = graph.add_node(0, 0)
    b = graph.add_node(100, 0)
    c = graph.add_node(40, 60)
    d = graph.add_node(200, 0)
    graph.connect(a, b, weight=3)
    graph.connect(b, d)
    graph.connect(a, c)
    graph.connect(c, b)
    graph.set_start(a)
    graph.set_end(d)
    return graph


@pytest.fixture
def lattice_graph() -> GraphModel:
    """5x5 lattice drawn 40px apart with seeded weights 1-9 and some diagonals."""
    rng = random.Random(7)
    graph = GraphModel()
    ids = [[graph.add_node(c * 40, r * 40) for c in range(5)] for r in range(5)]
    for r in range(5):
        for c in range(5):
            if c + 1 < 5:
                graph.connect(ids[r][c], ids[r][c + 1], weight=rng.randint(1, 9))
            if r + 1 < 5:
                graph.connect(ids[r][c], ids[r + 1][c], weight=rng.randint(1, 9))
            if r + 1 < 5 and c + 1 < 5 and rng.random() < 0.3:
                graph.connect(ids[r][c], ids[r + 1][c + 1], weight=rng.randint(1, 9))
    graph.set_start(ids[0][0])
    graph.set_end(ids[4][4])
    return graph

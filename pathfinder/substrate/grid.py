"""
Editable weighted grid and its substrate adapter.

The grid stores cell kinds and weights as two numpy arrays. Moving into
a cell costs that cell's weight; walls are not neighbors at all.

Usage:
    from pathfinder.substrate.grid import GridModel, GridSubstrate

    grid = GridModel(8, 8)
    grid.toggle_wall(3, 3)
    grid.set_weight(2, 5, 10)
    substrate = GridSubstrate(grid)
"""

from __future__ import annotations

import logging
from enum import IntEnum

import numpy as np

from pathfinder.config import (
    DEFAULT_CELL_WEIGHT,
    DEFAULT_COLS,
    DEFAULT_ROWS,
    ENDPOINT_CELL_WEIGHT,
    GRID_DIRECTIONS,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    WEIGHT_CYCLE,
)
from pathfinder.substrate.base import PositionKey, Substrate, cell_key, parse_cell_key

logger = logging.getLogger(__name__)


class CellKind(IntEnum):
    """Kind of a grid cell (stored as int8 codes)."""

    PATH = 0
    WALL = 1
    START = 2
    END = 3


# Characters used by to_text()/from_text()
_KIND_CHARS = {CellKind.WALL: "#", CellKind.START: "S", CellKind.END: "E"}


class GridModel:
    """
    Rows x cols matrix of cells, each with a kind and an integer weight.

    Edits that would touch the start or end cell (or put a weight on a
    wall) are silently rejected: edit methods return False and leave the
    grid unchanged.

    Attributes:
        kinds: int8 array of CellKind codes
        weights: int64 array of cell weights (ignored for walls)
    """

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> None:
        """
        Initialize an open grid with start at the top-left and end at the bottom-right.

        Args:
            rows: Number of rows
            cols: Number of columns
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {rows}x{cols}")

        self.kinds = np.full((rows, cols), CellKind.PATH, dtype=np.int8)
        self.weights = np.full((rows, cols), DEFAULT_CELL_WEIGHT, dtype=np.int64)

        self.kinds[0, 0] = CellKind.START
        self.weights[0, 0] = ENDPOINT_CELL_WEIGHT
        self.kinds[rows - 1, cols - 1] = CellKind.END
        self.weights[rows - 1, cols - 1] = ENDPOINT_CELL_WEIGHT

    @classmethod
    def sized(cls, rows: int, cols: int) -> GridModel:
        """Build a fresh grid with dimensions clamped to the allowed range."""
        rows = max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(rows)))
        cols = max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(cols)))
        return cls(rows, cols)

    @classmethod
    def from_cells(cls, cells: list[list[dict]]) -> GridModel:
        """
        Build a grid from a matrix of {"kind": ..., "weight": ...} dicts.

        Kinds are "path", "wall", "start" or "end"; a missing weight means 1.
        Path weights are clamped to >= 1, endpoint weights to >= 0.
        """
        if not cells or not cells[0]:
            raise ValueError("Grid must have at least one cell")

        grid = cls(len(cells), len(cells[0]))
        for r, row in enumerate(cells):
            if len(row) != grid.cols:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {grid.cols}")
            for c, cell in enumerate(row):
                try:
                    kind = CellKind[str(cell.get("kind", "path")).upper()]
                except KeyError:
                    raise ValueError(f"Unknown cell kind {cell.get('kind')!r} at ({r},{c})") from None
                weight = int(cell.get("weight", DEFAULT_CELL_WEIGHT))
                if kind in (CellKind.START, CellKind.END):
                    weight = max(0, weight)
                else:
                    weight = max(1, weight)
                grid.kinds[r, c] = kind
                grid.weights[r, c] = weight
        return grid

    @classmethod
    def from_text(cls, text: str) -> GridModel:
        """
        Parse the text format: S start, E end, # wall, . weight 1, 1-9 weights.

        Blank lines are ignored. Start and end cells get the endpoint weight.
        """
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if not lines:
            raise ValueError("Grid text is empty")

        cells = []
        for line in lines:
            row = []
            for ch in line:
                if ch == "S":
                    row.append({"kind": "start", "weight": ENDPOINT_CELL_WEIGHT})
                elif ch == "E":
                    row.append({"kind": "end", "weight": ENDPOINT_CELL_WEIGHT})
                elif ch == "#":
                    row.append({"kind": "wall", "weight": DEFAULT_CELL_WEIGHT})
                elif ch == ".":
                    row.append({"kind": "path", "weight": DEFAULT_CELL_WEIGHT})
                elif ch.isdigit() and ch != "0":
                    row.append({"kind": "path", "weight": int(ch)})
                else:
                    raise ValueError(f"Unknown grid character {ch!r}")
            cells.append(row)
        return cls.from_cells(cells)

    def to_text(self) -> str:
        """Render the grid in the from_text() format (weights above 9 become 9)."""
        lines = []
        for r in range(self.rows):
            chars = []
            for c in range(self.cols):
                kind = CellKind(int(self.kinds[r, c]))
                if kind in _KIND_CHARS:
                    chars.append(_KIND_CHARS[kind])
                elif self.weights[r, c] == 1:
                    chars.append(".")
                else:
                    chars.append(str(min(9, int(self.weights[r, c]))))
            lines.append("".join(chars))
        return "\n".join(lines)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def rows(self) -> int:
        return self.kinds.shape[0]

    @property
    def cols(self) -> int:
        return self.kinds.shape[1]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def kind(self, row: int, col: int) -> CellKind:
        self._check_bounds(row, col)
        return CellKind(int(self.kinds[row, col]))

    def weight(self, row: int, col: int) -> int:
        self._check_bounds(row, col)
        return int(self.weights[row, col])

    def is_wall(self, row: int, col: int) -> bool:
        return self.kind(row, col) == CellKind.WALL

    def find(self, kind: CellKind) -> tuple[int, int] | None:
        """Position of the first cell of this kind, or None."""
        hits = np.argwhere(self.kinds == kind)
        if len(hits) == 0:
            return None
        return int(hits[0][0]), int(hits[0][1])

    @property
    def start(self) -> tuple[int, int] | None:
        return self.find(CellKind.START)

    @property
    def end(self) -> tuple[int, int] | None:
        return self.find(CellKind.END)

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row},{col}) out of range for {self.rows}x{self.cols} grid")

    def _is_endpoint(self, row: int, col: int) -> bool:
        return self.kind(row, col) in (CellKind.START, CellKind.END)

    # =========================================================================
    # Edits (return True when the grid changed)
    # =========================================================================

    def toggle_wall(self, row: int, col: int) -> bool:
        """Turn a path cell into a wall or a wall back into a weight-1 path cell."""
        if self._is_endpoint(row, col):
            return False

        if self.is_wall(row, col):
            self.kinds[row, col] = CellKind.PATH
        else:
            self.kinds[row, col] = CellKind.WALL
        self.weights[row, col] = DEFAULT_CELL_WEIGHT
        return True

    def cycle_weight(self, row: int, col: int) -> bool:
        """Advance a path cell's weight through WEIGHT_CYCLE (1 -> 5 -> 10 -> 1)."""
        if self._is_endpoint(row, col) or self.is_wall(row, col):
            return False

        current = int(self.weights[row, col])
        if current in WEIGHT_CYCLE:
            nxt = WEIGHT_CYCLE[(WEIGHT_CYCLE.index(current) + 1) % len(WEIGHT_CYCLE)]
        else:
            nxt = WEIGHT_CYCLE[0]
        self.weights[row, col] = nxt
        return True

    def set_weight(self, row: int, col: int, weight: int | str) -> bool:
        """Set a path cell's weight; unparseable or < 1 values become 1."""
        if self._is_endpoint(row, col) or self.is_wall(row, col):
            return False

        try:
            value = max(1, int(weight))
        except (TypeError, ValueError):
            value = 1
        self.weights[row, col] = value
        return True

    def move_endpoint(self, kind: CellKind, row: int, col: int) -> bool:
        """
        Move the start or end marker to another cell.

        The target must not be the other endpoint. The vacated cell becomes
        a weight-1 path cell; the target keeps no wall and gets the endpoint
        weight.
        """
        if kind not in (CellKind.START, CellKind.END):
            raise ValueError(f"Only START or END can be moved, got {kind!r}")
        if self._is_endpoint(row, col):
            return False

        old = self.find(kind)
        if old is not None:
            self.kinds[old] = CellKind.PATH
            self.weights[old] = DEFAULT_CELL_WEIGHT
        self.kinds[row, col] = kind
        self.weights[row, col] = ENDPOINT_CELL_WEIGHT
        return True

    def copy(self) -> GridModel:
        clone = GridModel.__new__(GridModel)
        clone.kinds = self.kinds.copy()
        clone.weights = self.weights.copy()
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridModel):
            return NotImplemented
        return np.array_equal(self.kinds, other.kinds) and np.array_equal(
            self.weights, other.weights
        )

    def __repr__(self) -> str:
        return f"GridModel(rows={self.rows}, cols={self.cols})"


class GridSubstrate(Substrate):
    """
    4-connected view over a GridModel.

    Neighbors are the in-bounds non-wall cells to the right, below, left
    and above (in that order). The cost of a move is the weight of the
    cell being entered.

    The heuristic is the Manhattan distance to the end, with the final
    move charged at the end cell's own weight (0 by default) instead of
    1, so it never overestimates.
    """

    def __init__(self, grid: GridModel) -> None:
        # Snapshot so that later edits can't leak into a running search
        self._kinds = grid.kinds.copy()
        self._weights = grid.weights.copy()
        self._rows, self._cols = self._kinds.shape

        start = grid.start
        end = grid.end
        self._start = cell_key(*start) if start is not None else None
        self._goal = cell_key(*end) if end is not None else None
        self._goal_pos = end

    @property
    def start(self) -> PositionKey | None:
        return self._start

    @property
    def goal(self) -> PositionKey | None:
        return self._goal

    def contains(self, key: PositionKey) -> bool:
        try:
            row, col = parse_cell_key(key)
        except ValueError:
            return False
        return self._passable(row, col)

    def _passable(self, row: int, col: int) -> bool:
        return (
            0 <= row < self._rows
            and 0 <= col < self._cols
            and self._kinds[row, col] != CellKind.WALL
        )

    def neighbors(self, key: PositionKey) -> list[tuple[PositionKey, float]]:
        row, col = parse_cell_key(key)
        result = []
        for dr, dc in GRID_DIRECTIONS:
            nr, nc = row + dr, col + dc
            if self._passable(nr, nc):
                result.append((cell_key(nr, nc), int(self._weights[nr, nc])))
        return result

    def heuristic(self, key: PositionKey) -> float:
        if self._goal_pos is None:
            return 0
        row, col = parse_cell_key(key)
        distance = abs(row - self._goal_pos[0]) + abs(col - self._goal_pos[1])
        if distance == 0:
            return 0
        return distance - 1 + int(self._weights[self._goal_pos])

    def label(self, key: PositionKey) -> str:
        row, col = parse_cell_key(key)
        return f"({row},{col})"

    def path_cost(self, path: list[PositionKey]) -> float:
        """Sum of the weights of every cell entered after the first."""
        total = 0
        for key in path[1:]:
            row, col = parse_cell_key(key)
            total += int(self._weights[row, col])
        return total

    @property
    def missing_endpoints_message(self) -> str:
        return "[Grid] Please place Start and End cells."

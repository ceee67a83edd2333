"""
Player session: owns the editable substrate, the built steps, and the
playback position for one visualizer instance.

Every edit to the grid, graph, algorithm, mode, or endpoints goes through
the session, which clears all derived state and bumps the run id before
anything else happens. The play loop captures the run id it started with
and stops applying steps as soon as the live id differs.

Usage:
    session = PlayerSession(mode="grid", algorithm="astar")
    session.toggle_cell(2, 3)
    session.rebuild()
    session.step_forward()
    view = session.view()

    await session.play()  # inside an asyncio event loop
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pathfinder.config import (
    ALGORITHMS,
    DEFAULT_ALGORITHM,
    DEFAULT_SPEED,
    MAX_SPEED,
    MIN_SPEED,
    tick_delay_ms,
)
from pathfinder.player.steps import Step, build_steps
from pathfinder.search import get_algorithm
from pathfinder.search.base import SearchResult
from pathfinder.substrate.base import PositionKey, Substrate
from pathfinder.substrate.graph import GraphModel, GraphSubstrate
from pathfinder.substrate.grid import CellKind, GridModel, GridSubstrate
from pathfinder.trace.events import FrontierSnapshot
from pathfinder.trace.pseudocode import PseudocodeLine

logger = logging.getLogger(__name__)

MODES = ("grid", "graph")


@dataclass(frozen=True)
class PlayerView:
    """
    Everything a renderer needs for the current playback position.

    Attributes:
        visited: Nodes visited so far
        path: Path nodes revealed so far
        frontier: Frontier contents at this step
        log_lines: Log lines revealed so far
        current_log_index: Index of the newest revealed log line (-1 if none)
        pseudocode_line: Pseudocode category to highlight
        progress: (current_step, total_steps), current_step is 0 before start
        path_cost: Total cost of the full path (0 if none)
        path_length: Number of nodes on the full path
        is_playing: Whether the play loop is running
    """

    visited: tuple[PositionKey, ...]
    path: tuple[PositionKey, ...]
    frontier: FrontierSnapshot
    log_lines: tuple[str, ...]
    current_log_index: int
    pseudocode_line: PseudocodeLine
    progress: tuple[int, int]
    path_cost: float
    path_length: int
    is_playing: bool


class PlayerSession:
    """
    State machine over step_index in [-1, len(steps) - 1].

    -1 is "pre-start" (nothing applied). Steps are built once per
    rebuild() and are read-only afterwards.

    Edits only reach the model of the active mode: grid edits in graph
    mode and graph edits in grid mode are ignored and keep the steps.
    """

    def __init__(
        self,
        mode: str = "grid",
        algorithm: str = DEFAULT_ALGORITHM,
        grid: GridModel | None = None,
        graph: GraphModel | None = None,
        speed: int = DEFAULT_SPEED,
        fast_solve: bool = False,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize a session.

        Args:
            mode: "grid" or "graph"
            algorithm: One of bfs, dfs, dijkstra, astar
            grid: Grid to edit (defaults to a fresh 8x8 grid)
            graph: Graph to edit (defaults to an empty graph)
            speed: Playback speed 1..100
            fast_solve: Jump straight to the last step instead of ticking
            sleep: Coroutine used to wait between ticks
        """
        self._check_mode(mode)
        self._check_algorithm(algorithm)

        self._mode = mode
        self._algorithm = algorithm
        self.grid = grid if grid is not None else GridModel()
        self.graph = graph if graph is not None else GraphModel()
        self._speed = DEFAULT_SPEED
        self.set_speed(speed)
        self.fast_solve = fast_solve
        self._sleep = sleep

        self._run_id = 0
        self._playing = False
        self._steps: tuple[Step, ...] = ()
        self._step_index = -1
        self._result: SearchResult | None = None
        self._path_cost: float = 0

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def speed(self) -> int:
        return self._speed

    @property
    def tick_delay(self) -> float:
        """Seconds between play ticks at the current speed."""
        return tick_delay_ms(self._speed) / 1000

    @property
    def run_id(self) -> int:
        return self._run_id

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._steps

    @property
    def step_index(self) -> int:
        return self._step_index

    @property
    def result(self) -> SearchResult | None:
        return self._result

    @property
    def meta(self) -> dict:
        return self._result.meta if self._result else {}

    @property
    def path_cost(self) -> float:
        return self._path_cost

    @property
    def path_length(self) -> int:
        return len(self._result.shortest_path) if self._result else 0

    @property
    def progress(self) -> tuple[int, int]:
        total = len(self._steps)
        return max(0, min(total, self._step_index + 1)), total

    @property
    def current_step(self) -> Step | None:
        if 0 <= self._step_index < len(self._steps):
            return self._steps[self._step_index]
        return None

    def view(self) -> PlayerView:
        """Renderer-facing projection of the current step."""
        step = self.current_step
        all_logs = tuple(self._result.trace.log_lines) if self._result else ()

        if step is None:
            # Runs with no visits still show why nothing happened
            logs = all_logs if self._result and not self._steps else ()
            return PlayerView(
                visited=(),
                path=(),
                frontier=(),
                log_lines=logs,
                current_log_index=len(logs) - 1,
                pseudocode_line=PseudocodeLine.INIT,
                progress=self.progress,
                path_cost=self._path_cost,
                path_length=self.path_length,
                is_playing=self._playing,
            )

        logs = all_logs[: step.log_count]
        return PlayerView(
            visited=step.visited,
            path=step.path,
            frontier=step.frontier,
            log_lines=logs,
            current_log_index=len(logs) - 1,
            pseudocode_line=step.pseudocode_line,
            progress=self.progress,
            path_cost=self._path_cost,
            path_length=self.path_length,
            is_playing=self._playing,
        )

    # =========================================================================
    # Settings
    # =========================================================================

    @staticmethod
    def _check_mode(mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown mode '{mode}'. Available: {', '.join(MODES)}")

    @staticmethod
    def _check_algorithm(algorithm: str) -> None:
        if algorithm not in ALGORITHMS:
            available = ", ".join(ALGORITHMS)
            raise ValueError(f"Unknown algorithm '{algorithm}'. Available: {available}")

    def set_mode(self, mode: str) -> None:
        self._check_mode(mode)
        self._mode = mode
        self.invalidate()

    def set_algorithm(self, algorithm: str) -> None:
        self._check_algorithm(algorithm)
        self._algorithm = algorithm
        self.invalidate()

    def set_speed(self, speed) -> None:
        """Set playback speed, clamped to 1..100 (unparseable values become the default)."""
        try:
            value = int(speed)
        except (TypeError, ValueError):
            value = DEFAULT_SPEED
        self._speed = max(MIN_SPEED, min(MAX_SPEED, value))

    # =========================================================================
    # Invalidation
    # =========================================================================

    def invalidate(self) -> None:
        """Cancel any play loop and clear every piece of derived state."""
        self._run_id += 1
        self._playing = False
        self._steps = ()
        self._step_index = -1
        self._result = None
        self._path_cost = 0
        logger.debug(f"Session invalidated (run {self._run_id})")

    def _edited(self, changed: bool) -> bool:
        if changed:
            self.invalidate()
        return changed

    # =========================================================================
    # Grid edits (ignored outside grid mode)
    # =========================================================================

    def resize_grid(self, rows: int, cols: int) -> None:
        self.grid = GridModel.sized(rows, cols)
        self.invalidate()

    def toggle_cell(self, row: int, col: int) -> bool:
        if self._mode != "grid":
            return False
        return self._edited(self.grid.toggle_wall(row, col))

    def cycle_weight(self, row: int, col: int) -> bool:
        if self._mode != "grid":
            return False
        return self._edited(self.grid.cycle_weight(row, col))

    def set_cell_weight(self, row: int, col: int, weight) -> bool:
        if self._mode != "grid":
            return False
        return self._edited(self.grid.set_weight(row, col, weight))

    def move_start(self, row: int, col: int) -> bool:
        if self._mode != "grid":
            return False
        return self._edited(self.grid.move_endpoint(CellKind.START, row, col))

    def move_end(self, row: int, col: int) -> bool:
        if self._mode != "grid":
            return False
        return self._edited(self.grid.move_endpoint(CellKind.END, row, col))

    # =========================================================================
    # Graph edits (ignored outside graph mode)
    # =========================================================================

    def add_node(self, x: float, y: float) -> str | None:
        if self._mode != "graph":
            return None
        node_id = self.graph.add_node(x, y)
        self.invalidate()
        return node_id

    def move_node(self, node_id: str, x: float, y: float) -> bool:
        if self._mode != "graph":
            return False
        return self._edited(self.graph.move_node(node_id, x, y))

    def connect(self, from_id: str, to_id: str, weight=1) -> str | None:
        if self._mode != "graph":
            return None
        edge_id = self.graph.connect(from_id, to_id, weight)
        self._edited(edge_id is not None)
        return edge_id

    def set_edge_weight(self, edge_id: str, weight) -> bool:
        if self._mode != "graph":
            return False
        return self._edited(self.graph.set_edge_weight(edge_id, weight))

    def delete_node(self, node_id: str) -> bool:
        if self._mode != "graph":
            return False
        return self._edited(self.graph.delete_node(node_id))

    def delete_edge(self, edge_id: str) -> bool:
        if self._mode != "graph":
            return False
        return self._edited(self.graph.delete_edge(edge_id))

    def set_start_node(self, node_id: str | None) -> bool:
        if self._mode != "graph":
            return False
        return self._edited(self.graph.set_start(node_id))

    def set_end_node(self, node_id: str | None) -> bool:
        if self._mode != "graph":
            return False
        return self._edited(self.graph.set_end(node_id))

    def export_graph(self) -> str:
        return self.graph.to_json()

    def import_graph(self, document: str | dict) -> None:
        """
        Replace the graph with an exported document.

        Raises:
            GraphFormatError: If the document is malformed (graph unchanged)
        """
        if isinstance(document, str):
            graph = GraphModel.from_json(document)
        else:
            graph = GraphModel.from_dict(document)
        self.graph = graph
        self.invalidate()

    def reset(self) -> None:
        """Fresh grid of the same size in grid mode, empty graph in graph mode."""
        if self._mode == "grid":
            self.grid = GridModel(self.grid.rows, self.grid.cols)
        else:
            self.graph.clear()
        self.invalidate()

    # =========================================================================
    # Building
    # =========================================================================

    def build_substrate(self) -> Substrate:
        if self._mode == "grid":
            return GridSubstrate(self.grid)
        return GraphSubstrate(self.graph)

    def rebuild(self) -> None:
        """Run the current algorithm on a fresh substrate and rebuild all steps."""
        substrate = self.build_substrate()
        result = get_algorithm(self._algorithm).run(substrate)
        steps = build_steps(result)

        self._run_id += 1
        self._playing = False
        self._result = result
        self._steps = steps
        self._step_index = -1
        self._path_cost = substrate.path_cost(result.shortest_path)

        logger.info(
            f"Built {len(steps)} steps for {self._algorithm} on {self._mode} "
            f"(path length {self.path_length}, cost {self._path_cost})"
        )

    # =========================================================================
    # Navigation
    # =========================================================================

    def _apply(self, index: int) -> None:
        if index < 0 or not self._steps:
            self._step_index = -1
        else:
            self._step_index = min(index, len(self._steps) - 1)

    def step_forward(self) -> None:
        if not self._steps:
            self.rebuild()
        nxt = 0 if self._step_index < 0 else self._step_index + 1
        self._apply(min(nxt, len(self._steps) - 1))

    def step_backward(self) -> None:
        if not self._steps:
            return
        self._apply(max(-1, self._step_index - 1))

    def seek_to(self, index: int) -> None:
        if not self._steps:
            return
        self._apply(max(-1, min(len(self._steps) - 1, index)))

    def to_start(self) -> None:
        if not self._steps:
            self.rebuild()
        self._apply(-1)

    def to_end(self) -> None:
        if not self._steps:
            self.rebuild()
        self._apply(len(self._steps) - 1)

    # =========================================================================
    # Playback
    # =========================================================================

    async def play(self) -> None:
        """
        Advance one step per tick until the end, a pause, or an invalidation.

        Starting at the last step rewinds to pre-start first. In fast-solve
        mode this jumps to the last step without ticking.
        """
        if not self._steps:
            self.rebuild()
        if self.fast_solve:
            self.to_end()
            self._playing = False
            return

        my_run = self._run_id + 1
        self._run_id = my_run
        self._playing = True

        if self._steps and self._step_index >= len(self._steps) - 1:
            self._apply(-1)

        delay = self.tick_delay
        while self._playing:
            if self._run_id != my_run:
                return
            if self._step_index >= len(self._steps) - 1:
                break
            await self._sleep(delay)
            if not self._playing or self._run_id != my_run:
                return
            self._apply(self._step_index + 1)

        if self._run_id == my_run:
            self._playing = False

    def pause(self) -> None:
        self._playing = False

    async def run_algorithm(self) -> None:
        """Rebuild, then play (or jump to the end in fast-solve mode)."""
        self.rebuild()
        if self.fast_solve:
            self.to_end()
            self._playing = False
        else:
            await self.play()

    def __repr__(self) -> str:
        return (
            f"PlayerSession(mode={self._mode!r}, algorithm={self._algorithm!r}, "
            f"step={self._step_index}/{len(self._steps)})"
        )

#!/usr/bin/env python3
"""
Pathfinder CLI - Run one search algorithm and replay its steps.

Usage:
    python scripts/play.py --algorithm astar
    python scripts/play.py --grid data/sample_grid.txt --algorithm dijkstra --steps
    python scripts/play.py --graph data/sample_graph.json --algorithm bfs
    python scripts/play.py --graph my_graph.json --start A --end F --animate --speed 80

Algorithms:
    bfs      - Breadth-first search (fewest moves, ignores weights)
    dfs      - Depth-first search (first path found)
    dijkstra - Cheapest path by accumulated weight
    astar    - Dijkstra guided by a heuristic to the goal

Grid text format:
    S start, E end, # wall, . weight 1, 1-9 cell weight
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pathfinder.config import (  # noqa: E402
    ALGORITHMS,
    DEFAULT_ALGORITHM,
    DEFAULT_SPEED,
    LOG_LEVEL,
    SAMPLE_GRID_PATH,
)
from pathfinder.player import PlayerSession  # noqa: E402
from pathfinder.search import get_algorithm  # noqa: E402
from pathfinder.substrate import GraphFormatError, GraphModel, GridModel  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run a pathfinding algorithm and replay its steps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--grid",
        type=Path,
        default=None,
        help="Grid text file (default: bundled sample grid)",
    )
    source.add_argument(
        "--graph",
        type=Path,
        default=None,
        help="Graph JSON file (as exported by the editor)",
    )
    parser.add_argument(
        "--algorithm",
        type=str,
        default=DEFAULT_ALGORITHM,
        choices=list(ALGORITHMS),
        help=f"Algorithm to run (default: {DEFAULT_ALGORITHM})",
    )
    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="Override the graph's start node id",
    )
    parser.add_argument(
        "--end",
        type=str,
        default=None,
        help="Override the graph's end node id",
    )
    parser.add_argument(
        "--steps",
        action="store_true",
        help="Print every step (visited count, frontier, newest log line)",
    )
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Play the steps in real time instead of jumping to the end",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=DEFAULT_SPEED,
        help=f"Playback speed 1-100 for --animate (default: {DEFAULT_SPEED})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def build_session(args: argparse.Namespace, sleep=asyncio.sleep) -> PlayerSession:
    """Create a session from the command line source options."""
    if args.graph is not None:
        graph = GraphModel.from_json(args.graph.read_text(encoding="utf-8"))
        if args.start:
            graph.set_start(args.start)
        if args.end:
            graph.set_end(args.end)
        return PlayerSession(mode="graph", algorithm=args.algorithm, graph=graph, speed=args.speed, sleep=sleep)

    grid_path = args.grid or SAMPLE_GRID_PATH
    grid = GridModel.from_text(grid_path.read_text(encoding="utf-8"))
    return PlayerSession(mode="grid", algorithm=args.algorithm, grid=grid, speed=args.speed, sleep=sleep)


def print_steps(session: PlayerSession) -> None:
    """Walk the session from pre-start to the end, printing each step."""
    session.to_start()
    total = len(session.steps)
    for _ in range(total):
        session.step_forward()
        view = session.view()
        current, _ = view.progress
        frontier = " ".join(entry.label for entry in view.frontier) or "-"
        newest = view.log_lines[-1] if view.log_lines else ""
        print(
            f"  [{current:3}/{total}] visited={len(view.visited):3} "
            f"path={len(view.path):2}  frontier: {frontier}  | {newest}"
        )


class TickPrinter:
    """Sleep coroutine for the play loop that prints newly revealed log lines."""

    def __init__(self) -> None:
        self.session: PlayerSession | None = None
        self._printed = 0

    def flush(self) -> None:
        if self.session is None:
            return
        lines = self.session.view().log_lines
        for line in lines[self._printed :]:
            print(f"  {line}")
        self._printed = max(self._printed, len(lines))

    async def __call__(self, delay: float) -> None:
        self.flush()
        await asyncio.sleep(delay)


async def animate(session: PlayerSession, printer: TickPrinter) -> None:
    """Play in real time, printing log lines as steps are revealed."""
    await session.play()
    printer.flush()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Set up logging
    log_level = logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        printer = TickPrinter()
        session = build_session(args, sleep=printer)
        printer.session = session
    except (OSError, GraphFormatError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session.rebuild()
    result = session.result

    print("\n" + "=" * 60)
    print("Pathfinder")
    print("=" * 60)
    print(f"  Mode:      {session.mode}")
    algorithm = get_algorithm(session.algorithm)
    print(f"  Algorithm: {algorithm.title} - {algorithm.description}")
    print(f"  Steps:     {len(session.steps)}")
    print("=" * 60 + "\n")

    if args.steps:
        print_steps(session)
    elif args.animate:
        try:
            asyncio.run(animate(session, printer))
        except KeyboardInterrupt:
            print("\n\nPlayback interrupted by user")
            return 130

    if not args.animate:
        print("\nLog:")
        for line in result.trace.log_lines:
            print(f"  {line}")

    print("\n" + "=" * 60)
    if result.found:
        substrate = session.build_substrate()
        labels = " -> ".join(substrate.label(key) for key in result.shortest_path)
        print(f"Path ({session.path_length} nodes, cost {session.path_cost}): {labels}")
    else:
        print("No path")
    print(f"Visited {len(result.visited_order)} nodes")
    print("=" * 60)

    return 0 if result.found else 1


if __name__ == "__main__":
    sys.exit(main())

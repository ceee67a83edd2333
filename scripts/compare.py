#!/usr/bin/env python3
"""
Compare all four algorithms on the same grid or graph.

Usage:
    python scripts/compare.py
    python scripts/compare.py --grid data/sample_grid.txt
    python scripts/compare.py --graph data/sample_graph.json
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import logging
logging.basicConfig(level=logging.WARNING)  # Quiet mode

from pathfinder.config import ALGORITHMS, SAMPLE_GRID_PATH, get_missing_data_files
from pathfinder.search import get_algorithm
from pathfinder.substrate import (
    GraphFormatError,
    GraphModel,
    GraphSubstrate,
    GridModel,
    GridSubstrate,
)


def load_substrate(args: argparse.Namespace):
    if args.graph is not None:
        return GraphSubstrate(GraphModel.from_json(args.graph.read_text(encoding="utf-8")))
    grid_path = args.grid or SAMPLE_GRID_PATH
    return GridSubstrate(GridModel.from_text(grid_path.read_text(encoding="utf-8")))


def run_comparison(substrate) -> None:
    print("=" * 70)
    print("Pathfinder - Algorithm Comparison")
    print("=" * 70)
    print(f"\n{substrate!r}\n")
    print(f"  {'algorithm':10} {'visits':>7} {'path':>5} {'cost':>7} {'stale':>6} {'time':>9}")
    print("  " + "-" * 50)

    for name in ALGORITHMS:
        algorithm = get_algorithm(name)

        start_time = time.time()
        result = algorithm.run(substrate)
        elapsed = (time.time() - start_time) * 1000

        cost = substrate.path_cost(result.shortest_path) if result.found else "-"
        stale = result.meta.get("stale_skipped", "-")
        print(
            f"  {name:10} {len(result.visited_order):7} {len(result.shortest_path):5} "
            f"{cost:>7} {stale:>6} {elapsed:7.2f}ms"
        )

    print("\n  (BFS and DFS ignore weights; only Dijkstra and A* minimize cost)")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Compare search algorithms")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--grid", type=Path, default=None, help="Grid text file")
    source.add_argument("--graph", type=Path, default=None, help="Graph JSON file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    missing = get_missing_data_files()
    if args.grid is None and args.graph is None and "sample_grid" in missing:
        print(f"Missing sample data: {', '.join(missing)}", file=sys.stderr)
        return 1

    try:
        substrate = load_substrate(args)
    except (OSError, GraphFormatError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    run_comparison(substrate)
    return 0


if __name__ == "__main__":
    sys.exit(main())

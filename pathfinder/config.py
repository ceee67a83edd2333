"""
Configuration constants for the Pathfinder Visualizer.

All paths, defaults, and tunable parameters are defined here.
Environment variables (optionally from a .env file) override the
playback and logging defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Path Configuration
# =============================================================================

# Project root is parent of pathfinder/
PROJECT_ROOT = Path(__file__).parent.parent

# Bundled sample substrates used by the scripts
DATA_DIR = PROJECT_ROOT / "data"
SAMPLE_GRID_PATH = DATA_DIR / "sample_grid.txt"
SAMPLE_GRAPH_PATH = DATA_DIR / "sample_graph.json"

# =============================================================================
# Grid Configuration
# =============================================================================

DEFAULT_ROWS = 8
DEFAULT_COLS = 8

# Grid size is clamped into this range on resize
MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 60

# Weight of an ordinary cell and of the start/end cells
DEFAULT_CELL_WEIGHT = 1
ENDPOINT_CELL_WEIGHT = 0

# Weights visited by cycle_weight(), in order
WEIGHT_CYCLE = (1, 5, 10)

# Neighbor order for the 4-connected grid: right, down, left, up
GRID_DIRECTIONS = ((0, 1), (1, 0), (0, -1), (-1, 0))

# =============================================================================
# Graph Configuration
# =============================================================================

# Node coordinates are rounded to this step when snapping is on
GRAPH_SNAP_SIZE = 20

# New node ids are taken from this alphabet first, then "1", "2", ...
GRAPH_NODE_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

DEFAULT_EDGE_WEIGHT = 1

# =============================================================================
# Algorithm Configuration
# =============================================================================

ALGORITHMS = ("bfs", "dfs", "dijkstra", "astar")

DEFAULT_ALGORITHM = os.environ.get("PATHFINDER_ALGORITHM", "bfs")

# =============================================================================
# Playback Configuration
# =============================================================================

MIN_SPEED = 1
MAX_SPEED = 100
DEFAULT_SPEED = int(os.environ.get("PATHFINDER_SPEED", "50"))

# Delay between play ticks: max(MIN_TICK_DELAY_MS, BASE - FACTOR * speed)
MIN_TICK_DELAY_MS = 5
TICK_DELAY_BASE_MS = 205
TICK_DELAY_SPEED_FACTOR = 2

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("PATHFINDER_LOG_LEVEL", "INFO")

# =============================================================================
# Validation Helpers
# =============================================================================


def tick_delay_ms(speed: int) -> int:
    """Delay between play ticks for a speed setting (clamped to 1..100)."""
    speed = max(MIN_SPEED, min(MAX_SPEED, speed))
    return max(MIN_TICK_DELAY_MS, TICK_DELAY_BASE_MS - TICK_DELAY_SPEED_FACTOR * speed)


def validate_data_files() -> dict[str, bool]:
    """Check which sample data files exist."""
    return {
        "sample_grid": SAMPLE_GRID_PATH.exists(),
        "sample_graph": SAMPLE_GRAPH_PATH.exists(),
    }


def get_missing_data_files() -> list[str]:
    """Return list of missing data file names."""
    status = validate_data_files()
    return [name for name, exists in status.items() if not exists]

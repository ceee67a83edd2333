"""
Search module.

Provides the four step-recording strategies, all running over any
Substrate:
- BreadthFirstSearch: FIFO, fewest moves
- DepthFirstSearch: LIFO, first path found
- DijkstraSearch: Cheapest path by weight
- AStarSearch: Cheapest path by weight, heuristic-guided
"""

from pathfinder.search.base import SearchAlgorithm, SearchResult, reconstruct_path
from pathfinder.search.frontier import FIFOFrontier, LIFOFrontier, PriorityFrontier
from pathfinder.search.unweighted import BreadthFirstSearch, DepthFirstSearch
from pathfinder.search.weighted import AStarSearch, DijkstraSearch

__all__ = [
    "SearchAlgorithm",
    "SearchResult",
    "reconstruct_path",
    "FIFOFrontier",
    "LIFOFrontier",
    "PriorityFrontier",
    "BreadthFirstSearch",
    "DepthFirstSearch",
    "DijkstraSearch",
    "AStarSearch",
    "get_algorithm",
]


def get_algorithm(name: str) -> SearchAlgorithm:
    """
    Get a search algorithm by name.

    Args:
        name: Algorithm identifier (bfs, dfs, dijkstra, astar)

    Returns:
        Instantiated algorithm

    Raises:
        ValueError: If algorithm name is unknown
    """
    algorithms = {
        "bfs": BreadthFirstSearch,
        "dfs": DepthFirstSearch,
        "dijkstra": DijkstraSearch,
        "astar": AStarSearch,
    }

    if name not in algorithms:
        available = ", ".join(algorithms.keys())
        raise ValueError(f"Unknown algorithm '{name}'. Available: {available}")

    return algorithms[name]()

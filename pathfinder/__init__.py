"""
Pathfinder Visualizer core.

Step-recording BFS, DFS, Dijkstra and A* over an editable weighted grid
or a hand-drawn node/edge graph, plus a step player that replays the
recorded trace for teaching.
"""

__version__ = "0.1.0"

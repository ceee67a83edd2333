"""
Pseudocode line categories shared by all four algorithms.

Each algorithm's listing is compacted to seven lines so a pseudocode
panel can highlight the current line by category alone.
"""

from enum import IntEnum


class PseudocodeLine(IntEnum):
    """Canonical pseudocode line, identical index across algorithms."""

    INIT = 0
    LOOP = 1  # loop top, also shown when the frontier runs dry
    VISIT = 2
    GOAL = 3
    NEIGHBORS = 4
    CHECK = 5
    UPDATE = 6  # enqueue / push / relax


PSEUDOCODE: dict[str, tuple[str, ...]] = {
    "bfs": (
        "queue q; seen[start] = true; q.push(start)",
        "while q not empty:",
        "    u = q.pop_front()          # visit u",
        "    if u == end: reconstruct path; stop",
        "    for v in neighbors(u):",
        "        if passable(v) and not seen[v]:",
        "            seen[v] = true; parent[v] = u; q.push(v)",
    ),
    "dfs": (
        "stack st; seen[start] = true; st.push(start)",
        "while st not empty:",
        "    u = st.pop()               # visit u",
        "    if u == end: reconstruct path; stop",
        "    for v in neighbors(u):",
        "        if passable(v) and not seen[v]:",
        "            seen[v] = true; parent[v] = u; st.push(v)",
    ),
    "dijkstra": (
        "dist[*] = INF; dist[start] = 0; pq.push((0, start))",
        "while pq not empty:",
        "    (d, u) = pq.pop_min(); if d > dist[u]: continue   # visit u",
        "    if u == end: stop",
        "    for v in neighbors(u):",
        "        if passable(v):",
        "            if d + w(u, v) < dist[v]: dist[v] = d + w(u, v); parent[v] = u; pq.push((dist[v], v))",
    ),
    "astar": (
        "g[*] = INF; g[start] = 0; f[start] = h(start); open.push((f[start], start))",
        "while open not empty:",
        "    u = open.pop_min_f()       # visit u",
        "    if u == end: stop",
        "    for v in neighbors(u):",
        "        tentative = g[u] + w(u, v)",
        "        if tentative < g[v]: parent[v] = u; g[v] = tentative; f[v] = g[v] + h(v); open.push((f[v], v))",
    ),
}


def pseudocode_for(algorithm: str) -> tuple[str, ...]:
    """
    Seven-line pseudocode listing for an algorithm.

    Raises:
        ValueError: If the algorithm name is unknown
    """
    if algorithm not in PSEUDOCODE:
        available = ", ".join(PSEUDOCODE)
        raise ValueError(f"Unknown algorithm '{algorithm}'. Available: {available}")
    return PSEUDOCODE[algorithm]

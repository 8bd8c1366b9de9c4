"""4-directional shortest-path helpers over a row-major FLOOR/WALL grid.

All lookups are bounds-safe: positions outside the grid are simply not
walkable. A missing route is a normal outcome (``None``), never an error.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Tuple

from .tiles import FLOOR

Coord = Tuple[int, int]

NEIGHBOR_STEPS = ((0, -1), (1, 0), (0, 1), (-1, 0))


def is_walkable(grid, x: int, y: int) -> bool:
    if y < 0 or y >= len(grid) or x < 0 or x >= len(grid[y]):
        return False
    return grid[y][x] == FLOOR


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def find_path(grid, start: Coord, goal: Coord) -> Optional[List[Coord]]:
    """Return the shortest path from start to goal inclusive, or None.

    Both endpoints must be walkable. ``[start]`` is returned when they coincide.
    """
    if not is_walkable(grid, *start) or not is_walkable(grid, *goal):
        return None
    if start == goal:
        return [start]
    q = deque([start])
    parent: Dict[Coord, Optional[Coord]] = {start: None}
    while q:
        x, y = q.popleft()
        if (x, y) == goal:
            break
        for dx, dy in NEIGHBOR_STEPS:
            nxt = (x + dx, y + dy)
            if nxt not in parent and is_walkable(grid, *nxt):
                parent[nxt] = (x, y)
                q.append(nxt)
    if goal not in parent:
        return None
    path: List[Coord] = []
    cur: Optional[Coord] = goal
    while cur is not None:
        path.append(cur)
        cur = parent[cur]
    path.reverse()
    return path


def distance_map(grid, start: Coord) -> Dict[Coord, int]:
    """BFS step count from start to every reachable floor tile."""
    if not is_walkable(grid, *start):
        return {}
    dist = {start: 0}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for dx, dy in NEIGHBOR_STEPS:
            nxt = (x + dx, y + dy)
            if nxt not in dist and is_walkable(grid, *nxt):
                dist[nxt] = dist[(x, y)] + 1
                q.append(nxt)
    return dist


__all__ = ["Coord", "is_walkable", "manhattan", "find_path", "distance_map"]

"""Connectivity analysis and repair for FLOOR/WALL grids.

``analyze`` partitions floor tiles into 4-connected regions with a BFS flood
fill. ``repair`` bridges every minor region into the main one with the
shortest straight-line (Manhattan) tunnel, so a following ``analyze`` reports
a single region. Tile indices are row-major: ``y * width + x``.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, NamedTuple, Optional, Set

from .tiles import FLOOR

DIRECTIONS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class ConnectivityReport(NamedTuple):
    connected: bool
    regions: List[List[int]]


def analyze(grid) -> ConnectivityReport:
    if not grid or not grid[0]:
        return ConnectivityReport(True, [])
    height = len(grid)
    width = len(grid[0])
    visited: Set[int] = set()
    regions: List[List[int]] = []
    for y in range(height):
        for x in range(width):
            index = y * width + x
            if grid[y][x] == FLOOR and index not in visited:
                regions.append(_flood_fill(grid, x, y, width, height, visited))
    return ConnectivityReport(len(regions) <= 1, regions)


def _flood_fill(grid, start_x: int, start_y: int, width: int, height: int, visited: Set[int]) -> List[int]:
    region: List[int] = []
    q = deque([(start_x, start_y)])
    visited.add(start_y * width + start_x)
    while q:
        x, y = q.popleft()
        region.append(y * width + x)
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            n_index = ny * width + nx
            if grid[ny][nx] == FLOOR and n_index not in visited:
                visited.add(n_index)
                q.append((nx, ny))
    return region


def repair(grid) -> bool:
    """Carve tunnels until every floor region is joined to the first one.

    Never removes floor. Performs at most one carve per minor region.
    Returns True if the grid was changed.
    """
    report = analyze(grid)
    if report.connected:
        return False
    width = len(grid[0])
    height = len(grid)
    main: Set[int] = set(report.regions[0])
    changed = False
    for region in report.regions[1:]:
        if any(idx in main for idx in region):
            # an earlier bridge already ran through this region
            main.update(region)
            continue
        path = _nearest_bridge(region, main, width, height)
        if path is None:
            continue
        for idx in path:
            x, y = idx % width, idx // width
            if grid[y][x] != FLOOR:
                grid[y][x] = FLOOR
                changed = True
        main.update(path)
        main.update(region)
    return changed


def _nearest_bridge(region: Iterable[int], main: Set[int], width: int, height: int) -> Optional[List[int]]:
    """Multi-source BFS from ``region`` over all tiles to the closest ``main`` tile.

    Walls are ignored during the search, so the path length equals the
    Manhattan distance between the two closest tiles. The returned path runs
    from the main tile back to (and including) a region tile.
    """
    parent: Dict[int, Optional[int]] = {}
    q = deque()
    for idx in region:
        parent[idx] = None
        q.append(idx)
    while q:
        cur = q.popleft()
        if cur in main:
            path = []
            node: Optional[int] = cur
            while node is not None:
                path.append(node)
                node = parent[node]
            return path
        x, y = cur % width, cur // width
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height:
                n_index = ny * width + nx
                if n_index not in parent:
                    parent[n_index] = cur
                    q.append(n_index)
    return None


def regions_summary(report: ConnectivityReport) -> Dict[str, int]:
    sizes = [len(r) for r in report.regions]
    return {
        "region_count": len(sizes),
        "largest_region": max(sizes) if sizes else 0,
        "floor_tiles": sum(sizes),
    }


__all__ = ["ConnectivityReport", "analyze", "repair", "regions_summary", "DIRECTIONS"]

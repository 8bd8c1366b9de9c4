from typing import List, Tuple

from .config import DungeonConfig
from .rooms import Room
from .tiles import FLOOR

Link = Tuple[int, int]


def connect_rooms_with_tunnels(grid, rooms: List[Room], config: DungeonConfig) -> Tuple[List[Link], int]:
    """Join rooms with a minimum spanning tree of L-shaped corridors.

    Edges are weighted by centre-to-centre Manhattan distance. A few extra
    non-tree edges are added to create loops. Returns (carved_links, extra_links)
    where each link is a pair of room indices (i < j).
    """
    if not rooms:
        return [], 0
    centers = [r.center for r in rooms]
    edges = []
    for i in range(len(centers)):
        x1, y1 = centers[i]
        for j in range(i + 1, len(centers)):
            x2, y2 = centers[j]
            dist = abs(x1 - x2) + abs(y1 - y2)
            edges.append((dist, i, j))
    edges.sort()
    parent = list(range(len(centers)))

    def find(a):
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    links: List[Link] = []
    for dist, i, j in edges:
        fi, fj = find(i), find(j)
        if fi != fj:
            parent[fi] = fj
            links.append((i, j))
    tree = set(links)
    extra = 0
    # Deterministic extra connections: every Nth non-tree edge (stride derived from the chance)
    if config.extra_connection_chance > 0:
        stride = max(2, int(1 / config.extra_connection_chance)) if config.extra_connection_chance < 1 else 2
        for idx, (dist, i, j) in enumerate(edges):
            if (i, j) not in tree and idx % stride == 0:
                links.append((i, j))
                extra += 1
    for i, j in links:
        carve_tunnel_between(grid, centers[i], centers[j])
    return links, extra


def connections_from_links(count: int, links: List[Link]) -> List[Tuple[int, ...]]:
    """Sorted neighbour tuples per room index for an undirected link list."""
    neighbours = [set() for _ in range(count)]
    for i, j in links:
        neighbours[i].add(j)
        neighbours[j].add(i)
    return [tuple(sorted(n)) for n in neighbours]


def carve_tunnel_between(grid, a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Carve an L-shaped FLOOR corridor from a to b (horizontal leg first).

    Both endpoints end up FLOOR. Returns the number of WALL tiles converted.
    """
    (x1, y1) = a
    (x2, y2) = b
    carved = 0
    for x in range(min(x1, x2), max(x1, x2) + 1):
        if grid[y1][x] != FLOOR:
            grid[y1][x] = FLOOR
            carved += 1
    for y in range(min(y1, y2), max(y1, y2) + 1):
        if grid[y][x2] != FLOOR:
            grid[y][x2] = FLOOR
            carved += 1
    return carved


__all__ = ["connect_rooms_with_tunnels", "connections_from_links", "carve_tunnel_between"]

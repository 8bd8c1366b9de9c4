"""Dungeon Generator (room-and-corridor, connectivity guaranteed)

High-level generation phases:
    * Scatter non-overlapping rectangular rooms on a solid WALL grid.
    * Join rooms with a minimum spanning tree of L-shaped corridors plus a few loop edges.
    * Validate 4-directional connectivity of every FLOOR tile; repair by tunnelling if needed.
    * Assign per-room difficulty (by generation order) and a cosmetic theme.
    * Assign roles: first room is the start, the room farthest from it by walking
      distance is the boss, the rest roll for treasure / challenge / normal.

Design invariants enforced by code & tests:
    * Every FLOOR tile is reachable from every other FLOOR tile.
    * Exactly one start room; exactly one boss room whenever two or more rooms exist.
    * Difficulty is non-decreasing in generation order and stays within [1, max_difficulty].

Public contract consumed elsewhere:
    DungeonGenerator(DungeonConfig(...)) or DungeonGenerator(seed=...)
    .generate(width=None, height=None) -> DungeonLayout
    DungeonLayout attributes: grid[y][x] (FLOOR=0 / WALL=1), rooms, seed, metrics
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import ConnectivityError
from ..logging_utils import get_logger
from . import connectivity
from .config import DungeonConfig
from .metrics import init_metrics
from .pathing import distance_map, is_walkable
from .rooms import BOSS, CHALLENGE, NORMAL, START, THEMES, TREASURE, Room, place_rooms
from .tiles import FLOOR, GLYPHS, WALL
from .tunnels import connect_rooms_with_tunnels, connections_from_links

log = get_logger("delve.dungeon")

Grid = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class DungeonLayout:
    grid: Grid
    rooms: Tuple[Room, ...]
    seed: int
    metrics: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)

    def is_walkable(self, x: int, y: int) -> bool:
        return is_walkable(self.grid, x, y)

    @property
    def start_room(self) -> Optional[Room]:
        return next((r for r in self.rooms if r.role == START), None)

    @property
    def boss_room(self) -> Optional[Room]:
        return next((r for r in self.rooms if r.role == BOSS), None)

    # Convenience outputs
    def to_ascii(self) -> str:
        return "\n".join("".join(GLYPHS[t] for t in row) for row in self.grid)

    def to_json(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "grid": [list(row) for row in self.grid],
            "rooms": [r.to_dict() for r in self.rooms],
            "metrics": self.metrics,
        }


class DungeonGenerator:
    def __init__(self, config: DungeonConfig | None = None, *, seed: int | None = None):
        config = DungeonConfig() if config is None else config
        resolved = seed if seed is not None else config.seed
        if resolved is None:
            resolved = random.randint(0, 2**31 - 1)
        # Private copy; the caller's config keeps whatever seed it was given
        self.config = replace(config, seed=resolved)
        # Local RNG so external random usage does not affect generation
        self._rng = random.Random(resolved)
        self.seed = resolved
        self._log = log.bind(seed=self.seed)

    def generate(self, width: int | None = None, height: int | None = None) -> DungeonLayout:
        width = self.config.width if width is None else width
        height = self.config.height if height is None else height
        started = time.perf_counter()
        metrics = init_metrics()
        grid: List[List[int]] = [[WALL for _ in range(width)] for _ in range(height)]

        rooms = self._carve_rooms_and_corridors(grid, metrics)
        self._ensure_connected(grid, metrics)
        rooms = self._assign_difficulty_and_theme(rooms)
        rooms = self._assign_roles(grid, rooms)

        metrics["floor_tiles"] = sum(row.count(FLOOR) for row in grid)
        metrics["runtime_ms"] = round((time.perf_counter() - started) * 1000.0, 3)
        layout = DungeonLayout(
            grid=tuple(tuple(row) for row in grid),
            rooms=tuple(rooms),
            seed=self.seed,
            metrics=metrics,
        )
        self._log.info(
            event="dungeon_generated",
            width=width,
            height=height,
            rooms=len(rooms),
            floor=metrics["floor_tiles"],
        )
        return layout

    # ------------------------------------------------------------------
    # Rooms & corridors
    # ------------------------------------------------------------------
    def _carve_rooms_and_corridors(self, grid, metrics) -> List[Room]:
        rooms, target, placed = place_rooms(grid, self.config, rng=self._rng)
        metrics["rooms_attempted"] = target
        metrics["rooms_placed"] = placed
        links, extra = connect_rooms_with_tunnels(grid, rooms, self.config)
        metrics["corridors_carved"] = len(links)
        metrics["extra_links"] = extra
        neighbours = connections_from_links(len(rooms), links)
        return [replace(room, connections=neighbours[i]) for i, room in enumerate(rooms)]

    # ------------------------------------------------------------------
    # Connectivity
    # ------------------------------------------------------------------
    def _ensure_connected(self, grid, metrics):
        report = connectivity.analyze(grid)
        metrics["regions_before_repair"] = len(report.regions)
        if report.connected:
            return
        metrics["repaired"] = connectivity.repair(grid)
        self._log.warn(event="connectivity_repaired", **connectivity.regions_summary(report))
        after = connectivity.analyze(grid)
        if not after.connected:
            self._log.error(event="connectivity_repair_failed", regions=len(after.regions))
            raise ConnectivityError(len(after.regions))

    # ------------------------------------------------------------------
    # Room metadata
    # ------------------------------------------------------------------
    def _assign_difficulty_and_theme(self, rooms: List[Room]) -> List[Room]:
        cap = self.config.max_difficulty
        return [
            replace(room, difficulty=min(cap, index // 2 + 1), theme=self._rng.choice(THEMES))
            for index, room in enumerate(rooms)
        ]

    def _assign_roles(self, grid, rooms: List[Room]) -> List[Room]:
        """Start = first room, boss = farthest walk from start, rest rolled."""
        if not rooms:
            return list(rooms)
        dist = distance_map(grid, rooms[0].center)
        boss_index = None
        best = -1
        for index in range(1, len(rooms)):
            d = dist.get(rooms[index].center)
            if d is None:
                # unreachable rooms are excluded; cannot happen after repair
                continue
            if d > best:
                best = d
                boss_index = index
        treasure_cut = self.config.treasure_chance
        challenge_cut = treasure_cut + self.config.challenge_chance
        roles = [START]
        for index in range(1, len(rooms)):
            if index == boss_index:
                roles.append(BOSS)
                continue
            r = self._rng.random()
            if r < treasure_cut:
                roles.append(TREASURE)
            elif r < challenge_cut:
                roles.append(CHALLENGE)
            else:
                roles.append(NORMAL)
        return [replace(room, role=role) for room, role in zip(rooms, roles)]


def generate(
    width: int | None = None,
    height: int | None = None,
    *,
    seed: int | None = None,
    config: DungeonConfig | None = None,
) -> DungeonLayout:
    return DungeonGenerator(config, seed=seed).generate(width, height)


__all__ = ["DungeonGenerator", "DungeonLayout", "generate"]

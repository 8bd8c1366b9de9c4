import random
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .config import DungeonConfig
from .tiles import FLOOR

# Room roles
START = "start"
NORMAL = "normal"
BOSS = "boss"
TREASURE = "treasure"
CHALLENGE = "challenge"
ROLES = (START, NORMAL, BOSS, TREASURE, CHALLENGE)

# Cosmetic themes (no gameplay effect; consumed by renderers)
THEMES = ("dungeon", "cave", "crypt", "library")


@dataclass(frozen=True)
class Room:
    """Read-only room metadata; the generator derives updated copies with ``replace``."""

    x: int
    y: int
    width: int
    height: int
    role: str = NORMAL
    theme: str = THEMES[0]
    difficulty: int = 1
    connections: Tuple[int, ...] = ()

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"unknown room role: {self.role!r}")
        if self.theme not in THEMES:
            raise ValueError(f"unknown room theme: {self.theme!r}")

    def cells(self):
        for iy in range(self.y, self.y + self.height):
            for ix in range(self.x, self.x + self.width):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "role": self.role,
            "theme": self.theme,
            "difficulty": self.difficulty,
            "connections": list(self.connections),
        }


def place_rooms(grid, config: DungeonConfig, rng=None):
    """Place non-overlapping rooms onto a WALL-filled row-major grid.

    Rooms keep a one tile wall margin to the map border. Returns
    (rooms, target_attempted, placed_count); room order is placement order.
    """
    if rng is None:
        rng = random
    height = len(grid)
    width = len(grid[0]) if height else 0
    target = rng.randint(config.min_rooms, config.max_rooms)
    attempts = target * 15
    placed = 0
    rooms: List[Room] = []
    while placed < target and attempts > 0:
        attempts -= 1
        w = rng.randint(config.min_room_width, config.max_room_width)
        h = rng.randint(config.min_room_height, config.max_room_height)
        if width - w - 2 < 1 or height - h - 2 < 1:
            # map too small for this roll
            continue
        x = rng.randint(1, width - w - 2)
        y = rng.randint(1, height - h - 2)
        new_room = Room(x, y, w, h)
        if _room_overlaps(new_room, rooms):
            continue
        for ix, iy in new_room.cells():
            grid[iy][ix] = FLOOR
        rooms.append(new_room)
        placed += 1
    return rooms, target, placed


def _room_overlaps(room: Room, existing: List[Room]) -> bool:
    pad = 2  # wall between rooms plus a gap for corridors
    for r in existing:
        if (
            room.x - pad < r.x + r.width
            and room.x + room.width + pad > r.x
            and room.y - pad < r.y + r.height
            and room.y + room.height + pad > r.y
        ):
            return True
    return False


__all__ = ["Room", "place_rooms", "ROLES", "THEMES", "START", "NORMAL", "BOSS", "TREASURE", "CHALLENGE"]

from dataclasses import dataclass
from typing import Optional


@dataclass
class DungeonConfig:
    width: int = 80
    height: int = 25
    min_rooms: int = 6
    max_rooms: int = 12
    min_room_width: int = 3
    max_room_width: int = 9
    min_room_height: int = 3
    max_room_height: int = 5
    extra_connection_chance: float = 0.15
    seed: Optional[int] = None
    # Role / difficulty tuning
    treasure_chance: float = 0.15
    challenge_chance: float = 0.10  # band above treasure_chance: [0.15, 0.25)
    max_difficulty: int = 5


__all__ = ["DungeonConfig"]

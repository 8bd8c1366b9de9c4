"""Public dungeon package interface."""

from .config import DungeonConfig
from .connectivity import ConnectivityReport, analyze, repair
from .generator import DungeonGenerator, DungeonLayout, generate
from .pathing import distance_map, find_path, is_walkable, manhattan
from .rooms import BOSS, CHALLENGE, NORMAL, START, THEMES, TREASURE, Room
from .tiles import FLOOR, WALL  # noqa: F401

__all__ = [
    "DungeonConfig",
    "DungeonGenerator",
    "DungeonLayout",
    "generate",
    "ConnectivityReport",
    "analyze",
    "repair",
    "find_path",
    "distance_map",
    "is_walkable",
    "manhattan",
    "Room",
    "START",
    "NORMAL",
    "BOSS",
    "TREASURE",
    "CHALLENGE",
    "THEMES",
    "FLOOR",
    "WALL",
]

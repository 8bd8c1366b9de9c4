"""
project: delve
module: __init__.py
License: MIT

Simulation core for a turn-based grid-dungeon roguelike: dungeon generation
with guaranteed connectivity, adversary AI, combat resolution, status effects
and the turn loop. Rendering, input and persistence live outside this package.
"""

__version__ = "0.4.0"

from .config import SimulationConfig  # noqa: E402,F401
from .dungeon import DungeonConfig, DungeonGenerator, DungeonLayout, generate  # noqa: E402,F401
from .exceptions import ConfigError, ConnectivityError, DelveError, TurnOrderError  # noqa: E402,F401

__all__ = [
    "__version__",
    "SimulationConfig",
    "DungeonConfig",
    "DungeonGenerator",
    "DungeonLayout",
    "generate",
    "DelveError",
    "ConnectivityError",
    "TurnOrderError",
    "ConfigError",
]

"""Actor models: the controlled actor and adversaries.

An actor is a grid position, a ``CombatStats`` block and its own
``StatusEffectManager``. Adversaries additionally carry a fixed behavior tag
(chase / skirmish / sentinel) that the AI dispatches on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..dungeon.pathing import is_walkable
from ..services.combat_utils import apply_damage
from ..services.status_effects import StatusEffectManager

# Adversary behaviors
CHASE = "chase"
SKIRMISH = "skirmish"
SENTINEL = "sentinel"
BEHAVIORS = (CHASE, SKIRMISH, SENTINEL)


@dataclass
class CombatStats:
    max_hp: int
    current_hp: int
    attack: int
    defense: int

    def __post_init__(self):
        self.current_hp = max(0, min(self.current_hp, self.max_hp))


@dataclass(eq=False)
class Actor:
    name: str
    x: int
    y: int
    stats: CombatStats
    effects: StatusEffectManager = field(init=False, repr=False)

    def __post_init__(self):
        self.effects = StatusEffectManager(self.stats)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def is_alive(self) -> bool:
        return self.stats.current_hp > 0

    def take_damage(self, amount: int) -> None:
        apply_damage(self, amount)
        if not self.is_alive():
            self.effects.clear()

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def move(self, dx: int, dy: int, grid) -> bool:
        """Step by (dx, dy) if the destination is walkable; returns success."""
        nx, ny = self.x + dx, self.y + dy
        if not is_walkable(grid, nx, ny):
            return False
        self.move_to(nx, ny)
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "hp": self.stats.current_hp,
            "max_hp": self.stats.max_hp,
            "effects": [e.type for e in self.effects.get_active_effects()],
        }


@dataclass(eq=False)
class Adversary(Actor):
    behavior: str = CHASE
    kind: Optional[str] = None

    def __post_init__(self):
        if self.behavior not in BEHAVIORS:
            raise ValueError(f"unknown behavior: {self.behavior!r}")
        super().__post_init__()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["behavior"] = self.behavior
        data["kind"] = self.kind
        return data


# Base roster: kind -> (max_hp, attack, defense, behavior)
ARCHETYPES: Dict[str, Tuple[int, int, int, str]] = {
    "goblin": (8, 3, 0, CHASE),  # weak melee swarmer
    "archer": (6, 4, 0, SKIRMISH),  # fragile, keeps 3-5 tiles away
    "brute": (15, 6, 3, SENTINEL),  # holds ground, punishes adjacency
}


def make_adversary(kind: str, x: int, y: int, name: Optional[str] = None) -> Adversary:
    try:
        hp, atk, dfn, behavior = ARCHETYPES[kind]
    except KeyError:
        raise ValueError(f"unknown adversary kind: {kind!r}") from None
    return Adversary(
        name=name or kind.title(),
        x=x,
        y=y,
        stats=CombatStats(hp, hp, atk, dfn),
        behavior=behavior,
        kind=kind,
    )


def make_player(x: int, y: int, name: str = "Player") -> Actor:
    return Actor(name=name, x=x, y=y, stats=CombatStats(20, 20, 5, 2))


__all__ = [
    "CombatStats",
    "Actor",
    "Adversary",
    "ARCHETYPES",
    "make_adversary",
    "make_player",
    "CHASE",
    "SKIRMISH",
    "SENTINEL",
    "BEHAVIORS",
]

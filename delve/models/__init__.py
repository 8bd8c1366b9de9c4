# Model package init
from .entities import (  # noqa: F401 re-export
    ARCHETYPES,
    CHASE,
    SENTINEL,
    SKIRMISH,
    Actor,
    Adversary,
    CombatStats,
    make_adversary,
    make_player,
)

__all__ = [
    "Actor",
    "Adversary",
    "CombatStats",
    "ARCHETYPES",
    "make_adversary",
    "make_player",
    "CHASE",
    "SKIRMISH",
    "SENTINEL",
]

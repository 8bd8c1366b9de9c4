"""Adversary spawn selection & placement.

Reference placement used by the CLI and tests: the core itself does not
require it, and any external spawner may replace it. Start and treasure rooms
stay empty. Every other room receives ``difficulty`` adversaries (capped by
its floor tiles), with kinds drawn from role-specific weights: boss rooms lean
towards brutes, challenge rooms towards archers.

This is intentionally stateless; pass a seeded ``random.Random`` for
reproducible placement.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from ..dungeon.generator import DungeonLayout
from ..dungeon.rooms import BOSS, CHALLENGE, NORMAL, START, TREASURE
from ..logging_utils import get_logger
from ..models.entities import Actor, Adversary, make_adversary, make_player

log = get_logger("delve.spawn")

ROLE_WEIGHTS: Dict[str, Dict[str, float]] = {
    NORMAL: {"goblin": 1.0, "archer": 0.55, "brute": 0.30},
    CHALLENGE: {"goblin": 0.5, "archer": 1.0, "brute": 0.55},
    BOSS: {"goblin": 0.30, "archer": 0.30, "brute": 1.0},
}

EMPTY_ROLES = (START, TREASURE)


def _weighted_kind(weights: Dict[str, float], rng) -> str:
    kinds = list(weights)
    pivot = rng.random() * sum(weights.values())
    acc = 0.0
    for kind in kinds:
        acc += weights[kind]
        if pivot <= acc:
            return kind
    return kinds[-1]


def spawn_adversaries(
    layout: DungeonLayout, *, rng: Optional[random.Random] = None, per_room: Optional[int] = None
) -> List[Adversary]:
    r = rng or random
    spawned: List[Adversary] = []
    for room in layout.rooms:
        if room.role in EMPTY_ROLES:
            continue
        tiles = [(x, y) for x, y in room.cells() if layout.is_walkable(x, y)]
        count = room.difficulty if per_room is None else per_room
        count = max(0, min(count, len(tiles)))
        weights = ROLE_WEIGHTS.get(room.role, ROLE_WEIGHTS[NORMAL])
        for x, y in r.sample(tiles, count):
            kind = _weighted_kind(weights, r)
            spawned.append(make_adversary(kind, x, y, name=f"{kind.title()} #{len(spawned) + 1}"))
    log.info(event="adversaries_spawned", count=len(spawned), rooms=len(layout.rooms))
    return spawned


def place_player(layout: DungeonLayout, name: str = "Player") -> Actor:
    start = layout.start_room
    if start is None:
        raise ValueError("layout has no start room to place the player in")
    x, y = start.center
    return make_player(x, y, name=name)


__all__ = ["spawn_adversaries", "place_player", "ROLE_WEIGHTS"]

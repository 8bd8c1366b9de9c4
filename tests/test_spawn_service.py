import random

import pytest

from delve.dungeon import START, TREASURE, generate
from delve.models.entities import ARCHETYPES
from delve.services.spawn_service import ROLE_WEIGHTS, place_player, spawn_adversaries


@pytest.fixture(scope="module")
def layout():
    return generate(seed=42)


def _room_of(layout, actor):
    return next(r for r in layout.rooms if r.contains(actor.x, actor.y))


def test_spawned_adversaries_sit_on_unique_floor_tiles(layout):
    foes = spawn_adversaries(layout, rng=random.Random(0))
    positions = [f.position for f in foes]
    assert len(positions) == len(set(positions))
    for foe in foes:
        assert layout.is_walkable(foe.x, foe.y)
        assert foe.kind in ARCHETYPES
        assert foe.behavior == ARCHETYPES[foe.kind][3]


def test_start_and_treasure_rooms_stay_empty(layout):
    foes = spawn_adversaries(layout, rng=random.Random(0))
    for foe in foes:
        assert _room_of(layout, foe).role not in (START, TREASURE)


def test_count_follows_room_difficulty(layout):
    foes = spawn_adversaries(layout, rng=random.Random(0))
    expected = sum(
        min(r.difficulty, r.width * r.height) for r in layout.rooms if r.role not in (START, TREASURE)
    )
    assert len(foes) == expected


def test_per_room_override_and_unique_names(layout):
    foes = spawn_adversaries(layout, rng=random.Random(5), per_room=1)
    populated = [r for r in layout.rooms if r.role not in (START, TREASURE)]
    assert len(foes) == len(populated)
    assert len({f.name for f in foes}) == len(foes)


def test_seeded_spawn_is_reproducible(layout):
    a = spawn_adversaries(layout, rng=random.Random(9))
    b = spawn_adversaries(layout, rng=random.Random(9))
    assert [(f.kind, f.position) for f in a] == [(f.kind, f.position) for f in b]


def test_boss_rooms_favour_brutes():
    weights = ROLE_WEIGHTS["boss"]
    assert max(weights, key=weights.get) == "brute"


def test_place_player_at_start_center(layout):
    player = place_player(layout, name="Hero")
    assert player.position == layout.start_room.center
    assert player.name == "Hero"
    assert (player.stats.max_hp, player.stats.attack, player.stats.defense) == (20, 5, 2)


def test_place_player_requires_start_room():
    with pytest.raises(ValueError):
        place_player(generate(4, 4, seed=1))

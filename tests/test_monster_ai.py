import random

import pytest

from delve.config import SimulationConfig
from delve.dungeon.pathing import manhattan
from delve.services import monster_ai


def test_sentinel_holds_at_distance_two(open_grid, make_actor, make_foe):
    hero = make_actor(x=3, y=1)
    brute = make_foe(1, 1, behavior="sentinel")
    assert monster_ai.select_action(brute, hero, open_grid) == {"type": "idle", "reason": "holding"}


def test_sentinel_attacks_when_adjacent(open_grid, make_actor, make_foe):
    hero = make_actor(x=2, y=1)
    brute = make_foe(1, 1, behavior="sentinel")
    assert monster_ai.select_action(brute, hero, open_grid) == {"type": "attack"}


def test_chase_attacks_when_adjacent(open_grid, make_actor, make_foe):
    hero = make_actor(x=3, y=3)
    goblin = make_foe(3, 4)
    assert monster_ai.select_action(goblin, hero, open_grid)["type"] == "attack"


def test_chase_steps_along_shortest_path(open_grid, make_actor, make_foe):
    hero = make_actor(x=5, y=1)
    goblin = make_foe(1, 1)
    assert monster_ai.select_action(goblin, hero, open_grid) == {"type": "move", "to": (2, 1)}


def test_chase_walled_off_idles_without_raising(ascii_grid, make_actor, make_foe):
    grid = ascii_grid(
        """
        #######
        #..#..#
        #######
        """
    )
    hero = make_actor(x=4, y=1)
    goblin = make_foe(1, 1)
    assert monster_ai.select_action(goblin, hero, grid) == {"type": "idle", "reason": "no_path"}


def test_skirmish_retreats_when_too_close(open_grid, make_actor, make_foe):
    hero = make_actor(x=3, y=3)
    archer = make_foe(4, 3, behavior="skirmish")
    assert monster_ai.select_action(archer, hero, open_grid) == {"type": "move", "to": (5, 3)}


@pytest.mark.parametrize("archer_pos", [(4, 1), (5, 1), (5, 2), (4, 3)])
def test_skirmish_attacks_inside_band(open_grid, make_actor, make_foe, archer_pos):
    hero = make_actor(x=1, y=1)
    archer = make_foe(*archer_pos, behavior="skirmish")
    assert 3 <= manhattan(archer.position, hero.position) <= 5
    assert monster_ai.select_action(archer, hero, open_grid) == {"type": "attack"}


def test_skirmish_closes_in_when_too_far(open_grid, make_actor, make_foe):
    hero = make_actor(x=1, y=1)
    archer = make_foe(5, 5, behavior="skirmish")
    action = monster_ai.select_action(archer, hero, open_grid)
    assert action["type"] == "move"
    assert manhattan(action["to"], hero.position) == 7


def test_skirmish_ranges_follow_config(open_grid, make_actor, make_foe):
    hero = make_actor(x=1, y=1)
    archer = make_foe(5, 1, behavior="skirmish")
    cfg = SimulationConfig(skirmish_min_range=1, skirmish_max_range=2)
    action = monster_ai.select_action(archer, hero, open_grid, cfg)
    assert action == {"type": "move", "to": (4, 1)}


def test_move_away_falls_back_to_x_axis(open_grid, make_actor, make_foe):
    hero = make_actor(x=3, y=4)
    archer = make_foe(4, 5, behavior="skirmish")
    # diagonal (5, 6) is wall, x-only step is open
    assert monster_ai.select_action(archer, hero, open_grid) == {"type": "move", "to": (5, 5)}


def test_move_away_falls_back_to_y_axis(open_grid, make_actor, make_foe):
    hero = make_actor(x=4, y=2)
    archer = make_foe(5, 3, behavior="skirmish")
    assert monster_ai.select_action(archer, hero, open_grid) == {"type": "move", "to": (5, 4)}


def test_move_away_cornered(open_grid, make_actor, make_foe):
    hero = make_actor(x=4, y=4)
    archer = make_foe(5, 5, behavior="skirmish")
    assert monster_ai.select_action(archer, hero, open_grid) == {"type": "idle", "reason": "cornered"}


def test_move_away_on_same_tile_idles(open_grid, make_actor, make_foe):
    hero = make_actor(x=3, y=3)
    archer = make_foe(3, 3, behavior="skirmish")
    assert monster_ai.select_action(archer, hero, open_grid)["type"] == "idle"


def test_dead_target_idles(open_grid, make_actor, make_foe):
    hero = make_actor(x=3, y=3)
    hero.stats.current_hp = 0
    goblin = make_foe(3, 4)
    assert monster_ai.select_action(goblin, hero, open_grid) == {"type": "idle", "reason": "target_down"}


def test_take_turn_attack_applies_damage(open_grid, make_actor, make_foe):
    hero = make_actor(x=3, y=3, hp=20, defense=0)
    goblin = make_foe(3, 4, attack=3, name="Goblin #1")
    action = monster_ai.take_turn(goblin, hero, open_grid, rng=random.Random(4))
    assert action["type"] == "attack"
    assert action["actor"] == "Goblin #1"
    assert 1 <= action["damage"] <= 3
    assert hero.stats.current_hp == 20 - action["damage"]


def test_take_turn_move_updates_position(open_grid, make_actor, make_foe):
    hero = make_actor(x=5, y=1)
    goblin = make_foe(1, 1)
    action = monster_ai.take_turn(goblin, hero, open_grid)
    assert action["type"] == "move"
    assert goblin.position == (2, 1)


def test_unknown_behavior_rejected(make_foe):
    with pytest.raises(ValueError):
        make_foe(1, 1, behavior="berserk")

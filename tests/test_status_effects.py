import pytest

from delve.models.entities import CombatStats
from delve.services import status_effects as se
from delve.services.status_effects import StatusEffect, StatusEffectManager, TickResult


def _manager(hp=20, max_hp=None, **kw):
    stats = CombatStats(max_hp or hp, hp, 5, 2)
    return stats, StatusEffectManager(stats, **kw)


def test_every_type_has_a_category_with_handlers():
    for effect_type, category in se.EFFECT_CATEGORIES.items():
        assert category in se.TICK_HANDLERS
        assert category in se.REAPPLY_HANDLERS
        assert StatusEffect(effect_type, 1).category == category


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        StatusEffect("frostbite", 2, 1)


def test_poison_ticks_then_expires():
    stats, mgr = _manager(hp=20)
    mgr.apply_effect(se.poison(potency=2, duration=2))
    assert mgr.tick() == TickResult(2, 0)
    assert mgr.tick() == TickResult(2, 0)
    assert stats.current_hp == 16
    assert not mgr.has_effect(se.POISON)
    assert mgr.tick() == TickResult(0, 0)


def test_dot_reapply_keeps_longer_duration():
    _, mgr = _manager()
    mgr.apply_effect(se.burn(potency=3, duration=4))
    mgr.apply_effect(se.burn(potency=9, duration=2))
    effect = mgr.get_effect(se.BURN)
    assert effect.duration == 4
    assert effect.potency == 3


def test_bleeding_stacks_cap_at_five():
    _, mgr = _manager()
    for duration in (3, 2, 6, 1, 4, 5):
        mgr.apply_effect(se.bleeding(potency=1, duration=duration))
    effect = mgr.get_effect(se.BLEEDING)
    assert effect.stacks == 5
    assert effect.duration == 6
    assert len(mgr) == 1


def test_bleeding_deals_potency_times_stacks():
    stats, mgr = _manager(hp=20)
    for _ in range(3):
        mgr.apply_effect(se.bleeding(potency=2, duration=3))
    assert mgr.tick().damage == 6
    assert stats.current_hp == 14


def test_stack_cap_is_configurable():
    _, mgr = _manager(max_stacks=2)
    for _ in range(4):
        mgr.apply_effect(se.bleeding())
    assert mgr.get_effect(se.BLEEDING).stacks == 2


def test_buff_reapply_overwrites():
    _, mgr = _manager()
    mgr.apply_effect(se.strength_buff(potency=2, duration=3))
    mgr.apply_effect(se.strength_buff(potency=5, duration=1))
    effect = mgr.get_effect(se.STRENGTH_BUFF)
    assert (effect.potency, effect.duration) == (5, 1)


def test_regeneration_clamped_to_deficit():
    stats, mgr = _manager(hp=18, max_hp=20)
    mgr.apply_effect(se.regeneration(potency=5, duration=2))
    assert mgr.tick() == TickResult(0, 2)
    assert stats.current_hp == 20
    assert mgr.tick() == TickResult(0, 0)


def test_regeneration_never_revives():
    stats, mgr = _manager(hp=20)
    stats.current_hp = 0
    mgr.apply_effect(se.regeneration(potency=5, duration=3))
    assert mgr.tick().healing == 0
    assert stats.current_hp == 0


def test_hot_reapply_keeps_longer_duration():
    _, mgr = _manager()
    mgr.apply_effect(se.regeneration(potency=2, duration=4))
    mgr.apply_effect(se.regeneration(potency=9, duration=1))
    effect = mgr.get_effect(se.REGENERATION)
    assert (effect.potency, effect.duration) == (2, 4)


def test_damage_reported_nominally_when_hp_runs_out():
    stats, mgr = _manager(hp=3)
    mgr.apply_effect(se.burn(potency=5, duration=1))
    assert mgr.tick().damage == 5
    assert stats.current_hp == 0


def test_callbacks_fire_per_effect():
    damage_calls, heal_calls = [], []
    _, mgr = _manager(hp=10, max_hp=20, on_damage=damage_calls.append, on_heal=heal_calls.append)
    mgr.apply_effect(se.poison(potency=2, duration=1))
    mgr.apply_effect(se.burn(potency=3, duration=1))
    mgr.apply_effect(se.regeneration(potency=4, duration=1))
    mgr.apply_effect(se.stun())
    mgr.tick()
    assert sorted(damage_calls) == [2, 3]
    assert heal_calls == [4]


def test_stat_modifiers_sum_by_stat():
    _, mgr = _manager()
    mgr.apply_effect(se.strength_buff(potency=3))
    mgr.apply_effect(se.weakness(potency=1))
    mgr.apply_effect(se.defense_buff(potency=2))
    mgr.apply_effect(se.vulnerability(potency=4))
    mods = mgr.get_stat_modifiers()
    assert (mods.attack, mods.defense) == (2, -2)
    # pure read
    assert mgr.get_stat_modifiers() == mods
    assert len(mgr) == 4


def test_expired_effects_removed_back_to_front():
    _, mgr = _manager()
    mgr.apply_effect(se.stun(duration=1))
    mgr.apply_effect(se.poison(potency=1, duration=3))
    mgr.apply_effect(se.weakness(potency=1, duration=1))
    mgr.tick()
    assert [e.type for e in mgr.get_active_effects()] == [se.POISON]


def test_stun_blocks_action_until_expired():
    _, mgr = _manager()
    mgr.apply_effect(se.stun(duration=2))
    assert mgr.is_stunned() and not mgr.can_act()
    mgr.tick()
    assert mgr.is_stunned()
    mgr.tick()
    assert mgr.can_act()


def test_apply_effect_stores_a_copy():
    _, mgr = _manager()
    effect = se.poison(potency=2, duration=4)
    mgr.apply_effect(effect)
    mgr.tick()
    assert effect.duration == 4
    snapshot = mgr.get_active_effects()[0]
    snapshot.duration = 99
    assert mgr.get_effect(se.POISON).duration == 3


def test_remove_and_clear():
    _, mgr = _manager()
    mgr.apply_effect(se.poison())
    mgr.apply_effect(se.stun())
    assert mgr.remove_effect(se.STUN) is True
    assert mgr.remove_effect(se.STUN) is False
    assert [e.type for e in mgr] == [se.POISON]
    mgr.clear()
    assert len(mgr) == 0
    assert mgr.get_effect(se.POISON) is None


def test_presets_match_defaults():
    assert (se.poison().potency, se.poison().duration) == (2, 4)
    assert (se.bleeding().potency, se.bleeding().duration) == (1, 3)
    assert (se.burn().potency, se.burn().duration) == (3, 2)
    assert (se.regeneration().potency, se.regeneration().duration) == (2, 3)
    assert se.stun().duration == 1

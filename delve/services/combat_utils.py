"""Combat resolution helpers.

Damage model:
  base = (attacker.attack + attacker_mods.attack) - (defender.defense + defender_mods.defense)
  If base <= 0 the defense absorbs the blow entirely (0 damage); otherwise the
  damage is a uniform integer in [1, base].

Modifiers default to zero, which is the plain two-stat formula. The command
surface ``attack`` only feeds status-effect modifiers in when asked to
(``use_modifiers=True``; the turn loop reads this from ``SimulationConfig``).

HP application is a pure clamp: ``current_hp = max(0, current_hp - amount)``.
Death detection is left to the caller (``current_hp == 0``).
"""

from __future__ import annotations

import random
from typing import NamedTuple, Optional


class StatModifiers(NamedTuple):
    attack: int = 0
    defense: int = 0


NO_MODIFIERS = StatModifiers()


def calculate_damage(
    attacker_stats,
    defender_stats,
    attacker_mods: Optional[StatModifiers] = None,
    defender_mods: Optional[StatModifiers] = None,
    rng=None,
) -> int:
    r = rng or random
    a_mods = attacker_mods or NO_MODIFIERS
    d_mods = defender_mods or NO_MODIFIERS
    base = (attacker_stats.attack + a_mods.attack) - (defender_stats.defense + d_mods.defense)
    if base <= 0:
        return 0
    return r.randint(1, base)


def apply_damage(target, amount: int) -> None:
    """Reduce HP of an actor (or bare stats object), clamped at zero."""
    stats = getattr(target, "stats", target)
    stats.current_hp = max(0, stats.current_hp - amount)


def attack(attacker, defender, *, rng=None, use_modifiers: bool = False) -> int:
    """Resolve one attack and apply it to the defender. Returns damage dealt."""
    if use_modifiers:
        damage = calculate_damage(
            attacker.stats,
            defender.stats,
            attacker.effects.get_stat_modifiers(),
            defender.effects.get_stat_modifiers(),
            rng=rng,
        )
    else:
        damage = calculate_damage(attacker.stats, defender.stats, rng=rng)
    defender.take_damage(damage)
    return damage


def move_to(actor, x: int, y: int) -> None:
    actor.x = x
    actor.y = y


__all__ = ["StatModifiers", "calculate_damage", "apply_damage", "attack", "move_to"]

"""Status effects framework.

Each actor owns one ``StatusEffectManager`` holding at most one active effect
per type:

    StatusEffect(type="poison", duration=4, potency=2, stacks=1)

Every effect type belongs to exactly one category, and the category alone
decides how the effect ticks and how a fresh application of an already
active type is merged:

    category       tick                                  re-application
    dot            deal potency                          duration = max(old, new)
    stacking_dot   deal potency * stacks                 stacks + 1 (capped), duration = max
    hot            heal min(potency, max_hp - hp)        duration = max(old, new)
    stat_modifier  none (read via get_stat_modifiers)    overwrite duration and potency
    incapacitate   none (countdown only)                 overwrite duration and potency

Extension points: register a new type in EFFECT_CATEGORIES; add a category by
extending TICK_HANDLERS and REAPPLY_HANDLERS.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from .combat_utils import StatModifiers, apply_damage

# Effect types
POISON = "poison"
BURN = "burn"
BLEEDING = "bleeding"
REGENERATION = "regeneration"
STRENGTH_BUFF = "strength_buff"
DEFENSE_BUFF = "defense_buff"
WEAKNESS = "weakness"
VULNERABILITY = "vulnerability"
STUN = "stun"

# Categories
DOT = "dot"
STACKING_DOT = "stacking_dot"
HOT = "hot"
STAT_MODIFIER = "stat_modifier"
INCAPACITATE = "incapacitate"

EFFECT_CATEGORIES: Dict[str, str] = {
    POISON: DOT,
    BURN: DOT,
    BLEEDING: STACKING_DOT,
    REGENERATION: HOT,
    STRENGTH_BUFF: STAT_MODIFIER,
    DEFENSE_BUFF: STAT_MODIFIER,
    WEAKNESS: STAT_MODIFIER,
    VULNERABILITY: STAT_MODIFIER,
    STUN: INCAPACITATE,
}

# stat-modifier type -> (stat, sign)
STAT_EFFECTS: Dict[str, Tuple[str, int]] = {
    STRENGTH_BUFF: ("attack", 1),
    WEAKNESS: ("attack", -1),
    DEFENSE_BUFF: ("defense", 1),
    VULNERABILITY: ("defense", -1),
}

DEFAULT_MAX_STACKS = 5


@dataclass
class StatusEffect:
    type: str
    duration: int
    potency: int = 0
    stacks: int = 1

    def __post_init__(self):
        if self.type not in EFFECT_CATEGORIES:
            raise ValueError(f"unknown status effect type: {self.type!r}")

    @property
    def category(self) -> str:
        return EFFECT_CATEGORIES[self.type]


class TickResult(NamedTuple):
    damage: int
    healing: int


# ---------------------------------------------------------------------------
# Tick handlers: (owner_stats, effect) -> (damage, healing)
# ---------------------------------------------------------------------------


def _tick_dot(owner, effect: StatusEffect) -> Tuple[int, int]:
    apply_damage(owner, effect.potency)
    return effect.potency, 0


def _tick_stacking_dot(owner, effect: StatusEffect) -> Tuple[int, int]:
    amount = effect.potency * effect.stacks
    apply_damage(owner, amount)
    return amount, 0


def _tick_hot(owner, effect: StatusEffect) -> Tuple[int, int]:
    # The dead stay dead: no healing once HP has hit zero.
    if owner.current_hp <= 0:
        return 0, 0
    healing = max(0, min(effect.potency, owner.max_hp - owner.current_hp))
    owner.current_hp += healing
    return 0, healing


def _tick_noop(owner, effect: StatusEffect) -> Tuple[int, int]:
    return 0, 0


TICK_HANDLERS: Dict[str, Callable[..., Tuple[int, int]]] = {
    DOT: _tick_dot,
    STACKING_DOT: _tick_stacking_dot,
    HOT: _tick_hot,
    STAT_MODIFIER: _tick_noop,
    INCAPACITATE: _tick_noop,
}

# ---------------------------------------------------------------------------
# Re-application handlers: (existing, incoming, max_stacks) -> None
# ---------------------------------------------------------------------------


def _refresh(existing: StatusEffect, incoming: StatusEffect, max_stacks: int) -> None:
    existing.duration = max(existing.duration, incoming.duration)


def _stack_and_refresh(existing: StatusEffect, incoming: StatusEffect, max_stacks: int) -> None:
    existing.stacks = min(existing.stacks + 1, max_stacks)
    existing.duration = max(existing.duration, incoming.duration)


def _overwrite(existing: StatusEffect, incoming: StatusEffect, max_stacks: int) -> None:
    existing.duration = incoming.duration
    existing.potency = incoming.potency


REAPPLY_HANDLERS: Dict[str, Callable[..., None]] = {
    DOT: _refresh,
    STACKING_DOT: _stack_and_refresh,
    HOT: _refresh,
    STAT_MODIFIER: _overwrite,
    INCAPACITATE: _overwrite,
}


class StatusEffectManager:
    """Active effects of a single actor.

    ``owner`` is the actor's stats object (needs max_hp / current_hp).
    ``on_damage`` / ``on_heal`` are optional observers called once per
    damage / healing effect processed during ``tick``.
    """

    def __init__(
        self,
        owner,
        on_damage: Optional[Callable[[int], None]] = None,
        on_heal: Optional[Callable[[int], None]] = None,
        max_stacks: int = DEFAULT_MAX_STACKS,
    ):
        self.owner = owner
        self.on_damage = on_damage
        self.on_heal = on_heal
        self.max_stacks = max_stacks
        self._effects: List[StatusEffect] = []

    def __len__(self) -> int:
        return len(self._effects)

    def __iter__(self):
        return iter(self.get_active_effects())

    def _find(self, effect_type: str) -> Optional[StatusEffect]:
        return next((e for e in self._effects if e.type == effect_type), None)

    def apply_effect(self, effect: StatusEffect) -> None:
        existing = self._find(effect.type)
        if existing is None:
            self._effects.append(replace(effect))
            return
        REAPPLY_HANDLERS[effect.category](existing, effect, self.max_stacks)

    def tick(self) -> TickResult:
        """Process every effect once, then count its duration down.

        Iterates back to front so expired effects can be dropped in place.
        """
        total_damage = 0
        total_healing = 0
        for i in range(len(self._effects) - 1, -1, -1):
            effect = self._effects[i]
            category = effect.category
            damage, healing = TICK_HANDLERS[category](self.owner, effect)
            total_damage += damage
            total_healing += healing
            if category in (DOT, STACKING_DOT) and self.on_damage:
                self.on_damage(damage)
            elif category == HOT and self.on_heal:
                self.on_heal(healing)
            effect.duration -= 1
            if effect.duration <= 0:
                del self._effects[i]
        return TickResult(total_damage, total_healing)

    def get_stat_modifiers(self) -> StatModifiers:
        mods = {"attack": 0, "defense": 0}
        for effect in self._effects:
            entry = STAT_EFFECTS.get(effect.type)
            if entry:
                stat, sign = entry
                mods[stat] += sign * effect.potency
        return StatModifiers(mods["attack"], mods["defense"])

    def remove_effect(self, effect_type: str) -> bool:
        existing = self._find(effect_type)
        if existing is None:
            return False
        self._effects.remove(existing)
        return True

    def has_effect(self, effect_type: str) -> bool:
        return self._find(effect_type) is not None

    def get_effect(self, effect_type: str) -> Optional[StatusEffect]:
        existing = self._find(effect_type)
        return replace(existing) if existing else None

    def get_active_effects(self) -> List[StatusEffect]:
        return [replace(e) for e in self._effects]

    def is_stunned(self) -> bool:
        return self.has_effect(STUN)

    def can_act(self) -> bool:
        return not self.is_stunned()

    def clear(self) -> None:
        self._effects = []


# ---------------------------------------------------------------------------
# Presets (potency, duration defaults tuned for the base roster)
# ---------------------------------------------------------------------------


def poison(potency: int = 2, duration: int = 4) -> StatusEffect:
    return StatusEffect(POISON, duration, potency)


def bleeding(potency: int = 1, duration: int = 3) -> StatusEffect:
    return StatusEffect(BLEEDING, duration, potency)


def burn(potency: int = 3, duration: int = 2) -> StatusEffect:
    return StatusEffect(BURN, duration, potency)


def regeneration(potency: int = 2, duration: int = 3) -> StatusEffect:
    return StatusEffect(REGENERATION, duration, potency)


def strength_buff(potency: int = 2, duration: int = 3) -> StatusEffect:
    return StatusEffect(STRENGTH_BUFF, duration, potency)


def defense_buff(potency: int = 2, duration: int = 3) -> StatusEffect:
    return StatusEffect(DEFENSE_BUFF, duration, potency)


def weakness(potency: int = 2, duration: int = 2) -> StatusEffect:
    return StatusEffect(WEAKNESS, duration, potency)


def vulnerability(potency: int = 2, duration: int = 2) -> StatusEffect:
    return StatusEffect(VULNERABILITY, duration, potency)


def stun(duration: int = 1) -> StatusEffect:
    return StatusEffect(STUN, duration, 0)


__all__ = [
    "StatusEffect",
    "StatusEffectManager",
    "TickResult",
    "EFFECT_CATEGORIES",
    "TICK_HANDLERS",
    "REAPPLY_HANDLERS",
    "POISON",
    "BURN",
    "BLEEDING",
    "REGENERATION",
    "STRENGTH_BUFF",
    "DEFENSE_BUFF",
    "WEAKNESS",
    "VULNERABILITY",
    "STUN",
    "poison",
    "bleeding",
    "burn",
    "regeneration",
    "strength_buff",
    "defense_buff",
    "weakness",
    "vulnerability",
    "stun",
]

"""Adversary action selection.

``select_action(adversary, target, grid)`` is a pure decision and returns a dict:
{
  'type': 'attack' | 'move' | 'idle',
  'to': (x, y),             # when type == 'move'
  'reason': 'no_path',      # when type == 'idle'
}

``take_turn`` selects and executes: attacks go through combat_utils.attack,
moves through combat_utils.move_to. The executed action additionally carries
'actor' and, for attacks, 'damage'.

Behaviors (distance is Manhattan |dx| + |dy|):
- chase: attack when adjacent, otherwise take the first step of a shortest path.
- skirmish: retreat when closer than skirmish_min_range, close in (like chase)
  when farther than skirmish_max_range, attack in between.
- sentinel: attack when adjacent, otherwise hold position. Never moves.

A missing path is not an error; the adversary idles for the turn.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..config import DEFAULT_CONFIG, SimulationConfig
from ..dungeon.pathing import find_path, is_walkable, manhattan
from ..logging_utils import get_logger
from ..models.entities import CHASE, SENTINEL, SKIRMISH
from .combat_utils import attack, move_to

Action = Dict[str, Any]

log = get_logger("delve.ai")


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def _idle(reason: str) -> Action:
    return {"type": "idle", "reason": reason}


def _step_toward(adversary, target, grid) -> Action:
    path = find_path(grid, adversary.position, target.position)
    if path and len(path) > 1:
        return {"type": "move", "to": path[1]}
    return _idle("no_path")


def _move_away(adversary, target, grid) -> Action:
    mx = _sign(adversary.x - target.x)
    my = _sign(adversary.y - target.y)
    if mx == 0 and my == 0:
        return _idle("cornered")
    x, y = adversary.x, adversary.y
    if is_walkable(grid, x + mx, y + my):
        return {"type": "move", "to": (x + mx, y + my)}
    if mx != 0 and is_walkable(grid, x + mx, y):
        return {"type": "move", "to": (x + mx, y)}
    if my != 0 and is_walkable(grid, x, y + my):
        return {"type": "move", "to": (x, y + my)}
    return _idle("cornered")


def _chase(adversary, target, grid, cfg: SimulationConfig) -> Action:
    if manhattan(adversary.position, target.position) == 1:
        return {"type": "attack"}
    return _step_toward(adversary, target, grid)


def _skirmish(adversary, target, grid, cfg: SimulationConfig) -> Action:
    distance = manhattan(adversary.position, target.position)
    if distance < cfg.skirmish_min_range:
        return _move_away(adversary, target, grid)
    if distance > cfg.skirmish_max_range:
        return _step_toward(adversary, target, grid)
    return {"type": "attack"}


def _sentinel(adversary, target, grid, cfg: SimulationConfig) -> Action:
    if manhattan(adversary.position, target.position) == 1:
        return {"type": "attack"}
    return _idle("holding")


BEHAVIOR_HANDLERS: Dict[str, Callable[..., Action]] = {
    CHASE: _chase,
    SKIRMISH: _skirmish,
    SENTINEL: _sentinel,
}


def select_action(adversary, target, grid, config: Optional[SimulationConfig] = None) -> Action:
    if not target.is_alive():
        return _idle("target_down")
    cfg = config or DEFAULT_CONFIG
    return BEHAVIOR_HANDLERS[adversary.behavior](adversary, target, grid, cfg)


def take_turn(adversary, target, grid, *, rng=None, config: Optional[SimulationConfig] = None) -> Action:
    cfg = config or DEFAULT_CONFIG
    action = select_action(adversary, target, grid, cfg)
    action["actor"] = adversary.name
    if action["type"] == "attack":
        action["damage"] = attack(adversary, target, rng=rng, use_modifiers=cfg.use_status_modifiers)
    elif action["type"] == "move":
        move_to(adversary, *action["to"])
    log.debug(event="ai_action", actor=adversary.name, behavior=adversary.behavior, action=action["type"])
    return action


__all__ = ["select_action", "take_turn", "BEHAVIOR_HANDLERS"]

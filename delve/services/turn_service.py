"""Turn controller: a two-state machine for the turn loop.

Flow: the controlled actor acts (outside this module), then
``end_controlled_turn`` runs the whole adversary phase synchronously:

    1. tick the controlled actor's status effects (if alive); an actor
       killed by that tick has its effects cleared
    2. -> adversary turn, notify on_turn_change(False)
    3. tick every live adversary's status effects
    4. walk adversaries back to front: live ones act through the AI,
       dead ones are cleared and dropped from tracking
    5. -> controlled turn, notify on_turn_change(True)

All status ticks resolve before any adversary acts, so an adversary killed by
poison in step 3 never acts and is removed in step 4.
If anything in steps 2-4 raises, the controller is still back in the
controlled turn when the exception propagates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..config import DEFAULT_CONFIG, SimulationConfig
from ..exceptions import TurnOrderError
from ..logging_utils import get_logger
from . import monster_ai
from .status_effects import TickResult

CONTROLLED_TURN = "controlled_turn"
ADVERSARY_TURN = "adversary_turn"

log = get_logger("delve.turn")


@dataclass
class TurnReport:
    turn: int
    controlled_tick: Optional[TickResult] = None
    adversary_ticks: List[Tuple[str, TickResult]] = field(default_factory=list)
    actions: List[Dict] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)


class TurnController:
    def __init__(
        self,
        adversaries: Optional[Iterable] = None,
        *,
        on_turn_change: Optional[Callable[[bool], None]] = None,
        config: Optional[SimulationConfig] = None,
        rng=None,
    ):
        self.config = config or DEFAULT_CONFIG
        self._adversaries: List = []
        for adversary in adversaries or []:
            self.add_adversary(adversary)
        self._state = CONTROLLED_TURN
        self.on_turn_change = on_turn_change
        self._rng = rng
        self.turn = 0

    @property
    def state(self) -> str:
        return self._state

    @property
    def adversaries(self) -> List:
        return list(self._adversaries)

    def is_controlled_turn(self) -> bool:
        return self._state == CONTROLLED_TURN

    def add_adversary(self, adversary) -> None:
        adversary.effects.max_stacks = self.config.max_stacks
        self._adversaries.append(adversary)

    def remove_adversary(self, adversary) -> bool:
        for i, a in enumerate(self._adversaries):
            if a is adversary:
                del self._adversaries[i]
                return True
        return False

    def _set_state(self, state: str) -> None:
        self._state = state
        self._notify()

    def _notify(self) -> None:
        if self.on_turn_change:
            self.on_turn_change(self._state == CONTROLLED_TURN)

    def end_controlled_turn(self, controlled, grid) -> TurnReport:
        if self._state != CONTROLLED_TURN:
            raise TurnOrderError("end_controlled_turn called during the adversary phase")
        self.turn += 1
        report = TurnReport(turn=self.turn)
        controlled.effects.max_stacks = self.config.max_stacks

        if controlled.is_alive():
            report.controlled_tick = controlled.effects.tick()
            if not controlled.is_alive():
                controlled.effects.clear()

        try:
            self._set_state(ADVERSARY_TURN)
            self._run_adversary_phase(controlled, grid, report)
        finally:
            # the controller never stays in the adversary phase once this call returns or raises
            self._state = CONTROLLED_TURN
        self._notify()
        log.debug(
            event="turn_complete",
            turn=self.turn,
            adversaries=len(self._adversaries),
            controlled_hp=controlled.stats.current_hp,
        )
        return report

    def _run_adversary_phase(self, controlled, grid, report: TurnReport) -> None:
        # Stun state is read before ticking so a one-turn stun costs exactly one action.
        stunned = {id(a) for a in self._adversaries if a.effects.is_stunned()}
        for adversary in self._adversaries:
            if adversary.is_alive():
                report.adversary_ticks.append((adversary.name, adversary.effects.tick()))

        for i in range(len(self._adversaries) - 1, -1, -1):
            adversary = self._adversaries[i]
            if not adversary.is_alive():
                adversary.effects.clear()
                del self._adversaries[i]
                report.removed.append(adversary.name)
                log.info(event="adversary_removed", turn=self.turn, actor=adversary.name)
                continue
            if self.config.stun_skips_action and id(adversary) in stunned:
                report.actions.append({"type": "idle", "reason": "stunned", "actor": adversary.name})
                continue
            report.actions.append(
                monster_ai.take_turn(adversary, controlled, grid, rng=self._rng, config=self.config)
            )


__all__ = ["TurnController", "TurnReport", "CONTROLLED_TURN", "ADVERSARY_TURN"]

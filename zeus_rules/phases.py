"""Phase table: which generator is live in each sub-turn phase.

The active phase and its FIFO queue live on :class:`GameState`; this module
only maps a phase name to the function that lists its legal actions.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List

from .action_gen import collect_main
from .action_gen.schema import Action
from .action_gen.special import SPECIAL_PHASES, freeloader
from .game_models import GameState, Player
from .results import RulesError
from .types import Phase

logger = logging.getLogger(__name__)

PhaseGenerator = Callable[[GameState], List[Action]]


class PhaseError(RulesError):
    """Raised for a phase name outside the known set."""


def _welcome(state: GameState) -> List[Action]:
    return []


PHASE_GENERATORS: Dict[Phase, PhaseGenerator] = {
    Phase.WELCOME: _welcome,
    Phase.MAIN: collect_main,
    **SPECIAL_PHASES,
}


def parse_phase(value: object) -> Phase:
    try:
        return Phase(value)
    except ValueError as exc:
        raise PhaseError(f"unknown phase {value!r}") from exc


def available_actions(state: GameState) -> List[Action]:
    """Legal actions for the active phase, de-duplicated, in generation order."""

    generator = PHASE_GENERATORS.get(state.phase)
    if generator is None:
        raise PhaseError(f"no generator for phase {state.phase!r}")
    unique: Dict[tuple, Action] = {}
    for action in generator(state):
        unique.setdefault(action.stable_key(), action)
    actions = list(unique.values())
    logger.debug("phase %s offers %d actions", state.phase.value, len(actions))
    return actions


def acting_player(state: GameState) -> Player:
    """The player who chooses during the active phase."""
    if state.phase == Phase.FREELOADING:
        player = freeloader(state)
        if player is not None:
            return player
    return state.current_player


def is_idle(state: GameState) -> bool:
    """True for a special phase with nothing left to choose."""
    if state.phase in (Phase.MAIN, Phase.WELCOME):
        return False
    return not PHASE_GENERATORS[state.phase](state)


__all__ = [
    "Phase",
    "PhaseError",
    "PHASE_GENERATORS",
    "parse_phase",
    "available_actions",
    "acting_player",
    "is_idle",
]

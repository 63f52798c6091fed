"""Free actions: ending the turn and activating a fully advanced god."""
from __future__ import annotations

from typing import Dict, List

from ..game_models import GameState
from ..types import CoreColor, Phase
from .schema import Action, activate_god, end_turn
from .special import SPECIAL_PHASES

# Gods whose activation opens a follow-up phase.
GOD_ACTIVATIONS: Dict[CoreColor, Phase] = {
    CoreColor.BLUE: Phase.TELEPORTING,
    CoreColor.GREEN: Phase.EXPLORING,
}


def end_turn_actions(state: GameState) -> List[Action]:
    """The turn may only end once every die has been used."""
    if state.current_player.oracle_dice:
        return []
    return [end_turn()]


def generate(state: GameState) -> List[Action]:
    actions = end_turn_actions(state)
    player = state.current_player
    max_level = state.rules.max_god_level
    for color, phase in GOD_ACTIVATIONS.items():
        if player.god_level(color) >= max_level and SPECIAL_PHASES[phase](state):
            actions.append(activate_god(color))
    return actions

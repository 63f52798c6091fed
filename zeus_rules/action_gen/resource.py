"""Any-resource actions: spend a die or card regardless of its color."""
from __future__ import annotations

from typing import List

from ..game_models import GameState, Player
from .schema import Action, ActionSubType, resource_action


def peekable_shrine_count(state: GameState, player: Player) -> int:
    return sum(1 for hex_ in state.hidden_shrines() if hex_.coordinates not in player.peeked_shrines)


def generate(state: GameState) -> List[Action]:
    player = state.current_player
    can_draw = bool(state.oracle_deck)
    can_peek = peekable_shrine_count(state, player) > 0

    actions: List[Action] = []
    for resource in player.available_resources():
        actions.append(resource_action(ActionSubType.GAIN_FAVOR, resource))
        if can_draw:
            actions.append(resource_action(ActionSubType.GAIN_ORACLE_CARD, resource))
        if can_peek:
            actions.append(resource_action(ActionSubType.GAIN_TWO_PEEKS, resource))
    return actions

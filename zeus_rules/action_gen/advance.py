"""Color actions: pay a resource to advance the god of its effective color."""
from __future__ import annotations

from typing import List

from ..game_models import GameState
from .schema import Action, advance_god


def generate(state: GameState) -> List[Action]:
    player = state.current_player
    max_level = state.rules.max_god_level
    actions: List[Action] = []
    for resource in player.resources_with_recoloring(state.rules.max_recolor):
        color = resource.effective_color()
        if player.god_level(color) < max_level:
            actions.append(advance_god(color, resource))
    return actions

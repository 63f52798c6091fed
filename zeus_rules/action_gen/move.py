"""Ship moves paid for with a resource matching the destination's color."""
from __future__ import annotations

from typing import List, Optional

from ..game_models import GameState
from ..movement import find_reachable
from ..resource import Resource
from ..types import NONE_COLOR
from .schema import Action, move_ship


def cheapest_variant(resource: Resource, color: object, budget: int, max_recolor: int) -> Optional[Resource]:
    """Lowest recolor of ``resource`` that shows ``color`` within ``budget`` favor."""

    for cost in range(min(budget, max_recolor) + 1):
        variant = resource.with_recoloring(cost)
        if variant.effective_color() == color:
            return variant
    return None


def generate(state: GameState) -> List[Action]:
    player = state.current_player
    resources = player.available_resources()
    if not resources:
        return []

    reachable = find_reachable(
        state.grid,
        player.ship_position,
        state.rules.base_range,
        player.favor,
    )
    actions: List[Action] = []
    for target in reachable:
        cell = state.grid.cell_at(target.coordinates)
        if cell is None or cell.color == NONE_COLOR:
            continue
        budget = player.favor - target.extra_favor
        for resource in resources:
            variant = cheapest_variant(resource, cell.color, budget, state.rules.max_recolor)
            if variant is not None:
                actions.append(move_ship(target.coordinates, variant, target.extra_favor))
    return actions

"""Generators for the special sub-turn phases granted by rewards and gods.

A special phase is a forced choice: none of them offers ``endTurn``, and a
phase with nothing to choose is skipped by the dispatcher.
"""
from __future__ import annotations

from typing import List, Optional

from ..game_models import GameState, Player
from ..types import COLOR_WHEEL, CoreColor, Phase, Terrain
from .hexes import shrine_is_explorable
from .schema import Action, ActionSubType, advance_god, freeload, hex_action, move_ship


def teleporting(state: GameState) -> List[Action]:
    """Any sea cell, free of die, card and favor."""
    ship = state.current_player.ship_position
    return [
        move_ship(cell.coordinates)
        for cell in state.grid.cells_of_terrain(Terrain.SEA)
        if cell.coordinates != ship
    ]


def advancing_god(state: GameState) -> List[Action]:
    player = state.current_player
    max_level = state.rules.max_god_level
    return [advance_god(color) for color in COLOR_WHEEL if player.god_level(color) < max_level]


def peeking(state: GameState) -> List[Action]:
    player = state.current_player
    return [
        hex_action(ActionSubType.PEEK_SHRINE, shrine.coordinates)
        for shrine in state.hidden_shrines()
        if shrine.coordinates not in player.peeked_shrines
    ]


def exploring(state: GameState) -> List[Action]:
    """Explore any hidden shrine on the map; needs the green god at its peak."""
    player = state.current_player
    if player.god_level(CoreColor.GREEN) < state.rules.max_god_level:
        return []
    return [
        hex_action(ActionSubType.EXPLORE_SHRINE, shrine.coordinates)
        for shrine in state.hidden_shrines()
        if shrine_is_explorable(player, shrine)
    ]


def freeloader(state: GameState) -> Optional[Player]:
    """First player after the current one, in turn order, with a pending opportunity."""

    count = state.player_count
    for offset in range(1, count):
        player = state.players[(state.current_player_index + offset) % count]
        if player.freeload_opportunities:
            return player
    return None


def freeload_colors(state: GameState, player: Player) -> List[CoreColor]:
    max_level = state.rules.max_god_level
    colors: List[CoreColor] = []
    for color in player.freeload_opportunities:
        if color not in colors and 0 < player.god_level(color) < max_level:
            colors.append(color)
    return colors


def freeloading(state: GameState) -> List[Action]:
    player = freeloader(state)
    if player is None:
        return []
    return [freeload(color) for color in freeload_colors(state, player)]


SPECIAL_PHASES = {
    Phase.TELEPORTING: teleporting,
    Phase.ADVANCING_GOD: advancing_god,
    Phase.PEEKING: peeking,
    Phase.EXPLORING: exploring,
    Phase.FREELOADING: freeloading,
}

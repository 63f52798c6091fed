"""Hex actions: interact with a land cell next to the ship.

Every rule receives one neighbor cell and one (possibly recolored) resource
and returns zero or one action. The rules only read state.
"""
from __future__ import annotations

from typing import Callable, Dict, List

from ..game_models import GameState, Player, ShrineHex
from ..map.grid import HexCell
from ..quests import will_satisfy_quest
from ..resource import Resource
from ..types import ItemType, QuestType, ShrineStatus, Terrain
from .schema import Action, ActionSubType, hex_action

HexRule = Callable[[GameState, Player, HexCell, Resource], List[Action]]


def shrine_is_explorable(player: Player, shrine: ShrineHex) -> bool:
    """Hidden shrines may be flipped; a player's own shrine may be filled.

    Filling needs an open shrine quest, whether the shrine is still hidden or
    already turned face up.
    """
    if shrine.owner == player.color:
        if shrine.status == ShrineStatus.FILLED:
            return False
        return any(not quest.completed for quest in player.quests_of_type(QuestType.SHRINE))
    return shrine.status == ShrineStatus.HIDDEN


def shrine_actions(state: GameState, player: Player, cell: HexCell, resource: Resource) -> List[Action]:
    if cell.color != resource.effective_color():
        return []
    shrine = state.overlay_at(Terrain.SHRINE, cell.coordinates)
    if not shrine_is_explorable(player, shrine):
        return []
    return [hex_action(ActionSubType.EXPLORE_SHRINE, cell.coordinates, resource)]


def offering_actions(state: GameState, player: Player, cell: HexCell, resource: Resource) -> List[Action]:
    color = resource.effective_color()
    if not player.validate_loadable(ItemType.CUBE, color, state.rules.item_capacity):
        return []
    if not will_satisfy_quest(player.quests_of_type(QuestType.TEMPLE), color):
        return []
    offering = state.overlay_at(Terrain.OFFERINGS, cell.coordinates)
    if color not in offering.cube_colors:
        return []
    return [hex_action(ActionSubType.LOAD_CUBE, cell.coordinates, resource)]


def temple_actions(state: GameState, player: Player, cell: HexCell, resource: Resource) -> List[Action]:
    color = resource.effective_color()
    if cell.color != color:
        return []
    if not player.has_item(ItemType.CUBE, color):
        return []
    return [hex_action(ActionSubType.DROP_CUBE, cell.coordinates, resource)]


def city_actions(state: GameState, player: Player, cell: HexCell, resource: Resource) -> List[Action]:
    color = resource.effective_color()
    if cell.color != color:
        return []
    if not player.validate_loadable(ItemType.STATUE, color, state.rules.item_capacity):
        return []
    quests = player.quests_of_type(QuestType.STATUE)
    if not any(quest.is_wild for quest in quests):
        return []
    if any(quest.color == color for quest in quests):
        return []
    city = state.overlay_at(Terrain.CITY, cell.coordinates)
    if city.statues < 1:
        return []
    return [hex_action(ActionSubType.LOAD_STATUE, cell.coordinates, resource)]


def statue_actions(state: GameState, player: Player, cell: HexCell, resource: Resource) -> List[Action]:
    color = resource.effective_color()
    if not player.has_item(ItemType.STATUE, color):
        return []
    statue = state.overlay_at(Terrain.STATUE, cell.coordinates)
    if color not in statue.empty_bases:
        return []
    return [hex_action(ActionSubType.DROP_STATUE, cell.coordinates, resource)]


def monster_actions(state: GameState, player: Player, cell: HexCell, resource: Resource) -> List[Action]:
    color = resource.effective_color()
    monsters = state.overlay_at(Terrain.MONSTERS, cell.coordinates)
    if color not in monsters.monster_colors:
        return []
    if not will_satisfy_quest(player.quests_of_type(QuestType.MONSTER), color):
        return []
    return [hex_action(ActionSubType.FIGHT_MONSTER, cell.coordinates, resource)]


HEX_RULES: Dict[Terrain, HexRule] = {
    Terrain.SHRINE: shrine_actions,
    Terrain.OFFERINGS: offering_actions,
    Terrain.TEMPLE: temple_actions,
    Terrain.CITY: city_actions,
    Terrain.STATUE: statue_actions,
    Terrain.MONSTERS: monster_actions,
}


def generate(state: GameState) -> List[Action]:
    player = state.current_player
    neighbors = state.grid.neighbor_cells(player.ship_position)
    actions: List[Action] = []
    for resource in player.resources_with_recoloring(state.rules.max_recolor):
        for cell in neighbors:
            rule = HEX_RULES.get(cell.terrain)
            if rule is not None:
                actions.extend(rule(state, player, cell, resource))
    return actions

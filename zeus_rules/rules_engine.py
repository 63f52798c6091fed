"""Game engine: the single entry point that validates and applies actions.

Callers list options with :func:`get_available_actions` and commit one with
:func:`do_action`. Every submission is checked against a freshly generated
legal set, so a stale list held by a client can never be replayed.
"""
from __future__ import annotations

import logging
import random
from copy import deepcopy
from typing import Callable, Dict, List, Optional, Tuple

from .action_gen.free import GOD_ACTIVATIONS
from .action_gen.resource import peekable_shrine_count
from .action_gen.schema import Action, ActionSubType, ActionType, end_turn as end_turn_action
from .action_gen.special import freeload_colors, freeloader
from .game_models import GameState, Player
from .map.coordinates import HexCoordinates
from .phases import acting_player, available_actions, is_idle
from .quests import claim_quest, complete_quest
from .resource import Resource
from .results import Result, RulesError, failure, success
from .types import COLOR_WHEEL, CoreColor, ItemType, Phase, QuestType, ShrineReward, ShrineStatus, Terrain

logger = logging.getLogger(__name__)

FAVOR_FOR_RESOURCE = 2
FAVOR_FOR_SHRINE = 4
FAVOR_FOR_TEMPLE = 3
CARDS_FOR_SHRINE = 2
PEEKS_PER_GRANT = 2
GOD_REWARD_ADVANCES = 3


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def get_available_actions(state: GameState) -> List[Action]:
    return available_actions(state)


def _normalize(action: Action) -> Action:
    # Any-resource actions pay with the resource itself; recoloring is moot.
    if action.type == ActionType.RESOURCE:
        return action.with_spend(action.spend.without_recoloring())
    return action


def _recolor_in_range(state: GameState, action: Action) -> bool:
    cost = action.spend.recolor_cost
    return 0 <= cost <= min(state.rules.max_recolor, acting_player(state).favor)


def is_action_legal(state: GameState, action: Action) -> bool:
    action = _normalize(action)
    return _recolor_in_range(state, action) and action in get_available_actions(state)


def check_win_condition(state: GameState) -> Optional[Player]:
    """First player, in seat order, who has completed every quest."""
    return next((player for player in state.players if player.is_finished()), None)


# ---------------------------------------------------------------------------
# Resource selection (caller-side declarations)
# ---------------------------------------------------------------------------

def select_resource(state: GameState, resource: Resource) -> Result:
    player = state.current_player
    if resource.is_none:
        state.selection.clear()
        return success("Selection cleared")
    if resource.without_recoloring() not in player.available_resources():
        return failure(f"{resource.without_recoloring()} is not available to select")
    state.selection.resource = resource.without_recoloring()
    state.selection.recoloring = 0
    return success(f"Selected {state.selection.resource}")


def declare_recoloring(state: GameState, favor: int) -> Result:
    """Record the favor the player intends to spend recoloring the selection."""

    player = state.current_player
    if state.selection.resource.is_none:
        return failure("Select a die or card before recoloring")
    if favor < 0:
        return failure("Recoloring cannot be negative")
    if favor > player.favor:
        return failure(f"Not enough favor to recolor by {favor} (have {player.favor})")
    if favor > state.rules.max_recolor:
        return failure(f"Cannot recolor by more than {state.rules.max_recolor}")
    state.selection.recoloring = favor
    return success(f"{state.selection.declared()} declared")


def _selection_conflict(state: GameState, action: Action) -> Optional[Result]:
    selection = state.selection
    if not selection.is_pending or action.spend.is_none:
        return None
    same_resource = action.spend == selection.resource
    if same_resource and (
        action.type == ActionType.RESOURCE or action.spend.recolor_cost == selection.recoloring
    ):
        return None
    return failure(
        f"Recoloring is pending for {selection.declared()}; "
        f"clear it before spending {action.spend}"
    )


# ---------------------------------------------------------------------------
# Spending
# ---------------------------------------------------------------------------

def spend_resource(player: Player, resource: Resource) -> Result:
    """Remove one instance of ``resource`` from its pool and pay its recoloring."""

    if resource.is_none:
        return success("Nothing to spend")
    pool = player.oracle_dice if resource.is_die else player.oracle_cards
    if resource.base_color not in pool:
        return failure(f"{player.name} holds no {resource.without_recoloring()}")
    if resource.recolor_cost > player.favor:
        return failure(f"Not enough favor to recolor {resource}")
    pool.remove(resource.base_color)
    if resource.is_card:
        player.used_oracle_card_this_turn = True
    player.favor -= resource.recolor_cost
    return success(f"Spent {resource}")


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------

Effect = Callable[[GameState, Action], Result]


def _activate_god(state: GameState, action: Action) -> Result:
    phase = GOD_ACTIVATIONS[action.god_color]
    state.queue_phase(phase)
    return success(f"Activated the {action.god_color.value} god")


def _gain_favor(state: GameState, action: Action) -> Result:
    player = state.current_player
    player.favor += FAVOR_FOR_RESOURCE
    return success(f"Gained {FAVOR_FOR_RESOURCE} favor")


def _gain_oracle_card(state: GameState, action: Action) -> Result:
    player = state.current_player
    card = state.draw_oracle_card()
    if card is None:
        raise RulesError("oracle deck emptied between validation and draw")
    player.oracle_cards.append(card)
    return success(f"Drew a {card.value} oracle card")


def _gain_two_peeks(state: GameState, action: Action) -> Result:
    player = state.current_player
    grants = min(PEEKS_PER_GRANT, peekable_shrine_count(state, player))
    for _ in range(grants):
        state.queue_phase(Phase.PEEKING)
    return success(f"Gained {grants} peek(s)")


def _advance_god(state: GameState, action: Action) -> Result:
    player = state.current_player
    player.advance_god(action.god_color, state.rules.max_god_level)
    return success(f"Advanced the {action.god_color.value} god to {player.god_level(action.god_color)}")


def _freeload(state: GameState, action: Action) -> Result:
    player = freeloader(state)
    if player is None or action.god_color not in freeload_colors(state, player):
        raise RulesError("freeload applied with no matching opportunity")
    player.advance_god(action.god_color, state.rules.max_god_level)
    player.freeload_opportunities = []
    return success(f"{player.name} freeloaded on {action.god_color.value}")


def _explore_shrine(state: GameState, action: Action) -> Result:
    player = state.current_player
    shrine = state.overlay_at(Terrain.SHRINE, action.coordinates)
    if state.phase == Phase.EXPLORING:
        player.reset_god(CoreColor.GREEN)

    if shrine.owner == player.color:
        quest = complete_quest(player, QuestType.SHRINE)
        if quest is None:
            raise RulesError(f"{player.name} explored an own shrine with no open shrine quest")
        shrine.status = ShrineStatus.FILLED
        state.queue_phase(Phase.ADVANCING_GOD)
        return success("Shrine quest completed; advance a god")

    shrine.status = ShrineStatus.VISIBLE
    if shrine.reward == ShrineReward.FAVOR:
        player.favor += FAVOR_FOR_SHRINE
        return success(f"Shrine flipped; gained {FAVOR_FOR_SHRINE} favor")
    if shrine.reward == ShrineReward.CARD:
        drawn = []
        for _ in range(CARDS_FOR_SHRINE):
            card = state.draw_oracle_card()
            if card is None:
                break
            player.oracle_cards.append(card)
            drawn.append(card.value)
        if not drawn:
            return success("Shrine flipped; the oracle deck is empty")
        return success(f"Shrine flipped; drew {', '.join(drawn)}")
    if shrine.reward == ShrineReward.SHIELD:
        player.shield += 1
        return success("Shrine flipped; gained a shield")
    for _ in range(GOD_REWARD_ADVANCES):
        state.queue_phase(Phase.ADVANCING_GOD)
    return success(f"Shrine flipped; advance gods {GOD_REWARD_ADVANCES} times")


def _peek_shrine(state: GameState, action: Action) -> Result:
    player = state.current_player
    shrine = state.overlay_at(Terrain.SHRINE, action.coordinates)
    player.peeked_shrines.append(action.coordinates)
    return success(
        f"Shrine at {action.coordinates} belongs to {shrine.owner.value} "
        f"and grants {shrine.reward.value}"
    )


def _load_cube(state: GameState, action: Action) -> Result:
    player = state.current_player
    color = action.spend.effective_color()
    offering = state.overlay_at(Terrain.OFFERINGS, action.coordinates)
    loaded = player.load_item(ItemType.CUBE, color, state.rules.item_capacity)
    if not loaded:
        return loaded
    offering.cube_colors.remove(color)
    claim_quest(player, QuestType.TEMPLE, color)
    return success(f"Loaded a {color.value} offering")


def _drop_cube(state: GameState, action: Action) -> Result:
    player = state.current_player
    color = action.spend.effective_color()
    if not player.unload_item(ItemType.CUBE, color):
        raise RulesError(f"no {color.value} cube aboard to drop")
    complete_quest(player, QuestType.TEMPLE, color)
    player.favor += FAVOR_FOR_TEMPLE
    return success(f"Delivered a {color.value} offering; gained {FAVOR_FOR_TEMPLE} favor")


def _load_statue(state: GameState, action: Action) -> Result:
    player = state.current_player
    color = action.spend.effective_color()
    city = state.overlay_at(Terrain.CITY, action.coordinates)
    loaded = player.load_item(ItemType.STATUE, color, state.rules.item_capacity)
    if not loaded:
        return loaded
    city.statues -= 1
    claim_quest(player, QuestType.STATUE, color)
    return success(f"Loaded a {color.value} statue")


def _drop_statue(state: GameState, action: Action) -> Result:
    player = state.current_player
    color = action.spend.effective_color()
    statue = state.overlay_at(Terrain.STATUE, action.coordinates)
    if not player.unload_item(ItemType.STATUE, color):
        raise RulesError(f"no {color.value} statue aboard to raise")
    statue.empty_bases.remove(color)
    statue.raised_statues.append(color)
    complete_quest(player, QuestType.STATUE, color)
    return success(f"Raised a {color.value} statue")


def _fight_monster(state: GameState, action: Action) -> Result:
    player = state.current_player
    color = action.spend.effective_color()
    monsters = state.overlay_at(Terrain.MONSTERS, action.coordinates)
    monsters.monster_colors.remove(color)
    complete_quest(player, QuestType.MONSTER, color)
    return success(f"Defeated the {color.value} monster")


def _move_ship(state: GameState, action: Action) -> Result:
    player = state.current_player
    player.ship_position = action.destination
    player.favor -= action.favor_to_extend_range
    if state.phase == Phase.TELEPORTING:
        player.reset_god(CoreColor.BLUE)
        return success(f"Teleported to {action.destination}")
    return success(f"Sailed to {action.destination}")


EFFECTS: Dict[Tuple[ActionType, ActionSubType], Effect] = {
    (ActionType.FREE, ActionSubType.ACTIVATE_GOD): _activate_god,
    (ActionType.RESOURCE, ActionSubType.GAIN_FAVOR): _gain_favor,
    (ActionType.RESOURCE, ActionSubType.GAIN_ORACLE_CARD): _gain_oracle_card,
    (ActionType.RESOURCE, ActionSubType.GAIN_TWO_PEEKS): _gain_two_peeks,
    (ActionType.ADVANCE, ActionSubType.ADVANCE_GOD): _advance_god,
    (ActionType.FREELOAD, ActionSubType.ADVANCE_GOD): _freeload,
    (ActionType.HEX, ActionSubType.EXPLORE_SHRINE): _explore_shrine,
    (ActionType.HEX, ActionSubType.PEEK_SHRINE): _peek_shrine,
    (ActionType.HEX, ActionSubType.LOAD_CUBE): _load_cube,
    (ActionType.HEX, ActionSubType.DROP_CUBE): _drop_cube,
    (ActionType.HEX, ActionSubType.LOAD_STATUE): _load_statue,
    (ActionType.HEX, ActionSubType.DROP_STATUE): _drop_statue,
    (ActionType.HEX, ActionSubType.FIGHT_MONSTER): _fight_monster,
    (ActionType.MOVE, ActionSubType.MOVE_SHIP): _move_ship,
}


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

def do_action(state: GameState, action: Action, rng: Optional[random.Random] = None) -> Result:
    """Validate ``action`` against the current legal set and apply it."""

    action = _normalize(action)
    if not _recolor_in_range(state, action):
        return failure(f"Action not available: {action.describe()} (recolor cost out of range)")
    conflict = _selection_conflict(state, action)
    if conflict is not None:
        return conflict
    legal = get_available_actions(state)
    if action not in legal:
        return failure(f"Action not available: {action.describe()}")
    # Apply the generated action, never the submitted copy.
    action = legal[legal.index(action)]

    if action.sub_type == ActionSubType.END_TURN:
        return _end_turn(state, rng)

    effect = EFFECTS.get((action.type, action.sub_type))
    if effect is None:
        raise RulesError(f"no effect registered for {action.describe()}")

    player = acting_player(state)
    if action.spend.recolor_cost + action.favor_to_extend_range > player.favor:
        raise RulesError(f"generated action {action.describe()} costs more favor than {player.name} holds")
    result = effect(state, action)
    if not result.success:
        return result
    spent = spend_resource(player, action.spend)
    if not spent.success:
        raise RulesError(f"validated spend failed: {spent.message}")
    if not action.spend.is_none:
        state.selection.clear()

    logger.debug("%s applied %s: %s", player.name, action.describe(), result.message)
    _advance_phase(state)
    return result


def _advance_phase(state: GameState) -> None:
    previous = state.phase
    state.end_phase()
    while is_idle(state):
        logger.debug("skipping idle phase %s", state.phase.value)
        state.end_phase()
    if state.phase != previous:
        logger.debug("phase %s -> %s", previous.value, state.phase.value)


def roll_dice(rng: Optional[random.Random], count: int) -> List[CoreColor]:
    rng = rng or random.Random()
    return [rng.choice(COLOR_WHEEL) for _ in range(count)]


def end_turn(state: GameState, rng: Optional[random.Random] = None) -> Result:
    """End the current player's turn; only legal once all dice are used."""
    return do_action(state, end_turn_action(), rng)


def _end_turn(state: GameState, rng: Optional[random.Random]) -> Result:
    finished = state.current_player
    finished.used_oracle_card_this_turn = False
    state.selection.clear()

    state.current_player_index = (state.current_player_index + 1) % state.player_count
    if state.current_player_index == 0:
        state.round += 1
    state.reset_phases(Phase.MAIN)

    current = state.current_player
    current.oracle_dice = roll_dice(rng, state.rules.dice_per_turn)
    current.used_oracle_card_this_turn = False
    logger.debug("%s rolled %s", current.name, [c.value for c in current.oracle_dice])

    _offer_freeloads(state, current.oracle_dice)
    if state.phase_queue:
        _advance_phase(state)
    return success(f"{finished.name}'s turn ended; {current.name} to play (round {state.round})")


def _offer_freeloads(state: GameState, rolled: List[CoreColor]) -> None:
    max_level = state.rules.max_god_level
    for player in state.players:
        if player is state.current_player:
            player.freeload_opportunities = []
            continue
        player.freeload_opportunities = [
            color for color in rolled if 0 < player.god_level(color) < max_level
        ]
        if player.freeload_opportunities:
            state.queue_phase(Phase.FREELOADING)


def apply_action(
    state: GameState,
    action: Action,
    rng: Optional[random.Random] = None,
) -> Tuple[GameState, Result]:
    """Pure variant of :func:`do_action`: copies ``state`` before applying."""

    new_state = deepcopy(state)
    return new_state, do_action(new_state, action, rng)


def move_to(state: GameState, destination: HexCoordinates) -> List[Action]:
    """Legal ship moves to ``destination`` in the active phase."""
    return [
        action for action in get_available_actions(state)
        if action.type == ActionType.MOVE and action.destination == destination
    ]


__all__ = [
    "get_available_actions",
    "is_action_legal",
    "check_win_condition",
    "select_resource",
    "declare_recoloring",
    "spend_resource",
    "do_action",
    "end_turn",
    "roll_dice",
    "apply_action",
    "move_to",
]

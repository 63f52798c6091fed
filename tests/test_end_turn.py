"""Turn hand-over: dice, round counter and freeloading."""

import random

import pytest

from zeus_rules.action_gen.schema import ActionSubType, advance_god, end_turn as end_turn_action, freeload
from zeus_rules.phases import acting_player, available_actions
from zeus_rules.resource import Resource
from zeus_rules.rules_engine import do_action, end_turn, select_resource
from zeus_rules.types import COLOR_WHEEL, CoreColor, Phase


@pytest.fixture
def turn_rng():
    return random.Random(99)


def test_end_turn_refused_while_holding_dice(make_state, turn_rng):
    state = make_state(dice=[CoreColor.RED])
    result = end_turn(state, turn_rng)
    assert not result.success
    assert "not available" in result.message
    assert state.current_player_index == 0


def test_next_player_gets_fresh_dice(make_state, turn_rng):
    state = make_state()
    assert end_turn(state, turn_rng).success
    assert state.current_player_index == 1
    assert state.round == 1
    dice = state.current_player.oracle_dice
    assert len(dice) == 3
    assert all(color in COLOR_WHEEL for color in dice)


def test_round_advances_on_wrap(make_state, turn_rng):
    state = make_state()
    end_turn(state, turn_rng)
    state.current_player.oracle_dice.clear()
    assert end_turn(state, turn_rng).success
    assert state.current_player_index == 0
    assert state.round == 2


def test_turn_flags_and_selection_are_cleared(make_state, turn_rng):
    state = make_state(cards=[CoreColor.PINK], favor=2)
    player = state.current_player
    select_resource(state, Resource.card(CoreColor.PINK))
    state.selection.recoloring = 1
    player.used_oracle_card_this_turn = True
    assert end_turn(state, turn_rng).success
    assert not player.used_oracle_card_this_turn
    assert state.selection.resource.is_none
    assert state.selection.recoloring == 0


def test_queued_rewards_must_be_taken_before_ending(make_state, turn_rng):
    state = make_state()
    state.phase = Phase.ADVANCING_GOD
    state.queue_phase(Phase.ADVANCING_GOD)
    state.queue_phase(Phase.ADVANCING_GOD)
    actions = available_actions(state)
    assert end_turn_action() not in actions
    assert {a.sub_type for a in actions} == {ActionSubType.ADVANCE_GOD}

    refused = end_turn(state, turn_rng)
    assert not refused.success
    assert state.current_player_index == 0
    assert len(state.phase_queue) == 2

    for color in (CoreColor.RED, CoreColor.BLUE, CoreColor.PINK):
        assert do_action(state, advance_god(color)).success
    assert state.phase == Phase.MAIN
    assert end_turn_action() in available_actions(state)
    assert end_turn(state, turn_rng).success


class TestFreeloading:

    def test_partly_advanced_gods_earn_a_reaction(self, make_state, turn_rng):
        state = make_state()
        waiting = state.players[0]
        for color in COLOR_WHEEL:
            waiting.god(color).level = 1

        assert end_turn(state, turn_rng).success
        rolled = state.current_player.oracle_dice
        assert waiting.freeload_opportunities == rolled
        assert state.phase == Phase.FREELOADING
        assert acting_player(state) is waiting

        actions = available_actions(state)
        assert actions[0] == freeload(rolled[0])
        assert do_action(state, actions[0]).success
        assert waiting.god_level(rolled[0]) == 2
        assert waiting.freeload_opportunities == []
        assert state.phase == Phase.MAIN
        assert state.current_player.oracle_dice == rolled

    def test_unstarted_and_maxed_gods_do_not_react(self, make_state, turn_rng):
        state = make_state()
        waiting = state.players[0]
        for color in COLOR_WHEEL:
            waiting.god(color).level = state.rules.max_god_level
        waiting.god(CoreColor.BLACK).level = 0

        end_turn(state, turn_rng)
        assert waiting.freeload_opportunities == []
        assert state.phase == Phase.MAIN

    def test_one_reaction_phase_per_player(self, make_state, turn_rng):
        state = make_state(player_count=3)
        for player in (state.players[0], state.players[2]):
            for color in COLOR_WHEEL:
                player.god(color).level = 1

        end_turn(state, turn_rng)
        assert state.phase == Phase.FREELOADING
        assert list(state.phase_queue) == [Phase.FREELOADING]
        # Turn order after the new current player (index 1): player 3 first.
        assert acting_player(state) is state.players[2]

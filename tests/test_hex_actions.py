"""Hex actions around a ship surrounded by one of each land site."""

from __future__ import annotations

import pytest

from zeus_rules.action_gen import hexes
from zeus_rules.action_gen.schema import ActionSubType, hex_action
from zeus_rules.game_models import CityHex, CubeHex, Item, MonsterHex, ShrineHex, StatueHex
from zeus_rules.game_setup import create_quests
from zeus_rules.map.coordinates import HexCoordinates
from zeus_rules.map.layout import paint
from zeus_rules.resource import Resource
from zeus_rules.rules_engine import do_action
from zeus_rules.types import (
    NONE_COLOR,
    CoreColor,
    ItemType,
    Phase,
    QuestType,
    ShrineReward,
    ShrineStatus,
    Terrain,
)

SHRINE = HexCoordinates(1, -1)
OFFERING = HexCoordinates(1, 0)
TEMPLE = HexCoordinates(0, 1)
CITY = HexCoordinates(-1, 1)
STATUE = HexCoordinates(-1, 0)
MONSTERS = HexCoordinates(0, -1)


@pytest.fixture
def board(make_state):
    def build(**kwargs):
        state = make_state(**kwargs)
        paint(state.grid, [
            (SHRINE, Terrain.SHRINE, CoreColor.RED),
            (OFFERING, Terrain.OFFERINGS, NONE_COLOR),
            (TEMPLE, Terrain.TEMPLE, CoreColor.RED),
            (CITY, Terrain.CITY, CoreColor.PINK),
            (STATUE, Terrain.STATUE, NONE_COLOR),
            (MONSTERS, Terrain.MONSTERS, NONE_COLOR),
        ])
        state.add_overlay(ShrineHex(SHRINE, CoreColor.BLUE, ShrineReward.FAVOR))
        state.add_overlay(CubeHex(OFFERING, [CoreColor.RED, CoreColor.BLUE]))
        state.add_overlay(CityHex(CITY))
        state.add_overlay(StatueHex(STATUE, [CoreColor.PINK, CoreColor.RED]))
        state.add_overlay(MonsterHex(MONSTERS, [CoreColor.BLACK, CoreColor.YELLOW]))
        state.current_player.quests = create_quests(
            [CoreColor.RED, CoreColor.BLUE, NONE_COLOR],
            [CoreColor.BLACK, CoreColor.PINK, NONE_COLOR],
        )
        return state
    return build


def _of(state, sub_type):
    return [a for a in hexes.generate(state) if a.sub_type == sub_type]


class TestShrine:

    def test_matching_color_explores(self, board):
        state = board(dice=[CoreColor.RED])
        assert _of(state, ActionSubType.EXPLORE_SHRINE) == [
            hex_action(ActionSubType.EXPLORE_SHRINE, SHRINE, Resource.die(CoreColor.RED))
        ]

    def test_wrong_color_does_not(self, board):
        state = board(dice=[CoreColor.BLUE])
        assert _of(state, ActionSubType.EXPLORE_SHRINE) == []

    def test_visible_foreign_shrine_is_closed(self, board):
        state = board(dice=[CoreColor.RED])
        state.shrine_hexes[SHRINE].status = ShrineStatus.VISIBLE
        assert _of(state, ActionSubType.EXPLORE_SHRINE) == []

    def test_favor_reward(self, board):
        state = board(dice=[CoreColor.RED])
        (action,) = _of(state, ActionSubType.EXPLORE_SHRINE)
        result = do_action(state, action)
        assert result.success
        player = state.current_player
        assert player.favor == 4
        assert player.oracle_dice == []
        assert state.shrine_hexes[SHRINE].status == ShrineStatus.VISIBLE
        assert state.phase == Phase.MAIN

    def test_card_reward_draws_two(self, board):
        state = board(dice=[CoreColor.RED])
        state.shrine_hexes[SHRINE].reward = ShrineReward.CARD
        state.oracle_deck = [CoreColor.BLACK, CoreColor.PINK, CoreColor.BLUE]
        (action,) = _of(state, ActionSubType.EXPLORE_SHRINE)
        assert do_action(state, action).success
        assert state.current_player.oracle_cards == [CoreColor.BLUE, CoreColor.PINK]
        assert state.oracle_deck == [CoreColor.BLACK]

    def test_shield_reward(self, board):
        state = board(dice=[CoreColor.RED])
        state.shrine_hexes[SHRINE].reward = ShrineReward.SHIELD
        (action,) = _of(state, ActionSubType.EXPLORE_SHRINE)
        do_action(state, action)
        assert state.current_player.shield == 1

    def test_god_reward_queues_three_advances(self, board):
        state = board(dice=[CoreColor.RED])
        state.shrine_hexes[SHRINE].reward = ShrineReward.GOD
        (action,) = _of(state, ActionSubType.EXPLORE_SHRINE)
        do_action(state, action)
        assert state.phase == Phase.ADVANCING_GOD
        assert list(state.phase_queue) == [Phase.ADVANCING_GOD, Phase.ADVANCING_GOD]

    def test_own_shrine_completes_quest(self, board):
        state = board(dice=[CoreColor.RED])
        shrine = state.shrine_hexes[SHRINE]
        shrine.owner = state.current_player.color
        (action,) = _of(state, ActionSubType.EXPLORE_SHRINE)
        assert do_action(state, action).success
        done = [q for q in state.current_player.quests_of_type(QuestType.SHRINE) if q.completed]
        assert len(done) == 1
        assert shrine.status == ShrineStatus.FILLED
        assert state.phase == Phase.ADVANCING_GOD

    def test_filled_or_quests_done_closes_own_shrine(self, board):
        state = board(dice=[CoreColor.RED])
        shrine = state.shrine_hexes[SHRINE]
        shrine.owner = state.current_player.color
        for quest in state.current_player.quests_of_type(QuestType.SHRINE):
            quest.completed = True
        assert _of(state, ActionSubType.EXPLORE_SHRINE) == []


class TestOffering:

    def test_load_matching_cube(self, board):
        state = board(dice=[CoreColor.RED])
        (action,) = _of(state, ActionSubType.LOAD_CUBE)
        assert do_action(state, action).success
        assert state.current_player.items == [Item(ItemType.CUBE, CoreColor.RED)]
        assert state.cube_hexes[OFFERING].cube_colors == [CoreColor.BLUE]

    def test_absent_cube_color(self, board):
        state = board(dice=[CoreColor.YELLOW])
        assert _of(state, ActionSubType.LOAD_CUBE) == []

    def test_full_cargo(self, board):
        state = board(dice=[CoreColor.RED])
        state.current_player.items = [
            Item(ItemType.STATUE, CoreColor.BLACK),
            Item(ItemType.STATUE, CoreColor.GREEN),
        ]
        assert _of(state, ActionSubType.LOAD_CUBE) == []

    def test_duplicate_cube(self, board):
        state = board(dice=[CoreColor.RED])
        state.current_player.items = [Item(ItemType.CUBE, CoreColor.RED)]
        assert _of(state, ActionSubType.LOAD_CUBE) == []

    def test_completed_color_not_retaken_by_wildcard(self, board):
        state = board(dice=[CoreColor.RED])
        temple_quests = state.current_player.quests_of_type(QuestType.TEMPLE)
        next(q for q in temple_quests if q.color == CoreColor.RED).completed = True
        assert _of(state, ActionSubType.LOAD_CUBE) == []


class TestTemple:

    def test_drop_cube(self, board):
        state = board(dice=[CoreColor.RED])
        player = state.current_player
        player.items = [Item(ItemType.CUBE, CoreColor.RED)]
        (action,) = _of(state, ActionSubType.DROP_CUBE)
        assert do_action(state, action).success
        assert player.items == []
        assert player.favor == 3
        red = next(q for q in player.quests_of_type(QuestType.TEMPLE) if q.color == CoreColor.RED)
        assert red.completed

    def test_nothing_to_drop(self, board):
        state = board(dice=[CoreColor.RED])
        assert _of(state, ActionSubType.DROP_CUBE) == []


class TestCityAndStatue:

    def test_load_statue_claims_a_wildcard(self, board):
        state = board(dice=[CoreColor.PINK])
        (action,) = _of(state, ActionSubType.LOAD_STATUE)
        assert do_action(state, action).success
        player = state.current_player
        assert state.city_hexes[CITY].statues == 2
        assert player.has_item(ItemType.STATUE, CoreColor.PINK)
        colors = [q.color for q in player.quests_of_type(QuestType.STATUE)]
        assert colors.count(CoreColor.PINK) == 1

    def test_recolored_die_can_pay(self, board):
        state = board(dice=[CoreColor.RED], favor=2)
        (action,) = _of(state, ActionSubType.LOAD_STATUE)
        assert action.spend.recolor_cost == 2
        assert action.spend.effective_color() == CoreColor.PINK
        assert do_action(state, action).success
        assert state.current_player.favor == 0

    def test_color_already_claimed(self, board):
        state = board(dice=[CoreColor.PINK])
        state.current_player.quests_of_type(QuestType.STATUE)[0].color = CoreColor.PINK
        assert _of(state, ActionSubType.LOAD_STATUE) == []

    def test_empty_city(self, board):
        state = board(dice=[CoreColor.PINK])
        state.city_hexes[CITY].statues = 0
        assert _of(state, ActionSubType.LOAD_STATUE) == []

    def test_raise_statue(self, board):
        state = board(dice=[CoreColor.PINK])
        player = state.current_player
        player.items = [Item(ItemType.STATUE, CoreColor.PINK)]
        player.quests_of_type(QuestType.STATUE)[0].color = CoreColor.PINK
        (action,) = _of(state, ActionSubType.DROP_STATUE)
        assert do_action(state, action).success
        statue = state.statue_hexes[STATUE]
        assert statue.empty_bases == [CoreColor.RED]
        assert statue.raised_statues == [CoreColor.PINK]
        assert player.quests_of_type(QuestType.STATUE)[0].completed
        assert player.items == []

    def test_no_free_base(self, board):
        state = board(dice=[CoreColor.BLUE])
        state.current_player.items = [Item(ItemType.STATUE, CoreColor.BLUE)]
        assert _of(state, ActionSubType.DROP_STATUE) == []


class TestMonsters:

    def test_fight_exact_quest(self, board):
        state = board(dice=[CoreColor.BLACK, CoreColor.BLACK])
        (action,) = _of(state, ActionSubType.FIGHT_MONSTER)
        assert do_action(state, action).success
        assert state.monster_hexes[MONSTERS].monster_colors == [CoreColor.YELLOW]
        black = state.current_player.quests_of_type(QuestType.MONSTER)[0]
        assert black.color == CoreColor.BLACK and black.completed
        assert _of(state, ActionSubType.FIGHT_MONSTER) == []

    def test_wildcard_takes_unnamed_color(self, board):
        state = board(dice=[CoreColor.YELLOW])
        (action,) = _of(state, ActionSubType.FIGHT_MONSTER)
        do_action(state, action)
        wild = state.current_player.quests_of_type(QuestType.MONSTER)[2]
        assert wild.color == CoreColor.YELLOW and wild.completed

    def test_absent_monster(self, board):
        state = board(dice=[CoreColor.RED])
        assert _of(state, ActionSubType.FIGHT_MONSTER) == []

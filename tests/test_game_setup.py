"""New-game setup: players, quests, overlays and the oracle deck."""

import random
from collections import Counter

import pytest

from zeus_rules.config import RulesConfig
from zeus_rules.game_setup import SetupError, new_game
from zeus_rules.map.coordinates import HexCoordinates
from zeus_rules.map.grid import HexGrid
from zeus_rules.map.layout import build_map
from zeus_rules.results import RulesError
from zeus_rules.types import (
    COLOR_WHEEL,
    NONE_COLOR,
    PLAYER_COLORS,
    QUEST_COLOR_POOL,
    Phase,
    QuestType,
    ShrineStatus,
    Terrain,
)

ZEUS = HexCoordinates(0, 0)


class TestPlayers:

    def test_seats_and_starting_favor(self, game):
        assert game.phase == Phase.MAIN
        assert game.current_player_index == 0
        assert game.round == 1
        for i, player in enumerate(game.players):
            assert player.name == f"Player {i + 1}"
            assert player.color == PLAYER_COLORS[i]
            assert player.favor == 3 + i
            assert player.ship_position == ZEUS
            assert len(player.oracle_dice) == 3

    def test_quest_mix(self, game):
        for player in game.players:
            counts = Counter(q.type for q in player.quests)
            assert counts == {t: 3 for t in QuestType}
            for quest_type in (QuestType.SHRINE, QuestType.STATUE):
                assert all(q.is_wild for q in player.quests_of_type(quest_type))

    def test_fixed_quest_colors_are_shared_and_distinct(self, game):
        first, second = game.players
        temple = [q.color for q in first.quests_of_type(QuestType.TEMPLE)]
        monster = [q.color for q in first.quests_of_type(QuestType.MONSTER)]
        assert temple == [q.color for q in second.quests_of_type(QuestType.TEMPLE)]
        assert temple[2] == NONE_COLOR and monster[2] == NONE_COLOR
        fixed = temple[:2] + monster[:2]
        assert sorted(fixed) == sorted(QUEST_COLOR_POOL)

    def test_player_count_from_rules(self):
        state = new_game(rules=RulesConfig(player_count=4), rng=random.Random(5))
        assert [p.color for p in state.players] == list(PLAYER_COLORS)
        for record in state.monster_hexes.values():
            assert len(set(record.monster_colors)) == len(record.monster_colors)
        for record in state.cube_hexes.values():
            assert len(set(record.cube_colors)) == 4

    def test_too_many_players(self):
        with pytest.raises(SetupError):
            new_game(rules=RulesConfig(player_count=5), rng=random.Random(5))


class TestOverlays:

    def test_every_site_has_a_record(self, game):
        assert len(game.cube_hexes) == 6
        assert len(game.monster_hexes) == 9
        assert len(game.city_hexes) == 6
        assert len(game.statue_hexes) == 6
        assert len(game.shrine_hexes) == 12
        for coord in game.cube_hexes:
            assert game.grid.cell_at(coord).terrain == Terrain.OFFERINGS

    def test_cubes_spread_evenly(self, game):
        colors = Counter()
        for record in game.cube_hexes.values():
            assert len(record.cube_colors) == 2
            assert len(set(record.cube_colors)) == 2
            colors.update(record.cube_colors)
        assert colors == {color: 2 for color in COLOR_WHEEL}

    def test_monsters_never_repeat_on_a_hex(self, game):
        total = Counter()
        for record in game.monster_hexes.values():
            assert len(set(record.monster_colors)) == len(record.monster_colors)
            total.update(record.monster_colors)
        assert total == {color: 2 for color in COLOR_WHEEL}

    def test_cities_and_statue_bases(self, game):
        assert all(city.statues == 3 for city in game.city_hexes.values())
        bases = Counter()
        for record in game.statue_hexes.values():
            assert len(record.empty_bases) == 3
            assert record.raised_statues == []
            bases.update(record.empty_bases)
        assert bases == {color: 3 for color in COLOR_WHEEL}

    def test_shrines_three_per_color_with_distinct_rewards(self, game):
        by_owner = {}
        for shrine in game.shrine_hexes.values():
            assert shrine.status == ShrineStatus.HIDDEN
            by_owner.setdefault(shrine.owner, []).append(shrine.reward)
        assert set(by_owner) == set(PLAYER_COLORS)
        for rewards in by_owner.values():
            assert len(rewards) == 3
            assert len(set(rewards)) == 3

    def test_oracle_deck(self, game):
        assert Counter(game.oracle_deck) == {color: 5 for color in COLOR_WHEEL}


class TestDeterminism:

    def test_same_seed_same_game(self):
        a = new_game(rng=random.Random(42))
        b = new_game(rng=random.Random(42))
        assert a.to_dict() == b.to_dict()

    def test_different_seed_different_game(self):
        a = new_game(rng=random.Random(1))
        b = new_game(rng=random.Random(2))
        assert a.to_dict() != b.to_dict()


class TestBrokenMaps:

    def test_missing_zeus(self):
        with pytest.raises(SetupError):
            new_game(grid=HexGrid(3), rng=random.Random(0))

    def test_wrong_monster_count(self):
        grid = HexGrid(3)
        grid.cell_at(ZEUS).terrain = Terrain.ZEUS
        with pytest.raises(SetupError):
            new_game(grid=grid, rng=random.Random(0))

    def test_missing_shrines(self):
        rng = random.Random(3)
        grid = build_map(rng)
        for cell in list(grid.cells_of_terrain(Terrain.SHRINE))[:2]:
            cell.terrain = Terrain.SEA
        with pytest.raises(SetupError):
            new_game(grid=grid, rng=rng)

    def test_extra_site_without_record(self):
        rng = random.Random(3)
        grid = build_map(rng)
        grid.cell_at(HexCoordinates(1, 0)).terrain = Terrain.SHRINE
        with pytest.raises(RulesError):
            new_game(grid=grid, rng=rng)

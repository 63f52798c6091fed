"""Shared builders for hand-made boards and seeded games."""

from __future__ import annotations

import random
from typing import Iterable, Optional

import pytest

from zeus_rules.config import RulesConfig
from zeus_rules.game_models import GameState, Player
from zeus_rules.game_setup import new_game
from zeus_rules.map.coordinates import HexCoordinates
from zeus_rules.map.grid import HexGrid
from zeus_rules.types import PLAYER_COLORS, CoreColor, Phase

ORIGIN = HexCoordinates(0, 0)


def build_state(
    grid: Optional[HexGrid] = None,
    *,
    player_count: int = 2,
    dice: Iterable[CoreColor] = (),
    cards: Iterable[CoreColor] = (),
    favor: int = 0,
    position: HexCoordinates = ORIGIN,
    rules: Optional[RulesConfig] = None,
) -> GameState:
    """Main-phase state on an open colorless sea; player 0 is to move."""
    grid = grid if grid is not None else HexGrid(4)
    players = [
        Player(id=i, name=f"Player {i + 1}", color=PLAYER_COLORS[i], ship_position=position)
        for i in range(player_count)
    ]
    first = players[0]
    first.oracle_dice = list(dice)
    first.oracle_cards = list(cards)
    first.favor = favor
    return GameState(grid=grid, players=players, phase=Phase.MAIN, rules=rules or RulesConfig())


@pytest.fixture
def make_state():
    return build_state


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def game(rng):
    return new_game(rng=rng)

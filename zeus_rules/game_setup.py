"""Game setup: players, quests, starting dice, overlay records and the oracle deck."""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from .config import RulesConfig
from .game_models import (
    OVERLAY_TERRAINS,
    CityHex,
    CubeHex,
    GameState,
    MonsterHex,
    Player,
    Quest,
    ShrineHex,
    StatueHex,
)
from .map.grid import HexCell, HexGrid
from .map.layout import build_map
from .results import RulesError
from .rules_engine import roll_dice
from .types import (
    COLOR_WHEEL,
    NONE_COLOR,
    PLAYER_COLORS,
    QUEST_COLOR_POOL,
    CoreColor,
    QuestType,
    SHRINE_REWARDS,
    Terrain,
)

logger = logging.getLogger(__name__)

OFFERING_HEXES = 6
MONSTER_HEXES = 9
CITY_HEXES = 6
STATUE_HEXES = 6
SHRINES_PER_COLOR = 3
QUESTS_PER_TYPE = 3
STATUES_PER_HEX = 3


class SetupError(RulesError):
    """Raised when the map cannot support a standard game."""


def find_zeus(grid: HexGrid) -> HexCell:
    zeus = next(grid.cells_of_terrain(Terrain.ZEUS), None)
    if zeus is None:
        raise SetupError("Zeus not found in map")
    return zeus


def new_game(
    grid: Optional[HexGrid] = None,
    rules: Optional[RulesConfig] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Build a ready-to-play game on ``grid`` (a fresh layout when omitted)."""

    rules = rules or RulesConfig()
    rng = rng or random.Random()
    if not 1 <= rules.player_count <= len(PLAYER_COLORS):
        raise SetupError(f"player_count must be 1..{len(PLAYER_COLORS)}, got {rules.player_count}")
    grid = grid or build_map(rng, rules.map_radius)

    state = GameState(grid=grid, rules=rules)
    zeus = find_zeus(grid)
    state.players = initialize_players(zeus, rules, rng)

    for record in initialize_offerings(grid, rules.player_count, rng):
        state.add_overlay(record)
    for record in initialize_monsters(grid, rules.player_count, rng):
        state.add_overlay(record)
    for record in initialize_cities(grid):
        state.add_overlay(record)
    for record in initialize_statues(grid, rng):
        state.add_overlay(record)
    for record in initialize_shrines(grid, rng):
        state.add_overlay(record)
    verify_overlays(state)

    state.oracle_deck = build_oracle_deck(rules.cards_per_color, rng)
    state.end_phase()
    logger.debug("new game: %d players, %d cells", len(state.players), len(grid))
    return state


def initialize_players(zeus: HexCell, rules: RulesConfig, rng: random.Random) -> List[Player]:
    pool = list(QUEST_COLOR_POOL)
    rng.shuffle(pool)
    temple_colors = pool[:2] + [NONE_COLOR]
    monster_colors = pool[2:4] + [NONE_COLOR]

    players: List[Player] = []
    for i in range(rules.player_count):
        player = Player(
            id=i,
            name=f"Player {i + 1}",
            color=PLAYER_COLORS[i],
            ship_position=zeus.coordinates,
            favor=rules.starting_favor + i,
        )
        player.quests = create_quests(temple_colors, monster_colors)
        player.oracle_dice = roll_dice(rng, rules.dice_per_turn)
        players.append(player)
    return players


def create_quests(temple_colors: Sequence[object], monster_colors: Sequence[object]) -> List[Quest]:
    quests: List[Quest] = []
    for i in range(QUESTS_PER_TYPE):
        quests.append(Quest(QuestType.SHRINE))
        quests.append(Quest(QuestType.STATUE))
        quests.append(Quest(QuestType.TEMPLE, temple_colors[i]))
        quests.append(Quest(QuestType.MONSTER, monster_colors[i]))
    return quests


def _cells(grid: HexGrid, terrain: Terrain, expected: int) -> List[HexCell]:
    cells = list(grid.cells_of_terrain(terrain))
    if len(cells) != expected:
        logger.warning("expected %d %s hexes but found %d", expected, terrain.value, len(cells))
    return cells


def initialize_offerings(grid: HexGrid, player_count: int, rng: random.Random) -> List[CubeHex]:
    """Each offering hex gets ``player_count`` distinct cube colors.

    Rows of a Latin square (successive rotations of one shuffled wheel) keep
    every color on at most one slot per hex and spread colors evenly.
    """
    cells = _cells(grid, Terrain.OFFERINGS, OFFERING_HEXES)
    row = list(COLOR_WHEEL)
    rng.shuffle(row)
    records: List[CubeHex] = []
    for i, cell in enumerate(cells):
        shift = i % len(row)
        pattern = row[shift:] + row[:shift]
        records.append(CubeHex(cell.coordinates, pattern[:player_count]))
    return records


def initialize_monsters(grid: HexGrid, player_count: int, rng: random.Random) -> List[MonsterHex]:
    cells = list(grid.cells_of_terrain(Terrain.MONSTERS))
    if len(cells) != MONSTER_HEXES:
        raise SetupError(f"expected {MONSTER_HEXES} monster hexes but found {len(cells)}")
    rng.shuffle(cells)
    colors = list(COLOR_WHEEL)
    rng.shuffle(colors)

    records = [MonsterHex(cell.coordinates) for cell in cells]
    # Round-robin, passing over hexes that already hold the color.
    hex_index = 0
    for color in colors * player_count:
        for _ in range(len(records)):
            record = records[hex_index]
            hex_index = (hex_index + 1) % len(records)
            if color not in record.monster_colors:
                record.monster_colors.append(color)
                break
        else:
            raise SetupError(f"no monster hex left without a {color.value} monster")
    return records


def initialize_cities(grid: HexGrid) -> List[CityHex]:
    return [CityHex(cell.coordinates) for cell in _cells(grid, Terrain.CITY, CITY_HEXES)]


def initialize_statues(grid: HexGrid, rng: random.Random) -> List[StatueHex]:
    cells = _cells(grid, Terrain.STATUE, STATUE_HEXES)
    colors = list(COLOR_WHEEL)
    rng.shuffle(colors)
    bases: List[CoreColor] = []
    for _ in range(STATUES_PER_HEX):
        turn = rng.randrange(3)
        colors = colors[turn:] + colors[:turn]
        bases.extend(colors)

    records: List[StatueHex] = []
    for cell in cells:
        if len(bases) < STATUES_PER_HEX:
            raise SetupError(f"ran out of statue bases at {cell.coordinates}")
        records.append(StatueHex(cell.coordinates, bases[:STATUES_PER_HEX]))
        bases = bases[STATUES_PER_HEX:]
    return records


def initialize_shrines(grid: HexGrid, rng: random.Random) -> List[ShrineHex]:
    """Three shrines per player color, each with a reward from the shuffled set."""

    cells = _cells(grid, Terrain.SHRINE, SHRINES_PER_COLOR * len(PLAYER_COLORS))
    rng.shuffle(cells)
    rewards = list(SHRINE_REWARDS)
    rng.shuffle(rewards)
    owners = list(PLAYER_COLORS)
    rng.shuffle(owners)

    records: List[ShrineHex] = []
    for owner_index, owner in enumerate(owners):
        for slot in range(SHRINES_PER_COLOR):
            if len(records) >= len(cells):
                raise SetupError(f"missing shrine cell #{len(records) + 1}")
            reward = rewards[(owner_index * SHRINES_PER_COLOR + slot) % len(rewards)]
            records.append(ShrineHex(cells[len(records)].coordinates, owner, reward))
    return records


def verify_overlays(state: GameState) -> None:
    """Every land cell that carries contents must have its overlay record."""
    for terrain in OVERLAY_TERRAINS:
        for cell in state.grid.cells_of_terrain(terrain):
            state.overlay_at(terrain, cell.coordinates)


def build_oracle_deck(cards_per_color: int, rng: random.Random) -> List[CoreColor]:
    deck = [color for color in COLOR_WHEEL for _ in range(cards_per_color)]
    rng.shuffle(deck)
    return deck


__all__ = [
    "SetupError",
    "find_zeus",
    "new_game",
    "initialize_players",
    "create_quests",
    "initialize_offerings",
    "initialize_monsters",
    "initialize_cities",
    "initialize_statues",
    "initialize_shrines",
    "verify_overlays",
    "build_oracle_deck",
]

"""Shared enumerations and color-wheel helpers used across the rules engine."""

from __future__ import annotations

from enum import Enum
from typing import List, Tuple


class CoreColor(str, Enum):
    BLACK = "black"
    PINK = "pink"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"
    RED = "red"


# Wheel order matters: recoloring walks clockwise through this list.
COLOR_WHEEL: Tuple[CoreColor, ...] = (
    CoreColor.BLACK,
    CoreColor.PINK,
    CoreColor.BLUE,
    CoreColor.YELLOW,
    CoreColor.GREEN,
    CoreColor.RED,
)

# Cells, quests and resources use "none" as a distinct non-color.
NONE_COLOR = "none"

PLAYER_COLORS: Tuple[CoreColor, ...] = (
    CoreColor.GREEN,
    CoreColor.BLUE,
    CoreColor.YELLOW,
    CoreColor.RED,
)

# Fixed temple and monster quest colors are drawn from this pool at setup.
QUEST_COLOR_POOL: Tuple[CoreColor, ...] = (
    CoreColor.BLACK,
    CoreColor.BLUE,
    CoreColor.PINK,
    CoreColor.YELLOW,
)


class Terrain(str, Enum):
    ZEUS = "zeus"
    SEA = "sea"
    SHALLOW = "shallow"
    MONSTERS = "monsters"
    OFFERINGS = "offerings"
    TEMPLE = "temple"
    SHRINE = "shrine"
    CITY = "city"
    STATUE = "statue"


class QuestType(str, Enum):
    SHRINE = "shrine"
    STATUE = "statue"
    TEMPLE = "temple"
    MONSTER = "monster"


class ItemType(str, Enum):
    CUBE = "cube"
    STATUE = "statue"


class ShrineStatus(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"
    FILLED = "filled"


class ShrineReward(str, Enum):
    FAVOR = "favor"
    CARD = "card"
    GOD = "god"
    SHIELD = "shield"


class Phase(str, Enum):
    """Sub-turn modes. Each one selects a generator in :mod:`zeus_rules.phases`."""

    WELCOME = "welcome"
    MAIN = "main"
    TELEPORTING = "teleporting"
    ADVANCING_GOD = "advancingGod"
    PEEKING = "peeking"
    EXPLORING = "exploring"
    FREELOADING = "freeloading"


SHRINE_REWARDS: List[ShrineReward] = [
    ShrineReward.FAVOR,
    ShrineReward.CARD,
    ShrineReward.GOD,
    ShrineReward.SHIELD,
]


def parse_color(value: object) -> CoreColor | str:
    """Return ``value`` as a :class:`CoreColor`, or ``"none"`` for the non-color."""

    if isinstance(value, CoreColor):
        return value
    if value is None or value == NONE_COLOR:
        return NONE_COLOR
    return CoreColor(str(value))


def apply_recolor(color: CoreColor, steps: int) -> CoreColor:
    """Advance ``color`` by ``steps`` positions around the color wheel."""

    index = COLOR_WHEEL.index(CoreColor(color))
    return COLOR_WHEEL[(index + steps) % len(COLOR_WHEEL)]


__all__ = [
    "CoreColor",
    "COLOR_WHEEL",
    "NONE_COLOR",
    "PLAYER_COLORS",
    "QUEST_COLOR_POOL",
    "Terrain",
    "QuestType",
    "ItemType",
    "ShrineStatus",
    "ShrineReward",
    "Phase",
    "SHRINE_REWARDS",
    "parse_color",
    "apply_recolor",
]

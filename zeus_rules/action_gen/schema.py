from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from ..map.coordinates import HexCoordinates
from ..resource import NO_RESOURCE, Resource
from ..types import CoreColor


class ActionType(str, Enum):
    FREE = "free"
    RESOURCE = "resource"
    ADVANCE = "advance"
    HEX = "hex"
    MOVE = "move"
    FREELOAD = "freeload"


class ActionSubType(str, Enum):
    END_TURN = "endTurn"
    ACTIVATE_GOD = "activateGod"
    GAIN_FAVOR = "gainFavor"
    GAIN_ORACLE_CARD = "gainOracleCard"
    GAIN_TWO_PEEKS = "gainTwoPeeks"
    ADVANCE_GOD = "advanceGod"
    EXPLORE_SHRINE = "exploreShrine"
    LOAD_CUBE = "loadCube"
    DROP_CUBE = "dropCube"
    LOAD_STATUE = "loadStatue"
    DROP_STATUE = "dropStatue"
    FIGHT_MONSTER = "fightMonster"
    PEEK_SHRINE = "peekShrine"
    MOVE_SHIP = "moveShip"


@dataclass(frozen=True)
class Action:
    """One concrete move a player may make.

    A single record covers every variant; ``type`` and ``sub_type`` say which
    one, and only the fields that variant uses are set. Equality is
    structural via :meth:`stable_key`, which, unlike :class:`Resource`
    equality, also compares the spend's effective color.
    """

    type: ActionType
    sub_type: ActionSubType
    spend: Resource = NO_RESOURCE
    coordinates: Optional[HexCoordinates] = None
    destination: Optional[HexCoordinates] = None
    favor_to_extend_range: int = 0
    god_color: Optional[CoreColor] = None

    def stable_key(self) -> Tuple:
        spend = self.spend
        return (
            self.type.value,
            self.sub_type.value,
            spend.kind.value,
            str(getattr(spend.base_color, "value", spend.base_color)),
            str(getattr(spend.effective_color(), "value", spend.effective_color())),
            (self.coordinates.q, self.coordinates.r) if self.coordinates else None,
            (self.destination.q, self.destination.r) if self.destination else None,
            self.favor_to_extend_range,
            self.god_color.value if self.god_color else None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self.stable_key() == other.stable_key()

    def __hash__(self) -> int:
        return hash(self.stable_key())

    def with_spend(self, spend: Resource) -> "Action":
        return Action(
            self.type,
            self.sub_type,
            spend,
            self.coordinates,
            self.destination,
            self.favor_to_extend_range,
            self.god_color,
        )

    def describe(self) -> str:
        parts = [f"{self.type.value}:{self.sub_type.value}"]
        if self.god_color:
            parts.append(self.god_color.value)
        if self.coordinates:
            parts.append(f"at {self.coordinates}")
        if self.destination:
            parts.append(f"to {self.destination}")
        if self.favor_to_extend_range:
            parts.append(f"+{self.favor_to_extend_range} range")
        if not self.spend.is_none:
            parts.append(f"using {self.spend}")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type.value, "sub_type": self.sub_type.value}
        if not self.spend.is_none:
            out["spend"] = self.spend.to_dict()
        if self.coordinates is not None:
            out["coordinates"] = self.coordinates.to_dict()
        if self.destination is not None:
            out["destination"] = self.destination.to_dict()
            out["favor_to_extend_range"] = self.favor_to_extend_range
        if self.god_color is not None:
            out["god_color"] = self.god_color.value
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Action":
        coordinates = data.get("coordinates")
        destination = data.get("destination")
        god_color = data.get("god_color")
        return cls(
            type=ActionType(data["type"]),
            sub_type=ActionSubType(data.get("sub_type", data.get("subType"))),
            spend=Resource.from_dict(data.get("spend")),
            coordinates=HexCoordinates.from_dict(coordinates) if coordinates else None,
            destination=HexCoordinates.from_dict(destination) if destination else None,
            favor_to_extend_range=int(data.get("favor_to_extend_range", 0)),
            god_color=CoreColor(god_color) if god_color else None,
        )


def end_turn() -> Action:
    return Action(ActionType.FREE, ActionSubType.END_TURN)


def activate_god(color: CoreColor) -> Action:
    return Action(ActionType.FREE, ActionSubType.ACTIVATE_GOD, god_color=CoreColor(color))


def resource_action(sub_type: ActionSubType, spend: Resource) -> Action:
    return Action(ActionType.RESOURCE, sub_type, spend)


def advance_god(color: CoreColor, spend: Resource = NO_RESOURCE) -> Action:
    return Action(ActionType.ADVANCE, ActionSubType.ADVANCE_GOD, spend, god_color=CoreColor(color))


def hex_action(sub_type: ActionSubType, coordinates: HexCoordinates, spend: Resource = NO_RESOURCE) -> Action:
    return Action(ActionType.HEX, sub_type, spend, coordinates=coordinates)


def move_ship(destination: HexCoordinates, spend: Resource = NO_RESOURCE, favor_to_extend_range: int = 0) -> Action:
    return Action(
        ActionType.MOVE,
        ActionSubType.MOVE_SHIP,
        spend,
        destination=destination,
        favor_to_extend_range=favor_to_extend_range,
    )


def freeload(color: CoreColor) -> Action:
    return Action(ActionType.FREELOAD, ActionSubType.ADVANCE_GOD, god_color=CoreColor(color))


__all__ = [
    "ActionType",
    "ActionSubType",
    "Action",
    "end_turn",
    "activate_god",
    "resource_action",
    "advance_god",
    "hex_action",
    "move_ship",
    "freeload",
]

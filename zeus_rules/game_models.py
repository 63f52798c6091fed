from __future__ import annotations
import sys
from collections import deque
from dataclasses import dataclass, field, is_dataclass, fields
from enum import Enum
from typing import Any, Deque, Dict, Iterator, List, Mapping, Optional, Union, get_args, get_origin, get_type_hints
import json
import types as pytypes

from .config import RulesConfig
from .map.coordinates import HexCoordinates
from .map.grid import HexGrid
from .resource import NO_RESOURCE, Resource
from .results import Result, RulesError, failure, success
from .types import (
    COLOR_WHEEL,
    NONE_COLOR,
    CoreColor,
    ItemType,
    Phase,
    QuestType,
    ShrineReward,
    ShrineStatus,
    Terrain,
    parse_color,
)

HexColor = Union[CoreColor, str]


class OverlayError(RulesError):
    """Raised when a land cell has no matching overlay record."""


def _coerce_value(ft: Any, v: Any) -> Any:
    origin = get_origin(ft)
    if origin is Union or origin is getattr(pytypes, "UnionType", None):
        args = [a for a in get_args(ft) if a is not type(None)]
        if CoreColor in args:
            return parse_color(v)
        if len(args) == 1:
            return _coerce_value(args[0], v)
        return v
    if ft is Resource:
        return Resource.from_dict(v)
    if ft is HexCoordinates:
        return HexCoordinates.from_dict(v)
    if isinstance(ft, type) and issubclass(ft, Enum) and not isinstance(v, ft):
        return ft(v)
    if is_dataclass(ft) and isinstance(v, Mapping):
        return _build_dataclass(ft, v)
    return v


def _build_dataclass(cls, data: Mapping[str, Any]):
    """Recursively coerce nested dicts/lists into a dataclass instance."""
    if not is_dataclass(cls):
        return data
    type_hints = get_type_hints(cls, globalns=sys.modules[cls.__module__].__dict__)
    kwargs = {}
    for f in fields(cls):
        if f.name not in data:
            continue  # keep default
        v = data[f.name]
        ft = type_hints.get(f.name, f.type)
        origin = get_origin(ft)
        if v is None and (is_dataclass(ft) or origin in (list, dict)):
            continue
        if origin in (list, tuple) and isinstance(v, (list, tuple)):
            (inner,) = get_args(ft) or (Any,)
            kwargs[f.name] = [_coerce_value(inner, x) for x in v]
        else:
            kwargs[f.name] = _coerce_value(ft, v)
    return cls(**kwargs)


def _normalize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Resource):
        return value.to_dict()
    if isinstance(value, HexCoordinates):
        return value.to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _normalize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {k: _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, deque)):
        return [_normalize(v) for v in value]
    return value


@dataclass
class Quest:
    type: QuestType
    color: HexColor = NONE_COLOR
    completed: bool = False

    @property
    def is_wild(self) -> bool:
        return self.color == NONE_COLOR


@dataclass
class Item:
    type: ItemType
    color: CoreColor


@dataclass
class God:
    color: CoreColor
    level: int = 0


def _default_gods() -> List[God]:
    return [God(color) for color in COLOR_WHEEL]


@dataclass
class Player:
    id: int
    name: str
    color: CoreColor
    ship_position: HexCoordinates = field(default_factory=lambda: HexCoordinates(0, 0))
    favor: int = 0
    shield: int = 0
    oracle_dice: List[CoreColor] = field(default_factory=list)
    oracle_cards: List[CoreColor] = field(default_factory=list)
    used_oracle_card_this_turn: bool = False
    gods: List[God] = field(default_factory=_default_gods)
    items: List[Item] = field(default_factory=list)
    quests: List[Quest] = field(default_factory=list)
    peeked_shrines: List[HexCoordinates] = field(default_factory=list)
    freeload_opportunities: List[CoreColor] = field(default_factory=list)

    # -- gods -------------------------------------------------------------

    def god(self, color: CoreColor) -> God:
        for god in self.gods:
            if god.color == color:
                return god
        god = God(CoreColor(color))
        self.gods.append(god)
        return god

    def god_level(self, color: CoreColor) -> int:
        return self.god(color).level

    def advance_god(self, color: CoreColor, max_level: int) -> None:
        god = self.god(color)
        god.level = min(max_level, god.level + 1)

    def reset_god(self, color: CoreColor) -> None:
        self.god(color).level = 0

    # -- quests -----------------------------------------------------------

    def quests_of_type(self, quest_type: QuestType) -> List[Quest]:
        return [quest for quest in self.quests if quest.type == quest_type]

    def is_finished(self) -> bool:
        return bool(self.quests) and all(quest.completed for quest in self.quests)

    # -- cargo ------------------------------------------------------------

    def has_item(self, item_type: ItemType, color: CoreColor) -> bool:
        return any(item.type == item_type and item.color == color for item in self.items)

    def validate_loadable(self, item_type: ItemType, color: CoreColor, capacity: int) -> Result:
        if len(self.items) >= capacity:
            return failure("Cargo is full")
        if self.has_item(item_type, color):
            return failure(f"Already carrying a {color.value} {item_type.value}")
        return success("Item can be loaded")

    def load_item(self, item_type: ItemType, color: CoreColor, capacity: int) -> Result:
        checked = self.validate_loadable(item_type, color, capacity)
        if checked.success:
            self.items.append(Item(item_type, color))
        return checked

    def unload_item(self, item_type: ItemType, color: CoreColor) -> bool:
        for index, item in enumerate(self.items):
            if item.type == item_type and item.color == color:
                del self.items[index]
                return True
        return False

    # -- resources --------------------------------------------------------

    def available_resources(self) -> List[Resource]:
        """Distinct spendable resources: dice, then cards if none used this turn."""

        found: List[Resource] = []
        for color in self.oracle_dice:
            resource = Resource.die(color)
            if resource not in found:
                found.append(resource)
        if not self.used_oracle_card_this_turn:
            for color in self.oracle_cards:
                resource = Resource.card(color)
                if resource not in found:
                    found.append(resource)
        return found

    def resources_with_recoloring(self, max_recolor: int) -> List[Resource]:
        """Every available resource at each recolor cost the player can afford."""

        top = max(0, min(self.favor, max_recolor))
        return [
            resource.with_recoloring(cost)
            for resource in self.available_resources()
            for cost in range(top + 1)
        ]


@dataclass
class CubeHex:
    coordinates: HexCoordinates
    cube_colors: List[CoreColor] = field(default_factory=list)


@dataclass
class MonsterHex:
    coordinates: HexCoordinates
    monster_colors: List[CoreColor] = field(default_factory=list)


@dataclass
class CityHex:
    coordinates: HexCoordinates
    statues: int = 3


@dataclass
class StatueHex:
    coordinates: HexCoordinates
    empty_bases: List[CoreColor] = field(default_factory=list)
    raised_statues: List[CoreColor] = field(default_factory=list)


@dataclass
class ShrineHex:
    coordinates: HexCoordinates
    owner: CoreColor
    reward: ShrineReward
    status: ShrineStatus = ShrineStatus.HIDDEN


@dataclass
class ResourceSelection:
    """The caller's current resource pick and declared recoloring."""

    resource: Resource = NO_RESOURCE
    recoloring: int = 0

    @property
    def is_pending(self) -> bool:
        return not self.resource.is_none and self.recoloring > 0

    def declared(self) -> Resource:
        return self.resource.with_recoloring(self.recoloring)

    def clear(self) -> None:
        self.resource = NO_RESOURCE
        self.recoloring = 0


# Overlay attribute name per land terrain.
OVERLAY_TERRAINS: Dict[Terrain, str] = {
    Terrain.OFFERINGS: "cube_hexes",
    Terrain.MONSTERS: "monster_hexes",
    Terrain.CITY: "city_hexes",
    Terrain.STATUE: "statue_hexes",
    Terrain.SHRINE: "shrine_hexes",
}

_OVERLAY_TYPES = {
    "cube_hexes": CubeHex,
    "monster_hexes": MonsterHex,
    "city_hexes": CityHex,
    "statue_hexes": StatueHex,
    "shrine_hexes": ShrineHex,
}


@dataclass
class GameState:
    grid: HexGrid
    players: List[Player] = field(default_factory=list)
    current_player_index: int = 0
    round: int = 1
    phase: Phase = Phase.WELCOME
    phase_queue: Deque[Phase] = field(default_factory=deque)
    cube_hexes: Dict[HexCoordinates, CubeHex] = field(default_factory=dict)
    monster_hexes: Dict[HexCoordinates, MonsterHex] = field(default_factory=dict)
    city_hexes: Dict[HexCoordinates, CityHex] = field(default_factory=dict)
    statue_hexes: Dict[HexCoordinates, StatueHex] = field(default_factory=dict)
    shrine_hexes: Dict[HexCoordinates, ShrineHex] = field(default_factory=dict)
    oracle_deck: List[CoreColor] = field(default_factory=list)
    rules: RulesConfig = field(default_factory=RulesConfig)
    selection: ResourceSelection = field(default_factory=ResourceSelection)

    # -- players ----------------------------------------------------------

    @property
    def player_count(self) -> int:
        return len(self.players)

    def get_player(self, index: int) -> Player:
        if not 0 <= index < len(self.players):
            raise RulesError(f"no player at index {index}")
        return self.players[index]

    @property
    def current_player(self) -> Player:
        return self.get_player(self.current_player_index)

    def player_by_color(self, color: CoreColor) -> Optional[Player]:
        return next((p for p in self.players if p.color == color), None)

    # -- phases -----------------------------------------------------------

    def queue_phase(self, phase: Phase) -> None:
        self.phase_queue.append(Phase(phase))

    def end_phase(self) -> Phase:
        """Activate the next queued phase, or ``main`` when nothing is queued."""
        self.phase = self.phase_queue.popleft() if self.phase_queue else Phase.MAIN
        return self.phase

    def reset_phases(self, phase: Phase = Phase.MAIN) -> None:
        self.phase_queue.clear()
        self.phase = phase

    # -- overlays ---------------------------------------------------------

    def add_overlay(self, record: Any) -> None:
        for name, overlay_type in _OVERLAY_TYPES.items():
            if isinstance(record, overlay_type):
                getattr(self, name)[record.coordinates] = record
                return
        raise TypeError(f"not an overlay record: {record!r}")

    def overlay_at(self, terrain: Terrain, coord: HexCoordinates) -> Any:
        """Return the overlay record for a land cell, raising if setup missed it."""

        name = OVERLAY_TERRAINS.get(terrain)
        if name is None:
            raise OverlayError(f"{terrain.value} cells carry no overlay record")
        record = getattr(self, name).get(coord)
        if record is None:
            raise OverlayError(f"missing {terrain.value} overlay at {coord}")
        return record

    def hidden_shrines(self) -> Iterator[ShrineHex]:
        return (hex_ for hex_ in self.shrine_hexes.values() if hex_.status == ShrineStatus.HIDDEN)

    def draw_oracle_card(self) -> Optional[CoreColor]:
        return self.oracle_deck.pop() if self.oracle_deck else None

    # -- serialization ----------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.to_dict(),
            "players": _normalize(self.players),
            "current_player_index": self.current_player_index,
            "round": self.round,
            "phase": self.phase.value,
            "phase_queue": [phase.value for phase in self.phase_queue],
            "cube_hexes": _normalize(list(self.cube_hexes.values())),
            "monster_hexes": _normalize(list(self.monster_hexes.values())),
            "city_hexes": _normalize(list(self.city_hexes.values())),
            "statue_hexes": _normalize(list(self.statue_hexes.values())),
            "shrine_hexes": _normalize(list(self.shrine_hexes.values())),
            "oracle_deck": _normalize(self.oracle_deck),
            "rules": self.rules.to_dict(),
            "selection": _normalize(self.selection),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameState":
        from .phases import parse_phase

        state = cls(
            grid=HexGrid.from_dict(data["grid"]),
            players=[_build_dataclass(Player, p) for p in data.get("players", [])],
            current_player_index=int(data.get("current_player_index", 0)),
            round=int(data.get("round", 1)),
            phase=parse_phase(data.get("phase", Phase.WELCOME.value)),
            phase_queue=deque(parse_phase(p) for p in data.get("phase_queue", [])),
            oracle_deck=[CoreColor(c) for c in data.get("oracle_deck", [])],
            rules=RulesConfig.from_dict(data.get("rules")),
            selection=_build_dataclass(ResourceSelection, data.get("selection") or {}),
        )
        for name, overlay_type in _OVERLAY_TYPES.items():
            for raw in data.get(name, []):
                state.add_overlay(_build_dataclass(overlay_type, raw))
        return state

    @classmethod
    def from_json(cls, text: str) -> "GameState":
        return cls.from_dict(json.loads(text))

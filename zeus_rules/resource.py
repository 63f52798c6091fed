"""Dice and oracle cards as spendable, optionally recolored resources."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .types import NONE_COLOR, CoreColor, apply_recolor, parse_color


class ResourceKind(str, Enum):
    DIE = "die"
    CARD = "card"
    NONE = "none"


@dataclass(frozen=True, eq=False)
class Resource:
    """A die or card of ``base_color``, possibly declared to be recolored.

    Identity is ``(kind, base_color)``; ``recolor_cost`` is how much favor the
    player currently intends to commit and does not take part in equality.
    """

    kind: ResourceKind = ResourceKind.NONE
    base_color: CoreColor | str = NONE_COLOR
    recolor_cost: int = 0

    @classmethod
    def die(cls, color: CoreColor, recolor_cost: int = 0) -> "Resource":
        return cls(ResourceKind.DIE, CoreColor(color), recolor_cost)

    @classmethod
    def card(cls, color: CoreColor, recolor_cost: int = 0) -> "Resource":
        return cls(ResourceKind.CARD, CoreColor(color), recolor_cost)

    @property
    def is_none(self) -> bool:
        return self.kind == ResourceKind.NONE

    @property
    def is_die(self) -> bool:
        return self.kind == ResourceKind.DIE

    @property
    def is_card(self) -> bool:
        return self.kind == ResourceKind.CARD

    def effective_color(self) -> CoreColor | str:
        if self.is_none:
            return NONE_COLOR
        return apply_recolor(CoreColor(self.base_color), self.recolor_cost)

    def with_recoloring(self, cost: int) -> "Resource":
        return Resource(self.kind, self.base_color, cost)

    def without_recoloring(self) -> "Resource":
        return Resource(self.kind, self.base_color, 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.kind == other.kind and self.base_color == other.base_color

    def __hash__(self) -> int:
        return hash((self.kind, self.base_color))

    def __str__(self) -> str:
        if self.is_none:
            return "no resource"
        label = f"{_color_name(self.base_color)} {self.kind.value}"
        if self.recolor_cost:
            label += f" recolored to {_color_name(self.effective_color())}"
        return label

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "base_color": _color_name(self.base_color),
            "recolor_cost": self.recolor_cost,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Resource":
        if not data:
            return NO_RESOURCE
        kind = ResourceKind(data.get("kind", ResourceKind.NONE.value))
        if kind == ResourceKind.NONE:
            return NO_RESOURCE
        return cls(kind, parse_color(data.get("base_color")), int(data.get("recolor_cost", 0)))


def _color_name(color: CoreColor | str) -> str:
    return color.value if isinstance(color, CoreColor) else str(color)


NO_RESOURCE = Resource()


__all__ = ["ResourceKind", "Resource", "NO_RESOURCE"]

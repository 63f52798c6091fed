"""Axial coordinate system for the Zeus hex map.

Coordinate System:
    - Axial coordinates (q, r); the third cube axis ``s = -q - r`` is derived
    - Zeus sits at the centre (0, 0)
    - Ring radius = max(|q|, |r|, |s|)

Direction order (matches the neighbor order the rules rely on for
"first sea neighbor" style tie-breaks):
    0 = ( +1, -1)
    1 = ( +1,  0)
    2 = (  0, +1)
    3 = ( -1, +1)
    4 = ( -1,  0)
    5 = (  0, -1)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Tuple

AXIAL_DIRECTIONS: List[Tuple[int, int]] = [
    (+1, -1),
    (+1,  0),
    ( 0, +1),
    (-1, +1),
    (-1,  0),
    ( 0, -1),
]


@dataclass(frozen=True, order=True)
class HexCoordinates:
    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def to_dict(self) -> Dict[str, int]:
        return {"q": self.q, "r": self.r}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | "HexCoordinates") -> "HexCoordinates":
        if isinstance(data, HexCoordinates):
            return data
        return cls(int(data["q"]), int(data["r"]))

    def __str__(self) -> str:
        return f"({self.q},{self.r})"


def axial_add(coord: HexCoordinates, direction: int) -> HexCoordinates:
    """Step once from ``coord`` along the given direction index (0-5)."""

    dq, dr = AXIAL_DIRECTIONS[direction % 6]
    return HexCoordinates(coord.q + dq, coord.r + dr)


def axial_neighbors(coord: HexCoordinates) -> List[HexCoordinates]:
    """Return all 6 neighbors of ``coord`` in direction order, unbounded."""

    return [axial_add(coord, direction) for direction in range(6)]


def ring_radius(coord: HexCoordinates) -> int:
    """Distance of ``coord`` from the centre of the map."""

    return max(abs(coord.q), abs(coord.r), abs(coord.s))


def axial_distance(a: HexCoordinates, b: HexCoordinates) -> int:
    """Hex distance between two coordinates.

    Uses ``(|dq| + |dr| + |dq + dr|) / 2``, which equals the maximum of the
    three cube-axis deltas.
    """
    dq = a.q - b.q
    dr = a.r - b.r
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def hexagon_coordinates(radius: int) -> Iterator[HexCoordinates]:
    """Yield every coordinate inside a hexagon of ``radius``, row by row."""

    for q in range(-radius, radius + 1):
        r_min = max(-radius, -q - radius)
        r_max = min(radius, -q + radius)
        for r in range(r_min, r_max + 1):
            yield HexCoordinates(q, r)


__all__ = [
    "AXIAL_DIRECTIONS",
    "HexCoordinates",
    "axial_add",
    "axial_neighbors",
    "ring_radius",
    "axial_distance",
    "hexagon_coordinates",
]

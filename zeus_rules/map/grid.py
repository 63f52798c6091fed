"""Bounded hexagonal grid storage used as the game map."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..types import NONE_COLOR, CoreColor, Terrain, parse_color
from .coordinates import (
    HexCoordinates,
    axial_distance,
    axial_neighbors,
    hexagon_coordinates,
    ring_radius,
)


@dataclass(eq=False)
class HexCell:
    """One map cell. Its coordinates never change; terrain and color may."""

    q: int
    r: int
    terrain: Terrain = Terrain.SEA
    color: CoreColor | str = NONE_COLOR

    @property
    def coordinates(self) -> HexCoordinates:
        return HexCoordinates(self.q, self.r)

    def to_dict(self) -> Dict[str, Any]:
        color = self.color.value if isinstance(self.color, CoreColor) else self.color
        return {"q": self.q, "r": self.r, "terrain": self.terrain.value, "color": color}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HexCell":
        return cls(
            q=int(data["q"]),
            r=int(data["r"]),
            terrain=Terrain(data.get("terrain", Terrain.SEA.value)),
            color=parse_color(data.get("color", NONE_COLOR)),
        )


class HexGrid:
    """Fixed-radius hexagon of :class:`HexCell` objects.

    Cells are created once at construction, all as colorless sea, and are
    never added or removed afterwards. Map providers reshape the board by
    assigning ``terrain`` and ``color`` on existing cells.
    """

    def __init__(self, radius: int) -> None:
        if radius < 0:
            raise ValueError(f"grid radius must be non-negative, got {radius}")
        self.radius = radius
        self._cells: Dict[HexCoordinates, HexCell] = {
            coord: HexCell(coord.q, coord.r) for coord in hexagon_coordinates(radius)
        }

    def __len__(self) -> int:
        return len(self._cells)

    def contains(self, coord: HexCoordinates) -> bool:
        return ring_radius(coord) <= self.radius

    def cell_at(self, coord: HexCoordinates) -> Optional[HexCell]:
        return self._cells.get(coord)

    def cells(self) -> Iterator[HexCell]:
        return iter(self._cells.values())

    def neighbors(self, coord: HexCoordinates) -> List[HexCoordinates]:
        """Adjacent in-grid coordinates; empty for an off-grid ``coord``."""

        if not self.contains(coord):
            return []
        return [n for n in axial_neighbors(coord) if self.contains(n)]

    def neighbor_cells(self, coord: HexCoordinates) -> List[HexCell]:
        return [self._cells[n] for n in self.neighbors(coord)]

    def neighbors_of_terrain(self, coord: HexCoordinates, terrain: Terrain) -> List[HexCell]:
        return [cell for cell in self.neighbor_cells(coord) if cell.terrain == terrain]

    def cells_of_terrain(self, terrain: Terrain) -> Iterator[HexCell]:
        return (cell for cell in self._cells.values() if cell.terrain == terrain)

    def distance(self, a: HexCoordinates, b: HexCoordinates) -> int:
        return axial_distance(a, b)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "radius": self.radius,
            "cells": [cell.to_dict() for cell in self._cells.values()],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HexGrid":
        grid = cls(int(data["radius"]))
        for raw in data.get("cells", []):
            loaded = HexCell.from_dict(raw)
            cell = grid.cell_at(loaded.coordinates)
            if cell is None:
                raise ValueError(f"cell {loaded.coordinates} lies outside radius {grid.radius}")
            cell.terrain = loaded.terrain
            cell.color = loaded.color
        return grid


__all__ = ["HexCell", "HexGrid"]

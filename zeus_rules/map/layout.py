"""Simple map provider for new games.

Places Zeus at the centre, scatters the land sites over the outer rings and
paints every sea cell a random wheel color. It makes no attempt at balanced
coloring; it only guarantees the site counts game setup expects and that
every land site touches the sea.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Tuple

from ..results import RulesError
from ..types import COLOR_WHEEL, NONE_COLOR, CoreColor, Terrain
from .coordinates import HexCoordinates, ring_radius
from .grid import HexCell, HexGrid

logger = logging.getLogger(__name__)

# (terrain, count, colored) for every land site a standard game needs.
SITE_COUNTS: Tuple[Tuple[Terrain, int, bool], ...] = (
    (Terrain.SHRINE, 12, True),
    (Terrain.MONSTERS, 9, False),
    (Terrain.OFFERINGS, 6, False),
    (Terrain.CITY, 6, True),
    (Terrain.STATUE, 6, False),
    (Terrain.TEMPLE, 6, True),
)

SHALLOW_COUNT = 8


class MapLayoutError(RulesError):
    """Raised when the requested sites do not fit on the grid."""


def build_map(rng: Optional[random.Random] = None, radius: int = 6) -> HexGrid:
    """Return a freshly laid out grid of ``radius``."""

    rng = rng or random.Random()
    if radius < 2:
        raise MapLayoutError(f"radius {radius} leaves no room for land sites")
    grid = HexGrid(radius)
    zeus = grid.cell_at(HexCoordinates(0, 0))
    if zeus is None:
        raise MapLayoutError(f"grid of radius {radius} has no centre cell")
    zeus.terrain = Terrain.ZEUS

    # Ring 1 stays open water so every ship can leave Zeus.
    candidates = [cell for cell in grid.cells() if ring_radius(cell.coordinates) >= 2]
    rng.shuffle(candidates)

    for terrain, count, colored in SITE_COUNTS:
        colors = _site_colors(rng, count) if colored else [NONE_COLOR] * count
        for color in colors:
            cell = _take_candidate(grid, candidates)
            if cell is None:
                raise MapLayoutError(f"ran out of room placing {terrain.value} on radius {radius}")
            cell.terrain = terrain
            cell.color = color

    shallow_placed = 0
    for cell in candidates:
        if shallow_placed >= SHALLOW_COUNT:
            break
        if cell.terrain == Terrain.SEA and _keeps_sea_access(grid, cell):
            cell.terrain = Terrain.SHALLOW
            shallow_placed += 1

    for cell in grid.cells_of_terrain(Terrain.SEA):
        cell.color = rng.choice(COLOR_WHEEL)

    logger.debug("laid out map radius=%d with %d shallows", radius, shallow_placed)
    return grid


def _site_colors(rng: random.Random, count: int) -> List[CoreColor]:
    colors: List[CoreColor] = []
    while len(colors) < count:
        batch = list(COLOR_WHEEL)
        rng.shuffle(batch)
        colors.extend(batch)
    return colors[:count]


def _take_candidate(grid: HexGrid, candidates: List[HexCell]) -> Optional[HexCell]:
    for index, cell in enumerate(candidates):
        if cell.terrain != Terrain.SEA:
            continue
        if _keeps_sea_access(grid, cell):
            del candidates[index]
            return cell
    return None


def _keeps_sea_access(grid: HexGrid, cell: HexCell) -> bool:
    """True when turning ``cell`` into land leaves it and its land neighbors touching sea."""

    neighbors = grid.neighbor_cells(cell.coordinates)
    if sum(1 for n in neighbors if n.terrain == Terrain.SEA) < 2:
        return False
    for neighbor in neighbors:
        if neighbor.terrain in (Terrain.SEA, Terrain.ZEUS):
            continue
        open_water = [
            n for n in grid.neighbor_cells(neighbor.coordinates)
            if n.terrain == Terrain.SEA and n is not cell
        ]
        if not open_water:
            return False
    return True


def paint(grid: HexGrid, placements: Sequence[Tuple[HexCoordinates, Terrain, object]]) -> HexGrid:
    """Assign terrain/color to specific cells; handy for hand-built boards."""

    for coord, terrain, color in placements:
        cell = grid.cell_at(coord)
        if cell is None:
            raise MapLayoutError(f"{coord} is outside the grid")
        cell.terrain = terrain
        cell.color = color
    return grid


__all__ = ["SITE_COUNTS", "MapLayoutError", "build_map", "paint"]

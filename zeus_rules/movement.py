"""Ship reachability over sea cells."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Tuple

from .map.coordinates import HexCoordinates
from .map.grid import HexGrid
from .types import Terrain


@dataclass(frozen=True)
class ReachableCell:
    coordinates: HexCoordinates
    steps: int
    extra_favor: int


def find_reachable(
    grid: HexGrid,
    origin: HexCoordinates,
    base_range: int,
    favor: int,
) -> List[ReachableCell]:
    """Return every sea cell a ship at ``origin`` can reach.

    Breadth-first over sea cells only; any other terrain blocks the path, but
    the origin itself may be land (ships start on Zeus). The search stops at
    ``base_range + favor`` steps. Each result records the fewest steps found
    and the favor owed for steps beyond ``base_range``. Results come back in
    discovery order, so nearer cells precede farther ones.
    """
    max_steps = base_range + max(0, favor)
    seen: Dict[HexCoordinates, int] = {origin: 0}
    frontier: Deque[Tuple[HexCoordinates, int]] = deque([(origin, 0)])
    reached: List[ReachableCell] = []

    while frontier:
        coord, steps = frontier.popleft()
        if steps >= max_steps:
            continue
        for neighbor in grid.neighbors(coord):
            if neighbor in seen:
                continue
            cell = grid.cell_at(neighbor)
            if cell is None or cell.terrain != Terrain.SEA:
                continue
            seen[neighbor] = steps + 1
            reached.append(
                ReachableCell(neighbor, steps + 1, max(0, steps + 1 - base_range))
            )
            frontier.append((neighbor, steps + 1))
    return reached


def reachable_map(
    grid: HexGrid,
    origin: HexCoordinates,
    base_range: int,
    favor: int,
) -> Dict[HexCoordinates, int]:
    """Coordinates -> extra favor, for callers that only need lookups."""

    return {
        cell.coordinates: cell.extra_favor
        for cell in find_reachable(grid, origin, base_range, favor)
    }


__all__ = ["ReachableCell", "find_reachable", "reachable_map"]

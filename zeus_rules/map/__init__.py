"""Map data structures: axial coordinates, the bounded grid and a layout provider."""

from .coordinates import HexCoordinates, axial_distance, axial_neighbors
from .grid import HexCell, HexGrid
from .layout import build_map

__all__ = [
    "HexCoordinates",
    "axial_distance",
    "axial_neighbors",
    "HexCell",
    "HexGrid",
    "build_map",
]

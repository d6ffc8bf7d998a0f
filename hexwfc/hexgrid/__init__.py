"""Hexagonal coordinates, symmetry transforms, layouts and grids."""

from .coord import HexCoord
from .grid import Grid
from .layout import GridLayout, HexagonalGridLayout, SquareGridLayout
from .neighbours import Neighbours
from .ring import ring, spiral
from .transform import Transform, TransformMatrix

__all__ = [
    "Grid",
    "GridLayout",
    "HexCoord",
    "HexagonalGridLayout",
    "Neighbours",
    "SquareGridLayout",
    "Transform",
    "TransformMatrix",
    "ring",
    "spiral",
]

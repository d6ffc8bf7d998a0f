"""Wave Function Collapse map generation over hexagonal grids."""

from .bitset import FixedBitSet
from .cell import Alternatives, Cell, Collapsed
from .errors import (
    CellNotCollapsedError,
    ContradictionError,
    GridParseError,
    IncompatibleSeedError,
    InvalidSeedError,
    UnknownSymbolError,
    WFCError,
)
from .generator import Generator, TrailEntry, generate
from .gridio import dump_grid, load_grid, load_grid_file, load_grid_with, wrap_grid
from .seed import HexagonalSeedType, Seed, SeedType, SquareSeedType
from .template import Template, TemplateStats, TileDetails
from .tile import COORDS, Tile, extract_tiles, standard_tile_transforms

__all__ = [
    "COORDS",
    "Alternatives",
    "Cell",
    "CellNotCollapsedError",
    "Collapsed",
    "ContradictionError",
    "FixedBitSet",
    "Generator",
    "GridParseError",
    "HexagonalSeedType",
    "IncompatibleSeedError",
    "InvalidSeedError",
    "Seed",
    "SeedType",
    "SquareSeedType",
    "Template",
    "TemplateStats",
    "Tile",
    "TileDetails",
    "TrailEntry",
    "UnknownSymbolError",
    "WFCError",
    "dump_grid",
    "extract_tiles",
    "generate",
    "load_grid",
    "load_grid_file",
    "load_grid_with",
    "standard_tile_transforms",
    "wrap_grid",
]

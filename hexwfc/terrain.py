"""
Terrain kinds used by the bundled sample maps.

This module defines:
- `Terrain`: the terrain kinds a generated map is made of.
- `TERRAIN_SYMBOLS`: the one-character symbols used in sample text files.
- `TERRAIN_COLORS`: preview colours for the PNG renderer.
"""

from __future__ import annotations

import enum

from hexwfc.types import ColorRGB
from hexwfc.wfc.errors import UnknownSymbolError


class Terrain(enum.IntEnum):
    OCEAN = 0
    MOUNTAIN = 1
    FOREST = 2

    @property
    def symbol(self) -> str:
        """Character used for this terrain in sample files."""
        return _SYMBOLS[self]

    @property
    def color(self) -> ColorRGB:
        return TERRAIN_COLORS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> Terrain:
        """
        Look up a terrain by its sample-file symbol.

        Raises:
            UnknownSymbolError: If no terrain uses ``symbol``.
        """
        try:
            return TERRAIN_SYMBOLS[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol) from None


_SYMBOLS: dict[Terrain, str] = {
    Terrain.OCEAN: "~",
    Terrain.MOUNTAIN: "^",
    Terrain.FOREST: "%",
}

TERRAIN_SYMBOLS: dict[str, Terrain] = {
    symbol: terrain for terrain, symbol in _SYMBOLS.items()
}

TERRAIN_COLORS: dict[Terrain, ColorRGB] = {
    Terrain.OCEAN: (30, 80, 160),
    Terrain.MOUNTAIN: (140, 130, 120),
    Terrain.FOREST: (40, 120, 50),
}

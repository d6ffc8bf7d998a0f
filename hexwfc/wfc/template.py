"""Templates: the tile catalogue and adjacency rules a generator works from.

A template is built once from a sample and then only read. Tile ids are the
positions of the tiles after sorting by signature, so the same sample and
transforms always produce the same ids.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from hexwfc.hexgrid import (
    Grid,
    HexagonalGridLayout,
    HexCoord,
    Neighbours,
    TransformMatrix,
)
from hexwfc.types import TileId

from .bitset import FixedBitSet
from .gridio import wrap_grid
from .tile import COORDS, Tile, extract_tiles, standard_tile_transforms

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TileDetails[T]:
    """What the generator needs to know about one tile.

    Attributes:
        contribution: Value written to the output grid when the tile is chosen.
        compatible: For each neighbour direction, the ids of tiles that may
            sit in that direction.
    """

    contribution: T
    compatible: Neighbours[FixedBitSet]


@dataclass(frozen=True, slots=True)
class TemplateStats:
    """Summary of compatible-set sizes over every tile and direction."""

    size: int
    mean: float
    stddev: float
    min: int
    max: int

    def __str__(self) -> str:
        return (
            f"{self.size} tiles, compatible per direction: "
            f"mean {self.mean:.2f}, stddev {self.stddev:.2f}, "
            f"min {self.min}, max {self.max}"
        )


def _overlap_pairs(direction: HexCoord) -> list[tuple[int, int]]:
    """Signature index pairs that coincide when a tile is shifted by ``direction``."""
    index = {coord: i for i, coord in enumerate(COORDS)}
    return [
        (i, index[coord - direction])
        for i, coord in enumerate(COORDS)
        if coord - direction in index
    ]


def _compatibility_matrix(codes: np.ndarray, direction: HexCoord) -> np.ndarray:
    """Boolean ``(n, n)`` matrix: can tile ``b`` sit at ``direction`` from ``a``."""
    tile_count = codes.shape[0]
    result = np.ones((tile_count, tile_count), dtype=bool)
    for i, j in _overlap_pairs(direction):
        result &= codes[:, i][:, np.newaxis] == codes[:, j][np.newaxis, :]
    return result


class Template[T]:
    """An immutable, shareable table of tiles and their compatible neighbours."""

    __slots__ = ("_tiles",)

    def __init__(self, tiles: Sequence[TileDetails[T]]) -> None:
        if not tiles:
            raise ValueError("A template needs at least one tile")
        self._tiles: tuple[TileDetails[T], ...] = tuple(tiles)

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile[T]]) -> Template[T]:
        """Build a template from distinct tiles.

        Tiles are sorted by signature to assign ids. Compatibility between
        every pair of tiles is evaluated at once per direction by comparing
        integer-coded signatures, which agrees with ``Tile.compatible_with``.

        Raises:
            ValueError: If ``tiles`` is empty.
        """
        ordered = sorted(set(tiles))
        if not ordered:
            raise ValueError("A template needs at least one tile")

        # Values only need comparing for equality, so any injective coding works
        value_codes: dict[T, int] = {}
        codes = np.array(
            [
                [value_codes.setdefault(v, len(value_codes)) for v in tile.signature]
                for tile in ordered
            ],
            dtype=np.int64,
        )

        matrices = {
            direction: _compatibility_matrix(codes, direction)
            for direction in HexCoord.NEIGHBOUR_OFFSETS
        }
        details = [
            TileDetails(
                contribution=tile.contribution,
                compatible=Neighbours.from_fn(
                    lambda direction, a=tile_id: FixedBitSet.from_bools(
                        matrices[direction][a]
                    ).freeze()
                ),
            )
            for tile_id, tile in enumerate(ordered)
        ]
        template = cls(details)
        logger.info(f"Built template: {template.stats()}")
        return template

    @classmethod
    def from_sample(
        cls,
        sample: Grid[HexagonalGridLayout, T],
        transforms: Iterable[TransformMatrix] | None = None,
        wrap: bool = True,
    ) -> Template[T]:
        """Extract tiles from ``sample`` and build a template from them.

        The sample is first grown by one wrapped ring so that its border cells
        get full neighbourhoods. ``transforms`` defaults to the twelve hexagon
        symmetries.
        """
        if transforms is None:
            transforms = standard_tile_transforms()
        if wrap:
            sample = wrap_grid(sample)
        tiles = extract_tiles(sample, transforms)
        logger.debug(
            f"Extracted {len(tiles)} distinct tiles from sample of radius "
            f"{sample.layout.radius}"
        )
        return cls.from_tiles(tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def available_tiles(self) -> int:
        """Number of tiles. Ids run from 0 to ``available_tiles() - 1``."""
        return len(self._tiles)

    def details(self, tile: TileId) -> TileDetails[T]:
        return self._tiles[tile]

    def contribution(self, tile: TileId) -> T:
        return self._tiles[tile].contribution

    def compatible_tiles(self, tile: TileId) -> Iterator[tuple[HexCoord, FixedBitSet]]:
        """Yield ``(direction, compatible ids)`` for the six directions."""
        return self._tiles[tile].compatible.items()

    def compatible(self, tile: TileId, direction: HexCoord) -> FixedBitSet:
        """Ids of tiles that may sit at ``direction`` from ``tile``.

        The returned bitset is frozen; copy it before modifying.
        """
        return self._tiles[tile].compatible[direction]

    def stats(self) -> TemplateStats:
        sizes = np.array(
            [
                bitset.count_ones()
                for details in self._tiles
                for bitset in details.compatible
            ],
            dtype=np.float64,
        )
        return TemplateStats(
            size=len(self._tiles),
            mean=float(sizes.mean()),
            stddev=float(sizes.std()),
            min=int(sizes.min()),
            max=int(sizes.max()),
        )

    def __repr__(self) -> str:
        return f"Template({len(self._tiles)} tiles)"

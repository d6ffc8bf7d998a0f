"""Tiles: small hexagonal neighbourhoods cut out of a sample grid.

A tile is the centre cell of a sample position together with its six
neighbours, optionally rotated or reflected. Two tiles are the same tile when
their seven values agree, wherever in the sample they were cut from.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable

from hexwfc.hexgrid import (
    Grid,
    HexagonalGridLayout,
    HexCoord,
    Transform,
    TransformMatrix,
)

# The neighbourhood read by every tile, in signature order.
COORDS: tuple[HexCoord, ...] = (
    HexCoord(0, -1),
    HexCoord(1, -1),
    HexCoord(-1, 0),
    HexCoord(0, 0),
    HexCoord(1, 0),
    HexCoord(-1, 1),
    HexCoord(0, 1),
)

_COORD_INDEX = {coord: index for index, coord in enumerate(COORDS)}


@functools.total_ordering
class Tile[T]:
    """A view of seven sample cells around ``offset``, seen through ``transform``.

    Equality, ordering and hashing use the signature (the seven values in
    ``COORDS`` order) and never the grid, offset or transform.
    """

    __slots__ = ("_signature", "grid", "offset", "transform")

    def __init__(
        self,
        grid: Grid[HexagonalGridLayout, T],
        offset: HexCoord,
        transform: TransformMatrix,
    ) -> None:
        self.grid = grid
        self.offset = offset
        self.transform = transform
        self._signature: tuple[T, ...] = tuple(
            grid[transform.apply(coord) + offset] for coord in COORDS
        )

    @property
    def signature(self) -> tuple[T, ...]:
        return self._signature

    @property
    def contribution(self) -> T:
        """The value this tile places in the output grid."""
        return self._signature[_COORD_INDEX[HexCoord.ZERO]]

    def __getitem__(self, coord: HexCoord) -> T:
        index = _COORD_INDEX.get(coord)
        if index is None:
            raise KeyError(coord)
        return self._signature[index]

    def compatible_with(self, other: Tile[T], direction: HexCoord) -> bool:
        """Whether ``other`` may sit at ``direction`` from this tile.

        The two neighbourhoods overlap once ``other`` is shifted by
        ``direction``; every overlapping cell must hold the same value.
        """
        for coord in COORDS:
            shifted = coord - direction
            if shifted.length() <= 1 and self[coord] != other[shifted]:
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self._signature == other._signature

    def __lt__(self, other: Tile[T]) -> bool:
        return self._signature < other._signature

    def __hash__(self) -> int:
        return hash(self._signature)

    def __repr__(self) -> str:
        return f"Tile(offset={self.offset}, signature={list(self._signature)!r})"


def standard_tile_transforms() -> list[TransformMatrix]:
    """The twelve symmetries of a hexagon.

    The six rotations come first, then ``REFLECT_S`` followed by ``REFLECT_S``
    composed with each non-trivial rotation.
    """
    rotations = Transform.rotations()
    transforms = [TransformMatrix.from_transform(rotation) for rotation in rotations]
    transforms.append(TransformMatrix.from_transform(Transform.REFLECT_S))
    transforms.extend(
        TransformMatrix.from_transforms([Transform.REFLECT_S, rotation])
        for rotation in rotations[1:]
    )
    return transforms


def extract_tiles[T](
    sample: Grid[HexagonalGridLayout, T], transforms: Iterable[TransformMatrix]
) -> set[Tile[T]]:
    """Cut every distinct tile out of ``sample``.

    Tiles are centred on each cell of the sample's inner layout (one ring
    smaller) so that the whole neighbourhood lies inside the sample.
    """
    transforms = list(transforms)
    inner = HexagonalGridLayout(sample.layout.radius - 1)
    return {
        Tile(sample, offset, transform) for offset in inner for transform in transforms
    }

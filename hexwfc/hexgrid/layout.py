"""Grid layouts map hex coordinates onto linear storage.

A layout is a small immutable value describing the shape of a grid. It knows
which coordinates belong to the grid, the order in which they are stored, and
how to convert a coordinate into an index into that storage.
"""

from __future__ import annotations

import abc
from collections.abc import Iterator
from dataclasses import dataclass

from .coord import HexCoord
from .transform import Transform


class GridLayout(abc.ABC):
    """Shape of a grid.

    Implementations must keep ``offset`` and ``contains`` in agreement:
    ``offset(coord)`` returns an index iff ``contains(coord)``, and iterating the
    layout yields coordinates whose offsets are exactly ``0..size()-1`` in order.
    """

    @abc.abstractmethod
    def size(self) -> int:
        """Number of cells in the layout."""

    @abc.abstractmethod
    def __iter__(self) -> Iterator[HexCoord]:
        """Iterate over every contained coordinate in storage order."""

    @abc.abstractmethod
    def offset(self, position: HexCoord) -> int | None:
        """Storage index of ``position``, or None if it lies outside."""

    @abc.abstractmethod
    def contains(self, position: HexCoord) -> bool: ...

    @abc.abstractmethod
    def center(self) -> HexCoord: ...

    @abc.abstractmethod
    def wrap(self, position: HexCoord) -> HexCoord:
        """Map a coordinate just outside the layout back inside it."""

    def iter(self) -> Iterator[HexCoord]:
        return iter(self)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, position: object) -> bool:
        return isinstance(position, HexCoord) and self.contains(position)


@dataclass(frozen=True, slots=True)
class SquareGridLayout(GridLayout):
    """A roughly rectangular grid of ``width`` by ``height`` hexes.

    Every other row is shifted half a hex to the right, so the axial ``q`` range
    of row ``r`` starts at ``-(r // 2)``.
    """

    width: int
    height: int

    def size(self) -> int:
        return self.width * self.height

    def __iter__(self) -> Iterator[HexCoord]:
        for r in range(self.height):
            qstart = -(r // 2)
            for q in range(qstart, qstart + self.width):
                yield HexCoord(q, r)

    def offset(self, position: HexCoord) -> int | None:
        if not self.contains(position):
            return None
        return position.r * self.width + position.q + position.r // 2

    def contains(self, position: HexCoord) -> bool:
        qoffset = position.q + position.r // 2
        return 0 <= position.r < self.height and 0 <= qoffset < self.width

    def center(self) -> HexCoord:
        return HexCoord(self.width // 2 - self.height // 4, self.height // 2)

    def wrap(self, position: HexCoord) -> HexCoord:
        raise NotImplementedError("Square layouts do not support wrapping")


@dataclass(frozen=True, slots=True)
class HexagonalGridLayout(GridLayout):
    """A hexagon shaped grid centred on the origin.

    ``radius`` counts the centre cell, so a layout of radius 1 is a single cell,
    radius 2 is the centre plus its six neighbours, and so on.
    """

    radius: int

    def size(self) -> int:
        return 3 * self.radius * (self.radius - 1) + 1

    def __iter__(self) -> Iterator[HexCoord]:
        extent = self.radius - 1
        for r in range(-extent, extent + 1):
            for q in range(max(-extent, -extent - r), min(extent, extent - r) + 1):
                yield HexCoord(q, r)

    def offset(self, position: HexCoord) -> int | None:
        if not self.contains(position):
            return None
        radius = self.radius
        row = position.r + radius - 1
        if position.r >= 0:
            # Rows below the centre shrink by one cell each
            remaining = radius - position.r
            qadjust = (radius - 1) * radius - (remaining - 1) * remaining // 2
        else:
            qadjust = row * (row + 1) // 2
        return row * radius + qadjust + position.q

    def contains(self, position: HexCoord) -> bool:
        return position.length() <= self.radius - 1

    def center(self) -> HexCoord:
        return HexCoord.ZERO

    def mirror_centers(self) -> tuple[HexCoord, ...]:
        """Centres of the six neighbouring copies when the grid tiles the plane."""
        base = HexCoord(2 * self.radius - 1, 1 - self.radius)
        return tuple(transform.apply(base) for transform in Transform.rotations())

    def wrap(self, position: HexCoord) -> HexCoord:
        """Wrap a coordinate toroidally into the layout.

        The nearest mirrored copy of the grid is found and its centre subtracted
        until the result lands inside the layout.
        """
        mirror_center = min(self.mirror_centers(), key=position.distance)
        result = position - mirror_center
        while not self.contains(result):
            result -= mirror_center
        return result

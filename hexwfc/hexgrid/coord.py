"""Axial hex coordinates.

Positions on the hex grid use axial ``(q, r)`` coordinates with a derived cube
component ``s = -q - r``. See https://www.redblobgames.com/grids/hexagons/ for
the conventions followed here.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True, order=True)
class HexCoord:
    """A position on a hexagonal grid in axial coordinates.

    Instances are immutable and hashable, and order by ``(q, r)``. The ordering
    is used as a deterministic tie-break when several coordinates are equally
    good candidates.
    """

    q: int
    r: int

    ZERO: ClassVar[HexCoord]
    NEIGHBOUR_OFFSETS: ClassVar[tuple[HexCoord, ...]]

    @classmethod
    def from_qrs(cls, q: int, r: int, s: int) -> HexCoord:
        """Build a coordinate from cube components.

        Raises:
            ValueError: If the components do not sum to zero.
        """
        if q + r + s != 0:
            raise ValueError(
                f"Components of cube coordinate ({q}, {r}, {s}) do not sum to 0"
            )
        return cls(q, r)

    @property
    def s(self) -> int:
        """The third cube component."""
        return -self.q - self.r

    def qrs(self) -> tuple[int, int, int]:
        """Return the equivalent cube coordinate."""
        return (self.q, self.r, -self.q - self.r)

    def length(self) -> int:
        """Number of single steps from the origin to this coordinate."""
        return (abs(self.q) + abs(self.q + self.r) + abs(self.r)) // 2

    def distance(self, other: HexCoord) -> int:
        return (self - other).length()

    def neighbours(self) -> Iterator[HexCoord]:
        """Iterate over the six adjacent coordinates in canonical order."""
        for offset in HexCoord.NEIGHBOUR_OFFSETS:
            yield HexCoord(self.q + offset.q, self.r + offset.r)

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    def __neg__(self) -> HexCoord:
        return HexCoord(-self.q, -self.r)

    def __mul__(self, scale: int) -> HexCoord:
        return HexCoord(self.q * scale, self.r * scale)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"q{self.q}r{self.r}"


HexCoord.ZERO = HexCoord(0, 0)
HexCoord.NEIGHBOUR_OFFSETS = (
    HexCoord(1, 0),
    HexCoord(0, 1),
    HexCoord(-1, 1),
    HexCoord(-1, 0),
    HexCoord(0, -1),
    HexCoord(1, -1),
)

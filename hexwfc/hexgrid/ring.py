from __future__ import annotations

import itertools
from collections.abc import Iterator

from .coord import HexCoord


def ring(center: HexCoord, radius: int) -> Iterator[HexCoord]:
    """Iterate over the ring of coordinates at distance ``radius - 1``.

    ``radius`` counts like a layout radius, so ``ring(c, 2)`` yields the six
    neighbours of ``c`` and ``ring(c, 1)`` yields nothing.
    """
    coord = center + HexCoord(0, -1) * (radius - 1)
    for step in HexCoord.NEIGHBOUR_OFFSETS:
        for _ in range(radius - 1):
            coord += step
            yield coord


def spiral(center: HexCoord) -> Iterator[HexCoord]:
    """Iterate over ``center`` and then rings of increasing radius around it.

    This iterator is unbounded. Consecutive coordinates are not always adjacent
    when moving from one ring to the next.
    """
    yield center
    for radius in itertools.count(2):
        yield from ring(center, radius)

"""Per-cell generator state."""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from hexwfc.types import TileId

from .bitset import FixedBitSet


@dataclass(frozen=True, slots=True)
class Collapsed:
    """A cell that has been fixed to a single tile."""

    tile: TileId


@dataclass(slots=True)
class Alternatives:
    """A cell that may still become any tile whose bit is set.

    ``count`` caches ``alternatives.count_ones()``. A count of zero is a
    contradiction that the generator resolves by rewinding.
    """

    count: int
    alternatives: FixedBitSet

    @classmethod
    def full(cls, tile_count: int) -> Alternatives:
        """A cell that allows every tile of a template."""
        return cls(tile_count, FixedBitSet.full(tile_count))

    @classmethod
    def from_bitset(cls, alternatives: FixedBitSet) -> Alternatives:
        return cls(alternatives.count_ones(), alternatives)

    def select(self, rng: Random) -> TileId | None:
        """Pick one of the alternatives uniformly, or None if there are none."""
        if self.count == 0:
            return None
        return self.alternatives.nth_one(rng.randrange(self.count))

    def set_alternatives(self, alternatives: FixedBitSet) -> None:
        self.alternatives = alternatives
        self.count = alternatives.count_ones()

    def retain(self, allowed: FixedBitSet) -> None:
        """Drop every alternative not in ``allowed``."""
        self.alternatives.intersect_with(allowed)
        self.count = self.alternatives.count_ones()


type Cell = Collapsed | Alternatives

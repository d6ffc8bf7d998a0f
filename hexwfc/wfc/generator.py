"""Wave Function Collapse over hex grids with chronological backtracking.

The generator starts with every cell able to take any tile of the template.
Each ``step()`` collapses the most constrained pending cell to one of its
remaining tiles and narrows the alternatives of its neighbours. When a cell
runs out of alternatives the most recent collapse is undone and that tile is
ruled out at that coordinate (a rewind).

Usage:
    template = Template.from_sample(load_grid_file(path, TERRAIN_SYMBOLS))
    generator = Generator.new_with_seed(template, Seed.parse("AAEPWOIF"))
    generator.run()
    terrain = generator.export()

Determinism:
    A generator draws only from its own ``random.Random`` seeded with
    ``Seed.rng_seed``, and ties between equally constrained cells are broken
    by ``(q, r)``. The same template and seed always give the same map.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random

from hexwfc.hexgrid import Grid, GridLayout, HexCoord
from hexwfc.types import TileId

from .bitset import FixedBitSet
from .cell import Alternatives, Cell, Collapsed
from .errors import (
    CellNotCollapsedError,
    ContradictionError,
    IncompatibleSeedError,
)
from .seed import Seed, seed_type_for_layout
from .template import Template

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TrailEntry:
    """One collapse, kept so that it can be undone.

    Attributes:
        coord: The collapsed cell.
        tile: The tile chosen for it.
        rejected: Tiles already ruled out at ``coord`` before ``tile`` was
            chosen. Grows by one on every rewind of this cell.
    """

    coord: HexCoord
    tile: TileId
    rejected: list[TileId] = field(default_factory=list)


class Generator[L: GridLayout, T]:
    """Incremental map generator for one output grid.

    Attributes:
        template: Tiles and adjacency rules, shared read-only.
        seed: The seed this generator was created from.
        grid: Current state of every output cell.
        collapsed: Chronological trail of collapses.
        pending: Alternative count of each uncollapsed cell that has a
            collapsed neighbour (plus the starting cell).
        last_coord: Cell forced as the next step after a rewind.
        last_rejected: Rejected tiles staged for ``last_coord``.
    """

    def __init__(self, template: Template[T], layout: L, seed: Seed) -> None:
        if seed_type_for_layout(layout) != seed.seed_type:
            raise IncompatibleSeedError(
                f"Seed {seed.seed_type} does not describe layout {layout!r}"
            )
        tile_count = len(template)
        self.template = template
        self.seed = seed
        self.grid: Grid[L, Cell] = Grid.from_fn(
            layout, lambda _: Alternatives.full(tile_count)
        )
        self.collapsed: list[TrailEntry] = []
        self.pending: dict[HexCoord, int] = {layout.center(): tile_count}
        self.last_coord: HexCoord | None = None
        self.last_rejected: list[TileId] = []
        self._all_tiles = FixedBitSet.full(tile_count).freeze()
        self._rng = Random(seed.rng_seed)

    @classmethod
    def new_with_layout(cls, template: Template[T], layout: L) -> Generator[L, T]:
        """Create a generator for ``layout`` with a freshly drawn seed."""
        return cls(template, layout, Seed.for_layout(layout))

    @classmethod
    def new_with_seed(
        cls,
        template: Template[T],
        seed: Seed,
        layout_type: type[GridLayout] | None = None,
    ) -> Generator[GridLayout, T]:
        """Create a generator for the layout a seed describes.

        Raises:
            IncompatibleSeedError: If ``layout_type`` is given and the seed
                describes a different kind of layout.
        """
        layout = seed.layout()
        if layout_type is not None and not isinstance(layout, layout_type):
            raise IncompatibleSeedError(
                f"Seed {seed} describes a {type(layout).__name__}, "
                f"expected {layout_type.__name__}"
            )
        return cls(template, layout, seed)

    @property
    def layout(self) -> L:
        return self.grid.layout

    def is_done(self) -> bool:
        """Whether every cell reachable from the start has been collapsed."""
        return self.last_coord is None and not self.pending

    def alternatives(self, coord: HexCoord) -> FixedBitSet:
        """Tiles allowed at ``coord`` by its collapsed neighbours alone."""
        result = self._all_tiles.copy()
        for offset, neighbour in zip(
            HexCoord.NEIGHBOUR_OFFSETS, coord.neighbours(), strict=True
        ):
            cell = self.grid.get(neighbour)
            if isinstance(cell, Collapsed):
                result.intersect_with(self.template.compatible(cell.tile, -offset))
        return result

    def _next_coord(self) -> HexCoord | None:
        if self.last_coord is not None:
            coord, self.last_coord = self.last_coord, None
            return coord
        if not self.pending:
            return None
        return min(self.pending, key=lambda coord: (self.pending[coord], coord))

    def step(self) -> HexCoord | None:
        """Collapse one cell, or rewind if it has no alternatives left.

        Returns:
            The coordinate that was processed, or None if generation is done.

        Raises:
            ContradictionError: If the first cell runs out of tiles, so the
                template cannot fill this layout.
        """
        forced = self.last_coord is not None
        coord = self._next_coord()
        if coord is None:
            return None
        rejected: list[TileId] = []
        if forced:
            rejected, self.last_rejected = self.last_rejected, []

        cell = self.grid[coord]
        assert isinstance(cell, Alternatives), f"{coord} is already collapsed"

        tile = cell.select(self._rng)
        if tile is None:
            if not self.collapsed:
                raise ContradictionError(
                    f"No tile fits at {coord} with seed {self.seed}"
                )
            logger.debug(f"Contradiction at {coord}, rewinding")
            self.rewind()
            return coord

        assert tile not in rejected, f"tile {tile} was already rejected at {coord}"
        self.grid[coord] = Collapsed(tile)
        self.pending.pop(coord, None)
        self.collapsed.append(TrailEntry(coord, tile, rejected))
        self.propagate(coord, tile)
        return coord

    def propagate(self, coord: HexCoord, tile: TileId) -> None:
        """Narrow the uncollapsed neighbours of a freshly collapsed cell."""
        for offset, allowed in self.template.compatible_tiles(tile):
            neighbour = coord + offset
            cell = self.grid.get(neighbour)
            if isinstance(cell, Alternatives):
                cell.retain(allowed)
                self.pending[neighbour] = cell.count

    def rewind(self) -> None:
        """Undo the most recent collapse and rule its tile out there."""
        assert self.collapsed, "cannot rewind an empty trail"
        entry = self.collapsed.pop()
        entry.rejected.append(entry.tile)
        logger.debug(
            f"Rewinding {entry.coord}, {len(entry.rejected)} tiles rejected there"
        )

        alternatives = self.alternatives(entry.coord)
        for rejected in entry.rejected:
            alternatives.set(rejected, False)
        restored = Alternatives.from_bitset(alternatives)
        self.grid[entry.coord] = restored
        self.pending[entry.coord] = restored.count

        for neighbour in entry.coord.neighbours():
            cell = self.grid.get(neighbour)
            if isinstance(cell, Alternatives):
                cell.set_alternatives(self.alternatives(neighbour))
                self.pending[neighbour] = cell.count

        self.last_coord = entry.coord
        self.last_rejected = entry.rejected

    def run(self, max_steps: int | None = None) -> bool:
        """Step until done or until ``max_steps`` steps have been taken.

        Returns:
            True if generation finished, False if the step budget ran out.
        """
        steps = 0
        while not self.is_done():
            if max_steps is not None and steps >= max_steps:
                logger.info(
                    f"Stopped after {steps} steps with {len(self.pending)} "
                    "cells pending"
                )
                return False
            self.step()
            steps += 1
        logger.info(
            f"Generated {self.layout.size()} cells in {steps} steps (seed {self.seed})"
        )
        return True

    def export(self) -> Grid[L, T]:
        """The finished map as a grid of tile contributions.

        Raises:
            CellNotCollapsedError: If any cell is still uncollapsed.
        """
        values: list[T] = []
        for coord, cell in self.grid.items():
            if not isinstance(cell, Collapsed):
                raise CellNotCollapsedError(f"Cell {coord} is not collapsed")
            values.append(self.template.contribution(cell.tile))
        return Grid.with_data(self.layout, values)


def generate[T](
    template: Template[T], seed: Seed, max_steps: int | None = None
) -> Grid[GridLayout, T]:
    """Generate the map described by ``seed`` in one call.

    Raises:
        CellNotCollapsedError: If ``max_steps`` ran out first.
        ContradictionError: If the template cannot fill the layout.
    """
    generator = Generator.new_with_seed(template, seed)
    generator.run(max_steps)
    return generator.export()

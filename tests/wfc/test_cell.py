from __future__ import annotations

import random

from hexwfc.wfc import Alternatives, Collapsed, FixedBitSet


class TestAlternatives:
    def test_full(self) -> None:
        cell = Alternatives.full(12)
        assert cell.count == 12
        assert cell.alternatives.count_ones() == 12

    def test_select_picks_a_remaining_tile(self) -> None:
        """Selection only ever returns tiles whose bit is set."""
        cell = Alternatives.from_bitset(FixedBitSet.from_indices(100, [3, 40, 77]))
        rng = random.Random(7)
        picks = {cell.select(rng) for _ in range(50)}
        assert picks <= {3, 40, 77}
        assert len(picks) > 1

    def test_select_is_deterministic(self) -> None:
        cell = Alternatives.full(30)
        first = [cell.select(random.Random(99)) for _ in range(3)]
        assert len(set(first)) == 1

    def test_select_from_empty_returns_none(self) -> None:
        """An empty cell is a contradiction, not an error."""
        cell = Alternatives.from_bitset(FixedBitSet.with_capacity(4))
        assert cell.count == 0
        assert cell.select(random.Random(0)) is None

    def test_retain_updates_count(self) -> None:
        cell = Alternatives.full(6)
        cell.retain(FixedBitSet.from_indices(6, [1, 4]))
        assert cell.count == 2
        assert list(cell.alternatives) == [1, 4]

    def test_set_alternatives_updates_count(self) -> None:
        cell = Alternatives.full(6)
        cell.set_alternatives(FixedBitSet.from_indices(6, [5]))
        assert cell.count == 1

    def test_full_cells_do_not_share_bitsets(self) -> None:
        a = Alternatives.full(4)
        b = Alternatives.full(4)
        a.retain(FixedBitSet.with_capacity(4))
        assert b.count == 4


class TestCollapsed:
    def test_collapsed_is_a_value(self) -> None:
        assert Collapsed(3) == Collapsed(3)
        assert Collapsed(3) != Collapsed(4)

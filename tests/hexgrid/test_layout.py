from __future__ import annotations

import pytest

from hexwfc.hexgrid import (
    HexagonalGridLayout,
    HexCoord,
    SquareGridLayout,
    ring,
)


class TestHexagonalGridLayout:
    def test_sizes(self) -> None:
        """Radius counts the centre cell."""
        assert [HexagonalGridLayout(r).size() for r in range(1, 5)] == [1, 7, 19, 37]
        assert len(HexagonalGridLayout(3)) == 19

    def test_known_offsets(self) -> None:
        layout = HexagonalGridLayout(2)
        assert layout.offset(HexCoord.ZERO) == 3
        assert layout.offset(HexCoord(0, 1)) == 6
        assert list(HexagonalGridLayout(3))[7] == HexCoord(-2, 0)

    @pytest.mark.parametrize("radius", range(1, 8))
    def test_offsets_follow_iteration_order(self, radius: int) -> None:
        """offset() numbers the coordinates 0..size-1 in scan order."""
        layout = HexagonalGridLayout(radius)
        coords = list(layout)
        assert len(coords) == layout.size()
        assert [layout.offset(c) for c in coords] == list(range(layout.size()))

    def test_contains_and_offset_agree(self) -> None:
        layout = HexagonalGridLayout(3)
        for coord in HexagonalGridLayout(5):
            assert (layout.offset(coord) is not None) == layout.contains(coord)
            assert (coord in layout) == (coord.length() <= 2)

    def test_center_is_origin(self) -> None:
        assert HexagonalGridLayout(6).center() == HexCoord.ZERO

    def test_mirror_centers(self) -> None:
        """Neighbouring copies of the grid sit 2R-1 steps away."""
        layout = HexagonalGridLayout(3)
        centers = layout.mirror_centers()
        assert centers[0] == HexCoord(5, -2)
        assert len(set(centers)) == 6
        assert all(center.length() == 5 for center in centers)

    def test_wrap_known_coordinate(self) -> None:
        assert HexagonalGridLayout(3).wrap(HexCoord(3, 0)) == HexCoord(-2, 2)

    @pytest.mark.parametrize("radius", range(2, 6))
    def test_wrap_lands_inside(self, radius: int) -> None:
        """Every coordinate of the first outer ring wraps into the layout."""
        layout = HexagonalGridLayout(radius)
        for coord in ring(HexCoord.ZERO, radius + 1):
            assert layout.wrap(coord) in layout


class TestSquareGridLayout:
    def test_iteration_order(self) -> None:
        """Rows shift left by one q every second row."""
        assert list(SquareGridLayout(3, 3)) == [
            HexCoord(0, 0),
            HexCoord(1, 0),
            HexCoord(2, 0),
            HexCoord(0, 1),
            HexCoord(1, 1),
            HexCoord(2, 1),
            HexCoord(-1, 2),
            HexCoord(0, 2),
            HexCoord(1, 2),
        ]

    def test_offsets_follow_iteration_order(self) -> None:
        layout = SquareGridLayout(5, 4)
        assert [layout.offset(c) for c in layout] == list(range(20))

    def test_outside_coordinates(self) -> None:
        layout = SquareGridLayout(3, 3)
        assert layout.offset(HexCoord(-1, 0)) is None
        assert layout.offset(HexCoord(2, 2)) is None
        assert HexCoord(0, 3) not in layout
        assert HexCoord(-1, 2) in layout

    def test_center(self) -> None:
        layout = SquareGridLayout(6, 5)
        assert layout.center() == HexCoord(2, 2)
        assert layout.center() in layout

    def test_wrap_is_unsupported(self) -> None:
        with pytest.raises(NotImplementedError):
            SquareGridLayout(3, 3).wrap(HexCoord(3, 0))

    def test_layouts_are_values(self) -> None:
        assert SquareGridLayout(2, 3) == SquareGridLayout(2, 3)
        assert SquareGridLayout(2, 3) != SquareGridLayout(3, 2)
        assert hash(HexagonalGridLayout(4)) == hash(HexagonalGridLayout(4))

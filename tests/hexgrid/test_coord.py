from __future__ import annotations

from collections import deque

import pytest

from hexwfc.hexgrid import HexCoord


class TestHexCoordConstruction:
    def test_from_qrs_accepts_zero_sum(self) -> None:
        """Cube components that sum to zero give the axial pair."""
        assert HexCoord.from_qrs(2, -3, 1) == HexCoord(2, -3)

    def test_from_qrs_rejects_non_zero_sum(self) -> None:
        """Cube components that do not sum to zero are rejected."""
        with pytest.raises(ValueError, match="do not sum to 0"):
            HexCoord.from_qrs(1, 1, 1)

    def test_cube_component(self) -> None:
        """s is derived from q and r."""
        coord = HexCoord(2, -5)
        assert coord.s == 3
        assert coord.qrs() == (2, -5, 3)

    def test_coords_are_hashable_values(self) -> None:
        """Equal coordinates hash equally and collapse in sets."""
        assert len({HexCoord(1, 2), HexCoord(1, 2), HexCoord(2, 1)}) == 2


class TestHexCoordArithmetic:
    def test_add_sub_neg(self) -> None:
        a = HexCoord(1, -2)
        b = HexCoord(-3, 4)
        assert a + b == HexCoord(-2, 2)
        assert a - b == HexCoord(4, -6)
        assert -a == HexCoord(-1, 2)

    def test_scalar_multiplication_both_sides(self) -> None:
        """Coordinates scale by an integer from either side."""
        assert HexCoord(1, -1) * 3 == HexCoord(3, -3)
        assert 2 * HexCoord(1, -1) == HexCoord(2, -2)

    def test_length_and_distance(self) -> None:
        """Length counts single steps from the origin."""
        assert HexCoord.ZERO.length() == 0
        assert HexCoord(2, -3).length() == 3
        assert HexCoord(3, 3).length() == 6
        assert HexCoord(1, 0).distance(HexCoord(-2, 2)) == 3

    def test_distance_matches_shortest_path(self) -> None:
        """Breadth-first search over neighbour steps agrees with distance."""
        limit = 6
        steps = {HexCoord.ZERO: 0}
        frontier = deque([HexCoord.ZERO])
        while frontier:
            coord = frontier.popleft()
            if steps[coord] == limit:
                continue
            for neighbour in coord.neighbours():
                if neighbour not in steps:
                    steps[neighbour] = steps[coord] + 1
                    frontier.append(neighbour)
        assert len(steps) == 3 * limit * (limit + 1) + 1
        for coord, count in steps.items():
            assert HexCoord.ZERO.distance(coord) == count
            assert coord.length() == count

    def test_ordering_is_by_q_then_r(self) -> None:
        coords = [HexCoord(1, 0), HexCoord(0, 2), HexCoord(0, -1)]
        assert sorted(coords) == [HexCoord(0, -1), HexCoord(0, 2), HexCoord(1, 0)]

    def test_str_form(self) -> None:
        assert str(HexCoord(1, -2)) == "q1r-2"


class TestNeighbours:
    def test_neighbour_offsets_order(self) -> None:
        """Offsets run counter-clockwise starting east."""
        assert HexCoord.NEIGHBOUR_OFFSETS == (
            HexCoord(1, 0),
            HexCoord(0, 1),
            HexCoord(-1, 1),
            HexCoord(-1, 0),
            HexCoord(0, -1),
            HexCoord(1, -1),
        )

    def test_neighbours_are_adjacent(self) -> None:
        """Every neighbour is exactly one step away."""
        center = HexCoord(4, -7)
        neighbours = list(center.neighbours())
        assert len(neighbours) == 6
        assert all(center.distance(n) == 1 for n in neighbours)
        assert neighbours[0] == HexCoord(5, -7)

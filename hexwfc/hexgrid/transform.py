"""Symmetry transforms over hex coordinates.

Every rotation and reflection of the hex grid is a linear map on cube
coordinates, so each transform can be expressed as a 3x3 integer matrix.
Composite transforms are built by multiplying these matrices together.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from functools import reduce

import numpy as np

from .coord import HexCoord


def _from_cols(
    x_axis: tuple[int, int, int],
    y_axis: tuple[int, int, int],
    z_axis: tuple[int, int, int],
) -> np.ndarray:
    matrix = np.array([x_axis, y_axis, z_axis], dtype=np.int64).T
    matrix.flags.writeable = False
    return matrix


class Transform(Enum):
    """Base symmetry transforms of a hexagonal grid."""

    IDENTITY = "identity"
    ROTATE_CLOCKWISE_60 = "rotate_cw_60"
    ROTATE_CLOCKWISE_120 = "rotate_cw_120"
    ROTATE_CLOCKWISE_180 = "rotate_cw_180"
    ROTATE_CLOCKWISE_240 = "rotate_cw_240"
    ROTATE_CLOCKWISE_300 = "rotate_cw_300"
    REFLECT_Q = "reflect_q"
    REFLECT_R = "reflect_r"
    REFLECT_S = "reflect_s"

    def apply(self, coord: HexCoord) -> HexCoord:
        """Apply the transform directly to a coordinate."""
        q, r, s = coord.qrs()
        match self:
            case Transform.IDENTITY:
                return coord
            case Transform.ROTATE_CLOCKWISE_60:
                return HexCoord(-r, -s)
            case Transform.ROTATE_CLOCKWISE_120:
                return HexCoord(s, q)
            case Transform.ROTATE_CLOCKWISE_180:
                return HexCoord(-q, -r)
            case Transform.ROTATE_CLOCKWISE_240:
                return HexCoord(r, s)
            case Transform.ROTATE_CLOCKWISE_300:
                return HexCoord(-s, -q)
            case Transform.REFLECT_Q:
                return HexCoord(q, s)
            case Transform.REFLECT_R:
                return HexCoord(s, r)
            case Transform.REFLECT_S:
                return HexCoord(r, q)

    @property
    def matrix(self) -> np.ndarray:
        """The read-only cube-coordinate matrix for this transform."""
        return _MATRICES[self]

    @classmethod
    def rotations(cls) -> tuple[Transform, ...]:
        """The six rotations, starting with the identity."""
        return (
            cls.IDENTITY,
            cls.ROTATE_CLOCKWISE_60,
            cls.ROTATE_CLOCKWISE_120,
            cls.ROTATE_CLOCKWISE_180,
            cls.ROTATE_CLOCKWISE_240,
            cls.ROTATE_CLOCKWISE_300,
        )


_MATRICES: dict[Transform, np.ndarray] = {
    Transform.IDENTITY: _from_cols((1, 0, 0), (0, 1, 0), (0, 0, 1)),
    Transform.ROTATE_CLOCKWISE_60: _from_cols((0, 0, -1), (-1, 0, 0), (0, -1, 0)),
    Transform.ROTATE_CLOCKWISE_120: _from_cols((0, 1, 0), (0, 0, 1), (1, 0, 0)),
    Transform.ROTATE_CLOCKWISE_180: _from_cols((-1, 0, 0), (0, -1, 0), (0, 0, -1)),
    Transform.ROTATE_CLOCKWISE_240: _from_cols((0, 0, 1), (1, 0, 0), (0, 1, 0)),
    Transform.ROTATE_CLOCKWISE_300: _from_cols((0, -1, 0), (0, 0, -1), (-1, 0, 0)),
    Transform.REFLECT_Q: _from_cols((1, 0, 0), (0, 0, 1), (0, 1, 0)),
    Transform.REFLECT_R: _from_cols((0, 0, 1), (0, 1, 0), (1, 0, 0)),
    Transform.REFLECT_S: _from_cols((0, 1, 0), (1, 0, 0), (0, 0, 1)),
}


class TransformMatrix:
    """A (possibly composite) transform held as an integer matrix.

    ``TransformMatrix.from_transforms([a, b])`` is ``a.matrix @ b.matrix``,
    which applies ``b`` first and ``a`` second.
    """

    __slots__ = ("_value",)

    def __init__(self, value: np.ndarray) -> None:
        value = np.array(value, dtype=np.int64)
        if value.shape != (3, 3):
            raise ValueError(f"Transform matrix must be 3x3, got {value.shape}")
        value.flags.writeable = False
        self._value = value

    @classmethod
    def from_transform(cls, transform: Transform) -> TransformMatrix:
        return cls(transform.matrix)

    @classmethod
    def from_transforms(cls, transforms: Iterable[Transform]) -> TransformMatrix:
        """Compose transforms by multiplying their matrices left to right.

        Raises:
            ValueError: If ``transforms`` is empty.
        """
        matrices = [transform.matrix for transform in transforms]
        if not matrices:
            raise ValueError("Cannot compose an empty sequence of transforms")
        return cls(reduce(np.matmul, matrices))

    @property
    def value(self) -> np.ndarray:
        return self._value

    def apply(self, coord: HexCoord) -> HexCoord:
        q, r, s = (int(v) for v in self._value @ np.array(coord.qrs(), np.int64))
        return HexCoord.from_qrs(q, r, s)

    def __matmul__(self, other: TransformMatrix) -> TransformMatrix:
        return TransformMatrix(self._value @ other._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransformMatrix):
            return NotImplemented
        return bool(np.array_equal(self._value, other._value))

    def __hash__(self) -> int:
        return hash(self._value.tobytes())

    def __repr__(self) -> str:
        return f"TransformMatrix({self._value.tolist()})"

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

from .coord import HexCoord


class Neighbours[T]:
    """Fixed container holding one value per neighbour direction.

    Slots follow ``HexCoord.NEIGHBOUR_OFFSETS`` and can be looked up either by
    index or by the offset itself.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Sequence[T]) -> None:
        if len(values) != 6:
            raise ValueError(f"Neighbours needs exactly 6 values, got {len(values)}")
        self._values: tuple[T, ...] = tuple(values)

    @classmethod
    def from_fn(cls, fn: Callable[[HexCoord], T]) -> Neighbours[T]:
        """Build from a function of each neighbour offset."""
        return cls([fn(offset) for offset in HexCoord.NEIGHBOUR_OFFSETS])

    @classmethod
    def from_fn_around(
        cls, origin: HexCoord, fn: Callable[[HexCoord], T]
    ) -> Neighbours[T]:
        """Build from a function of each neighbouring coordinate of ``origin``."""
        return cls.from_fn(lambda offset: fn(origin + offset))

    @property
    def values(self) -> tuple[T, ...]:
        return self._values

    def items(self) -> Iterator[tuple[HexCoord, T]]:
        return zip(HexCoord.NEIGHBOUR_OFFSETS, self._values, strict=True)

    def map[U](self, fn: Callable[[T], U]) -> Neighbours[U]:
        return Neighbours([fn(value) for value in self._values])

    def __getitem__(self, key: int | HexCoord) -> T:
        if isinstance(key, HexCoord):
            return self._values[HexCoord.NEIGHBOUR_OFFSETS.index(key)]
        return self._values[key]

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def __len__(self) -> int:
        return 6

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Neighbours):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Neighbours({list(self._values)!r})"

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from .coord import HexCoord
from .layout import GridLayout


class Grid[L: GridLayout, T]:
    """Dense per-cell storage addressed by hex coordinate.

    Values live in a flat list in the layout's storage order. Indexing with
    ``grid[coord]`` raises ``KeyError`` outside the layout, while ``get`` and
    ``set`` quietly ignore such coordinates.
    """

    __slots__ = ("_data", "layout")

    def __init__(self, layout: L, data: list[T]) -> None:
        if len(data) != layout.size():
            raise ValueError(
                f"Grid data has {len(data)} values, layout expects {layout.size()}"
            )
        self.layout = layout
        self._data = data

    @classmethod
    def with_fill(cls, layout: L, fill: T) -> Grid[L, T]:
        """Create a grid with every cell set to ``fill``."""
        return cls(layout, [fill] * layout.size())

    @classmethod
    def from_fn(cls, layout: L, factory: Callable[[HexCoord], T]) -> Grid[L, T]:
        """Create a grid by calling ``factory`` once for every coordinate."""
        return cls(layout, [factory(coord) for coord in layout])

    @classmethod
    def with_data(cls, layout: L, data: Iterable[T]) -> Grid[L, T]:
        """Create a grid from values given in the layout's storage order."""
        return cls(layout, list(data))

    def _offset(self, position: HexCoord) -> int:
        offset = self.layout.offset(position)
        if offset is None:
            raise KeyError(position)
        return offset

    def __getitem__(self, position: HexCoord) -> T:
        return self._data[self._offset(position)]

    def __setitem__(self, position: HexCoord, value: T) -> None:
        self._data[self._offset(position)] = value

    def __contains__(self, position: object) -> bool:
        return position in self.layout

    def __len__(self) -> int:
        return len(self._data)

    def get[D](self, position: HexCoord, default: D = None) -> T | D:
        offset = self.layout.offset(position)
        if offset is None:
            return default
        return self._data[offset]

    def set(self, position: HexCoord, value: T) -> None:
        offset = self.layout.offset(position)
        if offset is not None:
            self._data[offset] = value

    def extend(self, items: Iterable[tuple[HexCoord, T]]) -> None:
        """Store each ``(coord, value)`` pair, skipping coordinates outside."""
        for position, value in items:
            self.set(position, value)

    def items(self) -> Iterator[tuple[HexCoord, T]]:
        return zip(self.layout, self._data, strict=True)

    def values(self) -> Iterator[T]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.layout == other.layout and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(layout={self.layout!r})"

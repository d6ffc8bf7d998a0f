"""Text form of hexagonal and square grids.

Each row of a hexagonal grid of radius ``R`` is one line, for
``r = 1-R .. R-1``. A line is ``|r|`` spaces followed by ``" x"`` for each
symbol ``x`` in the row, so a radius 2 grid reads::

      ~ ~
     ~ ^ ~
      ~ ~

Square grids are dumped with every odd row indented by one space.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

from hexwfc.hexgrid import (
    Grid,
    GridLayout,
    HexagonalGridLayout,
    HexCoord,
    SquareGridLayout,
)

from .errors import GridParseError, UnknownSymbolError


def _strip_blank_lines(text: str) -> tuple[list[str], int]:
    """Split ``text`` into lines without leading or trailing blank lines.

    Returns the remaining lines and the number of leading lines dropped.
    """
    lines = text.splitlines()
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    end = len(lines)
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end], start


def load_grid_with[T](
    text: str, parse: Callable[[str], T]
) -> Grid[HexagonalGridLayout, T]:
    """Parse a hexagonal grid, converting each symbol with ``parse``.

    Raises:
        GridParseError: If the text is empty, has an even number of rows or a
            row of the wrong shape.
        UnknownSymbolError: If ``parse`` raises it for a symbol. The error is
            re-raised with the line and column of the symbol.
    """
    lines, skipped = _strip_blank_lines(text)
    if not lines:
        raise GridParseError("grid text is empty")
    if len(lines) % 2 == 0:
        raise GridParseError(
            f"a hexagonal grid needs an odd row count, got {len(lines)}"
        )

    radius = len(lines) // 2 + 1
    values: list[T] = []
    for index, raw_line in enumerate(lines):
        lineno = skipped + index + 1
        line = raw_line.rstrip()
        r = index - (radius - 1)
        indent = abs(r) + 1
        width = 2 * radius - 1 - abs(r)

        if line[:indent].strip():
            raise GridParseError(f"expected {indent - 1} spaces of indentation", lineno)
        body = line[indent:]
        if len(body) != 2 * width - 1:
            raise GridParseError(
                f"expected {width} symbols, row has {(len(body) + 1) // 2}", lineno
            )
        if body[1::2].strip():
            raise GridParseError("symbols must be separated by single spaces", lineno)

        for k, symbol in enumerate(body[0::2]):
            column = indent + 2 * k + 1
            if symbol.isspace():
                raise GridParseError(f"missing symbol at column {column}", lineno)
            try:
                values.append(parse(symbol))
            except UnknownSymbolError as exc:
                if exc.line is not None:
                    raise
                raise UnknownSymbolError(symbol, lineno, column) from exc

    return Grid.with_data(HexagonalGridLayout(radius), values)


def load_grid[T](
    text: str, symbols: Mapping[str, T] | None = None
) -> Grid[HexagonalGridLayout, T] | Grid[HexagonalGridLayout, str]:
    """Parse a hexagonal grid, mapping symbols through ``symbols``.

    Without a mapping the grid holds the raw one-character strings.

    Raises:
        GridParseError: On malformed text.
        UnknownSymbolError: If a symbol is missing from ``symbols``.
    """
    if symbols is None:
        return load_grid_with(text, str)

    def lookup(symbol: str) -> T:
        try:
            return symbols[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol) from None

    return load_grid_with(text, lookup)


def load_grid_file[T](
    path: str | Path, symbols: Mapping[str, T] | None = None
) -> Grid[HexagonalGridLayout, T] | Grid[HexagonalGridLayout, str]:
    """Read and parse a sample file. See ``load_grid``."""
    return load_grid(Path(path).read_text(encoding="utf-8"), symbols)


def dump_grid[T](grid: Grid[GridLayout, T], symbol: Callable[[T], str] = str) -> str:
    """Render a hexagonal or square grid as text, one line per row.

    Raises:
        TypeError: For layouts that have no text form.
    """
    lines: list[str] = []
    match grid.layout:
        case HexagonalGridLayout(radius=radius):
            extent = radius - 1
            for r in range(-extent, extent + 1):
                q_min = max(-extent, -extent - r)
                q_max = min(extent, extent - r)
                cells = "".join(
                    f" {symbol(grid[HexCoord(q, r)])}"
                    for q in range(q_min, q_max + 1)
                )
                lines.append(" " * abs(r) + cells)
        case SquareGridLayout(width=width, height=height):
            for r in range(height):
                cells = "".join(
                    f" {symbol(grid[HexCoord(q, r)])}"
                    for q in range(-(r // 2), width - r // 2)
                )
                lines.append((" " if r % 2 else "") + cells)
        case layout:
            raise TypeError(f"Cannot dump grid with layout {layout!r}")
    return "\n".join(lines) + "\n"


def wrap_grid[T](grid: Grid[HexagonalGridLayout, T]) -> Grid[HexagonalGridLayout, T]:
    """Grow a hexagonal grid by one ring, as if it tiled the plane.

    Interior cells are copied and each cell of the new outer ring takes the
    value of the cell it wraps onto.
    """
    layout = grid.layout

    def value_at(coord: HexCoord) -> T:
        if coord in layout:
            return grid[coord]
        return grid[layout.wrap(coord)]

    return Grid.from_fn(HexagonalGridLayout(layout.radius + 1), value_at)

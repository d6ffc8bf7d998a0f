from __future__ import annotations


class WFCError(Exception):
    """Base class for errors raised by the map generator."""


class IncompatibleSeedError(WFCError):
    """A seed's shape does not match the requested output layout."""


class InvalidSeedError(WFCError):
    """A seed string could not be decoded."""


class CellNotCollapsedError(WFCError):
    """A generator was exported before every cell was collapsed."""


class GridParseError(WFCError):
    """Sample text does not describe a hexagonal grid."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class UnknownSymbolError(GridParseError):
    """Sample text contains a symbol the caller did not map."""

    def __init__(self, symbol: str, line: int | None = None, column: int | None = None):
        self.symbol = symbol
        self.column = column
        where = f" at column {column}" if column is not None else ""
        super().__init__(f"unknown symbol {symbol!r}{where}", line)


class ContradictionError(WFCError):
    """Every tile has been ruled out at the first collapsed cell.

    No arrangement of the template's tiles fills the requested layout.
    """

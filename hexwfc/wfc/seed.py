"""Map seeds: output shape plus generator RNG seed, as a short shareable string.

A seed is serialised to bytes with a compact little-endian varint encoding and
then written as unpadded RFC 4648 base32, e.g. ``"AAEPWOIF"`` for a radius 8
hexagonal map with RNG seed 1337.

Varint format: values below 251 are a single byte. Larger values are a marker
byte (251, 252 or 253) followed by the value as a little-endian u16, u32 or
u64 respectively. A seed is the layout variant index (0 hexagonal, 1 square),
the layout dimensions and finally the RNG seed.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from hexwfc.hexgrid import GridLayout, HexagonalGridLayout, SquareGridLayout
from hexwfc.util import rng

from .errors import IncompatibleSeedError, InvalidSeedError

_U16_MAX = 2**16 - 1
_U64_MAX = 2**64 - 1

_SINGLE_BYTE_MAX = 250
_MARKER_U16 = 251
_MARKER_U32 = 252
_MARKER_U64 = 253

_HEXAGONAL_VARIANT = 0
_SQUARE_VARIANT = 1

_seed_rng = rng.get("wfc.seed")


def _check_dimension(name: str, value: int) -> None:
    if not 1 <= value <= _U16_MAX:
        raise ValueError(f"{name} must be between 1 and {_U16_MAX}, got {value}")


@dataclass(frozen=True, slots=True)
class HexagonalSeedType:
    radius: int

    def __post_init__(self) -> None:
        _check_dimension("radius", self.radius)

    def layout(self) -> HexagonalGridLayout:
        return HexagonalGridLayout(self.radius)


@dataclass(frozen=True, slots=True)
class SquareSeedType:
    width: int
    height: int

    def __post_init__(self) -> None:
        _check_dimension("width", self.width)
        _check_dimension("height", self.height)

    def layout(self) -> SquareGridLayout:
        return SquareGridLayout(self.width, self.height)


type SeedType = HexagonalSeedType | SquareSeedType


def seed_type_for_layout(layout: GridLayout) -> SeedType:
    """The seed type describing ``layout``.

    Raises:
        IncompatibleSeedError: If the layout has no seed representation,
            including empty layouts and dimensions beyond 16 bits.
    """
    try:
        match layout:
            case HexagonalGridLayout(radius=radius):
                return HexagonalSeedType(radius)
            case SquareGridLayout(width=width, height=height):
                return SquareSeedType(width, height)
    except ValueError as exc:
        raise IncompatibleSeedError(f"No seed for layout {layout!r}: {exc}") from exc
    raise IncompatibleSeedError(f"No seed type for layout {layout!r}")


def _write_varint(out: bytearray, value: int) -> None:
    if value <= _SINGLE_BYTE_MAX:
        out.append(value)
    elif value <= _U16_MAX:
        out.append(_MARKER_U16)
        out += value.to_bytes(2, "little")
    elif value <= 2**32 - 1:
        out.append(_MARKER_U32)
        out += value.to_bytes(4, "little")
    else:
        out.append(_MARKER_U64)
        out += value.to_bytes(8, "little")


class _Reader:
    """Cursor over seed bytes that raises InvalidSeedError on malformed input."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def _take(self, size: int) -> bytes:
        if self._pos + size > len(self._data):
            raise InvalidSeedError("Seed is truncated")
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def varint(self, limit: int = _U64_MAX) -> int:
        marker = self._take(1)[0]
        if marker <= _SINGLE_BYTE_MAX:
            value = marker
        elif marker == _MARKER_U16:
            value = int.from_bytes(self._take(2), "little")
        elif marker == _MARKER_U32:
            value = int.from_bytes(self._take(4), "little")
        elif marker == _MARKER_U64:
            value = int.from_bytes(self._take(8), "little")
        else:
            raise InvalidSeedError(f"Invalid varint marker byte {marker}")
        if value > limit:
            raise InvalidSeedError(f"Seed value {value} is out of range")
        return value

    def dimension(self) -> int:
        value = self.varint(_U16_MAX)
        if value < 1:
            raise InvalidSeedError("Seed describes an empty map")
        return value

    def finish(self) -> None:
        if self._pos != len(self._data):
            raise InvalidSeedError(
                f"Seed has {len(self._data) - self._pos} unexpected trailing bytes"
            )


@dataclass(frozen=True, slots=True)
class Seed:
    """Everything needed to reproduce a generated map."""

    seed_type: SeedType
    rng_seed: int

    def __post_init__(self) -> None:
        if not 0 <= self.rng_seed <= _U64_MAX:
            raise ValueError(f"rng_seed must fit in 64 bits, got {self.rng_seed}")

    @classmethod
    def new(cls, seed_type: SeedType) -> Seed:
        """A seed of the given shape with an RNG seed from the ``wfc.seed`` stream."""
        return cls(seed_type, _seed_rng.getrandbits(64))

    @classmethod
    def for_layout(cls, layout: GridLayout) -> Seed:
        return cls.new(seed_type_for_layout(layout))

    def layout(self) -> GridLayout:
        return self.seed_type.layout()

    def to_bytes(self) -> bytes:
        out = bytearray()
        match self.seed_type:
            case HexagonalSeedType(radius=radius):
                _write_varint(out, _HEXAGONAL_VARIANT)
                _write_varint(out, radius)
            case SquareSeedType(width=width, height=height):
                _write_varint(out, _SQUARE_VARIANT)
                _write_varint(out, width)
                _write_varint(out, height)
        _write_varint(out, self.rng_seed)
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes) -> Seed:
        """Decode a seed, rejecting unknown variants and trailing bytes.

        Raises:
            InvalidSeedError: If ``data`` is not a complete encoded seed or
                describes a map with a zero dimension.
        """
        reader = _Reader(data)
        variant = reader.varint()
        seed_type: SeedType
        if variant == _HEXAGONAL_VARIANT:
            seed_type = HexagonalSeedType(reader.dimension())
        elif variant == _SQUARE_VARIANT:
            width = reader.dimension()
            seed_type = SquareSeedType(width, reader.dimension())
        else:
            raise InvalidSeedError(f"Unknown seed variant {variant}")
        rng_seed = reader.varint()
        reader.finish()
        return cls(seed_type, rng_seed)

    @classmethod
    def parse(cls, text: str) -> Seed:
        """Decode a seed string as produced by ``str(seed)``.

        Raises:
            InvalidSeedError: If ``text`` is not valid base32 or does not
                decode to a seed.
        """
        text = text.strip()
        if not text:
            raise InvalidSeedError("Seed string is empty")
        padded = text + "=" * (-len(text) % 8)
        try:
            data = base64.b32decode(padded, casefold=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidSeedError(f"Seed {text!r} is not valid base32") from exc
        return cls.from_bytes(data)

    def __str__(self) -> str:
        return base64.b32encode(self.to_bytes()).decode("ascii").rstrip("=")

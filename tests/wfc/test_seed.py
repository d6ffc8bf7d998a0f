from __future__ import annotations

import base64

import pytest

from hexwfc.hexgrid import HexagonalGridLayout, SquareGridLayout
from hexwfc.util import rng
from hexwfc.wfc import (
    HexagonalSeedType,
    IncompatibleSeedError,
    InvalidSeedError,
    Seed,
    SquareSeedType,
)
from hexwfc.wfc.seed import seed_type_for_layout


def encode(data: bytes) -> str:
    return base64.b32encode(data).decode("ascii").rstrip("=")


class TestSeedEncoding:
    def test_known_seed_string(self) -> None:
        seed = Seed.parse("AAEPWOIF")
        assert seed == Seed(HexagonalSeedType(8), 1337)
        assert seed.to_bytes() == bytes([0x00, 0x08, 0xFB, 0x39, 0x05])
        assert str(seed) == "AAEPWOIF"

    def test_large_rng_seed_string(self) -> None:
        """A full 64-bit RNG seed takes a marker byte and eight value bytes."""
        seed = Seed.parse("AAFP26SGQFDAYVCFVE")
        assert seed.seed_type == HexagonalSeedType(10)
        assert seed.rng_seed == 0xA945540C4681467A
        assert len(seed.to_bytes()) == 11
        assert str(seed) == "AAFP26SGQFDAYVCFVE"

    def test_square_seed_bytes(self) -> None:
        seed = Seed(SquareSeedType(300, 7), 2**40)
        assert seed.to_bytes() == (
            bytes([0x01, 0xFB, 0x2C, 0x01, 0x07, 0xFD]) + (2**40).to_bytes(8, "little")
        )
        assert Seed.parse(str(seed)) == seed

    @pytest.mark.parametrize(
        ("rng_seed", "length"),
        [(0, 3), (250, 3), (251, 5), (65535, 5), (65536, 7), (2**32, 11)],
    )
    def test_varint_widths(self, rng_seed: int, length: int) -> None:
        seed = Seed(HexagonalSeedType(2), rng_seed)
        assert len(seed.to_bytes()) == length
        assert Seed.from_bytes(seed.to_bytes()) == seed

    def test_lowercase_is_accepted(self) -> None:
        assert Seed.parse("aaepwoif") == Seed(HexagonalSeedType(8), 1337)


class TestInvalidSeeds:
    @pytest.mark.parametrize("text", ["", "   ", "A", "!!!!!!!!", "AAEPWOI1"])
    def test_malformed_text(self, text: str) -> None:
        with pytest.raises(InvalidSeedError):
            Seed.parse(text)

    def test_trailing_bytes_are_rejected(self) -> None:
        with pytest.raises(InvalidSeedError, match="trailing"):
            Seed.parse(encode(bytes([0x00, 0x08, 0x05, 0x00])))

    def test_truncated_seed(self) -> None:
        with pytest.raises(InvalidSeedError, match="truncated"):
            Seed.from_bytes(bytes([0x00, 0x08, 0xFB, 0x39]))

    def test_unknown_variant(self) -> None:
        with pytest.raises(InvalidSeedError, match="variant"):
            Seed.from_bytes(bytes([0x02, 0x01, 0x01]))

    def test_invalid_marker_byte(self) -> None:
        with pytest.raises(InvalidSeedError, match="marker"):
            Seed.from_bytes(bytes([0x00, 0x08, 0xFE]))

    def test_dimension_out_of_range(self) -> None:
        data = bytes([0x00, 0xFC]) + (70000).to_bytes(4, "little") + bytes([0x05])
        with pytest.raises(InvalidSeedError, match="out of range"):
            Seed.from_bytes(data)

    def test_constructor_range_checks(self) -> None:
        with pytest.raises(ValueError):
            HexagonalSeedType(2**16)
        with pytest.raises(ValueError):
            HexagonalSeedType(0)
        with pytest.raises(ValueError):
            SquareSeedType(0, 4)
        with pytest.raises(ValueError):
            SquareSeedType(4, 0)
        with pytest.raises(ValueError):
            Seed(HexagonalSeedType(4), -1)

    @pytest.mark.parametrize(
        "data",
        [
            bytes([0x00, 0x00, 0x01]),
            bytes([0x01, 0x00, 0x04, 0x01]),
            bytes([0x01, 0x04, 0x00, 0x01]),
        ],
    )
    def test_zero_dimension_is_rejected(self, data: bytes) -> None:
        with pytest.raises(InvalidSeedError, match="empty map"):
            Seed.parse(encode(data))


class TestSeedCreation:
    def test_new_seed_comes_from_named_stream(self) -> None:
        """Fresh seeds are reproducible from the master seed."""
        rng.init(5)
        first = Seed.new(HexagonalSeedType(6))
        rng.init(5)
        second = Seed.new(HexagonalSeedType(6))
        assert first == second

    def test_seed_for_layout(self) -> None:
        seed = Seed.for_layout(SquareGridLayout(4, 9))
        assert seed.seed_type == SquareSeedType(4, 9)
        assert seed.layout() == SquareGridLayout(4, 9)

    def test_seed_type_for_layout(self) -> None:
        assert seed_type_for_layout(HexagonalGridLayout(3)) == HexagonalSeedType(3)

    @pytest.mark.parametrize(
        "layout",
        [HexagonalGridLayout(0), SquareGridLayout(0, 4), SquareGridLayout(3, 0)],
    )
    def test_empty_layout_has_no_seed_type(self, layout) -> None:
        with pytest.raises(IncompatibleSeedError):
            seed_type_for_layout(layout)

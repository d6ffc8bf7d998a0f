"""Fixed-length bit vectors backed by numpy.

A ``FixedBitSet`` stores one bit per tile id in an array of ``uint64`` words,
so the set operations the generator runs on every collapse become a single
vectorised ``&`` over a handful of words. Bit ``i`` lives in word ``i // 64``
at position ``i % 64``. Bits beyond ``capacity`` are always kept clear.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np

_WORD_BITS = 64

# Precomputed popcount lookup table for uint8 values (0-255)
_POPCOUNT_TABLE = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint8)


def _word_count(capacity: int) -> int:
    return (capacity + _WORD_BITS - 1) // _WORD_BITS


class FixedBitSet:
    """A set of small non-negative integers with a fixed upper bound."""

    __slots__ = ("_capacity", "_words")

    def __init__(self, capacity: int, words: np.ndarray | None = None) -> None:
        if capacity < 0:
            raise ValueError(f"Bitset capacity must be non-negative, got {capacity}")
        if words is None:
            words = np.zeros(_word_count(capacity), dtype=np.uint64)
        elif words.shape != (_word_count(capacity),):
            raise ValueError(
                f"Bitset of capacity {capacity} needs {_word_count(capacity)} "
                f"words, got {words.shape}"
            )
        self._capacity = capacity
        self._words = words

    @classmethod
    def with_capacity(cls, capacity: int) -> FixedBitSet:
        """Create an empty bitset."""
        return cls(capacity)

    @classmethod
    def full(cls, capacity: int) -> FixedBitSet:
        """Create a bitset with every bit in ``range(capacity)`` set."""
        words = np.full(_word_count(capacity), np.iinfo(np.uint64).max, dtype=np.uint64)
        tail = capacity % _WORD_BITS
        if tail:
            words[-1] = np.uint64((1 << tail) - 1)
        return cls(capacity, words)

    @classmethod
    def from_bools(cls, flags: Iterable[bool] | np.ndarray) -> FixedBitSet:
        """Create a bitset whose bit ``i`` is ``flags[i]``."""
        flags = np.asarray(flags, dtype=bool)
        capacity = len(flags)
        padded = np.zeros(_word_count(capacity) * _WORD_BITS, dtype=bool)
        padded[:capacity] = flags
        packed = np.packbits(padded, bitorder="little")
        return cls(capacity, packed.view("<u8").astype(np.uint64))

    @classmethod
    def from_indices(cls, capacity: int, indices: Iterable[int]) -> FixedBitSet:
        bitset = cls(capacity)
        for index in indices:
            bitset.set(index)
        return bitset

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def frozen(self) -> bool:
        return not self._words.flags.writeable

    def __len__(self) -> int:
        return self._capacity

    def count_ones(self) -> int:
        """Number of set bits."""
        return int(_POPCOUNT_TABLE[self._words.view(np.uint8)].sum())

    def _locate(self, index: int) -> tuple[int, np.uint64]:
        if not 0 <= index < self._capacity:
            raise IndexError(
                f"Bit {index} out of range for bitset of capacity {self._capacity}"
            )
        word, bit = divmod(index, _WORD_BITS)
        return word, np.uint64(1) << np.uint64(bit)

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int | np.integer) or not 0 <= index < self._capacity:
            return False
        word, mask = self._locate(int(index))
        return bool(self._words[word] & mask)

    def set(self, index: int, enabled: bool = True) -> None:
        """Set or clear a single bit.

        Raises:
            IndexError: If ``index`` is outside ``range(capacity)``.
            ValueError: If the bitset has been frozen.
        """
        word, mask = self._locate(index)
        if enabled:
            self._words[word] |= mask
        else:
            self._words[word] &= ~mask

    def _check_same_capacity(self, other: FixedBitSet) -> None:
        if other._capacity != self._capacity:
            raise ValueError(
                f"Bitset capacities differ: {self._capacity} != {other._capacity}"
            )

    def intersect_with(self, other: FixedBitSet) -> None:
        """Keep only the bits also set in ``other``."""
        self._check_same_capacity(other)
        np.bitwise_and(self._words, other._words, out=self._words)

    def difference_with(self, other: FixedBitSet) -> None:
        """Clear every bit that is set in ``other``."""
        self._check_same_capacity(other)
        np.bitwise_and(self._words, np.invert(other._words), out=self._words)

    def union_with(self, other: FixedBitSet) -> None:
        self._check_same_capacity(other)
        np.bitwise_or(self._words, other._words, out=self._words)

    def ones(self) -> np.ndarray:
        """Indices of the set bits in ascending order."""
        bits = np.unpackbits(
            self._words.astype("<u8").view(np.uint8), bitorder="little"
        )
        return np.flatnonzero(bits[: self._capacity])

    def __iter__(self) -> Iterator[int]:
        return (int(index) for index in self.ones())

    def nth_one(self, n: int) -> int:
        """Index of the ``n``-th set bit, counting from zero.

        Raises:
            IndexError: If fewer than ``n + 1`` bits are set.
        """
        ones = self.ones()
        if not 0 <= n < len(ones):
            raise IndexError(f"Bitset has {len(ones)} set bits, asked for #{n}")
        return int(ones[n])

    def copy(self) -> FixedBitSet:
        """Return a writable copy, even when this bitset is frozen."""
        return FixedBitSet(self._capacity, self._words.copy())

    def freeze(self) -> FixedBitSet:
        """Make the bitset read-only in place and return it."""
        self._words.flags.writeable = False
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedBitSet):
            return NotImplemented
        return self._capacity == other._capacity and bool(
            np.array_equal(self._words, other._words)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FixedBitSet({self._capacity}, ones={list(self)})"

"""A sparse container of 16-bit values kept as a sorted list."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Callable, Iterable, Iterator

from roarstore.bitmap_store import BITMAP_LENGTH, WORD_BITS, BitmapStore
from roarstore.errors import ArrayOrderError, CardinalityError, OrderErrorKind
from roarstore.setops import (
    count,
    merge_difference,
    merge_intersection,
    merge_symmetric_difference,
    merge_union,
)

__all__ = ["ArrayStore"]

_U16_MAX = 0xFFFF
_BITMAP_BYTES = BITMAP_LENGTH * 8
_MISSING = object()


def _check_index(index: int) -> None:
    if not 0 <= index <= _U16_MAX:
        raise ValueError(f"index {index} is outside the 16-bit unsigned range")


class ArrayStore:
    """A set of 16-bit values stored as a sorted list without duplicates."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._vec: list[int] = []

    @classmethod
    def _wrap(cls, values: list[int]) -> ArrayStore:
        store = cls()
        store._vec = values
        return store

    @classmethod
    def from_sorted(cls, values: Iterable[int]) -> ArrayStore:
        """Build a store from strictly increasing values.

        Raises ``ArrayOrderError`` naming the first offending position.
        """
        vec = list(values)
        for position, value in enumerate(vec):
            _check_index(value)
            if position == 0:
                continue
            previous = vec[position - 1]
            if value < previous:
                raise ArrayOrderError(position, OrderErrorKind.OUT_OF_ORDER)
            if value == previous:
                raise ArrayOrderError(position, OrderErrorKind.DUPLICATE)
        return cls._wrap(vec)

    @classmethod
    def from_bitmap_store(cls, store: BitmapStore) -> ArrayStore:
        """Build a store holding the same values as a bitmap store."""
        return cls._wrap(list(store))

    @classmethod
    def from_lsb0_bytes(cls, data: bytes, byte_offset: int, bits_set: int) -> ArrayStore:
        """Build a store from little-endian bit bytes placed at ``byte_offset``."""
        if byte_offset < 0 or byte_offset + len(data) > _BITMAP_BYTES:
            raise ValueError("bytes do not fit in a bitmap container")
        vec: list[int] = []
        for position, byte in enumerate(data, start=byte_offset):
            base = position * 8
            while byte:
                lowest = byte & -byte
                vec.append(base + lowest.bit_length() - 1)
                byte ^= lowest
        if len(vec) != bits_set:
            raise CardinalityError(bits_set, len(vec))
        return cls._wrap(vec)

    def values(self) -> tuple[int, ...]:
        """Return the values in ascending order."""
        return tuple(self._vec)

    def insert(self, index: int) -> bool:
        """Add ``index``; return whether it was not already present."""
        _check_index(index)
        position = bisect_left(self._vec, index)
        if position < len(self._vec) and self._vec[position] == index:
            return False
        self._vec.insert(position, index)
        return True

    def insert_range(self, start: int, end: int) -> int:
        """Add every value from ``start`` to ``end`` inclusive; return how many were new."""
        if start > end:
            return 0
        _check_index(start)
        _check_index(end)
        low = bisect_left(self._vec, start)
        high = bisect_right(self._vec, end, lo=low)
        dropped = high - low
        self._vec[low:high] = range(start, end + 1)
        return end - start + 1 - dropped

    def push(self, index: int) -> bool:
        """Append ``index`` only if it is greater than the current maximum."""
        _check_index(index)
        if not self._vec or self._vec[-1] < index:
            self._vec.append(index)
            return True
        return False

    def remove(self, index: int) -> bool:
        """Remove ``index``; return whether it was present."""
        _check_index(index)
        position = bisect_left(self._vec, index)
        if position < len(self._vec) and self._vec[position] == index:
            del self._vec[position]
            return True
        return False

    def remove_range(self, start: int, end: int) -> int:
        """Remove every value from ``start`` to ``end`` inclusive; return how many went."""
        if start > end:
            return 0
        _check_index(start)
        _check_index(end)
        low = bisect_left(self._vec, start)
        high = bisect_right(self._vec, end, lo=low)
        del self._vec[low:high]
        return high - low

    def remove_smallest(self, count: int) -> None:
        """Remove the ``count`` smallest values."""
        if not 0 <= count <= len(self._vec):
            raise ValueError(f"cannot remove {count} values from a store of {len(self._vec)}")
        del self._vec[:count]

    def remove_biggest(self, count: int) -> None:
        """Remove the ``count`` largest values."""
        if not 0 <= count <= len(self._vec):
            raise ValueError(f"cannot remove {count} values from a store of {len(self._vec)}")
        del self._vec[len(self._vec) - count :]

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int):
            return False
        position = bisect_left(self._vec, index)
        return position < len(self._vec) and self._vec[position] == index

    def contains_range(self, start: int, end: int) -> bool:
        """Return whether every value from ``start`` to ``end`` inclusive is present."""
        _check_index(start)
        _check_index(end)
        if start > end:
            raise ValueError("start must not be greater than end")
        span = end - start + 1
        if len(self._vec) < span:
            return False
        position = bisect_left(self._vec, start)
        if position >= len(self._vec) or self._vec[position] != start:
            return False
        last = position + span - 1
        return last < len(self._vec) and self._vec[last] == end

    def isdisjoint(self, other: ArrayStore) -> bool:
        """Return whether the two stores share no value."""
        return next(merge_intersection(self._vec, other._vec), _MISSING) is _MISSING

    def issubset(self, other: ArrayStore) -> bool:
        """Return whether every value of this store is in ``other``."""
        if len(self._vec) > len(other._vec):
            return False
        return count(merge_intersection(self._vec, other._vec)) == len(self._vec)

    def intersection_len(self, other: ArrayStore) -> int:
        """Count the values shared with ``other``."""
        return count(merge_intersection(self._vec, other._vec))

    def to_bitmap_store(self) -> BitmapStore:
        """Return a bitmap store holding the same values."""
        words = [0] * BITMAP_LENGTH
        for index in self._vec:
            key, bit = divmod(index, WORD_BITS)
            words[key] |= 1 << bit
        return BitmapStore.from_words(words, len(self._vec))

    def __len__(self) -> int:
        return len(self._vec)

    def min(self) -> int | None:
        """Return the smallest value, or ``None`` when empty."""
        return self._vec[0] if self._vec else None

    def max(self) -> int | None:
        """Return the largest value, or ``None`` when empty."""
        return self._vec[-1] if self._vec else None

    def rank(self, index: int) -> int:
        """Return how many values are less than or equal to ``index``."""
        return bisect_right(self._vec, index)

    def select(self, n: int) -> int | None:
        """Return the ``n``-th smallest value (from zero), or ``None`` if there is none."""
        if 0 <= n < len(self._vec):
            return self._vec[n]
        return None

    def __iter__(self) -> Iterator[int]:
        return iter(self._vec)

    def __reversed__(self) -> Iterator[int]:
        return reversed(self._vec)

    def retain(self, predicate: Callable[[int], bool]) -> None:
        """Keep only the values for which ``predicate`` is true."""
        self._vec = [value for value in self._vec if predicate(value)]

    def __or__(self, other: object) -> ArrayStore:
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return ArrayStore._wrap(list(merge_union(self._vec, other._vec)))

    def __and__(self, other: object) -> ArrayStore:
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return ArrayStore._wrap(list(merge_intersection(self._vec, other._vec)))

    def __sub__(self, other: object) -> ArrayStore:
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return ArrayStore._wrap(list(merge_difference(self._vec, other._vec)))

    def __xor__(self, other: object) -> ArrayStore:
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return ArrayStore._wrap(list(merge_symmetric_difference(self._vec, other._vec)))

    def __iand__(self, other: object) -> ArrayStore:
        if isinstance(other, ArrayStore):
            self._vec = list(merge_intersection(self._vec, other._vec))
        elif isinstance(other, BitmapStore):
            self.retain(other.__contains__)
        else:
            return NotImplemented
        return self

    def __isub__(self, other: object) -> ArrayStore:
        if isinstance(other, ArrayStore):
            self._vec = list(merge_difference(self._vec, other._vec))
        elif isinstance(other, BitmapStore):
            self.retain(lambda value: value not in other)
        else:
            return NotImplemented
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayStore):
            return NotImplemented
        return self._vec == other._vec

    def copy(self) -> ArrayStore:
        """Return an independent copy of the store."""
        return ArrayStore._wrap(list(self._vec))

    def __repr__(self) -> str:
        return f"ArrayStore(len={len(self._vec)})"
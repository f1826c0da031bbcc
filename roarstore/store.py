"""A container of 16-bit values that is either a sorted array or a bitmap."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Iterator
from enum import Enum

from roarstore.array_store import ArrayStore
from roarstore.bitmap_store import BITMAP_LENGTH, BitmapIterator, BitmapStore

__all__ = ["ARRAY_LIMIT", "Store", "StoreIterator", "StoreKind"]

ARRAY_LIMIT = 4096
_BITMAP_BYTES = BITMAP_LENGTH * 8
_FULL_LEN = 1 << 16
_U16_MAX = 0xFFFF


class StoreKind(Enum):
    """How a store keeps its values."""

    ARRAY = "array"
    BITMAP = "bitmap"


class Store:
    """A set of 16-bit values backed by an array or a bitmap store."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._inner: ArrayStore | BitmapStore = ArrayStore()

    @classmethod
    def _wrap(cls, inner: ArrayStore | BitmapStore) -> Store:
        store = cls()
        store._inner = inner
        return store

    @classmethod
    def with_capacity(cls, capacity: int) -> Store:
        """Return an empty store suited to holding ``capacity`` values."""
        if capacity <= ARRAY_LIMIT:
            return cls._wrap(ArrayStore())
        return cls._wrap(BitmapStore())

    @classmethod
    def full(cls) -> Store:
        """Return a store holding every 16-bit value."""
        return cls._wrap(BitmapStore.full())

    @classmethod
    def from_lsb0_bytes(cls, data: bytes, byte_offset: int) -> Store | None:
        """Build a store from little-endian bit bytes, or ``None`` if no bit is set."""
        if byte_offset < 0 or byte_offset + len(data) > _BITMAP_BYTES:
            raise ValueError("bytes do not fit in a bitmap container")
        bits_set = int.from_bytes(data, "little").bit_count()
        if bits_set == 0:
            return None
        if bits_set < ARRAY_LIMIT:
            return cls._wrap(ArrayStore.from_lsb0_bytes(data, byte_offset, bits_set))
        return cls._wrap(BitmapStore.from_lsb0_bytes(data, byte_offset, bits_set))

    def kind(self) -> StoreKind:
        """Return whether the values are kept as an array or a bitmap."""
        return StoreKind.ARRAY if isinstance(self._inner, ArrayStore) else StoreKind.BITMAP

    def insert(self, index: int) -> bool:
        """Add ``index``; return whether it was not already present."""
        return self._inner.insert(index)

    def insert_range(self, start: int, end: int) -> int:
        """Add every value from ``start`` to ``end`` inclusive; return how many were new."""
        if start > end:
            return 0
        return self._inner.insert_range(start, end)

    def push(self, index: int) -> bool:
        """Add ``index`` only if it is greater than the current maximum."""
        return self._inner.push(index)

    def remove(self, index: int) -> bool:
        """Remove ``index``; return whether it was present."""
        return self._inner.remove(index)

    def remove_range(self, start: int, end: int) -> int:
        """Remove every value from ``start`` to ``end`` inclusive; return how many went."""
        if start > end:
            return 0
        return self._inner.remove_range(start, end)

    def remove_smallest(self, count: int) -> None:
        """Remove the ``count`` smallest values."""
        self._inner.remove_smallest(count)

    def remove_biggest(self, count: int) -> None:
        """Remove the ``count`` largest values."""
        self._inner.remove_biggest(count)

    def __contains__(self, index: object) -> bool:
        return index in self._inner

    def contains_range(self, start: int, end: int) -> bool:
        """Return whether every value from ``start`` to ``end`` inclusive is present."""
        return self._inner.contains_range(start, end)

    def is_full(self) -> bool:
        """Return whether the store holds every 16-bit value."""
        return len(self._inner) == _FULL_LEN

    def isdisjoint(self, other: Store) -> bool:
        """Return whether the two stores share no value."""
        a, b = self._inner, other._inner
        if type(a) is type(b):
            return a.isdisjoint(b)  # type: ignore[arg-type]
        array, bitmap = (a, b) if isinstance(a, ArrayStore) else (b, a)
        return all(value not in bitmap for value in array)

    def issubset(self, other: Store) -> bool:
        """Return whether every value of this store is in ``other``."""
        a, b = self._inner, other._inner
        if type(a) is type(b):
            return a.issubset(b)  # type: ignore[arg-type]
        if isinstance(a, ArrayStore):
            return all(value in b for value in a)
        return False

    def intersection_len(self, other: Store) -> int:
        """Count the values shared with ``other``."""
        a, b = self._inner, other._inner
        if type(a) is type(b):
            return a.intersection_len(b)  # type: ignore[arg-type]
        array, bitmap = (a, b) if isinstance(a, ArrayStore) else (b, a)
        return bitmap.intersection_len(array)

    def __len__(self) -> int:
        return len(self._inner)

    def min(self) -> int | None:
        """Return the smallest value, or ``None`` when empty."""
        return self._inner.min()

    def max(self) -> int | None:
        """Return the largest value, or ``None`` when empty."""
        return self._inner.max()

    def rank(self, index: int) -> int:
        """Return how many values are less than or equal to ``index``."""
        return self._inner.rank(index)

    def select(self, n: int) -> int | None:
        """Return the ``n``-th smallest value (from zero), or ``None`` if there is none."""
        return self._inner.select(n)

    def to_bitmap(self) -> Store:
        """Return a bitmap-backed store holding the same values."""
        if isinstance(self._inner, ArrayStore):
            return Store._wrap(self._inner.to_bitmap_store())
        return self.copy()

    def iter(self) -> StoreIterator:
        """Return a double-ended iterator over the values in ascending order."""
        if isinstance(self._inner, ArrayStore):
            return StoreIterator(self._inner.values())
        return StoreIterator(BitmapIterator(self._inner.words()))

    def __iter__(self) -> StoreIterator:
        return self.iter()

    def __reversed__(self) -> Iterator[int]:
        iterator = self.iter()
        while (value := iterator.next_back()) is not None:
            yield value

    def __or__(self, other: object) -> Store:
        if not isinstance(other, Store):
            return NotImplemented
        result = self.copy()
        result |= other
        return result

    def __ior__(self, other: object) -> Store:
        if not isinstance(other, Store):
            return NotImplemented
        a, b = self._inner, other._inner
        if isinstance(a, ArrayStore):
            if isinstance(b, ArrayStore):
                self._inner = a | b
            else:
                merged = b.copy()
                merged |= a
                self._inner = merged
        else:
            a |= b
        return self

    def __and__(self, other: object) -> Store:
        if not isinstance(other, Store):
            return NotImplemented
        result = self.copy()
        result &= other
        return result

    def __iand__(self, other: object) -> Store:
        if not isinstance(other, Store):
            return NotImplemented
        a, b = self._inner, other._inner
        if isinstance(a, ArrayStore):
            if isinstance(b, ArrayStore):
                self._inner = a & b
            else:
                a &= b
        elif isinstance(b, BitmapStore):
            a &= b
        else:
            narrowed = b.copy()
            narrowed &= a
            self._inner = narrowed
        return self

    def __sub__(self, other: object) -> Store:
        if not isinstance(other, Store):
            return NotImplemented
        result = self.copy()
        result -= other
        return result

    def __isub__(self, other: object) -> Store:
        if not isinstance(other, Store):
            return NotImplemented
        inner = self._inner
        inner -= other._inner
        return self

    def __xor__(self, other: object) -> Store:
        if not isinstance(other, Store):
            return NotImplemented
        result = self.copy()
        result ^= other
        return result

    def __ixor__(self, other: object) -> Store:
        if not isinstance(other, Store):
            return NotImplemented
        a, b = self._inner, other._inner
        if isinstance(a, ArrayStore):
            if isinstance(b, ArrayStore):
                self._inner = a ^ b
            else:
                flipped = b.copy()
                flipped ^= a
                self._inner = flipped
        else:
            a ^= b
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Store):
            return NotImplemented
        if type(self._inner) is not type(other._inner):
            return False
        return self._inner == other._inner

    def copy(self) -> Store:
        """Return an independent copy of the store."""
        return Store._wrap(self._inner.copy())

    def __repr__(self) -> str:
        return f"Store(kind={self.kind().value}, len={len(self)})"


class StoreIterator:
    """Double-ended iterator over the values of a store, in ascending order."""

    def __init__(self, source: tuple[int, ...] | BitmapIterator) -> None:
        if isinstance(source, BitmapIterator):
            self._bits: BitmapIterator | None = source
            self._values: tuple[int, ...] = ()
        else:
            self._bits = None
            self._values = tuple(source)
        self._front = 0
        self._back = len(self._values)

    def __iter__(self) -> StoreIterator:
        return self

    def __next__(self) -> int:
        if self._bits is not None:
            return next(self._bits)
        if self._front >= self._back:
            raise StopIteration
        value = self._values[self._front]
        self._front += 1
        return value

    def __len__(self) -> int:
        if self._bits is not None:
            return len(self._bits)
        return self._back - self._front

    def next_back(self) -> int | None:
        """Take the largest remaining value, or return ``None`` when exhausted."""
        if self._bits is not None:
            return self._bits.next_back()
        if self._front >= self._back:
            return None
        self._back -= 1
        return self._values[self._back]

    def advance_to(self, index: int) -> None:
        """Skip forward to the first remaining value greater than or equal to ``index``."""
        if self._bits is not None:
            self._bits.advance_to(index)
            return
        if not 0 <= index <= _U16_MAX:
            raise ValueError(f"index {index} is outside the 16-bit unsigned range")
        self._front = bisect_left(self._values, index, self._front, self._back)

    def advance_back_to(self, index: int) -> None:
        """Skip backward to the last remaining value less than or equal to ``index``."""
        if self._bits is not None:
            self._bits.advance_back_to(index)
            return
        if not 0 <= index <= _U16_MAX:
            raise ValueError(f"index {index} is outside the 16-bit unsigned range")
        self._back = bisect_right(self._values, index, self._front, self._back)
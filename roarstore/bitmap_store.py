"""A dense container of 16-bit values kept as 1024 sixty-four-bit words."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Iterator, Sequence

from roarstore.errors import CardinalityError

BITMAP_LENGTH = 1024
WORD_BITS = 64
WORD_MAX = (1 << WORD_BITS) - 1
BITMAP_BYTES = BITMAP_LENGTH * 8
CAPACITY = BITMAP_LENGTH * WORD_BITS
_U16_MAX = 0xFFFF

__all__ = [
    "BITMAP_LENGTH",
    "BitmapIterator",
    "BitmapStore",
    "bit_index",
    "word_index",
]


def word_index(index: int) -> int:
    """Return the position of the word that holds ``index``."""
    return index // WORD_BITS


def bit_index(index: int) -> int:
    """Return the position of ``index`` within its word."""
    return index % WORD_BITS


def _check_index(index: int) -> None:
    if not 0 <= index <= _U16_MAX:
        raise ValueError(f"index {index} is outside the 16-bit unsigned range")


def _mask(low: int, high: int) -> int:
    """A word with bits ``low`` to ``high`` (inclusive) set."""
    return ((1 << (high + 1)) - 1) ^ ((1 << low) - 1)


def _range_masks(start: int, end: int) -> Iterator[tuple[int, int]]:
    """Yield ``(word position, mask)`` for every word the inclusive range touches."""
    start_key, start_bit = divmod(start, WORD_BITS)
    end_key, end_bit = divmod(end, WORD_BITS)
    if start_key == end_key:
        yield start_key, _mask(start_bit, end_bit)
        return
    yield start_key, _mask(start_bit, WORD_BITS - 1)
    for key in range(start_key + 1, end_key):
        yield key, WORD_MAX
    yield end_key, _mask(0, end_bit)


def _trailing_zeros(word: int) -> int:
    return (word & -word).bit_length() - 1


def _drop_lowest(word: int) -> int:
    return word & (word - 1)


def _drop_highest(word: int) -> int:
    return word & ~(1 << (word.bit_length() - 1))


def _select_in_word(word: int, n: int) -> int:
    """Position of the ``n``-th set bit (counting from zero) of ``word``."""
    for _ in range(n):
        word = _drop_lowest(word)
    return _trailing_zeros(word)


class BitmapStore:
    """A set of 16-bit values stored as a fixed-size bit array."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._bits: list[int] = [0] * BITMAP_LENGTH
        self._len = 0

    @classmethod
    def full(cls) -> BitmapStore:
        """Return a store holding every 16-bit value."""
        store = cls()
        store._bits = [WORD_MAX] * BITMAP_LENGTH
        store._len = CAPACITY
        return store

    @classmethod
    def from_words(cls, words: Iterable[int], length: int) -> BitmapStore:
        """Build a store from 1024 words, checking that ``length`` bits are set."""
        bits = list(words)
        if len(bits) != BITMAP_LENGTH:
            raise ValueError(f"expected {BITMAP_LENGTH} words, got {len(bits)}")
        if any(not 0 <= word <= WORD_MAX for word in bits):
            raise ValueError("every word must be a 64-bit unsigned value")
        actual = sum(word.bit_count() for word in bits)
        if actual != length:
            raise CardinalityError(length, actual)
        store = cls()
        store._bits = bits
        store._len = length
        return store

    @classmethod
    def from_lsb0_bytes(cls, data: bytes, byte_offset: int, bits_set: int) -> BitmapStore:
        """Build a store from little-endian bit bytes placed at ``byte_offset``."""
        if byte_offset < 0 or byte_offset + len(data) > BITMAP_BYTES:
            raise ValueError("bytes do not fit in a bitmap container")
        buffer = bytearray(BITMAP_BYTES)
        buffer[byte_offset : byte_offset + len(data)] = data
        words = struct.unpack(f"<{BITMAP_LENGTH}Q", buffer)
        return cls.from_words(words, bits_set)

    def capacity(self) -> int:
        """Return how many distinct values the store can hold."""
        return CAPACITY

    def words(self) -> tuple[int, ...]:
        """Return the 1024 words of the bit array."""
        return tuple(self._bits)

    def _update_bit(self, index: int, value: bool) -> bool:
        """Set or clear one bit; return whether it changed."""
        _check_index(index)
        key, bit = divmod(index, WORD_BITS)
        old = self._bits[key]
        new = old | (1 << bit) if value else old & ~(1 << bit)
        self._bits[key] = new
        changed = new != old
        if changed:
            self._len += 1 if value else -1
        return changed

    def _update_range(self, start: int, end: int, value: bool) -> int:
        """Set or clear an inclusive range of bits; return how many changed."""
        if start > end:
            return 0
        _check_index(start)
        _check_index(end)
        bits = self._bits
        changed = 0
        for key, mask in _range_masks(start, end):
            old = bits[key]
            new = old | mask if value else old & ~mask
            changed += (old ^ new).bit_count()
            bits[key] = new
        self._len += changed if value else -changed
        return changed

    def insert(self, index: int) -> bool:
        """Add ``index``; return whether it was not already present."""
        return self._update_bit(index, True)

    def insert_range(self, start: int, end: int) -> int:
        """Add every value from ``start`` to ``end`` inclusive; return how many were new."""
        return self._update_range(start, end, True)

    def push(self, index: int) -> bool:
        """Add ``index`` only if it is greater than the current maximum."""
        _check_index(index)
        current = self.max()
        if current is None or current < index:
            self.insert(index)
            return True
        return False

    def remove(self, index: int) -> bool:
        """Remove ``index``; return whether it was present."""
        return self._update_bit(index, False)

    def remove_range(self, start: int, end: int) -> int:
        """Remove every value from ``start`` to ``end`` inclusive; return how many went."""
        return self._update_range(start, end, False)

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int) or not 0 <= index <= _U16_MAX:
            return False
        key, bit = divmod(index, WORD_BITS)
        return bool(self._bits[key] >> bit & 1)

    def contains_range(self, start: int, end: int) -> bool:
        """Return whether every value from ``start`` to ``end`` inclusive is present."""
        _check_index(start)
        _check_index(end)
        if start > end:
            raise ValueError("start must not be greater than end")
        if self._len < end - start + 1:
            return False
        return all(self._bits[key] & mask == mask for key, mask in _range_masks(start, end))

    def isdisjoint(self, other: BitmapStore) -> bool:
        """Return whether the two stores share no value."""
        return all(a & b == 0 for a, b in zip(self._bits, other._bits))

    def issubset(self, other: BitmapStore) -> bool:
        """Return whether every value of this store is in ``other``."""
        return all(a & b == a for a, b in zip(self._bits, other._bits))

    def __len__(self) -> int:
        return self._len

    def min(self) -> int | None:
        """Return the smallest value, or ``None`` when empty."""
        return next(
            (key * WORD_BITS + _trailing_zeros(word) for key, word in enumerate(self._bits) if word),
            None,
        )

    def max(self) -> int | None:
        """Return the largest value, or ``None`` when empty."""
        for key in range(BITMAP_LENGTH - 1, -1, -1):
            word = self._bits[key]
            if word:
                return key * WORD_BITS + word.bit_length() - 1
        return None

    def rank(self, index: int) -> int:
        """Return how many values are less than or equal to ``index``."""
        _check_index(index)
        key, bit = divmod(index, WORD_BITS)
        below = sum(word.bit_count() for word in self._bits[:key])
        return below + (self._bits[key] & _mask(0, bit)).bit_count()

    def select(self, n: int) -> int | None:
        """Return the ``n``-th smallest value (from zero), or ``None`` if there is none."""
        if n < 0:
            return None
        for key, word in enumerate(self._bits):
            count = word.bit_count()
            if n < count:
                return key * WORD_BITS + _select_in_word(word, n)
            n -= count
        return None

    def intersection_len(self, other: BitmapStore | Iterable[int]) -> int:
        """Count the values shared with another store or a sorted sequence of values."""
        if isinstance(other, BitmapStore):
            return sum((a & b).bit_count() for a, b in zip(self._bits, other._bits))
        return sum(1 for index in other if index in self)

    def __iter__(self) -> BitmapIterator:
        return BitmapIterator(self._bits)

    def __reversed__(self) -> Iterator[int]:
        iterator = BitmapIterator(self._bits)
        while (value := iterator.next_back()) is not None:
            yield value

    def clear(self) -> None:
        """Remove every value."""
        self._bits = [0] * BITMAP_LENGTH
        self._len = 0

    def _drop(self, count: int, keys: Iterable[int], drop_one) -> None:
        """Clear ``count`` set bits, visiting words in the order of ``keys``."""
        if self._len < count:
            self.clear()
            return
        self._len -= count
        bits = self._bits
        for key in keys:
            word = bits[key]
            ones = word.bit_count()
            if count < ones:
                for _ in range(count):
                    word = drop_one(word)
                bits[key] = word
                return
            bits[key] = 0
            count -= ones
            if count == 0:
                return

    def remove_smallest(self, count: int) -> None:
        """Remove the ``count`` smallest values."""
        self._drop(count, range(BITMAP_LENGTH), _drop_lowest)

    def remove_biggest(self, count: int) -> None:
        """Remove the ``count`` largest values."""
        self._drop(count, range(BITMAP_LENGTH - 1, -1, -1), _drop_highest)

    def _combine(self, other: BitmapStore, op) -> None:
        self._bits = [op(a, b) for a, b in zip(self._bits, other._bits)]
        self._len = sum(word.bit_count() for word in self._bits)

    def __ior__(self, other: BitmapStore | Iterable[int]) -> BitmapStore:
        if isinstance(other, BitmapStore):
            self._combine(other, lambda a, b: a | b)
        elif isinstance(other, Iterable):
            for index in other:
                self.insert(index)
        else:
            return NotImplemented
        return self

    def __iand__(self, other: BitmapStore) -> BitmapStore:
        if not isinstance(other, BitmapStore):
            return NotImplemented
        self._combine(other, lambda a, b: a & b)
        return self

    def __isub__(self, other: BitmapStore | Iterable[int]) -> BitmapStore:
        if isinstance(other, BitmapStore):
            self._combine(other, lambda a, b: a & ~b)
        elif isinstance(other, Iterable):
            for index in other:
                self.remove(index)
        else:
            return NotImplemented
        return self

    def __ixor__(self, other: BitmapStore | Iterable[int]) -> BitmapStore:
        if isinstance(other, BitmapStore):
            self._combine(other, lambda a, b: a ^ b)
        elif isinstance(other, Iterable):
            for index in other:
                self._update_bit(index, index not in self)
        else:
            return NotImplemented
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitmapStore):
            return NotImplemented
        return self._len == other._len and self._bits == other._bits

    def copy(self) -> BitmapStore:
        """Return an independent copy of the store."""
        store = BitmapStore()
        store._bits = list(self._bits)
        store._len = self._len
        return store

    def __repr__(self) -> str:
        return f"BitmapStore(len={self._len})"


class BitmapIterator:
    """Double-ended iterator over the set bits of 1024 words, in ascending order."""

    def __init__(self, words: Sequence[int]) -> None:
        self._bits = tuple(words)
        if len(self._bits) != BITMAP_LENGTH:
            raise ValueError(f"expected {BITMAP_LENGTH} words, got {len(self._bits)}")
        self._key = 0
        self._value = self._bits[0]
        self._key_back = BITMAP_LENGTH - 1
        # While key_back <= key the back word lives in _value.
        self._value_back = self._bits[BITMAP_LENGTH - 1]

    def __iter__(self) -> BitmapIterator:
        return self

    def __next__(self) -> int:
        if self._value == 0:
            if self._key >= self._key_back:
                raise StopIteration
            for key in range(self._key + 1, self._key_back):
                word = self._bits[key]
                if word:
                    self._key = key
                    self._value = word
                    break
            else:
                self._key = self._key_back
                self._value = self._value_back
                if self._value == 0:
                    raise StopIteration
        index = _trailing_zeros(self._value)
        self._value = _drop_lowest(self._value)
        return WORD_BITS * self._key + index

    def __len__(self) -> int:
        remaining = self._value.bit_count()
        if self._key < self._key_back:
            remaining += sum(w.bit_count() for w in self._bits[self._key + 1 : self._key_back])
            remaining += self._value_back.bit_count()
        return remaining

    def _store_back(self, front: bool, word: int) -> None:
        if front:
            self._value = word
        else:
            self._value_back = word

    def next_back(self) -> int | None:
        """Take the largest remaining value, or return ``None`` when exhausted."""
        while True:
            front = self._key_back <= self._key
            word = self._value if front else self._value_back
            if word == 0:
                if front:
                    return None
                self._key_back -= 1
                self._value_back = self._bits[self._key_back]
                continue
            index = word.bit_length() - 1
            self._store_back(front, _drop_highest(word))
            return WORD_BITS * self._key_back + index

    def advance_to(self, index: int) -> None:
        """Skip forward to the first remaining value greater than or equal to ``index``."""
        _check_index(index)
        new_key, bit = divmod(index, WORD_BITS)
        if new_key < self._key:
            return
        if new_key == self._key:
            word = self._value
        elif new_key < self._key_back:
            word = self._bits[new_key]
        elif new_key == self._key_back:
            word = self._value_back
        else:
            # Nothing remains at or after index.
            self._key = self._key_back
            self._value = 0
            self._value_back = 0
            return
        self._key = new_key
        self._value = word & ~((1 << bit) - 1)

    def advance_back_to(self, index: int) -> None:
        """Skip backward to the last remaining value less than or equal to ``index``."""
        _check_index(index)
        new_key, bit = divmod(index, WORD_BITS)
        if new_key > self._key_back:
            return
        if new_key == self._key_back:
            front = self._key_back <= self._key
            word = self._value if front else self._value_back
        elif new_key > self._key:
            front = False
            word = self._bits[new_key]
        elif new_key == self._key:
            front = True
            word = self._value
        else:
            front = True
            word = 0
        self._key_back = new_key
        self._store_back(front, word & _mask(0, bit))
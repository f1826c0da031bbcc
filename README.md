# roarstore

The container layer of a Roaring bitmap. It stores sets of 16-bit integers
(0 to 65535) in one of two forms:

- `roarstore.array_store.ArrayStore`: a sorted list of values, suited to
  sparse sets.
- `roarstore.bitmap_store.BitmapStore`: 1024 words of 64 bits, suited to
  dense sets.
- `roarstore.store.Store`: holds one of the two and supports Python's set
  operators between any two stores, whatever form each has.

A `Store` does not change form on its own as values are inserted or removed.
Its form is chosen when it is made (`Store()` is an array,
`Store.with_capacity(n)` picks a bitmap above 4096 values, `Store.full()` is
a bitmap, `Store.from_lsb0_bytes(...)` picks by how many bits are set), by
`to_bitmap()`, and by the operators: combining an array with a bitmap by
`|` or `^` gives a bitmap, and by `&` gives an array. `Store.kind()` returns
the current form as a `StoreKind`.

Also included:

- `roarstore.util`: `split` and `join` map a 32-bit value to and from a
  (container key, low 16 bits) pair; `convert_range_to_inclusive` turns range
  bounds into inclusive `(first, last)` bounds over 32-bit values.
- `roarstore.setops`: lazy merge-based union, intersection, difference and
  symmetric difference over sorted, duplicate-free iterables, and `count`.

## Installation

```
pip install roarstore
```

For development:

```
pip install -e ".[test]"
pytest
```

## Usage

```python
from roarstore.store import Store

a = Store()
a.insert_range(0, 1999)        # inclusive bounds; returns how many were added
b = Store()
b.insert_range(1000, 2999)

union = a | b
assert len(union) == 3000
assert union.min() == 0 and union.max() == 2999

both = a & b
assert both.contains_range(1000, 1999)
assert 500 not in both

a ^= b                         # symmetric difference, in place
assert a.rank(999) == 1000     # number of values <= 999
assert a.select(0) == 0        # smallest value (counting from zero)
```

Iteration yields values in ascending order, and `reversed()` yields them in
descending order. The iterator that `Store.iter()` returns can also be moved
from either end:

```python
it = union.iter()
it.advance_to(2500)
assert next(it) == 2500
assert it.next_back() == 2999
```

Values outside 0 to 65535 passed to `insert`, `remove` and the range methods
raise `ValueError`.

### Set operations on sorted sequences

```python
from roarstore.setops import merge_union, merge_symmetric_difference, count

assert list(merge_union([1, 3], [2, 3])) == [1, 2, 3]
assert count(merge_symmetric_difference([1, 3], [2, 3])) == 2
```

### Splitting 32-bit values

```python
from roarstore.util import split, join

high, low = split(0x0001_0002)
assert (high, low) == (1, 2)
assert join(high, low) == 0x0001_0002
```

### Range conversion

```python
from roarstore.util import convert_range_to_inclusive

convert_range_to_inclusive(1, 6)                     # (1, 5)
convert_range_to_inclusive(None, None)               # (0, 4294967295)
convert_range_to_inclusive(10, 20, start_excluded=True)  # (11, 19)
```

`None` leaves a side unbounded. A range that holds no value, or whose start
lies past its end, raises `ConvertRangeError`; its `kind` is a
`RangeErrorKind`.

### Errors

All are subclasses of `ValueError`, in `roarstore.errors`:

- `CardinalityError`: a stated number of set bits does not match the bits
  given (`BitmapStore.from_words`, the `from_lsb0_bytes` constructors).
- `ArrayOrderError`: values given to `ArrayStore.from_sorted` are not
  strictly increasing. Its `index` names the first offending position and its
  `kind` is an `OrderErrorKind`.
- `NonSortedIntegers`: provided for code built on these containers to report
  unsorted input; `valid_until` gives how many elements were in order. Nothing
  in this package raises it.

## What this package does not do

It provides the 16-bit containers and helpers only. There is no 32-bit or
64-bit bitmap type that maps keys to containers, no serialization format,
and no command-line tool.
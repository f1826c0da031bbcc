import pytest
from hypothesis import given
from hypothesis import strategies as st

from roarstore.array_store import ArrayStore
from roarstore.bitmap_store import BitmapStore
from roarstore.errors import ArrayOrderError, CardinalityError, OrderErrorKind

values16 = st.sets(st.integers(min_value=0, max_value=0xFFFF), max_size=200)


def make(values):
    return ArrayStore.from_sorted(sorted(values))


def test_insert_and_remove_report_changes():
    store = ArrayStore()
    assert store.insert(5) is True
    assert store.insert(5) is False
    assert store.insert(1) is True
    assert store.values() == (1, 5)
    assert store.remove(5) is True
    assert store.remove(5) is False
    assert store.values() == (1,)


def test_insert_out_of_range_raises():
    with pytest.raises(ValueError):
        ArrayStore().insert(0x10000)


def test_from_sorted_rejects_out_of_order():
    with pytest.raises(ArrayOrderError) as info:
        ArrayStore.from_sorted([1, 3, 2])
    assert info.value.index == 2
    assert info.value.kind is OrderErrorKind.OUT_OF_ORDER


def test_from_sorted_rejects_duplicate():
    with pytest.raises(ArrayOrderError) as info:
        ArrayStore.from_sorted([1, 2, 2])
    assert info.value.index == 2
    assert info.value.kind is OrderErrorKind.DUPLICATE


@pytest.mark.parametrize(
    "start, end, added, expected",
    [
        (4, 5, 2, [1, 2, 4, 5, 8, 9]),
        (2, 5, 3, [1, 2, 3, 4, 5, 8, 9]),
        (4, 8, 4, [1, 2, 4, 5, 6, 7, 8, 9]),
        (1, 9, 5, [1, 2, 3, 4, 5, 6, 7, 8, 9]),
        (6, 1, 0, [1, 2, 8, 9]),
    ],
)
def test_insert_range(start, end, added, expected):
    store = ArrayStore.from_sorted([1, 2, 8, 9])
    assert store.insert_range(start, end) == added
    assert list(store) == expected


def test_remove_range_counts_removed():
    store = ArrayStore.from_sorted([1, 2, 8, 9])
    assert store.remove_range(2, 8) == 2
    assert list(store) == [1, 9]


def test_contains_range():
    empty = ArrayStore()
    assert not empty.contains_range(0, 0)
    assert not empty.contains_range(0, 1)
    assert not empty.contains_range(1, 0xFFFF)
    store = ArrayStore.from_sorted([0, 1, 2, 3, 4, 5, 100])
    assert store.contains_range(0, 0)
    assert store.contains_range(0, 5)
    assert not store.contains_range(0, 6)
    assert store.contains_range(100, 100)


def test_remove_smallest_and_biggest():
    store = ArrayStore.from_sorted([1, 2, 130, 500])
    store.remove_smallest(3)
    assert list(store) == [500]
    store = ArrayStore.from_sorted([1, 2, 130, 500])
    store.remove_biggest(2)
    assert list(store) == [1, 2]


def test_remove_too_many_raises():
    with pytest.raises(ValueError):
        ArrayStore.from_sorted([1, 2]).remove_smallest(3)


def test_push_only_appends_new_max():
    store = ArrayStore.from_sorted([3])
    assert store.push(2) is False
    assert store.push(3) is False
    assert store.push(7) is True
    assert store.max() == 7
    assert store.min() == 3


def test_empty_min_max_select():
    store = ArrayStore()
    assert store.min() is None
    assert store.max() is None
    assert store.select(0) is None


def test_from_lsb0_bytes_matches_bitmap_store():
    data = bytes([0x05, 0x00, 0xFF, 0x80, 0x01, 0x00, 0x00, 0x00, 0x11, 0x22])
    bits = sum(byte.bit_count() for byte in data)
    array = ArrayStore.from_lsb0_bytes(data, 3, bits)
    bitmap = BitmapStore.from_lsb0_bytes(data, 3, bits)
    assert array == ArrayStore.from_bitmap_store(bitmap)
    assert len(array) == bits


def test_from_lsb0_bytes_wrong_count():
    with pytest.raises(CardinalityError):
        ArrayStore.from_lsb0_bytes(b"\x03", 0, 5)


@given(values16)
def test_bitmap_round_trip(values):
    store = make(values)
    bitmap = store.to_bitmap_store()
    assert len(bitmap) == len(values)
    assert ArrayStore.from_bitmap_store(bitmap) == store


@given(values16, values16)
def test_binary_operations_match_sets(a, b):
    left, right = make(a), make(b)
    assert list(left | right) == sorted(a | b)
    assert list(left & right) == sorted(a & b)
    assert list(left - right) == sorted(a - b)
    assert list(left ^ right) == sorted(a ^ b)
    assert left.intersection_len(right) == len(a & b)
    assert left.isdisjoint(right) == a.isdisjoint(b)
    assert left.issubset(right) == a.issubset(b)


@given(values16, values16)
def test_in_place_operations_with_both_store_kinds(a, b):
    for other in (make(b), make(b).to_bitmap_store()):
        store = make(a)
        store &= other
        assert list(store) == sorted(a & b)
        store = make(a)
        store -= other
        assert list(store) == sorted(a - b)


@given(values16)
def test_rank_and_select_agree(values):
    store = make(values)
    for position, value in enumerate(store):
        assert store.rank(value) == position + 1
        assert store.select(position) == value
    assert store.select(len(values)) is None


@given(values16)
def test_reversed_and_retain(values):
    store = make(values)
    assert list(reversed(store)) == sorted(values, reverse=True)
    store.retain(lambda v: v % 2 == 0)
    assert list(store) == sorted(v for v in values if v % 2 == 0)


def test_copy_is_independent():
    store = ArrayStore.from_sorted([1, 2])
    duplicate = store.copy()
    duplicate.insert(3)
    assert list(store) == [1, 2]
    assert list(duplicate) == [1, 2, 3]
    assert 3 in duplicate
    assert 3 not in store
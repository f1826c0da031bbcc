from hypothesis import given
from hypothesis import strategies as st

from roarstore.setops import (
    count,
    merge_difference,
    merge_intersection,
    merge_symmetric_difference,
    merge_union,
)

sorted_u16 = st.sets(st.integers(min_value=0, max_value=0xFFFF), max_size=200).map(sorted)


def test_union_worked_example():
    assert list(merge_union([1, 3, 5], [2, 3, 6])) == [1, 2, 3, 5, 6]


def test_symmetric_difference_worked_example():
    assert list(merge_symmetric_difference([1, 3, 5], [2, 3, 6])) == [1, 2, 5, 6]


def test_empty_inputs():
    assert list(merge_union([], [])) == []
    assert list(merge_intersection([4, 5], [])) == []
    assert list(merge_difference([4, 5], [])) == [4, 5]
    assert list(merge_symmetric_difference([], [7])) == [7]


def test_difference_of_equal_inputs_is_empty():
    values = list(range(100))
    assert list(merge_difference(values, values)) == []
    assert list(merge_intersection(values, values)) == values


@given(sorted_u16, sorted_u16)
def test_union_matches_sets(a, b):
    assert list(merge_union(a, b)) == sorted(set(a) | set(b))


@given(sorted_u16, sorted_u16)
def test_intersection_matches_sets(a, b):
    assert list(merge_intersection(a, b)) == sorted(set(a) & set(b))


@given(sorted_u16, sorted_u16)
def test_difference_matches_sets(a, b):
    assert list(merge_difference(a, b)) == sorted(set(a) - set(b))


@given(sorted_u16, sorted_u16)
def test_symmetric_difference_matches_sets(a, b):
    assert list(merge_symmetric_difference(a, b)) == sorted(set(a) ^ set(b))


@given(sorted_u16, sorted_u16)
def test_count_of_intersection(a, b):
    assert count(merge_intersection(a, b)) == len(set(a) & set(b))


@given(sorted_u16, sorted_u16)
def test_union_size_identity(a, b):
    union = count(merge_union(a, b))
    inter = count(merge_intersection(a, b))
    assert union + inter == len(a) + len(b)


def test_count_of_sized_and_unsized():
    values = [10, 20, 30]
    assert count(values) == len(values)
    assert count(iter(values)) == len(values)
    assert count(merge_union([], [])) == 0


def test_results_are_lazy_iterators():
    result = merge_union(iter([1, 2]), iter([3]))
    assert next(result) == 1
    assert list(result) == [2, 3]
import pytest

from roarstore.errors import (
    ArrayOrderError,
    CardinalityError,
    NonSortedIntegers,
    OrderErrorKind,
)


def test_non_sorted_integers_message_and_value():
    err = NonSortedIntegers(3)
    assert err.valid_until == 3
    assert str(err) == "integers are ordered up to the 3th element"


def test_non_sorted_integers_equality():
    assert NonSortedIntegers(5) == NonSortedIntegers(5)
    assert not (NonSortedIntegers(5) == NonSortedIntegers(6))
    assert hash(NonSortedIntegers(7)) == hash(NonSortedIntegers(7))


def test_non_sorted_integers_is_value_error():
    err = NonSortedIntegers(2)
    assert isinstance(err, ValueError)
    assert err.valid_until == 2
    assert str(err) == "integers are ordered up to the 2th element"


def test_cardinality_error_message():
    err = CardinalityError(10, 4)
    assert (err.expected, err.actual) == (10, 4)
    assert str(err) == "Expected cardinality was 10 but was 4"


def test_array_order_error_duplicate():
    err = ArrayOrderError(2, OrderErrorKind.DUPLICATE)
    assert err.kind is OrderErrorKind.DUPLICATE
    assert err.index == 2
    assert str(err) == "Duplicate element found at index: 2"


def test_array_order_error_out_of_order():
    err = ArrayOrderError(9, OrderErrorKind.OUT_OF_ORDER)
    assert err.kind is OrderErrorKind.OUT_OF_ORDER
    assert str(err) == "An element was out of order at index: 9"


def test_array_order_error_caught_as_value_error():
    err = ArrayOrderError(1, OrderErrorKind.DUPLICATE)
    assert isinstance(err, ValueError)
    assert err.index == 1
    assert str(err) == "Duplicate element found at index: 1"
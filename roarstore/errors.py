"""Exceptions raised when input to the bitmap stores breaks their invariants."""

from __future__ import annotations

from enum import Enum


class NonSortedIntegers(ValueError):
    """Raised when an iterator that must be sorted is not."""

    def __init__(self, valid_until: int) -> None:
        self.valid_until = valid_until
        super().__init__(f"integers are ordered up to the {valid_until}th element")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NonSortedIntegers):
            return NotImplemented
        return self.valid_until == other.valid_until

    def __hash__(self) -> int:
        return hash((NonSortedIntegers, self.valid_until))


class CardinalityError(ValueError):
    """Raised when a stated cardinality does not match the bits that are set."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected cardinality was {expected} but was {actual}")


class OrderErrorKind(Enum):
    """Why a sequence of values is not strictly increasing."""

    DUPLICATE = "duplicate"
    OUT_OF_ORDER = "out_of_order"


class ArrayOrderError(ValueError):
    """Raised when values for an array store are not sorted and unique."""

    def __init__(self, index: int, kind: OrderErrorKind) -> None:
        self.index = index
        self.kind = kind
        if kind is OrderErrorKind.DUPLICATE:
            message = f"Duplicate element found at index: {index}"
        else:
            message = f"An element was out of order at index: {index}"
        super().__init__(message)
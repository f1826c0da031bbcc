"""Merge-based set operations over sorted, duplicate-free sequences.

Each operation yields its result lazily, so the same walk can build a new
sequence (``list(...)``) or only count the result (``count(...)``).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def _merge(
    lhs: Iterable[int],
    rhs: Iterable[int],
    *,
    left_only: bool,
    right_only: bool,
    both: bool,
) -> Iterator[int]:
    """Walk two sorted inputs together, yielding the kinds of values asked for.

    ``left_only`` and ``right_only`` decide whether values present in just one
    input are kept (including each input's tail); ``both`` decides whether
    values present in both inputs are kept.
    """
    left, right = iter(lhs), iter(rhs)
    a, b = next(left, None), next(right, None)
    while a is not None and b is not None:
        if a < b:
            if left_only:
                yield a
            a = next(left, None)
        elif a > b:
            if right_only:
                yield b
            b = next(right, None)
        else:
            if both:
                yield a
            a, b = next(left, None), next(right, None)
    for keep, head, rest in ((left_only, a, left), (right_only, b, right)):
        if keep and head is not None:
            yield head
            yield from rest


def merge_union(lhs: Iterable[int], rhs: Iterable[int]) -> Iterator[int]:
    """Yield every value found in either input, in ascending order."""
    return _merge(lhs, rhs, left_only=True, right_only=True, both=True)


def merge_intersection(lhs: Iterable[int], rhs: Iterable[int]) -> Iterator[int]:
    """Yield the values found in both inputs, in ascending order."""
    return _merge(lhs, rhs, left_only=False, right_only=False, both=True)


def merge_difference(lhs: Iterable[int], rhs: Iterable[int]) -> Iterator[int]:
    """Yield the values of ``lhs`` that are not in ``rhs``, in ascending order."""
    return _merge(lhs, rhs, left_only=True, right_only=False, both=False)


def merge_symmetric_difference(lhs: Iterable[int], rhs: Iterable[int]) -> Iterator[int]:
    """Yield the values found in exactly one input, in ascending order."""
    return _merge(lhs, rhs, left_only=True, right_only=True, both=False)


def count(values: Iterable[int]) -> int:
    """Return how many values an iterable holds, consuming it if needed."""
    try:
        return len(values)  # type: ignore[arg-type]
    except TypeError:
        return sum(1 for _ in values)
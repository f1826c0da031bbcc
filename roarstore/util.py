"""Splitting 32-bit values into container keys and normalising ranges."""

from __future__ import annotations

from enum import Enum

U16_MAX = 0xFFFF
U32_MAX = 0xFFFF_FFFF


class RangeErrorKind(Enum):
    """Why a range could not be turned into an inclusive one."""

    EMPTY = "empty"
    START_GREATER_THAN_END = "start_greater_than_end"
    START_AND_END_EQUAL_EXCLUDED = "start_and_end_equal_excluded"


class ConvertRangeError(ValueError):
    """Raised when a range holds no 32-bit values or is malformed."""

    def __init__(self, kind: RangeErrorKind) -> None:
        self.kind = kind
        super().__init__(f"cannot convert range: {kind.value.replace('_', ' ')}")


def _check_u32(value: int, name: str) -> None:
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{name} {value} is outside the 32-bit unsigned range")


def split(value: int) -> tuple[int, int]:
    """Return the container key and the index within that container."""
    _check_u32(value, "value")
    return value >> 16, value & U16_MAX


def join(high: int, low: int) -> int:
    """Rebuild a 32-bit value from a container key and an index."""
    if not (0 <= high <= U16_MAX and 0 <= low <= U16_MAX):
        raise ValueError("high and low must both be 16-bit unsigned values")
    return (high << 16) + low


def convert_range_to_inclusive(
    start: int | None,
    stop: int | None,
    *,
    start_excluded: bool = False,
    stop_included: bool = False,
) -> tuple[int, int]:
    """Turn a range into inclusive ``(first, last)`` bounds over 32-bit values.

    ``None`` for ``start`` or ``stop`` means the range is unbounded on that side.
    By default the start is included and the stop excluded, as with ``range``.
    """
    if start is not None:
        _check_u32(start, "start")
    if stop is not None:
        _check_u32(stop, "stop")

    if start is not None and stop is not None:
        if start_excluded and not stop_included and start == stop:
            raise ConvertRangeError(RangeErrorKind.START_AND_END_EQUAL_EXCLUDED)
        if start > stop:
            raise ConvertRangeError(RangeErrorKind.START_GREATER_THAN_END)

    if start is None:
        first = 0
    elif start_excluded:
        if start == U32_MAX:
            raise ConvertRangeError(RangeErrorKind.EMPTY)
        first = start + 1
    else:
        first = start

    if stop is None:
        last = U32_MAX
    elif stop_included:
        last = stop
    else:
        if stop == 0:
            raise ConvertRangeError(RangeErrorKind.EMPTY)
        last = stop - 1

    if first > last:
        raise ConvertRangeError(RangeErrorKind.EMPTY)
    return first, last
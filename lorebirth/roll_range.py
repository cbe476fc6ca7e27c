"""Inclusive roll ranges and the parsers for the ``_cr_range`` style data fields."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from lorebirth.dice import random_of

log = logging.getLogger(__name__)

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


class DataError(ValueError):
    """Raised when table data is malformed or inconsistent."""


@dataclass(frozen=True)
class RollRange:
    """An inclusive range of die results."""

    start: int
    end: int

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.start <= value <= self.end

    def random(self) -> int:
        """Pick a uniformly random value inside the range."""
        if self.start > self.end:
            raise ValueError(f"cannot roll in empty range {self.start}..={self.end}")
        return random.randint(self.start, self.end)


NO_RANGE = RollRange(I32_MIN, I32_MIN)
"""A range nigh impossible to roll, for entries outside the roll tables."""


class HasRollRange(Protocol):
    roll_range: RollRange


R = TypeVar("R", bound=HasRollRange)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _i32(value: Any) -> int:
    if not _is_int(value) or not I32_MIN <= value <= I32_MAX:
        raise DataError(f"expected a 32-bit integer, got {value!r}")
    return value


def _pair(value: Any) -> tuple[int, int] | None:
    if isinstance(value, (list, tuple)) and len(value) == 2 and all(map(_is_int, value)):
        return _i32(value[0]), _i32(value[1])
    return None


def parse_fixed_cr_range(value: Any) -> RollRange:
    """Parse a single integer or an ``[a, b]`` pair into a range."""
    if _is_int(value):
        v = _i32(value)
        return RollRange(v, v)
    pair = _pair(value)
    if pair is None:
        raise DataError(f"invalid fixed roll range: {value!r}")
    return RollRange(*pair)


def parse_cr_range(value: Any) -> RollRange:
    """Parse an integer, ``[a, b]``, ``{"upto": x}`` or ``{"ge": x}`` into a range."""
    if isinstance(value, dict):
        if "upto" in value:
            return RollRange(I32_MIN, _i32(value["upto"]))
        if "ge" in value:
            return RollRange(_i32(value["ge"]), I32_MAX)
        raise DataError(f"invalid roll range: {value!r}")
    try:
        return parse_fixed_cr_range(value)
    except DataError:
        raise DataError(f"invalid roll range: {value!r}") from None


def parse_optional_cr_range(value: Any) -> RollRange | None:
    """As :func:`parse_cr_range`, but ``None`` passes through."""
    return None if value is None else parse_cr_range(value)


def parse_dice(value: Any) -> tuple[int, int]:
    """Parse a flat integer or a ``[count, sides]`` pair into dice notation."""
    if _is_int(value):
        return _i32(value), 1
    pair = _pair(value)
    if pair is None:
        raise DataError(f"invalid dice value: {value!r}")
    return pair


def parse_string_with_optional(value: Any) -> tuple[str, str | None]:
    """Parse a string or a ``[string, string-or-null]`` pair."""
    if isinstance(value, str):
        return value, None
    if (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and isinstance(value[0], str)
        and (value[1] is None or isinstance(value[1], str))
    ):
        return value[0], value[1]
    raise DataError(f"expected a string or a [string, optional string] pair, got {value!r}")


def default_pc_save_cr_range() -> RollRange:
    """Placeholder range for saved characters, which never roll on it."""
    return RollRange(0, 0)


def validate_cr_ranges(
    name: str, items: Sequence[HasRollRange], range_min: int | None = None
) -> RollRange:
    """Check that the items' ranges cover a table without gaps or overlaps.

    Returns the full range covered.
    """
    ranges = sorted((item.roll_range for item in items), key=lambda r: r.start)
    if not ranges:
        raise DataError(f"{name} list is empty; cannot validate ranges")

    minimum = 1 if range_min is None else range_min
    first = ranges[0]
    if first.start != minimum:
        raise DataError(f"{name} roll table must start at {minimum}; found {first}")

    for current, following in zip(ranges, ranges[1:]):
        if following.start != current.end + 1:
            raise DataError(
                f"gap or overlap in {name} roll table: {current} followed by {following}"
            )

    full = RollRange(first.start, ranges[-1].end)
    log.debug("%s ranges successfully validated: %s..=%s", name, full.start, full.end)
    return full


def random_in_range(items: Sequence[R], roll_range: RollRange) -> R:
    """Roll within ``roll_range`` and pick one of the items whose range holds the roll."""
    rolled = roll_range.random()
    found = [item for item in items if rolled in item.roll_range]
    if not found:
        raise DataError(f"roll {rolled} is outside every entry's range")
    return random_of(found)
"""Dice rolling and small numeric helpers used throughout the generators."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")


def d(sides: int) -> int:
    """Roll a single die with ``sides`` faces, giving 1..sides."""
    if sides < 1:
        raise ValueError(f"a die needs at least one side, got {sides}")
    return random.randint(1, sides)


def roll(count: int, sides: int) -> int:
    """Roll ``count`` dice of ``sides`` faces and return their sum."""
    if count < 0:
        raise ValueError(f"cannot roll a negative number of dice ({count})")
    return sum(d(sides) for _ in range(count))


def random_of(items: Sequence[T]) -> T:
    """Pick one element of ``items`` at random."""
    if not items:
        raise ValueError("cannot pick from an empty collection")
    return random.choice(items)


def is_low() -> bool:
    """A coin toss: true on the low half of a d2."""
    return d(2) == 1


def if_percent(chance: int, func: Callable[[], T]) -> T | None:
    """Call ``func`` with a ``chance`` percent probability and return its result.

    A chance of zero never calls ``func``. Negative chances wrap around to a
    huge unsigned value, so they always succeed.
    """
    if chance == 0:
        return None
    if chance < 0 or d(100) <= chance:
        return func()
    return None


def one_f64() -> float:
    """Default multiplier of 1.0."""
    return 1.0


def is_zero(value: int) -> bool:
    """True for zero and anything below it."""
    return value <= 0
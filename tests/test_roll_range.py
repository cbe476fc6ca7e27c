import random
from dataclasses import dataclass

import pytest

from lorebirth.roll_range import (
    I32_MAX,
    I32_MIN,
    NO_RANGE,
    DataError,
    RollRange,
    default_pc_save_cr_range,
    parse_cr_range,
    parse_dice,
    parse_fixed_cr_range,
    parse_optional_cr_range,
    parse_string_with_optional,
    random_in_range,
    validate_cr_ranges,
)


@dataclass
class Entry:
    name: str
    roll_range: RollRange


def entries(*bounds):
    return [Entry(f"e{i}", RollRange(a, b)) for i, (a, b) in enumerate(bounds)]


def test_contains_is_inclusive():
    r = RollRange(3, 7)
    assert 3 in r and 7 in r and 5 in r
    assert 2 not in r and 8 not in r


def test_contains_rejects_non_int():
    assert "4" not in RollRange(3, 7)


def test_random_within_bounds():
    random.seed(7)
    r = RollRange(4, 9)
    values = {r.random() for _ in range(500)}
    assert values == set(range(4, 10))


def test_random_empty_range_raises():
    with pytest.raises(ValueError):
        RollRange(5, 2).random()


def test_no_range_is_unreachable_by_dice():
    random.seed(5)
    items = [Entry("unreachable", NO_RANGE)]
    for _ in range(50):
        with pytest.raises(DataError):
            random_in_range(items, RollRange(-100, 100))


def test_parse_fixed_single_and_pair():
    assert parse_fixed_cr_range(4) == RollRange(4, 4)
    assert parse_fixed_cr_range([2, 9]) == RollRange(2, 9)


@pytest.mark.parametrize("bad", [{"upto": 3}, "4", [1], [1, 2, 3], True, None])
def test_parse_fixed_rejects(bad):
    with pytest.raises(DataError):
        parse_fixed_cr_range(bad)


def test_parse_cr_range_open_ended():
    assert parse_cr_range({"upto": 5}) == RollRange(I32_MIN, 5)
    assert parse_cr_range({"ge": 11}) == RollRange(11, I32_MAX)
    assert parse_cr_range([1, 3]) == RollRange(1, 3)
    assert parse_cr_range(8) == RollRange(8, 8)


@pytest.mark.parametrize("bad", [{"other": 1}, "x", [1, "2"], 2**40])
def test_parse_cr_range_rejects(bad):
    with pytest.raises(DataError):
        parse_cr_range(bad)


def test_parse_optional_cr_range():
    assert parse_optional_cr_range(None) is None
    assert parse_optional_cr_range({"ge": 2}) == RollRange(2, I32_MAX)


def test_parse_dice():
    assert parse_dice(5) == (5, 1)
    assert parse_dice([2, 6]) == (2, 6)
    with pytest.raises(DataError):
        parse_dice("2d6")


def test_parse_string_with_optional():
    assert parse_string_with_optional("nomad") == ("nomad", None)
    assert parse_string_with_optional(["nomad", "barbarian"]) == ("nomad", "barbarian")
    assert parse_string_with_optional(["nomad", None]) == ("nomad", None)
    with pytest.raises(DataError):
        parse_string_with_optional(["nomad"])


def test_default_pc_save_cr_range():
    r = default_pc_save_cr_range()
    assert r.start == r.end == 0


def test_validate_contiguous_unsorted():
    items = entries((4, 6), (1, 3), (7, 10))
    assert validate_cr_ranges("T", items) == RollRange(1, 10)


def test_validate_custom_minimum():
    items = entries((0, 2), (3, 3))
    assert validate_cr_ranges("T", items, 0) == RollRange(0, 3)


@pytest.mark.parametrize(
    "bounds",
    [
        ((1, 3), (5, 6)),
        ((1, 3), (3, 6)),
        ((2, 3), (4, 6)),
    ],
)
def test_validate_rejects_bad_tables(bounds):
    with pytest.raises(DataError):
        validate_cr_ranges("T", entries(*bounds))


def test_validate_rejects_empty():
    with pytest.raises(DataError):
        validate_cr_ranges("T", [])


def test_random_in_range_picks_matching():
    random.seed(3)
    items = entries((1, 2), (3, 5), (6, 6))
    for _ in range(200):
        assert random_in_range(items, RollRange(3, 5)) is items[1]


def test_random_in_range_covers_table():
    random.seed(11)
    items = entries((1, 2), (3, 5), (6, 6))
    full = validate_cr_ranges("T", items)
    picked = {random_in_range(items, full).name for _ in range(500)}
    assert picked == {item.name for item in items}


def test_random_in_range_out_of_table():
    with pytest.raises(DataError):
        random_in_range(entries((1, 2)), RollRange(10, 12))
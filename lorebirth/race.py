"""Races, genders and the race table."""

from __future__ import annotations

import enum
import json
import logging
import random
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

from lorebirth.native_env import NativeOf, parse_native_ofs
from lorebirth.roll_range import (
    DataError,
    RollRange,
    default_pc_save_cr_range,
    parse_fixed_cr_range,
    random_in_range,
    validate_cr_ranges,
)

log = logging.getLogger(__name__)

DEFAULT_RACE_FILE = Path("data/race.json")


class Gender(enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNSPECIFIED = "Unspecified"

    @classmethod
    def random(cls) -> Gender:
        """Male or female, evenly."""
        return random.choice((cls.MALE, cls.FEMALE))

    @classmethod
    def random_biased(cls, bias: float | None) -> Gender:
        """Male with probability ``bias``; an even split when there is no bias."""
        if bias is None:
            return cls.random()
        return cls.MALE if random.random() < bias else cls.FEMALE

    @classmethod
    def parse(cls, value: str | None) -> Gender:
        """Interpret a gender name; ``None`` means unspecified."""
        if value is None:
            return cls.UNSPECIFIED
        lowered = value.strip().lower()
        if lowered in ("male", "m"):
            return cls.MALE
        if lowered in ("female", "f"):
            return cls.FEMALE
        if lowered in ("unspecified", "none", ""):
            return cls.UNSPECIFIED
        raise ValueError(f"unknown gender '{value}'")


class RacialEvent(enum.Enum):
    DWARF = "Dwarf"
    ELF = "Elf"
    HALFLING = "Halfling"
    MONSTER = "Monster"


@dataclass(frozen=True)
class Race:
    """Specifications of a race."""

    name: str
    roll_range: RollRange = field(default_factory=default_pc_save_cr_range)
    max_culture: str | None = None
    hybrid: bool = False
    is_default: bool = False
    shift_nomad_down: bool = False
    shift_civilized_up: bool = False
    racial_events: RacialEvent | None = None
    hybrid_events: RacialEvent | None = None
    gender_bias: float | None = None
    beastman: bool = False
    reptilian: bool = False
    forced_gender: Gender | None = None
    convert_title: tuple[tuple[str, str], ...] = ()
    incompatible_env: tuple[NativeOf, ...] = ()

    def racial_events_for(self, raised_by_humans: bool) -> RacialEvent | None:
        """The race's event table; hybrids raised by humans have none of their own."""
        if self.racial_events is not None:
            return self.racial_events
        if not raised_by_humans:
            return self.hybrid_events
        return None

    def random_gender(self) -> Gender:
        """A gender following the race's forced gender or bias."""
        if self.forced_gender is not None:
            return self.forced_gender
        return Gender.random_biased(self.gender_bias)

    def adjust_gender(self, gender: Gender) -> Gender:
        """Replace ``gender`` with the race's forced one, if it has one."""
        return self.forced_gender if self.forced_gender is not None else gender

    def incompatible_with_env(self, environment: NativeOf) -> bool:
        """True if the race cannot be born in ``environment``."""
        return environment in self.incompatible_env


def _flag(entry: dict[str, Any], key: str) -> bool:
    value = entry.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DataError(f"race field '{key}' must be a boolean: {entry!r}")
    return value


def _event(entry: dict[str, Any], key: str) -> RacialEvent | None:
    value = entry.get(key)
    if value is None:
        return None
    try:
        return RacialEvent(value)
    except ValueError:
        raise DataError(f"unknown racial event {value!r}") from None


def _bias(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 1:
        raise DataError(f"gender bias must be a number between 0 and 1, got {value!r}")
    return float(value)


def _titles(value: Any) -> tuple[tuple[str, str], ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise DataError(f"invalid title conversions: {value!r}")
    pairs = []
    for item in value:
        if not (
            isinstance(item, list) and len(item) == 2 and all(isinstance(s, str) for s in item)
        ):
            raise DataError(f"invalid title conversion: {item!r}")
        pairs.append((item[0], item[1]))
    return tuple(pairs)


def _race_from_json(entry: Any) -> Race:
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        raise DataError(f"invalid race entry: {entry!r}")
    raw_range = entry.get("_cr_range")
    max_culture = entry.get("max_culture")
    if max_culture is not None and not isinstance(max_culture, str):
        raise DataError(f"race max_culture must be a name: {entry!r}")
    forced = entry.get("forced_gender")
    try:
        forced_gender = None if forced is None else Gender.parse(forced)
    except (ValueError, AttributeError):
        raise DataError(f"invalid forced gender {forced!r}") from None
    incompatible = entry.get("incompatible_env")
    try:
        envs = () if incompatible is None else tuple(parse_native_ofs(incompatible))
    except ValueError as err:
        raise DataError(str(err)) from None
    return Race(
        name=entry["name"],
        roll_range=(
            default_pc_save_cr_range() if raw_range is None else parse_fixed_cr_range(raw_range)
        ),
        max_culture=max_culture,
        hybrid=_flag(entry, "hybrid"),
        is_default=_flag(entry, "_default"),
        shift_nomad_down=_flag(entry, "shift_nomad_down"),
        shift_civilized_up=_flag(entry, "shift_civilized_up"),
        racial_events=_event(entry, "racial_events"),
        hybrid_events=_event(entry, "hybrid_events"),
        gender_bias=_bias(entry.get("gender_bias")),
        beastman=_flag(entry, "beastman"),
        reptilian=_flag(entry, "reptilian"),
        forced_gender=forced_gender,
        convert_title=_titles(entry.get("convert_title")),
        incompatible_env=envs,
    )


class RaceCatalog:
    """The race table; every race must have a roll range, without gaps or overlaps."""

    def __init__(self, races: Iterable[Race]) -> None:
        self.races = list(races)
        missing = [r.name for r in self.races if r.roll_range == default_pc_save_cr_range()]
        for name in missing:
            log.error("race '%s' is missing its '_cr_range' field", name)
        if missing:
            raise DataError(f"races missing their roll range: {', '.join(missing)}")
        self._range = validate_cr_ranges("RACES", self.races)

    @classmethod
    def from_json(cls, text: str) -> RaceCatalog:
        """Build from a JSON array of race objects."""
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as err:
            raise DataError(f"race data is not valid JSON: {err}") from None
        if not isinstance(data, list):
            raise DataError("race data must be a JSON array")
        return cls(_race_from_json(entry) for entry in data)

    @classmethod
    def load(cls, path: str | PathLike[str] = DEFAULT_RACE_FILE) -> RaceCatalog:
        """Read the table from a JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def default(self) -> Race:
        """The single race marked as default."""
        defaults = [r for r in self.races if r.is_default]
        if not defaults:
            raise DataError("no default race specified")
        if len(defaults) > 1:
            raise DataError(f"too many default races ({len(defaults)}) defined")
        return defaults[0]

    def random(self) -> Race:
        """A random race, weighted by roll ranges."""
        return random_in_range(self.races, self._range)

    def random_nonhuman(self) -> Race:
        """A random race from the part of the table after humans."""
        human = self.by_name("human")
        return random_in_range(self.races, RollRange(human.roll_range.end + 1, self._range.end))

    def by_name(self, name: str) -> Race:
        """Look up a race by name, ignoring case; unknown names raise ``KeyError``."""
        lowered = name.lower()
        for race in self.races:
            if race.name.lower() == lowered:
                return race
        raise KeyError(f"No race called '{name}' found!")

    def from_option(self, name: str | None) -> Race:
        """The named race, or a random one when no name is given."""
        return self.random() if name is None else self.by_name(name)

    def beastmen(self) -> list[Race]:
        """All beastman races."""
        return [r for r in self.races if r.beastman]

    def reptilians(self) -> list[Race]:
        """All reptilian races."""
        return [r for r in self.races if r.reptilian]

    def __iter__(self) -> Iterator[Race]:
        return iter(self.races)

    def __len__(self) -> int:
        return len(self.races)
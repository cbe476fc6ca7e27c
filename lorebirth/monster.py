"""Monsters and the monster table."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

from lorebirth.dice import d, random_of
from lorebirth.race import Gender, RaceCatalog
from lorebirth.roll_range import (
    DataError,
    RollRange,
    default_pc_save_cr_range,
    parse_cr_range,
    random_in_range,
    validate_cr_ranges,
)

DEFAULT_MONSTER_FILE = Path("data/monsters.json")

GM_SPECIAL_A = "GM#756A"
GM_SPECIAL_B = "GM#756B"

# Beastman race, reptilian race and two game master specials.
_EXTRA_ENTRIES = 4


@dataclass
class Monster:
    """A monster category, possibly with named variants."""

    name: str
    roll_range: RollRange
    variants: list[str] = field(default_factory=list)
    gender: Gender = Gender.UNSPECIFIED


def _monster_from_json(entry: Any) -> Monster:
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        raise DataError(f"invalid monster entry: {entry!r}")
    if "_cr_range" not in entry:
        raise DataError(f"monster '{entry['name']}' is missing its '_cr_range' field")
    variants = entry.get("variants", [])
    if not isinstance(variants, list) or not all(isinstance(v, str) for v in variants):
        raise DataError(f"monster variants must be a list of names: {entry!r}")
    raw_gender = entry.get("gender")
    try:
        gender = Gender.UNSPECIFIED if raw_gender is None else Gender.parse(raw_gender)
    except (ValueError, AttributeError):
        raise DataError(f"invalid gender {raw_gender!r}") from None
    return Monster(
        name=entry["name"],
        roll_range=parse_cr_range(entry["_cr_range"]),
        variants=list(variants),
        gender=gender,
    )


class MonsterCatalog:
    """The monster table; roll ranges must cover it without gaps or overlaps."""

    def __init__(self, monsters: Iterable[Monster]) -> None:
        self.monsters = list(monsters)
        self._range = validate_cr_ranges("MONSTERS", self.monsters)

    @property
    def roll_range(self) -> RollRange:
        """The range the table covers."""
        return self._range

    @classmethod
    def from_json(cls, text: str) -> MonsterCatalog:
        """Build from a JSON array of monster objects."""
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as err:
            raise DataError(f"monster data is not valid JSON: {err}") from None
        if not isinstance(data, list):
            raise DataError("monster data must be a JSON array")
        return cls(_monster_from_json(entry) for entry in data)

    @classmethod
    def load(cls, path: str | PathLike[str] = DEFAULT_MONSTER_FILE) -> MonsterCatalog:
        """Read the table from a JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def random(self, races: RaceCatalog) -> Monster:
        """A random monster; beyond the table lie beastmen, reptilians and GM specials."""
        end = self._range.end
        rolled = d(end + _EXTRA_ENTRIES)
        if rolled > end:
            gender = Gender.random()
            offset = rolled - end - 1
            if offset <= 0:
                name = random_of(races.beastmen()).name
            elif offset == 1:
                name = random_of(races.reptilians()).name
            elif offset == 2:
                name = GM_SPECIAL_A
            else:
                name = GM_SPECIAL_B
            return Monster(name, default_pc_save_cr_range(), [], gender)

        monster = random_in_range(self.monsters, self._range)
        name = random_of(monster.variants) if monster.variants else monster.name
        return Monster(name, monster.roll_range, [], monster.gender)

    def __iter__(self) -> Iterator[Monster]:
        return iter(self.monsters)

    def __len__(self) -> int:
        return len(self.monsters)
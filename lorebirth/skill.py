"""Skills, the skill catalog and the literacy protocols."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from lorebirth.native_env import (
    SHIP_SAILING_SKILL_NAME,
    URBAN_SKILL_NAME,
    WILDERNESS_SKILL_NAME,
    NativeKind,
    NativeOf,
)
from lorebirth.roll_range import DataError

DEFAULT_SKILL_FILE = Path("data/skill.json")


@runtime_checkable
class LitMod(Protocol):
    """Anything that modifies the chance of being literate."""

    def litmod(self) -> int:
        """Literacy chance modifier in percent."""
        ...


@runtime_checkable
class LiteracySource(Protocol):
    """Anything that can grant literacy in some languages."""

    def literacy_skills(self) -> list[tuple[str, int]]:
        """Languages and the percentage chance of literacy in each."""
        ...


@dataclass(frozen=True)
class SkillBase:
    """A skill as defined in the catalog, without any rank."""

    name: str
    description: str


@dataclass
class Skill:
    """A named, ranked skill."""

    name: str
    rank: int = 0
    description: str = ""

    @classmethod
    def from_base(cls, base: SkillBase, rank: int = 0) -> Skill:
        """Make a skill of the given rank from a catalog entry."""
        return cls(name=base.name, rank=rank, description=base.description)

    def __iadd__(self, amount: int) -> Skill:
        self.rank += amount
        return self

    def __isub__(self, amount: int) -> Skill:
        self.rank -= amount
        return self


class SkillCatalog:
    """All known skills, looked up by exact name."""

    def __init__(self, bases: Iterable[SkillBase]) -> None:
        self._bases: dict[str, SkillBase] = {}
        for base in bases:
            self._bases.setdefault(base.name, base)

    @classmethod
    def from_json(cls, text: str) -> SkillCatalog:
        """Build a catalog from a JSON array of ``{"name", "description"}`` objects."""
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as err:
            raise DataError(f"skill data is not valid JSON: {err}") from None
        if not isinstance(data, list):
            raise DataError("skill data must be a JSON array")
        bases = []
        for entry in data:
            if not isinstance(entry, dict):
                raise DataError(f"invalid skill entry: {entry!r}")
            name, description = entry.get("name"), entry.get("description")
            if not isinstance(name, str) or not isinstance(description, str):
                raise DataError(f"skill entry needs a name and a description: {entry!r}")
            bases.append(SkillBase(name, description))
        return cls(bases)

    @classmethod
    def load(cls, path: str | PathLike[str] = DEFAULT_SKILL_FILE) -> SkillCatalog:
        """Read the catalog from a JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def get(self, name: str) -> SkillBase:
        """Look up a skill by exact name; unknown names raise ``KeyError``."""
        try:
            return self._bases[name]
        except KeyError:
            raise KeyError(f"No such skill as '{name}' defined!") from None

    def skill(self, name: str, rank: int = 0) -> Skill:
        """A ranked skill made from the named catalog entry."""
        return Skill.from_base(self.get(name), rank)

    def __contains__(self, name: object) -> bool:
        return name in self._bases

    def __iter__(self) -> Iterator[SkillBase]:
        return iter(self._bases.values())

    def __len__(self) -> int:
        return len(self._bases)


def skill_for_environment(
    environment: NativeOf, catalog: SkillCatalog, rank: int = 0
) -> Skill | None:
    """The survival or sailing skill an environment gives, if it gives any."""
    env = environment.primary_env()
    if env.kind is NativeKind.URBAN:
        name = URBAN_SKILL_NAME
    elif env.kind is NativeKind.WILDERNESS:
        name = WILDERNESS_SKILL_NAME
    elif env.kind is NativeKind.WATER_STRUCTURE and env.specific.lower() == "ship":
        name = SHIP_SAILING_SKILL_NAME
    else:
        return None
    return catalog.skill(name, rank)
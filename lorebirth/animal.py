"""Animals, wild and tamed, and the table they are drawn from."""

from __future__ import annotations

import enum
import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from os import PathLike
from pathlib import Path
from typing import Any

from lorebirth.color import ColorPalette
from lorebirth.dice import d, random_of
from lorebirth.pet import PetAbility, random_pet_abilities
from lorebirth.race import Gender
from lorebirth.roll_range import DataError

DEFAULT_ANIMAL_FILE = Path("data/animal.json")


class AnimalEnv(enum.IntFlag):
    """Environments an animal lives in or commonly uses."""

    WATER = 1
    LAND = 2
    AIR = 4
    BURROW = 8
    # Only for alien species.
    SPACE = 16
    INCORPOREAL = 32


_ALL_ENV_BITS = 63


class SpecialHook(enum.Enum):
    FISH = "Fish"
    ALIEN = "Alien"


@dataclass
class AnimalCore:
    """An animal species and its traits."""

    name: str
    alt: list[str] = field(default_factory=list)
    gender: Gender = Gender.UNSPECIFIED
    environment: AnimalEnv = AnimalEnv.LAND
    sab: bool = False
    special: SpecialHook | None = None
    pet_abilities: list[PetAbility] = field(default_factory=list)

    def is_amphibian(self) -> bool:
        """Lives both in water and on land."""
        return AnimalEnv.WATER in self.environment and AnimalEnv.LAND in self.environment

    def stays_a_baby(self) -> bool:
        """The animal never grows up."""
        return self.sab

    def resolve(self) -> None:
        """Maybe pick an alternative name, and apply any special hook."""
        if self.alt:
            index = d(len(self.alt) + 1) - 2
            if index >= 0:
                self.name = self.alt[index]
        if self.special is SpecialHook.FISH:
            self.environment = AnimalEnv.WATER
            if d(3) == 1:
                self.environment |= AnimalEnv.LAND
        elif self.special is SpecialHook.ALIEN:
            self.environment = AnimalEnv(d(_ALL_ENV_BITS))

    def copy(self) -> AnimalCore:
        """An independent copy."""
        return replace(self, alt=list(self.alt), pet_abilities=list(self.pet_abilities))


@dataclass
class Animal:
    """An animal, either wild or tamed as a pet."""

    core: AnimalCore
    tamed: bool = False

    def petify(self, palette: ColorPalette) -> None:
        """Tame the animal, granting pet abilities, unless it already is a pet."""
        if self.tamed:
            return
        beast = self.core.copy()
        beast.pet_abilities = random_pet_abilities(palette)
        self.core = beast
        self.tamed = True


def _env_from_json(value: Any) -> AnimalEnv:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DataError(f"animal environment must be a non-negative integer, got {value!r}")
    if value > 255:
        raise DataError(f"cannot make an animal environment out of {value}")
    if value & ~_ALL_ENV_BITS:
        raise DataError(f"{value} is not a combination of animal environments")
    return AnimalEnv(value)


def _special_from_json(value: Any) -> SpecialHook | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DataError(f"special hook must be a string, got {value!r}")
    lowered = value.lower()
    for hook in SpecialHook:
        if hook.value.lower() == lowered:
            return hook
    raise DataError(f"unknown _special hook: '{lowered}'")


def _strings(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise DataError(f"expected a string or a list of strings, got {value!r}")


def _gender_from_json(value: Any) -> Gender:
    if value is None:
        return Gender.UNSPECIFIED
    try:
        return Gender.parse(value)
    except (ValueError, AttributeError):
        raise DataError(f"invalid gender {value!r}") from None


def _animal_from_json(entry: Any) -> AnimalCore:
    if isinstance(entry, str):
        return AnimalCore(entry)
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        raise DataError(f"invalid animal entry: {entry!r}")
    sab = entry.get("sab", False)
    if not isinstance(sab, bool):
        raise DataError(f"animal 'sab' must be a boolean: {entry!r}")
    abilities = entry.get("pet_abilities", [])
    if not isinstance(abilities, list):
        raise DataError(f"animal 'pet_abilities' must be a list: {entry!r}")
    return AnimalCore(
        name=entry["name"],
        alt=_strings(entry.get("alt")),
        gender=_gender_from_json(entry.get("gender")),
        environment=(
            _env_from_json(entry["environment"]) if "environment" in entry else AnimalEnv.LAND
        ),
        sab=sab,
        special=_special_from_json(entry.get("_special")),
        pet_abilities=[PetAbility.from_json(a) for a in abilities],
    )


class Bestiary:
    """The table of known animals."""

    def __init__(self, animals: Iterable[AnimalCore]) -> None:
        self.animals = list(animals)

    @classmethod
    def from_json(cls, text: str) -> Bestiary:
        """Build from a JSON array of names or animal objects."""
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as err:
            raise DataError(f"animal data is not valid JSON: {err}") from None
        if not isinstance(data, list):
            raise DataError("animal data must be a JSON array")
        return cls(_animal_from_json(entry) for entry in data)

    @classmethod
    def load(cls, path: str | PathLike[str] = DEFAULT_ANIMAL_FILE) -> Bestiary:
        """Read the table from a JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def random(self) -> Animal:
        """A random wild animal."""
        core = random_of(self.animals).copy()
        core.resolve()
        return Animal(core)

    def random_pet(self, palette: ColorPalette) -> Animal:
        """A random animal, tamed."""
        animal = self.random()
        animal.petify(palette)
        return animal

    def __iter__(self) -> Iterator[AnimalCore]:
        return iter(self.animals)

    def __len__(self) -> int:
        return len(self.animals)
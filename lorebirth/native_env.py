"""Native environments of cultures, races and birthplaces."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from lorebirth.roll_range import DataError

URBAN_SKILL_NAME = "Survival: Urban"
WILDERNESS_SKILL_NAME = "Survival: Wilderness"
SHIP_SAILING_SKILL_NAME = "Sailing: Ship"


class NativeKind(enum.Enum):
    AIR = "air"
    UNDERGROUND = "underground"
    AQUATIC = "aquatic"
    WATER_STRUCTURE = "water structure"
    URBAN = "urban"
    WILDERNESS = "wilderness"
    CHOICE = "choice"


_NAME_KINDS = {
    "air": NativeKind.AIR,
    "underground": NativeKind.UNDERGROUND,
    "urban": NativeKind.URBAN,
    "wilderness": NativeKind.WILDERNESS,
    "wilds": NativeKind.WILDERNESS,
    "lake": NativeKind.AQUATIC,
    "sea": NativeKind.AQUATIC,
    "ocean": NativeKind.AQUATIC,
    "river": NativeKind.AQUATIC,
    "pond": NativeKind.AQUATIC,
    "aquatic": NativeKind.AQUATIC,
}
_WATER_STRUCTURES = {"ship", "raft", "floating village"}

_JSON_KINDS = {
    "urban": NativeKind.URBAN,
    "wilderness": NativeKind.WILDERNESS,
    "air": NativeKind.AIR,
    "underground": NativeKind.UNDERGROUND,
    "aquatic": NativeKind.AQUATIC,
}

_OPPOSITES = {
    NativeKind.AIR: NativeKind.UNDERGROUND,
    NativeKind.UNDERGROUND: NativeKind.AIR,
    NativeKind.URBAN: NativeKind.WILDERNESS,
    NativeKind.WILDERNESS: NativeKind.URBAN,
    NativeKind.AQUATIC: NativeKind.AIR,
}


@dataclass(frozen=True)
class NativeOf:
    """An environment; a choice holds a primary and an occasional secondary one."""

    kind: NativeKind
    specific: str | None = None
    primary: NativeOf | None = None
    secondary: NativeOf | None = None

    def __post_init__(self) -> None:
        if self.kind is NativeKind.CHOICE and (self.primary is None or self.secondary is None):
            raise ValueError("a choice environment needs both primary and secondary")
        if self.kind is NativeKind.WATER_STRUCTURE and not self.specific:
            raise ValueError("a water structure environment needs a specific name")

    @classmethod
    def from_name(cls, value: str) -> NativeOf:
        """Interpret a free-form environment name, synonyms included."""
        lowered = value.lower()
        if lowered in _WATER_STRUCTURES:
            return cls(NativeKind.WATER_STRUCTURE, specific=value)
        kind = _NAME_KINDS.get(lowered)
        if kind is None:
            raise ValueError(
                f"'{value}' is not among the recognized environments "
                "'air', 'underground', 'urban' or 'wilderness'"
            )
        return cls(kind)

    @classmethod
    def from_json(cls, value: Any) -> NativeOf:
        """Build from a JSON string or a ``{"primary": .., "secondary": ..}`` object."""
        if isinstance(value, str):
            lowered = value.lower()
            if lowered == "ship":
                return cls(NativeKind.WATER_STRUCTURE, specific=value)
            kind = _JSON_KINDS.get(lowered)
            if kind is None:
                raise DataError(f"unknown environment '{value}', expected Urban or Wilderness")
            return cls(kind)
        if isinstance(value, dict):
            try:
                primary, secondary = value["primary"], value["secondary"]
            except KeyError as missing:
                raise DataError(f"environment choice is missing {missing}") from None
            return cls(
                NativeKind.CHOICE,
                primary=cls.from_json(primary),
                secondary=cls.from_json(secondary),
            )
        raise DataError(f"invalid environment value: {value!r}")

    def primary_env(self) -> NativeOf:
        """The primary environment, following nested choices."""
        if self.kind is NativeKind.CHOICE:
            return self.primary.primary_env()
        return self

    def secondary_env(self) -> NativeOf | None:
        """The secondary environment of a choice, if any."""
        return self.secondary if self.kind is NativeKind.CHOICE else None

    def opposite(self) -> NativeOf:
        """The polar opposite of the primary environment."""
        if self.kind is NativeKind.CHOICE:
            return self.primary.opposite()
        if self.kind is NativeKind.WATER_STRUCTURE:
            return self
        return NativeOf(_OPPOSITES[self.kind])

    def skill_placeholder_replace(self, source: str) -> str:
        """Fill ``<NativeOf>`` and ``<NativeOf.opposite>`` placeholders."""
        return source.replace("<NativeOf>", str(self.primary_env())).replace(
            "<NativeOf.opposite>", str(self.opposite())
        )

    def __str__(self) -> str:
        if self.kind is NativeKind.CHOICE:
            return f"{self.primary}|{self.secondary}"
        if self.kind is NativeKind.WATER_STRUCTURE:
            return self.specific
        return self.kind.value


def parse_native_ofs(value: Any) -> list[NativeOf]:
    """Parse a single environment name or a list of them."""
    if isinstance(value, str):
        return [NativeOf.from_name(value)]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return [NativeOf.from_name(v) for v in value]
    raise DataError(f"expected an environment name or a list of them, got {value!r}")
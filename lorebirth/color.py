"""Colors, mundane and exotic, with optional tints."""

from __future__ import annotations

import enum
import json
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from os import PathLike
from pathlib import Path
from typing import Any

from lorebirth.dice import d, random_of
from lorebirth.roll_range import DataError

DEFAULT_COLOR_FILE = Path("data/color.json")

TINT_ONE_IN_X_EXOTIC = 6
TINT_ONE_IN_X_MUNDANE = 20


class ColorTint(enum.Enum):
    PASTEL = "Pastel"
    DARK = "Dark"

    @classmethod
    def random(cls) -> ColorTint:
        """Either pastel or dark, evenly."""
        return cls.PASTEL if d(2) == 1 else cls.DARK

    def __str__(self) -> str:
        return "dark" if self is ColorTint.DARK else "light"


@dataclass(frozen=True)
class ColorVariant:
    """An alternative name for a color, possibly exotic."""

    name: str
    exotic: bool = False


@dataclass
class ExoticColor:
    """A color with its alternative variants and an optional tint."""

    name: str
    alt: list[ColorVariant] = field(default_factory=list)
    exotic: bool = False
    tint: ColorTint | None = None

    def resolve(self) -> None:
        """Settle on the base color or one of its variants, and maybe a tint."""
        if self.alt:
            index = d(len(self.alt) + 1) - 2
            if index >= 0:
                variant = self.alt[index]
                self.name = variant.name
                self.exotic = variant.exotic
        self.tint = ColorTint.random() if d(TINT_ONE_IN_X_EXOTIC) == 1 else None

    def resolve_as_mundane(self) -> None:
        """As :meth:`resolve`, but exotic variants are never chosen."""
        mundane = [v.name for v in self.alt if not v.exotic]
        if mundane:
            index = d(len(mundane) + 1) - 2
            if index >= 0:
                self.name = mundane[index]
        self.tint = ColorTint.random() if d(TINT_ONE_IN_X_MUNDANE) == 1 else None

    def __str__(self) -> str:
        return f"{self.tint} {self.name}" if self.tint is not None else self.name


def _variant_from_json(item: Any) -> ColorVariant:
    if isinstance(item, str):
        return ColorVariant(item)
    if isinstance(item, dict) and isinstance(item.get("name"), str):
        exotic = item.get("exotic", False)
        if not isinstance(exotic, bool):
            raise DataError(f"color variant 'exotic' must be a boolean: {item!r}")
        return ColorVariant(item["name"], exotic)
    raise DataError(f"invalid color variant: {item!r}")


def _variants_from_json(value: Any) -> list[ColorVariant]:
    if value is None:
        return []
    if isinstance(value, str):
        return [ColorVariant(value)]
    if isinstance(value, list):
        return [_variant_from_json(item) for item in value]
    raise DataError(f"invalid color alternatives: {value!r}")


def _color_from_json(entry: Any) -> ExoticColor:
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        raise DataError(f"invalid color entry: {entry!r}")
    exotic = entry.get("exotic", False)
    if not isinstance(exotic, bool):
        raise DataError(f"color 'exotic' must be a boolean: {entry!r}")
    raw_tint = entry.get("tint")
    try:
        tint = None if raw_tint is None else ColorTint(raw_tint)
    except ValueError:
        raise DataError(f"unknown color tint: {raw_tint!r}") from None
    return ExoticColor(
        name=entry["name"],
        alt=_variants_from_json(entry.get("alt")),
        exotic=exotic,
        tint=tint,
    )


class ColorPalette:
    """The table of known colors; it must hold at least one mundane color."""

    def __init__(self, colors: Iterable[ExoticColor]) -> None:
        self.colors = list(colors)
        if not any(not c.exotic for c in self.colors):
            raise DataError("No mundane colors defined!")

    @classmethod
    def from_json(cls, text: str) -> ColorPalette:
        """Build a palette from a JSON array of color objects."""
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as err:
            raise DataError(f"color data is not valid JSON: {err}") from None
        if not isinstance(data, list):
            raise DataError("color data must be a JSON array")
        return cls(_color_from_json(entry) for entry in data)

    @classmethod
    def load(cls, path: str | PathLike[str] = DEFAULT_COLOR_FILE) -> ColorPalette:
        """Read the palette from a JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    @staticmethod
    def _copy(color: ExoticColor) -> ExoticColor:
        return replace(color, alt=list(color.alt))

    def random(self) -> ExoticColor:
        """A random color, exotic ones and tints included."""
        color = self._copy(random_of(self.colors))
        color.resolve()
        return color

    def random_mundane(self) -> ExoticColor:
        """A random mundane color, possibly tinted."""
        color = self._copy(random_of([c for c in self.colors if not c.exotic]))
        color.resolve_as_mundane()
        return color
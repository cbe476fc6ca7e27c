"""Shapes, some of which can appear as birthmarks."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from os import PathLike
from pathlib import Path
from typing import Any

from lorebirth.dice import d, random_of
from lorebirth.roll_range import DataError

DEFAULT_SHAPE_FILE = Path("data/shape.json")


@dataclass
class Shape:
    """A named shape with optional alternative names."""

    name: str
    alt: list[str] = field(default_factory=list)
    bm: bool = False

    def resolve(self) -> None:
        """Settle on the base name or one of the alternatives."""
        if self.alt:
            index = d(len(self.alt) + 1) - 2
            if index >= 0:
                self.name = self.alt[index]

    def __str__(self) -> str:
        return self.name


def _strings(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise DataError(f"expected a string or a list of strings, got {value!r}")


def _shape_from_json(entry: Any) -> Shape:
    if isinstance(entry, str):
        return Shape(entry)
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        raise DataError(f"invalid shape entry: {entry!r}")
    bm = entry.get("bm", False)
    if not isinstance(bm, bool):
        raise DataError(f"shape 'bm' must be a boolean: {entry!r}")
    return Shape(entry["name"], _strings(entry.get("alt")), bm)


class ShapeCatalog:
    """The table of known shapes."""

    def __init__(self, shapes: Iterable[Shape]) -> None:
        self.shapes = list(shapes)

    @classmethod
    def from_json(cls, text: str) -> ShapeCatalog:
        """Build from a JSON array of names or shape objects."""
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as err:
            raise DataError(f"shape data is not valid JSON: {err}") from None
        if not isinstance(data, list):
            raise DataError("shape data must be a JSON array")
        return cls(_shape_from_json(entry) for entry in data)

    @classmethod
    def load(cls, path: str | PathLike[str] = DEFAULT_SHAPE_FILE) -> ShapeCatalog:
        """Read the catalog from a JSON file."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    @staticmethod
    def _resolved(shape: Shape) -> Shape:
        copy = replace(shape, alt=list(shape.alt))
        copy.resolve()
        return copy

    def random(self) -> Shape:
        """A random resolved shape."""
        return self._resolved(random_of(self.shapes))

    def random_birthmarkable(self) -> Shape:
        """A random resolved shape among those that can be birthmarks."""
        return self._resolved(random_of([s for s in self.shapes if s.bm]))

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)

    def __len__(self) -> int:
        return len(self.shapes)
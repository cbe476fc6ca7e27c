"""Substances things can be made of, some more unusual than others."""

from __future__ import annotations

import enum

from lorebirth.dice import d


class Substance(enum.Enum):
    GRANITE = "Granite"
    MARBLE = "Marble"
    WOOD = "Wood"
    IRON_WOOD = "IronWood"
    PRECIOUS_METAL = "PreciousMetal"
    CLOTH = "Cloth"
    GEMSTONE = "Gemstone"
    IRON = "Iron"
    BRONZE = "Bronze"


def random_substances() -> set[Substance]:
    """One or more distinct substances; the extra die face adds two more picks."""
    options = list(Substance)
    count = len(options)
    chosen: set[Substance] = set()
    pending = 1
    while pending > 0 and len(chosen) < count:
        pending -= 1
        rolled = d(count + 1)
        if rolled > count:
            pending += 2
            continue
        matter = options[rolled - 1]
        if matter in chosen:
            pending += 1
            continue
        chosen.add(matter)
    return chosen
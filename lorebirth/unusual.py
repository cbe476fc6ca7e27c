"""Generation of unusual skills."""

from __future__ import annotations

from collections.abc import Sequence

from lorebirth.dice import d, roll
from lorebirth.skill import Skill, SkillCatalog

ARTISTIC = (
    "Art: Painting",
    "Art: Drawing",
    "Art: Sculpting",
    "Art: Jeweller",
    "Art: Architecture",
)
MUSICAL = (
    "Music: Play Common Instrument",
    "Music: Sing",
    "Music: Songwriter",
    "Music: Musical Theatre",
    "Make/repair Musical Instruments",
    "Music: Play Exotic Instrument",
    "Music: Play-by-Ear",
)
TEXTILES = ("Sewing", "Weaving", "Tapestry Design", "Embroidery", "Knitting")
THEATRICAL = (
    "Acting",
    "Artistic Dancing",
    "Oration",
    "Story-telling",
    "Disguise",
    "Voice Impersonation",
    "Juggling",
)
CIRCUS = (
    "Aerial Acrobatics",
    "Tight-rope Walking",
    "Animal Training",
    "Clowning",
    "Disguise",
    "Horsemanship",
)
MISCELLANEOUS = (
    "Astronomy",
    "Astrology",
    "Calligraphy",
    "Lassoing",
    "Wine Tasting",
    "Sailing: Small Craft",
    "Haggling",
    "Diplomacy",
    "Prestidigitation",
    "Imitate Monster Noises",
)

_SINGLE_SKILLS = {
    1: "Social Dancing",
    2: "Professional Gambling",
    3: "Pick Pockets",
    4: "Gourmet Cooking",
    5: "Sexual Seduction",
    6: "Skiing",
    7: "Skating",
    11: "Mountaineering",
    12: "Opposite Hand Weapon Use",
    13: "Mathematical Skill",
    14: "Model Making",
    15: "Inventing",
}

UNUSUAL_SKILL_NAMES = frozenset(
    (
        *_SINGLE_SKILLS.values(),
        *ARTISTIC,
        *MUSICAL,
        *TEXTILES,
        *THEATRICAL,
        *CIRCUS,
        *MISCELLANEOUS,
    )
)
"""Every skill name the generator can produce."""


def _pick_at_least_once(table: Sequence[str], has_rerolls: bool) -> list[str]:
    """Pick from a table; with rerolls, the extra face means picking 1d2+1 more times."""
    picked: list[str] = []
    dice_size = len(table) + (1 if has_rerolls else 0)
    pending = 1
    while pending > 0:
        pending -= 1
        rolled = d(dice_size)
        if has_rerolls and rolled == dice_size:
            pending += d(2) + 1
        else:
            picked.append(table[rolled - 1])
    return picked


def _generate_normally() -> list[str]:
    rolled = d(18)
    if rolled in _SINGLE_SKILLS:
        return [_SINGLE_SKILLS[rolled]]
    if rolled == 8:
        return _pick_at_least_once(ARTISTIC, True)
    if rolled == 9:
        return _pick_at_least_once(MUSICAL, True)
    if rolled == 10:
        return _pick_at_least_once(TEXTILES, True)
    if rolled == 16:
        sub = d(10)
        if sub == 1:
            return _pick_at_least_once(MUSICAL, True)
        if sub == 2:
            return _pick_at_least_once(CIRCUS, True)
        return _pick_at_least_once(THEATRICAL, True)
    if rolled == 17:
        if d(8) == 1:
            return _pick_at_least_once(MUSICAL, True)
        return _pick_at_least_once(CIRCUS, True)
    return _pick_at_least_once(MISCELLANEOUS, False)


def generate_unusual_skills(catalog: SkillCatalog) -> list[Skill]:
    """Generate one or more unusual skills; repeated picks raise the rank."""
    rolled = d(20)
    if rolled <= 18:
        names = _generate_normally()
    elif rolled == 19:
        names = [name for _ in range(roll(2, 3)) for name in _generate_normally()]
    else:
        names = _generate_normally() * d(2)

    skills: dict[str, Skill] = {}
    for name in names:
        if name in skills:
            skills[name] += 1
        else:
            skills[name] = catalog.skill(name, 4 if d(6) == 6 else 3)
    return list(skills.values())
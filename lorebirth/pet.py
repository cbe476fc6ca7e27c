"""Special abilities a tamed animal may have."""

from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from lorebirth.color import ColorPalette
from lorebirth.dice import d, is_low
from lorebirth.material import Substance, random_substances
from lorebirth.roll_range import DataError

ABILITY_ID_COUNT = 19
"""Number of ability table entries; a roll above it means extra rolls."""

MAX_DISTINCT_ABILITIES = 4

_PHYSICAL_AFFLICTION_ID = 6


class UnsupportedAbilityError(RuntimeError):
    """Raised when a rolled ability has no generator available."""


class PetAbilityKind(enum.Enum):
    WINGS = "Wings"
    HIGH_IQ = "HighIQ"
    TELEPATHIC = "Telepathic"
    UNUSUAL_COLOR = "UnusualColor"
    UNUSUAL_SUBSTANCE = "UnusualSubstance"
    CAN_USE_MAGIC = "CanUseMagic"
    INVISIBLE_TO_ALL_BUT_OWNER = "InvisibleToAllButOwner"
    REGENERATES = "Regenerates"
    POSSESSES_NEAREST_ANIMAL_IF_DIES = "PossessesNearestAnimalIfDies"
    UNUSUAL_SIZE = "UnusualSize"
    ONCE_PER_DAY_ASSUME_HUMANOID_FORM = "OncePerDayAssumeHumanoidForm"
    REQUIRES_MANA_TO_SURVIVE = "RequiresManaToSurvive"
    ACTS_AS_MANA_BATTERY = "ActsAsManaBattery"
    AUGMENTS_OWNER_HP = "AugmentsOwnerHP"
    BREATHES_FIRE = "BreathesFire"
    CAN_ENLARGE_SELF = "CanEnlargeSelf"
    CAN_PROVIDE_COIN_DAILY = "CanProvideCoinDaily"
    CAN_DISCORPORATE_INTO_MIST = "CanDiscorporateIntoMist"


@dataclass
class PetAbility:
    """One special ability and the numbers that go with it."""

    kind: PetAbilityKind
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, value: Any) -> PetAbility:
        """Read ``"Name"`` or ``{"Name": {field: value, ...}}``."""
        if isinstance(value, str):
            name, params = value, {}
        elif isinstance(value, dict) and len(value) == 1:
            ((name, params),) = value.items()
            if params is None:
                params = {}
            if not isinstance(params, dict):
                raise DataError(f"pet ability fields must be an object: {value!r}")
        else:
            raise DataError(f"invalid pet ability: {value!r}")
        try:
            kind = PetAbilityKind(name)
        except ValueError:
            raise DataError(f"unknown pet ability {name!r}") from None
        return cls(kind, dict(params))


def _build(ability_id: int, stack: int, palette: ColorPalette) -> PetAbility:
    kind = PetAbilityKind
    match ability_id:
        case 1:
            return PetAbility(kind.WINGS, {"pairs": stack})
        case 2:
            return PetAbility(
                kind.HIGH_IQ,
                {"intelligence": 10 + stack, "can_speak": d(100) <= 60 + stack * 10},
            )
        case 3:
            return PetAbility(kind.TELEPATHIC)
        case 4:
            return PetAbility(
                kind.UNUSUAL_COLOR, {"colors": [palette.random() for _ in range(stack)]}
            )
        case 5:
            materials: set[Substance] = set()
            for _ in range(stack):
                materials |= random_substances()
            return PetAbility(kind.UNUSUAL_SUBSTANCE, {"materials": materials})
        case 6:
            raise UnsupportedAbilityError(
                f"pet ability #{_PHYSICAL_AFFLICTION_ID} (physical affliction) has no generator"
            )
        case 7:
            return PetAbility(kind.CAN_USE_MAGIC)
        case 8:
            return PetAbility(kind.INVISIBLE_TO_ALL_BUT_OWNER)
        case 9:
            return PetAbility(kind.REGENERATES, {"speed_factor": stack})
        case 10:
            return PetAbility(kind.POSSESSES_NEAREST_ANIMAL_IF_DIES)
        case 11:
            diff = 1.0 / stack if is_low() else float(stack)
            return PetAbility(kind.UNUSUAL_SIZE, {"diff_from_norm": diff})
        case 12:
            return PetAbility(
                kind.ONCE_PER_DAY_ASSUME_HUMANOID_FORM,
                {"hour_duration_dice_size": 6 + (stack - 1) * 2},
            )
        case 13:
            return PetAbility(kind.REQUIRES_MANA_TO_SURVIVE, {"mp_leech_per_day": stack})
        case 14:
            return PetAbility(kind.ACTS_AS_MANA_BATTERY, {"mp_reserve_per_day": 1 << (stack - 1)})
        case 15:
            return PetAbility(kind.AUGMENTS_OWNER_HP, {"hp_amount_added": 1 << (stack - 1)})
        case 16:
            return PetAbility(kind.BREATHES_FIRE, {"dmg_mod": stack - 1})
        case 17:
            return PetAbility(
                kind.CAN_ENLARGE_SELF,
                {"factor_dice_size": 10 + stack * 2, "hour_duration_dice_size": 5 + stack},
            )
        case 18:
            return PetAbility(kind.CAN_PROVIDE_COIN_DAILY, {"gold_worth_dice_size": 4 + stack * 2})
        case 19:
            return PetAbility(kind.CAN_DISCORPORATE_INTO_MIST)
    raise ValueError(f"pet ability id {ability_id} is past {ABILITY_ID_COUNT}")


def random_pet_abilities(palette: ColorPalette) -> list[PetAbility]:
    """Roll one to four distinct abilities; repeated rolls stack their effect.

    Raises :class:`UnsupportedAbilityError` if the physical affliction entry is rolled.
    """
    stacks: Counter[int] = Counter()
    pending = 1
    while pending > 0 and len(stacks) < MAX_DISTINCT_ABILITIES:
        pending -= 1
        key = d(ABILITY_ID_COUNT + 1)
        if key > ABILITY_ID_COUNT:
            pending += d(3)
            continue
        stacks[key] += 1
    return [_build(ability_id, stack, palette) for ability_id, stack in stacks.items()]
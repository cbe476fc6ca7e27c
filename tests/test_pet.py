import random

import pytest

from lorebirth.color import ColorPalette
from lorebirth.material import Substance
from lorebirth.pet import (
    MAX_DISTINCT_ABILITIES,
    PetAbility,
    PetAbilityKind,
    UnsupportedAbilityError,
    random_pet_abilities,
)
from lorebirth.roll_range import DataError

PALETTE = ColorPalette.from_json('[{"name": "red"}, {"name": "pink", "exotic": true}]')


def _samples(count=400):
    results, failures = [], 0
    for seed in range(count):
        random.seed(seed)
        try:
            results.append(random_pet_abilities(PALETTE))
        except UnsupportedAbilityError:
            failures += 1
    return results, failures


def test_ability_sets_are_small_and_distinct():
    results, _ = _samples()
    assert results
    for abilities in results:
        assert 1 <= len(abilities) <= MAX_DISTINCT_ABILITIES
        kinds = [a.kind for a in abilities]
        assert len(set(kinds)) == len(kinds)


def test_unsupported_ability_is_reported():
    results, failures = _samples()
    assert failures > 0
    assert len(results) > 0


def test_ability_parameters_are_consistent():
    results, _ = _samples()
    for abilities in results:
        for ability in abilities:
            p = ability.params
            if ability.kind is PetAbilityKind.WINGS:
                assert p["pairs"] >= 1
            elif ability.kind is PetAbilityKind.UNUSUAL_COLOR:
                assert p["colors"]
                assert all(c.name in {"red", "pink"} for c in p["colors"])
            elif ability.kind is PetAbilityKind.UNUSUAL_SUBSTANCE:
                assert p["materials"]
                assert all(isinstance(m, Substance) for m in p["materials"])
            elif ability.kind in (
                PetAbilityKind.ACTS_AS_MANA_BATTERY,
                PetAbilityKind.AUGMENTS_OWNER_HP,
            ):
                value = next(iter(p.values()))
                assert value >= 1 and value & (value - 1) == 0
            elif ability.kind is PetAbilityKind.UNUSUAL_SIZE:
                assert p["diff_from_norm"] > 0
            elif ability.kind is PetAbilityKind.BREATHES_FIRE:
                assert p["dmg_mod"] >= 0
            elif ability.kind is PetAbilityKind.TELEPATHIC:
                assert p == {}


def test_from_json_with_fields():
    ability = PetAbility.from_json({"Wings": {"pairs": 2}})
    assert ability == PetAbility(PetAbilityKind.WINGS, {"pairs": 2})


def test_from_json_unit_variant():
    assert PetAbility.from_json("Telepathic") == PetAbility(PetAbilityKind.TELEPATHIC)


@pytest.mark.parametrize("value", ["Flying", {"Wings": 3}, 5, {"A": {}, "B": {}}])
def test_from_json_rejects_bad_values(value):
    with pytest.raises(DataError):
        PetAbility.from_json(value)
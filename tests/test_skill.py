import json

import pytest

from lorebirth.native_env import NativeKind, NativeOf
from lorebirth.roll_range import DataError
from lorebirth.skill import Skill, SkillBase, SkillCatalog, skill_for_environment

CATALOG_JSON = json.dumps(
    [
        {"name": "Survival: Urban", "description": "Getting by in towns."},
        {"name": "Survival: Wilderness", "description": "Getting by in the wilds."},
        {"name": "Sailing: Ship", "description": "Handling big vessels."},
        {"name": "Juggling", "description": "Keeping things aloft."},
    ]
)


@pytest.fixture
def catalog():
    return SkillCatalog.from_json(CATALOG_JSON)


def test_description_can_be_changed():
    s = Skill("A skill", 3, "The skill's description!")
    assert s.description == "The skill's description!"
    s.description = "Joe's money making monkey skill"
    assert s.description == "Joe's money making monkey skill"


def test_from_base_defaults_to_rank_zero():
    base = SkillBase("Juggling", "Keeping things aloft.")
    skill = Skill.from_base(base)
    assert skill == Skill("Juggling", 0, "Keeping things aloft.")


def test_from_base_with_rank():
    skill = Skill.from_base(SkillBase("Juggling", "x"), 5)
    assert skill.rank == 5


def test_add_and_subtract_rank():
    skill = Skill("Juggling", 3, "x")
    skill += 2
    assert skill.rank == 5
    skill -= 4
    assert skill.rank == 1


def test_catalog_get(catalog):
    assert catalog.get("Juggling").description == "Keeping things aloft."
    assert len(catalog) == 4
    assert "Juggling" in catalog


def test_catalog_lookup_is_exact(catalog):
    with pytest.raises(KeyError):
        catalog.get("juggling")


def test_catalog_skill_has_rank(catalog):
    skill = catalog.skill("Juggling", 4)
    assert (skill.name, skill.rank) == ("Juggling", 4)


def test_catalog_rejects_non_array():
    with pytest.raises(DataError):
        SkillCatalog.from_json('{"name": "x"}')


def test_catalog_rejects_missing_description():
    with pytest.raises(DataError):
        SkillCatalog.from_json('[{"name": "x"}]')


def test_catalog_load(tmp_path, catalog):
    path = tmp_path / "skill.json"
    path.write_text(CATALOG_JSON, encoding="utf-8")
    loaded = SkillCatalog.load(path)
    assert [b.name for b in loaded] == [b.name for b in catalog]


def test_urban_environment_gives_urban_survival(catalog):
    skill = skill_for_environment(NativeOf(NativeKind.URBAN), catalog, 2)
    assert (skill.name, skill.rank) == ("Survival: Urban", 2)


def test_choice_environment_uses_primary(catalog):
    env = NativeOf.from_json({"primary": "wilderness", "secondary": "urban"})
    skill = skill_for_environment(env, catalog, 1)
    assert skill.name == "Survival: Wilderness"


def test_ship_environment_gives_sailing(catalog):
    skill = skill_for_environment(NativeOf.from_name("Ship"), catalog)
    assert skill.name == "Sailing: Ship"


@pytest.mark.parametrize("name", ["raft", "air", "underground", "sea"])
def test_environments_without_skill(catalog, name):
    assert skill_for_environment(NativeOf.from_name(name), catalog) is None
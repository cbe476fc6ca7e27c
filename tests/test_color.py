import json
import random

import pytest

from lorebirth.color import ColorPalette, ColorTint, ColorVariant, ExoticColor
from lorebirth.roll_range import DataError

PALETTE_JSON = json.dumps(
    [
        {"name": "red", "alt": ["crimson", {"name": "vermilion", "exotic": True}]},
        {"name": "blue", "alt": "azure"},
        {"name": "pink", "exotic": True, "alt": [{"name": "magenta", "exotic": True}]},
    ]
)


@pytest.fixture
def palette():
    return ColorPalette.from_json(PALETTE_JSON)


def test_tint_display():
    assert str(ExoticColor("red", tint=ColorTint.PASTEL)) == "light red"
    assert str(ExoticColor("red", tint=ColorTint.DARK)) == "dark red"


def test_tint_random_gives_both():
    random.seed(7)
    assert {ColorTint.random() for _ in range(200)} == set(ColorTint)


def test_color_display_with_and_without_tint():
    assert str(ExoticColor("red")) == "red"
    assert str(ExoticColor("red", tint=ColorTint.DARK)) == "dark red"


def test_alt_single_string_is_parsed(palette):
    blue = palette.colors[1]
    assert blue.alt == [ColorVariant("azure", False)]


def test_alt_mixed_list_is_parsed(palette):
    red = palette.colors[0]
    assert red.alt == [ColorVariant("crimson"), ColorVariant("vermilion", True)]


def test_palette_without_mundane_colors_fails():
    with pytest.raises(DataError):
        ColorPalette.from_json('[{"name": "pink", "exotic": true}]')


def test_palette_rejects_bad_entry():
    with pytest.raises(DataError):
        ColorPalette.from_json('[{"alt": "x"}]')


def test_random_resolves_to_known_name(palette):
    random.seed(3)
    known = {"red", "crimson", "vermilion", "blue", "azure", "pink", "magenta"}
    for _ in range(200):
        assert palette.random().name in known
    assert [c.name for c in palette.colors] == ["red", "blue", "pink"]


def test_random_mundane_avoids_exotics(palette):
    random.seed(11)
    for _ in range(300):
        color = palette.random_mundane()
        assert color.name in {"red", "crimson", "blue", "azure"}
        assert not color.exotic


def test_resolve_as_mundane_keeps_name_with_only_exotic_alts():
    random.seed(5)
    for _ in range(50):
        color = ExoticColor("grey", alt=[ColorVariant("silver", True)])
        color.resolve_as_mundane()
        assert color.name == "grey"


def test_resolve_takes_variant_exotic_flag():
    random.seed(9)
    seen = set()
    for _ in range(200):
        color = ExoticColor("red", alt=[ColorVariant("vermilion", True)])
        color.resolve()
        seen.add((color.name, color.exotic))
    assert seen == {("red", False), ("vermilion", True)}


def test_load_from_file(tmp_path):
    path = tmp_path / "color.json"
    path.write_text(PALETTE_JSON, encoding="utf-8")
    loaded = ColorPalette.load(path)
    assert [c.name for c in loaded.colors] == ["red", "blue", "pink"]
# lorebirth

Table-driven random generation of background details for fantasy and
medieval role-playing characters: races, monsters, animals and pets,
unusual skills, colours, shapes and substances.

Everything is built from plain dice rolls and JSON data tables that you
supply. The package needs nothing outside the standard library.

## Installation

```
pip install lorebirth
```

To run the test suite:

```
pip install "lorebirth[test]"
pytest
```

## Dice

`lorebirth.dice` holds the rolling primitives that every table uses:

```python
from lorebirth.dice import d, roll, random_of, is_low, if_percent

d(20)                  # 1..20
roll(2, 6)             # sum of 2d6
random_of(["a", "b"])  # one element at random
is_low()               # a coin toss
if_percent(30, lambda: "lucky")  # "lucky" 30% of the time, else None
```

`if_percent(0, ...)` never calls the function.

## Roll ranges

Table entries carry a `_cr_range` saying which die results pick them.
`lorebirth.roll_range` parses these into `RollRange` values and checks
that a table covers its die without gaps or overlaps:

```python
from lorebirth.roll_range import parse_cr_range, parse_dice, validate_cr_ranges

parse_cr_range(4)             # RollRange(4, 4)
parse_cr_range([1, 3])        # RollRange(1, 3)
parse_cr_range({"upto": 5})   # everything up to 5
parse_cr_range({"ge": 10})    # 10 and above
parse_dice([2, 6])            # (2, 6)
parse_dice(3)                 # (3, 1)
```

`validate_cr_ranges(name, items)` returns the full range the items cover
(starting at 1 unless told otherwise), and `random_in_range(items, range)`
rolls within a range and picks a matching item. Malformed values and
inconsistent tables raise `DataError`, a subclass of `ValueError`.

## Data tables

Each catalogue is read from a JSON file with `load(path)` or from a
string with `from_json(text)`. The default paths are under `data/`
relative to the working directory.

```python
from lorebirth.skill import SkillCatalog
from lorebirth.unusual import generate_unusual_skills
from lorebirth.color import ColorPalette
from lorebirth.shape import ShapeCatalog
from lorebirth.material import random_substances
from lorebirth.race import RaceCatalog
from lorebirth.monster import MonsterCatalog
from lorebirth.animal import Bestiary

skills = SkillCatalog.load("data/skill.json")
print(generate_unusual_skills(skills))

palette = ColorPalette.load("data/color.json")
print(palette.random(), palette.random_mundane())

shapes = ShapeCatalog.load("data/shape.json")
print(shapes.random(), shapes.random_birthmarkable())

print(random_substances())

races = RaceCatalog.load("data/race.json")
human = races.default()
elf = races.by_name("elf")
print(elf.racial_events_for(raised_by_humans=False))
print(races.random(), races.random_nonhuman())

monsters = MonsterCatalog.load("data/monsters.json")
print(monsters.random(races))

animals = Bestiary.load("data/animal.json")
pet = animals.random_pet(palette)
print(pet.core.name, pet.core.pet_abilities)
```

A malformed file or an inconsistent roll table raises `DataError`; an
unknown skill or race name raises `KeyError`.

- Skills: `SkillCatalog.skill(name, rank)` gives a ranked `Skill`;
  `skill += 1` and `skill -= 1` change its rank. `generate_unusual_skills`
  merges repeated picks into a higher rank.
- Colours: a palette must hold at least one non-exotic colour. Colours may
  be tinted "light" or "dark".
- Races: every race needs a `_cr_range` and exactly one may be marked
  `_default`. A race can force a gender (`adjust_gender`), bias random
  genders (`random_gender`) and rule out birth environments
  (`incompatible_with_env`).
- Monsters: beyond the table's own range the roll can give a beastman
  race, a reptilian race, or one of the game-master specials `GM#756A` and
  `GM#756B`.
- Animals: `Animal.petify(palette)` tames a wild animal and rolls up to
  four distinct pet abilities (`lorebirth.pet.random_pet_abilities`).
  Rolling the physical-affliction entry raises `UnsupportedAbilityError`.

## Environments

`lorebirth.native_env.NativeOf` describes where a creature or culture
comes from: urban, wilderness, air, underground, aquatic, a water
structure such as a ship, or a primary/secondary choice. It knows its
opposite, fills `<NativeOf>` and `<NativeOf.opposite>` placeholders, and
`lorebirth.skill.skill_for_environment` gives the survival or sailing
skill that goes with it.

## What it does not do

lorebirth is a library of tables and generators. It has no command-line
program and does not put together a whole character: cultures, social
status, birth circumstances, birthplaces and saved characters are not
part of it. It ships no data files; you supply the JSON tables.
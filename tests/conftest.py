"""Shared fixtures for Spirit Collectors tests."""

import pytest
from typer.testing import CliRunner

from spirits.core.encounters import generate_monster
from spirits.core.inventory import Inventory, Item, ItemCategory, ItemEffect, ItemEffectType
from spirits.core.monster import BaseStats, EvolutionTarget, Monster, MovepoolEntry, Species
from spirits.core.moves import Move, MoveCategory
from spirits.core.types import SpiritType
from spirits.data.gamedata import GameData


class StubRandom:
    """Scripted stand-in for ``random.Random``.

    ``random()`` returns the scripted values in order and then keeps
    repeating the last one. ``uniform()`` always returns ``spread`` and
    ``choice()`` always picks ``seq[choice_index]``.
    """

    def __init__(self, values=(0.5,), spread=1.0, choice_index=0):
        self._values = list(values)
        self.spread = spread
        self.choice_index = choice_index

    def random(self):
        if len(self._values) > 1:
            return self._values.pop(0)
        return self._values[0]

    def uniform(self, a, b):
        return self.spread

    def choice(self, seq):
        return seq[self.choice_index]

    def randint(self, a, b):
        return a


def _stats(hp=50, atk=50, defense=50, sp_atk=50, sp_def=50, speed=50) -> BaseStats:
    return BaseStats(hp=hp, atk=atk, defense=defense, sp_atk=sp_atk, sp_def=sp_def, speed=speed)


# Move fixtures
TEST_MOVES = [
    Move(id=1, name="Tackle", type=SpiritType.NORMAL, power=40, accuracy=100, category=MoveCategory.PHYSICAL),
    Move(id=2, name="Ember", type=SpiritType.FIRE, power=40, accuracy=100, category=MoveCategory.SPECIAL),
    Move(id=3, name="Growl", type=SpiritType.NORMAL, power=0, accuracy=100, category=MoveCategory.STATUS),
    Move(id=4, name="Thunder Shock", type=SpiritType.ELECTRIC, power=40, accuracy=100, category=MoveCategory.SPECIAL),
    Move(id=5, name="Big Hit", type=SpiritType.NORMAL, power=250, accuracy=100, category=MoveCategory.PHYSICAL),
    Move(id=6, name="Wild Swing", type=SpiritType.NORMAL, power=120, accuracy=50, category=MoveCategory.PHYSICAL),
    Move(id=7, name="Long Shot", type=SpiritType.NORMAL, power=60, accuracy=10, category=MoveCategory.PHYSICAL),
    Move(id=8, name="Pound", type=SpiritType.NORMAL, power=40, accuracy=100, category=MoveCategory.PHYSICAL),
]

# Species fixtures
FLAMEPUP = 1
FLAMEHOUND = 2
GRASSLING = 3
MUDLING = 4
BOULDER = 5

TEST_SPECIES = [
    Species(
        id=FLAMEPUP,
        name="Flamepup",
        types=[SpiritType.FIRE],
        base_stats=_stats(speed=60),
        movepool=[
            MovepoolEntry(learn_level=1, move_id=1),
            MovepoolEntry(learn_level=1, move_id=2),
            MovepoolEntry(learn_level=1, move_id=8),
            MovepoolEntry(learn_level=5, move_id=3),
            MovepoolEntry(learn_level=10, move_id=5),
        ],
        base_exp_yield=60,
        evolves_to=EvolutionTarget(species_id=FLAMEHOUND, level=10),
    ),
    Species(
        id=FLAMEHOUND,
        name="Flamehound",
        types=[SpiritType.FIRE],
        base_stats=_stats(hp=80, atk=80, defense=80, sp_atk=80, sp_def=80, speed=80),
        movepool=[MovepoolEntry(learn_level=1, move_id=2)],
        base_exp_yield=140,
    ),
    Species(
        id=GRASSLING,
        name="Grassling",
        types=[SpiritType.GRASS],
        base_stats=_stats(speed=40),
        movepool=[MovepoolEntry(learn_level=1, move_id=1)],
        base_exp_yield=56,
    ),
    Species(
        id=MUDLING,
        name="Mudling",
        types=[SpiritType.GROUND],
        base_stats=_stats(),
        movepool=[MovepoolEntry(learn_level=1, move_id=1)],
    ),
    Species(
        id=BOULDER,
        name="Boulder",
        types=[SpiritType.NORMAL],
        base_stats=_stats(hp=100, atk=100, defense=100, sp_atk=100, sp_def=100, speed=100),
        movepool=[MovepoolEntry(learn_level=1, move_id=1)],
    ),
]

TEST_ITEMS = [
    Item(id=1, name="Potion", category=ItemCategory.HEALING, effect=ItemEffect(type=ItemEffectType.HEAL, amount=20)),
    Item(
        id=3,
        name="Revive",
        category=ItemCategory.HEALING,
        effect=ItemEffect(type=ItemEffectType.HEAL_PERCENT, percent=50),
    ),
    Item(id=4, name="Full Restore", category=ItemCategory.HEALING, effect=ItemEffect(type=ItemEffectType.FULL_HEAL)),
    Item(
        id=7,
        name="Ultra Orb",
        category=ItemCategory.CAPTURE,
        effect=ItemEffect(type=ItemEffectType.CAPTURE, multiplier=2.0),
    ),
]


@pytest.fixture
def game_data():
    """A small, hand-tuned database for exact-value assertions."""
    return GameData(TEST_SPECIES, TEST_MOVES, TEST_ITEMS)


@pytest.fixture(scope="session")
def bundled_data():
    """The JSON data shipped with the package."""
    return GameData.load()


@pytest.fixture
def make_monster(game_data):
    """Factory: a freshly generated monster, optionally with a fixed moveset."""

    def _make(species_id=FLAMEPUP, level=10, moves=None, **overrides) -> Monster:
        monster = generate_monster(species_id, level, game_data)
        if moves is not None:
            monster.moves = list(moves)
        for key, value in overrides.items():
            setattr(monster, key, value)
        return monster

    return _make


@pytest.fixture
def stub_rng():
    """Hits always land, never crit, max damage roll, first move chosen."""
    return StubRandom()


@pytest.fixture
def inventory():
    return Inventory()


@pytest.fixture
def cli_runner():
    """Create a CLI test runner."""
    return CliRunner()

"""Tests for moves and damage calculation."""

import random

import pytest

from spirits.core.monster import BaseStats, Monster, Species
from spirits.core.moves import DamageResult, Move, MoveCategory, calculate_damage
from spirits.core.types import SpiritType
from spirits.utils.config import config
from tests.conftest import BOULDER, FLAMEPUP, GRASSLING, MUDLING, StubRandom


def _monster(species_id, level=10, atk=20, defense=20, sp_atk=20, sp_def=20, hp=50) -> Monster:
    stats = BaseStats(hp=hp, atk=atk, defense=defense, sp_atk=sp_atk, sp_def=sp_def, speed=20)
    return Monster(species_id=species_id, level=level, current_hp=hp, max_hp=hp, stats=stats, moves=[1])


class TestMove:
    """Tests for the Move model."""

    def test_defaults(self):
        move = Move(id=99, name="Nudge", type=SpiritType.NORMAL)
        assert move.power == 0
        assert move.accuracy == 100
        assert move.category == MoveCategory.PHYSICAL
        assert move.is_damaging is False

    def test_is_damaging(self, game_data):
        assert game_data.get_move(1).is_damaging is True
        assert game_data.get_move(3).is_damaging is False

    def test_type_parsed_from_string(self):
        move = Move.model_validate({"id": 9, "name": "Splash", "type": "water", "power": 10})
        assert move.type == SpiritType.WATER


class TestCalculateDamage:
    """Tests for calculate_damage."""

    def test_status_move_deals_nothing(self, game_data):
        attacker, defender = _monster(FLAMEPUP), _monster(GRASSLING)
        result = calculate_damage(
            attacker, defender, game_data.get_move(3),
            game_data.get_species(FLAMEPUP), game_data.get_species(GRASSLING),
        )
        assert result == DamageResult(damage=0, is_critical=False, effectiveness=1.0)

    def test_exact_value_with_stab(self, game_data):
        # base = (6 * 40 * 20/20) / 50 + 2 = 6.8; x1.5 STAB = 10.2
        attacker, defender = _monster(FLAMEPUP), _monster(BOULDER)
        result = calculate_damage(
            attacker, defender, game_data.get_move(2),
            game_data.get_species(FLAMEPUP), game_data.get_species(BOULDER),
            rng=StubRandom(values=[0.5], spread=1.0),
        )
        assert result.damage == 10
        assert result.effectiveness == 1.0
        assert result.is_critical is False

    def test_super_effective_doubles(self, game_data):
        attacker, defender = _monster(FLAMEPUP), _monster(GRASSLING)
        result = calculate_damage(
            attacker, defender, game_data.get_move(2),
            game_data.get_species(FLAMEPUP), game_data.get_species(GRASSLING),
            rng=StubRandom(values=[0.5], spread=1.0),
        )
        assert result.damage == 20
        assert result.effectiveness == 2.0

    def test_critical_hit(self, game_data):
        attacker, defender = _monster(FLAMEPUP), _monster(BOULDER)
        result = calculate_damage(
            attacker, defender, game_data.get_move(2),
            game_data.get_species(FLAMEPUP), game_data.get_species(BOULDER),
            rng=StubRandom(values=[0.0], spread=1.0),
        )
        assert result.is_critical is True
        assert result.damage == 15

    def test_physical_uses_atk_and_defense(self, game_data):
        strong = _monster(BOULDER, atk=100, sp_atk=1)
        weak = _monster(BOULDER, atk=1, sp_atk=100)
        defender = _monster(BOULDER)
        boulder = game_data.get_species(BOULDER)
        tackle = game_data.get_move(1)
        strong_hit = calculate_damage(strong, defender, tackle, boulder, boulder, rng=StubRandom())
        weak_hit = calculate_damage(weak, defender, tackle, boulder, boulder, rng=StubRandom())
        assert strong_hit.damage > weak_hit.damage

    def test_immune_deals_zero(self, game_data):
        attacker, defender = _monster(FLAMEPUP), _monster(MUDLING)
        result = calculate_damage(
            attacker, defender, game_data.get_move(4),
            game_data.get_species(FLAMEPUP), game_data.get_species(MUDLING),
            rng=StubRandom(values=[0.0], spread=1.0),
        )
        assert result.damage == 0
        assert result.effectiveness == 0.0

    def test_minimum_one_damage(self, game_data):
        # Fire into fire/water is 0.25x; a feeble attacker still chips 1
        wall = Species(id=50, name="Steamshell", types=[SpiritType.FIRE, SpiritType.WATER],
                       base_stats=game_data.get_species(BOULDER).base_stats)
        attacker = _monster(BOULDER, level=1, sp_atk=1)
        defender = _monster(50, sp_def=500)
        result = calculate_damage(
            attacker, defender, game_data.get_move(2),
            game_data.get_species(BOULDER), wall,
            rng=StubRandom(values=[0.5], spread=config.damage_spread_min),
        )
        assert result.effectiveness == 0.25
        assert result.damage == 1

    def test_damage_within_roll_bounds(self, game_data):
        attacker, defender = _monster(FLAMEPUP, level=30, sp_atk=60), _monster(GRASSLING, sp_def=40)
        pup, grass = game_data.get_species(FLAMEPUP), game_data.get_species(GRASSLING)
        ember = game_data.get_move(2)

        low = calculate_damage(attacker, defender, ember, pup, grass,
                               rng=StubRandom(values=[0.5], spread=config.damage_spread_min)).damage
        high = calculate_damage(attacker, defender, ember, pup, grass,
                                rng=StubRandom(values=[0.0], spread=config.damage_spread_max)).damage

        rng = random.Random(7)
        for _ in range(1000):
            damage = calculate_damage(attacker, defender, ember, pup, grass, rng=rng).damage
            assert low <= damage <= high

    def test_crit_rate_is_about_one_in_sixteen(self, game_data):
        attacker, defender = _monster(FLAMEPUP), _monster(BOULDER)
        pup, boulder = game_data.get_species(FLAMEPUP), game_data.get_species(BOULDER)
        rng = random.Random(1234)
        crits = sum(
            calculate_damage(attacker, defender, game_data.get_move(1), pup, boulder, rng=rng).is_critical
            for _ in range(10000)
        )
        assert crits / 10000 == pytest.approx(config.crit_chance, abs=0.015)

    def test_level_ten_attacker_against_level_five_target(self, game_data):
        # Upper bound: STAB, 2x and a crit on a max roll
        flame_tackle = Move(id=90, name="Flame Tackle", type=SpiritType.FIRE, power=40,
                            category=MoveCategory.PHYSICAL)
        attacker = _monster(FLAMEPUP, level=10, atk=20)
        defender = _monster(GRASSLING, level=5, defense=10, hp=30)
        pup, grass = game_data.get_species(FLAMEPUP), game_data.get_species(GRASSLING)
        upper = int(((2 * 10 / 5 + 2) * 40 * 2 / 50 + 2) * 1.5 * 2 * 1.5)

        rng = random.Random(0)
        for _ in range(1000):
            damage = calculate_damage(attacker, defender, flame_tackle, pup, grass, rng=rng).damage
            assert 1 <= damage <= upper

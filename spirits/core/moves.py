"""Move model and damage calculation."""

import math
import random
from enum import Enum

from pydantic import BaseModel

from spirits.core.monster import Monster, Species
from spirits.core.types import SpiritType, get_type_effectiveness
from spirits.utils.config import config


class MoveCategory(str, Enum):
    """Move damage classification."""

    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


class Move(BaseModel):
    """A move definition from moves.json."""

    id: int
    name: str
    type: SpiritType
    power: int = 0  # 0 for status moves
    accuracy: int = 100  # Percent chance to hit (0-100)
    category: MoveCategory = MoveCategory.PHYSICAL
    pp: int = 20  # Flavor only; the engine does not track PP
    description: str = ""

    @property
    def is_damaging(self) -> bool:
        return self.power > 0


class DamageResult(BaseModel):
    """Outcome of a single damage roll."""

    damage: int
    is_critical: bool = False
    effectiveness: float = 1.0


# ---------------------------------------------------------------------------
# Damage calculation
# ---------------------------------------------------------------------------

def calculate_damage(
    attacker: Monster,
    defender: Monster,
    move: Move,
    attacker_species: Species,
    defender_species: Species,
    rng: random.Random | None = None,
) -> DamageResult:
    """Calculate damage for one hit.

    Formula:
        base = ((2 * level / 5 + 2) * power * (A / D) / 50) + 2
        damage = floor(base * STAB * effectiveness * crit * random(0.85..1.0))

    Any non-immune hit deals at least 1 damage.
    """
    if move.power == 0:
        return DamageResult(damage=0, is_critical=False, effectiveness=1.0)

    rng = rng or random

    # Pick attack and defense stats based on move category
    if move.category == MoveCategory.PHYSICAL:
        attack_stat = attacker.stats.atk
        defense_stat = defender.stats.defense
    else:
        attack_stat = attacker.stats.sp_atk
        defense_stat = defender.stats.sp_def

    level_factor = (2 * attacker.level) / 5 + 2
    base = (level_factor * move.power * (attack_stat / defense_stat)) / 50 + 2

    # STAB (Same-Type Attack Bonus)
    stab = config.stab_multiplier if move.type in attacker_species.types else 1.0

    effectiveness = get_type_effectiveness(move.type, defender_species.types)

    is_crit = rng.random() < config.crit_chance
    crit_mult = config.crit_multiplier if is_crit else 1.0

    spread = rng.uniform(config.damage_spread_min, config.damage_spread_max)

    damage = math.floor(base * stab * effectiveness * crit_mult * spread)

    # Chip damage: a hit that isn't immune always does something
    if effectiveness > 0 and damage < 1:
        damage = 1

    return DamageResult(damage=damage, is_critical=is_crit, effectiveness=effectiveness)

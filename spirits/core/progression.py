"""Stat growth, the experience curve, leveling and evolution.

Stats are realized from species base stats and level:

    stat = floor(base * 2 * level / 100 + 5)
    hp   = floor(base * 2 * level / 100 + level + 10)

Experience follows a cubic curve: reaching level ``n`` needs ``n ** 3``
total XP. Levels cap at ``config.max_level``.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from spirits.core.monster import BaseStats, Monster, Species
from spirits.utils.config import config

if TYPE_CHECKING:
    from spirits.data.gamedata import GameData

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------

def xp_for_level(level: int) -> int:
    """Total XP needed to reach a level (not the delta from the previous one)."""
    return level ** 3


def calculate_xp_gain(base_exp_yield: int, defeated_level: int) -> int:
    """XP awarded for defeating a monster."""
    return math.floor(base_exp_yield * defeated_level / config.xp_yield_divisor)


def compute_stat(base_stat: int, level: int) -> int:
    return math.floor(base_stat * 2 * level / 100 + 5)


def compute_hp(base_hp: int, level: int) -> int:
    # HP grows with level on top of the base-stat term
    return math.floor(base_hp * 2 * level / 100 + level + 10)


def compute_stats(base: BaseStats, level: int) -> BaseStats:
    """Realize a full stat sextuple. ``hp`` is the max HP."""
    return BaseStats(
        hp=compute_hp(base.hp, level),
        atk=compute_stat(base.atk, level),
        defense=compute_stat(base.defense, level),
        sp_atk=compute_stat(base.sp_atk, level),
        sp_def=compute_stat(base.sp_def, level),
        speed=compute_stat(base.speed, level),
    )


# ---------------------------------------------------------------------------
# Level-up
# ---------------------------------------------------------------------------

class EvolutionCandidate(BaseModel):
    """A species the monster is now eligible to evolve into."""

    species_id: int
    species_name: str


class LevelUpResult(BaseModel):
    """What changed when a monster gained one level."""

    new_level: int
    new_stats: BaseStats
    new_max_hp: int
    hp_increase: int
    new_moves: list[int] = Field(default_factory=list)  # Learnable, not yet learned
    evolution: EvolutionCandidate | None = None


def apply_xp(
    monster: Monster,
    xp_gained: int,
    species: Species,
    game_data: GameData,
) -> list[LevelUpResult]:
    """Add XP to a monster and level it up as many times as it qualifies.

    Mutates ``monster`` in place and returns one result per level gained,
    lowest level first. Newly learnable moves are reported, not taught;
    whether to learn them (and what to forget past the move limit) is the
    caller's decision. The same goes for evolution.
    """
    results: list[LevelUpResult] = []
    monster.experience += xp_gained

    while monster.level < config.max_level and monster.experience >= xp_for_level(monster.level + 1):
        old_max_hp = monster.max_hp
        monster.level += 1

        if monster.species_id == species.id:
            current_species = species
        else:
            current_species = game_data.get_species(monster.species_id)

        new_stats = compute_stats(current_species.base_stats, monster.level)
        monster.stats = new_stats
        monster.max_hp = new_stats.hp

        hp_increase = new_stats.hp - old_max_hp
        monster.restore_hp(hp_increase)

        new_moves: list[int] = []
        for entry in current_species.movepool:
            if entry.learn_level != monster.level:
                continue
            if entry.move_id in monster.moves or entry.move_id in new_moves:
                continue
            new_moves.append(entry.move_id)

        evolution = None
        evolves_to = current_species.evolves_to
        if evolves_to and monster.level >= evolves_to.level:
            # Dangling evolution targets are skipped
            target = game_data.find_species(evolves_to.species_id)
            if target is not None:
                evolution = EvolutionCandidate(species_id=target.id, species_name=target.name)
            else:
                logger.warning("%s evolves into unknown species %d", current_species.name, evolves_to.species_id)

        logger.debug(
            "%s reached level %d (+%d max HP, %d new moves)",
            monster.uid, monster.level, hp_increase, len(new_moves),
        )
        results.append(
            LevelUpResult(
                new_level=monster.level,
                new_stats=new_stats,
                new_max_hp=new_stats.hp,
                hp_increase=hp_increase,
                new_moves=new_moves,
                evolution=evolution,
            )
        )

    return results


def apply_evolution(monster: Monster, new_species_id: int, game_data: GameData) -> int:
    """Evolve a monster into another species at its current level.

    Recomputes stats from the new species and applies the max-HP delta to
    current HP (clamped, so a lower-HP evolution can't overflow). Returns
    the HP delta.
    """
    new_species = game_data.get_species(new_species_id)
    old_max_hp = monster.max_hp

    monster.species_id = new_species.id
    new_stats = compute_stats(new_species.base_stats, monster.level)
    monster.stats = new_stats
    monster.max_hp = new_stats.hp

    hp_increase = new_stats.hp - old_max_hp
    monster.restore_hp(hp_increase)

    logger.info("%s evolved into %s", monster.uid, new_species.name)
    return hp_increase

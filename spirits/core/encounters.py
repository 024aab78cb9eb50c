"""Monster generation, wild encounter rolls and trainer parties."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from spirits.core.monster import Monster
from spirits.core.progression import compute_stats
from spirits.utils.config import config
from spirits.utils.helpers import weighted_random_choice

if TYPE_CHECKING:
    from spirits.data.gamedata import GameData


def generate_monster(species_id: int, level: int, game_data: GameData) -> Monster:
    """Create a fresh, full-HP monster of a species at a level.

    Knows the (up to 4) most recently learnable moves for its level.
    """
    species = game_data.get_species(species_id)
    stats = compute_stats(species.base_stats, level)

    learnable = [entry for entry in species.movepool if entry.learn_level <= level]
    # Latest learned first; sorted() is stable so equal levels keep movepool order
    learnable = sorted(learnable, key=lambda entry: entry.learn_level, reverse=True)
    moves: list[int] = []
    for entry in learnable:
        if entry.move_id not in moves:
            moves.append(entry.move_id)
        if len(moves) >= config.max_moves:
            break

    return Monster(
        species_id=species.id,
        level=level,
        current_hp=stats.hp,
        max_hp=stats.hp,
        stats=stats,
        moves=moves,
        experience=0,
    )


# ---------------------------------------------------------------------------
# Wild encounters
# ---------------------------------------------------------------------------

class EncounterEntry(BaseModel):
    """One species that can appear in a zone."""

    species_id: int
    min_level: int
    max_level: int
    weight: float = 1.0


class EncounterZone(BaseModel):
    """An area with wild monsters (tall grass, caves, ...)."""

    id: str
    encounter_rate: float = 0.1  # Chance per step
    pool: list[EncounterEntry] = Field(min_length=1)


def check_encounter(zone: EncounterZone | None, rng: random.Random | None = None) -> bool:
    """Roll whether a step triggers a wild encounter."""
    if zone is None:
        return False
    rng = rng or random
    return rng.random() < zone.encounter_rate


def select_encounter(zone: EncounterZone, rng: random.Random | None = None) -> EncounterEntry:
    """Pick a pool entry, weighted by ``weight``."""
    index = weighted_random_choice({i: entry.weight for i, entry in enumerate(zone.pool)}, rng)
    return zone.pool[index]


def roll_wild_monster(zone: EncounterZone, game_data: GameData, rng: random.Random | None = None) -> Monster:
    """Select a species from the zone and generate it at a random level in range."""
    rng = rng or random
    entry = select_encounter(zone, rng)
    level = rng.randint(entry.min_level, entry.max_level)
    return generate_monster(entry.species_id, level, game_data)


# ---------------------------------------------------------------------------
# Trainers
# ---------------------------------------------------------------------------

class TrainerPartyEntry(BaseModel):
    species_id: int
    level: int


class TrainerReward(BaseModel):
    items: dict[int, int] = Field(default_factory=dict)  # item id -> quantity


class TrainerData(BaseModel):
    """An NPC trainer's battle setup."""

    name: str
    party: list[TrainerPartyEntry] = Field(min_length=1)
    defeat_flag: str = ""
    reward: TrainerReward | None = None


def build_trainer_party(trainer: TrainerData, game_data: GameData) -> list[Monster]:
    """Generate the trainer's monsters in party order."""
    return [generate_monster(entry.species_id, entry.level, game_data) for entry in trainer.party]

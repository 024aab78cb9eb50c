"""Opponent move selection.

Wild monsters pick uniformly at random. Trainers are greedy: they pick
the move with the highest accuracy-weighted damage roll.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from spirits.core.monster import Monster, Species
from spirits.core.moves import calculate_damage

if TYPE_CHECKING:
    from spirits.data.gamedata import GameData


def choose_wild_move(attacker: Monster, rng: random.Random | None = None) -> int:
    """Pick any known move at random."""
    rng = rng or random
    return rng.choice(attacker.moves)


def choose_best_move(
    attacker: Monster,
    attacker_species: Species,
    defender: Monster,
    defender_species: Species,
    game_data: GameData,
    rng: random.Random | None = None,
) -> int:
    """Pick the move with the greatest expected damage.

    Each move is scored with one damage roll weighted by accuracy/100.
    The first move wins ties. Moves missing from the database are
    skipped; if none resolve, the first known move is returned.
    """
    best_move_id = attacker.moves[0]
    best_expected = -1.0

    for move_id in attacker.moves:
        move = game_data.find_move(move_id)
        if move is None:
            continue

        result = calculate_damage(attacker, defender, move, attacker_species, defender_species, rng=rng)
        expected = result.damage * (move.accuracy / 100)

        if expected > best_expected:
            best_expected = expected
            best_move_id = move_id

    return best_move_id


def choose_move(
    attacker: Monster,
    attacker_species: Species,
    defender: Monster,
    defender_species: Species,
    game_data: GameData,
    is_trainer: bool = False,
    rng: random.Random | None = None,
) -> int:
    """Choose the opponent's move for this turn."""
    if is_trainer:
        return choose_best_move(attacker, attacker_species, defender, defender_species, game_data, rng=rng)
    return choose_wild_move(attacker, rng=rng)

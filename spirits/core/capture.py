"""Capture mechanics.

    hp_factor  = (3*maxHP - 2*currentHP) / (3*maxHP)       1/3 at full HP, ~1 at 1 HP
    catch_rate = clamp((600 - BST) / 600, 0.1, 0.9)        weaker species are easier
    raw_chance = min(1, hp_factor * catch_rate * multiplier)
    shake_prob = raw_chance ** (1/3)

Three independent shake checks against ``shake_prob``; all three must
pass, so the overall catch probability is ``raw_chance``.
"""

import random

from pydantic import BaseModel

from spirits.core.monster import Monster, Species
from spirits.utils.config import config
from spirits.utils.helpers import clamp


class CaptureResult(BaseModel):
    success: bool
    shakes: int  # 0-3, how many shakes before breaking free (3 = caught)


def capture_chance(wild: Monster, wild_species: Species, catch_multiplier: float = 1.0) -> float:
    """Overall probability that a capture attempt succeeds."""
    hp_factor = (3 * wild.max_hp - 2 * wild.current_hp) / (3 * wild.max_hp)
    ceiling = config.capture_bst_ceiling
    catch_rate = clamp(
        (ceiling - wild_species.base_stats.total) / ceiling,
        config.capture_rate_min,
        config.capture_rate_max,
    )
    return min(1.0, hp_factor * catch_rate * catch_multiplier)


def attempt_capture(
    wild: Monster,
    wild_species: Species,
    catch_multiplier: float = 1.0,
    rng: random.Random | None = None,
) -> CaptureResult:
    """Roll a capture attempt."""
    rng = rng or random
    raw_chance = max(0.0, capture_chance(wild, wild_species, catch_multiplier))
    shake_prob = raw_chance ** (1 / config.capture_shakes)

    shakes = 0
    for _ in range(config.capture_shakes):
        if rng.random() < shake_prob:
            shakes += 1
        else:
            break

    return CaptureResult(success=shakes == config.capture_shakes, shakes=shakes)

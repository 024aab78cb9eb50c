"""Helper utilities for Spirit Collectors."""

import random
from typing import TypeVar

T = TypeVar("T")


def weighted_random_choice(weights: dict[T, float], rng: random.Random | None = None) -> T:
    """Select a random key based on weights.

    Args:
        weights: Dict of {choice: weight}. Weights need not sum to 1.0.
        rng: Optional random source (defaults to the ``random`` module).

    Returns:
        Selected choice key.
    """
    rng = rng or random
    choices = list(weights.keys())
    probabilities = list(weights.values())
    return rng.choices(choices, weights=probabilities, k=1)[0]


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))

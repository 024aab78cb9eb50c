"""Elemental types and the type effectiveness chart."""

from collections.abc import Iterable
from enum import Enum


class SpiritType(str, Enum):
    """All 10 elemental types."""

    FIRE = "fire"
    WATER = "water"
    GRASS = "grass"
    ELECTRIC = "electric"
    NORMAL = "normal"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    DRAGON = "dragon"


# ---------------------------------------------------------------------------
# Type effectiveness chart
# ---------------------------------------------------------------------------
# Encoded as: TYPE_CHART[attacking_type][defending_type] = multiplier
# 2.0 = super effective, 0.5 = not very effective, 0.0 = immune.
# Pairs that are absent are neutral (1.0).
# ---------------------------------------------------------------------------

# fmt: off
TYPE_CHART: dict[str, dict[str, float]] = {
    "fire": {"grass": 2.0, "water": 0.5, "fire": 0.5, "ice": 2.0},
    "water": {"fire": 2.0, "grass": 0.5, "water": 0.5, "ground": 2.0},
    "grass": {"water": 2.0, "fire": 0.5, "grass": 0.5, "ground": 2.0},
    "electric": {"water": 2.0, "grass": 0.5, "electric": 0.5, "ground": 0.0},
    "ice": {"grass": 2.0, "fire": 0.5, "water": 0.5, "ice": 0.5, "dragon": 2.0},
    "ground": {"fire": 2.0, "electric": 2.0, "grass": 0.5, "poison": 2.0},
    "fighting": {"normal": 2.0, "ice": 2.0, "dragon": 0.5},
    "poison": {"grass": 2.0, "poison": 0.5, "ground": 0.5},
    "normal": {},
    "dragon": {"dragon": 2.0},
}
# fmt: on


def get_type_effectiveness(attack_type: str, defender_types: Iterable[str]) -> float:
    """Calculate combined type effectiveness multiplier.

    Multiplies the chart entry for each of the defender's types, so
    results can be 0x, 0.25x, 0.5x, 1x, 2x, or 4x.
    """
    row = TYPE_CHART.get(_type_key(attack_type), {})
    mult = 1.0
    for def_type in defender_types:
        mult *= row.get(_type_key(def_type), 1.0)
    return mult


def _type_key(value: str) -> str:
    if isinstance(value, SpiritType):
        return value.value
    return value.lower()

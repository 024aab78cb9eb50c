"""Configuration management for Spirit Collectors."""

from pathlib import Path

from pydantic import BaseModel


class Config(BaseModel):
    """Game configuration.

    Every tunable constant used by the battle math lives here so tests
    (and mods) can patch a single object.
    """

    # Paths
    data_dir: Path = Path(__file__).resolve().parent.parent / "data"

    # Damage settings
    crit_chance: float = 0.0625  # 1/16
    crit_multiplier: float = 1.5
    stab_multiplier: float = 1.5
    damage_spread_min: float = 0.85
    damage_spread_max: float = 1.0

    # Capture settings
    capture_bst_ceiling: int = 600
    capture_rate_min: float = 0.1
    capture_rate_max: float = 0.9
    capture_shakes: int = 3

    # Progression settings
    max_level: int = 50
    xp_yield_divisor: int = 7
    max_moves: int = 4

    # Rewards
    gold_per_level_wild: int = 8
    gold_per_level_trainer: int = 15

    # Party & storage
    max_party_size: int = 6
    box_count: int = 8
    box_slots: int = 30


# Global config instance
config = Config()

"""Species (static data) and monster instance models."""

import uuid
from enum import Enum

from pydantic import BaseModel, Field

from spirits.core.types import SpiritType
from spirits.utils.config import config


class Rarity(str, Enum):
    """Rarity tiers for species."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


class BaseStats(BaseModel):
    """A stat sextuple. Used both for species base stats and realized stats."""

    hp: int
    atk: int
    defense: int  # 'def' is a Python keyword
    sp_atk: int
    sp_def: int
    speed: int

    @property
    def total(self) -> int:
        """Base stat total (BST)."""
        return self.hp + self.atk + self.defense + self.sp_atk + self.sp_def + self.speed


class MovepoolEntry(BaseModel):
    """A move a species learns at a given level."""

    learn_level: int
    move_id: int


class EvolutionTarget(BaseModel):
    """Where a species evolves to, and at which level."""

    species_id: int
    level: int


class Species(BaseModel):
    """Static species definition, loaded once from monsters.json."""

    id: int
    name: str
    types: list[SpiritType] = Field(min_length=1, max_length=2)
    base_stats: BaseStats
    movepool: list[MovepoolEntry] = Field(default_factory=list)
    placeholder_color: str = "#888888"  # Used until real sprites exist
    rarity: Rarity = Rarity.COMMON
    base_exp_yield: int = 50
    evolves_to: EvolutionTarget | None = None

    @property
    def types_display(self) -> str:
        """Get formatted type display."""
        return "/".join(t.value.capitalize() for t in self.types)


def _new_uid() -> str:
    return f"mon_{uuid.uuid4().hex[:12]}"


class Monster(BaseModel):
    """A concrete monster instance owned by the player or an opponent.

    Instances are mutated in place by the battle engine and the
    progression functions; the save layer persists them afterwards.
    """

    uid: str = Field(default_factory=_new_uid)
    species_id: int
    nickname: str | None = None
    level: int = Field(default=1, ge=1)
    current_hp: int
    max_hp: int
    stats: BaseStats
    moves: list[int] = Field(min_length=1, max_length=4)  # Move ids, order matters for UI only
    experience: int = 0

    @property
    def is_fainted(self) -> bool:
        return self.current_hp <= 0

    @property
    def hp_percent(self) -> float:
        if self.max_hp == 0:
            return 0.0
        return (self.current_hp / self.max_hp) * 100

    def clamp_hp(self) -> None:
        """Force current HP back into [0, max_hp]."""
        self.current_hp = max(0, min(self.max_hp, self.current_hp))

    def take_damage(self, amount: int) -> int:
        """Apply damage, return actual amount dealt. Clamps to 0."""
        actual = max(0, min(amount, self.current_hp))
        self.current_hp -= actual
        return actual

    def heal(self, amount: int) -> int:
        """Heal HP, return actual amount healed. Clamps to max_hp."""
        actual = max(0, min(amount, self.max_hp - self.current_hp))
        self.current_hp += actual
        return actual

    def restore_hp(self, delta: int) -> None:
        """Add a signed HP delta, then clamp."""
        self.current_hp += delta
        self.clamp_hp()

    def learn_move(self, move_id: int, replace_index: int | None = None) -> int | None:
        """Teach a move.

        Appends while there is a free slot. Once the moveset is full the
        caller must name a slot to overwrite; the forgotten move id is
        returned. Returns None when nothing was forgotten (or the move
        could not be learned).
        """
        if move_id in self.moves:
            return None
        if len(self.moves) < config.max_moves:
            self.moves.append(move_id)
            return None
        if replace_index is None or not 0 <= replace_index < len(self.moves):
            return None
        forgotten = self.moves[replace_index]
        self.moves[replace_index] = move_id
        return forgotten

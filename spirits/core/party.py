"""The player's active party and storage boxes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from spirits.core.monster import Monster
from spirits.utils.config import config


class StorageLocation(str, Enum):
    PARTY = "party"
    BOX = "box"


class AddResult(BaseModel):
    """Where a newly added monster ended up."""

    location: StorageLocation
    box_index: int | None = None
    slot_index: int | None = None


def _empty_boxes() -> list[list[Monster | None]]:
    return [[None] * config.box_slots for _ in range(config.box_count)]


class Party(BaseModel):
    """Up to six monsters that fight, plus boxed storage for the rest.

    ``members`` is the list handed to the battle engine, so the engine's
    HP/level changes show up here directly.
    """

    members: list[Monster] = Field(default_factory=list)
    boxes: list[list[Monster | None]] = Field(default_factory=_empty_boxes)

    @property
    def is_full(self) -> bool:
        return len(self.members) >= config.max_party_size

    def add_monster(self, monster: Monster) -> AddResult:
        """Add to the party if there is room, otherwise to the first free box slot."""
        if not self.is_full:
            self.members.append(monster)
            return AddResult(location=StorageLocation.PARTY)

        for b, box in enumerate(self.boxes):
            for s, occupant in enumerate(box):
                if occupant is None:
                    box[s] = monster
                    return AddResult(location=StorageLocation.BOX, box_index=b, slot_index=s)

        # Every slot is taken; overflow into the first box
        self.boxes[0].append(monster)
        return AddResult(location=StorageLocation.BOX, box_index=0, slot_index=len(self.boxes[0]) - 1)

    def deposit(self, party_index: int, box_index: int, slot_index: int) -> bool:
        """Move a party member into an empty box slot.

        Refused if it would empty the party or remove the last monster
        that can still fight.
        """
        if not 0 <= party_index < len(self.members):
            return False
        if len(self.members) <= 1:
            return False
        if not self._valid_slot(box_index, slot_index):
            return False

        monster = self.members[party_index]
        if not monster.is_fainted and self.alive_count <= 1:
            return False
        if self.boxes[box_index][slot_index] is not None:
            return False

        self.boxes[box_index][slot_index] = self.members.pop(party_index)
        return True

    def withdraw(self, box_index: int, slot_index: int) -> bool:
        """Move a boxed monster into the party if there is room."""
        if self.is_full or not self._valid_slot(box_index, slot_index):
            return False
        monster = self.boxes[box_index][slot_index]
        if monster is None:
            return False
        self.boxes[box_index][slot_index] = None
        self.members.append(monster)
        return True

    def swap_party_box(self, party_index: int, box_index: int, slot_index: int) -> bool:
        """Exchange a party member with a boxed monster."""
        if not 0 <= party_index < len(self.members):
            return False
        if not self._valid_slot(box_index, slot_index):
            return False
        boxed = self.boxes[box_index][slot_index]
        if boxed is None:
            return False

        # Don't trade the last fighter for a fainted one
        current = self.members[party_index]
        if not current.is_fainted and self.alive_count <= 1 and boxed.is_fainted:
            return False

        self.boxes[box_index][slot_index] = current
        self.members[party_index] = boxed
        return True

    def swap_party_order(self, index_a: int, index_b: int) -> None:
        if index_a == index_b:
            return
        if not (0 <= index_a < len(self.members) and 0 <= index_b < len(self.members)):
            return
        self.members[index_a], self.members[index_b] = self.members[index_b], self.members[index_a]

    @property
    def alive_count(self) -> int:
        return sum(1 for m in self.members if not m.is_fainted)

    def has_alive_monster(self) -> bool:
        return self.alive_count > 0

    def first_alive_index(self) -> int | None:
        for i, m in enumerate(self.members):
            if not m.is_fainted:
                return i
        return None

    def heal_all(self) -> None:
        """Restore every party member to full HP (revives fainted ones too)."""
        for m in self.members:
            m.current_hp = m.max_hp

    def total_count(self) -> int:
        """Monsters owned across party and boxes."""
        boxed = sum(1 for box in self.boxes for m in box if m is not None)
        return len(self.members) + boxed

    def _valid_slot(self, box_index: int, slot_index: int) -> bool:
        return 0 <= box_index < len(self.boxes) and 0 <= slot_index < len(self.boxes[box_index])

"""Items, the player's bag and gold."""

import logging
from enum import Enum

from pydantic import BaseModel, Field

from spirits.core.monster import Monster

logger = logging.getLogger(__name__)


class ItemCategory(str, Enum):
    """Bag pocket an item belongs to."""

    HEALING = "healing"
    CAPTURE = "capture"
    KEY_ITEM = "key_item"


class ItemEffectType(str, Enum):
    """What using an item does."""

    HEAL = "heal"  # Restore a flat amount
    HEAL_PERCENT = "heal_percent"  # Restore a % of max HP; revives fainted monsters
    FULL_HEAL = "full_heal"
    CAPTURE = "capture"  # Thrown at a wild monster, carries a catch multiplier
    KEY_ITEM = "key_item"


class ItemEffect(BaseModel):
    """Effect payload. Only the field matching ``type`` is meaningful."""

    type: ItemEffectType
    amount: int = 0
    percent: int = 0
    multiplier: float = 1.0


class Item(BaseModel):
    """An item definition from items.json."""

    id: int
    name: str
    description: str = ""
    category: ItemCategory
    effect: ItemEffect
    price: int = 0


class Inventory(BaseModel):
    """Item quantities plus the player's gold."""

    items: dict[int, int] = Field(default_factory=dict)  # item id -> quantity
    gold: int = 0

    def add_gold(self, amount: int) -> None:
        self.gold += amount

    def spend_gold(self, amount: int) -> bool:
        """Spend gold if affordable. Returns False (and spends nothing) otherwise."""
        if self.gold < amount:
            return False
        self.gold -= amount
        return True

    def add_item(self, item_id: int, quantity: int = 1) -> None:
        self.items[item_id] = self.items.get(item_id, 0) + quantity

    def remove_item(self, item_id: int, quantity: int = 1) -> bool:
        current = self.items.get(item_id, 0)
        if current < quantity:
            return False
        remaining = current - quantity
        if remaining == 0:
            del self.items[item_id]
        else:
            self.items[item_id] = remaining
        return True

    def quantity(self, item_id: int) -> int:
        return self.items.get(item_id, 0)

    def has_item(self, item_id: int) -> bool:
        return self.quantity(item_id) > 0

    @staticmethod
    def apply_healing_item(effect: ItemEffect, monster: Monster) -> bool:
        """Apply a healing effect to a monster.

        Returns True if the item had an effect (and should be consumed).
        Only HEAL_PERCENT can bring back a fainted monster.
        """
        if effect.type == ItemEffectType.HEAL:
            if monster.is_fainted or monster.current_hp >= monster.max_hp:
                return False
            monster.heal(effect.amount)
            return True

        if effect.type == ItemEffectType.HEAL_PERCENT:
            amount = max(1, monster.max_hp * effect.percent // 100)
            if monster.is_fainted:
                monster.current_hp = min(amount, monster.max_hp)
                logger.debug("Revived %s with %d HP", monster.uid, monster.current_hp)
                return True
            if monster.current_hp >= monster.max_hp:
                return False
            monster.heal(amount)
            return True

        if effect.type == ItemEffectType.FULL_HEAL:
            if monster.is_fainted or monster.current_hp >= monster.max_hp:
                return False
            monster.current_hp = monster.max_hp
            return True

        return False

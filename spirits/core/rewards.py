"""Applying battle rewards to the player's monster and wallet."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from spirits.core.battle import BattleEngine, BattleWinner
from spirits.core.encounters import TrainerData
from spirits.core.inventory import Inventory
from spirits.core.progression import LevelUpResult, apply_xp

if TYPE_CHECKING:
    from spirits.data.gamedata import GameData

logger = logging.getLogger(__name__)


class BattleRewards(BaseModel):
    """What the player received for defeating an opponent monster."""

    xp: int = 0
    gold: int = 0
    level_ups: list[LevelUpResult] = Field(default_factory=list)
    items: dict[int, int] = Field(default_factory=dict)  # item id -> quantity


def award_battle_rewards(
    engine: BattleEngine,
    inventory: Inventory | None,
    game_data: GameData,
    trainer: TrainerData | None = None,
    flags: dict[str, bool] | None = None,
) -> BattleRewards:
    """Pay out XP and gold for the opponent monster that just fell.

    Call after the engine reports a defeated opponent: either the battle
    ended with the player winning, or a trainer needs to send out the
    next monster. Captures and losses pay nothing.

    When ``trainer`` is given and its last monster has fallen, the
    trainer's reward items are added to the inventory and its
    ``defeat_flag`` is set in ``flags``.
    """
    defeated = engine.opponent_needs_switch or (
        engine.winner == BattleWinner.PLAYER and not engine.caught
    )
    if not defeated:
        return BattleRewards()

    xp = engine.xp_gained
    gold = engine.gold_reward
    if inventory is not None:
        inventory.add_gold(gold)

    monster = engine.active_monster
    species = game_data.get_species(monster.species_id)
    level_ups = apply_xp(monster, xp, species, game_data)

    items: dict[int, int] = {}
    if trainer is not None and engine.is_trainer_battle and engine.winner == BattleWinner.PLAYER:
        if trainer.reward is not None:
            items = dict(trainer.reward.items)
            if inventory is not None:
                for item_id, quantity in items.items():
                    inventory.add_item(item_id, quantity)
        if trainer.defeat_flag and flags is not None:
            flags[trainer.defeat_flag] = True
        logger.info("Defeated trainer %s", trainer.name)

    logger.info("Awarded %d XP and %d gold (%d level-ups)", xp, gold, len(level_ups))
    return BattleRewards(xp=xp, gold=gold, level_ups=level_ups, items=items)

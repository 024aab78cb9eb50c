"""Turn-based battle engine for wild and trainer encounters.

The engine owns one encounter: the player's party and the opponent's
party (both held by reference, so HP changes land on the caller's
monsters), the active slot on each side, and the outcome. The caller
submits one action at a time and gets back the events for that action:

    active --(opponent's monster faints, trainer has more)--> opponent_needs_switch
    active --(player's monster faints, party has more)------> needs_switch
    active --(escape / capture / last monster faints)-------> over

``force_switch`` and ``advance_opponent`` move the two switch states
back to active. Invalid actions never raise; they return an empty
``ActionResult`` and leave the state untouched.
"""

from __future__ import annotations

import logging
import math
import random
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from spirits.core.ai import choose_move
from spirits.core.capture import CaptureResult, attempt_capture
from spirits.core.monster import Monster, Species
from spirits.core.moves import Move, calculate_damage
from spirits.core.progression import calculate_xp_gain
from spirits.utils.config import config

if TYPE_CHECKING:
    from spirits.data.gamedata import GameData

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BattleActionType(str, Enum):
    """Types of actions the player can take each turn."""

    ATTACK = "attack"
    CATCH = "catch"
    SWITCH = "switch"
    RUN = "run"
    ITEM = "item"  # Item already applied by the caller; costs the turn


class BattleStatus(str, Enum):
    """Where the encounter stands."""

    ACTIVE = "active"
    NEEDS_SWITCH = "needs_switch"  # Player's monster fainted, caller must force_switch
    OPPONENT_NEEDS_SWITCH = "opponent_needs_switch"  # Trainer's monster fainted, caller must advance_opponent
    OVER = "over"


class BattleWinner(str, Enum):
    PLAYER = "player"
    WILD = "wild"  # The opponent side, wild or trainer


# ---------------------------------------------------------------------------
# Input / output records
# ---------------------------------------------------------------------------

class BattleAction(BaseModel):
    """An action submitted by the player for one turn."""

    action_type: BattleActionType
    move_id: int | None = None
    switch_to_index: int | None = None
    catch_multiplier: float = 1.0

    @classmethod
    def attack(cls, move_id: int) -> BattleAction:
        return cls(action_type=BattleActionType.ATTACK, move_id=move_id)

    @classmethod
    def catch(cls, catch_multiplier: float = 1.0) -> BattleAction:
        return cls(action_type=BattleActionType.CATCH, catch_multiplier=catch_multiplier)

    @classmethod
    def switch(cls, index: int) -> BattleAction:
        return cls(action_type=BattleActionType.SWITCH, switch_to_index=index)

    @classmethod
    def run(cls) -> BattleAction:
        return cls(action_type=BattleActionType.RUN)

    @classmethod
    def item(cls) -> BattleAction:
        return cls(action_type=BattleActionType.ITEM)


class TurnResult(BaseModel):
    """One attack, as the presentation layer needs it to animate."""

    attacker_name: str
    defender_name: str
    move_name: str
    damage: int = 0
    is_critical: bool = False
    effectiveness: float = 1.0
    defender_remaining_hp: int
    defender_fainted: bool = False
    missed: bool = False


class ActionResult(BaseModel):
    """Everything that happened in response to one submitted action."""

    turn_results: list[TurnResult] = Field(default_factory=list)
    catch_result: CaptureResult | None = None

    @property
    def is_empty(self) -> bool:
        """True when the action was rejected (or ended the battle silently)."""
        return not self.turn_results and self.catch_result is None


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class BattleEngine:
    """Resolves the player's actions against a wild monster or a trainer."""

    def __init__(
        self,
        party: list[Monster],
        opponent_party: list[Monster],
        game_data: GameData,
        is_trainer_battle: bool = False,
        rng: random.Random | None = None,
    ):
        self.party = party
        self.opponent_party = opponent_party
        self.game_data = game_data
        self.is_trainer_battle = is_trainer_battle
        self.rng = rng or random.Random()

        self.opponent_index = 0
        # Lead with the first monster that can still fight
        self.active_index = next((i for i, m in enumerate(party) if not m.is_fainted), 0)
        self.turn_number = 0

        self._status = BattleStatus.ACTIVE
        self._winner: BattleWinner | None = None
        self._caught = False
        self._xp_gained = 0
        self._gold_reward = 0

    # -- state ----------------------------------------------------------------

    @property
    def status(self) -> BattleStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status == BattleStatus.OVER

    @property
    def needs_switch(self) -> bool:
        return self._status == BattleStatus.NEEDS_SWITCH

    @property
    def opponent_needs_switch(self) -> bool:
        return self._status == BattleStatus.OPPONENT_NEEDS_SWITCH

    @property
    def winner(self) -> BattleWinner | None:
        """None while the battle is running, and also after a successful escape."""
        return self._winner

    @property
    def caught(self) -> bool:
        return self._caught

    @property
    def xp_gained(self) -> int:
        """XP for the most recently defeated opponent monster."""
        return self._xp_gained

    @property
    def gold_reward(self) -> int:
        """Gold for the most recently defeated opponent monster."""
        return self._gold_reward

    # -- active monsters ------------------------------------------------------

    @property
    def active_monster(self) -> Monster:
        return self.party[self.active_index]

    @property
    def active_species(self) -> Species:
        return self.game_data.get_species(self.active_monster.species_id)

    @property
    def opponent_monster(self) -> Monster:
        return self.opponent_party[self.opponent_index]

    @property
    def opponent_species(self) -> Species:
        return self.game_data.get_species(self.opponent_monster.species_id)

    def get_active_moves(self) -> list[Move]:
        """Moves of the player's active monster that resolve in the database."""
        moves = (self.game_data.find_move(move_id) for move_id in self.active_monster.moves)
        return [m for m in moves if m is not None]

    # -- public actions -------------------------------------------------------

    def submit_action(self, action: BattleAction) -> ActionResult:
        """Resolve the player's chosen action."""
        if self.is_over:
            return ActionResult()

        if action.action_type == BattleActionType.RUN:
            return self._handle_run()
        if action.action_type == BattleActionType.CATCH:
            return self._handle_catch(action.catch_multiplier)
        if action.action_type == BattleActionType.SWITCH:
            return self._handle_switch(action.switch_to_index)
        if action.action_type == BattleActionType.ITEM:
            return self._handle_item()
        if action.action_type == BattleActionType.ATTACK:
            return self._handle_attack(action.move_id)
        return ActionResult()

    def force_switch(self, index: int) -> None:
        """Send in a new monster after the active one fainted.

        Ignored unless ``index`` names a living party member.
        """
        if not 0 <= index < len(self.party):
            return
        if self.party[index].is_fainted:
            return
        self.active_index = index
        if self._status == BattleStatus.NEEDS_SWITCH:
            self._status = BattleStatus.ACTIVE
        logger.debug("Player sent out party slot %d", index)

    def advance_opponent(self) -> None:
        """Bring out the trainer's next living monster.

        Searches after the current slot first, then wraps around from the
        start. Does nothing if the trainer has no living monster.
        """
        alive_after = [
            i for i, m in enumerate(self.opponent_party) if i > self.opponent_index and not m.is_fainted
        ]
        alive_any = [i for i, m in enumerate(self.opponent_party) if not m.is_fainted]
        if alive_after:
            self.opponent_index = alive_after[0]
        elif alive_any:
            self.opponent_index = alive_any[0]
        else:
            return
        if self._status == BattleStatus.OPPONENT_NEEDS_SWITCH:
            self._status = BattleStatus.ACTIVE
        logger.debug("Opponent sent out party slot %d", self.opponent_index)

    # -- action handlers ------------------------------------------------------

    def _handle_run(self) -> ActionResult:
        if self.is_trainer_battle:
            return ActionResult()  # Can't run from trainers
        self._finish(None)
        return ActionResult()

    def _handle_catch(self, catch_multiplier: float) -> ActionResult:
        if self.is_trainer_battle:
            return ActionResult()  # Can't catch a trainer's monster

        catch_result = attempt_capture(
            self.opponent_monster, self.opponent_species, catch_multiplier, rng=self.rng
        )
        if catch_result.success:
            self._caught = True
            self._finish(BattleWinner.PLAYER)
            return ActionResult(catch_result=catch_result)

        # Broke free: the opponent gets a free attack
        self.turn_number += 1
        turn_results = [self._execute_opponent_attack()]
        self._check_faint()
        return ActionResult(turn_results=turn_results, catch_result=catch_result)

    def _handle_switch(self, index: int | None) -> ActionResult:
        if index is None or not 0 <= index < len(self.party):
            return ActionResult()
        if self.party[index].is_fainted:
            return ActionResult()
        if index == self.active_index:
            return ActionResult()

        self.active_index = index
        self.turn_number += 1

        # Switching costs the turn
        turn_results = [self._execute_opponent_attack()]
        self._check_faint()
        return ActionResult(turn_results=turn_results)

    def _handle_item(self) -> ActionResult:
        self.turn_number += 1
        turn_results = [self._execute_opponent_attack()]
        self._check_faint()
        return ActionResult(turn_results=turn_results)

    def _handle_attack(self, move_id: int | None) -> ActionResult:
        if move_id is None or move_id not in self.active_monster.moves:
            return ActionResult()

        self.turn_number += 1
        turn_results: list[TurnResult] = []
        # Ties go to the player
        player_first = self.active_monster.stats.speed >= self.opponent_monster.stats.speed

        if player_first:
            turn_results.append(self._execute_player_attack(move_id))
            if not self._check_faint():
                turn_results.append(self._execute_opponent_attack())
                self._check_faint()
        else:
            turn_results.append(self._execute_opponent_attack())
            if not self._check_faint():
                turn_results.append(self._execute_player_attack(move_id))
                self._check_faint()

        return ActionResult(turn_results=turn_results)

    # -- attack resolution ----------------------------------------------------

    def _execute_player_attack(self, move_id: int) -> TurnResult:
        return self._execute_attack(
            self.active_monster, self.active_species,
            self.opponent_monster, self.opponent_species,
            move_id,
        )

    def _execute_opponent_attack(self) -> TurnResult:
        attacker, attacker_species = self.opponent_monster, self.opponent_species
        defender, defender_species = self.active_monster, self.active_species
        move_id = choose_move(
            attacker, attacker_species, defender, defender_species,
            self.game_data, is_trainer=self.is_trainer_battle, rng=self.rng,
        )
        return self._execute_attack(attacker, attacker_species, defender, defender_species, move_id)

    def _execute_attack(
        self,
        attacker: Monster,
        attacker_species: Species,
        defender: Monster,
        defender_species: Species,
        move_id: int,
    ) -> TurnResult:
        move = self.game_data.get_move(move_id)

        if self.rng.random() * 100 >= move.accuracy:
            logger.debug("%s's %s missed", attacker_species.name, move.name)
            return TurnResult(
                attacker_name=attacker_species.name,
                defender_name=defender_species.name,
                move_name=move.name,
                defender_remaining_hp=defender.current_hp,
                missed=True,
            )

        result = calculate_damage(attacker, defender, move, attacker_species, defender_species, rng=self.rng)
        defender.take_damage(result.damage)

        logger.debug(
            "%s used %s on %s: %d damage (x%s%s), %d HP left",
            attacker_species.name, move.name, defender_species.name, result.damage,
            result.effectiveness, ", critical" if result.is_critical else "", defender.current_hp,
        )
        return TurnResult(
            attacker_name=attacker_species.name,
            defender_name=defender_species.name,
            move_name=move.name,
            damage=result.damage,
            is_critical=result.is_critical,
            effectiveness=result.effectiveness,
            defender_remaining_hp=defender.current_hp,
            defender_fainted=defender.is_fainted,
        )

    # -- fainting & outcome ---------------------------------------------------

    def _check_faint(self) -> bool:
        """Update the battle state after damage. Returns True if anyone fainted."""
        opponent = self.opponent_monster
        if opponent.is_fainted:
            self._xp_gained = calculate_xp_gain(self.opponent_species.base_exp_yield, opponent.level)
            per_level = config.gold_per_level_trainer if self.is_trainer_battle else config.gold_per_level_wild
            self._gold_reward = math.floor(opponent.level * per_level)

            if self.is_trainer_battle and any(
                not m.is_fainted for i, m in enumerate(self.opponent_party) if i != self.opponent_index
            ):
                self._status = BattleStatus.OPPONENT_NEEDS_SWITCH
                return True

            self._finish(BattleWinner.PLAYER)
            return True

        if self.active_monster.is_fainted:
            if not any(not m.is_fainted for m in self.party):
                self._finish(BattleWinner.WILD)
                return True
            self._status = BattleStatus.NEEDS_SWITCH
            return True

        return False

    def _finish(self, winner: BattleWinner | None) -> None:
        self._status = BattleStatus.OVER
        self._winner = winner
        logger.info(
            "Battle over after %d turns: winner=%s caught=%s",
            self.turn_number, winner.value if winner else "none", self._caught,
        )

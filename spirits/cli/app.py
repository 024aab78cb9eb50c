"""Main CLI application for Spirit Collectors."""

import logging
import random
from typing import Optional

import typer
from rich.logging import RichHandler

from spirits import __version__
from spirits.cli.ui.displays import (
    console,
    display_capture,
    display_level_up,
    display_matchup,
    display_moves_table,
    display_species_table,
    display_turn_result,
)
from spirits.core.ai import choose_best_move
from spirits.core.battle import BattleAction, BattleEngine, BattleWinner
from spirits.core.encounters import TrainerData, TrainerPartyEntry, TrainerReward, build_trainer_party, generate_monster
from spirits.core.inventory import Inventory, Item, ItemCategory
from spirits.core.monster import Monster
from spirits.core.party import Party, StorageLocation
from spirits.core.progression import apply_evolution
from spirits.core.rewards import award_battle_rewards
from spirits.data.gamedata import GameData, GameDataError

app = typer.Typer(
    name="spirits",
    help="Spirit Collectors - monster battle simulator",
    no_args_is_help=True,
)

MAX_TURNS = 200
ORB_SUPPLY = 5


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine details"),
) -> None:
    """Spirit Collectors - simulate battles from the bundled game data."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command("species")
def list_species() -> None:
    """List every species."""
    display_species_table(GameData.load().species)


@app.command("moves")
def list_moves() -> None:
    """List every move."""
    display_moves_table(GameData.load().moves)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    console.print(f"Spirit Collectors v{__version__}")


def _parse_entries(spec: str, game_data: GameData) -> list[TrainerPartyEntry]:
    """Turn 'Embercub:10,Ripplet:8' into species/level pairs."""
    entries: list[TrainerPartyEntry] = []
    for chunk in spec.split(","):
        name, _, level = chunk.strip().partition(":")
        species = game_data.find_species_by_name(name)
        if species is None:
            raise typer.BadParameter(f"Unknown species: {name}")
        try:
            lvl = int(level) if level else 5
        except ValueError:
            raise typer.BadParameter(f"Bad level for {name}: {level}") from None
        entries.append(TrainerPartyEntry(species_id=species.id, level=lvl))
    return entries


def _parse_roster(spec: str, game_data: GameData) -> list[Monster]:
    return [generate_monster(e.species_id, e.level, game_data) for e in _parse_entries(spec, game_data)]


def _find_item(name: str, game_data: GameData) -> Item | None:
    return next((i for i in game_data.items if i.name.lower() == name.lower()), None)


@app.command("battle")
def run_battle(
    party: str = typer.Argument(..., help="Your party, e.g. 'Embercub:10,Ripplet:8'"),
    wild: str = typer.Option("Pebblit:5", "--wild", "-w", help="Wild opponent, e.g. 'Mudpup:5'"),
    trainer: Optional[str] = typer.Option(None, "--trainer", "-t", help="Trainer party instead of a wild monster"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed the random source"),
    orb: Optional[str] = typer.Option(
        None, "--orb", "-o", help="Capture item to throw once a wild monster drops below half HP"
    ),
    prize: Optional[str] = typer.Option(None, "--prize", "-p", help="Item the trainer hands over when beaten"),
) -> None:
    """Simulate a battle. Your monsters always pick their strongest move."""
    game_data = GameData.load()
    player = Party(members=_parse_roster(party, game_data))
    is_trainer = trainer is not None
    trainer_data = None
    if is_trainer:
        reward = None
        if prize is not None:
            prize_item = _find_item(prize, game_data)
            if prize_item is None:
                raise typer.BadParameter(f"Unknown item: {prize}")
            reward = TrainerReward(items={prize_item.id: 1})
        trainer_data = TrainerData(name="Rival", party=_parse_entries(trainer, game_data), reward=reward)
        opponents = build_trainer_party(trainer_data, game_data)
    else:
        opponents = _parse_roster(wild, game_data)

    engine = BattleEngine(player.members, opponents, game_data, is_trainer_battle=is_trainer, rng=random.Random(seed))
    inventory = Inventory()

    orb_item = None
    if orb is not None:
        orb_item = _find_item(orb, game_data)
        if orb_item is None or orb_item.category != ItemCategory.CAPTURE:
            raise typer.BadParameter(f"Not a capture item: {orb}")
        inventory.add_item(orb_item.id, ORB_SUPPLY)

    try:
        while not engine.is_over and engine.turn_number < MAX_TURNS:
            display_matchup(engine.active_monster, engine.active_species, engine.opponent_monster, engine.opponent_species)

            if (
                orb_item is not None
                and not is_trainer
                and engine.opponent_monster.hp_percent < 50
                and inventory.remove_item(orb_item.id)
            ):
                console.print(f"You threw a {orb_item.name}!")
                result = engine.submit_action(BattleAction.catch(orb_item.effect.multiplier))
                if result.catch_result is not None:
                    display_capture(result.catch_result, engine.opponent_species.name)
            else:
                move_id = choose_best_move(
                    engine.active_monster, engine.active_species,
                    engine.opponent_monster, engine.opponent_species,
                    game_data, rng=engine.rng,
                )
                result = engine.submit_action(BattleAction.attack(move_id))
            for turn in result.turn_results:
                display_turn_result(turn)

            if engine.needs_switch:
                engine.force_switch(next(i for i, m in enumerate(engine.party) if not m.is_fainted))
                console.print(f"Go, {engine.active_species.name}!")
            elif engine.opponent_needs_switch:
                _pay_out(engine, inventory, game_data, trainer_data)
                engine.advance_opponent()
                console.print(f"The trainer sent out {engine.opponent_species.name}!")

        if engine.caught:
            added = player.add_monster(engine.opponent_monster)
            where = "your party" if added.location == StorageLocation.PARTY else f"box {added.box_index + 1}"
            console.print(f"\n[bold green]{engine.opponent_species.name} was sent to {where}![/bold green]")
        elif engine.winner == BattleWinner.PLAYER:
            _pay_out(engine, inventory, game_data, trainer_data)
            console.print(f"\n[bold green]You won![/bold green] Gold: {inventory.gold}")
        elif engine.winner == BattleWinner.WILD:
            console.print("\n[bold red]You blacked out...[/bold red]")
        else:
            console.print("\n[dim]The battle ran too long and was called off.[/dim]")
    except GameDataError as e:
        console.print(f"[red]Game data error:[/red] {e}")
        raise typer.Exit(code=1) from e


def _pay_out(
    engine: BattleEngine, inventory: Inventory, game_data: GameData, trainer: TrainerData | None = None
) -> None:
    monster = engine.active_monster
    name = engine.active_species.name
    rewards = award_battle_rewards(engine, inventory, game_data, trainer)
    console.print(f"{name} gained {rewards.xp} XP. You got {rewards.gold} gold.")
    for item_id, quantity in rewards.items.items():
        console.print(f"Received {game_data.get_item(item_id).name} x{quantity}!")
    for level_up in rewards.level_ups:
        move_names = [game_data.get_move(move_id).name for move_id in level_up.new_moves]
        display_level_up(name, level_up, move_names)
        for move_id in level_up.new_moves:
            if move_id in monster.moves:
                continue
            learned = game_data.get_move(move_id).name
            # A full moveset gives up its first slot
            forgotten = monster.learn_move(move_id, replace_index=0)
            if forgotten is not None:
                console.print(f"{name} forgot {game_data.get_move(forgotten).name} and learned {learned}.")
            else:
                console.print(f"{name} learned {learned}.")
        if level_up.evolution and monster.species_id != level_up.evolution.species_id:
            apply_evolution(monster, level_up.evolution.species_id, game_data)
            name = level_up.evolution.species_name


if __name__ == "__main__":
    app()

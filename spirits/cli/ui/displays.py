"""Rich display components for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from spirits.core.battle import TurnResult
from spirits.core.capture import CaptureResult
from spirits.core.monster import Monster, Species
from spirits.core.moves import Move
from spirits.core.progression import LevelUpResult

console = Console()


TYPE_COLORS = {
    "normal": "white",
    "fire": "red",
    "water": "blue",
    "electric": "yellow",
    "grass": "green",
    "ice": "cyan",
    "fighting": "red",
    "poison": "magenta",
    "ground": "yellow",
    "dragon": "blue",
}


def _type_label(type_name: str) -> str:
    color = TYPE_COLORS.get(type_name, "white")
    return f"[{color}]{type_name.capitalize()}[/{color}]"


def display_species_table(species: list[Species]) -> None:
    """Display the species database."""
    table = Table(title="Species", box=box.ROUNDED)
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", min_width=12)
    table.add_column("Types", min_width=14)
    table.add_column("BST", justify="right")
    table.add_column("Rarity")
    table.add_column("Evolves", style="dim")

    for s in sorted(species, key=lambda s: s.id):
        types = "/".join(_type_label(t.value) for t in s.types)
        evolves = f"#{s.evolves_to.species_id} @ Lv.{s.evolves_to.level}" if s.evolves_to else ""
        table.add_row(str(s.id), s.name, types, str(s.base_stats.total), s.rarity.value, evolves)

    console.print(table)


def display_moves_table(moves: list[Move]) -> None:
    """Display the move database."""
    table = Table(title="Moves", box=box.ROUNDED)
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", min_width=14)
    table.add_column("Type", width=10)
    table.add_column("Cat.", width=9)
    table.add_column("Pow", justify="right")
    table.add_column("Acc", justify="right")

    for m in sorted(moves, key=lambda m: m.id):
        power = str(m.power) if m.power else "-"
        table.add_row(str(m.id), m.name, _type_label(m.type.value), m.category.value, power, str(m.accuracy))

    console.print(table)


def hp_bar(monster: Monster, width: int = 20) -> str:
    """Render an HP bar like [#######-----]."""
    filled = round(width * monster.current_hp / monster.max_hp) if monster.max_hp else 0
    pct = monster.hp_percent
    color = "green" if pct > 50 else "yellow" if pct > 20 else "red"
    return f"[{color}]{'#' * filled}{'-' * (width - filled)}[/{color}] {monster.current_hp}/{monster.max_hp}"


def display_matchup(player: Monster, player_species: Species, opponent: Monster, opponent_species: Species) -> None:
    """Show both active monsters side by side."""
    body = (
        f"[bold]{opponent_species.name}[/bold] Lv.{opponent.level}  {hp_bar(opponent)}\n"
        f"[bold]{player_species.name}[/bold] Lv.{player.level}  {hp_bar(player)}"
    )
    console.print(Panel(body, box=box.ROUNDED, border_style="cyan"))


def display_turn_result(result: TurnResult) -> None:
    """Print the messages for one attack."""
    console.print(f"{result.attacker_name} used [bold]{result.move_name}[/bold]!")
    if result.missed:
        console.print("[dim]But it missed![/dim]")
        return
    if result.is_critical:
        console.print("[yellow]A critical hit![/yellow]")
    if result.effectiveness == 0:
        console.print(f"[dim]It doesn't affect {result.defender_name}...[/dim]")
    elif result.effectiveness > 1:
        console.print("[green]It's super effective![/green]")
    elif result.effectiveness < 1:
        console.print("[dim]It's not very effective...[/dim]")
    if result.damage:
        console.print(f"{result.defender_name} took {result.damage} damage ({result.defender_remaining_hp} HP left).")
    if result.defender_fainted:
        console.print(f"[red]{result.defender_name} fainted![/red]")


def display_capture(result: CaptureResult, species_name: str) -> None:
    console.print("..." * result.shakes or "Oh no!")
    if result.success:
        console.print(f"[bold green]Gotcha! {species_name} was caught![/bold green]")
    else:
        console.print(f"{species_name} broke free!")


def display_level_up(name: str, result: LevelUpResult, move_names: list[str]) -> None:
    """Announce a level-up, learnable moves and evolution."""
    console.print(
        f"[bold cyan]{name} grew to Lv.{result.new_level}![/bold cyan] "
        f"[dim](+{result.hp_increase} max HP)[/dim]"
    )
    for move_name in move_names:
        console.print(f"  {name} can learn [bold]{move_name}[/bold].")
    if result.evolution:
        console.print(f"  [magenta]{name} is ready to evolve into {result.evolution.species_name}![/magenta]")

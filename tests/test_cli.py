"""CLI tests for the spirits command."""

from types import SimpleNamespace

import spirits.cli.app as app_module
from spirits import __version__
from spirits.cli.app import _pay_out, app
from spirits.cli.ui.displays import console
from spirits.core.battle import BattleAction, BattleEngine
from tests.conftest import FLAMEPUP, GRASSLING, StubRandom


def _always_crit(monkeypatch):
    """Replace the seeded source with one where every roll is 0.0."""
    monkeypatch.setattr(app_module, "random", SimpleNamespace(Random=lambda seed=None: StubRandom(values=[0.0])))


def test_version(cli_runner):
    result = cli_runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"Spirit Collectors v{__version__}" in result.output


def test_species_table(cli_runner):
    result = cli_runner.invoke(app, ["species"])
    assert result.exit_code == 0
    assert "Embercub" in result.output
    assert "Wyrmling" in result.output


def test_moves_table(cli_runner):
    result = cli_runner.invoke(app, ["moves"])
    assert result.exit_code == 0
    assert "Tackle" in result.output


def test_wild_battle(cli_runner):
    """A Lv.10 starter easily beats a Lv.3 Pebblit."""
    result = cli_runner.invoke(app, ["battle", "Embercub:10", "--wild", "Pebblit:3", "--seed", "1"])
    assert result.exit_code == 0
    assert "Embercub used" in result.output
    assert "You won!" in result.output


def test_trainer_battle(cli_runner):
    result = cli_runner.invoke(
        app, ["battle", "Embercub:10", "--trainer", "Pebblit:3,Pebblit:3", "--seed", "2"]
    )
    assert result.exit_code == 0
    assert "The trainer sent out Pebblit!" in result.output
    assert "You won!" in result.output


def test_seeded_battles_repeat(cli_runner):
    args = ["battle", "Ripplet:8", "--wild", "Sproutle:8", "--seed", "99"]
    first = cli_runner.invoke(app, args)
    second = cli_runner.invoke(app, args)
    assert first.exit_code == 0
    assert first.output == second.output


def test_unknown_species(cli_runner):
    result = cli_runner.invoke(app, ["battle", "Missingmon:5"])
    assert result.exit_code != 0


def test_bad_level(cli_runner):
    result = cli_runner.invoke(app, ["battle", "Embercub:ten"])
    assert result.exit_code != 0


def test_orb_must_be_capture_item(cli_runner):
    result = cli_runner.invoke(app, ["battle", "Embercub:10", "--orb", "Potion"])
    assert result.exit_code != 0


def test_trainer_prize(cli_runner):
    result = cli_runner.invoke(
        app, ["battle", "Embercub:10", "--trainer", "Pebblit:3,Pebblit:3", "--seed", "2", "--prize", "Potion"]
    )
    assert result.exit_code == 0
    assert result.output.count("Received Potion x1!") == 1
    assert "You won!" in result.output


def test_unknown_prize(cli_runner):
    result = cli_runner.invoke(app, ["battle", "Embercub:10", "--trainer", "Pebblit:3", "--prize", "Nothing"])
    assert result.exit_code != 0


def test_orb_catch_joins_party(cli_runner, monkeypatch):
    # Every hit crits: Torrentide drops 32 -> 21 -> 10 HP, then the orb is thrown
    _always_crit(monkeypatch)
    result = cli_runner.invoke(app, ["battle", "Pebblit:10", "--wild", "Torrentide:10", "--orb", "Ultra Orb"])
    assert result.exit_code == 0
    assert "You threw a Ultra Orb!" in result.output
    assert "Gotcha! Torrentide was caught!" in result.output
    assert "Torrentide was sent to your party!" in result.output


def test_orb_catch_with_full_party_goes_to_box(cli_runner, monkeypatch):
    _always_crit(monkeypatch)
    party = ",".join(["Pebblit:10"] * 6)
    result = cli_runner.invoke(app, ["battle", party, "--wild", "Torrentide:10", "--orb", "Ultra Orb"])
    assert result.exit_code == 0
    assert "Torrentide was sent to box 1!" in result.output


def test_level_up_with_full_moveset_reports_forgotten_move(game_data, make_monster, inventory):
    player = make_monster(FLAMEPUP, level=9, moves=[1, 2, 8, 3], experience=999)
    wild = make_monster(GRASSLING, level=5, current_hp=1)
    engine = BattleEngine([player], [wild], game_data, rng=StubRandom())
    engine.submit_action(BattleAction.attack(1))

    with console.capture() as capture:
        _pay_out(engine, inventory, game_data)

    assert "Flamepup forgot Tackle and learned Big Hit." in capture.get()
    assert player.moves == [5, 2, 8, 3]

"""Static game databases: species, moves and items.

The databases are loaded once (from the bundled JSON files by default)
and never mutated by the battle core. Lookups for ids that don't exist
raise a ``GameDataError`` subclass: a missing id means the static data
is corrupt, not that the player did something wrong.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from spirits.core.inventory import Item
from spirits.core.monster import Species
from spirits.core.moves import Move
from spirits.utils.config import config

logger = logging.getLogger(__name__)


class GameDataError(LookupError):
    """Static reference data is missing or inconsistent."""


class UnknownSpeciesError(GameDataError):
    def __init__(self, species_id: int):
        super().__init__(f"Unknown species ID: {species_id}")
        self.species_id = species_id


class UnknownMoveError(GameDataError):
    def __init__(self, move_id: int):
        super().__init__(f"Unknown move ID: {move_id}")
        self.move_id = move_id


class UnknownItemError(GameDataError):
    def __init__(self, item_id: int):
        super().__init__(f"Unknown item ID: {item_id}")
        self.item_id = item_id


class GameData:
    """Read-only species/move/item lookup by integer id."""

    def __init__(
        self,
        species: Iterable[Species],
        moves: Iterable[Move],
        items: Iterable[Item] = (),
    ):
        self._species: dict[int, Species] = {s.id: s for s in species}
        self._moves: dict[int, Move] = {m.id: m for m in moves}
        self._items: dict[int, Item] = {i.id: i for i in items}

    # -- loading ------------------------------------------------------------

    @classmethod
    def load(cls, data_dir: Path | None = None) -> GameData:
        """Load monsters.json, moves.json and items.json from a directory."""
        data_dir = data_dir or config.data_dir
        species = [Species.model_validate(raw) for raw in _read_json(data_dir / "monsters.json")]
        moves = [Move.model_validate(raw) for raw in _read_json(data_dir / "moves.json")]
        items_path = data_dir / "items.json"
        items = [Item.model_validate(raw) for raw in _read_json(items_path)] if items_path.exists() else []
        logger.info(
            "Loaded %d species, %d moves, %d items from %s",
            len(species), len(moves), len(items), data_dir,
        )
        return cls(species, moves, items)

    # -- lookups ------------------------------------------------------------

    @property
    def species(self) -> list[Species]:
        return list(self._species.values())

    @property
    def moves(self) -> list[Move]:
        return list(self._moves.values())

    @property
    def items(self) -> list[Item]:
        return list(self._items.values())

    def get_species(self, species_id: int) -> Species:
        try:
            return self._species[species_id]
        except KeyError:
            raise UnknownSpeciesError(species_id) from None

    def get_move(self, move_id: int) -> Move:
        try:
            return self._moves[move_id]
        except KeyError:
            raise UnknownMoveError(move_id) from None

    def get_item(self, item_id: int) -> Item:
        try:
            return self._items[item_id]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def find_move(self, move_id: int) -> Move | None:
        """Like get_move, but returns None for unknown ids."""
        return self._moves.get(move_id)

    def find_species(self, species_id: int) -> Species | None:
        """Like get_species, but returns None for unknown ids."""
        return self._species.get(species_id)

    def find_species_by_name(self, name: str) -> Species | None:
        name = name.lower()
        for species in self._species.values():
            if species.name.lower() == name:
                return species
        return None

    def validate(self) -> list[str]:
        """Return a list of dangling references in the data (empty if clean)."""
        problems: list[str] = []
        for species in self._species.values():
            for entry in species.movepool:
                if entry.move_id not in self._moves:
                    problems.append(f"{species.name}: movepool references unknown move {entry.move_id}")
            if species.evolves_to and species.evolves_to.species_id not in self._species:
                problems.append(
                    f"{species.name}: evolves into unknown species {species.evolves_to.species_id}"
                )
        return problems


def _read_json(path: Path) -> list[dict]:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)

"""Fighter and fight-log stores.

The in-memory stores back tests and one-off CLI runs; the JSON stores keep
one file per record under a directory.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Protocol
from urllib.parse import quote

from loguru import logger

from brawl.data.errors import DataLoadError, DataWriteError
from brawl.data.json_loader import load_json, write_json
from brawl.domain.battle_models import FightRecord
from brawl.domain.entities import Fighter
from brawl.services.errors import FighterNotFoundError, SaveLoadError, StorageError
from brawl.services.serialization import (
    deserialize_fight_record,
    deserialize_fighter,
    serialize_fight_record,
    serialize_fighter,
)


class FighterStore(Protocol):
    def get(self, fighter_id: str) -> Fighter: ...

    def save(self, fighter: Fighter) -> None: ...

    def exists(self, fighter_id: str) -> bool: ...

    def list_ids(self) -> List[str]: ...

    def find_by_owner(self, owner: str) -> Fighter | None: ...


class FightLogStore(Protocol):
    def save(self, record: FightRecord) -> str: ...

    def get(self, fight_id: str) -> FightRecord: ...

    def list_for_fighter(self, fighter_id: str) -> List[FightRecord]: ...


class InMemoryFighterStore:
    def __init__(self, fighters: List[Fighter] | None = None) -> None:
        self._fighters: Dict[str, Fighter] = {fighter.id: fighter for fighter in fighters or []}

    def get(self, fighter_id: str) -> Fighter:
        try:
            return self._fighters[fighter_id]
        except KeyError as exc:
            raise FighterNotFoundError(fighter_id) from exc

    def save(self, fighter: Fighter) -> None:
        self._fighters[fighter.id] = fighter

    def exists(self, fighter_id: str) -> bool:
        return fighter_id in self._fighters

    def list_ids(self) -> List[str]:
        return sorted(self._fighters)

    def find_by_owner(self, owner: str) -> Fighter | None:
        for fighter_id in self.list_ids():
            if self._fighters[fighter_id].owner == owner:
                return self._fighters[fighter_id]
        return None


class InMemoryFightLogStore:
    def __init__(self) -> None:
        self._records: Dict[str, FightRecord] = {}

    def save(self, record: FightRecord) -> str:
        self._records[record.id] = record
        return record.id

    def get(self, fight_id: str) -> FightRecord:
        try:
            return self._records[fight_id]
        except KeyError as exc:
            raise StorageError(f"Fight log '{fight_id}' not found.") from exc

    def list_for_fighter(self, fighter_id: str) -> List[FightRecord]:
        return [
            record
            for record in self._records.values()
            if fighter_id in (record.fighter_a_id, record.fighter_b_id)
        ]


def _file_name(record_id: str) -> str:
    """Percent-encode the id so distinct ids never share a file."""
    return f"{quote(record_id, safe='')}.json"


class JsonFighterStore:
    """One ``<id>.json`` file per fighter."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    def _path(self, fighter_id: str) -> Path:
        return self._directory / _file_name(fighter_id)

    def get(self, fighter_id: str) -> Fighter:
        path = self._path(fighter_id)
        if not path.exists():
            raise FighterNotFoundError(fighter_id)
        fighter = self.get_by_path(path)
        if fighter.id != fighter_id:
            raise FighterNotFoundError(fighter_id)
        return fighter

    def save(self, fighter: Fighter) -> None:
        try:
            write_json(self._path(fighter.id), serialize_fighter(fighter))
        except DataWriteError as exc:
            raise StorageError(str(exc)) from exc
        logger.info("Saved fighter {} (level {}) to {}", fighter.id, fighter.level, self._directory)

    def exists(self, fighter_id: str) -> bool:
        return self._path(fighter_id).exists()

    def list_ids(self) -> List[str]:
        if not self._directory.exists():
            return []
        return sorted(self.get_by_path(path).id for path in self._directory.glob("*.json"))

    def get_by_path(self, path: Path) -> Fighter:
        try:
            return deserialize_fighter(load_json(path))
        except (DataLoadError, SaveLoadError) as exc:
            raise StorageError(str(exc)) from exc

    def find_by_owner(self, owner: str) -> Fighter | None:
        for fighter_id in self.list_ids():
            fighter = self.get(fighter_id)
            if fighter.owner == owner:
                return fighter
        return None


class JsonFightLogStore:
    """One ``<fight id>.json`` file per fight log."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    def save(self, record: FightRecord) -> str:
        path = self._directory / _file_name(record.id)
        try:
            write_json(path, serialize_fight_record(record))
        except DataWriteError as exc:
            raise StorageError(str(exc)) from exc
        logger.info("Saved fight log {} ({} steps)", record.id, len(record.steps))
        return record.id

    def get(self, fight_id: str) -> FightRecord:
        path = self._directory / _file_name(fight_id)
        try:
            return deserialize_fight_record(load_json(path))
        except (DataLoadError, SaveLoadError) as exc:
            raise StorageError(str(exc)) from exc

    def list_for_fighter(self, fighter_id: str) -> List[FightRecord]:
        if not self._directory.exists():
            return []
        records = []
        for path in sorted(self._directory.glob("*.json")):
            try:
                record = deserialize_fight_record(load_json(path))
            except (DataLoadError, SaveLoadError) as exc:
                raise StorageError(str(exc)) from exc
            if fighter_id in (record.fighter_a_id, record.fighter_b_id):
                records.append(record)
        return records

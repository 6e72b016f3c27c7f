"""Service layer exports."""

from .errors import (
    FactoryError,
    FighterNotFoundError,
    FighterValidationError,
    LoadoutError,
    OwnershipError,
    PersistenceError,
    PersistenceErrorKind,
    SaveLoadError,
    StorageError,
)
from .progression_service import ProgressionService
from .battle_service import BattleService
from .loadout_service import LoadoutService
from .fight_service import FightService

__all__ = [
    "BattleService",
    "FactoryError",
    "FightService",
    "FighterNotFoundError",
    "FighterValidationError",
    "LoadoutError",
    "OwnershipError",
    "PersistenceError",
    "PersistenceErrorKind",
    "ProgressionService",
    "SaveLoadError",
    "StorageError",
]

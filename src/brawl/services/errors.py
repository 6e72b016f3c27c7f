"""Service-layer exceptions."""
from __future__ import annotations

from enum import Enum
from typing import Sequence


class FactoryError(Exception):
    """Raised when a runtime entity cannot be created."""


class SaveLoadError(Exception):
    """Raised when a fighter or fight-log payload cannot be read back."""


class LoadoutError(Exception):
    """Raised when an item cannot be equipped."""


class FighterValidationError(Exception):
    """Raised when a fighter snapshot violates combat preconditions."""

    def __init__(self, fighter_id: str, problems: Sequence[str]) -> None:
        self.fighter_id = fighter_id
        self.problems = tuple(problems)
        super().__init__(f"Fighter '{fighter_id}' is invalid: {'; '.join(self.problems)}")


class PersistenceErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    AUTHENTICATION = "authentication"


class PersistenceError(Exception):
    """Base class for failures at the persistence boundary."""

    kind: PersistenceErrorKind = PersistenceErrorKind.STORAGE


class FighterNotFoundError(PersistenceError):
    kind = PersistenceErrorKind.NOT_FOUND

    def __init__(self, fighter_id: str) -> None:
        self.fighter_id = fighter_id
        super().__init__(f"Fighter '{fighter_id}' not found.")


class StorageError(PersistenceError):
    kind = PersistenceErrorKind.STORAGE


class OwnershipError(PersistenceError):
    kind = PersistenceErrorKind.AUTHENTICATION

    def __init__(self, owner: str, fighter_id: str) -> None:
        self.owner = owner
        self.fighter_id = fighter_id
        super().__init__(f"'{owner}' does not own fighter '{fighter_id}'.")

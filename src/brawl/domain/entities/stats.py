"""Stat models for fighters and characters."""
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Mapping

STAT_NAMES: tuple[str, ...] = (
    "strength",
    "agility",
    "intelligence",
    "vitality",
    "defense",
    "crit_chance",
    "crit_damage",
    "block_rate",
    "magic_find",
)
CORE_STAT_NAMES: tuple[str, ...] = ("strength", "agility", "intelligence")


@dataclass(frozen=True, slots=True)
class Stats:
    """Full combat stat block.

    ``crit_chance`` and ``block_rate`` are percents out of 100, ``crit_damage``
    is a damage multiplier and ``agility`` doubles as the dodge percent.
    """

    strength: float = 0
    agility: float = 0
    intelligence: float = 0
    vitality: float = 0
    defense: float = 0
    crit_chance: float = 0
    crit_damage: float = 1.5
    block_rate: float = 0
    magic_find: float = 0

    def get(self, name: str) -> float:
        if name not in STAT_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def with_bonuses(self, bonuses: Mapping[str, float]) -> "Stats":
        """Return a copy with *bonuses* added; unknown keys are ignored."""
        changes = {
            name: getattr(self, name) + value
            for name, value in bonuses.items()
            if name in STAT_NAMES and isinstance(value, (int, float))
        }
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(slots=True)
class CoreStats:
    """The three attributes tracked by the progression model."""

    strength: float
    agility: float
    intelligence: float

    def get(self, name: str) -> float:
        if name not in CORE_STAT_NAMES:
            raise KeyError(name)
        return getattr(self, name)

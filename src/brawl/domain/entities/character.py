"""Progression-side character record."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from brawl.core.types import CharacterClass
from brawl.domain.defs import AbilityDef
from brawl.domain.leveling import experience_to_next_level

from .stats import CoreStats


@dataclass(slots=True)
class CharacterAbility:
    """A class ability together with its current unlock flag."""

    definition: AbilityDef
    is_unlocked: bool = False

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def unlock_level(self) -> int:
        return self.definition.unlock_level


@dataclass(slots=True)
class Character:
    """Tracks level, experience, free points and ability unlocks for one character."""

    name: str
    character_class: CharacterClass
    stats: CoreStats
    level: int = 1
    experience: int = 0
    free_points: int = 0
    max_hp: int = 0
    abilities: List[CharacterAbility] = field(default_factory=list)

    @property
    def experience_to_next_level(self) -> int:
        return experience_to_next_level(self.level)

    def unlocked_abilities(self) -> List[CharacterAbility]:
        return [ability for ability in self.abilities if ability.is_unlocked]

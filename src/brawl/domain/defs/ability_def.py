"""Class ability definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from brawl.core.types import AbilityType


@dataclass(frozen=True, slots=True)
class AbilityDef:
    """A special ability unlocked by reaching ``unlock_level``."""

    id: str
    name: str
    description: str
    type: AbilityType
    unlock_level: int
    cooldown: int = 0
    energy_cost: int = 0
    damage_multiplier: float | None = None

    @property
    def deals_damage(self) -> bool:
        return self.type != "passive" and self.damage_multiplier is not None

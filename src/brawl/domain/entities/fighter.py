"""Fighter snapshot model."""
from __future__ import annotations

from dataclasses import dataclass, field

from brawl.core.types import FighterClass

from .equipment import EquipmentLoadout
from .stats import Stats


@dataclass(frozen=True, slots=True)
class AbilityState:
    """Persisted unlock flag for one class ability."""

    ability_id: str
    is_unlocked: bool = False


@dataclass(frozen=True, slots=True)
class Fighter:
    """Full state of one combatant between fights.

    Max HP and max energy are derived from level, class and total stats and
    are therefore not stored here.
    """

    id: str
    owner: str
    name: str
    fighter_class: FighterClass
    level: int
    experience: int
    base_stats: Stats
    equipment: EquipmentLoadout = field(default_factory=EquipmentLoadout)
    current_hp: int = 0
    energy: int = 0
    unallocated_stat_points: int = 0
    abilities: tuple[AbilityState, ...] = ()
    wins: int = 0
    losses: int = 0

    @property
    def unlocked_ability_ids(self) -> tuple[str, ...]:
        return tuple(state.ability_id for state in self.abilities if state.is_unlocked)

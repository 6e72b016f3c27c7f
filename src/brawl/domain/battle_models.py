"""Battle domain models."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Tuple

from brawl.core.types import DecidedBy, StepType
from brawl.domain.entities import Fighter, Item, Stats

STEP_TYPES: Tuple[StepType, ...] = (
    "attack",
    "skill",
    "critical",
    "dodge",
    "block",
    "special",
    "levelup",
    "end",
)


@dataclass(frozen=True, slots=True)
class BattleRules:
    """Tunable constants for one simulation."""

    turn_cap: int = 100
    skill_chance: float = 0.3
    damage_variance_min: float = 1.0
    damage_variance_max: float = 1.5
    block_multiplier: float = 0.5
    winner_xp_base: int = 50
    winner_xp_per_level: int = 10
    loser_xp_base: int = 20
    loser_xp_per_level: int = 5


@dataclass(frozen=True, slots=True)
class CombatAction:
    """Something a combatant can do instead of a plain attack."""

    id: str
    name: str
    damage_multiplier: float
    energy_cost: int = 0
    is_ability: bool = False


@dataclass(slots=True)
class Combatant:
    """Private per-simulation state for one fighter; the snapshot stays untouched."""

    fighter: Fighter
    total_stats: Stats
    max_hp: int
    hp: int
    max_energy: int
    energy: int
    actions: Tuple[CombatAction, ...] = ()

    @property
    def id(self) -> str:
        return self.fighter.id

    @property
    def name(self) -> str:
        return self.fighter.name

    @property
    def weapon(self) -> Item | None:
        return self.fighter.equipment.weapon

    @property
    def is_alive(self) -> bool:
        return self.hp > 0


@dataclass(frozen=True, slots=True)
class HpSnapshot:
    attacker_hp: int
    defender_hp: int


@dataclass(frozen=True, slots=True)
class SpecialEffectNote:
    name: str
    description: str


@dataclass(frozen=True, slots=True)
class ProgressionNote:
    xp_gained: int | None = None
    leveled_up: bool = False
    new_level: int | None = None
    unlocked_ability_ids: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FightStep:
    """One replayable battle-log entry."""

    type: StepType
    attacker: str
    defender: str
    text: str
    damage: int | None = None
    skill: str | None = None
    remaining_hp: HpSnapshot | None = None
    special_effect: SpecialEffectNote | None = None
    progression: ProgressionNote | None = None
    winner: str | None = None
    loser: str | None = None
    decided_by: DecidedBy | None = None

    def to_dict(self) -> Dict[str, Any]:
        """Flat JSON-compatible form; absent optional fields are omitted."""
        payload: Dict[str, Any] = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            if key == "progression":
                value = {
                    name: list(entry) if isinstance(entry, tuple) else entry
                    for name, entry in value.items()
                    if entry is not None
                }
            payload[key] = value
        return payload


@dataclass(frozen=True, slots=True)
class XpReward:
    fighter_id: str
    xp_gained: int
    leveled_up: bool
    new_level: int
    unlocked_ability_ids: Tuple[str, ...] = ()


@dataclass(slots=True)
class FightResult:
    winner_id: str
    loser_id: str
    turns: int
    decided_by: DecidedBy
    steps: List[FightStep] = field(default_factory=list)
    rewards: Dict[str, XpReward] = field(default_factory=dict)

    @property
    def end_step(self) -> FightStep:
        return next(step for step in self.steps if step.type == "end")

    def steps_as_dicts(self) -> List[Dict[str, Any]]:
        return [step.to_dict() for step in self.steps]


@dataclass(frozen=True, slots=True)
class FightRecord:
    """A persisted fight: participants, outcome and the replayable log."""

    id: str
    fighter_a_id: str
    fighter_b_id: str
    winner_id: str
    loser_id: str
    decided_by: DecidedBy
    turns: int
    steps: Tuple[FightStep, ...]
    created_at: str

"""Combat skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SkillDef:
    """A stat-gated combat skill.

    The skill is available when ``required_stat`` of the fighter's total stats
    is strictly greater than ``required_value``. Skills without a requirement
    are fallbacks, granted only when nothing else qualifies.
    """

    id: str
    name: str
    description: str
    damage_multiplier: float
    energy_cost: int
    required_stat: str | None = None
    required_value: float = 0

    @property
    def is_fallback(self) -> bool:
        return self.required_stat is None

"""Experience curve shared by the progression model and the combat engine."""
from __future__ import annotations

from dataclasses import dataclass

XP_PER_LEVEL = 100
POINTS_PER_LEVEL = 3


def experience_to_next_level(level: int) -> int:
    """XP needed to leave *level*: level 1 -> 2 costs 100, 2 -> 3 costs 200, ..."""
    return level * XP_PER_LEVEL


@dataclass(frozen=True, slots=True)
class XpProjection:
    level: int
    experience: int
    levels_gained: int

    @property
    def leveled_up(self) -> bool:
        return self.levels_gained > 0


def project_xp_gain(level: int, experience: int, amount: int) -> XpProjection:
    """Return where a character would land after gaining *amount* XP.

    Excess XP carries over, so one large grant can cross several thresholds.
    """
    experience += max(0, amount)
    gained = 0
    while experience >= experience_to_next_level(level):
        experience -= experience_to_next_level(level)
        level += 1
        gained += 1
    return XpProjection(level=level, experience=experience, levels_gained=gained)

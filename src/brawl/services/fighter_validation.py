"""Precondition checks run before a fighter enters a simulation."""
from __future__ import annotations

import math
from typing import List

from loguru import logger

from brawl.domain.entities import STAT_NAMES, EquipmentSlot, Fighter
from brawl.domain.leveling import experience_to_next_level
from brawl.services.errors import FighterValidationError


def _check_number(problems: List[str], label: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        problems.append(f"{label} must be a number")
    elif not math.isfinite(value):
        problems.append(f"{label} must be finite")
    elif value < 0:
        problems.append(f"{label} must not be negative")


def collect_problems(fighter: Fighter) -> List[str]:
    problems: List[str] = []
    if fighter.level < 1:
        problems.append("level must be at least 1")
    for label in ("experience", "current_hp", "energy", "unallocated_stat_points"):
        _check_number(problems, label, getattr(fighter, label))
    if fighter.level >= 1 and isinstance(fighter.experience, int) and not isinstance(fighter.experience, bool):
        threshold = experience_to_next_level(fighter.level)
        if fighter.experience >= threshold:
            problems.append(f"experience must be below {threshold} at level {fighter.level}")
    for name in STAT_NAMES:
        _check_number(problems, f"base_stats.{name}", fighter.base_stats.get(name))

    for slot, item in fighter.equipment.slots.items():
        if item.slot is not slot:
            problems.append(f"item '{item.id}' belongs in {item.slot.value}, not {slot.value}")
        for stat, bonus in item.stat_bonuses.items():
            if isinstance(bonus, (int, float)) and not math.isfinite(bonus):
                problems.append(f"item '{item.id}' bonus {stat} must be finite")
        if slot is EquipmentSlot.WEAPON:
            if item.damage is None:
                problems.append(f"weapon '{item.id}' has no damage range")
            elif item.damage.minimum < 0 or item.damage.minimum > item.damage.maximum:
                problems.append(
                    f"weapon '{item.id}' damage range {item.damage.minimum}-{item.damage.maximum} is invalid"
                )
        for effect in item.special_effects:
            if not 0.0 <= effect.trigger_chance <= 1.0:
                problems.append(f"effect '{effect.id}' on '{item.id}' has trigger chance outside 0..1")
    return problems


def validate_fighter(fighter: Fighter) -> None:
    """Raise FighterValidationError listing every problem found."""
    problems = collect_problems(fighter)
    if problems:
        logger.warning("Fighter {} failed validation: {}", fighter.id, problems)
        raise FighterValidationError(fighter.id, problems)

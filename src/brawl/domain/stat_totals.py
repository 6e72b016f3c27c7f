"""Equipment stat aggregation and derived combat values."""
from __future__ import annotations

from brawl.domain.defs import ClassDef
from brawl.domain.entities import EquipmentLoadout, Fighter, Stats
from brawl.domain.progression import calculate_max_hp

VITALITY_HP_PER_POINT = 5
BASE_ENERGY = 100
ENERGY_PER_LEVEL = 5


def calculate_total_stats(base_stats: Stats, loadout: EquipmentLoadout) -> Stats:
    """Base stats plus every equipped item's additive bonuses."""
    total = base_stats
    for _, item in loadout.items():
        total = total.with_bonuses(item.stat_bonuses)
    return total


def fighter_total_stats(fighter: Fighter) -> Stats:
    return calculate_total_stats(fighter.base_stats, fighter.equipment)


def fighter_max_hp(class_def: ClassDef, level: int, total_stats: Stats) -> int:
    """Class HP (on total stats) plus the vitality bonus."""
    return calculate_max_hp(class_def, level, total_stats) + int(
        total_stats.vitality * VITALITY_HP_PER_POINT
    )


def fighter_max_energy(level: int) -> int:
    return BASE_ENERGY + level * ENERGY_PER_LEVEL


def dodge_chance(total_stats: Stats) -> float:
    return min(max(total_stats.agility, 0), 100) / 100

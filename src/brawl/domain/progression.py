"""Progression rules: XP gain, level-ups, stat allocation and class HP.

Every function dispatches on a :class:`ClassDef` row instead of a class
hierarchy; adding a class only needs a new row in ``classes.json``.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from brawl.domain.defs import AbilityDef, ClassDef
from brawl.domain.entities import CORE_STAT_NAMES, Character, CharacterAbility, CoreStats
from brawl.domain.leveling import (
    POINTS_PER_LEVEL,
    XpProjection,
    experience_to_next_level,
    project_xp_gain,
)

__all__ = [
    "POINTS_PER_LEVEL",
    "XpProjection",
    "allocate_stat",
    "build_character",
    "calculate_max_hp",
    "experience_to_next_level",
    "gain_xp",
    "level_up",
    "project_xp_gain",
    "refresh_ability_unlocks",
    "unlocked_ability_ids_at",
    "use_ability",
]


def calculate_max_hp(class_def: ClassDef, level: int, stats: CoreStats | object) -> int:
    """``base_hp + level * hp_per_level + primary_stat * hp_per_primary_stat``."""
    primary_value = getattr(stats, class_def.primary_stat)
    return int(
        class_def.base_hp
        + level * class_def.hp_per_level
        + primary_value * class_def.hp_per_primary_stat
    )


def build_character(
    name: str,
    class_def: ClassDef,
    abilities: Sequence[AbilityDef],
    *,
    level: int = 1,
    experience: int = 0,
    free_points: int = 0,
    stats: CoreStats | None = None,
) -> Character:
    """Create a character with the class starting stats and its ability list."""
    character = Character(
        name=name,
        character_class=class_def.id,
        stats=stats
        or CoreStats(
            strength=class_def.starting_strength,
            agility=class_def.starting_agility,
            intelligence=class_def.starting_intelligence,
        ),
        level=level,
        experience=experience,
        free_points=free_points,
        abilities=[CharacterAbility(definition=ability) for ability in abilities],
    )
    refresh_ability_unlocks(character)
    character.max_hp = calculate_max_hp(class_def, character.level, character.stats)
    return character


def refresh_ability_unlocks(character: Character) -> list[str]:
    """Unlock abilities whose level threshold is met; return newly unlocked ids.

    Unlocks are one-way: an ability is never re-locked.
    """
    newly_unlocked: list[str] = []
    for ability in character.abilities:
        if not ability.is_unlocked and character.level >= ability.unlock_level:
            ability.is_unlocked = True
            newly_unlocked.append(ability.id)
    return newly_unlocked


def level_up(character: Character, class_def: ClassDef) -> list[str]:
    character.level += 1
    character.free_points += POINTS_PER_LEVEL
    primary = class_def.primary_stat
    setattr(character.stats, primary, getattr(character.stats, primary) + 1)
    character.max_hp = calculate_max_hp(class_def, character.level, character.stats)
    return refresh_ability_unlocks(character)


def gain_xp(character: Character, class_def: ClassDef, amount: int) -> bool:
    """Add XP and process every level-up it triggers; True iff the level changed."""
    if amount <= 0:
        return False
    character.experience += amount
    leveled_up = False
    while character.experience >= experience_to_next_level(character.level):
        character.experience -= experience_to_next_level(character.level)
        level_up(character, class_def)
        leveled_up = True
    return leveled_up


def allocate_stat(character: Character, class_def: ClassDef, stat: str, points: int) -> bool:
    """Spend free points on a core stat. Invalid requests change nothing and return False."""
    if stat not in CORE_STAT_NAMES:
        return False
    if isinstance(points, bool) or not isinstance(points, int):
        return False
    if points <= 0 or points > character.free_points:
        return False
    setattr(character.stats, stat, getattr(character.stats, stat) + points)
    character.free_points -= points
    character.max_hp = calculate_max_hp(class_def, character.level, character.stats)
    return True


def use_ability(character: Character, ability_id: str) -> bool:
    return any(ability.id == ability_id and ability.is_unlocked for ability in character.abilities)


def unlocked_ability_ids_at(abilities: Iterable[AbilityDef], old_level: int, new_level: int) -> list[str]:
    """Ids of abilities that become available when moving from *old_level* to *new_level*."""
    return [
        ability.id
        for ability in abilities
        if old_level < ability.unlock_level <= new_level
    ]

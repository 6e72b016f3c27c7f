"""Translation between the combat-facing and progression-facing class names.

Fighters carry one of five combat classes; the progression table only knows
three. The mapping is many-to-one (Rogue plays as a Ranger, Cleric as a Mage).
"""
from __future__ import annotations

from typing import Mapping

from loguru import logger

from brawl.core.types import CharacterClass, FighterClass

FIGHTER_TO_CHARACTER_CLASS: Mapping[str, CharacterClass] = {
    "Warrior": "Fighter",
    "Rogue": "Ranger",
    "Mage": "Mage",
    "Ranger": "Ranger",
    "Cleric": "Mage",
}
CHARACTER_TO_FIGHTER_CLASS: Mapping[str, FighterClass] = {
    "Fighter": "Warrior",
    "Ranger": "Ranger",
    "Mage": "Mage",
}
DEFAULT_CHARACTER_CLASS: CharacterClass = "Fighter"
DEFAULT_FIGHTER_CLASS: FighterClass = "Warrior"


def to_character_class(fighter_class: str) -> CharacterClass:
    """Map a fighter class to its progression class; unknown labels play as Fighter."""
    mapped = FIGHTER_TO_CHARACTER_CLASS.get(fighter_class)
    if mapped is None:
        logger.warning(
            "Unknown fighter class {!r}; using progression class {}",
            fighter_class,
            DEFAULT_CHARACTER_CLASS,
        )
        return DEFAULT_CHARACTER_CLASS
    return mapped


def to_fighter_class(character_class: str) -> FighterClass:
    """Default fighter class for a freshly created character of *character_class*."""
    mapped = CHARACTER_TO_FIGHTER_CLASS.get(character_class)
    if mapped is None:
        logger.warning(
            "Unknown progression class {!r}; using fighter class {}",
            character_class,
            DEFAULT_FIGHTER_CLASS,
        )
        return DEFAULT_FIGHTER_CLASS
    return mapped

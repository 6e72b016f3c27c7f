"""Shared type aliases for the core and domain layers."""
from typing import Literal

CharacterClass = Literal["Fighter", "Mage", "Ranger"]
FighterClass = Literal["Warrior", "Rogue", "Mage", "Ranger", "Cleric"]
CoreStatName = Literal["strength", "agility", "intelligence"]
AbilityType = Literal["passive", "active", "ultimate"]
StepType = Literal["attack", "skill", "critical", "dodge", "block", "special", "levelup", "end"]
DecidedBy = Literal["knockout", "hp_lead", "coin_flip"]
EffectTrigger = Literal["passive", "on_hit", "on_take_damage", "on_critical", "on_kill"]
EffectKind = Literal["life_steal", "bonus_damage", "none"]

__all__ = [
    "AbilityType",
    "CharacterClass",
    "CoreStatName",
    "DecidedBy",
    "EffectKind",
    "EffectTrigger",
    "FighterClass",
    "StepType",
]

"""Domain definition exports."""

from .ability_def import AbilityDef
from .class_def import ClassDef
from .effect_def import SpecialEffectDef
from .skill_def import SkillDef

__all__ = [
    "AbilityDef",
    "ClassDef",
    "SkillDef",
    "SpecialEffectDef",
]

"""Repository exports."""

from .abilities_repo import AbilitiesRepository
from .classes_repo import ClassesRepository
from .effects_repo import EffectsRepository
from .skills_repo import SkillsRepository

__all__ = [
    "AbilitiesRepository",
    "ClassesRepository",
    "EffectsRepository",
    "SkillsRepository",
]

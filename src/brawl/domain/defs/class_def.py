"""Progression class definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from brawl.core.types import CharacterClass, CoreStatName


@dataclass(frozen=True, slots=True)
class ClassDef:
    """Per-class row of the progression table (HP scaling, primary stat, sprites)."""

    id: CharacterClass
    name: str
    primary_stat: CoreStatName
    base_hp: int
    hp_per_level: int
    hp_per_primary_stat: int
    starting_strength: int
    starting_agility: int
    starting_intelligence: int
    sprite_name: str
    asset_dir: str
    ability_ids: tuple[str, ...] = ()

"""Character progression service backed by the class table."""
from __future__ import annotations

from dataclasses import replace
from typing import List

from loguru import logger

from brawl.data.repositories import ClassesRepository
from brawl.domain import progression, sprites
from brawl.domain.class_mapping import to_character_class
from brawl.domain.defs import AbilityDef, ClassDef
from brawl.domain.entities import AbilityState, Character, CoreStats, Fighter
from brawl.domain.stat_totals import fighter_max_energy, fighter_max_hp, fighter_total_stats
from brawl.services.errors import FactoryError


class ProgressionService:
    """Looks up the class row for a character and applies the progression rules."""

    def __init__(self, classes_repo: ClassesRepository) -> None:
        self._classes_repo = classes_repo

    def get_class(self, character_class: str) -> ClassDef:
        try:
            return self._classes_repo.get(character_class)
        except KeyError as exc:
            raise FactoryError(f"Class '{character_class}' not found.") from exc

    def create_character(self, name: str, character_class: str) -> Character:
        class_def = self.get_class(character_class)
        return progression.build_character(
            name, class_def, self._classes_repo.abilities_for(class_def.id)
        )

    def gain_xp(self, character: Character, amount: int) -> bool:
        old_level = character.level
        leveled_up = progression.gain_xp(character, self.get_class(character.character_class), amount)
        if leveled_up:
            logger.info(
                "{} reached level {} (was {}), {} free points",
                character.name,
                character.level,
                old_level,
                character.free_points,
            )
        return leveled_up

    def allocate_stat(self, character: Character, stat: str, points: int) -> bool:
        allocated = progression.allocate_stat(
            character, self.get_class(character.character_class), stat, points
        )
        if not allocated:
            logger.debug("Rejected allocation of {!r} points to {!r} for {}", points, stat, character.name)
        return allocated

    def calculate_max_hp(self, character: Character) -> int:
        return progression.calculate_max_hp(
            self.get_class(character.character_class), character.level, character.stats
        )

    def use_ability(self, character: Character, ability_id: str) -> bool:
        return progression.use_ability(character, ability_id)

    def sprite_filename(self, character: Character) -> str:
        class_def = self.get_class(character.character_class)
        return sprites.sprite_filename(class_def.sprite_name, character.level)

    def sprite_url(self, character: Character) -> str:
        class_def = self.get_class(character.character_class)
        return sprites.sprite_path(class_def.asset_dir, class_def.sprite_name, character.level)

    def preview_unlocks(self, character_class: str, old_level: int, new_level: int) -> List[str]:
        """Ability ids a class would unlock moving from *old_level* to *new_level*."""
        class_def = self.get_class(character_class)
        return progression.unlocked_ability_ids_at(
            self._classes_repo.abilities_for(class_def.id), old_level, new_level
        )

    # -----------------------
    # Fighter integration
    # -----------------------
    def class_for_fighter(self, fighter: Fighter) -> ClassDef:
        return self.get_class(to_character_class(fighter.fighter_class))

    def abilities_for_fighter(self, fighter: Fighter) -> List[AbilityDef]:
        return self._classes_repo.abilities_for(self.class_for_fighter(fighter).id)

    def fighter_max_hp(self, fighter: Fighter) -> int:
        return fighter_max_hp(self.class_for_fighter(fighter), fighter.level, fighter_total_stats(fighter))

    def fighter_max_energy(self, fighter: Fighter) -> int:
        return fighter_max_energy(fighter.level)

    def character_from_fighter(self, fighter: Fighter) -> Character:
        """Build the progression record for a fighter snapshot."""
        class_def = self.class_for_fighter(fighter)
        unlocked = set(fighter.unlocked_ability_ids)
        character = progression.build_character(
            fighter.name,
            class_def,
            self._classes_repo.abilities_for(class_def.id),
            level=fighter.level,
            experience=fighter.experience,
            free_points=fighter.unallocated_stat_points,
            stats=CoreStats(
                strength=fighter.base_stats.strength,
                agility=fighter.base_stats.agility,
                intelligence=fighter.base_stats.intelligence,
            ),
        )
        for ability in character.abilities:
            if ability.id in unlocked:
                ability.is_unlocked = True
        return character

    def apply_character_to_fighter(self, fighter: Fighter, character: Character) -> Fighter:
        """Copy level, XP, core stats, free points and unlocks back onto a fighter."""
        base_stats = replace(
            fighter.base_stats,
            strength=character.stats.strength,
            agility=character.stats.agility,
            intelligence=character.stats.intelligence,
        )
        return replace(
            fighter,
            level=character.level,
            experience=character.experience,
            base_stats=base_stats,
            unallocated_stat_points=character.free_points,
            abilities=tuple(
                AbilityState(ability_id=ability.id, is_unlocked=ability.is_unlocked)
                for ability in character.abilities
            ),
        )

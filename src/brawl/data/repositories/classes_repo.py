"""Classes repository with reference validation."""
from __future__ import annotations

from typing import Dict, List

from brawl.data.errors import DataReferenceError, DataValidationError
from brawl.data.repositories.abilities_repo import AbilitiesRepository
from brawl.data.repositories.base import RepositoryBase
from brawl.domain.defs import AbilityDef, ClassDef
from brawl.domain.entities import CORE_STAT_NAMES


class ClassesRepository(RepositoryBase[ClassDef]):
    """Loads the progression class table and ensures referenced abilities exist."""

    def __init__(
        self,
        abilities_repo: AbilitiesRepository | None = None,
        base_path=None,
    ) -> None:
        super().__init__("classes.json", base_path)
        self._abilities_repo = abilities_repo or AbilitiesRepository(base_path=base_path)

    @property
    def abilities_repo(self) -> AbilitiesRepository:
        return self._abilities_repo

    def _build(self, raw: dict[str, object]) -> Dict[str, ClassDef]:
        ability_ids = {ability.id for ability in self._abilities_repo.all()}

        classes: Dict[str, ClassDef] = {}
        for raw_id, payload in raw.items():
            context = f"class '{raw_id}'"
            class_data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                class_data,
                {
                    "name",
                    "primary_stat",
                    "base_hp",
                    "hp_per_level",
                    "hp_per_primary_stat",
                    "starting_stats",
                    "sprite_name",
                    "asset_dir",
                    "abilities",
                },
                context,
            )

            starting = self._require_mapping(class_data["starting_stats"], f"{context} starting_stats")
            self._assert_exact_fields(starting, set(CORE_STAT_NAMES), f"{context} starting_stats")
            abilities = self._require_str_list(class_data["abilities"], f"{context} abilities")
            for ability_id in abilities:
                if ability_id not in ability_ids:
                    raise DataReferenceError(f"{context} references missing ability '{ability_id}'.")

            base_hp = self._require_int(class_data["base_hp"], f"{context} base_hp")
            if base_hp <= 0:
                raise DataValidationError(f"{context} base_hp must be positive.")

            classes[raw_id] = ClassDef(
                id=raw_id,
                name=self._require_str(class_data["name"], f"{context} name"),
                primary_stat=self._require_literal(
                    class_data["primary_stat"], set(CORE_STAT_NAMES), f"{context} primary_stat"
                ),
                base_hp=base_hp,
                hp_per_level=self._require_int(class_data["hp_per_level"], f"{context} hp_per_level"),
                hp_per_primary_stat=self._require_int(
                    class_data["hp_per_primary_stat"], f"{context} hp_per_primary_stat"
                ),
                starting_strength=self._require_int(starting["strength"], f"{context} strength"),
                starting_agility=self._require_int(starting["agility"], f"{context} agility"),
                starting_intelligence=self._require_int(
                    starting["intelligence"], f"{context} intelligence"
                ),
                sprite_name=self._require_str(class_data["sprite_name"], f"{context} sprite_name"),
                asset_dir=self._require_str(class_data["asset_dir"], f"{context} asset_dir"),
                ability_ids=tuple(abilities),
            )
        return classes

    def abilities_for(self, class_id: str) -> List[AbilityDef]:
        """Ability definitions of a class in table order."""
        class_def = self.get(class_id)
        return [self._abilities_repo.get(ability_id) for ability_id in class_def.ability_ids]

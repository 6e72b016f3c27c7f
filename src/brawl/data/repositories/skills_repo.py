"""Combat skills repository."""
from __future__ import annotations

from typing import Dict

from brawl.data.errors import DataValidationError
from brawl.data.repositories.base import RepositoryBase
from brawl.domain.defs import SkillDef
from brawl.domain.entities import STAT_NAMES


class SkillsRepository(RepositoryBase[SkillDef]):
    """Loads stat-gated combat skills."""

    def __init__(self, base_path=None) -> None:
        super().__init__("skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SkillDef]:
        skills: Dict[str, SkillDef] = {}
        for raw_id, payload in raw.items():
            context = f"skill '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                data,
                {"name", "description", "damage_multiplier", "energy_cost"},
                context,
                optional_fields={"required_stat", "required_value"},
            )
            required_stat = data.get("required_stat")
            if required_stat is not None:
                required_stat = self._require_literal(
                    required_stat, set(STAT_NAMES), f"{context} required_stat"
                )
            elif "required_value" in data:
                raise DataValidationError(f"{context} required_value needs required_stat.")
            energy_cost = self._require_int(data["energy_cost"], f"{context} energy_cost")
            if energy_cost < 0:
                raise DataValidationError(f"{context} energy_cost must be >= 0.")
            skills[raw_id] = SkillDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                description=self._require_str(data["description"], f"{context} description"),
                damage_multiplier=self._require_number(
                    data["damage_multiplier"], f"{context} damage_multiplier"
                ),
                energy_cost=energy_cost,
                required_stat=required_stat,
                required_value=self._require_number(
                    data.get("required_value", 0), f"{context} required_value"
                ),
            )
        return skills

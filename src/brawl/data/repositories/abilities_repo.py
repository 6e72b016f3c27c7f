"""Class abilities repository."""
from __future__ import annotations

from typing import Dict

from brawl.data.errors import DataValidationError
from brawl.data.repositories.base import RepositoryBase
from brawl.domain.defs import AbilityDef

VALID_ABILITY_TYPES = {"passive", "active", "ultimate"}


class AbilitiesRepository(RepositoryBase[AbilityDef]):
    """Loads the level-gated class abilities."""

    def __init__(self, base_path=None) -> None:
        super().__init__("abilities.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, AbilityDef]:
        abilities: Dict[str, AbilityDef] = {}
        for raw_id, payload in raw.items():
            context = f"ability '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                data,
                {"name", "description", "type", "unlock_level"},
                context,
                optional_fields={"cooldown", "energy_cost", "damage_multiplier"},
            )
            unlock_level = self._require_int(data["unlock_level"], f"{context} unlock_level")
            if unlock_level < 1:
                raise DataValidationError(f"{context} unlock_level must be >= 1.")
            multiplier = data.get("damage_multiplier")
            abilities[raw_id] = AbilityDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                description=self._require_str(data["description"], f"{context} description"),
                type=self._require_literal(data["type"], VALID_ABILITY_TYPES, f"{context} type"),
                unlock_level=unlock_level,
                cooldown=self._require_int(data.get("cooldown", 0), f"{context} cooldown"),
                energy_cost=self._require_int(data.get("energy_cost", 0), f"{context} energy_cost"),
                damage_multiplier=(
                    None
                    if multiplier is None
                    else self._require_number(multiplier, f"{context} damage_multiplier")
                ),
            )
        return abilities

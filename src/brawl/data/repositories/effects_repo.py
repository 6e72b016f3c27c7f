"""Equipment special-effects repository."""
from __future__ import annotations

from typing import Dict

from brawl.data.errors import DataValidationError
from brawl.data.repositories.base import RepositoryBase
from brawl.domain.defs import SpecialEffectDef

VALID_TRIGGERS = {"passive", "on_hit", "on_take_damage", "on_critical", "on_kill"}
VALID_KINDS = {"life_steal", "bonus_damage", "none"}


class EffectsRepository(RepositoryBase[SpecialEffectDef]):
    """Loads the special-effect catalog items can roll from."""

    def __init__(self, base_path=None) -> None:
        super().__init__("special_effects.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SpecialEffectDef]:
        effects: Dict[str, SpecialEffectDef] = {}
        for raw_id, payload in raw.items():
            context = f"effect '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                data,
                {"name", "description", "trigger", "kind", "trigger_chance", "strength"},
                context,
            )
            chance = self._require_number(data["trigger_chance"], f"{context} trigger_chance")
            if not 0.0 <= chance <= 1.0:
                raise DataValidationError(f"{context} trigger_chance must be within 0..1.")
            effects[raw_id] = SpecialEffectDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                description=self._require_str(data["description"], f"{context} description"),
                trigger=self._require_literal(data["trigger"], VALID_TRIGGERS, f"{context} trigger"),
                kind=self._require_literal(data["kind"], VALID_KINDS, f"{context} kind"),
                trigger_chance=chance,
                strength=self._require_number(data["strength"], f"{context} strength"),
            )
        return effects

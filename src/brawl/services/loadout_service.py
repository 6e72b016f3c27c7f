"""Equip and unequip items on fighter snapshots."""
from __future__ import annotations

from dataclasses import replace

from loguru import logger

from brawl.domain.entities import EquipmentSlot, Fighter, Item
from brawl.services.errors import LoadoutError
from brawl.services.progression_service import ProgressionService


class LoadoutService:
    """Returns updated fighters; the fighter passed in is never modified."""

    def __init__(self, progression_service: ProgressionService) -> None:
        self._progression = progression_service

    def equip(self, fighter: Fighter, item: Item) -> Fighter:
        if item.required_level > fighter.level:
            raise LoadoutError(
                f"'{item.name}' requires level {item.required_level}; {fighter.name} is level {fighter.level}."
            )
        old_max = self._progression.fighter_max_hp(fighter)
        updated = replace(fighter, equipment=fighter.equipment.equip(item))
        new_max = self._progression.fighter_max_hp(updated)
        current_hp = fighter.current_hp + max(0, new_max - old_max)
        logger.debug("{} equipped {} in {}", fighter.id, item.name, item.slot.value)
        return replace(updated, current_hp=min(current_hp, new_max))

    def unequip(self, fighter: Fighter, slot: EquipmentSlot) -> Fighter:
        if fighter.equipment.get(slot) is None:
            return fighter
        updated = replace(fighter, equipment=fighter.equipment.unequip(slot))
        new_max = self._progression.fighter_max_hp(updated)
        logger.debug("{} unequipped {}", fighter.id, slot.value)
        return replace(updated, current_hp=max(1, min(fighter.current_hp, new_max)))

"""Runtime entity exports."""

from .character import Character, CharacterAbility
from .equipment import (
    ACCESSORY_SLOTS,
    ARMOUR_SLOTS,
    EquipmentLoadout,
    EquipmentSlot,
    Item,
    ItemRarity,
    WeaponDamage,
)
from .fighter import AbilityState, Fighter
from .stats import CORE_STAT_NAMES, STAT_NAMES, CoreStats, Stats

__all__ = [
    "ACCESSORY_SLOTS",
    "ARMOUR_SLOTS",
    "AbilityState",
    "CORE_STAT_NAMES",
    "Character",
    "CharacterAbility",
    "CoreStats",
    "EquipmentLoadout",
    "EquipmentSlot",
    "Fighter",
    "Item",
    "ItemRarity",
    "STAT_NAMES",
    "Stats",
    "WeaponDamage",
]

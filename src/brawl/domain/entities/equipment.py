"""Equipment runtime models."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from brawl.domain.defs import SpecialEffectDef


class EquipmentSlot(str, Enum):
    WEAPON = "weapon"
    HEAD = "head"
    CHEST = "chest"
    HANDS = "hands"
    LEGS = "legs"
    FEET = "feet"
    RING_1 = "ring1"
    RING_2 = "ring2"
    AMULET = "amulet"
    TRINKET = "trinket"


ARMOUR_SLOTS = (
    EquipmentSlot.HEAD,
    EquipmentSlot.CHEST,
    EquipmentSlot.HANDS,
    EquipmentSlot.LEGS,
    EquipmentSlot.FEET,
)
ACCESSORY_SLOTS = (
    EquipmentSlot.RING_1,
    EquipmentSlot.RING_2,
    EquipmentSlot.AMULET,
    EquipmentSlot.TRINKET,
)


class ItemRarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    MYTHIC = "mythic"


@dataclass(frozen=True, slots=True)
class WeaponDamage:
    minimum: int
    maximum: int


@dataclass(frozen=True, slots=True)
class Item:
    """An equippable item with additive stat bonuses and optional effects."""

    id: str
    name: str
    slot: EquipmentSlot
    rarity: ItemRarity = ItemRarity.COMMON
    level: int = 1
    value: int = 0
    stat_bonuses: Mapping[str, float] = field(default_factory=dict)
    special_effects: tuple[SpecialEffectDef, ...] = ()
    damage: WeaponDamage | None = None
    armor_value: int = 0
    required_level: int = 1


@dataclass(frozen=True, slots=True)
class EquipmentLoadout:
    """Immutable slot -> item mapping; equip/unequip return new loadouts."""

    slots: Mapping[EquipmentSlot, Item] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "slots", MappingProxyType(dict(self.slots)))

    @classmethod
    def of(cls, *items: Item) -> "EquipmentLoadout":
        return cls({item.slot: item for item in items})

    def get(self, slot: EquipmentSlot) -> Item | None:
        return self.slots.get(slot)

    @property
    def weapon(self) -> Item | None:
        return self.slots.get(EquipmentSlot.WEAPON)

    def equip(self, item: Item) -> "EquipmentLoadout":
        updated = dict(self.slots)
        updated[item.slot] = item
        return EquipmentLoadout(updated)

    def unequip(self, slot: EquipmentSlot) -> "EquipmentLoadout":
        updated = dict(self.slots)
        updated.pop(slot, None)
        return EquipmentLoadout(updated)

    def items(self) -> Iterator[tuple[EquipmentSlot, Item]]:
        """Yield equipped items in canonical slot order."""
        for slot in EquipmentSlot:
            item = self.slots.get(slot)
            if item is not None:
                yield slot, item

    def __len__(self) -> int:
        return len(self.slots)

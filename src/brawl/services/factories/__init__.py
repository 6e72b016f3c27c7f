"""Factory helpers for runtime entities."""

from .equipment_factory import (
    determine_rarity,
    generate_accessory,
    generate_armor,
    generate_equipment_set,
    generate_weapon,
)
from .fighter_factory import create_fighter, generate_base_stats, make_guest_factory
from .id_factory import make_instance_id

__all__ = [
    "create_fighter",
    "determine_rarity",
    "generate_accessory",
    "generate_armor",
    "generate_base_stats",
    "generate_equipment_set",
    "generate_weapon",
    "make_guest_factory",
    "make_instance_id",
]

"""Random equipment generation driven by an injected RNG."""
from __future__ import annotations

import math
from typing import Dict, List, Sequence

from brawl.core.rng import RNG
from brawl.domain.defs import SpecialEffectDef
from brawl.domain.entities import (
    ACCESSORY_SLOTS,
    ARMOUR_SLOTS,
    EquipmentLoadout,
    EquipmentSlot,
    Item,
    ItemRarity,
    WeaponDamage,
)
from brawl.services.errors import FactoryError

from .id_factory import make_instance_id

RARITY_MULTIPLIERS: Dict[ItemRarity, float] = {
    ItemRarity.COMMON: 1.0,
    ItemRarity.UNCOMMON: 1.5,
    ItemRarity.RARE: 2.5,
    ItemRarity.EPIC: 4.0,
    ItemRarity.LEGENDARY: 7.0,
    ItemRarity.MYTHIC: 12.0,
}

# Highest threshold first; a roll above the threshold earns the rarity.
RARITY_THRESHOLDS: tuple[tuple[float, ItemRarity], ...] = (
    (0.995, ItemRarity.MYTHIC),
    (0.97, ItemRarity.LEGENDARY),
    (0.9, ItemRarity.EPIC),
    (0.75, ItemRarity.RARE),
    (0.5, ItemRarity.UNCOMMON),
)

STAT_COUNTS: Dict[ItemRarity, int] = {
    ItemRarity.COMMON: 1,
    ItemRarity.UNCOMMON: 2,
    ItemRarity.RARE: 3,
    ItemRarity.EPIC: 4,
    ItemRarity.LEGENDARY: 5,
    ItemRarity.MYTHIC: 6,
}

WEAPON_NAMES: Dict[str, tuple[str, ...]] = {
    "sword": ("Longsword", "Broadsword", "Shortsword", "Blade", "Saber"),
    "axe": ("Battleaxe", "Hatchet", "Cleaver", "War Axe", "Tomahawk"),
    "mace": ("Warhammer", "Flail", "Mace", "Morning Star", "Maul"),
    "dagger": ("Dagger", "Dirk", "Stiletto", "Knife", "Shiv"),
    "staff": ("Staff", "Rod", "Scepter", "Quarterstaff", "Spellstaff"),
    "bow": ("Longbow", "Shortbow", "Recurve Bow", "Compound Bow", "Crossbow"),
    "wand": ("Wand", "Baton", "Focus", "Channeling Rod", "Runestaff"),
}

SLOT_NAMES: Dict[EquipmentSlot, tuple[str, ...]] = {
    EquipmentSlot.HEAD: ("Helmet", "Cap", "Crown", "Mask", "Hood", "Circlet"),
    EquipmentSlot.CHEST: ("Chestplate", "Armor", "Cuirass", "Robe", "Vest", "Breastplate"),
    EquipmentSlot.HANDS: ("Gloves", "Gauntlets", "Handwraps", "Bracers", "Mitts"),
    EquipmentSlot.LEGS: ("Greaves", "Pants", "Leggings", "Cuisses", "Breeches"),
    EquipmentSlot.FEET: ("Boots", "Shoes", "Sabatons", "Sandals", "Treads"),
    EquipmentSlot.RING_1: ("Ring", "Band", "Loop", "Seal", "Circle"),
    EquipmentSlot.RING_2: ("Ring", "Band", "Loop", "Seal", "Circle"),
    EquipmentSlot.AMULET: ("Amulet", "Necklace", "Pendant", "Locket", "Choker"),
    EquipmentSlot.TRINKET: ("Charm", "Totem", "Bauble", "Idol", "Talisman"),
}

RARITY_ADJECTIVES: Dict[ItemRarity, tuple[str, ...]] = {
    ItemRarity.COMMON: ("Simple", "Basic", "Plain", "Crude", "Ordinary"),
    ItemRarity.UNCOMMON: ("Sturdy", "Quality", "Refined", "Improved", "Enhanced"),
    ItemRarity.RARE: ("Exceptional", "Superior", "Masterwork", "Remarkable", "Distinctive"),
    ItemRarity.EPIC: ("Magnificent", "Formidable", "Illustrious", "Empowered", "Heroic"),
    ItemRarity.LEGENDARY: ("Ancient", "Mythical", "Legendary", "Fabled", "Timeless"),
    ItemRarity.MYTHIC: ("Divine", "Transcendent", "Celestial", "Godly", "Omnipotent"),
}

STAT_PREFIXES: Dict[str, tuple[str, ...]] = {
    "strength": ("Mighty", "Powerful", "Strong", "Forceful", "Brutal"),
    "agility": ("Swift", "Quick", "Agile", "Nimble", "Dexterous"),
    "vitality": ("Robust", "Healthy", "Vigorous", "Vital", "Enduring"),
    "defense": ("Sturdy", "Protective", "Reinforced", "Shielding", "Guarding"),
    "crit_chance": ("Precise", "Sharp", "Accurate", "Focused", "Deadly"),
    "crit_damage": ("Devastating", "Lethal", "Vicious", "Brutal", "Crushing"),
    "block_rate": ("Warding", "Blocking", "Defensive", "Guarded", "Protected"),
    "magic_find": ("Lucky", "Fortunate", "Prosperous", "Favored", "Blessed"),
}

EPIC_TITLES = (
    "of the Cosmos",
    "of Destruction",
    "of the Phoenix",
    "of Dominance",
    "of the Void",
    "of Eternity",
    "of Power",
    "of the Gods",
    "of Destiny",
)

# (upper roll bound, armour type, armour value factor, primary stat)
ARMOUR_TYPES: tuple[tuple[float, str, float, str], ...] = (
    (0.3, "light", 0.8, "agility"),
    (0.6, "medium", 1.0, "vitality"),
    (0.9, "heavy", 1.5, "defense"),
    (1.0, "cloth", 0.5, "magic_find"),
)

ARMOUR_SLOT_FACTORS: Dict[EquipmentSlot, float] = {
    EquipmentSlot.HEAD: 1.0,
    EquipmentSlot.CHEST: 1.5,
    EquipmentSlot.HANDS: 0.7,
    EquipmentSlot.LEGS: 1.2,
    EquipmentSlot.FEET: 0.8,
}

BASE_STAT_POOL = ("strength", "agility", "vitality", "defense")
OPTIONAL_STAT_ODDS = (
    ("crit_chance", 0.7),
    ("crit_damage", 0.6),
    ("block_rate", 0.5),
    ("magic_find", 0.4),
)


def determine_rarity(level: int, rng: RNG, luck: float = 0.0) -> ItemRarity:
    roll = rng.random() + level / 100 + luck
    for threshold, rarity in RARITY_THRESHOLDS:
        if roll > threshold:
            return rarity
    return ItemRarity.COMMON


def _effect_count(rarity: ItemRarity, rng: RNG) -> int:
    if rarity is ItemRarity.UNCOMMON:
        return 1 if rng.chance(0.2) else 0
    if rarity is ItemRarity.RARE:
        return 1 if rng.chance(0.5) else 0
    if rarity is ItemRarity.EPIC:
        return 1
    if rarity is ItemRarity.LEGENDARY:
        return 1 + (1 if rng.chance(0.5) else 0)
    if rarity is ItemRarity.MYTHIC:
        return 2 + (1 if rng.chance(0.5) else 0)
    return 0


def roll_special_effects(
    rarity: ItemRarity, effects: Sequence[SpecialEffectDef], rng: RNG
) -> tuple[SpecialEffectDef, ...]:
    """Draw distinct effects from the catalog according to the rarity."""
    count = _effect_count(rarity, rng)
    pool = list(effects)
    chosen: List[SpecialEffectDef] = []
    while len(chosen) < count and pool:
        chosen.append(pool.pop(rng.randint(0, len(pool) - 1)))
    return tuple(chosen)


def _secondary_value(stat: str, level: int, multiplier: float) -> float:
    if stat == "crit_chance":
        return min(math.floor((level * 0.1 + 1) * multiplier), 50)
    if stat == "crit_damage":
        # Stored as a multiplier fraction; the percent roll is divided by 100.
        return math.floor((level * 0.2 + 5) * multiplier) / 100
    if stat == "block_rate":
        return min(math.floor((level * 0.1 + 1) * multiplier), 40)
    if stat == "magic_find":
        return math.floor((level * 0.3 + 2) * multiplier)
    return math.floor((level * 0.5 + 1) * multiplier)


def _slot_primary_stat(slot: EquipmentSlot, pool: Sequence[str], rng: RNG) -> str:
    if slot is EquipmentSlot.WEAPON:
        return "strength"
    if slot is EquipmentSlot.HEAD:
        return "vitality" if rng.chance(0.5) else "defense"
    if slot in (EquipmentSlot.CHEST, EquipmentSlot.LEGS):
        return "defense"
    if slot is EquipmentSlot.HANDS:
        return "strength" if rng.chance(0.5) else "agility"
    if slot is EquipmentSlot.FEET:
        return "agility"
    if slot in (EquipmentSlot.RING_1, EquipmentSlot.RING_2):
        return "crit_chance" if rng.chance(0.5) else "crit_damage"
    if slot is EquipmentSlot.AMULET:
        return "magic_find"
    return rng.choice(list(pool))


def generate_stat_bonuses(
    level: int, rarity: ItemRarity, slot: EquipmentSlot, rng: RNG
) -> Dict[str, float]:
    """Primary stat for the slot plus random secondaries; count grows with rarity."""
    multiplier = RARITY_MULTIPLIERS[rarity]
    pool = list(BASE_STAT_POOL)
    for stat, odds in OPTIONAL_STAT_ODDS:
        if rng.chance(odds):
            pool.append(stat)

    bonuses: Dict[str, float] = {}
    primary = _slot_primary_stat(slot, pool, rng)
    bonuses[primary] = math.floor((level * 0.8 + 2) * multiplier)
    if primary in pool:
        pool.remove(primary)

    for _ in range(STAT_COUNTS[rarity] - 1):
        if not pool:
            break
        stat = pool.pop(rng.randint(0, len(pool) - 1))
        bonuses[stat] = _secondary_value(stat, level, multiplier)
    return bonuses


def _item_name(base_names: Sequence[str], rarity: ItemRarity, primary_stat: str, rng: RNG) -> str:
    base_name = rng.choice(list(base_names))
    adjective = rng.choice(list(RARITY_ADJECTIVES[rarity]))
    prefix = rng.choice(list(STAT_PREFIXES.get(primary_stat, ("",))))
    if rarity in (ItemRarity.LEGENDARY, ItemRarity.MYTHIC):
        title = rng.choice(list(EPIC_TITLES))
        return " ".join(part for part in (prefix, base_name, title) if part)
    return " ".join(part for part in (adjective, prefix, base_name) if part)


def _check_level(level: int) -> None:
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise FactoryError(f"Item level must be a positive integer, got {level!r}.")


def generate_weapon(
    level: int,
    rng: RNG,
    effects: Sequence[SpecialEffectDef] = (),
    luck: float = 0.0,
) -> Item:
    """Roll a weapon whose damage band scales with level and rarity."""
    _check_level(level)
    rarity = determine_rarity(level, rng, luck)
    weapon_type = rng.choice(list(WEAPON_NAMES))
    multiplier = RARITY_MULTIPLIERS[rarity]
    minimum = math.floor((level * 2 + 5) * multiplier * 0.8)
    maximum = math.floor((level * 3 + 10) * multiplier)
    return Item(
        id=make_instance_id("item", rng),
        name=_item_name(WEAPON_NAMES[weapon_type], rarity, "strength", rng),
        slot=EquipmentSlot.WEAPON,
        rarity=rarity,
        level=level,
        value=math.floor(level * level * multiplier),
        stat_bonuses=generate_stat_bonuses(level, rarity, EquipmentSlot.WEAPON, rng),
        special_effects=roll_special_effects(rarity, effects, rng),
        damage=WeaponDamage(minimum=minimum, maximum=maximum),
        required_level=max(1, level - 5),
    )


def generate_armor(
    level: int,
    slot: EquipmentSlot,
    rng: RNG,
    effects: Sequence[SpecialEffectDef] = (),
    luck: float = 0.0,
) -> Item:
    _check_level(level)
    if slot not in ARMOUR_SLOTS:
        raise FactoryError(f"'{slot.value}' is not an armour slot.")
    rarity = determine_rarity(level, rng, luck)
    stat_bonuses = generate_stat_bonuses(level, rarity, slot, rng)
    special_effects = roll_special_effects(rarity, effects, rng)

    roll = rng.random()
    _, armour_type, type_factor, primary_stat = next(
        entry for entry in ARMOUR_TYPES if roll < entry[0]
    )
    multiplier = RARITY_MULTIPLIERS[rarity]
    armor_value = math.floor(
        (level * 2 + 5) * type_factor * ARMOUR_SLOT_FACTORS[slot] * multiplier
    )
    return Item(
        id=make_instance_id("item", rng),
        name=_item_name(SLOT_NAMES[slot], rarity, primary_stat, rng),
        slot=slot,
        rarity=rarity,
        level=level,
        value=math.floor(level * level * multiplier),
        stat_bonuses=stat_bonuses,
        special_effects=special_effects,
        armor_value=armor_value,
        required_level=max(1, level - 5),
    )


def generate_accessory(
    level: int,
    slot: EquipmentSlot,
    rng: RNG,
    effects: Sequence[SpecialEffectDef] = (),
    luck: float = 0.0,
) -> Item:
    _check_level(level)
    if slot not in ACCESSORY_SLOTS:
        raise FactoryError(f"'{slot.value}' is not an accessory slot.")
    rarity = determine_rarity(level, rng, luck)
    stat_bonuses = generate_stat_bonuses(level, rarity, slot, rng)
    special_effects = roll_special_effects(rarity, effects, rng)
    if slot in (EquipmentSlot.RING_1, EquipmentSlot.RING_2):
        primary_stat = "crit_chance" if rng.chance(0.5) else "crit_damage"
    elif slot is EquipmentSlot.AMULET:
        primary_stat = "magic_find" if rng.chance(0.5) else "vitality"
    else:
        primary_stat = rng.choice(list(BASE_STAT_POOL))
    multiplier = RARITY_MULTIPLIERS[rarity]
    return Item(
        id=make_instance_id("item", rng),
        name=_item_name(SLOT_NAMES[slot], rarity, primary_stat, rng),
        slot=slot,
        rarity=rarity,
        level=level,
        value=math.floor(level * level * multiplier * 1.2),
        stat_bonuses=stat_bonuses,
        special_effects=special_effects,
        required_level=max(1, level - 5),
    )


def generate_equipment_set(
    level: int,
    rng: RNG,
    effects: Sequence[SpecialEffectDef] = (),
    luck: float = 0.0,
) -> EquipmentLoadout:
    """One item for every slot."""
    items: List[Item] = [generate_weapon(level, rng, effects, luck)]
    items.extend(generate_armor(level, slot, rng, effects, luck) for slot in ARMOUR_SLOTS)
    items.extend(generate_accessory(level, slot, rng, effects, luck) for slot in ACCESSORY_SLOTS)
    return EquipmentLoadout.of(*items)

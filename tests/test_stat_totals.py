from brawl.domain.entities import EquipmentLoadout, EquipmentSlot, Item, Stats
from brawl.domain.stat_totals import (
    calculate_total_stats,
    dodge_chance,
    fighter_max_energy,
    fighter_max_hp,
    fighter_total_stats,
)
from tests.helpers.fighters import classes_repo, make_fighter, progression_service, zero_stats


def _item(item_id: str, slot: EquipmentSlot, **bonuses: float) -> Item:
    return Item(id=item_id, name=item_id.title(), slot=slot, stat_bonuses=bonuses)


def test_bonuses_are_added_per_item() -> None:
    base = zero_stats(strength=10, agility=5)
    loadout = EquipmentLoadout.of(
        _item("helm", EquipmentSlot.HEAD, strength=2, defense=3),
        _item("ring", EquipmentSlot.RING_1, strength=1.5, crit_damage=0.25),
    )

    total = calculate_total_stats(base, loadout)

    assert total.strength == 13.5
    assert total.agility == 5
    assert total.defense == 3
    assert total.crit_damage == 1.75
    assert base.strength == 10


def test_unknown_bonus_keys_are_ignored() -> None:
    base = zero_stats()
    loadout = EquipmentLoadout.of(_item("odd", EquipmentSlot.TRINKET, charisma=99, strength=1))

    assert calculate_total_stats(base, loadout) == zero_stats(strength=1)


def test_empty_loadout_returns_base_stats() -> None:
    base = Stats(strength=4)
    assert calculate_total_stats(base, EquipmentLoadout()) == base


def test_max_hp_includes_vitality_bonus() -> None:
    fighter_class = classes_repo().get("Fighter")
    stats = zero_stats(strength=10, vitality=4)

    assert fighter_max_hp(fighter_class, 2, stats) == 120 + 30 + 50 + 20


def test_max_hp_counts_equipment_primary_stat() -> None:
    fighter = make_fighter(
        "knight",
        stats=zero_stats(strength=10),
        items=[_item("gauntlets", EquipmentSlot.HANDS, strength=4, vitality=2)],
    )

    assert fighter_total_stats(fighter).strength == 14
    assert progression_service().fighter_max_hp(fighter) == 120 + 15 + 70 + 10


def test_energy_grows_with_level() -> None:
    assert fighter_max_energy(1) == 105
    assert fighter_max_energy(10) == 150


def test_dodge_chance_is_clamped() -> None:
    assert dodge_chance(zero_stats(agility=25)) == 0.25
    assert dodge_chance(zero_stats(agility=-5)) == 0.0
    assert dodge_chance(zero_stats(agility=400)) == 1.0

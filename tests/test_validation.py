from dataclasses import replace

import pytest

from brawl.domain.defs import SpecialEffectDef
from brawl.domain.entities import EquipmentLoadout, EquipmentSlot, Item, Stats, WeaponDamage
from brawl.services.errors import FighterValidationError
from brawl.services.fighter_validation import collect_problems, validate_fighter
from tests.helpers.fighters import make_fighter


def test_plain_fighter_is_valid() -> None:
    fighter = make_fighter("ok")

    assert collect_problems(fighter) == []
    validate_fighter(fighter)


def test_problems_are_collected_together() -> None:
    fighter = replace(
        make_fighter("bad"),
        level=0,
        current_hp=-1,
        base_stats=Stats(strength=float("nan"), defense=-2),
    )

    problems = collect_problems(fighter)

    assert "level must be at least 1" in problems
    assert "current_hp must not be negative" in problems
    assert "base_stats.strength must be finite" in problems
    assert "base_stats.defense must not be negative" in problems


def test_weapon_needs_a_sane_damage_range() -> None:
    no_damage = Item(id="stick", name="Stick", slot=EquipmentSlot.WEAPON)
    inverted = Item(id="club", name="Club", slot=EquipmentSlot.WEAPON, damage=WeaponDamage(9, 3))

    assert collect_problems(make_fighter("a", items=[no_damage])) == ["weapon 'stick' has no damage range"]
    assert collect_problems(make_fighter("b", items=[inverted])) == ["weapon 'club' damage range 9-3 is invalid"]


def test_item_in_wrong_slot_is_reported() -> None:
    helm = Item(id="helm", name="Helm", slot=EquipmentSlot.HEAD)
    fighter = replace(make_fighter("c"), equipment=EquipmentLoadout({EquipmentSlot.FEET: helm}))

    assert collect_problems(fighter) == ["item 'helm' belongs in head, not feet"]


def test_effect_chance_outside_range_is_reported() -> None:
    effect = SpecialEffectDef(id="odd", name="Odd", description="", trigger="on_hit", trigger_chance=1.5)
    charm = Item(id="charm", name="Charm", slot=EquipmentSlot.TRINKET, special_effects=(effect,))

    assert collect_problems(make_fighter("d", items=[charm])) == [
        "effect 'odd' on 'charm' has trigger chance outside 0..1"
    ]


def test_validate_raises_with_every_problem() -> None:
    fighter = replace(make_fighter("e"), level=0, energy=-5)

    with pytest.raises(FighterValidationError) as excinfo:
        validate_fighter(fighter)

    assert excinfo.value.fighter_id == "e"
    assert len(excinfo.value.problems) == 2
    assert "level must be at least 1" in str(excinfo.value)


def test_experience_must_stay_below_the_level_threshold() -> None:
    assert collect_problems(make_fighter("a", level=2, experience=199)) == []
    assert collect_problems(make_fighter("b", level=2, experience=200)) == [
        "experience must be below 200 at level 2"
    ]

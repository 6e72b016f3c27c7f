import pytest

from brawl.domain.class_mapping import to_character_class, to_fighter_class
from tests.helpers.fighters import make_fighter, progression_service


@pytest.mark.parametrize(
    ("fighter_class", "character_class"),
    [
        ("Warrior", "Fighter"),
        ("Rogue", "Ranger"),
        ("Ranger", "Ranger"),
        ("Mage", "Mage"),
        ("Cleric", "Mage"),
    ],
)
def test_fighter_classes_map_to_progression_classes(fighter_class: str, character_class: str) -> None:
    assert to_character_class(fighter_class) == character_class


def test_unknown_fighter_class_plays_as_fighter() -> None:
    assert to_character_class("Bard") == "Fighter"


def test_progression_classes_map_back() -> None:
    assert to_fighter_class("Fighter") == "Warrior"
    assert to_fighter_class("Ranger") == "Ranger"
    assert to_fighter_class("Mage") == "Mage"
    assert to_fighter_class("Paladin") == "Warrior"


def test_round_trip_is_stable_for_progression_classes() -> None:
    for character_class in ("Fighter", "Ranger", "Mage"):
        assert to_character_class(to_fighter_class(character_class)) == character_class


def test_cleric_uses_mage_table() -> None:
    service = progression_service()
    cleric = make_fighter("cleric", fighter_class="Cleric")

    assert service.class_for_fighter(cleric).id == "Mage"
    assert [ability.id for ability in service.abilities_for_fighter(cleric)][0] == "magic-missile"

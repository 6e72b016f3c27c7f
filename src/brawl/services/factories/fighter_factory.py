"""Factory for creating fighters from an owner address."""
from __future__ import annotations

from typing import Callable, Sequence

from brawl.core.rng import RNG
from brawl.data.repositories import ClassesRepository
from brawl.domain.class_mapping import to_fighter_class
from brawl.domain.defs import SpecialEffectDef
from brawl.domain.entities import AbilityState, Fighter, Stats
from brawl.domain.stat_totals import calculate_total_stats, fighter_max_energy, fighter_max_hp
from brawl.services.errors import FactoryError

from .equipment_factory import generate_equipment_set
from .id_factory import make_instance_id

STARTING_LEVEL = 1
NAME_LENGTH = 8


def _seeded_roll(rng: RNG) -> int:
    return rng.randint(5, 15)


def generate_base_stats(owner: str) -> Stats:
    """Base stats seeded from the owner address; the same owner always rolls the same block."""
    rng = RNG.from_text(owner)
    return Stats(
        strength=_seeded_roll(rng),
        agility=_seeded_roll(rng),
        intelligence=_seeded_roll(rng),
        vitality=_seeded_roll(rng),
        defense=_seeded_roll(rng),
        crit_chance=_seeded_roll(rng) / 10,
        crit_damage=1.5 + _seeded_roll(rng) / 10,
        block_rate=_seeded_roll(rng) / 10,
        magic_find=_seeded_roll(rng) / 5,
    )


def create_fighter(
    owner: str,
    classes_repo: ClassesRepository,
    rng: RNG,
    *,
    character_class: str | None = None,
    effects: Sequence[SpecialEffectDef] = (),
    fighter_id: str | None = None,
    name: str | None = None,
) -> Fighter:
    """Create a level-1 fighter with a starter equipment set and its class abilities."""
    if not owner:
        raise FactoryError("A fighter needs an owner address.")
    if character_class is None:
        character_class = RNG.from_text(owner).choice([class_def.id for class_def in classes_repo.all()])
    try:
        class_def = classes_repo.get(character_class)
    except KeyError as exc:
        raise FactoryError(f"Class '{character_class}' not found.") from exc

    base_stats = generate_base_stats(owner)
    equipment = generate_equipment_set(STARTING_LEVEL, rng, effects)
    total_stats = calculate_total_stats(base_stats, equipment)
    abilities = tuple(
        AbilityState(ability_id=ability.id, is_unlocked=ability.unlock_level <= STARTING_LEVEL)
        for ability in classes_repo.abilities_for(class_def.id)
    )
    return Fighter(
        id=fighter_id or make_instance_id("fighter", rng),
        owner=owner,
        name=name or owner[:NAME_LENGTH],
        fighter_class=to_fighter_class(class_def.id),
        level=STARTING_LEVEL,
        experience=0,
        base_stats=base_stats,
        equipment=equipment,
        current_hp=fighter_max_hp(class_def, STARTING_LEVEL, total_stats),
        energy=fighter_max_energy(STARTING_LEVEL),
        abilities=abilities,
    )


def make_guest_factory(
    classes_repo: ClassesRepository,
    effects: Sequence[SpecialEffectDef] = (),
) -> Callable[[str], Fighter]:
    """Return a callable building a stand-in fighter for an unknown id.

    The guest is seeded from its id, so the same id always yields the same guest.
    """

    def build_guest(fighter_id: str) -> Fighter:
        return create_fighter(
            fighter_id,
            classes_repo,
            RNG.from_text(fighter_id),
            effects=effects,
            fighter_id=fighter_id,
            name=f"Guest {fighter_id[-4:]}",
        )

    return build_guest

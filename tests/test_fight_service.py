from __future__ import annotations

import threading
from dataclasses import replace

import pytest

from brawl.core.rng import RNG
from brawl.domain.entities import Stats
from brawl.services.errors import FighterNotFoundError, FighterValidationError, OwnershipError
from brawl.services.factories import make_guest_factory
from brawl.services.fight_service import FightService
from brawl.services.stores import InMemoryFighterStore, InMemoryFightLogStore
from tests.helpers.fighters import battle_service, classes_repo, make_fighter, progression_service, zero_stats


def _service(*fighters, guests: bool = False) -> tuple[FightService, InMemoryFighterStore, InMemoryFightLogStore]:
    fighter_store = InMemoryFighterStore(list(fighters))
    log_store = InMemoryFightLogStore()
    service = FightService(
        battle_service(),
        progression_service(),
        fighter_store,
        log_store,
        guest_factory=make_guest_factory(classes_repo()) if guests else None,
    )
    return service, fighter_store, log_store


def test_fight_applies_rewards_and_restores_fighters() -> None:
    service, fighters, logs = _service(
        make_fighter("x", owner="alice", stats=zero_stats(strength=10), current_hp=20),
        make_fighter("y", owner="bob", current_hp=1),
    )

    record = service.run_fight("x", "y", RNG(1))

    winner = fighters.get("x")
    loser = fighters.get("y")
    assert record.winner_id == "x"
    assert record.decided_by == "knockout"
    assert (winner.wins, winner.losses, winner.experience) == (1, 0, 60)
    assert (loser.wins, loser.losses, loser.experience) == (0, 1, 25)
    assert winner.current_hp == progression_service().fighter_max_hp(winner)
    assert loser.current_hp == progression_service().fighter_max_hp(loser)
    assert loser.energy == progression_service().fighter_max_energy(loser)
    assert logs.get(record.id) == record
    assert record.id.startswith("fight-")


def test_fight_applies_level_up() -> None:
    service, fighters, _ = _service(
        make_fighter("x", experience=90, stats=zero_stats(strength=10)),
        make_fighter("y", current_hp=1),
    )

    service.run_fight("x", "y", RNG(1))

    winner = fighters.get("x")
    assert (winner.level, winner.experience, winner.unallocated_stat_points) == (2, 50, 3)
    assert winner.base_stats.strength == 11
    assert "power-slash" in winner.unlocked_ability_ids


def test_fight_keeps_fractional_base_stats() -> None:
    service, fighters, _ = _service(
        make_fighter("x", stats=zero_stats(strength=10)),
        make_fighter("y", stats=zero_stats(strength=7.5, intelligence=2.5), current_hp=1),
    )

    service.run_fight("x", "y", RNG(1))

    loser = fighters.get("y")
    assert loser.level == 1
    assert loser.base_stats.strength == 7.5
    assert loser.base_stats.intelligence == 2.5


def test_experience_past_the_threshold_is_rejected() -> None:
    service, fighters, _ = _service(make_fighter("x", level=2, experience=200), make_fighter("y"))

    with pytest.raises(FighterValidationError) as excinfo:
        service.run_fight("x", "y", RNG(1))

    assert "experience must be below 200 at level 2" in excinfo.value.problems
    assert fighters.get("x").experience == 200


def test_fight_log_lists_for_each_participant() -> None:
    service, _, logs = _service(
        make_fighter("x", stats=zero_stats(strength=10)),
        make_fighter("y", current_hp=1),
        make_fighter("z", current_hp=1),
    )

    first = service.run_fight("x", "y", RNG(1))
    second = service.run_fight("x", "z", RNG(2))

    assert {record.id for record in logs.list_for_fighter("x")} == {first.id, second.id}
    assert [record.id for record in logs.list_for_fighter("z")] == [second.id]


def test_unknown_fighter_without_guests_raises() -> None:
    service, _, _ = _service(make_fighter("x"))

    with pytest.raises(FighterNotFoundError):
        service.run_fight("x", "ghost", RNG(1))


def test_unknown_fighter_is_replaced_by_guest() -> None:
    service, fighters, _ = _service(make_fighter("x", stats=zero_stats(strength=10)), guests=True)

    record = service.run_fight("x", "guest-0000abcd", RNG(1))

    guest = fighters.get("guest-0000abcd")
    assert guest.name == "Guest abcd"
    assert guest.wins + guest.losses == 1
    assert record.fighter_b_id == "guest-0000abcd"


def test_fighter_cannot_fight_itself() -> None:
    service, _, _ = _service(make_fighter("x"))

    with pytest.raises(ValueError):
        service.run_fight("x", "x", RNG(1))


def test_owner_must_own_fighter() -> None:
    service, fighters, logs = _service(make_fighter("x", owner="alice"), make_fighter("y", owner="bob"))

    with pytest.raises(OwnershipError):
        service.run_fight_for_owner("bob", "x", "y", RNG(1))

    assert fighters.get("x").wins + fighters.get("x").losses == 0
    assert logs.list_for_fighter("x") == []


def test_invalid_fighter_is_rejected_before_fighting() -> None:
    broken = replace(make_fighter("x"), base_stats=Stats(strength=-4))
    service, fighters, _ = _service(broken, make_fighter("y"))

    with pytest.raises(FighterValidationError) as excinfo:
        service.run_fight("x", "y", RNG(1))

    assert excinfo.value.fighter_id == "x"
    assert fighters.get("y").losses == 0


def test_concurrent_fights_do_not_lose_updates() -> None:
    service, fighters, logs = _service(
        make_fighter("hub", stats=zero_stats(strength=10)),
        *[make_fighter(f"rival-{index}", current_hp=1) for index in range(8)],
    )
    errors: list[Exception] = []

    def fight(index: int) -> None:
        try:
            service.run_fight("hub", f"rival-{index}", RNG(index))
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=fight, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    hub = fighters.get("hub")
    assert hub.wins + hub.losses == 8
    assert len(logs.list_for_fighter("hub")) == 8

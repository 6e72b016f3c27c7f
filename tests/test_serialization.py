import json

import pytest

from brawl.core.rng import RNG
from brawl.data.repositories import EffectsRepository
from brawl.domain.battle_models import FightRecord
from brawl.services.errors import FighterNotFoundError, PersistenceError, SaveLoadError, StorageError
from brawl.services.factories import create_fighter
from brawl.services.serialization import (
    FIGHTER_VERSION,
    deserialize_fight_record,
    deserialize_fighter,
    serialize_fight_record,
    serialize_fighter,
    step_from_dict,
)
from brawl.services.stores import JsonFighterStore, JsonFightLogStore
from tests.helpers.fighters import battle_service, classes_repo, make_fighter, zero_stats


def _fighter(owner: str = "kaspa:qrsaved", fighter_id: str = "fighter-1"):
    return create_fighter(
        owner,
        classes_repo(),
        RNG(21),
        effects=EffectsRepository().all(),
        fighter_id=fighter_id,
    )


def _record() -> FightRecord:
    result = battle_service().simulate_fight(
        make_fighter("x", experience=90, stats=zero_stats(strength=10)),
        make_fighter("y", current_hp=1),
        RNG(4),
    )
    return FightRecord(
        id="fight-0000beef",
        fighter_a_id="x",
        fighter_b_id="y",
        winner_id=result.winner_id,
        loser_id=result.loser_id,
        decided_by=result.decided_by,
        turns=result.turns,
        steps=tuple(result.steps),
        created_at="2026-01-01T00:00:00+00:00",
    )


def test_fighter_survives_json_round_trip() -> None:
    fighter = _fighter()
    payload = json.loads(json.dumps(serialize_fighter(fighter)))

    assert payload["version"] == FIGHTER_VERSION
    assert deserialize_fighter(payload) == fighter


def test_fighter_payload_has_only_a_win_loss_record() -> None:
    fighter = _fighter()
    payload = serialize_fighter(fighter)

    assert "draws" not in payload["fighter"]
    payload["fighter"]["draws"] = 0
    assert deserialize_fighter(payload) == fighter


def test_fighter_payload_rejects_bad_data() -> None:
    payload = serialize_fighter(_fighter())

    with pytest.raises(SaveLoadError):
        deserialize_fighter({**payload, "version": 99})
    with pytest.raises(SaveLoadError):
        deserialize_fighter([])  # type: ignore[arg-type]

    bad_class = json.loads(json.dumps(payload))
    bad_class["fighter"]["fighter_class"] = "Bard"
    with pytest.raises(SaveLoadError):
        deserialize_fighter(bad_class)

    bad_stats = json.loads(json.dumps(payload))
    bad_stats["fighter"]["base_stats"]["luck"] = 3
    with pytest.raises(SaveLoadError):
        deserialize_fighter(bad_stats)


def test_fight_record_survives_json_round_trip() -> None:
    record = _record()
    payload = json.loads(json.dumps(serialize_fight_record(record)))

    assert deserialize_fight_record(payload) == record
    assert payload["fight"]["steps"][-1]["type"] == "levelup"


def test_fight_record_rejects_unknown_outcome() -> None:
    payload = serialize_fight_record(_record())
    payload["fight"]["decided_by"] = "forfeit"

    with pytest.raises(SaveLoadError):
        deserialize_fight_record(payload)


def test_step_from_dict_rejects_unknown_type() -> None:
    with pytest.raises(SaveLoadError):
        step_from_dict({"type": "taunt", "attacker": "a", "defender": "b", "text": ""})


def test_json_fighter_store(tmp_path) -> None:
    store = JsonFighterStore(tmp_path / "fighters")
    alice = _fighter("kaspa:alice", "fighter/alice")
    bob = _fighter("kaspa:bob", "fighter-bob")

    assert store.list_ids() == []
    store.save(alice)
    store.save(bob)

    assert store.exists("fighter/alice")
    assert (tmp_path / "fighters" / "fighter%2Falice.json").exists()
    assert store.get("fighter/alice") == alice
    assert store.list_ids() == ["fighter-bob", "fighter/alice"]
    assert store.find_by_owner("kaspa:bob") == bob
    assert store.find_by_owner("kaspa:nobody") is None
    with pytest.raises(FighterNotFoundError):
        store.get("missing")


def test_json_fighter_store_reports_corrupt_files(tmp_path) -> None:
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFighterStore(tmp_path).get("broken")


def test_json_fighter_store_keeps_similar_ids_apart(tmp_path) -> None:
    store = JsonFighterStore(tmp_path)
    slashed = _fighter("kaspa:alice", "fighter/alice")
    underscored = _fighter("kaspa:carol", "fighter_alice")

    store.save(slashed)
    store.save(underscored)

    assert store.get("fighter/alice").owner == "kaspa:alice"
    assert store.get("fighter_alice").owner == "kaspa:carol"
    assert store.list_ids() == ["fighter/alice", "fighter_alice"]


def test_json_fighter_store_wraps_unsupported_versions(tmp_path) -> None:
    (tmp_path / "x.json").write_text(json.dumps({"version": 99}), encoding="utf-8")
    store = JsonFighterStore(tmp_path)

    with pytest.raises(PersistenceError):
        store.get("x")
    with pytest.raises(StorageError):
        store.list_ids()


def test_json_fight_log_store_wraps_unsupported_versions(tmp_path) -> None:
    (tmp_path / "fight-old.json").write_text(json.dumps({"version": 99}), encoding="utf-8")
    store = JsonFightLogStore(tmp_path)

    with pytest.raises(StorageError):
        store.get("fight-old")
    with pytest.raises(StorageError):
        store.list_for_fighter("x")


def test_json_fight_log_store(tmp_path) -> None:
    store = JsonFightLogStore(tmp_path / "fights")
    record = _record()

    assert store.save(record) == record.id
    assert store.get(record.id) == record
    assert store.list_for_fighter("y") == [record]
    assert store.list_for_fighter("z") == []
    with pytest.raises(StorageError):
        store.get("fight-missing")

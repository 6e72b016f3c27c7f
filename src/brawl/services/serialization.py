"""Versioned JSON payloads for fighters and fight logs."""
from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping

from brawl.domain.battle_models import (
    STEP_TYPES,
    FightRecord,
    FightStep,
    HpSnapshot,
    ProgressionNote,
    SpecialEffectNote,
)
from brawl.domain.defs import SpecialEffectDef
from brawl.domain.entities import (
    STAT_NAMES,
    AbilityState,
    EquipmentLoadout,
    EquipmentSlot,
    Fighter,
    Item,
    ItemRarity,
    Stats,
    WeaponDamage,
)
from brawl.services.errors import SaveLoadError

Payload = Dict[str, Any]

FIGHTER_VERSION = 1
FIGHT_LOG_VERSION = 1
_VALID_FIGHTER_CLASSES = ("Warrior", "Rogue", "Mage", "Ranger", "Cleric")
_VALID_DECIDED_BY = ("knockout", "hp_lead", "coin_flip")
_VALID_TRIGGERS = ("passive", "on_hit", "on_take_damage", "on_critical", "on_kill")
_VALID_KINDS = ("life_steal", "bonus_damage", "none")


# -----------------------
# Fighters
# -----------------------
def serialize_fighter(fighter: Fighter) -> Payload:
    return {
        "version": FIGHTER_VERSION,
        "fighter": {
            "id": fighter.id,
            "owner": fighter.owner,
            "name": fighter.name,
            "fighter_class": fighter.fighter_class,
            "level": fighter.level,
            "experience": fighter.experience,
            "base_stats": fighter.base_stats.to_dict(),
            "equipment": {slot.value: _serialize_item(item) for slot, item in fighter.equipment.items()},
            "current_hp": fighter.current_hp,
            "energy": fighter.energy,
            "unallocated_stat_points": fighter.unallocated_stat_points,
            "abilities": [
                {"ability_id": state.ability_id, "is_unlocked": state.is_unlocked}
                for state in fighter.abilities
            ],
            "wins": fighter.wins,
            "losses": fighter.losses,
        },
    }


def _serialize_item(item: Item) -> Payload:
    payload: Payload = {
        "id": item.id,
        "name": item.name,
        "slot": item.slot.value,
        "rarity": item.rarity.value,
        "level": item.level,
        "value": item.value,
        "stat_bonuses": dict(item.stat_bonuses),
        "special_effects": [_serialize_effect(effect) for effect in item.special_effects],
        "armor_value": item.armor_value,
        "required_level": item.required_level,
    }
    if item.damage is not None:
        payload["damage"] = {"min": item.damage.minimum, "max": item.damage.maximum}
    return payload


def _serialize_effect(effect: SpecialEffectDef) -> Payload:
    return {
        "id": effect.id,
        "name": effect.name,
        "description": effect.description,
        "trigger": effect.trigger,
        "kind": effect.kind,
        "trigger_chance": effect.trigger_chance,
        "strength": effect.strength,
    }


def deserialize_fighter(payload: Mapping[str, Any]) -> Fighter:
    """Rebuild a fighter from :func:`serialize_fighter` output; raise SaveLoadError on bad data."""
    if not isinstance(payload, Mapping):
        raise SaveLoadError("Fighter data must be a JSON object.")
    if payload.get("version") != FIGHTER_VERSION:
        raise SaveLoadError(f"Unsupported fighter payload version: {payload.get('version')!r}")
    data = _require_dict(payload.get("fighter"), "fighter")

    fighter_class = data.get("fighter_class")
    if fighter_class not in _VALID_FIGHTER_CLASSES:
        raise SaveLoadError(f"fighter.fighter_class has invalid value: {fighter_class!r}")
    level = _require_int(data.get("level"), "fighter.level")
    if level < 1:
        raise SaveLoadError("fighter.level must be at least 1.")

    equipment_raw = _require_dict(data.get("equipment", {}), "fighter.equipment")
    items: List[Item] = []
    for slot_name, item_payload in equipment_raw.items():
        item = _coerce_item(item_payload, f"fighter.equipment.{slot_name}")
        if item.slot.value != slot_name:
            raise SaveLoadError(f"fighter.equipment.{slot_name} holds a {item.slot.value} item.")
        items.append(item)

    abilities_raw = data.get("abilities", [])
    if not isinstance(abilities_raw, list):
        raise SaveLoadError("fighter.abilities must be a list.")
    abilities = []
    for index, entry in enumerate(abilities_raw):
        entry = _require_dict(entry, f"fighter.abilities[{index}]")
        unlocked = entry.get("is_unlocked")
        if not isinstance(unlocked, bool):
            raise SaveLoadError(f"fighter.abilities[{index}].is_unlocked must be a boolean.")
        abilities.append(
            AbilityState(
                ability_id=_require_str(entry.get("ability_id"), f"fighter.abilities[{index}].ability_id"),
                is_unlocked=unlocked,
            )
        )

    return Fighter(
        id=_require_str(data.get("id"), "fighter.id"),
        owner=_require_str(data.get("owner"), "fighter.owner"),
        name=_require_str(data.get("name"), "fighter.name"),
        fighter_class=fighter_class,
        level=level,
        experience=_require_non_negative_int(data.get("experience"), "fighter.experience"),
        base_stats=_coerce_stats(data.get("base_stats"), "fighter.base_stats"),
        equipment=EquipmentLoadout.of(*items),
        current_hp=_require_non_negative_int(data.get("current_hp"), "fighter.current_hp"),
        energy=_require_non_negative_int(data.get("energy"), "fighter.energy"),
        unallocated_stat_points=_require_non_negative_int(
            data.get("unallocated_stat_points", 0), "fighter.unallocated_stat_points"
        ),
        abilities=tuple(abilities),
        wins=_require_non_negative_int(data.get("wins", 0), "fighter.wins"),
        losses=_require_non_negative_int(data.get("losses", 0), "fighter.losses"),
    )


def _coerce_stats(value: Any, context: str) -> Stats:
    mapping = _require_dict(value, context)
    unknown = set(mapping) - set(STAT_NAMES)
    if unknown:
        raise SaveLoadError(f"{context} has unknown keys: {sorted(unknown)}")
    values = {name: _require_number(entry, f"{context}.{name}") for name, entry in mapping.items()}
    return Stats(**values)


def _coerce_item(value: Any, context: str) -> Item:
    data = _require_dict(value, context)
    try:
        slot = EquipmentSlot(data.get("slot"))
        rarity = ItemRarity(data.get("rarity", ItemRarity.COMMON.value))
    except ValueError as exc:
        raise SaveLoadError(f"{context} has an invalid slot or rarity: {exc}") from exc

    bonuses_raw = _require_dict(data.get("stat_bonuses", {}), f"{context}.stat_bonuses")
    stat_bonuses = {
        stat: _require_number(bonus, f"{context}.stat_bonuses.{stat}")
        for stat, bonus in bonuses_raw.items()
    }
    effects_raw = data.get("special_effects", [])
    if not isinstance(effects_raw, list):
        raise SaveLoadError(f"{context}.special_effects must be a list.")

    damage = None
    if data.get("damage") is not None:
        damage_raw = _require_dict(data["damage"], f"{context}.damage")
        damage = WeaponDamage(
            minimum=_require_int(damage_raw.get("min"), f"{context}.damage.min"),
            maximum=_require_int(damage_raw.get("max"), f"{context}.damage.max"),
        )

    return Item(
        id=_require_str(data.get("id"), f"{context}.id"),
        name=_require_str(data.get("name"), f"{context}.name"),
        slot=slot,
        rarity=rarity,
        level=_require_int(data.get("level", 1), f"{context}.level"),
        value=_require_int(data.get("value", 0), f"{context}.value"),
        stat_bonuses=stat_bonuses,
        special_effects=tuple(
            _coerce_effect(entry, f"{context}.special_effects[{index}]")
            for index, entry in enumerate(effects_raw)
        ),
        damage=damage,
        armor_value=_require_int(data.get("armor_value", 0), f"{context}.armor_value"),
        required_level=_require_int(data.get("required_level", 1), f"{context}.required_level"),
    )


def _coerce_effect(value: Any, context: str) -> SpecialEffectDef:
    data = _require_dict(value, context)
    trigger = data.get("trigger")
    if trigger not in _VALID_TRIGGERS:
        raise SaveLoadError(f"{context}.trigger has invalid value: {trigger!r}")
    kind = data.get("kind", "none")
    if kind not in _VALID_KINDS:
        raise SaveLoadError(f"{context}.kind has invalid value: {kind!r}")
    chance = _require_number(data.get("trigger_chance"), f"{context}.trigger_chance")
    if not 0.0 <= chance <= 1.0:
        raise SaveLoadError(f"{context}.trigger_chance must be within 0..1.")
    return SpecialEffectDef(
        id=_require_str(data.get("id"), f"{context}.id"),
        name=_require_str(data.get("name"), f"{context}.name"),
        description=_require_str(data.get("description", ""), f"{context}.description"),
        trigger=trigger,
        kind=kind,
        trigger_chance=chance,
        strength=_require_number(data.get("strength", 0.0), f"{context}.strength"),
    )


# -----------------------
# Fight logs
# -----------------------
def serialize_fight_record(record: FightRecord) -> Payload:
    return {
        "version": FIGHT_LOG_VERSION,
        "fight": {
            "id": record.id,
            "fighter_a_id": record.fighter_a_id,
            "fighter_b_id": record.fighter_b_id,
            "winner_id": record.winner_id,
            "loser_id": record.loser_id,
            "decided_by": record.decided_by,
            "turns": record.turns,
            "created_at": record.created_at,
            "steps": [step.to_dict() for step in record.steps],
        },
    }


def deserialize_fight_record(payload: Mapping[str, Any]) -> FightRecord:
    if not isinstance(payload, Mapping):
        raise SaveLoadError("Fight log data must be a JSON object.")
    if payload.get("version") != FIGHT_LOG_VERSION:
        raise SaveLoadError(f"Unsupported fight log version: {payload.get('version')!r}")
    data = _require_dict(payload.get("fight"), "fight")
    decided_by = data.get("decided_by")
    if decided_by not in _VALID_DECIDED_BY:
        raise SaveLoadError(f"fight.decided_by has invalid value: {decided_by!r}")
    steps_raw = data.get("steps")
    if not isinstance(steps_raw, list):
        raise SaveLoadError("fight.steps must be a list.")
    return FightRecord(
        id=_require_str(data.get("id"), "fight.id"),
        fighter_a_id=_require_str(data.get("fighter_a_id"), "fight.fighter_a_id"),
        fighter_b_id=_require_str(data.get("fighter_b_id"), "fight.fighter_b_id"),
        winner_id=_require_str(data.get("winner_id"), "fight.winner_id"),
        loser_id=_require_str(data.get("loser_id"), "fight.loser_id"),
        decided_by=decided_by,
        turns=_require_non_negative_int(data.get("turns"), "fight.turns"),
        steps=tuple(step_from_dict(entry, f"fight.steps[{index}]") for index, entry in enumerate(steps_raw)),
        created_at=_require_str(data.get("created_at"), "fight.created_at"),
    )


def step_from_dict(value: Any, context: str = "step") -> FightStep:
    """Inverse of :meth:`FightStep.to_dict`."""
    data = _require_dict(value, context)
    step_type = data.get("type")
    if step_type not in STEP_TYPES:
        raise SaveLoadError(f"{context}.type has invalid value: {step_type!r}")

    remaining_hp = None
    if "remaining_hp" in data:
        hp = _require_dict(data["remaining_hp"], f"{context}.remaining_hp")
        remaining_hp = HpSnapshot(
            attacker_hp=_require_int(hp.get("attacker_hp"), f"{context}.remaining_hp.attacker_hp"),
            defender_hp=_require_int(hp.get("defender_hp"), f"{context}.remaining_hp.defender_hp"),
        )
    special_effect = None
    if "special_effect" in data:
        effect = _require_dict(data["special_effect"], f"{context}.special_effect")
        special_effect = SpecialEffectNote(
            name=_require_str(effect.get("name"), f"{context}.special_effect.name"),
            description=_require_str(effect.get("description"), f"{context}.special_effect.description"),
        )
    progression = None
    if "progression" in data:
        note = _require_dict(data["progression"], f"{context}.progression")
        progression = ProgressionNote(
            xp_gained=note.get("xp_gained"),
            leveled_up=bool(note.get("leveled_up", False)),
            new_level=note.get("new_level"),
            unlocked_ability_ids=tuple(note.get("unlocked_ability_ids", ())),
        )

    return FightStep(
        type=step_type,
        attacker=_require_str(data.get("attacker"), f"{context}.attacker"),
        defender=_require_str(data.get("defender"), f"{context}.defender"),
        text=_require_str(data.get("text"), f"{context}.text"),
        damage=data.get("damage"),
        skill=data.get("skill"),
        remaining_hp=remaining_hp,
        special_effect=special_effect,
        progression=progression,
        winner=data.get("winner"),
        loser=data.get("loser"),
        decided_by=data.get("decided_by"),
    )


# -----------------------
# Coercion helpers
# -----------------------
def _require_dict(value: Any, context: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SaveLoadError(f"{context} must be an object.")
    return value


def _require_str(value: Any, context: str) -> str:
    if not isinstance(value, str):
        raise SaveLoadError(f"{context} must be a string.")
    return value


def _require_int(value: Any, context: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SaveLoadError(f"{context} must be an integer.")
    return value


def _require_non_negative_int(value: Any, context: str) -> int:
    value_int = _require_int(value, context)
    if value_int < 0:
        raise SaveLoadError(f"{context} must be a non-negative integer.")
    return value_int


def _require_number(value: Any, context: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise SaveLoadError(f"{context} must be a finite number.")
    return value

"""Command-line entry point: run fights between owner addresses."""
from __future__ import annotations

import argparse
import secrets
from pathlib import Path
from typing import Sequence

from loguru import logger

from brawl.core.logger import setup_logger
from brawl.core.rng import RNG
from brawl.data.errors import DataError
from brawl.data.repositories import (
    AbilitiesRepository,
    ClassesRepository,
    EffectsRepository,
    SkillsRepository,
)
from brawl.domain import sprites
from brawl.domain.battle_models import BattleRules
from brawl.domain.class_mapping import FIGHTER_TO_CHARACTER_CLASS
from brawl.domain.defs import SpecialEffectDef
from brawl.domain.entities import Fighter
from brawl.services import (
    BattleService,
    FightService,
    FighterValidationError,
    PersistenceError,
    ProgressionService,
    SaveLoadError,
)
from brawl.services.factories import create_fighter, make_guest_factory
from brawl.services.stores import FighterStore, JsonFighterStore, JsonFightLogStore

from .config import get_save_dir, load_config, normalize_log_level
from .render import format_fighter, render_bullet_lines, render_fight, render_heading

_MAX_RANDOM_SEED = 2**31 - 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="brawl", description="Turn-based fighter duels.")
    subcommands = parser.add_subparsers(dest="command", required=True)

    fight = subcommands.add_parser("fight", help="Fight between the fighters of two owner addresses.")
    fight.add_argument("owner_a")
    fight.add_argument("owner_b")
    fight.add_argument("--seed", type=int, default=None, help="RNG seed (random when omitted).")
    fight.add_argument("--turn-cap", type=int, default=None, help="Override the configured turn cap.")
    fight.add_argument("--save-dir", type=Path, default=None, help="Directory for fighters and fight logs.")
    fight.add_argument("--log-level", default=None, help="Console log level.")

    sprite = subcommands.add_parser("sprite", help="Print the sprite for a class at a level.")
    sprite.add_argument("character_class")
    sprite.add_argument("level", type=int)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI; return the process exit code."""
    args = build_parser().parse_args(argv)
    config = load_config()
    log_level = getattr(args, "log_level", None) or config["log_level"]
    setup_logger(level=normalize_log_level(log_level))
    if args.command == "sprite":
        return _run_sprite(args.character_class, args.level)
    turn_cap = args.turn_cap if args.turn_cap is not None else int(config["turn_cap"])
    return _run_fight(args.owner_a, args.owner_b, args.seed, turn_cap, args.save_dir or get_save_dir())


def _run_sprite(character_class: str, level: int) -> int:
    if level < 1:
        print("Level must be at least 1.")
        return 2
    classes_repo = ClassesRepository()
    class_id = FIGHTER_TO_CHARACTER_CLASS.get(character_class, character_class)
    if not classes_repo.has(class_id):
        print(f"Unknown class '{character_class}'.")
        return 2
    class_def = classes_repo.get(class_id)
    tier = sprites.level_tier(level)
    print(sprites.sprite_filename(class_def.sprite_name, level))
    render_bullet_lines(
        [
            f"tier: {int(tier)} ({sprites.tier_name(tier)})",
            f"path: {sprites.sprite_path(class_def.asset_dir, class_def.sprite_name, level)}",
        ]
    )
    return 0


def _run_fight(owner_a: str, owner_b: str, seed: int | None, turn_cap: int, save_dir: Path) -> int:
    if owner_a == owner_b:
        print("A fighter cannot fight itself; pick two different owners.")
        return 2
    if turn_cap < 1:
        print("Turn cap must be at least 1.")
        return 2
    if seed is None:
        seed = secrets.randbelow(_MAX_RANDOM_SEED)
    rng = RNG(seed)
    logger.info("Fight seed {}", seed)

    try:
        classes_repo = ClassesRepository(AbilitiesRepository())
        effects = EffectsRepository().all()
        progression_service = ProgressionService(classes_repo)
        battle_service = BattleService(
            SkillsRepository(), progression_service, BattleRules(turn_cap=turn_cap)
        )
        fighter_store = JsonFighterStore(save_dir / "fighters")
        fight_service = FightService(
            battle_service,
            progression_service,
            fighter_store,
            JsonFightLogStore(save_dir / "fights"),
            guest_factory=make_guest_factory(classes_repo, effects),
        )
        fighters = [
            _fighter_for_owner(owner, fighter_store, classes_repo, effects, rng)
            for owner in (owner_a, owner_b)
        ]
        record = fight_service.run_fight(fighters[0].id, fighters[1].id, rng)
        render_fight(record)
        render_heading("Fighters")
        render_bullet_lines(format_fighter(fighter_store.get(fighter.id)) for fighter in fighters)
    except (DataError, PersistenceError, FighterValidationError, SaveLoadError) as exc:
        logger.error("Fight failed: {}", exc)
        print(f"Error: {exc}")
        return 1
    print(f"\nSeed: {seed}")
    return 0


def _fighter_for_owner(
    owner: str,
    store: FighterStore,
    classes_repo: ClassesRepository,
    effects: Sequence[SpecialEffectDef],
    rng: RNG,
) -> Fighter:
    fighter = store.find_by_owner(owner)
    if fighter is None:
        fighter = create_fighter(owner, classes_repo, rng, effects=effects)
        store.save(fighter)
        logger.info("Created fighter {} for {}", fighter.id, owner)
    return fighter

"""Fight orchestration: load, simulate, progress and persist."""
from __future__ import annotations

import threading
from contextlib import ExitStack, contextmanager
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Iterator

from loguru import logger

from brawl.core.rng import RNG
from brawl.domain.battle_models import FightRecord, FightResult
from brawl.domain.entities import Fighter
from brawl.services.battle_service import BattleService
from brawl.services.errors import FighterNotFoundError, OwnershipError
from brawl.services.factories import make_instance_id
from brawl.services.fighter_validation import validate_fighter
from brawl.services.progression_service import ProgressionService
from brawl.services.stores import FighterStore, FightLogStore

GuestFactory = Callable[[str], Fighter]


class FightService:
    """Runs a fight between two stored fighters and writes the results back.

    Each fighter's read-modify-write happens under a per-id lock. Locks for
    both participants are taken in sorted id order so two fights sharing a
    fighter cannot deadlock.
    """

    def __init__(
        self,
        battle_service: BattleService,
        progression_service: ProgressionService,
        fighter_store: FighterStore,
        fight_log_store: FightLogStore,
        guest_factory: GuestFactory | None = None,
    ) -> None:
        self._battle = battle_service
        self._progression = progression_service
        self._fighters = fighter_store
        self._logs = fight_log_store
        self._guest_factory = guest_factory
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, fighter_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(fighter_id, threading.Lock())

    @contextmanager
    def _locked(self, *fighter_ids: str) -> Iterator[None]:
        with ExitStack() as stack:
            for fighter_id in sorted(set(fighter_ids)):
                stack.enter_context(self._lock_for(fighter_id))
            yield

    def _load(self, fighter_id: str) -> Fighter:
        try:
            return self._fighters.get(fighter_id)
        except FighterNotFoundError:
            if self._guest_factory is None:
                raise
            logger.info("Generating guest fighter for unknown id {}", fighter_id)
            return self._guest_factory(fighter_id)

    def run_fight_for_owner(
        self, owner: str, fighter_id_a: str, fighter_id_b: str, rng: RNG
    ) -> FightRecord:
        """Like :meth:`run_fight`, but *owner* must own fighter A."""
        fighter = self._fighters.get(fighter_id_a)
        if fighter.owner != owner:
            logger.warning("{} tried to fight with {} owned by {}", owner, fighter_id_a, fighter.owner)
            raise OwnershipError(owner, fighter_id_a)
        return self.run_fight(fighter_id_a, fighter_id_b, rng)

    def run_fight(self, fighter_id_a: str, fighter_id_b: str, rng: RNG) -> FightRecord:
        if fighter_id_a == fighter_id_b:
            raise ValueError(f"Fighter '{fighter_id_a}' cannot fight itself.")

        with self._locked(fighter_id_a, fighter_id_b):
            fighter_a = self._load(fighter_id_a)
            fighter_b = self._load(fighter_id_b)
            validate_fighter(fighter_a)
            validate_fighter(fighter_b)

            result = self._battle.simulate_fight(fighter_a, fighter_b, rng)
            for fighter in (fighter_a, fighter_b):
                self._fighters.save(self._apply_result(fighter, result))

            record = FightRecord(
                id=make_instance_id("fight", rng),
                fighter_a_id=fighter_a.id,
                fighter_b_id=fighter_b.id,
                winner_id=result.winner_id,
                loser_id=result.loser_id,
                decided_by=result.decided_by,
                turns=result.turns,
                steps=tuple(result.steps),
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self._logs.save(record)
        return record

    def _apply_result(self, fighter: Fighter, result: FightResult) -> Fighter:
        """Grant XP, update the record and restore HP/energy to full."""
        reward = result.rewards[fighter.id]
        character = self._progression.character_from_fighter(fighter)
        self._progression.gain_xp(character, reward.xp_gained)
        if character.level != reward.new_level:
            logger.warning(
                "Level preview for {} said {}, progression reached {}",
                fighter.id,
                reward.new_level,
                character.level,
            )
        updated = self._progression.apply_character_to_fighter(fighter, character)
        won = fighter.id == result.winner_id
        updated = replace(
            updated,
            wins=fighter.wins + (1 if won else 0),
            losses=fighter.losses + (0 if won else 1),
        )
        return replace(
            updated,
            current_hp=self._progression.fighter_max_hp(updated),
            energy=self._progression.fighter_max_energy(updated),
        )

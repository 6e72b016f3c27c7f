"""Opponent selection."""
from __future__ import annotations

from loguru import logger

from brawl.core.rng import RNG
from brawl.services.factories import make_instance_id
from brawl.services.stores import FighterStore


def find_opponent(store: FighterStore, fighter_id: str, rng: RNG) -> str:
    """Pick a random stored fighter other than *fighter_id*, or a fresh guest id."""
    candidates = [candidate for candidate in store.list_ids() if candidate != fighter_id]
    if candidates:
        return rng.choice(candidates)
    guest_id = make_instance_id("guest", rng)
    logger.info("No opponents stored for {}; matching against {}", fighter_id, guest_id)
    return guest_id

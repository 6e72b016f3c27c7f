"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from brawl.core.rng import RNG


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Generate a deterministic identifier using the provided RNG."""
    suffix = rng.randint(0, 0xFFFFFFFF)
    return f"{prefix}-{suffix:08x}"

"""Level-tier sprite naming.

Sprite files follow ``{sprite_name}{tier}.png`` where ``sprite_name`` is the
display name from the class table (e.g. ``archer`` for the Ranger class),
not the progression class label.
"""
from __future__ import annotations

from enum import IntEnum


class LevelTier(IntEnum):
    NOVICE = 1
    APPRENTICE = 5
    ADEPT = 10
    EXPERT = 15
    MASTER = 95
    LEGENDARY = 100


_TIER_BREAKPOINTS = (
    (100, LevelTier.LEGENDARY),
    (95, LevelTier.MASTER),
    (15, LevelTier.EXPERT),
    (10, LevelTier.ADEPT),
    (5, LevelTier.APPRENTICE),
)


def level_tier(level: int) -> LevelTier:
    for threshold, tier in _TIER_BREAKPOINTS:
        if level >= threshold:
            return tier
    return LevelTier.NOVICE


def tier_name(tier: int) -> str:
    try:
        return LevelTier(tier).name.title()
    except ValueError:
        return "Novice"


def sprite_filename(sprite_name: str, level: int) -> str:
    return f"{sprite_name}{int(level_tier(level))}.png"


def sprite_key(sprite_name: str, level: int) -> str:
    """Key used by the animation layer's texture atlas."""
    return f"fighter-{sprite_name}-{int(level_tier(level))}"


def sprite_path(asset_dir: str, sprite_name: str, level: int) -> str:
    return f"/assets/fighters/{asset_dir}/{sprite_filename(sprite_name, level)}"

"""Equipment special-effect definitions."""
from __future__ import annotations

from dataclasses import dataclass

from brawl.core.types import EffectKind, EffectTrigger


@dataclass(frozen=True, slots=True)
class SpecialEffectDef:
    """An effect carried by an item (e.g. life steal on hit)."""

    id: str
    name: str
    description: str
    trigger: EffectTrigger
    kind: EffectKind = "none"
    trigger_chance: float = 0.1
    strength: float = 0.0

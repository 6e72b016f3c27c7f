"""Shared CLI rendering helpers."""
from __future__ import annotations

from typing import Iterable, List

from brawl.domain.battle_models import FightRecord, FightStep
from brawl.domain.entities import Fighter

_STEP_MARKERS = {
    "attack": "  ",
    "skill": "* ",
    "critical": "!!",
    "dodge": "~ ",
    "block": "# ",
    "special": "+ ",
    "levelup": "^ ",
    "end": "==",
}


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def format_step(step: FightStep) -> str:
    line = f"{_STEP_MARKERS.get(step.type, '  ')} {step.text}"
    if step.remaining_hp is not None and step.type != "end":
        line += f" [{step.remaining_hp.attacker_hp} / {step.remaining_hp.defender_hp} HP]"
    if step.special_effect is not None:
        line += f" ({step.special_effect.name}: {step.special_effect.description})"
    return line


def format_fight(record: FightRecord) -> List[str]:
    return [format_step(step) for step in record.steps]


def render_fight(record: FightRecord) -> None:
    render_heading(f"Fight {record.id}")
    for line in format_fight(record):
        print(line)
    print(f"\nWinner: {record.winner_id} ({record.decided_by}, {record.turns} turns)")


def format_fighter(fighter: Fighter) -> str:
    return (
        f"{fighter.name} [{fighter.fighter_class}] level {fighter.level}, "
        f"{fighter.experience} XP, {fighter.unallocated_stat_points} free points, "
        f"record {fighter.wins}-{fighter.losses}"
    )


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")

from brawl.domain.battle_models import FightRecord, FightStep, HpSnapshot, SpecialEffectNote
from brawl.presentation.cli.render import format_fight, format_fighter, format_step, render_fight
from tests.helpers.fighters import make_fighter


def _attack() -> FightStep:
    return FightStep(
        type="critical",
        attacker="a",
        defender="b",
        text="A landed a CRITICAL hit on B for 30 damage!",
        damage=30,
        remaining_hp=HpSnapshot(attacker_hp=90, defender_hp=10),
        special_effect=SpecialEffectNote(name="Fire Damage", description="A's Fire Damage dealt 6 additional damage!"),
    )


def _end() -> FightStep:
    return FightStep(
        type="end",
        attacker="a",
        defender="b",
        text="A defeated B!",
        remaining_hp=HpSnapshot(attacker_hp=90, defender_hp=0),
        winner="a",
        loser="b",
        decided_by="knockout",
    )


def test_format_step_includes_hp_and_effect() -> None:
    line = format_step(_attack())

    assert line.startswith("!! A landed a CRITICAL hit")
    assert "[90 / 10 HP]" in line
    assert "(Fire Damage: A's Fire Damage dealt 6 additional damage!)" in line


def test_end_step_has_no_hp_suffix() -> None:
    assert format_step(_end()) == "== A defeated B!"


def test_render_fight_prints_every_step(capsys) -> None:
    record = FightRecord(
        id="fight-00000001",
        fighter_a_id="a",
        fighter_b_id="b",
        winner_id="a",
        loser_id="b",
        decided_by="knockout",
        turns=1,
        steps=(_attack(), _end()),
        created_at="2026-01-01T00:00:00+00:00",
    )

    render_fight(record)
    out = capsys.readouterr().out

    assert "=== Fight fight-00000001 ===" in out
    for line in format_fight(record):
        assert line in out
    assert "Winner: a (knockout, 1 turns)" in out


def test_format_fighter_summary() -> None:
    text = format_fighter(make_fighter("rook", level=3, experience=40))

    assert text == "Rook [Warrior] level 3, 40 XP, 0 free points, record 0-0"

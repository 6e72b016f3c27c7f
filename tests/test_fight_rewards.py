from brawl.core.rng import RNG
from tests.helpers.fighters import battle_service, make_fighter, zero_stats


def test_xp_scales_with_opponent_level() -> None:
    result = battle_service().simulate_fight(
        make_fighter("x", level=3, stats=zero_stats(strength=50)),
        make_fighter("y", level=2, current_hp=1),
        RNG(4),
    )

    assert result.winner_id == "x"
    assert result.rewards["x"].xp_gained == 50 + 2 * 10
    assert result.rewards["y"].xp_gained == 20 + 3 * 5
    assert not result.rewards["x"].leveled_up


def test_reward_steps_follow_end_step() -> None:
    result = battle_service().simulate_fight(
        make_fighter("x", stats=zero_stats(strength=10)),
        make_fighter("y", current_hp=1),
        RNG(4),
    )
    end_index = next(index for index, step in enumerate(result.steps) if step.type == "end")
    winner_step, loser_step = result.steps[end_index + 1 : end_index + 3]

    assert winner_step.type == loser_step.type == "special"
    assert winner_step.attacker == "x"
    assert winner_step.progression is not None and winner_step.progression.xp_gained == 60
    assert loser_step.attacker == "y"
    assert loser_step.progression is not None and loser_step.progression.xp_gained == 25
    assert "participating" in loser_step.text


def test_levelup_step_for_winner_crossing_threshold() -> None:
    result = battle_service().simulate_fight(
        make_fighter("x", experience=90, stats=zero_stats(strength=10)),
        make_fighter("y", current_hp=1),
        RNG(4),
    )

    levelups = [step for step in result.steps if step.type == "levelup"]
    assert [step.attacker for step in levelups] == ["x"]
    assert levelups[0].progression is not None
    assert levelups[0].progression.new_level == 2
    assert result.rewards["x"].leveled_up
    assert result.rewards["x"].new_level == 2


def test_levelup_reports_unlocked_abilities() -> None:
    result = battle_service().simulate_fight(
        make_fighter("x", fighter_class="Mage", level=4, experience=390, stats=zero_stats(strength=10)),
        make_fighter("y", current_hp=1),
        RNG(4),
    )

    assert result.rewards["x"].unlocked_ability_ids == ("arcane-shield",)
    levelup = next(step for step in result.steps if step.type == "levelup")
    assert levelup.to_dict()["progression"] == {
        "leveled_up": True,
        "new_level": 5,
        "unlocked_ability_ids": ["arcane-shield"],
    }


def test_step_dicts_omit_absent_fields() -> None:
    result = battle_service().simulate_fight(
        make_fighter("x", stats=zero_stats(strength=10)),
        make_fighter("y", current_hp=1),
        RNG(4),
    )
    end = result.end_step.to_dict()

    assert end["type"] == "end"
    assert end["winner"] == "x"
    assert end["decided_by"] == "knockout"
    assert "damage" not in end
    assert "skill" not in end
    assert "special_effect" not in end

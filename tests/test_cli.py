from brawl.presentation.cli.app import build_parser, main
from brawl.services.stores import JsonFighterStore, JsonFightLogStore


def test_sprite_command_accepts_fighter_classes(capsys) -> None:
    assert main(["sprite", "Rogue", "12"]) == 0
    out = capsys.readouterr().out

    assert out.splitlines()[0] == "archer10.png"
    assert "tier: 10 (Adept)" in out
    assert "path: /assets/fighters/ranged/archer10.png" in out


def test_sprite_command_accepts_progression_classes(capsys) -> None:
    assert main(["sprite", "Fighter", "100"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "fighter100.png"


def test_sprite_command_rejects_bad_input(capsys) -> None:
    assert main(["sprite", "Bard", "3"]) == 2
    assert main(["sprite", "Mage", "0"]) == 2
    out = capsys.readouterr().out
    assert "Unknown class 'Bard'." in out
    assert "Level must be at least 1." in out


def test_fight_command_persists_fighters_and_log(tmp_path, capsys) -> None:
    argv = ["fight", "kaspa:alice", "kaspa:bob", "--seed", "7", "--save-dir", str(tmp_path)]

    assert main(argv) == 0
    out = capsys.readouterr().out

    assert "Winner:" in out
    assert "Seed: 7" in out
    fighters = JsonFighterStore(tmp_path / "fighters")
    alice = fighters.find_by_owner("kaspa:alice")
    bob = fighters.find_by_owner("kaspa:bob")
    assert alice is not None and bob is not None
    assert alice.wins + bob.wins == 1
    assert len(JsonFightLogStore(tmp_path / "fights").list_for_fighter(alice.id)) == 1

    assert main(argv) == 0
    assert len(fighters.list_ids()) == 2
    alice = fighters.find_by_owner("kaspa:alice")
    assert alice is not None and alice.wins + alice.losses == 2


def test_fight_command_rejects_same_owner(tmp_path) -> None:
    assert main(["fight", "kaspa:solo", "kaspa:solo", "--save-dir", str(tmp_path)]) == 2


def test_fight_command_rejects_bad_turn_cap(tmp_path) -> None:
    assert main(["fight", "a", "b", "--turn-cap", "0", "--save-dir", str(tmp_path)]) == 2


def test_fight_command_reports_corrupt_save(tmp_path, capsys) -> None:
    (tmp_path / "fighters").mkdir()
    (tmp_path / "fighters" / "broken.json").write_text("{", encoding="utf-8")

    assert main(["fight", "a", "b", "--seed", "1", "--save-dir", str(tmp_path)]) == 1
    assert "Error:" in capsys.readouterr().out


def test_parser_reads_fight_options() -> None:
    parser = build_parser()
    args = parser.parse_args(["fight", "a", "b", "--turn-cap", "10"])

    assert args.turn_cap == 10
    assert args.seed is None

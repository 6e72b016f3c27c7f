from pathlib import Path

from brawl.data.paths import get_definitions_path, get_package_root


def test_definitions_ship_inside_the_package() -> None:
    definitions = get_definitions_path()
    assert definitions.parent.parent == get_package_root()
    for name in ("classes.json", "abilities.json", "skills.json", "special_effects.json"):
        assert (definitions / name).is_file()


def test_definitions_path_override(tmp_path: Path) -> None:
    assert get_definitions_path(tmp_path) == tmp_path
    assert get_definitions_path(str(tmp_path)) == tmp_path

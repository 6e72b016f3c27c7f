"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

from brawl.domain.battle_models import BattleRules

_DEFAULT_LOG_LEVEL = "INFO"
_VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
_DEFAULT_TURN_CAP = BattleRules().turn_cap


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "KaspaBrawl"
        return Path.home() / "KaspaBrawl"
    return Path.home() / ".config" / "kaspa_brawl"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user directory holding fighters and fight logs."""
    return get_user_data_dir() / "saves"


def _normalize_turn_cap(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return _DEFAULT_TURN_CAP
    return value


def normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _VALID_LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _defaults() -> Dict[str, object]:
    return {"turn_cap": _DEFAULT_TURN_CAP, "log_level": _DEFAULT_LOG_LEVEL}


def load_config(path: Path | None = None) -> Dict[str, object]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return _defaults()
    if not isinstance(raw, dict):
        return _defaults()
    return {
        "turn_cap": _normalize_turn_cap(raw.get("turn_cap")),
        "log_level": normalize_log_level(raw.get("log_level")),
    }


def save_config(config: Dict[str, object], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "turn_cap": _normalize_turn_cap(config.get("turn_cap")),
        "log_level": normalize_log_level(config.get("log_level")),
    }
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

from knotweave.services.dialogue_engine import DEFAULT_MAX_STEPS

ConfigValue = bool | int

_DEFAULTS: Dict[str, ConfigValue] = {
    "show_speaker": True,
    "show_tags": False,
    "max_steps": DEFAULT_MAX_STEPS,
}


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "knotweave"
        return Path.home() / "knotweave"
    return Path.home() / ".config" / "knotweave"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, ConfigValue]:
    return dict(_DEFAULTS)


def _normalize(raw: Dict[str, object]) -> Dict[str, ConfigValue]:
    config = default_config()
    for key in ("show_speaker", "show_tags"):
        value = raw.get(key)
        if isinstance(value, bool):
            config[key] = value
    max_steps = raw.get("max_steps")
    if isinstance(max_steps, int) and not isinstance(max_steps, bool) and max_steps > 0:
        config["max_steps"] = max_steps
    return config


def load_config(path: Path | None = None) -> Dict[str, ConfigValue]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, json.JSONDecodeError):
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return _normalize(raw)


def save_config(config: Dict[str, ConfigValue], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = _normalize(dict(config))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

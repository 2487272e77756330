"""Global app configuration (dialogue connection, active persona, cooldowns)."""

import os
from pathlib import Path
from typing import Any

from .core import data_dir, read_json, write_json

_DIALOGUE_DEFAULTS: dict[str, Any] = {
    "provider_format": "gemini",
    "provider_url": "",
    "api_key": "",
    "model": "gemini-3-flash-preview",
    "speech_model": "gemini-2.5-flash-preview-tts",
    "timeout": 4.0,
}

_CONFIG_DEFAULTS: dict[str, Any] = {
    "dialogue": _DIALOGUE_DEFAULTS,
    "active_persona": "dog",
    "cooldowns_ms": {},
}


def _config_path() -> Path:
    return data_dir() / "config.json"


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values.

    An empty stored api_key falls back to the DIALOGUE_API_KEY env var.
    """
    config: dict[str, Any] = {
        "dialogue": dict(_DIALOGUE_DEFAULTS),
        "active_persona": _CONFIG_DEFAULTS["active_persona"],
        "cooldowns_ms": {},
    }
    stored = read_json(_config_path(), {})
    if isinstance(stored.get("dialogue"), dict):
        config["dialogue"].update(stored["dialogue"])
    if "active_persona" in stored:
        config["active_persona"] = stored["active_persona"]
    if isinstance(stored.get("cooldowns_ms"), dict):
        config["cooldowns_ms"].update(stored["cooldowns_ms"])
    if not config["dialogue"]["api_key"]:
        config["dialogue"]["api_key"] = os.getenv("DIALOGUE_API_KEY", "")
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Returns full config.

    dialogue and cooldowns_ms are merged key-by-key; scalars are overwritten.
    """
    config = read_json(_config_path(), {})
    if "dialogue" in fields:
        config.setdefault("dialogue", {}).update(fields["dialogue"])
    if "cooldowns_ms" in fields:
        config.setdefault("cooldowns_ms", {}).update(fields["cooldowns_ms"])
    if "active_persona" in fields:
        config["active_persona"] = fields["active_persona"]
    write_json(_config_path(), config)
    return get_config()

"""Mood journey storage (append-only log)."""

from pathlib import Path
from typing import Any

from .core import data_dir, read_json, write_json


def _moods_path() -> Path:
    return data_dir() / "moods.json"


def get_moods() -> list[dict[str, Any]]:
    """Load the mood log. Returns [] if none exists."""
    return read_json(_moods_path(), [])


def append_moods(entries: list[dict[str, Any]]) -> None:
    """Append entries to the mood log."""
    existing = get_moods()
    existing.extend(entries)
    write_json(_moods_path(), existing)


def clear_moods() -> None:
    _moods_path().unlink(missing_ok=True)

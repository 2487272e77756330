"""Wellbeing stats storage (one snapshot, overwritten after each commit)."""

from pathlib import Path
from typing import Any

from .core import data_dir, read_json, write_json


def _wellbeing_path() -> Path:
    return data_dir() / "wellbeing.json"


def get_wellbeing() -> dict[str, Any] | None:
    """Load the last saved stats, or None if nothing was saved yet."""
    return read_json(_wellbeing_path(), None)


def save_wellbeing(stats: dict[str, Any]) -> None:
    write_json(_wellbeing_path(), stats)


def clear_wellbeing() -> None:
    _wellbeing_path().unlink(missing_ok=True)

"""Stats engine — the only place the wellbeing vector changes.

apply_delta() is pure: it returns a new vector with each field moved by the
delta and clamped to [STAT_MIN, STAT_MAX]. Fields missing from the delta are
left alone.
"""

from __future__ import annotations

from pausepaws.models import STAT_MAX, STAT_MIN, StatDelta, WellbeingVector

STAT_NAMES = ("hunger", "thirst", "happiness", "energy")


def clamp(value: int, low: int = STAT_MIN, high: int = STAT_MAX) -> int:
    return max(low, min(high, value))


def apply_delta(vector: WellbeingVector, delta: StatDelta) -> WellbeingVector:
    """Return ``vector`` shifted by ``delta``, every field clamped.

    Raises ValueError on a stat name that is not part of the vector.
    """
    unknown = set(delta) - set(STAT_NAMES)
    if unknown:
        raise ValueError(f"Unknown stat(s) in delta: {sorted(unknown)}")
    if not delta:
        return vector

    current = vector.model_dump()
    for name, change in delta.items():
        current[name] = clamp(current[name] + int(change))
    return WellbeingVector(**current)

"""Core domain models.

Every engine component exchanges these types. Pydantic validates them at
each boundary; results handed to the rendering layer are frozen.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Intent = Literal["feed", "water", "pet", "play", "none"]

ActionIntent = Literal["feed", "water", "pet", "play"]

PetLocation = Literal["ears", "chin", "back"]

InteractionSource = Literal["ui", "chat", "voice"]

StatName = Literal["hunger", "thirst", "happiness", "energy"]

Animation = Literal[
    "idle",
    "happy",
    "thinking",
    "sleepy",
    "eating",
    "drinking",
    "playing",
    "fetching",
    "stretching",
    "petting",
    "breathing",
    "sitting",
    "consoling",
    "sleeping",
    "squeezing",
    "guiding",
    "humming",
]

Mood = Literal[
    "happy",
    "sad",
    "frustrated",
    "tired",
    "overwhelmed",
    "anxious",
    "neutral",
]

STAT_MIN = 0
STAT_MAX = 100


class WellbeingVector(BaseModel):
    """The companion's four wellbeing stats, each within [0, 100]."""

    model_config = ConfigDict(frozen=True)

    hunger: int = Field(default=50, ge=STAT_MIN, le=STAT_MAX)
    thirst: int = Field(default=50, ge=STAT_MIN, le=STAT_MAX)
    happiness: int = Field(default=50, ge=STAT_MIN, le=STAT_MAX)
    energy: int = Field(default=80, ge=STAT_MIN, le=STAT_MAX)


StatDelta = dict[StatName, int]


class ActionResult(BaseModel):
    """What the rendering layer shows for one interaction.

    The renderer schedules the return to ``idle`` after ``duration_ms`` and
    hands ``voice_text`` to speech synthesis.
    """

    model_config = ConfigDict(frozen=True)

    animation: Animation
    display_text: str
    voice_text: str
    stat_delta: StatDelta = Field(default_factory=dict)
    duration_ms: int


class InteractionResult(BaseModel):
    """An ActionResult tagged with its session sequence number."""

    model_config = ConfigDict(frozen=True)

    seq: int
    intent: Intent
    result: ActionResult
    stats: WellbeingVector
    stale: bool = False  # superseded by a newer interaction; nothing committed


class MoodEntry(BaseModel):
    """One entry in the append-only mood journey log."""

    model_config = ConfigDict(frozen=True)

    mood: Mood
    timestamp: float  # unix seconds
    note: str | None = None


class FollowUpChoice(BaseModel):
    """A suggested next step offered after a mood check-in.

    kind "activity" → payload is an activity name for start_activity()
    kind "message"  → payload is chat text for interact()
    kind "action"   → payload is a discrete action ("pet", "play") for interact()
    """

    model_config = ConfigDict(frozen=True)

    label: str
    kind: Literal["activity", "message", "action"]
    payload: str


class CheckIn(BaseModel):
    """The companion's reaction to a mood check-in."""

    model_config = ConfigDict(frozen=True)

    entry: MoodEntry
    result: ActionResult
    choices: list[FollowUpChoice]


class SessionState(BaseModel):
    """Read-only view of the session exposed to the UI and to storage."""

    persona_id: str
    stats: WellbeingVector
    moods: list[MoodEntry] = Field(default_factory=list)
    display: ActionResult | None = None

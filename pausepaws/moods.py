"""Mood check-ins and guided activities.

After greeting, the companion asks how the user feels. Each mood gets a
supportive line, an animation and three follow-up choices. Choices point at
a guided activity, a chat message, or a discrete action.

Activities are short scripted exercises (breathing, grounding, ...). They
play an animation and a line but never touch the wellbeing stats.
"""

from __future__ import annotations

from typing import get_args

from pydantic import BaseModel, ConfigDict

from pausepaws.models import ActionResult, Animation, FollowUpChoice, Mood

MOODS: tuple[str, ...] = get_args(Mood)

CHECK_IN_DURATION_MS = 5_000


class UnknownMoodError(KeyError):
    pass


class MoodResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: str
    animation: Animation
    choices: tuple[FollowUpChoice, ...]


def _activity(label: str, name: str | None = None) -> FollowUpChoice:
    return FollowUpChoice(label=label, kind="activity", payload=name or label)


def _message(label: str, text: str) -> FollowUpChoice:
    return FollowUpChoice(label=label, kind="message", payload=text)


def _action(label: str, action: str) -> FollowUpChoice:
    return FollowUpChoice(label=label, kind="action", payload=action)


MOOD_RESPONSES: dict[str, MoodResponse] = {
    "happy": MoodResponse(
        line="Yay! Let's celebrate! *happy dance* ❤️",
        animation="happy",
        choices=(
            _activity("Happy Dance!", "Happy Dance"),
            _message("Snap a Memory", "Let's take a photo!"),
            _message("Share a win", "I have good news!"),
        ),
    ),
    "sad": MoodResponse(
        line="I'm here with you. *gentle nuzzle* How can I support you? ❤️",
        animation="consoling",
        choices=(
            _message("Just sit together", "Let's just sit"),
            _activity("Soft Hum", "Lullaby"),
            _action("Gentle Nuzzle", "pet"),
        ),
    ),
    "frustrated": MoodResponse(
        line="I feel that too sometimes... Let's release that heavy energy together. 😤",
        animation="idle",
        choices=(
            _activity("Squeeze Stress Ball", "Stress Ball"),
            _activity("Deep Breaths", "Breathing"),
            _message("Calming Patterns", "Show me something calm"),
        ),
    ),
    "tired": MoodResponse(
        line="Rest is a productive activity. Let me help you unwind. 😴",
        animation="sleepy",
        choices=(
            _activity("Lullaby"),
            _message("Power Nap", "Let's sleep"),
            _message("Gentle Sway", "Sway with me"),
        ),
    ),
    "overwhelmed": MoodResponse(
        line="One thing at a time. I'm right here. Let's focus our minds. 😰",
        animation="idle",
        choices=(
            _activity("Task Breakdown"),
            _activity("Grounding (5-4-3-2-1)", "Grounding"),
            _message("Big Stretch", "Let's stretch"),
        ),
    ),
    "anxious": MoodResponse(
        line="You're safe here. Everything is okay. I won't leave you. ✨",
        animation="consoling",
        choices=(
            _message("Safe Space Exercise", "Describe a safe place"),
            _message("Finger Tracing", "Let's trace shapes"),
            _action("Play a game", "play"),
        ),
    ),
    "neutral": MoodResponse(
        line="That's perfectly okay. I'm happy just being in your company. ☁️",
        animation="happy",
        choices=(
            _message("Check Journey", "Show my history"),
            _message("Just relax", "Let's just be"),
            _action("Quick Activity", "play"),
        ),
    ),
}


def mood_response(mood: str) -> MoodResponse:
    try:
        return MOOD_RESPONSES[mood]
    except KeyError:
        raise UnknownMoodError(mood) from None


def check_in_result(mood: str) -> ActionResult:
    """The ActionResult shown when the user reports ``mood``."""
    response = mood_response(mood)
    return ActionResult(
        animation=response.animation,
        display_text=response.line,
        voice_text=response.line,
        stat_delta={},
        duration_ms=CHECK_IN_DURATION_MS,
    )


# ---------------------------------------------------------------------------
# Guided activities
# ---------------------------------------------------------------------------

ACTIVITIES: dict[str, ActionResult] = {
    "Stress Ball": ActionResult(
        animation="squeezing",
        display_text="Let's release that frustration. Squeeze as hard as you can... and release. 🎾",
        voice_text="Let's release that frustration. Squeeze as hard as you can... and release.",
        duration_ms=6_000,
    ),
    "Breathing": ActionResult(
        animation="breathing",
        display_text="In... 2... 3... and Out... 2... 3... ✨",
        voice_text="In... 2... 3... and Out... 2... 3...",
        duration_ms=8_000,
    ),
    "Grounding": ActionResult(
        animation="guiding",
        display_text="Name 5 things you can see right now. Take your time. ☁️",
        voice_text="Name 5 things you can see right now. Take your time.",
        duration_ms=15_000,
    ),
    "Happy Dance": ActionResult(
        animation="happy",
        display_text="*Excited wiggle* Life is good! You're doing amazing! ❤️",
        voice_text="Life is good! You're doing amazing!",
        duration_ms=3_000,
    ),
    "Lullaby": ActionResult(
        animation="humming",
        display_text="*Soft rhythmic humming* Go to sleep, little one... rest your mind. 🌙",
        voice_text="Go to sleep, little one... rest your mind.",
        duration_ms=10_000,
    ),
    "Task Breakdown": ActionResult(
        animation="idle",
        display_text="Let's break it down into tiny pieces. What's the very first tiny step? ☁️",
        voice_text="Let's break it down into tiny pieces. What's the very first tiny step?",
        duration_ms=3_000,
    ),
}


def activity_result(name: str) -> ActionResult | None:
    """The scripted result for an activity, or None if ``name`` is not one."""
    return ACTIVITIES.get(name)

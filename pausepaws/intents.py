"""Intent classifier — free-form text to one discrete action.

Four disjoint keyword sets are checked in a fixed order (feed, water, pet,
play); the first set with any hit wins. Matching is a case-insensitive
substring search, so inflections ("petted", "played", "watered") hit their
stem.
"""

from __future__ import annotations

import re

from pausepaws.models import ActionIntent, Intent

INTENT_KEYWORDS: dict[ActionIntent, tuple[str, ...]] = {
    "feed": ("feed", "food", "meal", "dinner", "kibble", "eat"),
    "water": ("water", "drink", "thirsty", "hydration"),
    "pet": ("pet", "stroke", "pat", "cuddle"),
    "play": ("play", "fetch", "toy", "game"),
}

CLASSIFY_ORDER: tuple[ActionIntent, ...] = ("feed", "water", "pet", "play")

_PATTERNS: dict[ActionIntent, re.Pattern[str]] = {
    intent: re.compile("|".join(map(re.escape, words)), re.IGNORECASE)
    for intent, words in INTENT_KEYWORDS.items()
}


def classify(text: str) -> Intent:
    """Return the first matching action intent, or "none"."""
    if not text:
        return "none"
    for intent in CLASSIFY_ORDER:
        if _PATTERNS[intent].search(text):
            return intent
    return "none"

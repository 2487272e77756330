"""Action responder — turns an allowed discrete action into an ActionResult.

Animation, stat delta and duration are fixed per intent; the spoken line is
drawn uniformly from the persona's corpus with an injected random source.
Petting may name a spot (ears, chin, back); the persona's favorite spot
gets its own lines, a bigger happiness boost and a longer animation.

The responder only *describes* the stat change. The session applies it
through stats.apply_delta().
"""

from __future__ import annotations

import random

from pausepaws.models import ActionIntent, ActionResult, InteractionSource, PetLocation, StatDelta
from pausepaws.personas import Persona

ACTION_DELTAS: dict[ActionIntent, StatDelta] = {
    "feed": {"hunger": 25, "happiness": 15},
    "water": {"thirst": 40, "happiness": 5},
    "pet": {"happiness": 10},
    "play": {"happiness": 20, "energy": -15},
}

FAVORITE_SPOT_DELTA: StatDelta = {"happiness": 15}

ACTION_ANIMATIONS = {
    "feed": "eating",
    "water": "drinking",
    "pet": "petting",
    "play": "playing",
}

ACTION_DURATIONS_MS: dict[ActionIntent, int] = {
    "feed": 10_000,
    "water": 8_000,
    "pet": 4_000,
    "play": 8_000,
}

PET_LOCATION_DURATION_MS = 3_000
PET_FAVORITE_DURATION_MS = 5_000

DEFLECTION_DURATION_MS = 3_000

LOCATION_NAMES: dict[PetLocation, str] = {
    "ears": "ears",
    "chin": "chin",
    "back": "back",
}


def _pick(options: tuple[str, ...], rng: random.Random) -> str:
    return rng.choice(options)


def respond(
    intent: ActionIntent,
    persona: Persona,
    rng: random.Random,
    source: InteractionSource = "ui",
    location: PetLocation | None = None,
) -> ActionResult:
    """Describe what happens when ``intent`` goes through."""
    lines = persona.action_lines[intent]
    template = lines.ui if source == "ui" else lines.chat
    display = template.format(name=persona.name)
    delta = dict(ACTION_DELTAS[intent])
    duration = ACTION_DURATIONS_MS[intent]

    if intent == "pet" and location is not None:
        if location not in LOCATION_NAMES:
            raise ValueError(f"Unknown petting spot: {location!r}")
        display = f"❤️ You scratched {persona.name}'s {LOCATION_NAMES[location]}."
        if location == persona.favorite_spot:
            voice = _pick(persona.favorite_lines, rng)
            delta = dict(FAVORITE_SPOT_DELTA)
            duration = PET_FAVORITE_DURATION_MS
        else:
            voice = _pick(persona.location_lines[location], rng)
            duration = PET_LOCATION_DURATION_MS
    else:
        voice = _pick(persona.flavor[intent], rng)

    return ActionResult(
        animation=ACTION_ANIMATIONS[intent],
        display_text=display,
        voice_text=voice,
        stat_delta=delta,
        duration_ms=duration,
    )


def deflect(intent: ActionIntent, persona: Persona) -> ActionResult:
    """The non-mutating reply for an action blocked by its cooldown."""
    deflection = persona.deflections[intent]
    return ActionResult(
        animation="idle",
        display_text=deflection.display.format(name=persona.name),
        voice_text=deflection.voice,
        stat_delta={},
        duration_ms=DEFLECTION_DURATION_MS,
    )

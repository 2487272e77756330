"""Companion session — one engine instance per active user.

Interaction flow:
  1. Assign the next sequence number.
  2. Classify the input.
       action → cooldown gate → deflection (blocked) or responder (allowed)
       none   → the response resolver
  3. Commit: if this interaction is still the latest one issued, apply its
     stat delta through the stats engine and make it the display state.
     Otherwise drop it and flag the result stale.

The session is the only owner of the wellbeing vector, cooldown state,
response cache and mood log. Nothing outside it mutates them.
"""

from __future__ import annotations

import itertools
import logging
import random
import time
from collections.abc import Callable, Mapping

from pausepaws import actions, moods
from pausepaws.cooldown import Blocked, Clock, CooldownGate, monotonic_ms
from pausepaws.intents import classify
from pausepaws.llm import DialoguePort, OfflineDialogue
from pausepaws.models import (
    ActionResult,
    CheckIn,
    Intent,
    InteractionResult,
    InteractionSource,
    MoodEntry,
    PetLocation,
    SessionState,
    WellbeingVector,
)
from pausepaws.personas import DEFAULT_PERSONA_ID, Persona, get_persona
from pausepaws.protocol import parse_structured, strip_emoji
from pausepaws.resolver import DEFAULT_TIMEOUT_S, ResponseCache, ResponseResolver
from pausepaws.sanitizer import Accepted, sanitize
from pausepaws.stats import apply_delta

logger = logging.getLogger(__name__)

CHAT_DURATION_MS = 3_000
GREETING_DURATION_MS = 3_000


class CompanionSession:
    """Interaction engine for one companion session.

    Args:
        persona_id: Starting persona ("dog" or "cat").
        dialogue:   External dialogue port used by the remote tier and speech.
        rng:        Random source for every line choice. Seed it in tests.
        clock:      Monotonic clock in milliseconds for the cooldown gate.
        wall_clock: Unix-seconds clock for mood log timestamps.
        cooldowns:  Per-intent cooldown overrides in ms.
        timeout:    Remote tier deadline in seconds.
    """

    def __init__(
        self,
        persona_id: str = DEFAULT_PERSONA_ID,
        dialogue: DialoguePort | None = None,
        *,
        rng: random.Random | None = None,
        clock: Clock = monotonic_ms,
        wall_clock: Callable[[], float] = time.time,
        cooldowns: Mapping[str, int] | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._persona = get_persona(persona_id)
        self._rng = rng or random.Random()
        self._clock = clock
        self._wall_clock = wall_clock
        self._gate = CooldownGate(cooldowns)
        self._resolver = ResponseResolver(
            dialogue or OfflineDialogue(),
            cache=ResponseCache(),
            rng=self._rng,
            timeout=timeout,
        )
        self._stats = WellbeingVector()
        self._moods: list[MoodEntry] = []
        self._display: ActionResult | None = None
        self._seq = itertools.count(1)
        self._latest = 0

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def persona(self) -> Persona:
        return self._persona

    @property
    def stats(self) -> WellbeingVector:
        return self._stats

    @property
    def moods(self) -> tuple[MoodEntry, ...]:
        return tuple(self._moods)

    @property
    def display(self) -> ActionResult | None:
        return self._display

    @property
    def cache(self) -> ResponseCache:
        return self._resolver.cache

    @property
    def dialogue(self) -> DialoguePort:
        return self._resolver.dialogue

    def use_dialogue(self, dialogue: DialoguePort) -> None:
        """Swap the dialogue connection, keeping cooldowns and the cache."""
        self._resolver.dialogue = dialogue

    def snapshot(self) -> SessionState:
        return SessionState(
            persona_id=self._persona.id,
            stats=self._stats,
            moods=list(self._moods),
            display=self._display,
        )

    def restore(
        self,
        stats: WellbeingVector | None = None,
        moods: list[MoodEntry] | None = None,
    ) -> None:
        """Reload persisted state after a restart."""
        if stats is not None:
            self._stats = stats
        if moods is not None:
            self._moods = list(moods)

    # ------------------------------------------------------------------
    # Sequencing
    # ------------------------------------------------------------------

    def _begin(self) -> int:
        seq = next(self._seq)
        self._latest = seq
        return seq

    def _commit(self, seq: int, intent: Intent, result: ActionResult) -> InteractionResult:
        if seq != self._latest:
            logger.info("discarding stale interaction seq=%d latest=%d", seq, self._latest)
            return InteractionResult(
                seq=seq, intent=intent, result=result, stats=self._stats, stale=True,
            )
        self._stats = apply_delta(self._stats, result.stat_delta)
        self._display = result
        return InteractionResult(seq=seq, intent=intent, result=result, stats=self._stats)

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------

    async def interact(
        self,
        text: str,
        source: InteractionSource = "chat",
        location: PetLocation | None = None,
    ) -> InteractionResult:
        """Resolve one user gesture or chat line into a visible reaction."""
        if location is not None and location not in actions.LOCATION_NAMES:
            raise ValueError(f"Unknown petting spot: {location!r}")
        seq = self._begin()
        persona = self._persona
        intent = classify(text)

        if intent != "none":
            outcome = self._gate.try_trigger(intent, self._clock())
            if isinstance(outcome, Blocked):
                result = actions.deflect(intent, persona)
            else:
                result = actions.respond(intent, persona, self._rng, source=source, location=location)
            return self._commit(seq, intent, result)

        reply = await self._resolver.resolve(text, persona)
        return self._commit(seq, "none", self._chat_result(reply))

    async def start_activity(self, name: str) -> InteractionResult:
        """Start a guided activity; unknown names are treated as chat."""
        activity = moods.activity_result(name.strip())
        if activity is None:
            return await self.interact(name, source="ui")
        return self._commit(self._begin(), "none", activity)

    def _chat_result(self, reply: str) -> ActionResult:
        structured = parse_structured(reply)
        return ActionResult(
            animation="idle",
            display_text=structured.display_text,
            voice_text=structured.voice,
            stat_delta={},
            duration_ms=CHAT_DURATION_MS,
        )

    def switch_persona(self, persona_id: str) -> InteractionResult:
        """Change companion and return its greeting."""
        persona = get_persona(persona_id)
        seq = self._begin()
        if persona.id != self._persona.id:
            logger.info("persona switch %s -> %s", self._persona.id, persona.id)
        self._persona = persona
        greeting = ActionResult(
            animation="happy",
            display_text=persona.greeting,
            voice_text=persona.greeting,
            stat_delta={},
            duration_ms=GREETING_DURATION_MS,
        )
        return self._commit(seq, "none", greeting)

    def check_in(self, mood: str, note: str | None = None) -> CheckIn:
        """Record the user's mood and return the companion's reaction."""
        response = moods.mood_response(mood)
        entry = MoodEntry(mood=mood, timestamp=self._wall_clock(), note=note)
        self._moods.append(entry)
        seq = self._begin()
        committed = self._commit(seq, "none", moods.check_in_result(mood))
        return CheckIn(entry=entry, result=committed.result, choices=list(response.choices))

    # ------------------------------------------------------------------
    # Speech
    # ------------------------------------------------------------------

    async def speak(self, text: str) -> bytes | None:
        """Synthesize a line in the persona's voice; None if unavailable."""
        verdict = sanitize(text)
        if not isinstance(verdict, Accepted):
            return None
        clean = strip_emoji(verdict.text)
        if not clean:
            return None
        try:
            return await self.dialogue.generate_speech(clean, self._persona.voice_id)
        except Exception as e:
            logger.warning("speech synthesis failed: %r", e)
            return None

"""Response resolver — the three-tier fallback chain for free-form chat.

Tiers, tried strictly in order:

  1. remote — one dialogue request under a deadline. A reply the sanitizer
              accepts is cached and returned.
  2. cache  — the reply previously cached for the same persona and
              normalized input. Entries were sanitized when written.
  3. local  — a line from the persona's topic corpus matching the input, or
              from its generic corpus. Cannot fail.

A remote reply that the sanitizer rejects is replaced by the local answer
for the same input; the cache is not consulted in that case.

Every tier returns an explicit Success or Failed value. Failures are logged
with their ErrorRecord and never leave this module.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
from dataclasses import dataclass
from typing import Literal

from pausepaws.llm import DialogueError, DialoguePort, ErrorKind
from pausepaws.personas import Persona
from pausepaws.prompts import build_framing
from pausepaws.sanitizer import Rejected, is_clean, sanitize

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 4.0

TierName = Literal["remote", "cache", "local"]

RecordKind = ErrorKind | Literal["cache_miss"]

# Conversational topics for the local tier, checked in this order.
TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "play": ("play", "plays", "playing", "played", "playtime", "game", "games"),
    "sad": ("sad", "sadness", "lonely", "upset", "crying", "cry"),
    "happy": ("happy", "glad", "joy", "excited"),
    "tired": ("tired", "sleepy", "exhausted", "sleep"),
    "hello": ("hello", "hi", "hey", "hiya", "howdy"),
    "food": ("food", "hungry", "treat", "treats", "snack", "snacks"),
}

_TOPIC_PATTERNS = {
    topic: re.compile(r"\b(?:" + "|".join(map(re.escape, words)) + r")\b")
    for topic, words in TOPIC_KEYWORDS.items()
}


def normalize(text: str) -> str:
    """Cache key form of user input: lowercase, trimmed, single-spaced."""
    return " ".join(text.lower().split())


def match_topic(normalized: str) -> str | None:
    for topic, pattern in _TOPIC_PATTERNS.items():
        if pattern.search(normalized):
            return topic
    return None


# ---------------------------------------------------------------------------
# Tier results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorRecord:
    kind: RecordKind
    cause: str


@dataclass(frozen=True)
class Success:
    text: str
    tier: TierName


@dataclass(frozen=True)
class Failed:
    error: ErrorRecord
    tier: TierName


TierResult = Success | Failed


@dataclass(frozen=True)
class Resolution:
    text: str
    tier: TierName


# ---------------------------------------------------------------------------
# Response cache
# ---------------------------------------------------------------------------

class ResponseCache:
    """Append-only map of (persona_id, normalized input) → sanitized reply.

    The first reply stored under a key is kept for the rest of the session.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], str] = {}

    def get(self, persona_id: str, key: str) -> str | None:
        return self._entries.get((persona_id, key))

    def add(self, persona_id: str, key: str, text: str) -> None:
        self._entries.setdefault((persona_id, key), text)

    def __contains__(self, item: tuple[str, str]) -> bool:
        return item in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------------
# Individual tiers
# ---------------------------------------------------------------------------

async def remote_tier(
    dialogue: DialoguePort, persona: Persona, text: str, timeout: float
) -> TierResult:
    """Ask the dialogue service once; any failure becomes a Failed value."""
    framing = build_framing(persona)
    try:
        reply = await asyncio.wait_for(dialogue.generate(framing, text), timeout)
    except asyncio.TimeoutError:
        return Failed(ErrorRecord("transport_failure", f"no reply within {timeout}s"), "remote")
    except DialogueError as e:
        return Failed(ErrorRecord(e.kind, str(e)), "remote")
    except Exception as e:  # the port is opaque; anything it raises is a tier failure
        return Failed(ErrorRecord("transport_failure", repr(e)), "remote")

    if not isinstance(reply, str) or not reply.strip():
        return Failed(ErrorRecord("malformed_response", "empty reply"), "remote")

    verdict = sanitize(reply)
    if isinstance(verdict, Rejected):
        return Failed(ErrorRecord("sanitization_reject", verdict.reason), "remote")
    return Success(verdict.text.strip(), "remote")


def cache_tier(cache: ResponseCache, persona: Persona, key: str) -> TierResult:
    cached = cache.get(persona.id, key)
    if cached is None:
        return Failed(ErrorRecord("cache_miss", key), "cache")
    return Success(cached, "cache")


def local_tier(persona: Persona, key: str, rng: random.Random) -> Success:
    """Pick a curated line for the input's topic, else a generic one."""
    topic = match_topic(key)
    pools: list[tuple[str, ...]] = []
    if topic is not None:
        pools.append(persona.topics.get(topic, ()))
    pools.append(persona.generic)

    for pool in pools:
        clean = [line for line in pool if is_clean(line)]
        if clean:
            return Success(rng.choice(clean), "local")
    return Success(persona.last_resort, "local")


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class ResponseResolver:
    """Runs the fallback chain for one session.

    Args:
        dialogue: The external dialogue port.
        cache:    Session response cache; a fresh one if omitted.
        rng:      Random source for local-tier picks.
        timeout:  Deadline for the remote tier, in seconds.
    """

    def __init__(
        self,
        dialogue: DialoguePort,
        cache: ResponseCache | None = None,
        rng: random.Random | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.dialogue = dialogue
        self.cache = cache if cache is not None else ResponseCache()
        self._rng = rng or random.Random()
        self._timeout = timeout

    async def resolve(self, text: str, persona: Persona) -> str:
        return (await self.resolve_with_tier(text, persona)).text

    async def resolve_with_tier(self, text: str, persona: Persona) -> Resolution:
        key = normalize(text)

        remote = await remote_tier(self.dialogue, persona, text, self._timeout)
        if isinstance(remote, Success):
            self.cache.add(persona.id, key, remote.text)
            logger.debug("resolved tier=remote persona=%s", persona.id)
            return Resolution(remote.text, "remote")

        logger.warning(
            "remote tier failed persona=%s kind=%s cause=%s",
            persona.id, remote.error.kind, remote.error.cause,
        )

        if remote.error.kind != "sanitization_reject":
            cached = cache_tier(self.cache, persona, key)
            if isinstance(cached, Success):
                logger.debug("resolved tier=cache persona=%s", persona.id)
                return Resolution(cached.text, "cache")

        local = local_tier(persona, key, self._rng)
        logger.debug("resolved tier=local persona=%s", persona.id)
        return Resolution(local.text, "local")

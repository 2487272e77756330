"""Cooldown gate — per-intent rate limiting with test-and-set semantics.

feed and water use real cooldown windows; pet and play only debounce
repeats that would land inside the same animation. The gate owns one
CooldownState value and replaces it under a lock, so two overlapping
triggers for the same intent can never both be allowed.

Timestamps are monotonic milliseconds from an injected clock.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from pausepaws.models import ActionIntent

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

DEFAULT_COOLDOWNS_MS: dict[ActionIntent, int] = {
    "feed": 60_000,
    "water": 30_000,
    "pet": 1_000,
    "play": 1_000,
}


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class CooldownState:
    """Last successful trigger per intent; a missing key means never fired."""

    last_fired: Mapping[str, float] = field(default_factory=dict)

    def fired(self, intent: ActionIntent, now: float) -> CooldownState:
        return CooldownState({**self.last_fired, intent: now})


@dataclass(frozen=True)
class Allowed:
    intent: ActionIntent


@dataclass(frozen=True)
class Blocked:
    intent: ActionIntent
    elapsed_ms: float
    remaining_ms: float


GateOutcome = Allowed | Blocked


class CooldownGate:
    """Per-session rate limiter.

    Args:
        windows: Cooldown window per intent in ms; missing intents fall back
                 to DEFAULT_COOLDOWNS_MS.
        state:   Starting state, e.g. when tests need a pre-fired intent.
    """

    def __init__(
        self,
        windows: Mapping[str, int] | None = None,
        state: CooldownState | None = None,
    ) -> None:
        self._windows: dict[str, int] = {**DEFAULT_COOLDOWNS_MS, **(windows or {})}
        self._state = state or CooldownState()
        self._lock = threading.Lock()

    @property
    def state(self) -> CooldownState:
        return self._state

    def window_ms(self, intent: ActionIntent) -> int:
        return self._windows[intent]

    def try_trigger(self, intent: ActionIntent, now: float) -> GateOutcome:
        """Allow and record the trigger, or report how long ago it last fired."""
        window = self._windows[intent]
        with self._lock:
            last = self._state.last_fired.get(intent)
            if last is not None:
                elapsed = now - last
                if elapsed < window:
                    logger.debug("cooldown blocked intent=%s elapsed_ms=%.0f", intent, elapsed)
                    return Blocked(intent=intent, elapsed_ms=elapsed, remaining_ms=window - elapsed)
            self._state = self._state.fired(intent, now)
        return Allowed(intent=intent)

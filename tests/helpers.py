"""Shared test doubles."""

import asyncio

from pausepaws.llm import TransportError


class StubDialogue:
    """Dialogue port with scripted behaviour.

    Each generate() call takes the next item from ``replies``: a string is
    returned, an exception is raised. When the script runs out the last item
    repeats. If ``gate`` is set, generate() waits on it before answering.
    """

    def __init__(self, *replies, gate: asyncio.Event | None = None, audio: bytes | None = None):
        self.replies = list(replies) or [TransportError("offline")]
        self.gate = gate
        self.audio = audio
        self.calls: list[tuple[str, str]] = []
        self.speech_calls: list[tuple[str, str]] = []

    async def generate(self, framing: str, user_text: str) -> str:
        self.calls.append((framing, user_text))
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def generate_speech(self, text: str, voice_id: str) -> bytes | None:
        self.speech_calls.append((text, voice_id))
        return self.audio


class SlowDialogue:
    """Never answers within any sensible deadline."""

    async def generate(self, framing: str, user_text: str) -> str:
        await asyncio.sleep(60)
        return "too late"

    async def generate_speech(self, text: str, voice_id: str) -> bytes | None:
        return None


class FakeClock:
    """Manually advanced millisecond clock for the cooldown gate."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms

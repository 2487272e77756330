"""Dialogue client — HTTP connection to a generative dialogue/speech backend.

The engine injects a dialogue port matching the protocol:

    async def generate(self, framing: str, user_text: str) -> str: ...
    async def generate_speech(self, text: str, voice_id: str) -> bytes | None: ...

`framing` is the persona's system instruction. generate() raises a
DialogueError subclass on any failure; the resolver only ever treats those
as "tier failed" and never shows them to the user.

Three implementations are provided:

    HttpDialogue     — real HTTP client for Gemini, OpenAI-compatible and
                       KoboldCpp backends. Selected by provider_format.
    OfflineDialogue  — always fails; used when no connection is configured so
                       every chat goes straight to the cache and local tiers.
    EchoDialogue     — returns the user text unchanged. Useful for
                       smoke-testing the session wiring without a backend.

Tests use StubDialogue (defined in tests/helpers.py) for controlled replies.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Literal, Protocol

import httpx

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors — one subclass per failure kind the resolver records
# ---------------------------------------------------------------------------

ErrorKind = Literal[
    "transport_failure",
    "quota_exceeded",
    "malformed_response",
    "sanitization_reject",
]


class DialogueError(RuntimeError):
    """Raised when the dialogue backend cannot produce a usable reply."""

    kind: ErrorKind = "transport_failure"


class TransportError(DialogueError):
    """Connection refused, timed out, or a non-quota HTTP failure."""

    kind: ErrorKind = "transport_failure"


class QuotaExceededError(DialogueError):
    """The backend signalled rate limiting or an exhausted quota (HTTP 429)."""

    kind: ErrorKind = "quota_exceeded"


class MalformedResponseError(DialogueError):
    """The backend answered, but without any usable text."""

    kind: ErrorKind = "malformed_response"


# ---------------------------------------------------------------------------
# Protocol — every dialogue implementation must match this signature
# ---------------------------------------------------------------------------

class DialoguePort(Protocol):
    async def generate(self, framing: str, user_text: str) -> str: ...

    async def generate_speech(self, text: str, voice_id: str) -> bytes | None: ...


# ---------------------------------------------------------------------------
# HttpDialogue — connects to a real backend
# ---------------------------------------------------------------------------

ProviderFormat = Literal["gemini", "openai", "koboldcpp"]

DEFAULT_PROVIDER_URLS: dict[str, str] = {
    "gemini": "https://generativelanguage.googleapis.com",
    "openai": "https://api.openai.com",
    "koboldcpp": "http://localhost:5001",
}

GENERATION_TEMPERATURE = 0.8


class HttpDialogue:
    """Async HTTP client for dialogue and speech backends.

    Supported formats:
      "gemini"     — POST /v1beta/models/{model}:generateContent
                     Response: {"candidates": [{"content": {"parts": [{"text": ...}]}}]}
                     Speech: same endpoint on speech_model with AUDIO modality,
                     base64 audio in parts[0].inlineData.data
      "openai"     — POST /v1/chat/completions  {"model", "messages": [...]}
                     Response: {"choices": [{"message": {"content": "..."}}]}
                     Speech: POST /v1/audio/speech, raw audio body
      "koboldcpp"  — POST /api/v1/generate  {"prompt": ...}
                     Response: {"results": [{"text": "..."}]}
                     Speech: not supported (returns None)

    Args:
        provider_url:    Base URL of the backend. Empty → format default.
        api_key:         API key, or empty string if not required.
        provider_format: Wire format to use. Defaults to "gemini".
        model:           Dialogue model identifier (gemini and openai).
        speech_model:    Speech model identifier (gemini and openai).
        timeout:         HTTP timeout in seconds. The resolver applies its own,
                         usually shorter, deadline on top of this.
    """

    def __init__(
        self,
        provider_url: str = "",
        api_key: str = "",
        provider_format: ProviderFormat = "gemini",
        model: str = "gemini-3-flash-preview",
        speech_model: str = "gemini-2.5-flash-preview-tts",
        timeout: float = 10.0,
    ) -> None:
        self._base_url = (provider_url or DEFAULT_PROVIDER_URLS[provider_format]).rstrip("/")
        self._api_key = api_key
        self._format = provider_format
        self._model = model
        self._speech_model = speech_model
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            if self._format == "gemini":
                headers["x-goog-api-key"] = self._api_key
            else:
                headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    # -- request building ---------------------------------------------------

    def _build_request(self, framing: str, user_text: str) -> tuple[str, dict]:
        """Return (url, body) for the configured format."""
        if self._format == "gemini":
            url = f"{self._base_url}/v1beta/models/{self._model}:generateContent"
            return url, {
                "systemInstruction": {"parts": [{"text": framing}]},
                "contents": [{"role": "user", "parts": [{"text": user_text}]}],
                "generationConfig": {"temperature": GENERATION_TEMPERATURE},
            }

        if self._format == "openai":
            url = f"{self._base_url}/v1/chat/completions"
            body: dict = {
                "messages": [
                    {"role": "system", "content": framing},
                    {"role": "user", "content": user_text},
                ],
                "temperature": GENERATION_TEMPERATURE,
            }
            if self._model:
                body["model"] = self._model
            return url, body

        # koboldcpp
        url = f"{self._base_url}/api/v1/generate"
        return url, {"prompt": f"{framing}\n\n{user_text}\n"}

    def _parse_response(self, data: dict) -> str:
        """Extract the reply text from the response body."""
        if self._format == "gemini":
            try:
                parts = data["candidates"][0]["content"]["parts"]
                text = "".join(p.get("text", "") for p in parts)
            except (KeyError, IndexError, TypeError) as e:
                raise MalformedResponseError("Unexpected response format from Gemini backend") from e
        elif self._format == "openai":
            choices = data.get("choices")
            if not choices or "content" not in choices[0].get("message", {}):
                raise MalformedResponseError("Unexpected response format from OpenAI-compatible backend")
            text = choices[0]["message"]["content"] or ""
        else:
            results = data.get("results")
            if not results or "text" not in results[0]:
                raise MalformedResponseError("Unexpected response format from KoboldCpp backend")
            text = results[0]["text"]

        if not text.strip():
            raise MalformedResponseError("Backend returned an empty reply")
        return text.strip()

    # -- transport ----------------------------------------------------------

    async def _post(self, url: str, body: dict) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise TransportError(f"Cannot connect to dialogue backend at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 429:
                raise QuotaExceededError("Dialogue backend quota exhausted (HTTP 429)") from e
            raise TransportError(
                f"Dialogue backend returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise TransportError(f"Dialogue backend timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Dialogue backend request failed: {e}") from e
        return resp

    async def generate(self, framing: str, user_text: str) -> str:
        url, body = self._build_request(framing, user_text)
        logger.debug("dialogue call format=%s url=%s text_len=%d", self._format, url, len(user_text))

        resp = await self._post(url, body)
        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError("Dialogue backend returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise MalformedResponseError("Dialogue backend returned a non-object body")

        text = self._parse_response(data)
        logger.debug("dialogue response format=%s len=%d", self._format, len(text))
        return text

    async def generate_speech(self, text: str, voice_id: str) -> bytes | None:
        """Synthesize ``text`` with the given voice. None when unsupported or failed."""
        if not text.strip() or self._format == "koboldcpp":
            return None

        if self._format == "gemini":
            url = f"{self._base_url}/v1beta/models/{self._speech_model}:generateContent"
            body: dict = {
                "contents": [{"parts": [{"text": text}]}],
                "generationConfig": {
                    "responseModalities": ["AUDIO"],
                    "speechConfig": {
                        "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice_id}},
                    },
                },
            }
        else:
            url = f"{self._base_url}/v1/audio/speech"
            body = {"model": self._speech_model, "input": text, "voice": voice_id.lower()}

        logger.debug("speech call format=%s voice=%s text_len=%d", self._format, voice_id, len(text))
        try:
            resp = await self._post(url, body)
        except DialogueError as e:
            logger.warning("speech synthesis failed: %s", e)
            return None

        if self._format == "openai":
            return resp.content or None

        try:
            encoded = resp.json()["candidates"][0]["content"]["parts"][0]["inlineData"]["data"]
            return base64.b64decode(encoded)
        except (ValueError, KeyError, IndexError, TypeError, binascii.Error) as e:
            logger.warning("speech response had no audio: %s", e)
            return None


# ---------------------------------------------------------------------------
# OfflineDialogue — no backend configured
# ---------------------------------------------------------------------------

class OfflineDialogue:
    """Fails every generation so the resolver falls through to its local tiers."""

    async def generate(self, framing: str, user_text: str) -> str:
        raise TransportError("No dialogue connection configured")

    async def generate_speech(self, text: str, voice_id: str) -> bytes | None:
        return None


# ---------------------------------------------------------------------------
# EchoDialogue — returns the user text unchanged; useful for smoke tests
# ---------------------------------------------------------------------------

class EchoDialogue:
    """Returns the user's text as-is. No network calls.

    Lets you verify the session wiring (classification, resolver, cache,
    sanitizer) end-to-end without a running backend.
    """

    async def generate(self, framing: str, user_text: str) -> str:
        logger.debug("EchoDialogue text_len=%d", len(user_text))
        return user_text

    async def generate_speech(self, text: str, voice_id: str) -> bytes | None:
        return None

"""Sanitizer — keeps technical and error vocabulary away from the user.

Any candidate line containing a denylisted token (case-insensitive
substring) is rejected whole. There is no partial redaction: a half-edited
sentence breaks the companion's voice, so the caller substitutes a local
fallback line instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DENYLIST: tuple[str, ...] = (
    # services / vendors
    "gemini",
    "openai",
    "google",
    "koboldcpp",
    "llm",
    "model",
    # transport and protocol
    "api",
    "http",
    "network",
    "server",
    "endpoint",
    "requests",
    "status",
    "failed to",
    "fetch failed",
    "timeout",
    "timed out",
    "json",
    # status codes
    "400",
    "401",
    "403",
    "404",
    "429",
    "500",
    "502",
    "503",
    # quota and auth
    "quota",
    "exceeded",
    "rate limit",
    "token",
    "unauthorized",
    "credential",
    # failures
    "invalid",
    "error",
    "exception",
    "traceback",
)


@dataclass(frozen=True)
class Accepted:
    text: str


@dataclass(frozen=True)
class Rejected:
    reason: str  # the denylisted token that matched, or "empty"


Verdict = Accepted | Rejected


def find_leak(text: str) -> str | None:
    """Return the first denylisted token found in ``text``, if any."""
    lowered = text.lower()
    for token in DENYLIST:
        if token in lowered:
            return token
    return None


def sanitize(text: str | None) -> Verdict:
    if text is None or not text.strip():
        return Rejected(reason="empty")
    token = find_leak(text)
    if token is not None:
        logger.warning("sanitizer rejected candidate token=%r len=%d", token, len(text))
        return Rejected(reason=token)
    return Accepted(text=text)


def is_clean(text: str) -> bool:
    return isinstance(sanitize(text), Accepted)

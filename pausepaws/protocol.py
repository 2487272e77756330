"""Structured multi-field reply protocol.

A dialogue reply may carry labeled lines:

  [VOICE]: "<line to speak>"
  [VISUAL]: <action description>
  [PROGRESS]: <bar or step>
  [TEXT]: <emoji + summary>
  [ACTION]: <suggested next user action>

The first [VOICE] line is pulled out for speech. Every other line (labeled
or not, repeated [VOICE] lines included) is kept verbatim as the display
text. A reply without any labeled line is plain text and is used for both
display and voice.
"""

from __future__ import annotations

import re

from pydantic import BaseModel

LABELS = ("VOICE", "VISUAL", "PROGRESS", "TEXT", "ACTION")

_LABEL_RE = re.compile(r"^\s*\[(VOICE|VISUAL|PROGRESS|TEXT|ACTION)\]:\s*(.*)$", re.IGNORECASE)

_EMOJI_RE = re.compile(
    "["
    "\U0001F600-\U0001F64F"
    "\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF"
    "\U00002600-\U000026FF"
    "\U00002700-\U000027BF"
    "\U0001F900-\U0001F9FF"
    "\U0001F3FB-\U0001F3FF"
    "\U0000200D"
    "\U0000FE0F"
    "]"
)


class StructuredReply(BaseModel):
    display_text: str
    voice: str
    visual: str | None = None
    progress: str | None = None
    text: str | None = None
    action: str | None = None
    structured: bool = False


_QUOTE_PAIRS = {'"': '"', "'": "'", "\U0000201C": "\U0000201D"}


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and _QUOTE_PAIRS.get(value[0]) == value[-1]:
        return value[1:-1].strip()
    return value


def parse_structured(reply: str) -> StructuredReply:
    """Split a reply into its labeled fields."""
    fields: dict[str, str] = {}
    display_lines: list[str] = []
    for line in reply.splitlines():
        match = _LABEL_RE.match(line)
        if match:
            label = match.group(1).upper()
            value = match.group(2).strip()
            if label == "VOICE" and "VOICE" not in fields:
                fields[label] = value
                continue
            # first occurrence of a label wins; repeats stay in the display
            fields.setdefault(label, value)
        display_lines.append(line)

    if not fields:
        return StructuredReply(display_text=reply, voice=reply)

    display = "\n".join(display_lines).strip()
    voice = _unquote(fields["VOICE"]) if "VOICE" in fields else ""
    return StructuredReply(
        display_text=display or voice,
        voice=voice or display,
        visual=fields.get("VISUAL"),
        progress=fields.get("PROGRESS"),
        text=fields.get("TEXT"),
        action=fields.get("ACTION"),
        structured=True,
    )


def strip_emoji(text: str) -> str:
    """Remove emoji so speech synthesis reads only words."""
    return _EMOJI_RE.sub("", text).strip()

"""The process-wide companion session and its wiring to config and storage.

init_session() builds the dialogue client from config.json, creates the
CompanionSession and reloads the persisted stats and mood log. Routes and
the MCP server reach the session through get_session() and write back
through persist_stats() / persist_mood().
"""

import logging
from typing import Any

from pausepaws.llm import DialoguePort, HttpDialogue, OfflineDialogue
from pausepaws.models import MoodEntry, WellbeingVector
from pausepaws.personas import PERSONAS, DEFAULT_PERSONA_ID
from pausepaws.session import CompanionSession

from backend import storage

logger = logging.getLogger(__name__)

_session: CompanionSession | None = None


def build_dialogue(dialogue_config: dict[str, Any]) -> DialoguePort:
    """HttpDialogue for a usable connection, OfflineDialogue otherwise.

    Hosted formats (gemini, openai) need an api_key; koboldcpp runs locally
    and needs only its URL.
    """
    fmt = dialogue_config.get("provider_format", "gemini")
    api_key = dialogue_config.get("api_key", "")
    url = dialogue_config.get("provider_url", "")
    if fmt not in ("gemini", "openai", "koboldcpp"):
        logger.warning("unknown dialogue provider_format %r, running offline", fmt)
        return OfflineDialogue()
    if fmt == "koboldcpp" and not url:
        return OfflineDialogue()
    if fmt != "koboldcpp" and not api_key:
        return OfflineDialogue()
    return HttpDialogue(
        provider_url=url,
        api_key=api_key,
        provider_format=fmt,
        model=dialogue_config.get("model", ""),
        speech_model=dialogue_config.get("speech_model", ""),
        timeout=float(dialogue_config.get("timeout", 4.0)) + 1.0,
    )


def init_session(dialogue: DialoguePort | None = None, **session_kwargs: Any) -> CompanionSession:
    """Create the session from stored config and reload persisted state."""
    global _session
    config = storage.get_config()
    persona_id = config["active_persona"]
    if persona_id not in PERSONAS:
        logger.warning("stored persona %r unknown, using %r", persona_id, DEFAULT_PERSONA_ID)
        persona_id = DEFAULT_PERSONA_ID

    session = CompanionSession(
        persona_id,
        dialogue or build_dialogue(config["dialogue"]),
        cooldowns=config["cooldowns_ms"],
        timeout=float(config["dialogue"].get("timeout", 4.0)),
        **session_kwargs,
    )

    stored_stats = storage.get_wellbeing()
    session.restore(
        stats=WellbeingVector.model_validate(stored_stats) if stored_stats else None,
        moods=[MoodEntry.model_validate(m) for m in storage.get_moods()],
    )
    _session = session
    return session


def get_session() -> CompanionSession:
    assert _session is not None, "Call init_session() before using the companion"
    return _session


def persist_stats(session: CompanionSession) -> None:
    storage.save_wellbeing(session.stats.model_dump())


def persist_mood(entry: MoodEntry) -> None:
    storage.append_moods([entry.model_dump()])

"""Pydantic request/response models for API endpoints."""

from typing import Literal

from pydantic import BaseModel

from pausepaws.models import InteractionSource, Mood, PetLocation


class InteractBody(BaseModel):
    message: str
    source: InteractionSource = "chat"
    location: PetLocation | None = None


class SwitchPersonaBody(BaseModel):
    persona_id: str


class ActivityBody(BaseModel):
    name: str


class CheckInBody(BaseModel):
    mood: Mood
    note: str | None = None


class SpeechBody(BaseModel):
    text: str


class DialogueSettings(BaseModel):
    provider_format: Literal["gemini", "openai", "koboldcpp"] | None = None
    provider_url: str | None = None
    api_key: str | None = None
    model: str | None = None
    speech_model: str | None = None
    timeout: float | None = None


class UpdateSettings(BaseModel):
    dialogue: DialogueSettings | None = None
    active_persona: str | None = None
    cooldowns_ms: dict[Literal["feed", "water", "pet", "play"], int] | None = None


class CheckConnectionBody(BaseModel):
    provider_format: Literal["gemini", "openai", "koboldcpp"] = "gemini"
    provider_url: str = ""
    api_key: str = ""

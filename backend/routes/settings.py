"""Health check, settings, and connection check endpoints."""

import httpx
from fastapi import APIRouter, HTTPException

from backend import companion, storage
from pausepaws.llm import DEFAULT_PROVIDER_URLS
from pausepaws.personas import PERSONAS

from .models import CheckConnectionBody, UpdateSettings

router = APIRouter()

_MODEL_LIST_PATHS = {
    "gemini": "/v1beta/models",
    "openai": "/v1/models",
    "koboldcpp": "/api/v1/model",
}


def _redacted(config: dict) -> dict:
    dialogue = dict(config["dialogue"])
    dialogue["api_key"] = "***" if dialogue.get("api_key") else ""
    return {**config, "dialogue": dialogue}


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.post("/check-connection")
async def check_connection(body: CheckConnectionBody):
    """Quick reachability check against a dialogue provider."""
    base = (body.provider_url or DEFAULT_PROVIDER_URLS[body.provider_format]).rstrip("/")
    url = f"{base}{_MODEL_LIST_PATHS[body.provider_format]}"
    headers: dict[str, str] = {}
    if body.api_key:
        if body.provider_format == "gemini":
            headers["x-goog-api-key"] = body.api_key
        else:
            headers["Authorization"] = f"Bearer {body.api_key}"
    try:
        async with httpx.AsyncClient(timeout=5) as client:
            resp = await client.get(url, headers=headers)
            resp.raise_for_status()
        return {"ok": True}
    except httpx.HTTPError:
        return {"ok": False}


@router.get("/settings")
async def get_settings():
    """Get app settings (dialogue connection, active persona, cooldowns). The api key is masked."""
    return _redacted(storage.get_config())


@router.patch("/settings")
async def update_settings(body: UpdateSettings):
    """Update app settings (partial merge).

    The running session picks up the new dialogue connection and persona at
    once; cooldown changes apply from the next start.
    """
    fields = body.model_dump(exclude_none=True)
    if "active_persona" in fields and fields["active_persona"] not in PERSONAS:
        raise HTTPException(404, "Persona not found")
    config = storage.update_config(fields)
    session = companion.get_session()
    session.use_dialogue(companion.build_dialogue(config["dialogue"]))
    if "active_persona" in fields:
        session.switch_persona(fields["active_persona"])
    return _redacted(config)

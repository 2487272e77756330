"""Persona listing and switching."""

from fastapi import APIRouter, HTTPException

from backend import companion, storage
from pausepaws.personas import PERSONAS, list_personas

from .models import SwitchPersonaBody

router = APIRouter()


@router.get("/personas")
async def get_personas():
    """List the available companions."""
    return [
        {
            "id": p.id,
            "name": p.name,
            "species": p.species,
            "favorite_spot": p.favorite_spot,
            "greeting": p.greeting,
            "check_in_prompt": p.check_in_prompt,
        }
        for p in list_personas()
    ]


@router.post("/session/persona")
async def switch_persona(body: SwitchPersonaBody):
    """Switch the active companion and return its greeting."""
    if body.persona_id not in PERSONAS:
        raise HTTPException(404, "Persona not found")
    session = companion.get_session()
    result = session.switch_persona(body.persona_id)
    storage.update_config({"active_persona": body.persona_id})
    return result.model_dump()

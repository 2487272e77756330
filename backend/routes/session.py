"""Session snapshot, interactions, guided activities and speech."""

from fastapi import APIRouter, HTTPException, Response

from backend import companion
from pausepaws.models import InteractionResult

from .models import ActivityBody, InteractBody, SpeechBody

router = APIRouter()


def _committed(result: InteractionResult) -> dict:
    if not result.stale:
        companion.persist_stats(companion.get_session())
    return result.model_dump()


@router.get("/session")
async def get_session():
    """Current persona, wellbeing stats, mood log and display state."""
    return companion.get_session().snapshot().model_dump()


@router.post("/interact")
async def interact(body: InteractBody):
    """Send a button press, petting gesture or chat line to the companion."""
    if not body.message.strip() and body.location is None:
        raise HTTPException(422, "Message must not be empty")
    session = companion.get_session()
    message = body.message if body.message.strip() else "pet"
    try:
        result = await session.interact(message, source=body.source, location=body.location)
    except ValueError as e:
        raise HTTPException(422, str(e))
    return _committed(result)


@router.post("/activities")
async def start_activity(body: ActivityBody):
    """Start a guided activity (Breathing, Grounding, Stress Ball, ...)."""
    result = await companion.get_session().start_activity(body.name)
    return _committed(result)


@router.post("/speech")
async def speech(body: SpeechBody):
    """Synthesize a line in the companion's voice. 204 when no audio is available."""
    audio = await companion.get_session().speak(body.text)
    if audio is None:
        return Response(status_code=204)
    return Response(content=audio, media_type="application/octet-stream")

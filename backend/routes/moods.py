"""Mood check-in endpoints."""

from fastapi import APIRouter

from backend import companion

from .models import CheckInBody

router = APIRouter()


@router.get("/moods")
async def get_moods():
    """The mood journey log, oldest first."""
    return [m.model_dump() for m in companion.get_session().moods]


@router.post("/moods", status_code=201)
async def check_in(body: CheckInBody):
    """Record a mood and return the companion's reaction with follow-up choices."""
    session = companion.get_session()
    result = session.check_in(body.mood, body.note)
    companion.persist_mood(result.entry)
    companion.persist_stats(session)
    return result.model_dump()

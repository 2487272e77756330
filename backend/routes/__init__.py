"""FastAPI API endpoints under /api.

Endpoint groups: health, settings and check-connection; personas; the
session (snapshot, interact, activities, speech); mood check-ins.
"""

from fastapi import APIRouter

from .moods import router as moods_router
from .personas import router as personas_router
from .session import router as session_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(personas_router)
router.include_router(session_router)
router.include_router(moods_router)

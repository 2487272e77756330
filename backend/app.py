import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.routes import router
from backend import companion, storage
from pausepaws.moods import UnknownMoodError
from pausepaws.personas import UnknownPersonaError

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(data_dir: Path | None = None) -> FastAPI:
    """Build the API app over ``data_dir`` (DATA_DIR env var or ./data)."""
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved)
    companion.init_session()

    app = FastAPI(title="PausePaws")
    app.include_router(router, prefix="/api")

    @app.exception_handler(UnknownPersonaError)
    async def unknown_persona(request: Request, exc: UnknownPersonaError):
        return JSONResponse(status_code=404, content={"detail": f"Persona not found: {exc.args[0]}"})

    @app.exception_handler(UnknownMoodError)
    async def unknown_mood(request: Request, exc: UnknownMoodError):
        return JSONResponse(status_code=422, content={"detail": f"Unknown mood: {exc.args[0]}"})

    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()

from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from .config import LiftSettings, load_settings
from .routes import router

load_dotenv(Path(__file__).parent.parent / ".env")


def create_app(settings: LiftSettings | None = None) -> FastAPI:
    resolved = settings or load_settings()

    app = FastAPI(title="Lift Guide")
    app.state.settings = resolved
    app.state.lift = None
    app.state.events = None
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses LIFT_CONFIG / LIFT_TIME_SCALE env vars)
app = create_app()

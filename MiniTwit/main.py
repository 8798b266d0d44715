from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api import register_routers
from .core.config import get_settings
from .core.logging import configure_logging
from .database import init_db
from .services.commands import CommandTracker


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app(tracker: CommandTracker | None = None) -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Microblogging API with per-session command checkpoint tracking.",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    if tracker is None:
        tracker = CommandTracker(ttl_seconds=settings.SESSION_TTL_SECONDS)
    app.state.command_tracker = tracker

    register_routers(app)

    @app.get("/", tags=["Health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()

from __future__ import annotations

from fastapi import FastAPI

from . import follows, latest, messages, register, timeline
from .errors import register_exception_handlers
from .sessions import register_session_middleware


def register_routers(app: FastAPI) -> None:
    app.include_router(latest.router)
    app.include_router(register.router)
    app.include_router(messages.router)
    app.include_router(follows.router)
    app.include_router(timeline.router)
    register_exception_handlers(app)
    register_session_middleware(app)

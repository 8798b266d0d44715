from __future__ import annotations

import uuid

from fastapi import FastAPI, Request

from ..core.config import get_settings


def register_session_middleware(app: FastAPI) -> None:
    """Hand every cookie-less client its own checkpoint session token."""

    @app.middleware("http")
    async def issue_session_cookie(request: Request, call_next):
        settings = get_settings()
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        issued = token is None
        if issued:
            token = uuid.uuid4().hex
        request.state.session_token = token
        request.state.session_issued = issued

        response = await call_next(request)
        if issued:
            response.set_cookie(
                settings.SESSION_COOKIE_NAME,
                token,
                max_age=settings.SESSION_TTL_SECONDS,
                httponly=True,
            )
        return response

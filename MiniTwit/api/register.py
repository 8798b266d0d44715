from __future__ import annotations

import logging

from fastapi import APIRouter, status

from .. import schemas
from ..services import identity
from .dependencies import DbSession, Latest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/register",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": schemas.ErrorOut}},
)
def register(payload: schemas.RegisterRequest, db: DbSession, latest: Latest):
    logger.info("%s register: registering user %r", latest, payload.username)
    identity.register(db, payload.username, payload.email, payload.pwd)
    return None

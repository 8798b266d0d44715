from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, status

from .. import schemas
from ..errors import NotFound
from ..services import identity, messages, timeline
from .dependencies import DbSession, Latest, PageSize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/msgs", tags=["Messages"])


@router.get("", response_model=List[schemas.FeedEntry])
def list_messages(db: DbSession, latest: Latest, limit: PageSize):
    logger.info("%s msgs: listing %d public messages", latest, limit)
    return timeline.global_feed(db, limit)


@router.get(
    "/{username}",
    response_model=List[schemas.FeedEntry],
    responses={400: {"model": schemas.ErrorOut}},
)
def list_user_messages(username: str, db: DbSession, latest: Latest, limit: PageSize):
    logger.info("%s msgs: listing messages by %r", latest, username)
    try:
        return timeline.user_feed(db, username, limit)
    except NotFound as exc:
        raise NotFound(exc.message, status_code=status.HTTP_400_BAD_REQUEST) from exc


@router.post(
    "/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": schemas.ErrorOut}},
)
def post_message(username: str, payload: schemas.MessageRequest, db: DbSession, latest: Latest):
    logger.info("%s msgs: posting message as %r", latest, username)
    author_id = identity.resolve(db, username)
    if author_id is None:
        raise NotFound(f"User '{username}' not found", status_code=status.HTTP_400_BAD_REQUEST)
    messages.post_message(db, author_id, payload.content)
    return None

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter

from .. import schemas
from ..services import timeline
from .dependencies import DbSession, Latest, PageSize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timeline", tags=["Messages"])


@router.get(
    "/{username}",
    response_model=List[schemas.FeedEntry],
    responses={404: {"model": schemas.ErrorOut}},
)
def home_timeline(username: str, db: DbSession, latest: Latest, limit: PageSize):
    logger.info("%s timeline: home timeline of %r", latest, username)
    return timeline.home_feed(db, username, limit)

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Query, status

from .. import schemas
from ..services import graph, identity, timeline
from .dependencies import DbSession, Latest, PageSize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fllws", tags=["Follows"])


@router.get(
    "/{username}",
    response_model=schemas.FollowsOut,
    responses={404: {"model": schemas.ErrorOut}},
)
def list_follows(
    username: str,
    db: DbSession,
    latest: Latest,
    limit: PageSize,
    direction: Literal["following", "followers"] = Query(
        "following",
        description="'following' lists who the user follows; 'followers' lists who follows the user.",
    ),
):
    logger.info("%s fllws: listing %s of %r", latest, direction, username)
    if direction == "followers":
        return timeline.follower_listing(db, username, limit)
    return timeline.followee_listing(db, username, limit)


@router.post(
    "/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": schemas.ErrorOut}, 404: {"model": schemas.ErrorOut}},
)
def update_follows(username: str, payload: schemas.FollowRequest, db: DbSession, latest: Latest):
    follower_id = identity.require(db, username)
    action, target = payload.action()
    logger.info("%s fllws: %r %ss %r", latest, username, action, target)
    followee_id = identity.require(db, target)
    if action == "follow":
        graph.follow(db, follower_id, followee_id)
    else:
        graph.unfollow(db, follower_id, followee_id)
    return None

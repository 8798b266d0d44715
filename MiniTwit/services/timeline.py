"""Formats feed-shaped responses.

Every feed endpoint goes through :func:`render_feed` so field shape and
hidden-message suppression stay identical across the global, per-user and
home feeds.
"""

from __future__ import annotations

from typing import Iterable, List

from sqlalchemy.orm import Session

from .. import models, schemas
from . import graph, identity, messages


def render_feed(db: Session, rows: Iterable[models.Message]) -> List[schemas.FeedEntry]:
    visible = [message for message in rows if message.visible]
    names = identity.usernames_by_id(db, (message.author_id for message in visible))
    return [
        schemas.FeedEntry(
            username=names[message.author_id],
            content=message.text,
            timestamp=message.pub_date,
        )
        for message in visible
        if message.author_id in names
    ]


def global_feed(db: Session, limit: int) -> List[schemas.FeedEntry]:
    return render_feed(db, messages.list_global(db, limit))


def user_feed(db: Session, username: str, limit: int) -> List[schemas.FeedEntry]:
    user_id = identity.require(db, username)
    return render_feed(db, messages.list_by_author(db, user_id, limit))


def home_feed(db: Session, username: str, limit: int) -> List[schemas.FeedEntry]:
    user_id = identity.require(db, username)
    return render_feed(db, messages.list_home(db, user_id, limit))


def followee_listing(db: Session, username: str, limit: int) -> schemas.FollowsOut:
    user_id = identity.require(db, username)
    return schemas.FollowsOut(followers=graph.list_followees(db, user_id, limit))


def follower_listing(db: Session, username: str, limit: int) -> schemas.FollowsOut:
    user_id = identity.require(db, username)
    return schemas.FollowsOut(followers=graph.list_followers(db, user_id, limit))

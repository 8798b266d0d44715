from __future__ import annotations

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..database import commit
from ..errors import NotFound
from . import identity
from .limits import normalize_limit

logger = logging.getLogger(__name__)


def _ensure_users(db: Session, *user_ids: int) -> None:
    for user_id in user_ids:
        if not identity.exists(db, user_id):
            raise NotFound(f"User {user_id} not found")


def is_following(db: Session, follower_id: int, followee_id: int) -> bool:
    stmt = select(models.Follower.id).where(
        models.Follower.who_id == follower_id,
        models.Follower.whom_id == followee_id,
    )
    return db.scalars(stmt).first() is not None


def follow(db: Session, follower_id: int, followee_id: int) -> None:
    _ensure_users(db, follower_id, followee_id)
    if is_following(db, follower_id, followee_id):
        return
    db.add(models.Follower(who_id=follower_id, whom_id=followee_id))
    try:
        commit(db)
    except IntegrityError:
        # A concurrent request inserted the same edge first.
        if not is_following(db, follower_id, followee_id):
            raise
        logger.debug("Follow edge %s->%s already present", follower_id, followee_id)


def unfollow(db: Session, follower_id: int, followee_id: int) -> None:
    _ensure_users(db, follower_id, followee_id)
    db.execute(
        delete(models.Follower).where(
            models.Follower.who_id == follower_id,
            models.Follower.whom_id == followee_id,
        )
    )
    commit(db)


def list_followees(db: Session, user_id: int, limit: int) -> List[str]:
    """Usernames ``user_id`` follows, oldest edge first."""
    stmt = (
        select(models.Follower.whom_id)
        .where(models.Follower.who_id == user_id)
        .order_by(models.Follower.id.asc())
        .limit(normalize_limit(limit))
    )
    return _usernames_in_order(db, db.scalars(stmt).all())


def list_followers(db: Session, user_id: int, limit: int) -> List[str]:
    """Usernames following ``user_id``, oldest edge first."""
    stmt = (
        select(models.Follower.who_id)
        .where(models.Follower.whom_id == user_id)
        .order_by(models.Follower.id.asc())
        .limit(normalize_limit(limit))
    )
    return _usernames_in_order(db, db.scalars(stmt).all())


def followee_ids(db: Session, user_id: int) -> List[int]:
    stmt = select(models.Follower.whom_id).where(models.Follower.who_id == user_id)
    return list(db.scalars(stmt).all())


def _usernames_in_order(db: Session, user_ids: List[int]) -> List[str]:
    names = identity.usernames_by_id(db, user_ids)
    return [names[user_id] for user_id in user_ids if user_id in names]

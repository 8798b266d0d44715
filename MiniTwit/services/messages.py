from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from .. import models
from ..database import commit
from ..errors import NotFound, ValidationError
from . import graph, identity
from .limits import normalize_limit

logger = logging.getLogger(__name__)


def post_message(db: Session, author_id: int, content: str) -> int:
    if not identity.exists(db, author_id):
        raise NotFound(f"User {author_id} not found")
    if not content or not content.strip():
        raise ValidationError("You have to enter a message")

    message = models.Message(author_id=author_id, text=content, flagged=False)
    db.add(message)
    commit(db)
    db.refresh(message)
    logger.debug("Stored message %s by user %s", message.message_id, author_id)
    return message.message_id


def _visible_newest_first(limit: int):
    return (
        select(models.Message)
        .where(models.Message.flagged.is_(False))
        .order_by(models.Message.pub_date.desc(), models.Message.message_id.desc())
        .limit(normalize_limit(limit))
    )


def list_global(db: Session, limit: int) -> Sequence[models.Message]:
    return db.scalars(_visible_newest_first(limit)).all()


def list_by_author(db: Session, author_id: int, limit: int) -> Sequence[models.Message]:
    if not identity.exists(db, author_id):
        raise NotFound(f"User {author_id} not found")
    stmt = _visible_newest_first(limit).where(models.Message.author_id == author_id)
    return db.scalars(stmt).all()


def list_home(db: Session, user_id: int, limit: int) -> Sequence[models.Message]:
    """Messages by the user and by everyone the user follows."""
    if not identity.exists(db, user_id):
        raise NotFound(f"User {user_id} not found")
    followed = graph.followee_ids(db, user_id)
    stmt = _visible_newest_first(limit).where(
        or_(models.Message.author_id == user_id, models.Message.author_id.in_(followed))
    )
    return db.scalars(stmt).all()


def get_message(db: Session, message_id: int) -> models.Message | None:
    return db.get(models.Message, message_id)


def set_flagged(db: Session, message_id: int, flagged: bool = True) -> models.Message:
    message = get_message(db, message_id)
    if message is None:
        raise NotFound(f"Message {message_id} not found")
    message.flagged = flagged
    commit(db)
    db.refresh(message)
    return message

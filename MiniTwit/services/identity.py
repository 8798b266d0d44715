from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..core import security
from ..database import commit
from ..errors import Conflict, NotFound, ValidationError

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "The username is already taken"


def resolve(db: Session, username: str) -> Optional[int]:
    """Return the user id for ``username``, or None when no such user exists."""
    if not username:
        return None
    stmt = select(models.User.user_id).where(models.User.username == username)
    return db.scalars(stmt).first()


def require(db: Session, username: str) -> int:
    user_id = resolve(db, username)
    if user_id is None:
        raise NotFound(f"User '{username}' not found")
    return user_id


def exists(db: Session, user_id: int) -> bool:
    return db.get(models.User, user_id) is not None


def usernames_by_id(db: Session, user_ids: Iterable[int]) -> Dict[int, str]:
    ids = set(user_ids)
    if not ids:
        return {}
    stmt = select(models.User.user_id, models.User.username).where(models.User.user_id.in_(ids))
    return {user_id: username for user_id, username in db.execute(stmt)}


def check_registration(username: str, email: str, password: str) -> None:
    """Apply the registration rules in order; the first violation wins."""
    if not username:
        raise ValidationError("You have to enter a username")
    if not email or "@" not in email:
        raise ValidationError("You have to enter a valid email address")
    if not password:
        raise ValidationError("You have to enter a password")


def register(db: Session, username: str, email: str, password: str) -> models.User:
    check_registration(username, email, password)
    if resolve(db, username) is not None:
        raise Conflict(USERNAME_TAKEN)

    user = models.User(
        username=username,
        email=email,
        pw_hash=security.get_password_hash(password),
    )
    db.add(user)
    try:
        commit(db)
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same name.
        logger.info("Concurrent registration of %r rejected", username)
        raise Conflict(USERNAME_TAKEN) from exc
    db.refresh(user)
    return user


def verify_password(user: models.User, password: str) -> bool:
    return security.verify_password(password, user.pw_hash)

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from MiniTwit import models
from MiniTwit.errors import Conflict, NotFound, ValidationError
from MiniTwit.services import identity


def _user_count(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(models.User))


def test_resolve_returns_none_for_unknown_user(db_session: Session) -> None:
    assert identity.resolve(db_session, "ghost") is None
    assert identity.resolve(db_session, "") is None


def test_register_then_resolve(db_session: Session) -> None:
    user = identity.register(db_session, "ann", "a@x.com", "p")
    assert identity.resolve(db_session, "ann") == user.user_id
    assert identity.require(db_session, "ann") == user.user_id


def test_require_raises_not_found(db_session: Session) -> None:
    with pytest.raises(NotFound):
        identity.require(db_session, "ghost")


def test_password_is_hashed(db_session: Session) -> None:
    user = identity.register(db_session, "ann", "a@x.com", "secret")
    assert user.pw_hash != "secret"
    assert identity.verify_password(user, "secret")
    assert not identity.verify_password(user, "wrong")


def test_duplicate_username_conflicts(db_session: Session) -> None:
    identity.register(db_session, "ann", "a@x.com", "p")
    with pytest.raises(Conflict) as excinfo:
        identity.register(db_session, "ann", "other@x.com", "q")
    assert excinfo.value.message == "The username is already taken"
    assert _user_count(db_session) == 1


def test_constraint_race_maps_to_conflict(db_session: Session, monkeypatch) -> None:
    identity.register(db_session, "ann", "a@x.com", "p")
    # Simulate a second request whose existence check ran before the first commit.
    monkeypatch.setattr(identity, "resolve", lambda db, username: None)
    with pytest.raises(Conflict):
        identity.register(db_session, "ann", "a@x.com", "p")
    assert _user_count(db_session) == 1


@pytest.mark.parametrize(
    ("username", "email", "password", "message"),
    [
        ("", "", "", "You have to enter a username"),
        ("ann", "", "", "You have to enter a valid email address"),
        ("ann", "no-at-sign", "p", "You have to enter a valid email address"),
        ("ann", "a@x.com", "", "You have to enter a password"),
    ],
)
def test_registration_rules_apply_in_order(
    db_session: Session, username: str, email: str, password: str, message: str
) -> None:
    with pytest.raises(ValidationError) as excinfo:
        identity.register(db_session, username, email, password)
    assert excinfo.value.message == message
    assert _user_count(db_session) == 0


def test_usernames_by_id(db_session: Session) -> None:
    ann = identity.register(db_session, "ann", "a@x.com", "p")
    bob = identity.register(db_session, "bob", "b@x.com", "p")
    assert identity.usernames_by_id(db_session, [ann.user_id, bob.user_id, 999]) == {
        ann.user_id: "ann",
        bob.user_id: "bob",
    }
    assert identity.usernames_by_id(db_session, []) == {}

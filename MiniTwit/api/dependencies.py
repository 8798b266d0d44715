from __future__ import annotations

from typing import Annotated, List, Optional

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..database import get_db
from ..services import commands, limits

DbSession = Annotated[Session, Depends(get_db)]


def get_command_tracker(request: Request) -> commands.CommandTracker:
    return request.app.state.command_tracker


def session_tokens(request: Request) -> List[str]:
    """Sessions a request speaks for.

    A request that arrived without the session cookie has just been issued a
    fresh token; it also counts toward the shared anonymous session so that
    clients which drop cookies still see their checkpoint.
    """
    token = getattr(request.state, "session_token", None)
    if token is None or getattr(request.state, "session_issued", False):
        anonymous = get_settings().ANONYMOUS_SESSION
        return [token, anonymous] if token else [anonymous]
    return [token]


def session_token(tokens: List[str] = Depends(session_tokens)) -> str:
    # The last entry is the anonymous session for cookie-less requests.
    return tokens[-1]


def track_latest(
    latest: Optional[str] = Query(None, description="Sequence number of the command issuing this request."),
    tracker: commands.CommandTracker = Depends(get_command_tracker),
    tokens: List[str] = Depends(session_tokens),
) -> int:
    sequence = commands.parse_sequence(latest)
    for token in tokens:
        checkpoint = tracker.observe(token, sequence)
    return checkpoint


def page_size(
    no: Optional[str] = Query(None, description="Maximum number of entries to return."),
    no_header: Optional[str] = Header(None, alias="no"),
) -> int:
    return limits.normalize_limit(no if no is not None else no_header)


Tracker = Annotated[commands.CommandTracker, Depends(get_command_tracker)]
SessionToken = Annotated[str, Depends(session_token)]
Latest = Annotated[int, Depends(track_latest)]
PageSize = Annotated[int, Depends(page_size)]

from __future__ import annotations

from fastapi import APIRouter

from .. import schemas
from .dependencies import SessionToken, Tracker

router = APIRouter(tags=["Simulator"])


@router.get("/latest", response_model=schemas.LatestOut)
def get_latest(tracker: Tracker, token: SessionToken):
    return schemas.LatestOut(latest=tracker.current_checkpoint(token))

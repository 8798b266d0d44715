from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field

from .errors import ValidationError


class RegisterRequest(BaseModel):
    username: str = ""
    email: str = ""
    pwd: str = Field("", validation_alias=AliasChoices("pwd", "password"))


class MessageRequest(BaseModel):
    content: str = ""


class FollowRequest(BaseModel):
    follow: Optional[str] = None
    unfollow: Optional[str] = None

    def action(self) -> Tuple[str, str]:
        """Return ``("follow" | "unfollow", username)``; exactly one may be set."""
        follow = self.follow or ""
        unfollow = self.unfollow or ""
        if follow and unfollow:
            raise ValidationError("Provide either 'follow' or 'unfollow', not both")
        if follow:
            return "follow", follow
        if unfollow:
            return "unfollow", unfollow
        raise ValidationError("No 'follow' or 'unfollow' provided in request")


class FeedEntry(BaseModel):
    username: str
    content: str
    timestamp: datetime


class FollowsOut(BaseModel):
    followers: List[str] = Field(
        default_factory=list,
        description="Usernames the requested user follows (followees), oldest edge first.",
    )


class LatestOut(BaseModel):
    latest: int


class ErrorOut(BaseModel):
    status: int
    error_msg: str

"""Pydantic models for interests and matches."""
from datetime import datetime

from pydantic import Field

from lifematch.models.matchmaking import InterestStatus
from lifematch.schemas.base import BaseSchema


class InterestCreate(BaseSchema):
    """Request body for sending an interest."""

    recipient: str


class Interest(BaseSchema):
    """Interest between two identities."""

    id: int
    sender: str
    recipient: str
    status: InterestStatus
    created_at: datetime
    updated_at: datetime


class MatchCreate(BaseSchema):
    """Request body for saving a match directly."""

    user2: str
    compatibility_score: int = Field(..., description="Score in [0, 100]")


class Match(BaseSchema):
    """Confirmed match."""

    id: int
    user1: str
    user2: str
    compatibility_score: int
    created_at: datetime

"""SQLAlchemy models for interests and confirmed matches."""
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from lifematch.models.base import Base, utcnow


class InterestStatus(str, Enum):
    """Interest states; only pending can move."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Interest(Base):
    """Expression of interest from sender to recipient."""

    __tablename__ = "interests"
    __table_args__ = (
        CheckConstraint("sender <> recipient", name="ck_interests_not_self"),
        # One pending interest per ordered pair
        Index(
            "uq_interests_pending_pair",
            "sender",
            "recipient",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender: Mapped[str] = mapped_column(String(255), index=True)
    recipient: Mapped[str] = mapped_column(String(255), index=True)
    status: Mapped[str] = mapped_column(String(16), default=InterestStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


def canonical_pair(a: str, b: str) -> tuple[str, str]:
    """Order two identities so an unordered pair has one representation."""
    return (a, b) if a <= b else (b, a)


class Match(Base):
    """Confirmed pairing between two identities."""

    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("user_low", "user_high", name="uq_matches_pair"),
        CheckConstraint(
            "compatibility_score >= 0 AND compatibility_score <= 100",
            name="ck_matches_score_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user1: Mapped[str] = mapped_column(String(255))
    user2: Mapped[str] = mapped_column(String(255))
    user_low: Mapped[str] = mapped_column(String(255), index=True)
    user_high: Mapped[str] = mapped_column(String(255), index=True)
    compatibility_score: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

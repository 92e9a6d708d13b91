"""SQLAlchemy models for job and matrimonial profiles."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lifematch.models.base import Base, utcnow


class JobProfile(Base):
    """Job-seeking profile, at most one per identity."""

    __tablename__ = "job_profiles"

    identity: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    education: Mapped[str] = mapped_column(Text, default="")
    location: Mapped[str] = mapped_column(String(255), default="")
    profession: Mapped[str] = mapped_column(String(255), default="")
    experience: Mapped[int] = mapped_column(Integer, default=0)
    min_salary: Mapped[int] = mapped_column(Integer)
    max_salary: Mapped[int] = mapped_column(Integer)
    resume: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class MatrimonialProfile(Base):
    """Matrimonial profile, at most one per identity."""

    __tablename__ = "matrimonial_profiles"

    identity: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    age: Mapped[int] = mapped_column(Integer)
    religion: Mapped[str] = mapped_column(String(255), default="")
    occupation: Mapped[str] = mapped_column(String(255), default="")
    preferred_location: Mapped[str] = mapped_column(String(255), default="")
    min_age: Mapped[int] = mapped_column(Integer)
    max_age: Mapped[int] = mapped_column(Integer)
    profile_picture: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

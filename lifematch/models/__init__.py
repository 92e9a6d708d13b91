"""SQLAlchemy models for the application."""
from lifematch.models.base import Base
from lifematch.models.job import (
    APPLICATION_TRANSITIONS,
    ApplicationStatus,
    JobApplication,
    JobListing,
)
from lifematch.models.matchmaking import Interest, InterestStatus, Match, canonical_pair
from lifematch.models.message import Message
from lifematch.models.profile import JobProfile, MatrimonialProfile
from lifematch.models.user import UserRole

__all__ = [
    "APPLICATION_TRANSITIONS",
    "ApplicationStatus",
    "Base",
    "Interest",
    "InterestStatus",
    "JobApplication",
    "JobListing",
    "JobProfile",
    "Match",
    "MatrimonialProfile",
    "Message",
    "UserRole",
    "canonical_pair",
]

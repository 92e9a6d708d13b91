"""Pydantic schemas for the API."""
from lifematch.schemas.base import BaseSchema, ErrorResponse, StatusResponse
from lifematch.schemas.job import (
    ApplicationStatusUpdate,
    JobApplication,
    JobListing,
    JobListingCreate,
    JobSearchParams,
)
from lifematch.schemas.matchmaking import Interest, InterestCreate, Match, MatchCreate
from lifematch.schemas.message import Message, MessageCreate
from lifematch.schemas.profile import (
    JobProfile,
    MatrimonialListing,
    MatrimonialProfile,
    UserProfile,
)
from lifematch.schemas.recommendation import (
    JobRecommendation,
    MatrimonialRecommendation,
    RecommendationResult,
    Recommendations,
)
from lifematch.schemas.user import AdminStatus, RoleAssignment, RoleResponse, UserSummary

__all__ = [
    "AdminStatus",
    "ApplicationStatusUpdate",
    "BaseSchema",
    "ErrorResponse",
    "Interest",
    "InterestCreate",
    "JobApplication",
    "JobListing",
    "JobListingCreate",
    "JobProfile",
    "JobRecommendation",
    "JobSearchParams",
    "Match",
    "MatchCreate",
    "MatrimonialListing",
    "MatrimonialProfile",
    "MatrimonialRecommendation",
    "Message",
    "MessageCreate",
    "RecommendationResult",
    "Recommendations",
    "RoleAssignment",
    "RoleResponse",
    "StatusResponse",
    "UserProfile",
    "UserSummary",
]

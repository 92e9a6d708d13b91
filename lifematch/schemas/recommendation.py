"""Pydantic models for recommendation results."""
from typing import List

from lifematch.schemas.base import BaseSchema
from lifematch.schemas.job import JobListing
from lifematch.schemas.profile import MatrimonialProfile


class JobRecommendation(BaseSchema):
    """Listing scored against the caller's job profile."""

    job: JobListing
    match_score: int
    reason: str


class MatrimonialRecommendation(BaseSchema):
    """Candidate scored against the caller's matrimonial profile."""

    identity: str
    profile: MatrimonialProfile
    compatibility_score: int
    reason: str


class Recommendations(BaseSchema):
    jobs: List[JobRecommendation] = []
    matches: List[MatrimonialRecommendation] = []


class RecommendationResult(BaseSchema):
    """Both ranked lists plus their reasons, jobs first."""

    recommendations: Recommendations
    explanations: List[str] = []

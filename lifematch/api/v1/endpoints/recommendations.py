"""Recommendation endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db, get_limit
from lifematch.schemas.recommendation import (
    JobRecommendation,
    MatrimonialRecommendation,
    RecommendationResult,
)
from lifematch.services.recommendation import RecommendationService

router = APIRouter()


@router.get("", response_model=RecommendationResult)
async def get_recommendations(
    limit: int = Depends(get_limit),
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> RecommendationResult:
    """Ranked jobs and matches for the caller, with their reasons."""
    return await RecommendationService(session).get_recommendations(caller, limit)


@router.get("/jobs", response_model=List[JobRecommendation])
async def get_recommended_jobs(
    limit: int = Depends(get_limit),
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[JobRecommendation]:
    return await RecommendationService(session).get_recommended_jobs(caller, limit)


@router.get("/matches", response_model=List[MatrimonialRecommendation])
async def get_recommended_matches(
    limit: int = Depends(get_limit),
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[MatrimonialRecommendation]:
    return await RecommendationService(session).get_recommended_matches(caller, limit)

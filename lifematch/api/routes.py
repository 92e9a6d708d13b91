"""API router configuration."""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.api.v1.endpoints import (
    access,
    applications,
    interests,
    jobs,
    matches,
    messages,
    profiles,
    recommendations,
    users,
)
from lifematch.core.config import settings
from lifematch.core.dependencies import get_db
from lifematch.core.logging import get_logger

logger = get_logger(__name__)

# Create API router
router = APIRouter(prefix="/v1")

router.include_router(access.router, prefix="/access", tags=["access"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
router.include_router(applications.router, prefix="/applications", tags=["applications"])
router.include_router(interests.router, prefix="/interests", tags=["interests"])
router.include_router(matches.router, prefix="/matches", tags=["matches"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
router.include_router(
    recommendations.router, prefix="/recommendations", tags=["recommendations"]
)


@router.get("/health", tags=["health"])
async def health_check(session: AsyncSession = Depends(get_db)) -> Dict:
    """Check service health.

    Returns:
        Dict containing health status
    """
    database = True
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        database = False

    return {
        "status": "healthy" if database else "degraded",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {"database": database},
    }

"""Recommendation service: snapshot the catalog and profiles, then rank."""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import Operation
from lifematch.core.config import settings
from lifematch.core.logging import get_logger
from lifematch.database import serialized_transaction
from lifematch.repositories.job import JobRepository
from lifematch.repositories.matchmaking import MatchRepository
from lifematch.repositories.profile import ProfileRepository
from lifematch.schemas.job import JobListing
from lifematch.schemas.profile import JobProfile, MatrimonialProfile
from lifematch.schemas.recommendation import (
    JobRecommendation,
    MatrimonialRecommendation,
    RecommendationResult,
    Recommendations,
)
from lifematch.services.access import AccessService
from lifematch.services.scoring import score_compatibility, score_job

logger = get_logger(__name__)


@dataclass
class RecommendationSnapshot:
    """Detached copy of everything scoring needs for one caller."""

    job_profile: Optional[JobProfile] = None
    matrimonial_profile: Optional[MatrimonialProfile] = None
    listings: List[JobListing] = field(default_factory=list)
    candidates: List[Tuple[str, MatrimonialProfile]] = field(default_factory=list)


def rank_jobs(
    profile: Optional[JobProfile],
    listings: List[JobListing],
    limit: int,
) -> List[JobRecommendation]:
    """Score listings for a profile, best first, ties by lower listing id."""
    if profile is None:
        return []
    scored = []
    for listing in listings:
        breakdown = score_job(profile, listing)
        scored.append(
            JobRecommendation(job=listing, match_score=breakdown.score, reason=breakdown.reason)
        )
    scored.sort(key=lambda r: (-r.match_score, r.job.id))
    return scored[:limit]


def rank_matches(
    profile: Optional[MatrimonialProfile],
    candidates: List[Tuple[str, MatrimonialProfile]],
    limit: int,
) -> List[MatrimonialRecommendation]:
    """Score candidates for a profile, best first, ties by identity."""
    if profile is None:
        return []
    scored = []
    for identity, candidate in candidates:
        breakdown = score_compatibility(profile, candidate)
        scored.append(
            MatrimonialRecommendation(
                identity=identity,
                profile=candidate,
                compatibility_score=breakdown.score,
                reason=breakdown.reason,
            )
        )
    scored.sort(key=lambda r: (-r.compatibility_score, r.identity))
    return scored[:limit]


class RecommendationService:
    """Ranked, explained job and match suggestions for the caller."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.access = AccessService(session)
        self.profiles = ProfileRepository(session)
        self.jobs = JobRepository(session)
        self.matches = MatchRepository(session)

    async def load_snapshot(
        self,
        caller: Optional[str],
        include_jobs: bool = True,
        include_matches: bool = True,
    ) -> RecommendationSnapshot:
        """Read a consistent snapshot under the write lock."""
        snapshot = RecommendationSnapshot()
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.READ_RECOMMENDATIONS)
            if include_jobs:
                job_profile = await self.profiles.get_job_profile(caller)
                if job_profile is not None:
                    snapshot.job_profile = JobProfile.model_validate(job_profile)
                    snapshot.listings = [
                        JobListing.model_validate(row) for row in await self.jobs.list_listings()
                    ]
            if include_matches:
                own = await self.profiles.get_matrimonial_profile(caller)
                if own is not None:
                    snapshot.matrimonial_profile = MatrimonialProfile.model_validate(own)
                    excluded = {caller} | await self.matches.matched_identities(caller)
                    snapshot.candidates = [
                        (row.identity, MatrimonialProfile.model_validate(row))
                        for row in await self.profiles.list_matrimonial_profiles(exclude=excluded)
                    ]
        return snapshot

    async def get_recommended_jobs(
        self,
        caller: Optional[str],
        limit: Optional[int] = None,
    ) -> List[JobRecommendation]:
        snapshot = await self.load_snapshot(caller, include_matches=False)
        ranked = rank_jobs(snapshot.job_profile, snapshot.listings, limit or settings.MAX_RECOMMENDATIONS)
        logger.info("Job recommendations computed", identity=caller, count=len(ranked))
        return ranked

    async def get_recommended_matches(
        self,
        caller: Optional[str],
        limit: Optional[int] = None,
    ) -> List[MatrimonialRecommendation]:
        snapshot = await self.load_snapshot(caller, include_jobs=False)
        ranked = rank_matches(
            snapshot.matrimonial_profile,
            snapshot.candidates,
            limit or settings.MAX_RECOMMENDATIONS,
        )
        logger.info("Match recommendations computed", identity=caller, count=len(ranked))
        return ranked

    async def get_recommendations(
        self,
        caller: Optional[str],
        limit: Optional[int] = None,
    ) -> RecommendationResult:
        """Both ranked lists plus their reasons, job reasons first."""
        limit = limit or settings.MAX_RECOMMENDATIONS
        snapshot = await self.load_snapshot(caller)
        jobs = rank_jobs(snapshot.job_profile, snapshot.listings, limit)
        matches = rank_matches(snapshot.matrimonial_profile, snapshot.candidates, limit)
        return RecommendationResult(
            recommendations=Recommendations(jobs=jobs, matches=matches),
            explanations=[r.reason for r in jobs] + [r.reason for r in matches],
        )

"""Profile repository for job and matrimonial profiles."""
import logging
from typing import Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.exceptions import InvalidInputError
from lifematch.models.profile import JobProfile, MatrimonialProfile
from lifematch.repositories.base import BaseRepository
from lifematch.schemas.profile import (
    JobProfile as JobProfileSchema,
    MatrimonialProfile as MatrimonialProfileSchema,
    UserProfile,
)

logger = logging.getLogger(__name__)


def validate_job_profile(profile: JobProfileSchema) -> None:
    """Reject job profiles with missing names or malformed ranges.

    Raises:
        InvalidInputError: If a field is out of range
    """
    if not profile.name.strip():
        raise InvalidInputError("name is required", field="name")
    if profile.experience < 0:
        raise InvalidInputError("experience must be non-negative", field="experience")
    if profile.min_salary < 0 or profile.max_salary < 0:
        raise InvalidInputError("salary bounds must be non-negative", field="min_salary")
    if profile.min_salary > profile.max_salary:
        raise InvalidInputError("min_salary must not exceed max_salary", field="min_salary")


def validate_matrimonial_profile(profile: MatrimonialProfileSchema) -> None:
    """Reject matrimonial profiles with missing names or malformed ranges.

    Raises:
        InvalidInputError: If a field is out of range
    """
    if not profile.name.strip():
        raise InvalidInputError("name is required", field="name")
    if profile.age <= 0:
        raise InvalidInputError("age must be positive", field="age")
    if profile.min_age <= 0:
        raise InvalidInputError("min_age must be positive", field="min_age")
    if profile.min_age > profile.max_age:
        raise InvalidInputError("min_age must not exceed max_age", field="min_age")


class ProfileRepository:
    """Repository for both profile tables, keyed by identity."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with a session."""
        self.session = session
        self.jobs = BaseRepository(JobProfile, session)
        self.matrimonial = BaseRepository(MatrimonialProfile, session)

    async def get_job_profile(self, identity: str) -> Optional[JobProfile]:
        return await self.jobs.get(identity)

    async def get_matrimonial_profile(self, identity: str) -> Optional[MatrimonialProfile]:
        return await self.matrimonial.get(identity)

    async def get_profile(self, identity: str) -> Optional[UserProfile]:
        """Get both sub-profiles of an identity.

        Returns:
            UserProfile, or None when neither sub-profile exists
        """
        job = await self.get_job_profile(identity)
        matrimonial = await self.get_matrimonial_profile(identity)
        if job is None and matrimonial is None:
            return None
        return UserProfile(
            job_profile=JobProfileSchema.model_validate(job) if job else None,
            matrimonial_profile=(
                MatrimonialProfileSchema.model_validate(matrimonial) if matrimonial else None
            ),
        )

    async def put_job_profile(self, identity: str, profile: JobProfileSchema) -> JobProfile:
        """Create or replace the job profile of an identity.

        Raises:
            InvalidInputError: If the profile fails validation
        """
        validate_job_profile(profile)
        values = profile.model_dump()
        existing = await self.get_job_profile(identity)
        if existing is None:
            row = await self.jobs.create(identity=identity, **values)
        else:
            row = await self.jobs.update(existing, **values)
        logger.info("Stored job profile for %s", identity)
        return row

    async def put_matrimonial_profile(
        self,
        identity: str,
        profile: MatrimonialProfileSchema,
    ) -> MatrimonialProfile:
        """Create or replace the matrimonial profile of an identity.

        Raises:
            InvalidInputError: If the profile fails validation
        """
        validate_matrimonial_profile(profile)
        values = profile.model_dump()
        existing = await self.get_matrimonial_profile(identity)
        if existing is None:
            row = await self.matrimonial.create(identity=identity, **values)
        else:
            row = await self.matrimonial.update(existing, **values)
        logger.info("Stored matrimonial profile for %s", identity)
        return row

    async def put_profile(self, identity: str, profile: UserProfile) -> None:
        """Replace both sub-profiles; an absent sub-profile is deleted.

        Both sub-profiles are validated before anything is written.
        """
        if profile.job_profile is not None:
            validate_job_profile(profile.job_profile)
        if profile.matrimonial_profile is not None:
            validate_matrimonial_profile(profile.matrimonial_profile)

        if profile.job_profile is not None:
            await self.put_job_profile(identity, profile.job_profile)
        else:
            await self.delete_job_profile(identity)

        if profile.matrimonial_profile is not None:
            await self.put_matrimonial_profile(identity, profile.matrimonial_profile)
        else:
            await self.delete_matrimonial_profile(identity)

    async def delete_job_profile(self, identity: str) -> bool:
        row = await self.get_job_profile(identity)
        if row is None:
            return False
        await self.jobs.delete(row)
        return True

    async def delete_matrimonial_profile(self, identity: str) -> bool:
        row = await self.get_matrimonial_profile(identity)
        if row is None:
            return False
        await self.matrimonial.delete(row)
        return True

    async def list_matrimonial_profiles(
        self,
        exclude: Iterable[str] = (),
        search: Optional[str] = None,
    ) -> List[MatrimonialProfile]:
        """List matrimonial profiles ordered by identity.

        Args:
            exclude: Identities to leave out
            search: Case-insensitive substring of the profile name

        Returns:
            Matching profiles
        """
        query = select(MatrimonialProfile).order_by(MatrimonialProfile.identity)
        excluded = list(exclude)
        if excluded:
            query = query.where(MatrimonialProfile.identity.not_in(excluded))
        if search:
            query = query.where(
                func.lower(MatrimonialProfile.name).contains(search.strip().lower(), autoescape=True)
            )
        return await self.matrimonial.list(query)

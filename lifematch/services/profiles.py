"""Profile service: the caller's own profiles and browsing others."""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import Operation
from lifematch.core.logging import get_logger
from lifematch.database import serialized_transaction
from lifematch.repositories.profile import ProfileRepository
from lifematch.schemas.profile import (
    JobProfile,
    MatrimonialListing,
    MatrimonialProfile,
    UserProfile,
)
from lifematch.services.access import AccessService

logger = get_logger(__name__)


class ProfileService:
    """Reads and writes of job and matrimonial profiles."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.access = AccessService(session)
        self.profiles = ProfileRepository(session)

    async def get_caller_profile(self, caller: Optional[str]) -> Optional[UserProfile]:
        await self.access.authorize(caller, Operation.READ_PROFILE)
        return await self.profiles.get_profile(caller)

    async def save_caller_profile(self, caller: Optional[str], profile: UserProfile) -> UserProfile:
        """Replace both of the caller's sub-profiles wholesale."""
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.WRITE_PROFILE)
            await self.profiles.put_profile(caller, profile)
        logger.info(
            "Profile saved",
            identity=caller,
            has_job_profile=profile.job_profile is not None,
            has_matrimonial_profile=profile.matrimonial_profile is not None,
        )
        return profile

    async def save_job_profile(self, caller: Optional[str], profile: JobProfile) -> JobProfile:
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.WRITE_PROFILE)
            row = await self.profiles.put_job_profile(caller, profile)
        logger.info("Job profile saved", identity=caller)
        return JobProfile.model_validate(row)

    async def save_matrimonial_profile(
        self,
        caller: Optional[str],
        profile: MatrimonialProfile,
    ) -> MatrimonialProfile:
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.WRITE_PROFILE)
            row = await self.profiles.put_matrimonial_profile(caller, profile)
        logger.info("Matrimonial profile saved", identity=caller)
        return MatrimonialProfile.model_validate(row)

    async def get_user_profile(self, caller: Optional[str], identity: str) -> Optional[UserProfile]:
        """Another identity's full profile (self or admin)."""
        await self.access.authorize_self_or_admin(caller, identity, Operation.READ_PROFILE)
        return await self.profiles.get_profile(identity)

    async def get_job_profile(self, caller: Optional[str], identity: str) -> Optional[JobProfile]:
        """Another identity's job profile (self or admin)."""
        await self.access.authorize_self_or_admin(caller, identity, Operation.READ_PROFILE)
        row = await self.profiles.get_job_profile(identity)
        return JobProfile.model_validate(row) if row else None

    async def get_matrimonial_profile(
        self,
        caller: Optional[str],
        identity: str,
    ) -> Optional[MatrimonialProfile]:
        """Any identity's matrimonial profile; readable by every user."""
        await self.access.authorize(caller, Operation.BROWSE_PROFILES)
        row = await self.profiles.get_matrimonial_profile(identity)
        return MatrimonialProfile.model_validate(row) if row else None

    async def browse_matrimonial_profiles(
        self,
        caller: Optional[str],
        search: Optional[str] = None,
    ) -> List[MatrimonialListing]:
        """Other identities' matrimonial profiles, optionally filtered by name."""
        await self.access.authorize(caller, Operation.BROWSE_PROFILES)
        rows = await self.profiles.list_matrimonial_profiles(exclude=[caller], search=search)
        return [
            MatrimonialListing(identity=row.identity, profile=MatrimonialProfile.model_validate(row))
            for row in rows
        ]

"""Admin directory: list and delete users."""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import Operation, Role
from lifematch.core.exceptions import NotFoundError
from lifematch.core.logging import get_logger
from lifematch.database import serialized_transaction
from lifematch.repositories.job import ApplicationRepository
from lifematch.repositories.matchmaking import InterestRepository, MatchRepository
from lifematch.repositories.profile import ProfileRepository
from lifematch.repositories.user import RoleRepository
from lifematch.schemas.user import UserSummary
from lifematch.services.access import AccessService

logger = get_logger(__name__)


class DirectoryService:
    """User administration for admins."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.access = AccessService(session)
        self.roles = RoleRepository(session)
        self.profiles = ProfileRepository(session)
        self.applications = ApplicationRepository(session)
        self.interests = InterestRepository(session)
        self.matches = MatchRepository(session)

    async def get_all_users(self, caller: Optional[str]) -> List[UserSummary]:
        """Every identity with a stored role, ordered by identity."""
        await self.access.authorize(caller, Operation.LIST_USERS)
        return [
            UserSummary(identity=row.identity, role=Role(row.role))
            for row in await self.roles.list_all()
        ]

    async def delete_user(self, caller: Optional[str], identity: str) -> None:
        """Remove an identity's role, profiles, applications, interests and matches.

        Messages are kept.

        Raises:
            UnauthorizedError: If the caller is not an admin
            NotFoundError: If the identity has neither a role nor a profile
        """
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.DELETE_USER)
            had_role = await self.roles.remove(identity)
            had_job = await self.profiles.delete_job_profile(identity)
            had_matrimonial = await self.profiles.delete_matrimonial_profile(identity)
            if not (had_role or had_job or had_matrimonial):
                raise NotFoundError(f"User {identity} not found", entity="User", key=identity)
            applications = await self.applications.delete_for_applicant(identity)
            interests = await self.interests.delete_for_identity(identity)
            matches = await self.matches.delete_for_identity(identity)
        logger.info(
            "User deleted",
            caller=caller,
            identity=identity,
            applications=applications,
            interests=interests,
            matches=matches,
        )

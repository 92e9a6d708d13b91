"""Repository for stored identity roles."""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import Role
from lifematch.models.user import UserRole
from lifematch.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class RoleRepository(BaseRepository[UserRole]):
    """Repository for the ``user_roles`` table."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(UserRole, session)

    async def get_role(self, identity: str) -> Optional[Role]:
        """Get the stored role for an identity, None if never assigned."""
        row = await self.get(identity)
        return Role(row.role) if row else None

    async def set_role(self, identity: str, role: Role) -> UserRole:
        """Create or overwrite the role of an identity."""
        row = await self.get(identity)
        if row is None:
            row = await self.create(identity=identity, role=role.value)
        else:
            row = await self.update(row, role=role.value)
        logger.info("Role for %s set to %s", identity, role.value)
        return row

    async def list_all(self) -> List[UserRole]:
        """All identities with a stored role, ordered by identity."""
        return await self.list(select(UserRole).order_by(UserRole.identity))

    async def remove(self, identity: str) -> bool:
        """Delete the role of an identity.

        Returns:
            True if a role was stored
        """
        row = await self.get(identity)
        if row is None:
            return False
        await self.delete(row)
        return True

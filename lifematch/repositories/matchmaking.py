"""Interest and match repositories."""
import logging
from typing import List, Optional, Set

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.exceptions import DatabaseError
from lifematch.models.base import utcnow
from lifematch.models.matchmaking import Interest, InterestStatus, Match, canonical_pair
from lifematch.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class InterestRepository(BaseRepository[Interest]):
    """Repository for interests."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Interest, session)

    async def get_pending(self, sender: str, recipient: str) -> Optional[Interest]:
        """Pending interest for the ordered pair, if any."""
        rows = await self.list(
            select(Interest).where(
                Interest.sender == sender,
                Interest.recipient == recipient,
                Interest.status == InterestStatus.PENDING.value,
            )
        )
        return rows[0] if rows else None

    async def create_pending(self, sender: str, recipient: str) -> Interest:
        return await self.create(
            sender=sender,
            recipient=recipient,
            status=InterestStatus.PENDING.value,
        )

    async def set_status(self, interest: Interest, status: InterestStatus) -> Interest:
        return await self.update(interest, status=status.value, updated_at=utcnow())

    async def list_sent(self, sender: str) -> List[Interest]:
        return await self.list(
            select(Interest).where(Interest.sender == sender).order_by(Interest.id)
        )

    async def list_received(self, recipient: str) -> List[Interest]:
        return await self.list(
            select(Interest).where(Interest.recipient == recipient).order_by(Interest.id)
        )

    async def delete_for_identity(self, identity: str) -> int:
        """Delete interests sent or received by an identity."""
        try:
            result = await self.session.execute(
                delete(Interest).where(
                    or_(Interest.sender == identity, Interest.recipient == identity)
                )
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                message="Failed to delete interests",
                context={"identity": identity},
                original_error=e,
            ) from e
        return result.rowcount or 0


class MatchRepository(BaseRepository[Match]):
    """Repository for matches; pairs are looked up unordered."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Match, session)

    async def get_for_pair(self, a: str, b: str) -> Optional[Match]:
        low, high = canonical_pair(a, b)
        rows = await self.list(
            select(Match).where(Match.user_low == low, Match.user_high == high)
        )
        return rows[0] if rows else None

    async def create_match(self, user1: str, user2: str, score: int) -> Match:
        """Store a match; the unique pair constraint rejects duplicates.

        Raises:
            ConflictError: If the pair already has a match
        """
        low, high = canonical_pair(user1, user2)
        row = await self.create(
            user1=user1,
            user2=user2,
            user_low=low,
            user_high=high,
            compatibility_score=score,
        )
        logger.info("Created match %s between %s and %s (score %s)", row.id, user1, user2, score)
        return row

    async def list_for_identity(self, identity: str) -> List[Match]:
        """Matches where the identity is on either side."""
        return await self.list(
            select(Match)
            .where(or_(Match.user1 == identity, Match.user2 == identity))
            .order_by(Match.id)
        )

    async def matched_identities(self, identity: str) -> Set[str]:
        """Identities already matched with the given one."""
        return {
            m.user2 if m.user1 == identity else m.user1
            for m in await self.list_for_identity(identity)
        }

    async def delete_for_identity(self, identity: str) -> int:
        """Delete matches involving an identity."""
        try:
            result = await self.session.execute(
                delete(Match).where(or_(Match.user1 == identity, Match.user2 == identity))
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                message="Failed to delete matches",
                context={"identity": identity},
                original_error=e,
            ) from e
        return result.rowcount or 0

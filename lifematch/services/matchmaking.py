"""
Interest/match state machine.

Interests move ``pending -> accepted`` or ``pending -> rejected`` and are
terminal afterwards. Accepting an interest creates the pair's match in the
same transaction. A pair never has more than one match, whichever path
created it.
"""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import Operation
from lifematch.core.exceptions import (
    ConflictError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from lifematch.core.logging import get_logger
from lifematch.database import serialized_transaction
from lifematch.models.matchmaking import Interest, InterestStatus, Match
from lifematch.repositories.matchmaking import InterestRepository, MatchRepository
from lifematch.repositories.profile import ProfileRepository
from lifematch.schemas.profile import MatrimonialProfile
from lifematch.services.access import AccessService
from lifematch.services.scoring import compatibility_score

logger = get_logger(__name__)


class MatchmakingService:
    """Sends and answers interests, and records matches."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.access = AccessService(session)
        self.interests = InterestRepository(session)
        self.matches = MatchRepository(session)
        self.profiles = ProfileRepository(session)

    async def send_interest(self, caller: Optional[str], recipient: str) -> Interest:
        """Send a pending interest to another identity.

        Raises:
            UnauthorizedError: If the caller is not a user
            ConflictError: If the recipient is the caller, has no matrimonial
                profile, already has a pending interest from the caller, or is
                already matched with the caller
        """
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.SEND_INTEREST)
            context = {"sender": caller, "recipient": recipient}
            if caller == recipient:
                raise ConflictError("Cannot send interest to yourself", context=context)
            if await self.profiles.get_matrimonial_profile(recipient) is None:
                raise ConflictError("Recipient has no matrimonial profile", context=context)
            if await self.interests.get_pending(caller, recipient) is not None:
                raise ConflictError("Interest already pending", context=context)
            if await self.matches.get_for_pair(caller, recipient) is not None:
                raise ConflictError("Already matched", context=context)
            interest = await self.interests.create_pending(caller, recipient)
        logger.info("Interest sent", interest_id=interest.id, sender=caller, recipient=recipient)
        return interest

    async def _respond(
        self,
        caller: Optional[str],
        interest_id: int,
        status: InterestStatus,
    ) -> Interest:
        await self.access.authorize(caller, Operation.RESPOND_INTEREST)
        interest = await self.interests.get(interest_id)
        if interest is None:
            raise NotFoundError(
                f"Interest {interest_id} not found", entity="Interest", key=interest_id
            )
        if interest.recipient != caller:
            raise UnauthorizedError(
                "Only the recipient may respond to an interest",
                identity=caller,
                operation=Operation.RESPOND_INTEREST.value,
                context={"interest_id": interest_id},
            )
        if interest.status != InterestStatus.PENDING.value:
            raise InvalidStateError(
                f"Interest {interest_id} is already {interest.status}",
                current_state=interest.status,
                context={"interest_id": interest_id},
            )
        return await self.interests.set_status(interest, status)

    async def accept_interest(self, caller: Optional[str], interest_id: int) -> Interest:
        """Accept a pending interest and match its two identities.

        The match is scored by matrimonial compatibility, or 0 when either
        profile is missing. An existing match for the pair is kept as is.

        Raises:
            NotFoundError: If the interest does not exist
            UnauthorizedError: If the caller is not the recipient
            InvalidStateError: If the interest is not pending
        """
        async with serialized_transaction(self.session):
            interest = await self._respond(caller, interest_id, InterestStatus.ACCEPTED)
            if await self.matches.get_for_pair(interest.sender, interest.recipient) is not None:
                logger.info(
                    "Match already exists, skipping creation",
                    interest_id=interest_id,
                    sender=interest.sender,
                    recipient=interest.recipient,
                )
            else:
                score = await self._compatibility(interest.sender, interest.recipient)
                await self.matches.create_match(interest.sender, interest.recipient, score)
        logger.info("Interest accepted", interest_id=interest_id, recipient=caller)
        return interest

    async def reject_interest(self, caller: Optional[str], interest_id: int) -> Interest:
        """Reject a pending interest.

        Raises:
            NotFoundError: If the interest does not exist
            UnauthorizedError: If the caller is not the recipient
            InvalidStateError: If the interest is not pending
        """
        async with serialized_transaction(self.session):
            interest = await self._respond(caller, interest_id, InterestStatus.REJECTED)
        logger.info("Interest rejected", interest_id=interest_id, recipient=caller)
        return interest

    async def save_match(self, caller: Optional[str], user2: str, score: int) -> Match:
        """Record a match directly with a caller-supplied score.

        Raises:
            InvalidInputError: If user2 is the caller or the score is outside [0, 100]
            NotFoundError: If user2 has no matrimonial profile
            ConflictError: If the pair is already matched
        """
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.SAVE_MATCH)
            if user2 == caller:
                raise InvalidInputError("cannot match with yourself", field="user2")
            if not 0 <= score <= 100:
                raise InvalidInputError("score must be within [0, 100]", field="compatibility_score")
            if await self.profiles.get_matrimonial_profile(user2) is None:
                raise NotFoundError(
                    f"No matrimonial profile for {user2}",
                    entity="Matrimonial profile",
                    key=user2,
                )
            if await self.matches.get_for_pair(caller, user2) is not None:
                raise ConflictError("Already matched", context={"user1": caller, "user2": user2})
            match = await self.matches.create_match(caller, user2, score)
        logger.info("Match saved", match_id=match.id, user1=caller, user2=user2, score=score)
        return match

    async def get_sent_interests(self, caller: Optional[str]) -> List[Interest]:
        await self.access.authorize(caller, Operation.READ_INTERESTS)
        return await self.interests.list_sent(caller)

    async def get_received_interests(self, caller: Optional[str]) -> List[Interest]:
        await self.access.authorize(caller, Operation.READ_INTERESTS)
        return await self.interests.list_received(caller)

    async def get_caller_matches(self, caller: Optional[str]) -> List[Match]:
        await self.access.authorize(caller, Operation.READ_MATCHES)
        return await self.matches.list_for_identity(caller)

    async def _compatibility(self, a: str, b: str) -> int:
        first = await self.profiles.get_matrimonial_profile(a)
        second = await self.profiles.get_matrimonial_profile(b)
        return compatibility_score(
            MatrimonialProfile.model_validate(first) if first else None,
            MatrimonialProfile.model_validate(second) if second else None,
        )

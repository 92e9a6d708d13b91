"""Interest endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db
from lifematch.models.matchmaking import Interest as InterestModel
from lifematch.schemas.matchmaking import Interest, InterestCreate
from lifematch.services.matchmaking import MatchmakingService

router = APIRouter()


@router.post("", response_model=Interest, status_code=status.HTTP_201_CREATED)
async def send_interest(
    body: InterestCreate,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> InterestModel:
    """Send an interest to another user."""
    return await MatchmakingService(session).send_interest(caller, body.recipient)


@router.get("/sent", response_model=List[Interest])
async def get_sent_interests(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[InterestModel]:
    return await MatchmakingService(session).get_sent_interests(caller)


@router.get("/received", response_model=List[Interest])
async def get_received_interests(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[InterestModel]:
    return await MatchmakingService(session).get_received_interests(caller)


@router.post("/{interest_id}/accept", response_model=Interest)
async def accept_interest(
    interest_id: int,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> InterestModel:
    """Accept a pending interest addressed to the caller; creates the match."""
    return await MatchmakingService(session).accept_interest(caller, interest_id)


@router.post("/{interest_id}/reject", response_model=Interest)
async def reject_interest(
    interest_id: int,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> InterestModel:
    return await MatchmakingService(session).reject_interest(caller, interest_id)

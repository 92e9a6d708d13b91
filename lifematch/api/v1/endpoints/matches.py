"""Match endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db
from lifematch.models.matchmaking import Match as MatchModel
from lifematch.schemas.matchmaking import Match, MatchCreate
from lifematch.services.matchmaking import MatchmakingService

router = APIRouter()


@router.get("", response_model=List[Match])
async def get_caller_matches(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[MatchModel]:
    return await MatchmakingService(session).get_caller_matches(caller)


@router.post("", response_model=Match, status_code=status.HTTP_201_CREATED)
async def save_match(
    body: MatchCreate,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> MatchModel:
    """Save a match with a caller-supplied compatibility score."""
    return await MatchmakingService(session).save_match(
        caller, body.user2, body.compatibility_score
    )

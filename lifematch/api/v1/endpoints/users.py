"""User directory endpoints (admin)."""
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db
from lifematch.schemas.base import StatusResponse
from lifematch.schemas.user import UserSummary
from lifematch.services.directory import DirectoryService

router = APIRouter()


@router.get("", response_model=List[UserSummary])
async def get_all_users(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[UserSummary]:
    """List every identity with a stored role.

    Returns:
        Users ordered by identity
    """
    return await DirectoryService(session).get_all_users(caller)


@router.delete("/{identity}", response_model=StatusResponse)
async def delete_user(
    identity: str,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> StatusResponse:
    """Delete a user's role, profiles, applications, interests and matches."""
    await DirectoryService(session).delete_user(caller, identity)
    return StatusResponse(message=f"User {identity} deleted")

"""Profile endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db
from lifematch.schemas.profile import (
    JobProfile,
    MatrimonialListing,
    MatrimonialProfile,
    UserProfile,
)
from lifematch.services.profiles import ProfileService

router = APIRouter()


@router.get("/me", response_model=Optional[UserProfile])
async def get_caller_profile(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> Optional[UserProfile]:
    """Get the caller's profile; null when neither sub-profile exists."""
    return await ProfileService(session).get_caller_profile(caller)


@router.put("/me", response_model=UserProfile)
async def save_caller_profile(
    profile: UserProfile,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> UserProfile:
    """Replace the caller's profile; omitted sub-profiles are deleted."""
    return await ProfileService(session).save_caller_profile(caller, profile)


@router.put("/me/job", response_model=JobProfile)
async def save_job_profile(
    profile: JobProfile,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> JobProfile:
    return await ProfileService(session).save_job_profile(caller, profile)


@router.put("/me/matrimonial", response_model=MatrimonialProfile)
async def save_matrimonial_profile(
    profile: MatrimonialProfile,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> MatrimonialProfile:
    return await ProfileService(session).save_matrimonial_profile(caller, profile)


@router.get("/matrimonial", response_model=List[MatrimonialListing])
async def browse_matrimonial_profiles(
    search: Optional[str] = Query(None, description="Substring of the profile name"),
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[MatrimonialListing]:
    """Browse other users' matrimonial profiles."""
    return await ProfileService(session).browse_matrimonial_profiles(caller, search)


@router.get("/{identity}", response_model=Optional[UserProfile])
async def get_user_profile(
    identity: str,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> Optional[UserProfile]:
    return await ProfileService(session).get_user_profile(caller, identity)


@router.get("/{identity}/job", response_model=Optional[JobProfile])
async def get_job_profile(
    identity: str,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> Optional[JobProfile]:
    return await ProfileService(session).get_job_profile(caller, identity)


@router.get("/{identity}/matrimonial", response_model=Optional[MatrimonialProfile])
async def get_matrimonial_profile(
    identity: str,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> Optional[MatrimonialProfile]:
    return await ProfileService(session).get_matrimonial_profile(caller, identity)

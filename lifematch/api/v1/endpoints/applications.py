"""Job application endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db
from lifematch.models.job import JobApplication as JobApplicationModel
from lifematch.schemas.job import ApplicationStatusUpdate, JobApplication
from lifematch.services.jobs import JobService

router = APIRouter()


@router.get("/me", response_model=List[JobApplication])
async def get_caller_applications(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[JobApplicationModel]:
    return await JobService(session).get_caller_applications(caller)


@router.get("/applicant/{identity}", response_model=List[JobApplication])
async def get_applications_by_applicant(
    identity: str,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[JobApplicationModel]:
    """Applications of an identity; readable by that identity or an admin."""
    return await JobService(session).get_applications_by_applicant(caller, identity)


@router.patch("/{application_id}", response_model=JobApplication)
async def update_application_status(
    application_id: int,
    update: ApplicationStatusUpdate,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> JobApplicationModel:
    """Move an application to a new status (admin)."""
    return await JobService(session).update_application_status(
        caller, application_id, update.status
    )

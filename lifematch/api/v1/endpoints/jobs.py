"""Job catalog endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db
from lifematch.models.job import JobApplication as JobApplicationModel
from lifematch.models.job import JobListing as JobListingModel
from lifematch.schemas.base import StatusResponse
from lifematch.schemas.job import (
    JobApplication,
    JobListing,
    JobListingCreate,
    JobSearchParams,
)
from lifematch.services.jobs import JobService

router = APIRouter()


@router.get("", response_model=List[JobListing])
async def get_job_listings(
    search: Optional[str] = Query(None, description="Substring of title or company"),
    location: Optional[str] = Query(None, description="Exact location"),
    category: Optional[str] = Query(None, description="Exact category"),
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[JobListingModel]:
    """List catalog listings ordered by id.

    Args:
        search: Optional title/company filter
        location: Optional location filter
        category: Optional category filter

    Returns:
        Matching listings
    """
    params = JobSearchParams(search=search, location=location, category=category)
    return await JobService(session).get_job_listings(caller, params)


@router.post("", response_model=JobListing, status_code=status.HTTP_201_CREATED)
async def create_job_listing(
    listing: JobListingCreate,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> JobListingModel:
    """Create a listing (admin). A supplied id is ignored."""
    return await JobService(session).create_job_listing(caller, listing)


@router.get("/{job_id}", response_model=JobListing)
async def get_job_listing(
    job_id: int,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> JobListingModel:
    return await JobService(session).get_job_listing(caller, job_id)


@router.put("/{job_id}", response_model=JobListing)
async def update_job_listing(
    job_id: int,
    listing: JobListingCreate,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> JobListingModel:
    return await JobService(session).update_job_listing(caller, job_id, listing)


@router.delete("/{job_id}", response_model=StatusResponse)
async def delete_job_listing(
    job_id: int,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> StatusResponse:
    """Delete a listing and its applications (admin)."""
    await JobService(session).delete_job_listing(caller, job_id)
    return StatusResponse(message=f"Job listing {job_id} deleted")


@router.post(
    "/{job_id}/apply",
    response_model=JobApplication,
    status_code=status.HTTP_201_CREATED,
)
async def apply_for_job(
    job_id: int,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> JobApplicationModel:
    return await JobService(session).apply_for_job(caller, job_id)


@router.get("/{job_id}/applications", response_model=List[JobApplication])
async def get_job_applications(
    job_id: int,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[JobApplicationModel]:
    """Applications to a listing (admin)."""
    return await JobService(session).get_applications_by_job(caller, job_id)

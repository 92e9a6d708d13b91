"""Job catalog and application repositories."""
import logging
from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.exceptions import (
    ConflictError,
    DatabaseError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)
from lifematch.models.job import (
    APPLICATION_TRANSITIONS,
    ApplicationStatus,
    JobApplication,
    JobListing,
)
from lifematch.repositories.base import BaseRepository
from lifematch.schemas.job import JobListingBase

logger = logging.getLogger(__name__)


def validate_listing(listing: JobListingBase) -> None:
    """Reject listings with missing text or a malformed salary range.

    Raises:
        InvalidInputError: If a field is invalid
    """
    for field in ("title", "company", "location"):
        if not getattr(listing, field).strip():
            raise InvalidInputError(f"{field} is required", field=field)
    if listing.min_salary < 0 or listing.max_salary < 0:
        raise InvalidInputError("salary bounds must be non-negative", field="min_salary")
    if listing.min_salary > listing.max_salary:
        raise InvalidInputError("min_salary must not exceed max_salary", field="min_salary")


class JobRepository(BaseRepository[JobListing]):
    """Repository for the job catalog."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with JobListing model."""
        super().__init__(JobListing, session)

    async def get_listing(self, job_id: int) -> JobListing:
        """Get a listing by id.

        Raises:
            NotFoundError: If no listing has this id
        """
        listing = await self.get(job_id)
        if listing is None:
            raise NotFoundError(f"Job listing {job_id} not found", entity="Job listing", key=job_id)
        return listing

    async def create_listing(self, listing: JobListingBase) -> JobListing:
        """Add a listing under a freshly assigned id.

        Args:
            listing: Listing fields; any id on the payload is ignored

        Returns:
            Created listing
        """
        validate_listing(listing)
        values = listing.model_dump(include=set(JobListingBase.model_fields))
        row = await self.create(**values)
        logger.info("Created job listing %s (%s at %s)", row.id, row.title, row.company)
        return row

    async def update_listing(self, job_id: int, listing: JobListingBase) -> JobListing:
        """Replace the fields of an existing listing.

        Raises:
            NotFoundError: If no listing has this id
            InvalidInputError: If the new fields are invalid
        """
        existing = await self.get_listing(job_id)
        validate_listing(listing)
        values = listing.model_dump(include=set(JobListingBase.model_fields))
        return await self.update(existing, **values)

    async def delete_listing(self, job_id: int) -> None:
        """Delete a listing together with its applications.

        Raises:
            NotFoundError: If no listing has this id
        """
        existing = await self.get_listing(job_id)
        try:
            await self.session.execute(
                delete(JobApplication).where(JobApplication.job_id == job_id)
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                message=f"Failed to delete applications of job {job_id}",
                context={"job_id": job_id},
                original_error=e,
            ) from e
        await self.delete(existing)
        logger.info("Deleted job listing %s", job_id)

    async def list_listings(
        self,
        search: Optional[str] = None,
        location: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[JobListing]:
        """List listings ordered by id.

        Args:
            search: Case-insensitive substring of title or company
            location: Case-insensitive exact location
            category: Case-insensitive exact category

        Returns:
            Matching listings
        """
        query = select(JobListing).order_by(JobListing.id)
        if search and search.strip():
            term = search.strip().lower()
            query = query.where(
                or_(
                    func.lower(JobListing.title).contains(term, autoescape=True),
                    func.lower(JobListing.company).contains(term, autoescape=True),
                )
            )
        if location and location.strip():
            query = query.where(func.lower(JobListing.location) == location.strip().lower())
        if category and category.strip():
            query = query.where(func.lower(JobListing.category) == category.strip().lower())
        return await self.list(query)


class ApplicationRepository(BaseRepository[JobApplication]):
    """Repository for job applications."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with JobApplication model."""
        super().__init__(JobApplication, session)

    async def find(self, job_id: int, applicant: str) -> Optional[JobApplication]:
        rows = await self.list(
            select(JobApplication).where(
                JobApplication.job_id == job_id,
                JobApplication.applicant == applicant,
            )
        )
        return rows[0] if rows else None

    async def record_application(self, job_id: int, applicant: str) -> JobApplication:
        """Record an application in status ``submitted``.

        Raises:
            NotFoundError: If the listing does not exist
            ConflictError: If the applicant already applied
        """
        if await self.session.get(JobListing, job_id) is None:
            raise NotFoundError(f"Job listing {job_id} not found", entity="Job listing", key=job_id)
        if await self.find(job_id, applicant) is not None:
            raise ConflictError(
                "Already applied to this job",
                context={"job_id": job_id, "applicant": applicant},
            )
        row = await self.create(
            job_id=job_id,
            applicant=applicant,
            status=ApplicationStatus.SUBMITTED.value,
        )
        logger.info("Recorded application %s of %s to job %s", row.id, applicant, job_id)
        return row

    async def update_status(self, application_id: int, status: ApplicationStatus) -> JobApplication:
        """Move an application to a new status.

        Raises:
            NotFoundError: If the application does not exist
            InvalidStateError: If the transition is not allowed
        """
        row = await self.get(application_id)
        if row is None:
            raise NotFoundError(
                f"Application {application_id} not found",
                entity="Job application",
                key=application_id,
            )
        current = ApplicationStatus(row.status)
        if status not in APPLICATION_TRANSITIONS[current]:
            raise InvalidStateError(
                f"Cannot move application from {current.value} to {status.value}",
                current_state=current.value,
                context={"application_id": application_id},
            )
        return await self.update(row, status=status.value)

    async def list_by_applicant(self, applicant: str) -> List[JobApplication]:
        return await self.list(
            select(JobApplication)
            .where(JobApplication.applicant == applicant)
            .order_by(JobApplication.id)
        )

    async def list_by_job(self, job_id: int) -> List[JobApplication]:
        return await self.list(
            select(JobApplication)
            .where(JobApplication.job_id == job_id)
            .order_by(JobApplication.id)
        )

    async def delete_for_applicant(self, applicant: str) -> int:
        """Delete every application of an identity; returns the count."""
        try:
            result = await self.session.execute(
                delete(JobApplication).where(JobApplication.applicant == applicant)
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                message="Failed to delete applications",
                context={"applicant": applicant},
                original_error=e,
            ) from e
        return result.rowcount or 0

"""Job catalog service: listings and applications."""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import Operation
from lifematch.core.logging import get_logger
from lifematch.database import serialized_transaction
from lifematch.models.job import ApplicationStatus, JobApplication, JobListing
from lifematch.repositories.job import ApplicationRepository, JobRepository
from lifematch.schemas.job import JobListingBase, JobSearchParams
from lifematch.services.access import AccessService

logger = get_logger(__name__)


class JobService:
    """Catalog reads for everyone, writes for admins, applications for users."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.access = AccessService(session)
        self.jobs = JobRepository(session)
        self.applications = ApplicationRepository(session)

    async def get_job_listings(
        self,
        caller: Optional[str],
        params: Optional[JobSearchParams] = None,
    ) -> List[JobListing]:
        await self.access.authorize(caller, Operation.READ_LISTINGS)
        params = params or JobSearchParams()
        return await self.jobs.list_listings(
            search=params.search,
            location=params.location,
            category=params.category,
        )

    async def get_job_listing(self, caller: Optional[str], job_id: int) -> JobListing:
        await self.access.authorize(caller, Operation.READ_LISTINGS)
        return await self.jobs.get_listing(job_id)

    async def create_job_listing(self, caller: Optional[str], listing: JobListingBase) -> JobListing:
        """Add a listing; the catalog assigns its id."""
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.CREATE_LISTING)
            row = await self.jobs.create_listing(listing)
        logger.info("Job listing created", caller=caller, job_id=row.id)
        return row

    async def update_job_listing(
        self,
        caller: Optional[str],
        job_id: int,
        listing: JobListingBase,
    ) -> JobListing:
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.UPDATE_LISTING)
            row = await self.jobs.update_listing(job_id, listing)
        logger.info("Job listing updated", caller=caller, job_id=job_id)
        return row

    async def delete_job_listing(self, caller: Optional[str], job_id: int) -> None:
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.DELETE_LISTING)
            await self.jobs.delete_listing(job_id)
        logger.info("Job listing deleted", caller=caller, job_id=job_id)

    async def apply_for_job(self, caller: Optional[str], job_id: int) -> JobApplication:
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.APPLY_FOR_JOB)
            row = await self.applications.record_application(job_id, caller)
        logger.info("Applied for job", identity=caller, job_id=job_id, application_id=row.id)
        return row

    async def get_caller_applications(self, caller: Optional[str]) -> List[JobApplication]:
        await self.access.authorize(caller, Operation.READ_APPLICATIONS)
        return await self.applications.list_by_applicant(caller)

    async def get_applications_by_applicant(
        self,
        caller: Optional[str],
        applicant: str,
    ) -> List[JobApplication]:
        await self.access.authorize_self_or_admin(caller, applicant, Operation.READ_APPLICATIONS)
        return await self.applications.list_by_applicant(applicant)

    async def get_applications_by_job(self, caller: Optional[str], job_id: int) -> List[JobApplication]:
        """Applications to a listing (admin); unknown listings raise NotFoundError."""
        await self.access.authorize(caller, Operation.READ_JOB_APPLICATIONS)
        await self.jobs.get_listing(job_id)
        return await self.applications.list_by_job(job_id)

    async def update_application_status(
        self,
        caller: Optional[str],
        application_id: int,
        status: ApplicationStatus,
    ) -> JobApplication:
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.UPDATE_APPLICATION_STATUS)
            row = await self.applications.update_status(application_id, status)
        logger.info(
            "Application status updated",
            caller=caller,
            application_id=application_id,
            status=status.value,
        )
        return row

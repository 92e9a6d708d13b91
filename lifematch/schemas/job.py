"""Pydantic models for the job catalog and applications."""
from datetime import datetime
from typing import Optional

from pydantic import Field

from lifematch.models.job import ApplicationStatus
from lifematch.schemas.base import BaseSchema


class JobListingBase(BaseSchema):
    """Editable listing fields."""

    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Hiring company")
    location: str = Field(..., description="Job location")
    category: str = ""
    job_type: str = Field("", description="Employment type, e.g. full-time")
    experience_level: str = Field("", description="Seniority, e.g. Mid-Level")
    min_salary: int = 0
    max_salary: int = 0


class JobListingCreate(JobListingBase):
    """Listing payload; any id supplied by the caller is ignored."""

    id: Optional[int] = None


class JobListing(JobListingBase):
    """Listing as stored in the catalog."""

    id: int


class JobSearchParams(BaseSchema):
    """Optional catalog filters."""

    search: Optional[str] = Field(None, description="Substring of title or company")
    location: Optional[str] = None
    category: Optional[str] = None


class JobApplication(BaseSchema):
    """Application to a listing."""

    id: int
    job_id: int
    applicant: str
    status: ApplicationStatus
    date_applied: datetime


class ApplicationStatusUpdate(BaseSchema):
    """Request body for moving an application to a new status."""

    status: ApplicationStatus

"""Pydantic models for job and matrimonial profiles."""
from typing import Optional

from pydantic import Field

from lifematch.schemas.base import BaseSchema


class JobProfile(BaseSchema):
    """Job-seeking profile."""

    name: str = Field(..., description="Display name")
    education: str = Field("", description="Highest education")
    location: str = Field("", description="Preferred work location")
    profession: str = Field("", description="Current profession")
    experience: int = Field(0, description="Years of experience")
    min_salary: int = Field(..., description="Lower bound of expected salary")
    max_salary: int = Field(..., description="Upper bound of expected salary")
    resume: Optional[str] = Field(None, description="Opaque résumé blob reference")


class MatrimonialProfile(BaseSchema):
    """Matrimonial profile."""

    name: str = Field(..., description="Display name")
    age: int = Field(..., description="Age in years")
    religion: str = ""
    occupation: str = ""
    preferred_location: str = ""
    min_age: int = Field(..., description="Youngest acceptable partner age")
    max_age: int = Field(..., description="Oldest acceptable partner age")
    profile_picture: Optional[str] = Field(None, description="Opaque picture blob reference")


class UserProfile(BaseSchema):
    """Both sub-profiles of an identity; either may be absent."""

    job_profile: Optional[JobProfile] = None
    matrimonial_profile: Optional[MatrimonialProfile] = None


class MatrimonialListing(BaseSchema):
    """Matrimonial profile together with its owner, for browsing."""

    identity: str
    profile: MatrimonialProfile

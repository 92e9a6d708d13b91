"""Pydantic models for roles and the user directory."""
from pydantic import Field

from lifematch.core.access import Role
from lifematch.schemas.base import BaseSchema


class RoleAssignment(BaseSchema):
    """Request body for assigning a role."""

    role: Role = Field(..., description="Role to grant")


class RoleResponse(BaseSchema):
    """Role held by an identity."""

    identity: str | None = None
    role: Role


class AdminStatus(BaseSchema):
    """Whether the caller is an admin."""

    is_admin: bool


class UserSummary(BaseSchema):
    """Identity with its stored role."""

    identity: str
    role: Role

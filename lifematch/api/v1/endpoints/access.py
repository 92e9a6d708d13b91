"""Access control endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db
from lifematch.schemas.user import AdminStatus, RoleAssignment, RoleResponse
from lifematch.services.access import AccessService

router = APIRouter()


@router.post("/initialize", response_model=RoleResponse)
async def initialize_access_control(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> RoleResponse:
    """Grant the caller their default role on first contact.

    Calling it again returns the stored role unchanged.
    """
    role = await AccessService(session).initialize_access_control(caller)
    return RoleResponse(identity=caller, role=role)


@router.put("/roles/{identity}", response_model=RoleResponse)
async def assign_role(
    identity: str,
    assignment: RoleAssignment,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> RoleResponse:
    """Assign a role to an identity (admin only)."""
    role = await AccessService(session).assign_role(caller, identity, assignment.role)
    return RoleResponse(identity=identity, role=role)


@router.get("/role", response_model=RoleResponse)
async def get_caller_role(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> RoleResponse:
    role = await AccessService(session).get_role(caller)
    return RoleResponse(identity=caller, role=role)


@router.get("/is-admin", response_model=AdminStatus)
async def is_caller_admin(
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> AdminStatus:
    return AdminStatus(is_admin=await AccessService(session).is_admin(caller))

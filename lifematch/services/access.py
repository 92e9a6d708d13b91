"""Access gate: role lookup, authorization and role management."""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import AccessDecision, Operation, Role, decide, is_anonymous
from lifematch.core.config import settings
from lifematch.core.exceptions import InvalidInputError, UnauthorizedError
from lifematch.core.logging import get_logger
from lifematch.database import serialized_transaction
from lifematch.repositories.user import RoleRepository

logger = get_logger(__name__)


class AccessService:
    """Role-gated authorization for every operation.

    Callers that run a mutation should call ``authorize`` inside the same
    ``serialized_transaction`` as the mutation itself.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.roles = RoleRepository(session)

    async def get_role(self, identity: Optional[str]) -> Role:
        """Role of an identity; anonymous and unknown identities are guests."""
        if is_anonymous(identity):
            return Role.GUEST
        return await self.roles.get_role(identity) or Role.GUEST

    async def check(self, identity: Optional[str], operation: Operation) -> AccessDecision:
        """Decide without raising."""
        stored = None if is_anonymous(identity) else await self.roles.get_role(identity)
        return decide(identity, stored, operation)

    async def authorize(self, identity: Optional[str], operation: Operation) -> Role:
        """Require the caller to hold the role an operation needs.

        Returns:
            The caller's role

        Raises:
            UnauthorizedError: If the caller's role is too low
        """
        decision = await self.check(identity, operation)
        if not decision.allowed:
            logger.warning(
                "Access denied",
                identity=identity,
                operation=operation.value,
                role=decision.role.value,
                required=decision.required.value,
            )
            raise UnauthorizedError(
                decision.reason,
                identity=identity,
                operation=operation.value,
            )
        return decision.role

    async def authorize_self_or_admin(
        self,
        identity: Optional[str],
        target: str,
        operation: Operation,
    ) -> Role:
        """Authorize an operation on another identity's data.

        Raises:
            UnauthorizedError: Unless the caller is the target or an admin
        """
        role = await self.authorize(identity, operation)
        if identity != target and role is not Role.ADMIN:
            raise UnauthorizedError(
                f"{operation.value} on another identity requires admin",
                identity=identity,
                operation=operation.value,
                context={"target": target},
            )
        return role

    async def is_admin(self, identity: Optional[str]) -> bool:
        return await self.get_role(identity) is Role.ADMIN

    async def initialize_access_control(self, identity: Optional[str]) -> Role:
        """Grant the default role on first contact.

        Repeated calls return the stored role unchanged. Anonymous callers
        are never initialized and stay guests.
        """
        if is_anonymous(identity):
            return Role.GUEST
        async with serialized_transaction(self.session):
            stored = await self.roles.get_role(identity)
            if stored is not None:
                return stored
            role = Role.ADMIN if identity in settings.ADMIN_IDENTITIES else Role.USER
            await self.roles.set_role(identity, role)
        logger.info("Access control initialized", identity=identity, role=role.value)
        return role

    async def assign_role(self, caller: Optional[str], identity: str, role: Role) -> Role:
        """Overwrite the role of an identity (admin only).

        Raises:
            UnauthorizedError: If the caller is not an admin
            InvalidInputError: If the target identity is blank
        """
        async with serialized_transaction(self.session):
            await self.authorize(caller, Operation.ASSIGN_ROLE)
            if is_anonymous(identity):
                raise InvalidInputError("identity is required", field="identity")
            await self.roles.set_role(identity, role)
        logger.info("Role assigned", caller=caller, identity=identity, role=role.value)
        return role

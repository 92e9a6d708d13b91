"""Role model and the per-operation access policy.

The policy is pure: given the caller's stored role it decides whether an
operation may run. Looking roles up and raising on denial is done by
``lifematch.services.access.AccessService``.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Role(str, Enum):
    """Caller roles, ordered guest < user < admin."""

    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def at_least(self, other: "Role") -> bool:
        return self.rank >= other.rank


_RANKS = {Role.GUEST: 0, Role.USER: 1, Role.ADMIN: 2}


class Operation(str, Enum):
    """Operations guarded by the access gate."""

    INITIALIZE_ACCESS = "initialize_access"
    READ_OWN_ROLE = "read_own_role"
    ASSIGN_ROLE = "assign_role"
    LIST_USERS = "list_users"
    DELETE_USER = "delete_user"

    READ_PROFILE = "read_profile"
    WRITE_PROFILE = "write_profile"
    BROWSE_PROFILES = "browse_profiles"

    READ_LISTINGS = "read_listings"
    CREATE_LISTING = "create_listing"
    UPDATE_LISTING = "update_listing"
    DELETE_LISTING = "delete_listing"

    APPLY_FOR_JOB = "apply_for_job"
    READ_APPLICATIONS = "read_applications"
    READ_JOB_APPLICATIONS = "read_job_applications"
    UPDATE_APPLICATION_STATUS = "update_application_status"

    SEND_INTEREST = "send_interest"
    READ_INTERESTS = "read_interests"
    RESPOND_INTEREST = "respond_interest"
    READ_MATCHES = "read_matches"
    SAVE_MATCH = "save_match"

    SEND_MESSAGE = "send_message"
    READ_MESSAGES = "read_messages"

    READ_RECOMMENDATIONS = "read_recommendations"


# Minimum role per operation
OPERATION_POLICY: Dict[Operation, Role] = {
    Operation.INITIALIZE_ACCESS: Role.GUEST,
    Operation.READ_OWN_ROLE: Role.GUEST,
    Operation.READ_LISTINGS: Role.GUEST,
    Operation.ASSIGN_ROLE: Role.ADMIN,
    Operation.LIST_USERS: Role.ADMIN,
    Operation.DELETE_USER: Role.ADMIN,
    Operation.CREATE_LISTING: Role.ADMIN,
    Operation.UPDATE_LISTING: Role.ADMIN,
    Operation.DELETE_LISTING: Role.ADMIN,
    Operation.READ_JOB_APPLICATIONS: Role.ADMIN,
    Operation.UPDATE_APPLICATION_STATUS: Role.ADMIN,
    Operation.READ_PROFILE: Role.USER,
    Operation.WRITE_PROFILE: Role.USER,
    Operation.BROWSE_PROFILES: Role.USER,
    Operation.APPLY_FOR_JOB: Role.USER,
    Operation.READ_APPLICATIONS: Role.USER,
    Operation.SEND_INTEREST: Role.USER,
    Operation.READ_INTERESTS: Role.USER,
    Operation.RESPOND_INTEREST: Role.USER,
    Operation.READ_MATCHES: Role.USER,
    Operation.SAVE_MATCH: Role.USER,
    Operation.SEND_MESSAGE: Role.USER,
    Operation.READ_MESSAGES: Role.USER,
    Operation.READ_RECOMMENDATIONS: Role.USER,
}


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an access check."""

    allowed: bool
    role: Role
    required: Role
    reason: str


def is_anonymous(identity: Optional[str]) -> bool:
    """Callers without an identity token are anonymous."""
    return identity is None or not identity.strip()


def required_role(operation: Operation) -> Role:
    return OPERATION_POLICY[operation]


def decide(
    identity: Optional[str],
    stored_role: Optional[Role],
    operation: Operation,
) -> AccessDecision:
    """Decide whether a caller may run an operation.

    Args:
        identity: Caller identity, None for anonymous callers
        stored_role: Role on record for the identity, None if never assigned
        operation: Operation being attempted

    Returns:
        AccessDecision describing the outcome
    """
    role = Role.GUEST if is_anonymous(identity) or stored_role is None else stored_role
    required = required_role(operation)
    if role.at_least(required):
        return AccessDecision(True, role, required, "allowed")
    return AccessDecision(
        False,
        role,
        required,
        f"{operation.value} requires role {required.value}, caller has {role.value}",
    )

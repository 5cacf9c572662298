"""Role gate and ownership rules applied after identity resolution.

Both are pure decisions over values; ``enforce`` is the single place that
turns a denial into the error the HTTP layer reports.
"""

from dataclasses import dataclass
from enum import Enum

from micropost.core.errors import AuthenticationError, AuthFailure, ForbiddenError
from micropost.services.identity import Identity


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


VALID_ROLES = frozenset(r.value for r in Role)


class Action(str, Enum):
    EDIT = "edit"
    DELETE = "delete"


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class RoleRequirement:
    """Roles allowed on a protected route."""

    allowed_roles: frozenset[Role]

    @classmethod
    def of(cls, *roles: Role) -> "RoleRequirement":
        return cls(allowed_roles=frozenset(roles))

    def describe(self) -> str:
        return ", ".join(sorted(r.value for r in self.allowed_roles))


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class Deny:
    reason: DenyReason
    message: str


Decision = Allow | Deny

ADMIN_ONLY = RoleRequirement.of(Role.ADMIN)


def require_role(identity: Identity | None, requirement: RoleRequirement) -> Decision:
    """Allow iff identity is present and its role is one of the allowed roles."""
    if identity is None:
        return Deny(DenyReason.UNAUTHENTICATED, "Not authorized, user not authenticated.")
    if identity.role not in {r.value for r in requirement.allowed_roles}:
        return Deny(
            DenyReason.FORBIDDEN,
            f"Access denied. One of the following roles is required: {requirement.describe()}.",
        )
    return Allow()


def enforce(decision: Decision) -> None:
    """Raise the matching error for a Deny; return quietly for Allow."""
    if isinstance(decision, Allow):
        return
    if decision.reason is DenyReason.UNAUTHENTICATED:
        raise AuthenticationError(decision.message, kind=AuthFailure.NO_TOKEN)
    raise ForbiddenError(decision.message)


def can_mutate(identity: Identity, owner_id: int, action: Action) -> bool:
    """Authors may edit and delete their own content; admins may also delete anyone's."""
    if identity.id == owner_id:
        return True
    return action is Action.DELETE and identity.role == Role.ADMIN.value


def can_delete_user(identity: Identity, target_id: int) -> bool:
    """Admins may not delete their own account."""
    return identity.id != target_id

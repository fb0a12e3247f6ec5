"""
Authorization gate.

``decide`` is a pure function of the caller's verified ``RequestContext``, the
access rule an endpoint declares and, for single-resource endpoints, the owner
and assignee of the resource. ``enforce`` maps a refusal onto the matching
application error.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from helpdesk.core.exceptions import (
    EntityNotFoundException,
    ForbiddenException,
    UnauthorizedException,
)
from helpdesk.domain.models.enums import UserRole


@dataclass(frozen=True)
class RequestContext:
    """Verified identity of the caller for one request."""

    user_id: int
    name: str
    role: UserRole

    @property
    def is_staff(self) -> bool:
        return self.role in (UserRole.MANAGER, UserRole.ADMIN)


@dataclass(frozen=True)
class Resource:
    owner_id: int
    assignee_id: Optional[int] = None

    @classmethod
    def of(cls, entity) -> "Resource":
        """Build from any model with ``client_id``/``assigned_to_id`` (or a User)."""
        owner_id = getattr(entity, "client_id", None)
        if owner_id is None:
            owner_id = entity.id
        return cls(owner_id=owner_id, assignee_id=getattr(entity, "assigned_to_id", None))


class Access(enum.Enum):
    OWNER = "owner"        # the client who owns it, or any staff member
    STAFF = "staff"        # manager-wide endpoints
    ASSIGNEE = "assignee"  # managers only when assigned; admins always
    ADMIN = "admin"


class Decision(enum.Enum):
    ALLOW = "allow"
    FORBID = "forbid"
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"


_RESOURCE_SCOPED = (Access.OWNER, Access.ASSIGNEE)


def decide(
    ctx: Optional[RequestContext],
    access: Access,
    resource: Optional[Resource] = None,
) -> Decision:
    if ctx is None:
        return Decision.UNAUTHENTICATED

    if access in _RESOURCE_SCOPED and resource is None:
        return Decision.NOT_FOUND

    if ctx.role is UserRole.ADMIN:
        return Decision.ALLOW

    if ctx.role is UserRole.MANAGER:
        if access in (Access.STAFF, Access.OWNER):
            return Decision.ALLOW
        if access is Access.ASSIGNEE:
            if resource.assignee_id == ctx.user_id:
                return Decision.ALLOW
            return Decision.FORBID
        return Decision.FORBID

    if ctx.role is UserRole.USER:
        if access is Access.OWNER and resource.owner_id == ctx.user_id:
            return Decision.ALLOW
        return Decision.FORBID

    raise AssertionError(f"Unhandled role: {ctx.role!r}")


def enforce(
    ctx: Optional[RequestContext],
    access: Access,
    resource: Optional[Resource] = None,
    *,
    entity_name: str = "Resource",
) -> None:
    """Raise the application error for anything other than ``ALLOW``."""
    decision = decide(ctx, access, resource)
    if decision is Decision.ALLOW:
        return
    if decision is Decision.UNAUTHENTICATED:
        raise UnauthorizedException("Not authenticated")
    if decision is Decision.NOT_FOUND:
        raise EntityNotFoundException(f"{entity_name} not found")
    raise ForbiddenException(f"Access to this {entity_name.lower()} is not allowed")

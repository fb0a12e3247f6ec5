"""User service — profile reads, admin user management and guarded deletion."""

from typing import List, Optional

import structlog

from helpdesk.application.services.auth_service import create_user, ensure_unique_contact
from helpdesk.core.exceptions import (
    EntityNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from helpdesk.domain.access import Access, RequestContext, Resource, enforce
from helpdesk.domain.lifecycle import parse_enum
from helpdesk.domain.models.enums import UserRole
from helpdesk.domain.models.user import User
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.domain.schemas.user import UserCreate, UserRoleUpdate, UserUpdate

logger = structlog.get_logger(__name__)


def _load(users: UserRepository, ctx: Optional[RequestContext], user_id: int, access: Access) -> User:
    user = users.get_by_id(user_id)
    enforce(ctx, access, Resource.of(user) if user else None, entity_name="User")
    return user


def list_users(users: UserRepository, ctx: Optional[RequestContext]) -> List[User]:
    enforce(ctx, Access.STAFF)
    return users.list_by_name()


def get_user(users: UserRepository, ctx: Optional[RequestContext], user_id: int) -> User:
    return _load(users, ctx, user_id, Access.OWNER)


def get_me(users: UserRepository, ctx: Optional[RequestContext]) -> User:
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    return _load(users, ctx, ctx.user_id, Access.OWNER)


def create_user_as_admin(users: UserRepository, ctx: Optional[RequestContext], body: UserCreate) -> User:
    enforce(ctx, Access.ADMIN)
    role = parse_enum(UserRole, body.role, "role")
    return create_user(
        users,
        name=body.name,
        email=body.email,
        password=body.password,
        role=role,
        phone=body.phone,
    )


def update_user(users: UserRepository, ctx: Optional[RequestContext], user_id: int, body: UserUpdate) -> User:
    """Update name, email and phone. Role changes go through ``change_role``."""
    user = _load(users, ctx, user_id, Access.OWNER)
    ensure_unique_contact(users, body.email, body.phone, exclude_id=user.id)

    user.name = body.name
    if body.email:
        user.email = body.email
    if "phone" in body.model_fields_set:
        user.phone = body.phone
    users.save(user, "update_profile")
    logger.info("User profile updated", user_id=user.id, by=ctx.user_id)
    return user


def change_role(users: UserRepository, ctx: Optional[RequestContext], user_id: int, body: UserRoleUpdate) -> User:
    enforce(ctx, Access.ADMIN)
    user = users.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found")
    new_role = parse_enum(UserRole, body.role, "role")
    if user.role == UserRole.ADMIN and new_role != UserRole.ADMIN and users.count_admins() <= 1:
        raise ValidationException("The last administrator cannot be demoted")

    user.role = new_role
    users.save(user, "change_role")
    logger.info("User role changed", user_id=user.id, role=new_role.value, by=ctx.user_id)
    return user


def delete_user(users: UserRepository, ctx: Optional[RequestContext], user_id: int) -> None:
    enforce(ctx, Access.ADMIN)
    user = users.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found")
    if user.role == UserRole.ADMIN and users.count_admins() <= 1:
        raise ValidationException("The last administrator cannot be deleted")
    if users.has_related_records(user_id):
        raise ValidationException(
            "The user has related orders, requests or reports and cannot be deleted",
            details={"user_id": user_id},
        )
    users.delete(user)
    logger.info("User deleted", user_id=user_id, by=ctx.user_id)

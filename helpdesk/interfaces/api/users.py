"""User API routes — profiles and admin user management."""

from typing import List

from fastapi import APIRouter, Depends, status

from helpdesk.application.services import user_service
from helpdesk.domain.access import RequestContext
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.domain.schemas.auth import UserRead
from helpdesk.domain.schemas.user import UserCreate, UserMutationResponse, UserRoleUpdate, UserUpdate
from helpdesk.interfaces.api.deps import get_request_context
from helpdesk.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/Users", tags=["Users"])


@router.get("", response_model=List[UserRead])
def list_users(
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return [UserRead.model_validate(u) for u in user_service.list_users(users, ctx)]


@router.get("/me", response_model=UserRead)
def get_me(
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return UserRead.model_validate(user_service.get_me(users, ctx))


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return UserRead.model_validate(user_service.get_user(users, ctx, user_id))


@router.post("", response_model=UserMutationResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    user = user_service.create_user_as_admin(users, ctx, body)
    return UserMutationResponse(message="User created", user=UserRead.model_validate(user))


@router.put("/{user_id}", response_model=UserMutationResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    user = user_service.update_user(users, ctx, user_id, body)
    return UserMutationResponse(message="User updated", user=UserRead.model_validate(user))


@router.put("/{user_id}/role", response_model=UserMutationResponse)
def change_role(
    user_id: int,
    body: UserRoleUpdate,
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    user = user_service.change_role(users, ctx, user_id, body)
    return UserMutationResponse(message="Role changed", user=UserRead.model_validate(user))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    user_service.delete_user(users, ctx, user_id)
    return {"success": True, "message": "User deleted", "id": user_id}

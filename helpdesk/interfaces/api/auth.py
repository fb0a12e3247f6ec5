"""Auth API routes — login, register, change password, token check."""

from fastapi import APIRouter, Depends, status

from helpdesk.application.services.auth_service import (
    authenticate_user,
    change_password,
    create_access_token,
    register_user,
)
from helpdesk.core.exceptions import UnauthorizedException
from helpdesk.domain.access import RequestContext
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.domain.schemas.auth import (
    AuthCheckResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserRead,
)
from helpdesk.interfaces.api.deps import get_request_context
from helpdesk.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/Auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, users: UserRepository = Depends(get_user_repository)):
    user = authenticate_user(users, body.email, body.password)
    if not user:
        raise UnauthorizedException("Invalid email or password")

    return TokenResponse(
        message="Login successful",
        token=create_access_token(user),
        user=UserRead.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, users: UserRepository = Depends(get_user_repository)):
    user = register_user(users, body)
    return TokenResponse(
        message="Registration successful",
        token=create_access_token(user),
        user=UserRead.model_validate(user),
    )


@router.post("/change-password")
def change_own_password(
    body: ChangePasswordRequest,
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    change_password(users, ctx, body)
    return {"success": True, "message": "Password changed"}


@router.get("/check", response_model=AuthCheckResponse)
def check(ctx: RequestContext = Depends(get_request_context)):
    return AuthCheckResponse(user_id=ctx.user_id, user_name=ctx.name, user_role=ctx.role.value)

"""FastAPI dependency — bearer token to request context."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from helpdesk.application.services.auth_service import context_from_claims, decode_access_token
from helpdesk.core.exceptions import UnauthorizedException
from helpdesk.domain.access import RequestContext
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.interfaces.deps import get_user_repository

# missing credentials are reported through our own 401 envelope
security = HTTPBearer(auto_error=False)


def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: UserRepository = Depends(get_user_repository),
) -> RequestContext:
    """Validate the JWT and reload its user."""
    if credentials is None:
        raise UnauthorizedException("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedException("Invalid or expired token")

    ctx = context_from_claims(users, payload)
    if ctx is None:
        raise UnauthorizedException("User not found")
    return ctx

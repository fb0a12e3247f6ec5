"""Auth service — JWT token management, password hashing and account flows."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext

from helpdesk.config import get_settings
from helpdesk.core.exceptions import (
    EntityNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from helpdesk.domain.access import RequestContext
from helpdesk.domain.models.enums import UserRole
from helpdesk.domain.models.user import User
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.domain.schemas.auth import ChangePasswordRequest, RegisterRequest

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES))
    claims = {
        "sub": str(user.id),
        "name": user.name,
        "email": user.email or "",
        "role": user.role.value,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Verify signature, issuer, audience and expiry; ``None`` when any check fails."""
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None


def context_from_claims(users: UserRepository, payload: Optional[dict]) -> Optional[RequestContext]:
    """Resolve verified claims to a request context.

    The role comes from the stored user so that role changes and deletions
    apply to tokens that are already issued.
    """
    if not payload:
        return None
    try:
        user_id = int(payload.get("sub", ""))
    except (TypeError, ValueError):
        return None
    user = users.get_by_id(user_id)
    if user is None:
        return None
    return RequestContext(user_id=user.id, name=user.name, role=user.role)


def authenticate_user(users: UserRepository, email: str, password: str) -> Optional[User]:
    user = users.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Login failed", email=email.strip().lower())
        return None
    logger.info("Login succeeded", user_id=user.id)
    return user


def ensure_unique_contact(
    users: UserRepository,
    email: Optional[str],
    phone: Optional[str],
    exclude_id: Optional[int] = None,
) -> None:
    if email and users.email_taken(email, exclude_id):
        raise ValidationException("A user with this email already exists", details={"field": "email"})
    if phone and users.phone_taken(phone, exclude_id):
        raise ValidationException("A user with this phone already exists", details={"field": "phone"})


def create_user(
    users: UserRepository,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
    phone: Optional[str] = None,
) -> User:
    ensure_unique_contact(users, email, phone)
    user = users.create(
        User(
            name=name,
            email=email,
            phone=phone,
            password_hash=hash_password(password),
            role=role,
        )
    )
    logger.info("User created", user_id=user.id, role=user.role.value)
    return user


def register_user(users: UserRepository, body: RegisterRequest) -> User:
    """Self-registration always yields a plain client account."""
    return create_user(
        users,
        name=body.name,
        email=body.email,
        password=body.password,
        role=UserRole.USER,
        phone=body.phone,
    )


def change_password(users: UserRepository, ctx: Optional[RequestContext], body: ChangePasswordRequest) -> None:
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    user = users.get_by_id(ctx.user_id)
    if user is None:
        raise EntityNotFoundException("User not found")
    if not verify_password(body.old_password, user.password_hash):
        raise ValidationException("Old password is incorrect")
    if body.old_password == body.new_password:
        raise ValidationException("New password must differ from the old one")

    user.password_hash = hash_password(body.new_password)
    users.save(user, "change_password")
    logger.info("Password changed", user_id=user.id)


def ensure_default_admin(users: UserRepository) -> Optional[User]:
    """Create the bootstrap admin when none exists and a password is configured."""
    if not settings.DEFAULT_ADMIN_PASSWORD or users.count_admins() > 0:
        return None
    if users.email_taken(settings.DEFAULT_ADMIN_EMAIL):
        logger.warning("Bootstrap admin email belongs to another user", email=settings.DEFAULT_ADMIN_EMAIL)
        return None
    return create_user(
        users,
        name=settings.DEFAULT_ADMIN_NAME,
        email=settings.DEFAULT_ADMIN_EMAIL.lower(),
        password=settings.DEFAULT_ADMIN_PASSWORD,
        role=UserRole.ADMIN,
    )

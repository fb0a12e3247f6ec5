"""Pydantic schemas for user administration."""

from typing import Optional

from pydantic import BaseModel

from helpdesk.domain.schemas.auth import UserRead
from helpdesk.domain.schemas.common import Email, Password, PersonName, Phone


class UserCreate(BaseModel):
    name: PersonName
    email: Email
    password: Password
    phone: Optional[Phone] = None
    role: str = "User"


class UserUpdate(BaseModel):
    name: PersonName
    email: Optional[Email] = None
    phone: Optional[Phone] = None


class UserRoleUpdate(BaseModel):
    role: str


class UserMutationResponse(BaseModel):
    success: bool = True
    message: str
    user: UserRead

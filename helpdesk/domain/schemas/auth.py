"""Pydantic schemas for User and Auth."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from helpdesk.domain.schemas.common import Email, Password, PersonName, Phone


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    reg_date: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("role", mode="before")
    @classmethod
    def _role_value(cls, value):
        return getattr(value, "value", value)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    name: PersonName
    email: Email
    password: Password
    phone: Optional[Phone] = None


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(min_length=1)
    new_password: Password


class TokenResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    user: UserRead


class AuthCheckResponse(BaseModel):
    success: bool = True
    user_id: int
    user_name: str
    user_role: str
    message: str = "Token is valid"

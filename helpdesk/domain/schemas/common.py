"""Reusable field types for request schemas."""

from typing import Annotated

from pydantic import AfterValidator, EmailStr

EMAIL_MAX = 100

NAME_MAX = 250
TEXT_MAX = 3500


def required_text(max_length: int):
    """A string that is trimmed, must not be empty and must fit ``max_length``."""

    def _check(value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        if len(value) > max_length:
            raise ValueError(f"must not exceed {max_length} characters")
        return value

    return Annotated[str, AfterValidator(_check)]


def _normalize_email(value: str) -> str:
    value = value.lower()
    if len(value) > EMAIL_MAX:
        raise ValueError(f"must not exceed {EMAIL_MAX} characters")
    return value


def _check_phone(value: str) -> str | None:
    value = value.strip()
    if not value:
        return None
    if len(value) > 12:
        raise ValueError("must not exceed 12 characters")
    return value


def _check_password(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    if len(value) < 6:
        raise ValueError("must be at least 6 characters long")
    return value


Email = Annotated[EmailStr, AfterValidator(_normalize_email)]
Phone = Annotated[str, AfterValidator(_check_phone)]
Password = Annotated[str, AfterValidator(_check_password)]
PersonName = required_text(35)
Title = required_text(NAME_MAX)
Body = required_text(TEXT_MAX)

"""Closed enumerations shared by models, schemas and lifecycle rules."""

import enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, enum.Enum):
    USER = "User"
    MANAGER = "Manager"
    ADMIN = "Admin"


class OrderStatus(str, enum.Enum):
    NEW = "New"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class RequestStatus(str, enum.Enum):
    NEW = "New"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Priority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def enum_column_type(enum_cls: type[enum.Enum], length: int) -> SAEnum:
    """Store an enum as its short string value (``"New"``), not a native DB enum."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        create_constraint=False,
        length=length,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )

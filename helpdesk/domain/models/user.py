"""User domain model — maps to the 'users' table."""

from sqlalchemy import Column, DateTime, Integer, String

from helpdesk.core.clock import now
from helpdesk.domain.models.enums import UserRole, enum_column_type
from helpdesk.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(35), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    phone = Column(String(12), unique=True, nullable=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(enum_column_type(UserRole, 20), nullable=False, default=UserRole.USER)
    reg_date = Column(DateTime, nullable=False, default=now)

    # Optimistic concurrency for profile edits
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<User {self.id} {self.email} ({self.role.value if self.role else None})>"

"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from sqlalchemy import func, or_

from helpdesk.domain.models.enums import UserRole
from helpdesk.domain.models.order import Order
from helpdesk.domain.models.report import Report
from helpdesk.domain.models.service_request import ServiceRequest
from helpdesk.domain.models.support_request import SupportRequest
from helpdesk.domain.models.user import User
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(User.id).filter(func.lower(User.email) == email.strip().lower())
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def phone_taken(self, phone: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(User.id).filter(User.phone == phone)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def has_related_records(self, user_id: int) -> bool:
        checks = (
            self.db.query(Order.id).filter(or_(Order.client_id == user_id, Order.assigned_to_id == user_id)),
            self.db.query(ServiceRequest.id).filter(
                or_(ServiceRequest.client_id == user_id, ServiceRequest.assigned_to_id == user_id)
            ),
            self.db.query(SupportRequest.id).filter(
                or_(SupportRequest.client_id == user_id, SupportRequest.assigned_to_id == user_id)
            ),
            self.db.query(Report.id).filter(Report.created_by_id == user_id),
        )
        return any(query.first() is not None for query in checks)

    def count_admins(self) -> int:
        return self.db.query(func.count(User.id)).filter(User.role == UserRole.ADMIN).scalar() or 0

    def list_by_name(self) -> List[User]:
        return self.db.query(User).order_by(User.name.asc(), User.id.asc()).all()

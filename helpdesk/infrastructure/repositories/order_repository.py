"""
SQLAlchemy Implementation of Order Repository.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from helpdesk.domain.models.enums import OrderStatus, Priority
from helpdesk.domain.models.order import Order
from helpdesk.domain.models.report import Report
from helpdesk.domain.models.service_request import ServiceRequest
from helpdesk.domain.models.support_request import SupportRequest
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyOrderRepository(SQLAlchemyRepository[Order], OrderRepository):
    """Order repository implementation using SQLAlchemy."""

    def _with_people(self):
        return self.db.query(Order).options(joinedload(Order.client), joinedload(Order.manager))

    def get_with_people(self, order_id: int) -> Optional[Order]:
        return self._with_people().filter(Order.id == order_id).first()

    def list_newest(self, assigned_to_id: Optional[int] = None) -> List[Order]:
        query = self._with_people()
        if assigned_to_id is not None:
            query = query.filter(Order.assigned_to_id == assigned_to_id)
        return query.order_by(Order.create_date.desc(), Order.id.desc()).all()

    def list_by_client(self, client_id: int) -> List[Order]:
        return (
            self._with_people()
            .filter(Order.client_id == client_id)
            .order_by(Order.create_date.desc(), Order.id.desc())
            .all()
        )

    def get_owned(self, order_id: int, client_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id, Order.client_id == client_id).first()

    def has_references(self, order_id: int) -> bool:
        checks = (
            self.db.query(ServiceRequest.id).filter(ServiceRequest.order_id == order_id),
            self.db.query(SupportRequest.id).filter(SupportRequest.related_order_id == order_id),
            self.db.query(Report.id).filter(Report.order_id == order_id),
        )
        return any(query.first() is not None for query in checks)

    def get_stats(self, manager_id: int, since: datetime) -> Dict[str, int]:
        by_status = dict(
            self.db.query(Order.status, func.count(Order.id)).group_by(Order.status).all()
        )

        def count(*criteria) -> int:
            return self.db.query(func.count(Order.id)).filter(*criteria).scalar() or 0

        return {
            "total_orders": sum(by_status.values()),
            "new_orders": by_status.get(OrderStatus.NEW, 0),
            "processing_orders": by_status.get(OrderStatus.PROCESSING, 0),
            "completed_orders": by_status.get(OrderStatus.COMPLETED, 0),
            "cancelled_orders": by_status.get(OrderStatus.CANCELLED, 0),
            "my_orders": count(Order.assigned_to_id == manager_id),
            "high_priority_orders": count(Order.priority == Priority.HIGH),
            "today_orders": count(Order.create_date >= since),
        }

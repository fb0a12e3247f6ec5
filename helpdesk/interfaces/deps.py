"""
API Dependencies — repository factories bound to the request session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from helpdesk.domain.models.order import Order
from helpdesk.domain.models.report import Report
from helpdesk.domain.models.service_request import ServiceRequest
from helpdesk.domain.models.support_request import SupportRequest
from helpdesk.domain.models.user import User
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import (
    ReportRepository,
    ServiceRequestRepository,
    SupportRequestRepository,
)
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.infrastructure.database import get_db
from helpdesk.infrastructure.repositories.order_repository import SQLAlchemyOrderRepository
from helpdesk.infrastructure.repositories.request_repository import (
    SQLAlchemyReportRepository,
    SQLAlchemyServiceRequestRepository,
    SQLAlchemySupportRequestRepository,
)
from helpdesk.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_order_repository(db: Session = Depends(get_db)) -> OrderRepository:
    """Get order repository instance."""
    return SQLAlchemyOrderRepository(db, Order)


def get_support_request_repository(db: Session = Depends(get_db)) -> SupportRequestRepository:
    return SQLAlchemySupportRequestRepository(db, SupportRequest)


def get_service_request_repository(db: Session = Depends(get_db)) -> ServiceRequestRepository:
    return SQLAlchemyServiceRequestRepository(db, ServiceRequest)


def get_report_repository(db: Session = Depends(get_db)) -> ReportRepository:
    return SQLAlchemyReportRepository(db, Report)

"""
SQLAlchemy implementations for support requests, service requests and reports.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import joinedload

from helpdesk.domain.models.enums import RequestStatus
from helpdesk.domain.models.report import Report
from helpdesk.domain.models.service_request import ServiceRequest
from helpdesk.domain.models.support_request import SupportRequest
from helpdesk.domain.repositories.request_repository import (
    ReportRepository,
    ServiceRequestRepository,
    SupportRequestRepository,
)
from helpdesk.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemySupportRequestRepository(SQLAlchemyRepository[SupportRequest], SupportRequestRepository):

    def _with_people(self):
        return self.db.query(SupportRequest).options(
            joinedload(SupportRequest.client),
            joinedload(SupportRequest.manager),
            joinedload(SupportRequest.related_order),
        )

    def _newest_first(self, query):
        return query.order_by(SupportRequest.create_date.desc(), SupportRequest.id.desc())

    def get_with_people(self, request_id: int) -> Optional[SupportRequest]:
        return self._with_people().filter(SupportRequest.id == request_id).first()

    def list_newest(self) -> List[SupportRequest]:
        return self._newest_first(self._with_people()).all()

    def list_by_client(self, client_id: int) -> List[SupportRequest]:
        return self._newest_first(self._with_people().filter(SupportRequest.client_id == client_id)).all()

    def list_by_order(self, order_id: int) -> List[SupportRequest]:
        return self._newest_first(
            self._with_people().filter(SupportRequest.related_order_id == order_id)
        ).all()

    def report_summary(self) -> Dict[int, Tuple[int, Optional[datetime]]]:
        rows = (
            self.db.query(
                Report.support_request_id,
                func.count(Report.id),
                func.max(Report.create_date),
            )
            .filter(Report.support_request_id.isnot(None))
            .group_by(Report.support_request_id)
            .all()
        )
        return {request_id: (count, last) for request_id, count, last in rows}

    def get_stats(self, manager_id: int, since: datetime) -> Dict[str, int]:
        by_status = dict(
            self.db.query(SupportRequest.status, func.count(SupportRequest.id))
            .group_by(SupportRequest.status)
            .all()
        )

        def count(*criteria) -> int:
            return self.db.query(func.count(SupportRequest.id)).filter(*criteria).scalar() or 0

        return {
            "total_requests": sum(by_status.values()),
            "new_requests": by_status.get(RequestStatus.NEW, 0),
            "processing_requests": by_status.get(RequestStatus.PROCESSING, 0),
            "completed_requests": by_status.get(RequestStatus.COMPLETED, 0),
            "cancelled_requests": by_status.get(RequestStatus.CANCELLED, 0),
            "my_requests": count(SupportRequest.assigned_to_id == manager_id),
            "today_requests": count(SupportRequest.create_date >= since),
            "without_response": count(
                or_(
                    SupportRequest.status == RequestStatus.NEW,
                    SupportRequest.status == RequestStatus.PROCESSING,
                )
            ),
        }


class SQLAlchemyServiceRequestRepository(SQLAlchemyRepository[ServiceRequest], ServiceRequestRepository):

    def _with_people(self):
        return self.db.query(ServiceRequest).options(
            joinedload(ServiceRequest.client),
            joinedload(ServiceRequest.manager),
        )

    def _newest_first(self, query):
        return query.order_by(ServiceRequest.create_date.desc(), ServiceRequest.id.desc())

    def get_with_people(self, request_id: int) -> Optional[ServiceRequest]:
        return self._with_people().filter(ServiceRequest.id == request_id).first()

    def list_newest(self) -> List[ServiceRequest]:
        return self._newest_first(self._with_people()).all()

    def list_by_client(self, client_id: int) -> List[ServiceRequest]:
        return self._newest_first(self._with_people().filter(ServiceRequest.client_id == client_id)).all()

    def list_by_order(self, order_id: int) -> List[ServiceRequest]:
        return self._newest_first(self._with_people().filter(ServiceRequest.order_id == order_id)).all()


class SQLAlchemyReportRepository(SQLAlchemyRepository[Report], ReportRepository):

    def _newest(self, *criteria) -> List[Report]:
        return (
            self.db.query(Report)
            .options(joinedload(Report.author))
            .filter(*criteria)
            .order_by(Report.create_date.desc(), Report.id.desc())
            .all()
        )

    def list_by_order(self, order_id: int) -> List[Report]:
        return self._newest(Report.order_id == order_id)

    def list_by_support_request(self, support_request_id: int) -> List[Report]:
        return self._newest(Report.support_request_id == support_request_id)

    def list_by_service_request(self, service_request_id: int) -> List[Report]:
        return self._newest(Report.service_request_id == service_request_id)

"""Repository interfaces for support requests, service requests and reports."""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from helpdesk.domain.models.report import Report
from helpdesk.domain.models.service_request import ServiceRequest
from helpdesk.domain.models.support_request import SupportRequest
from helpdesk.domain.repositories.base import BaseRepository


class SupportRequestRepository(BaseRepository[SupportRequest]):

    def get_with_people(self, request_id: int) -> Optional[SupportRequest]:
        ...

    def list_newest(self) -> List[SupportRequest]:
        ...

    def list_by_client(self, client_id: int) -> List[SupportRequest]:
        ...

    def list_by_order(self, order_id: int) -> List[SupportRequest]:
        ...

    def report_summary(self) -> Dict[int, Tuple[int, Optional[datetime]]]:
        """Map request id to (report count, last report date)."""
        ...

    def get_stats(self, manager_id: int, since: datetime) -> Dict[str, int]:
        ...


class ServiceRequestRepository(BaseRepository[ServiceRequest]):

    def get_with_people(self, request_id: int) -> Optional[ServiceRequest]:
        ...

    def list_newest(self) -> List[ServiceRequest]:
        ...

    def list_by_client(self, client_id: int) -> List[ServiceRequest]:
        ...

    def list_by_order(self, order_id: int) -> List[ServiceRequest]:
        ...


class ReportRepository(BaseRepository[Report]):

    def list_by_order(self, order_id: int) -> List[Report]:
        ...

    def list_by_support_request(self, support_request_id: int) -> List[Report]:
        ...

    def list_by_service_request(self, service_request_id: int) -> List[Report]:
        ...

"""Pydantic schemas for support requests."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from helpdesk.domain.schemas.common import Body, Title


class SupportRequestCreate(BaseModel):
    topic: Title
    message: Body
    related_order_id: Optional[int] = None


class SupportRequestStatusUpdate(BaseModel):
    status: str


class SupportRequestRead(BaseModel):
    id: int
    topic: str
    message: str
    status: str
    create_date: datetime
    client_id: int
    client_name: Optional[str] = None
    assigned_to_id: Optional[int] = None
    manager_name: Optional[str] = None
    related_order_id: Optional[int] = None
    order_name: Optional[str] = None

    @classmethod
    def from_model(cls, request) -> "SupportRequestRead":
        return cls(
            id=request.id,
            topic=request.topic,
            message=request.message,
            status=request.status.value,
            create_date=request.create_date,
            client_id=request.client_id,
            client_name=request.client.name if request.client else None,
            assigned_to_id=request.assigned_to_id,
            manager_name=request.manager.name if request.manager else None,
            related_order_id=request.related_order_id,
            order_name=request.related_order.name if request.related_order else None,
        )


class SupportRequestManagerRead(SupportRequestRead):
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    manager_email: Optional[str] = None
    manager_phone: Optional[str] = None
    report_count: int = 0
    last_report_date: Optional[datetime] = None

    @classmethod
    def from_model_with_reports(cls, request, report_count: int, last_report_date) -> "SupportRequestManagerRead":
        base = SupportRequestRead.from_model(request).model_dump()
        return cls(
            **base,
            client_email=request.client.email if request.client else None,
            client_phone=request.client.phone if request.client else None,
            manager_email=request.manager.email if request.manager else None,
            manager_phone=request.manager.phone if request.manager else None,
            report_count=report_count,
            last_report_date=last_report_date,
        )


class SupportRequestMutationResponse(BaseModel):
    success: bool = True
    message: str
    support_request: SupportRequestRead


class RespondRequest(BaseModel):
    title: Title
    content: Body
    complete_request: bool = False


class RespondResponse(BaseModel):
    success: bool = True
    message: str
    report_id: int
    support_request_id: int
    new_status: str


class StatusChangeResponse(BaseModel):
    success: bool = True
    message: str
    id: int
    assigned_to_id: Optional[int] = None
    new_status: str


class SupportRequestStats(BaseModel):
    total_requests: int
    new_requests: int
    processing_requests: int
    completed_requests: int
    cancelled_requests: int
    my_requests: int
    today_requests: int
    without_response: int


class SupportRequestDetail(BaseModel):
    support_request: SupportRequestRead
    client: dict[str, Any]
    manager: Optional[dict[str, Any]] = None
    related_order: Optional[dict[str, Any]] = None
    reports: list[dict[str, Any]]
    statistics: dict[str, Any]


class OrderOption(BaseModel):
    id: int
    name: str
    status: str
    create_date: datetime

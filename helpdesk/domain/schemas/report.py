"""Pydantic schemas for reports."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from helpdesk.domain.schemas.common import Body, Title


class ReportCreate(BaseModel):
    title: Title
    content: Body
    order_id: Optional[int] = None
    service_request_id: Optional[int] = None
    support_request_id: Optional[int] = None
    complete_request: bool = False


class ReportRead(BaseModel):
    id: int
    title: str
    content: str
    create_date: datetime
    created_by_id: int
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    order_id: Optional[int] = None
    service_request_id: Optional[int] = None
    support_request_id: Optional[int] = None

    @classmethod
    def from_model(cls, report) -> "ReportRead":
        author = report.author
        return cls(
            id=report.id,
            title=report.title,
            content=report.content,
            create_date=report.create_date,
            created_by_id=report.created_by_id,
            author_name=author.name if author else None,
            author_email=author.email if author else None,
            order_id=report.order_id,
            service_request_id=report.service_request_id,
            support_request_id=report.support_request_id,
        )


class ReportMutationResponse(BaseModel):
    success: bool = True
    message: str
    report: ReportRead

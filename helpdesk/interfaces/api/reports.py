"""Report API routes — create and list reports by parent."""

from typing import List

from fastapi import APIRouter, Depends, status

from helpdesk.application.services import report_service
from helpdesk.domain.access import RequestContext
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import (
    ReportRepository,
    ServiceRequestRepository,
    SupportRequestRepository,
)
from helpdesk.domain.schemas.report import ReportCreate, ReportMutationResponse, ReportRead
from helpdesk.interfaces.api.deps import get_request_context
from helpdesk.interfaces.deps import (
    get_order_repository,
    get_report_repository,
    get_service_request_repository,
    get_support_request_repository,
)

router = APIRouter(prefix="/api/Reports", tags=["Reports"])


@router.post("/create", response_model=ReportMutationResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    body: ReportCreate,
    reports: ReportRepository = Depends(get_report_repository),
    orders: OrderRepository = Depends(get_order_repository),
    service_requests: ServiceRequestRepository = Depends(get_service_request_repository),
    support_requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    report = report_service.create_report(reports, orders, service_requests, support_requests, ctx, body)
    return ReportMutationResponse(message="Report created", report=ReportRead.from_model(report))


@router.get("/order/{order_id}", response_model=List[ReportRead])
def order_reports(
    order_id: int,
    reports: ReportRepository = Depends(get_report_repository),
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return [ReportRead.from_model(r) for r in report_service.list_for_order(reports, orders, ctx, order_id)]


@router.get("/support-request/{request_id}", response_model=List[ReportRead])
def support_request_reports(
    request_id: int,
    reports: ReportRepository = Depends(get_report_repository),
    support_requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    rows = report_service.list_for_support_request(reports, support_requests, ctx, request_id)
    return [ReportRead.from_model(r) for r in rows]


@router.get("/service-request/{request_id}", response_model=List[ReportRead])
def service_request_reports(
    request_id: int,
    reports: ReportRepository = Depends(get_report_repository),
    service_requests: ServiceRequestRepository = Depends(get_service_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    rows = report_service.list_for_service_request(reports, service_requests, ctx, request_id)
    return [ReportRead.from_model(r) for r in rows]

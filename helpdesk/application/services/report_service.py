"""Report service — staff-authored, append-only notes on orders and requests."""

from typing import List, Optional

import structlog

from helpdesk.core.exceptions import EntityNotFoundException
from helpdesk.domain import lifecycle
from helpdesk.domain.access import Access, RequestContext, Resource, enforce
from helpdesk.domain.models.report import Report
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import (
    ReportRepository,
    ServiceRequestRepository,
    SupportRequestRepository,
)
from helpdesk.domain.schemas.report import ReportCreate

logger = structlog.get_logger(__name__)


def create_report(
    reports: ReportRepository,
    orders: OrderRepository,
    service_requests: ServiceRequestRepository,
    support_requests: SupportRequestRepository,
    ctx: Optional[RequestContext],
    body: ReportCreate,
) -> Report:
    """Create a report.

    A linked support request must be held by the caller (admins excepted) and
    lends its related order when no order is given. Every linked id must exist.
    """
    enforce(ctx, Access.STAFF)

    order_id = body.order_id
    support_request = None
    if body.support_request_id is not None:
        support_request = support_requests.get_by_id(body.support_request_id)
        enforce(
            ctx,
            Access.ASSIGNEE,
            Resource.of(support_request) if support_request else None,
            entity_name="Support request",
        )
        if order_id is None:
            order_id = support_request.related_order_id

    if order_id is not None and not orders.exists(order_id):
        raise EntityNotFoundException("Order not found")
    if body.service_request_id is not None and not service_requests.exists(body.service_request_id):
        raise EntityNotFoundException("Service request not found")

    if body.complete_request and support_request is not None:
        lifecycle.complete_request(support_request)

    report = reports.create(
        Report(
            title=body.title,
            content=body.content,
            created_by_id=ctx.user_id,
            order_id=order_id,
            service_request_id=body.service_request_id,
            support_request_id=body.support_request_id,
        )
    )
    logger.info(
        "Report created",
        report_id=report.id,
        order_id=order_id,
        support_request_id=body.support_request_id,
        service_request_id=body.service_request_id,
        by=ctx.user_id,
    )
    return report


def list_for_order(
    reports: ReportRepository,
    orders: OrderRepository,
    ctx: Optional[RequestContext],
    order_id: int,
) -> List[Report]:
    order = orders.get_by_id(order_id)
    enforce(ctx, Access.OWNER, Resource.of(order) if order else None, entity_name="Order")
    return reports.list_by_order(order_id)


def list_for_support_request(
    reports: ReportRepository,
    support_requests: SupportRequestRepository,
    ctx: Optional[RequestContext],
    request_id: int,
) -> List[Report]:
    request = support_requests.get_by_id(request_id)
    enforce(ctx, Access.OWNER, Resource.of(request) if request else None, entity_name="Support request")
    return reports.list_by_support_request(request_id)


def list_for_service_request(
    reports: ReportRepository,
    service_requests: ServiceRequestRepository,
    ctx: Optional[RequestContext],
    request_id: int,
) -> List[Report]:
    request = service_requests.get_by_id(request_id)
    enforce(ctx, Access.OWNER, Resource.of(request) if request else None, entity_name="Service request")
    return reports.list_by_service_request(request_id)

"""Support request service — client inquiries and the manager response desk."""

from typing import List, Optional

import structlog

from helpdesk.core.clock import today_start
from helpdesk.core.exceptions import (
    EntityNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from helpdesk.domain import lifecycle
from helpdesk.domain.access import Access, RequestContext, Resource, enforce
from helpdesk.domain.models.enums import RequestStatus
from helpdesk.domain.models.report import Report
from helpdesk.domain.models.support_request import SupportRequest
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import ReportRepository, SupportRequestRepository
from helpdesk.domain.schemas.order import OrderRead
from helpdesk.domain.schemas.support_request import (
    OrderOption,
    RespondRequest,
    SupportRequestCreate,
    SupportRequestDetail,
    SupportRequestManagerRead,
    SupportRequestRead,
    SupportRequestStats,
    SupportRequestStatusUpdate,
)

logger = structlog.get_logger(__name__)


def _found(request: Optional[SupportRequest]) -> SupportRequest:
    if request is None:
        raise EntityNotFoundException("Support request not found")
    return request


def _load_scoped(
    requests: SupportRequestRepository,
    ctx: Optional[RequestContext],
    request_id: int,
    access: Access,
) -> SupportRequest:
    request = requests.get_with_people(request_id)
    enforce(ctx, access, Resource.of(request) if request else None, entity_name="Support request")
    return request


# ---------------------------------------------------------------------------
# Client side
# ---------------------------------------------------------------------------

def list_my_requests(requests: SupportRequestRepository, ctx: Optional[RequestContext]) -> List[SupportRequest]:
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    return requests.list_by_client(ctx.user_id)


def list_my_order_options(orders: OrderRepository, ctx: Optional[RequestContext]) -> List[OrderOption]:
    """The caller's own orders, for linking a new request."""
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    return [
        OrderOption(id=o.id, name=o.name, status=o.status.value, create_date=o.create_date)
        for o in orders.list_by_client(ctx.user_id)
    ]


def get_request(requests: SupportRequestRepository, ctx: Optional[RequestContext], request_id: int) -> SupportRequest:
    return _load_scoped(requests, ctx, request_id, Access.OWNER)


def create_request(
    requests: SupportRequestRepository,
    orders: OrderRepository,
    ctx: Optional[RequestContext],
    body: SupportRequestCreate,
) -> SupportRequest:
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    if body.related_order_id is not None:
        if orders.get_owned(body.related_order_id, ctx.user_id) is None:
            raise ValidationException(
                "The related order was not found among your orders",
                details={"related_order_id": body.related_order_id},
            )

    request = requests.create(
        SupportRequest(
            topic=body.topic,
            message=body.message,
            status=RequestStatus.NEW,
            client_id=ctx.user_id,
            related_order_id=body.related_order_id,
        )
    )
    logger.info("Support request created", support_request_id=request.id, client_id=ctx.user_id)
    return requests.get_with_people(request.id)


# ---------------------------------------------------------------------------
# Staff side
# ---------------------------------------------------------------------------

def list_requests(requests: SupportRequestRepository, ctx: Optional[RequestContext]) -> List[SupportRequest]:
    enforce(ctx, Access.STAFF)
    return requests.list_newest()


def list_manager_requests(
    requests: SupportRequestRepository,
    ctx: Optional[RequestContext],
) -> List[SupportRequestManagerRead]:
    enforce(ctx, Access.STAFF)
    summary = requests.report_summary()
    rows = []
    for request in requests.list_newest():
        count, last = summary.get(request.id, (0, None))
        rows.append(SupportRequestManagerRead.from_model_with_reports(request, count, last))
    return rows


def get_request_detail(
    requests: SupportRequestRepository,
    reports: ReportRepository,
    ctx: Optional[RequestContext],
    request_id: int,
) -> SupportRequestDetail:
    request = _load_scoped(requests, ctx, request_id, Access.ASSIGNEE)
    report_rows = reports.list_by_support_request(request.id)

    client = request.client
    manager = request.manager
    order = request.related_order
    return SupportRequestDetail(
        support_request=SupportRequestRead.from_model(request),
        client={
            "id": client.id,
            "name": client.name,
            "email": client.email,
            "phone": client.phone,
            "reg_date": client.reg_date,
        },
        manager=(
            {"id": manager.id, "name": manager.name, "email": manager.email, "phone": manager.phone}
            if manager
            else None
        ),
        related_order=(
            {
                "id": order.id,
                "name": order.name,
                "status": order.status.value,
                "priority": order.priority.value,
                "cost": OrderRead.from_model(order).cost,
                "create_date": order.create_date,
            }
            if order
            else None
        ),
        reports=[
            {
                "id": r.id,
                "title": r.title,
                "content": r.content,
                "create_date": r.create_date,
                "author_name": r.author.name if r.author else None,
            }
            for r in report_rows
        ],
        statistics={
            "report_count": len(report_rows),
            "last_report_date": report_rows[0].create_date if report_rows else None,
            "is_assigned": request.assigned_to_id is not None,
        },
    )


def assign_to_self(
    requests: SupportRequestRepository,
    ctx: Optional[RequestContext],
    request_id: int,
) -> SupportRequest:
    enforce(ctx, Access.STAFF)
    request = _found(requests.get_with_people(request_id))
    lifecycle.assign_request(request, ctx.user_id)
    requests.save(request, "assign")
    logger.info(
        "Support request assigned",
        support_request_id=request.id,
        manager_id=ctx.user_id,
        status=request.status.value,
    )
    return request


def respond(
    requests: SupportRequestRepository,
    reports: ReportRepository,
    ctx: Optional[RequestContext],
    request_id: int,
    body: RespondRequest,
) -> Report:
    """Answer a request with a report, optionally completing it."""
    request = _load_scoped(requests, ctx, request_id, Access.ASSIGNEE)
    if body.complete_request:
        lifecycle.complete_request(request)

    # the report and the status change commit together
    report = reports.create(
        Report(
            title=body.title,
            content=body.content,
            created_by_id=ctx.user_id,
            support_request_id=request.id,
            order_id=request.related_order_id,
        )
    )
    logger.info(
        "Support request answered",
        support_request_id=request.id,
        report_id=report.id,
        completed=body.complete_request,
        by=ctx.user_id,
    )
    return report


def change_status(
    requests: SupportRequestRepository,
    ctx: Optional[RequestContext],
    request_id: int,
    body: SupportRequestStatusUpdate,
) -> SupportRequest:
    request = _load_scoped(requests, ctx, request_id, Access.ASSIGNEE)
    previous = request.status
    lifecycle.set_request_status(request, body.status)
    requests.save(request, "change_status")
    logger.info(
        "Support request status changed",
        support_request_id=request.id,
        status_from=previous.value,
        status_to=request.status.value,
        by=ctx.user_id,
    )
    return request


def get_request_stats(requests: SupportRequestRepository, ctx: Optional[RequestContext]) -> SupportRequestStats:
    enforce(ctx, Access.STAFF)
    return SupportRequestStats(**requests.get_stats(ctx.user_id, today_start()))

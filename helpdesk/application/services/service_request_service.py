"""Service request service — billable service actions attached to orders."""

from decimal import Decimal
from typing import List, Optional

import structlog

from helpdesk.core.exceptions import (
    EntityNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from helpdesk.domain import lifecycle
from helpdesk.domain.access import Access, RequestContext, Resource, enforce
from helpdesk.domain.models.enums import RequestStatus
from helpdesk.domain.models.service_request import ServiceRequest
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import ServiceRequestRepository
from helpdesk.domain.schemas.service_request import ServiceRequestCreate, ServiceRequestUpdate

logger = structlog.get_logger(__name__)


def _load_scoped(
    requests: ServiceRequestRepository,
    ctx: Optional[RequestContext],
    request_id: int,
    access: Access,
) -> ServiceRequest:
    request = requests.get_with_people(request_id)
    enforce(ctx, access, Resource.of(request) if request else None, entity_name="Service request")
    return request


def list_my_requests(requests: ServiceRequestRepository, ctx: Optional[RequestContext]) -> List[ServiceRequest]:
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    return requests.list_by_client(ctx.user_id)


def get_request(requests: ServiceRequestRepository, ctx: Optional[RequestContext], request_id: int) -> ServiceRequest:
    return _load_scoped(requests, ctx, request_id, Access.OWNER)


def create_request(
    requests: ServiceRequestRepository,
    orders: OrderRepository,
    ctx: Optional[RequestContext],
    body: ServiceRequestCreate,
) -> ServiceRequest:
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    if body.order_id is not None and orders.get_owned(body.order_id, ctx.user_id) is None:
        raise ValidationException(
            "The order was not found among your orders",
            details={"order_id": body.order_id},
        )

    request = requests.create(
        ServiceRequest(
            service_type=body.service_type,
            description=body.description,
            status=RequestStatus.NEW,
            client_id=ctx.user_id,
            order_id=body.order_id,
        )
    )
    logger.info("Service request created", service_request_id=request.id, client_id=ctx.user_id)
    return requests.get_with_people(request.id)


def list_requests(requests: ServiceRequestRepository, ctx: Optional[RequestContext]) -> List[ServiceRequest]:
    enforce(ctx, Access.STAFF)
    return requests.list_newest()


def assign_to_self(
    requests: ServiceRequestRepository,
    ctx: Optional[RequestContext],
    request_id: int,
) -> ServiceRequest:
    enforce(ctx, Access.STAFF)
    request = requests.get_with_people(request_id)
    if request is None:
        raise EntityNotFoundException("Service request not found")
    lifecycle.assign_request(request, ctx.user_id)
    requests.save(request, "assign")
    logger.info(
        "Service request assigned",
        service_request_id=request.id,
        manager_id=ctx.user_id,
        status=request.status.value,
    )
    return request


def update_request(
    requests: ServiceRequestRepository,
    ctx: Optional[RequestContext],
    request_id: int,
    body: ServiceRequestUpdate,
) -> ServiceRequest:
    """Set status and/or cost; only the assignee or an admin may do so."""
    request = _load_scoped(requests, ctx, request_id, Access.ASSIGNEE)
    if body.status is None and body.cost is None:
        raise ValidationException("Nothing to update")

    new_status = lifecycle.parse_enum(RequestStatus, body.status, "status") if body.status is not None else None
    if body.cost is not None:
        request.cost = body.cost.quantize(Decimal("0.01"))
    if new_status is not None:
        request.status = new_status

    requests.save(request, "update")
    logger.info(
        "Service request updated",
        service_request_id=request.id,
        status=request.status.value,
        by=ctx.user_id,
    )
    return request

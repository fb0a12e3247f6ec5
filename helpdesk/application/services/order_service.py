"""Order service — client order intake and manager/admin order management."""

from decimal import Decimal
from typing import List, Optional

import structlog

from helpdesk.core.clock import now, today_start
from helpdesk.core.exceptions import (
    EntityNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from helpdesk.domain import lifecycle
from helpdesk.domain.access import Access, RequestContext, Resource, enforce
from helpdesk.domain.models.enums import OrderStatus, Priority, RequestStatus, UserRole
from helpdesk.domain.models.order import Order
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import (
    ReportRepository,
    ServiceRequestRepository,
    SupportRequestRepository,
)
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.domain.schemas.order import OrderCreate, OrderDetail, OrderRead, OrderStats, OrderUpdate

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")
ACTIVE_REQUEST_STATES = (RequestStatus.NEW, RequestStatus.PROCESSING)


def _money(value: Optional[Decimal]) -> Optional[Decimal]:
    return value.quantize(CENTS) if value is not None else None


def _found(order: Optional[Order]) -> Order:
    if order is None:
        raise EntityNotFoundException("Order not found")
    return order


def _contact(user, include_role: bool = False) -> Optional[dict]:
    if user is None:
        return None
    data = {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
    }
    if include_role:
        data["role"] = user.role.value
    else:
        data["reg_date"] = user.reg_date
    return data


# ---------------------------------------------------------------------------
# Client side
# ---------------------------------------------------------------------------

def create_order(orders: OrderRepository, ctx: Optional[RequestContext], body: OrderCreate) -> Order:
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    priority = lifecycle.parse_enum(Priority, body.priority, "priority")

    order = orders.create(
        Order(
            name=body.name,
            description=body.description,
            cost=_money(body.cost),
            priority=priority,
            status=OrderStatus.NEW,
            client_id=ctx.user_id,
        )
    )
    logger.info("Order created", order_id=order.id, client_id=ctx.user_id)
    return orders.get_with_people(order.id)


def list_my_orders(orders: OrderRepository, ctx: Optional[RequestContext]) -> List[Order]:
    if ctx is None:
        raise UnauthorizedException("Not authenticated")
    return orders.list_by_client(ctx.user_id)


def get_order(orders: OrderRepository, ctx: Optional[RequestContext], order_id: int) -> Order:
    order = orders.get_with_people(order_id)
    enforce(ctx, Access.OWNER, Resource.of(order) if order else None, entity_name="Order")
    return order


# ---------------------------------------------------------------------------
# Staff side
# ---------------------------------------------------------------------------

def list_orders(orders: OrderRepository, ctx: Optional[RequestContext], mine: bool = False) -> List[Order]:
    enforce(ctx, Access.STAFF)
    return orders.list_newest(assigned_to_id=ctx.user_id if mine else None)


def get_order_detail(
    orders: OrderRepository,
    service_requests: ServiceRequestRepository,
    support_requests: SupportRequestRepository,
    reports: ReportRepository,
    ctx: Optional[RequestContext],
    order_id: int,
) -> OrderDetail:
    """Order with its client, manager, linked requests, reports and totals."""
    enforce(ctx, Access.STAFF)
    order = _found(orders.get_with_people(order_id))

    service_rows = service_requests.list_by_order(order_id)
    support_rows = support_requests.list_by_order(order_id)
    report_rows = reports.list_by_order(order_id)

    total_days = 0.0
    if order.complete_date is not None:
        total_days = (order.complete_date - order.create_date).total_seconds() / 86400

    return OrderDetail(
        order=OrderRead.from_model(order),
        client=_contact(order.client),
        manager=_contact(order.manager, include_role=True),
        service_requests=[
            {
                "id": sr.id,
                "service_type": sr.service_type,
                "description": sr.description,
                "status": sr.status.value,
                "create_date": sr.create_date,
                "cost": float(sr.cost) if sr.cost is not None else None,
                "client_name": sr.client.name if sr.client else None,
            }
            for sr in service_rows
        ],
        support_requests=[
            {
                "id": sr.id,
                "topic": sr.topic,
                "message": sr.message,
                "status": sr.status.value,
                "create_date": sr.create_date,
                "client_name": sr.client.name if sr.client else None,
                "client_email": sr.client.email if sr.client else None,
                "client_phone": sr.client.phone if sr.client else None,
            }
            for sr in support_rows
        ],
        reports=[
            {
                "id": r.id,
                "title": r.title,
                "content": r.content,
                "create_date": r.create_date,
                "author_name": r.author.name if r.author else None,
                "author_email": r.author.email if r.author else None,
            }
            for r in report_rows
        ],
        statistics={
            "service_request_count": len(service_rows),
            "support_request_count": len(support_rows),
            "report_count": len(report_rows),
            "total_time_in_days": round(total_days, 2),
            "active_service_requests": sum(1 for sr in service_rows if sr.status in ACTIVE_REQUEST_STATES),
            "active_support_requests": sum(1 for sr in support_rows if sr.status in ACTIVE_REQUEST_STATES),
            "total_cost": float(sum((sr.cost for sr in service_rows if sr.cost is not None), Decimal("0"))),
        },
    )


def update_order(
    orders: OrderRepository,
    users: UserRepository,
    ctx: Optional[RequestContext],
    order_id: int,
    body: OrderUpdate,
) -> Order:
    """Partial update by the assigned manager or an admin."""
    order = orders.get_with_people(order_id)
    enforce(ctx, Access.ASSIGNEE, Resource.of(order) if order else None, entity_name="Order")

    assignee_change = False
    new_assignee_id = None
    if body.assigned_to_id is not None:
        assignee_change = True
        if body.assigned_to_id != 0:
            assignee = users.get_by_id(body.assigned_to_id)
            if assignee is None or assignee.role not in (UserRole.MANAGER, UserRole.ADMIN):
                raise ValidationException("Assigned manager not found", details={"assigned_to_id": body.assigned_to_id})
            new_assignee_id = assignee.id

    previous_status = order.status
    lifecycle.apply_order_update(
        order,
        now(),
        name=body.name,
        description=body.description,
        cost=_money(body.cost),
        status=body.status,
        priority=body.priority,
    )
    if assignee_change:
        order.assigned_to_id = new_assignee_id

    orders.save(order, "update")
    logger.info(
        "Order updated",
        order_id=order.id,
        by=ctx.user_id,
        status_from=previous_status.value,
        status_to=order.status.value,
    )
    return orders.get_with_people(order.id)


def assign_to_self(orders: OrderRepository, ctx: Optional[RequestContext], order_id: int) -> Order:
    enforce(ctx, Access.STAFF)
    order = _found(orders.get_with_people(order_id))
    lifecycle.assign_order(order, ctx.user_id)
    orders.save(order, "assign")
    logger.info("Order assigned", order_id=order.id, manager_id=ctx.user_id, status=order.status.value)
    return orders.get_with_people(order.id)


def unassign_self(orders: OrderRepository, ctx: Optional[RequestContext], order_id: int) -> Order:
    enforce(ctx, Access.STAFF)
    order = _found(orders.get_with_people(order_id))
    lifecycle.unassign_order_by_manager(order, ctx.user_id)
    orders.save(order, "unassign")
    logger.info("Order handed back", order_id=order.id, manager_id=ctx.user_id)
    return orders.get_with_people(order.id)


def unassign_by_admin(orders: OrderRepository, ctx: Optional[RequestContext], order_id: int) -> Order:
    enforce(ctx, Access.ADMIN)
    order = _found(orders.get_with_people(order_id))
    previous_manager = order.assigned_to_id
    lifecycle.unassign_order_by_admin(order)
    orders.save(order, "admin_unassign")
    logger.info("Order unassigned by admin", order_id=order.id, previous_manager_id=previous_manager, by=ctx.user_id)
    return orders.get_with_people(order.id)


def get_order_stats(orders: OrderRepository, ctx: Optional[RequestContext]) -> OrderStats:
    enforce(ctx, Access.STAFF)
    return OrderStats(**orders.get_stats(ctx.user_id, today_start()))


def delete_order(orders: OrderRepository, ctx: Optional[RequestContext], order_id: int) -> None:
    enforce(ctx, Access.ADMIN)
    order = _found(orders.get_by_id(order_id))
    if orders.has_references(order_id):
        raise ValidationException(
            "The order is referenced by requests or reports and cannot be deleted",
            details={"order_id": order_id},
        )
    orders.delete(order)
    logger.info("Order deleted", order_id=order_id, by=ctx.user_id)

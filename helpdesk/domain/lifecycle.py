"""
State transitions for orders, support requests and service requests.

All functions mutate the given model in place and never touch the session.
Each order transition leaves ``complete_date`` set exactly when the status is
``Completed``.
"""

import enum
from datetime import datetime
from decimal import Decimal
from typing import Optional, TypeVar

from helpdesk.core.exceptions import ValidationException
from helpdesk.domain.models.enums import OrderStatus, Priority, RequestStatus
from helpdesk.domain.models.order import Order

E = TypeVar("E", bound=enum.Enum)

CLOSED_ORDER_STATES = (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


def parse_enum(enum_cls: type[E], value, field: str) -> E:
    """Case-insensitive lookup by value or name; unknown values are rejected."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower() if value is not None else ""
    for member in enum_cls:
        if text in (str(member.value).lower(), member.name.lower()):
            return member
    allowed = ", ".join(str(m.value) for m in enum_cls)
    raise ValidationException(
        f"Invalid {field} '{value}'. Allowed values: {allowed}",
        details={"field": field, "value": value},
    )


def order_invariant_holds(order: Order) -> bool:
    return (order.complete_date is not None) == (order.status == OrderStatus.COMPLETED)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

def set_order_status(order: Order, status: OrderStatus, moment: datetime) -> None:
    order.status = status
    if status == OrderStatus.COMPLETED:
        if order.complete_date is None:
            order.complete_date = moment
    else:
        order.complete_date = None


def assign_order(order: Order, manager_id: int) -> None:
    order.assigned_to_id = manager_id
    if order.status == OrderStatus.NEW:
        order.status = OrderStatus.PROCESSING


def unassign_order_by_manager(order: Order, manager_id: int) -> None:
    """A manager hands back an order it holds that is still open."""
    if order.assigned_to_id != manager_id:
        raise ValidationException("This order is not assigned to you")
    if order.status in CLOSED_ORDER_STATES:
        raise ValidationException("A completed or cancelled order cannot be handed back")
    order.assigned_to_id = None
    order.status = OrderStatus.NEW
    order.complete_date = None


def unassign_order_by_admin(order: Order) -> None:
    order.assigned_to_id = None
    if order.status == OrderStatus.PROCESSING:
        order.status = OrderStatus.NEW
    # A completed order keeps its completion date
    if order.status != OrderStatus.COMPLETED:
        order.complete_date = None


def apply_order_update(
    order: Order,
    moment: datetime,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    cost: Optional[Decimal] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
) -> None:
    """Apply a partial update; every value is parsed before anything changes."""
    new_status = parse_enum(OrderStatus, status, "status") if status is not None else None
    new_priority = parse_enum(Priority, priority, "priority") if priority is not None else None

    if name is not None:
        order.name = name
    if description is not None:
        order.description = description
    if cost is not None:
        order.cost = cost
    if new_priority is not None:
        order.priority = new_priority
    if new_status is not None:
        set_order_status(order, new_status, moment)


# ---------------------------------------------------------------------------
# Support and service requests
# ---------------------------------------------------------------------------

def assign_request(request, manager_id: int) -> None:
    request.assigned_to_id = manager_id
    if request.status == RequestStatus.NEW:
        request.status = RequestStatus.PROCESSING


def set_request_status(request, status) -> RequestStatus:
    new_status = parse_enum(RequestStatus, status, "status")
    request.status = new_status
    return new_status


def complete_request(request) -> None:
    request.status = RequestStatus.COMPLETED

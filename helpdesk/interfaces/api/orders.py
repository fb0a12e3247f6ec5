"""Order API routes — client intake, manager desk and admin actions."""

from typing import List

from fastapi import APIRouter, Depends, status

from helpdesk.application.services import order_service
from helpdesk.domain.access import RequestContext
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import (
    ReportRepository,
    ServiceRequestRepository,
    SupportRequestRepository,
)
from helpdesk.domain.repositories.user_repository import UserRepository
from helpdesk.domain.schemas.order import (
    OrderCreate,
    OrderDetail,
    OrderMutationResponse,
    OrderRead,
    OrderStats,
    OrderUpdate,
)
from helpdesk.interfaces.api.deps import get_request_context
from helpdesk.interfaces.deps import (
    get_order_repository,
    get_report_repository,
    get_service_request_repository,
    get_support_request_repository,
    get_user_repository,
)

router = APIRouter(prefix="/api/Orders", tags=["Orders"])


@router.get("", response_model=List[OrderRead])
def list_orders(
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return [OrderRead.from_model(o) for o in order_service.list_orders(orders, ctx)]


@router.post("/create", response_model=OrderMutationResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    order = order_service.create_order(orders, ctx, body)
    return OrderMutationResponse(message="Order created", order=OrderRead.from_model(order))


@router.get("/my", response_model=List[OrderRead])
def my_orders(
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return [OrderRead.from_model(o) for o in order_service.list_my_orders(orders, ctx)]


@router.get("/manager", response_model=List[OrderRead])
def manager_orders(
    mine: bool = False,
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    """All orders, or only those assigned to the caller with ``mine=true``."""
    return [OrderRead.from_model(o) for o in order_service.list_orders(orders, ctx, mine=mine)]


@router.get("/manager/stats", response_model=OrderStats)
def manager_stats(
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return order_service.get_order_stats(orders, ctx)


@router.get("/manager/detail/{order_id}", response_model=OrderDetail)
def manager_detail(
    order_id: int,
    orders: OrderRepository = Depends(get_order_repository),
    service_requests: ServiceRequestRepository = Depends(get_service_request_repository),
    support_requests: SupportRequestRepository = Depends(get_support_request_repository),
    reports: ReportRepository = Depends(get_report_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return order_service.get_order_detail(orders, service_requests, support_requests, reports, ctx, order_id)


@router.put("/manager/assign/{order_id}", response_model=OrderMutationResponse)
def assign_order(
    order_id: int,
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    order = order_service.assign_to_self(orders, ctx, order_id)
    return OrderMutationResponse(message="Order assigned", order=OrderRead.from_model(order))


@router.put("/manager/unassign/{order_id}", response_model=OrderMutationResponse)
def unassign_order(
    order_id: int,
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    order = order_service.unassign_self(orders, ctx, order_id)
    return OrderMutationResponse(message="Order handed back", order=OrderRead.from_model(order))


@router.put("/manager/{order_id}", response_model=OrderMutationResponse)
def update_order(
    order_id: int,
    body: OrderUpdate,
    orders: OrderRepository = Depends(get_order_repository),
    users: UserRepository = Depends(get_user_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    order = order_service.update_order(orders, users, ctx, order_id, body)
    return OrderMutationResponse(message="Order updated", order=OrderRead.from_model(order))


@router.put("/admin/unassign/{order_id}", response_model=OrderMutationResponse)
def admin_unassign_order(
    order_id: int,
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    order = order_service.unassign_by_admin(orders, ctx, order_id)
    return OrderMutationResponse(message="Order unassigned", order=OrderRead.from_model(order))


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return OrderRead.from_model(order_service.get_order(orders, ctx, order_id))


@router.delete("/{order_id}")
def delete_order(
    order_id: int,
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    order_service.delete_order(orders, ctx, order_id)
    return {"success": True, "message": "Order deleted", "id": order_id}

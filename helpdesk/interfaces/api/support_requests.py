"""Support request API routes — client inquiries and manager responses."""

from typing import List

from fastapi import APIRouter, Depends, status

from helpdesk.application.services import support_request_service as service
from helpdesk.domain.access import RequestContext
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import ReportRepository, SupportRequestRepository
from helpdesk.domain.schemas.support_request import (
    OrderOption,
    RespondRequest,
    RespondResponse,
    StatusChangeResponse,
    SupportRequestCreate,
    SupportRequestDetail,
    SupportRequestManagerRead,
    SupportRequestMutationResponse,
    SupportRequestRead,
    SupportRequestStats,
    SupportRequestStatusUpdate,
)
from helpdesk.interfaces.api.deps import get_request_context
from helpdesk.interfaces.deps import (
    get_order_repository,
    get_report_repository,
    get_support_request_repository,
)

router = APIRouter(prefix="/api/SupportRequests", tags=["SupportRequests"])


@router.get("/my", response_model=List[SupportRequestRead])
def my_requests(
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return [SupportRequestRead.from_model(r) for r in service.list_my_requests(requests, ctx)]


@router.get("/my-orders", response_model=List[OrderOption])
def my_order_options(
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    """Own orders for the 'related order' dropdown."""
    return service.list_my_order_options(orders, ctx)


@router.post("/create", response_model=SupportRequestMutationResponse, status_code=status.HTTP_201_CREATED)
def create_request(
    body: SupportRequestCreate,
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    request = service.create_request(requests, orders, ctx, body)
    return SupportRequestMutationResponse(
        message="Support request created",
        support_request=SupportRequestRead.from_model(request),
    )


@router.get("", response_model=List[SupportRequestRead])
def list_requests(
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return [SupportRequestRead.from_model(r) for r in service.list_requests(requests, ctx)]


@router.get("/manager", response_model=List[SupportRequestManagerRead])
def manager_requests(
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return service.list_manager_requests(requests, ctx)


@router.get("/manager/stats", response_model=SupportRequestStats)
def manager_stats(
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return service.get_request_stats(requests, ctx)


@router.get("/manager/detail/{request_id}", response_model=SupportRequestDetail)
def manager_detail(
    request_id: int,
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    reports: ReportRepository = Depends(get_report_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return service.get_request_detail(requests, reports, ctx, request_id)


@router.put("/manager/assign/{request_id}", response_model=StatusChangeResponse)
def assign_request(
    request_id: int,
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    request = service.assign_to_self(requests, ctx, request_id)
    return StatusChangeResponse(
        message="Support request assigned",
        id=request.id,
        assigned_to_id=request.assigned_to_id,
        new_status=request.status.value,
    )


@router.post("/manager/respond/{request_id}", response_model=RespondResponse, status_code=status.HTTP_201_CREATED)
def respond(
    request_id: int,
    body: RespondRequest,
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    reports: ReportRepository = Depends(get_report_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    report = service.respond(requests, reports, ctx, request_id, body)
    request = requests.get_by_id(request_id)
    return RespondResponse(
        message="Response sent",
        report_id=report.id,
        support_request_id=request_id,
        new_status=request.status.value,
    )


@router.put("/manager/status/{request_id}", response_model=StatusChangeResponse)
def change_status(
    request_id: int,
    body: SupportRequestStatusUpdate,
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    request = service.change_status(requests, ctx, request_id, body)
    return StatusChangeResponse(
        message="Status changed",
        id=request.id,
        assigned_to_id=request.assigned_to_id,
        new_status=request.status.value,
    )


@router.get("/{request_id}", response_model=SupportRequestRead)
def get_request(
    request_id: int,
    requests: SupportRequestRepository = Depends(get_support_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return SupportRequestRead.from_model(service.get_request(requests, ctx, request_id))

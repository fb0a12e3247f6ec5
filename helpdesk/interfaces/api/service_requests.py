"""Service request API routes."""

from typing import List

from fastapi import APIRouter, Depends, status

from helpdesk.application.services import service_request_service as service
from helpdesk.domain.access import RequestContext
from helpdesk.domain.repositories.order_repository import OrderRepository
from helpdesk.domain.repositories.request_repository import ServiceRequestRepository
from helpdesk.domain.schemas.service_request import (
    ServiceRequestCreate,
    ServiceRequestMutationResponse,
    ServiceRequestRead,
    ServiceRequestUpdate,
)
from helpdesk.interfaces.api.deps import get_request_context
from helpdesk.interfaces.deps import get_order_repository, get_service_request_repository

router = APIRouter(prefix="/api/ServiceRequests", tags=["ServiceRequests"])


@router.get("/my", response_model=List[ServiceRequestRead])
def my_requests(
    requests: ServiceRequestRepository = Depends(get_service_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return [ServiceRequestRead.from_model(r) for r in service.list_my_requests(requests, ctx)]


@router.post("/create", response_model=ServiceRequestMutationResponse, status_code=status.HTTP_201_CREATED)
def create_request(
    body: ServiceRequestCreate,
    requests: ServiceRequestRepository = Depends(get_service_request_repository),
    orders: OrderRepository = Depends(get_order_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    request = service.create_request(requests, orders, ctx, body)
    return ServiceRequestMutationResponse(
        message="Service request created",
        service_request=ServiceRequestRead.from_model(request),
    )


@router.get("", response_model=List[ServiceRequestRead])
def list_requests(
    requests: ServiceRequestRepository = Depends(get_service_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return [ServiceRequestRead.from_model(r) for r in service.list_requests(requests, ctx)]


@router.put("/manager/assign/{request_id}", response_model=ServiceRequestMutationResponse)
def assign_request(
    request_id: int,
    requests: ServiceRequestRepository = Depends(get_service_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    request = service.assign_to_self(requests, ctx, request_id)
    return ServiceRequestMutationResponse(
        message="Service request assigned",
        service_request=ServiceRequestRead.from_model(request),
    )


@router.put("/manager/{request_id}", response_model=ServiceRequestMutationResponse)
def update_request(
    request_id: int,
    body: ServiceRequestUpdate,
    requests: ServiceRequestRepository = Depends(get_service_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    request = service.update_request(requests, ctx, request_id, body)
    return ServiceRequestMutationResponse(
        message="Service request updated",
        service_request=ServiceRequestRead.from_model(request),
    )


@router.get("/{request_id}", response_model=ServiceRequestRead)
def get_request(
    request_id: int,
    requests: ServiceRequestRepository = Depends(get_service_request_repository),
    ctx: RequestContext = Depends(get_request_context),
):
    return ServiceRequestRead.from_model(service.get_request(requests, ctx, request_id))

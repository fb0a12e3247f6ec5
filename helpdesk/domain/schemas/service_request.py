"""Pydantic schemas for service requests."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from helpdesk.domain.schemas.common import Body, Title


class ServiceRequestCreate(BaseModel):
    service_type: Title
    description: Body
    order_id: Optional[int] = None


class ServiceRequestUpdate(BaseModel):
    status: Optional[str] = None
    cost: Optional[Decimal] = Field(default=None, ge=0, lt=Decimal("100000000"))


class ServiceRequestRead(BaseModel):
    id: int
    service_type: str
    description: str
    cost: Optional[float] = None
    status: str
    create_date: datetime
    client_id: int
    client_name: Optional[str] = None
    assigned_to_id: Optional[int] = None
    manager_name: Optional[str] = None
    order_id: Optional[int] = None

    @classmethod
    def from_model(cls, request) -> "ServiceRequestRead":
        return cls(
            id=request.id,
            service_type=request.service_type,
            description=request.description,
            cost=float(request.cost) if request.cost is not None else None,
            status=request.status.value,
            create_date=request.create_date,
            client_id=request.client_id,
            client_name=request.client.name if request.client else None,
            assigned_to_id=request.assigned_to_id,
            manager_name=request.manager.name if request.manager else None,
            order_id=request.order_id,
        )


class ServiceRequestMutationResponse(BaseModel):
    success: bool = True
    message: str
    service_request: ServiceRequestRead

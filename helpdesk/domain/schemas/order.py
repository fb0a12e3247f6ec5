"""Pydantic schemas for Order domain."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from helpdesk.domain.schemas.common import Body, Title


class OrderCreate(BaseModel):
    name: Title
    description: Body
    cost: Optional[Decimal] = Field(default=None, ge=0, lt=Decimal("100000000"))
    priority: str = "Medium"


class OrderUpdate(BaseModel):
    name: Optional[Title] = None
    description: Optional[Body] = None
    cost: Optional[Decimal] = Field(default=None, ge=0, lt=Decimal("100000000"))
    status: Optional[str] = None
    priority: Optional[str] = None
    # 0 clears the assignee
    assigned_to_id: Optional[int] = Field(default=None, ge=0)


class OrderRead(BaseModel):
    id: int
    name: str
    description: str
    cost: Optional[float] = None
    status: str
    priority: str
    create_date: datetime
    complete_date: Optional[datetime] = None
    client_id: int
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    assigned_to_id: Optional[int] = None
    manager_name: Optional[str] = None

    @classmethod
    def from_model(cls, order) -> "OrderRead":
        client = order.client
        manager = order.manager
        return cls(
            id=order.id,
            name=order.name,
            description=order.description,
            cost=float(order.cost) if order.cost is not None else None,
            status=order.status.value,
            priority=order.priority.value,
            create_date=order.create_date,
            complete_date=order.complete_date,
            client_id=order.client_id,
            client_name=client.name if client else None,
            client_email=client.email if client else None,
            client_phone=client.phone if client else None,
            assigned_to_id=order.assigned_to_id,
            manager_name=manager.name if manager else None,
        )


class OrderMutationResponse(BaseModel):
    success: bool = True
    message: str
    order: OrderRead


class OrderStats(BaseModel):
    total_orders: int
    new_orders: int
    processing_orders: int
    completed_orders: int
    cancelled_orders: int
    my_orders: int
    high_priority_orders: int
    today_orders: int


class OrderDetail(BaseModel):
    order: OrderRead
    client: dict[str, Any]
    manager: Optional[dict[str, Any]] = None
    service_requests: list[dict[str, Any]]
    support_requests: list[dict[str, Any]]
    reports: list[dict[str, Any]]
    statistics: dict[str, Any]

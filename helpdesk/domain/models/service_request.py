"""Service request model — maps to the 'serviceRequest' table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from helpdesk.core.clock import now
from helpdesk.domain.models.enums import RequestStatus, enum_column_type
from helpdesk.infrastructure.database import Base


class ServiceRequest(Base):
    __tablename__ = "serviceRequest"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_type = Column(String(250), nullable=False)
    description = Column(String(3500), nullable=False)
    cost = Column(Numeric(10, 2), nullable=True)
    status = Column(enum_column_type(RequestStatus, 20), nullable=False, default=RequestStatus.NEW)
    create_date = Column(DateTime, nullable=False, default=now)

    client_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    assigned_to_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, index=True)

    client = relationship("User", foreign_keys=[client_id])
    manager = relationship("User", foreign_keys=[assigned_to_id])
    order = relationship("Order")

    def __repr__(self):
        return f"<ServiceRequest {self.id} - {self.service_type}>"

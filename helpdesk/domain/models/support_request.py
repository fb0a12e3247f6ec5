"""Support request model — maps to the 'supportRequest' table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from helpdesk.core.clock import now
from helpdesk.domain.models.enums import RequestStatus, enum_column_type
from helpdesk.infrastructure.database import Base


class SupportRequest(Base):
    __tablename__ = "supportRequest"

    id = Column(Integer, primary_key=True, autoincrement=True)
    topic = Column(String(250), nullable=False)
    message = Column(String(3500), nullable=False)
    status = Column(enum_column_type(RequestStatus, 20), nullable=False, default=RequestStatus.NEW, index=True)
    create_date = Column(DateTime, nullable=False, default=now)

    client_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    assigned_to_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    related_order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, index=True)

    client = relationship("User", foreign_keys=[client_id])
    manager = relationship("User", foreign_keys=[assigned_to_id])
    related_order = relationship("Order")

    def __repr__(self):
        return f"<SupportRequest {self.id} - {self.topic}>"

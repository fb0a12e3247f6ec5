"""Order domain model — maps to the 'orders' table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from helpdesk.core.clock import now
from helpdesk.domain.models.enums import OrderStatus, Priority, enum_column_type
from helpdesk.infrastructure.database import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(250), nullable=False)
    description = Column(String(3500), nullable=False)
    cost = Column(Numeric(10, 2), nullable=True)
    status = Column(enum_column_type(OrderStatus, 20), nullable=False, default=OrderStatus.NEW, index=True)
    priority = Column(enum_column_type(Priority, 10), nullable=False, default=Priority.MEDIUM)
    create_date = Column(DateTime, nullable=False, default=now, index=True)
    complete_date = Column(DateTime, nullable=True)

    client_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    assigned_to_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    client = relationship("User", foreign_keys=[client_id])
    manager = relationship("User", foreign_keys=[assigned_to_id])

    def __repr__(self):
        return f"<Order {self.id} - {self.name} [{self.status.value if self.status else None}]>"

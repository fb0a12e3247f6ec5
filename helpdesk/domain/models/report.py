"""Report model — maps to the 'report' table. Rows are never updated."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from helpdesk.core.clock import now
from helpdesk.infrastructure.database import Base


class Report(Base):
    __tablename__ = "report"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(250), nullable=False)
    content = Column(String(3500), nullable=False)
    create_date = Column(DateTime, nullable=False, default=now, index=True)

    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, index=True)
    service_request_id = Column(Integer, ForeignKey("serviceRequest.id", ondelete="SET NULL"), nullable=True, index=True)
    support_request_id = Column(Integer, ForeignKey("supportRequest.id", ondelete="SET NULL"), nullable=True, index=True)

    author = relationship("User")

    def __repr__(self):
        return f"<Report {self.id} - {self.title}>"

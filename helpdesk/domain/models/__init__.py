"""Import every model so SQLAlchemy registers the tables."""

from helpdesk.domain.models.user import User
from helpdesk.domain.models.order import Order
from helpdesk.domain.models.support_request import SupportRequest
from helpdesk.domain.models.service_request import ServiceRequest
from helpdesk.domain.models.report import Report

__all__ = ["User", "Order", "SupportRequest", "ServiceRequest", "Report"]

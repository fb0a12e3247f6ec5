"""Order Repository Interface."""

from datetime import datetime
from typing import Dict, List, Optional

from helpdesk.domain.models.order import Order
from helpdesk.domain.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):

    def get_with_people(self, order_id: int) -> Optional[Order]:
        """Get an order with client and manager loaded."""
        ...

    def list_newest(self, assigned_to_id: Optional[int] = None) -> List[Order]:
        ...

    def list_by_client(self, client_id: int) -> List[Order]:
        ...

    def get_owned(self, order_id: int, client_id: int) -> Optional[Order]:
        ...

    def has_references(self, order_id: int) -> bool:
        """True while any request or report points at the order."""
        ...

    def get_stats(self, manager_id: int, since: datetime) -> Dict[str, int]:
        ...

"""User Repository Interface."""

from typing import List, Optional

from helpdesk.domain.models.user import User
from helpdesk.domain.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        ...

    def phone_taken(self, phone: str, exclude_id: Optional[int] = None) -> bool:
        ...

    def has_related_records(self, user_id: int) -> bool:
        """True while any order, request or report references the user."""
        ...

    def count_admins(self) -> int:
        ...

    def list_by_name(self) -> List[User]:
        ...

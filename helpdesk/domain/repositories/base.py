"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def exists(self, id: int) -> bool:
        ...

    def create(self, db_obj: T) -> T:
        """Create a new entity."""
        ...

    def save(self, db_obj: T, operation: str = "save") -> T:
        """Persist changes already applied to ``db_obj``."""
        ...

    def delete(self, db_obj: T) -> None:
        """Delete an entity."""
        ...

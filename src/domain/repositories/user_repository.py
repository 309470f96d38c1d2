"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import User


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        ...

    async def get_many(self, ids: list[UUID]) -> list[User]:
        """Get the users with the given IDs (missing IDs are skipped)."""
        ...

    async def create(self, user: User) -> User:
        """Create a new user."""
        ...

"""Comment repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.comment import Comment


class ICommentRepository(Protocol):
    """Repository interface for Comment entities."""

    async def get_for_task(self, task_id: UUID) -> list[Comment]:
        """Get a task's comments, oldest first."""
        ...

    async def create(self, comment: Comment) -> Comment:
        """Create a new comment."""
        ...

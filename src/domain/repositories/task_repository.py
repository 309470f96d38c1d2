"""Task repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.task import Task


class ITaskRepository(Protocol):
    """Repository interface for Task entities and their assignees."""

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID, with its assignee IDs."""
        ...

    async def get_top_level(
        self, project_id: UUID, section_id: UUID | None = None
    ) -> list[Task]:
        """Get top-level tasks of a project in display order.

        When ``section_id`` is given only tasks of that section are returned.
        """
        ...

    async def get_subtasks(self, parent_id: UUID) -> list[Task]:
        """Get direct subtasks of a task in display order."""
        ...

    async def max_order(self, project_id: UUID, section_id: UUID | None) -> int | None:
        """Highest order in the sibling scope, or None if the scope is empty."""
        ...

    async def count_children(self, task_ids: list[UUID]) -> dict[UUID, tuple[int, int]]:
        """Map task ID -> (subtask_count, comment_count)."""
        ...

    async def create(self, task: Task) -> Task:
        """Create a new task (assignees are written separately)."""
        ...

    async def update(self, task: Task) -> Task:
        """Update an existing task's own columns."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a task with its subtasks, assignees and comments."""
        ...

    async def set_assignees(self, task_id: UUID, user_ids: list[UUID]) -> list[UUID]:
        """Replace the task's assignee set."""
        ...

"""Event log repository protocol."""

from typing import List, Protocol
from uuid import UUID

from domain.entities.event_log import EventLogEntry


class IEventLogRepository(Protocol):
    """Append-only repository interface for EventLogEntry records."""

    async def append(self, entry: EventLogEntry) -> EventLogEntry:
        """Append a new entry."""
        ...

    async def get_for_workspace(
        self,
        workspace_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> List[EventLogEntry]:
        """Get entries for a workspace, ordered by newest first."""
        ...

    async def get_for_task(
        self,
        task_id: UUID,
        limit: int = 50,
    ) -> List[EventLogEntry]:
        """Get entries for a specific task, ordered by newest first."""
        ...

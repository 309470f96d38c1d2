"""Event log service for recording and querying workspace audit entries."""

from collections.abc import Callable
from typing import Any
from uuid import UUID

from domain.entities.event_log import EventLogEntry, EventType
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import AccessResolver
from domain.services.mutation import Effect


class EventLogService:
    """Service layer for event log writes and reads."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def effect(
        self,
        type: EventType,
        actor_id: UUID,
        workspace_id: UUID,
        describe: Callable[[Any], str],
        project_id: UUID | None = None,
        task_id: Callable[[Any], UUID | None] | UUID | None = None,
        changes: dict[str, Any] | None = None,
    ) -> Effect[Any]:
        """Build an effect that appends exactly one entry for a mutation.

        ``describe`` (and ``task_id`` when callable) receive the primary
        write's result, so entries can reference entities created in the
        same transaction.

        Args:
            type: The event type.
            actor_id: The user who performed the mutation.
            workspace_id: The workspace the mutation happened in.
            describe: Builds the human-readable description from the result.
            project_id: Optional project reference.
            task_id: Optional task reference, or a function of the result.
            changes: Optional field-level diff {field: {old, new}}.
        """

        async def append(uow: IUnitOfWork, result: Any) -> EventLogEntry:
            entry = EventLogEntry(
                type=type,
                description=describe(result),
                user_id=actor_id,
                workspace_id=workspace_id,
                project_id=project_id,
                task_id=task_id(result) if callable(task_id) else task_id,
                changes=changes or None,
            )
            return await uow.events.append(entry)

        return append

    async def get_workspace_events(
        self,
        workspace_id: UUID,
        user_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> list[EventLogEntry]:
        """Get the event feed for a workspace, newest first. Requires membership."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_workspace(user_id, workspace_id)
            return await uow.events.get_for_workspace(  # type: ignore[no-any-return]
                workspace_id, limit=limit, offset=offset
            )

    async def get_task_history(
        self,
        task_id: UUID,
        user_id: UUID,
        limit: int = 50,
    ) -> list[EventLogEntry]:
        """Get the entries referencing a task, newest first. Requires membership."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_task(user_id, task_id)
            return await uow.events.get_for_task(task_id, limit=limit)  # type: ignore[no-any-return]

    @staticmethod
    def compute_diff(
        old_dict: dict[str, Any], new_dict: dict[str, Any]
    ) -> dict[str, dict[str, Any]]:
        """Compute field-level diff between two dictionaries.

        Returns:
            Dict of changed fields: {field_name: {"old": old_val, "new": new_val}}
        """
        diff: dict[str, dict[str, Any]] = {}
        for key in set(old_dict) | set(new_dict):
            old_val = old_dict.get(key)
            new_val = new_dict.get(key)
            if old_val != new_val:
                diff[key] = {"old": old_val, "new": new_val}
        return diff

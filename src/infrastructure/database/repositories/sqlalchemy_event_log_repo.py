"""SQLAlchemy implementation of the append-only Event Log repository."""

from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.event_log import EventLogEntry, EventType
from infrastructure.database.models import EventLogModel


class SQLAlchemyEventLogRepository:
    """SQLAlchemy implementation of IEventLogRepository.

    There is deliberately no update or delete method.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, entry: EventLogEntry) -> EventLogEntry:
        """Append a new entry."""
        model = self._to_model(entry)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_for_workspace(
        self,
        workspace_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> List[EventLogEntry]:
        """Get entries for a workspace, ordered by newest first."""
        stmt = (
            select(EventLogModel)
            .where(EventLogModel.workspace_id == workspace_id)
            .order_by(EventLogModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_for_task(
        self,
        task_id: UUID,
        limit: int = 50,
    ) -> List[EventLogEntry]:
        """Get entries for a specific task, ordered by newest first."""
        stmt = (
            select(EventLogModel)
            .where(EventLogModel.task_id == task_id)
            .order_by(EventLogModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: EventLogModel) -> EventLogEntry:
        """Convert ORM model to domain entity."""
        return EventLogEntry(
            id=model.id,
            type=EventType(model.type),
            description=model.description,
            user_id=model.user_id,
            workspace_id=model.workspace_id,
            project_id=model.project_id,
            task_id=model.task_id,
            changes=model.changes,
            created_at=model.created_at,
        )

    def _to_model(self, entity: EventLogEntry) -> EventLogModel:
        """Convert domain entity to ORM model."""
        return EventLogModel(
            id=entity.id,
            type=entity.type.value,
            description=entity.description,
            user_id=entity.user_id,
            workspace_id=entity.workspace_id,
            project_id=entity.project_id,
            task_id=entity.task_id,
            changes=entity.changes,
            created_at=entity.created_at,
        )

"""SQLAlchemy implementation of Notification repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.notification import Notification, NotificationType
from infrastructure.database.models import NotificationModel


class SQLAlchemyNotificationRepository:
    """SQLAlchemy implementation of INotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_batch(self, notifications: list[Notification]) -> list[Notification]:
        """Create several notifications with a single flush."""
        models = [self._to_model(notification) for notification in notifications]
        self._session.add_all(models)
        await self._session.flush()
        return [self._to_entity(model) for model in models]

    async def get_for_user(
        self, user_id: UUID, limit: int = 50, offset: int = 0
    ) -> list[Notification]:
        """Get a user's notifications, newest first."""
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_unread_count(self, user_id: UUID) -> int:
        """Count a user's unread notifications."""
        stmt = select(func.count()).where(
            NotificationModel.user_id == user_id,
            NotificationModel.is_read == False,  # noqa: E712
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    def _to_entity(self, model: NotificationModel) -> Notification:
        """Convert ORM model to domain entity."""
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            task_id=model.task_id,
            project_id=model.project_id,
            is_read=model.is_read,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Notification) -> NotificationModel:
        """Convert domain entity to ORM model."""
        return NotificationModel(
            id=entity.id,
            user_id=entity.user_id,
            type=entity.type.value,
            title=entity.title,
            message=entity.message,
            task_id=entity.task_id,
            project_id=entity.project_id,
            is_read=entity.is_read,
            created_at=entity.created_at,
        )

"""Notification fan-out and inbox reads."""

from collections.abc import Callable, Iterable
from uuid import UUID

import structlog

from domain.entities.notification import Notification, NotificationType
from domain.entities.task import Task
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.mutation import Effect

logger = structlog.get_logger()


def _recipients(candidates: Iterable[UUID], actor_id: UUID) -> list[UUID]:
    """Deduplicate while keeping input order; the actor never notifies themselves."""
    return [uid for uid in dict.fromkeys(candidates) if uid != actor_id]


class NotificationService:
    """Derives notification records from mutations and serves the inbox."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    # --- Fan-out (pure) ---

    @staticmethod
    def notify_assignment(
        task: Task, assignee_ids: Iterable[UUID], actor_id: UUID
    ) -> list[Notification]:
        """One TASK_ASSIGNED notification per assignee other than the actor."""
        return [
            Notification(
                user_id=uid,
                type=NotificationType.TASK_ASSIGNED,
                title="Task assigned",
                message=f'You\'ve been assigned to "{task.title}"',
                task_id=task.id,
                project_id=task.project_id,
            )
            for uid in _recipients(assignee_ids, actor_id)
        ]

    @staticmethod
    def notify_comment(
        task: Task, actor_id: UUID, actor_name: str | None = None
    ) -> list[Notification]:
        """One COMMENT_ADDED notification per current assignee other than the actor.

        The task creator is not notified unless they are also an assignee.
        """
        return [
            Notification(
                user_id=uid,
                type=NotificationType.COMMENT_ADDED,
                title="New comment",
                message=f'{actor_name or "Someone"} commented on "{task.title}"',
                task_id=task.id,
                project_id=task.project_id,
            )
            for uid in _recipients(task.assignee_ids, actor_id)
        ]

    # --- Effects (run inside a MutationCoordinator transaction) ---

    def assignment_effect(self, assignee_ids: list[UUID], actor_id: UUID) -> Effect[Task]:
        """Effect that notifies ``assignee_ids`` about the task the primary write produced."""

        async def deliver(uow: IUnitOfWork, task: Task) -> list[Notification]:
            return await self._deliver(uow, self.notify_assignment(task, assignee_ids, actor_id))

        return deliver

    def comment_effect(self, task: Task, actor_id: UUID, actor_name: str | None) -> Effect[object]:
        """Effect that notifies the assignees of ``task`` about a new comment."""

        async def deliver(uow: IUnitOfWork, _comment: object) -> list[Notification]:
            return await self._deliver(uow, self.notify_comment(task, actor_id, actor_name))

        return deliver

    @staticmethod
    async def _deliver(uow: IUnitOfWork, notifications: list[Notification]) -> list[Notification]:
        if not notifications:
            return []
        created = await uow.notifications.create_batch(notifications)
        logger.debug(
            "notifications_created",
            type=notifications[0].type.value,
            count=len(created),
        )
        return created

    # --- Read methods (use own UoW context) ---

    async def get_inbox(
        self, user_id: UUID, limit: int = 50, offset: int = 0
    ) -> tuple[list[Notification], int]:
        """Get the caller's notifications (newest first) and unread count."""
        async with self._uow_factory() as uow:
            notifications = await uow.notifications.get_for_user(
                user_id, limit=limit, offset=offset
            )
            unread = await uow.notifications.get_unread_count(user_id)
            return notifications, unread

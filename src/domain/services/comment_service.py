"""Comment service layer."""

from collections.abc import Callable
from uuid import UUID

from domain.entities.comment import Comment
from domain.entities.event_log import EventType
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import AccessResolver
from domain.services.event_log_service import EventLogService
from domain.services.mutation import MutationCoordinator
from domain.services.notification_service import NotificationService


class CommentService:
    """Service layer for task comments."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        event_log_service: EventLogService,
        notification_service: NotificationService,
        coordinator: MutationCoordinator | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._events = event_log_service
        self._notifications = notification_service
        self._coordinator = coordinator or MutationCoordinator()

    async def get_for_task(self, task_id: UUID, user_id: UUID) -> list[Comment]:
        """Get a task's comments, oldest first."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_task(user_id, task_id)
            return await uow.comments.get_for_task(task_id)  # type: ignore[no-any-return]

    async def create(
        self,
        task_id: UUID,
        user_id: UUID,
        content: str,
        actor_name: str | None = None,
    ) -> Comment:
        """Add a comment and notify the task's current assignees (except the author)."""
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_task(user_id, task_id)
            task = access.task
            comment = Comment(task_id=task_id, user_id=user_id, content=content)

            async def create(uow: IUnitOfWork) -> Comment:
                return await uow.comments.create(comment)

            return await self._coordinator.execute(
                uow,
                create,
                [
                    self._notifications.comment_effect(task, user_id, actor_name),
                    self._events.effect(
                        EventType.COMMENT_ADDED,
                        actor_id=user_id,
                        workspace_id=access.workspace_id,
                        project_id=task.project_id,
                        task_id=task_id,
                        describe=lambda _c: f'Comment added to "{task.title}"',
                    ),
                ],
                operation="comment.create",
            )

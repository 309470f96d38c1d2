"""Task service layer with business logic."""

from collections.abc import Callable
from datetime import datetime
from typing import Any, cast
from uuid import UUID

import structlog

from core.exceptions import TaskNotFoundError, ValidationFailedError
from domain.entities.event_log import EventType
from domain.entities.task import (
    Task,
    TaskDetail,
    TaskPriority,
    TaskStatus,
    TaskSummary,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import AccessResolver
from domain.services.event_log_service import EventLogService
from domain.services.mutation import Effect, MutationCoordinator
from domain.services.notification_service import NotificationService
from domain.services.ordering import OrderedCollectionManager, sort_siblings

logger = structlog.get_logger()

# Sentinel for "field not supplied" on partial updates where None is meaningful.
UNSET: Any = ...


class TaskService:
    """Service layer for Task business logic.

    Every operation resolves the caller's membership through the task's
    project before touching data, and every write goes through the
    MutationCoordinator together with its notifications and event entry.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        event_log_service: EventLogService,
        notification_service: NotificationService,
        ordering: OrderedCollectionManager | None = None,
        coordinator: MutationCoordinator | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._events = event_log_service
        self._notifications = notification_service
        self._ordering = ordering or OrderedCollectionManager()
        self._coordinator = coordinator or MutationCoordinator()

    # --- Reads ---

    async def get_for_project(
        self, project_id: UUID, user_id: UUID, section_id: UUID | None = None
    ) -> list[TaskSummary]:
        """Top-level tasks of a project in display order, with child counts."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_project(user_id, project_id)
            tasks = sort_siblings(await uow.tasks.get_top_level(project_id, section_id))
            counts = await uow.tasks.count_children([t.id for t in tasks])
            summaries = []
            for task in tasks:
                subtask_count, comment_count = counts.get(task.id, (0, 0))
                summaries.append(
                    TaskSummary(
                        task=task, subtask_count=subtask_count, comment_count=comment_count
                    )
                )
            return summaries

    async def get_by_id(self, task_id: UUID, user_id: UUID) -> TaskDetail:
        """Get a task with its subtasks and comments."""
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_task(user_id, task_id)
            subtasks = sort_siblings(await uow.tasks.get_subtasks(task_id))
            comments = await uow.comments.get_for_task(task_id)
            return TaskDetail(task=access.task, subtasks=subtasks, comments=comments)

    # --- Writes ---

    async def create(
        self,
        project_id: UUID,
        user_id: UUID,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
        start_date: datetime | None = None,
        section_id: UUID | None = None,
        parent_id: UUID | None = None,
        assignee_ids: list[UUID] | None = None,
    ) -> Task:
        """Create a task at the end of its sibling scope and notify its assignees."""
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_project(user_id, project_id)

            if parent_id is not None:
                parent = await self._require_parent(uow, parent_id, project_id)
                if section_id is None:
                    section_id = parent.section_id
            if section_id is not None:
                await self._ordering.require_section_in_project(uow, section_id, project_id)
            assignees = await self._validate_assignees(
                uow, access.workspace_id, assignee_ids or []
            )

            order = await self._ordering.next_task_order(uow, project_id, section_id)
            task = Task(
                project_id=project_id,
                created_by=user_id,
                title=title,
                description=description,
                priority=priority,
                due_date=due_date,
                start_date=start_date,
                section_id=section_id,
                parent_id=parent_id,
                order=order,
            )
            task.set_status(status)

            async def create(uow: IUnitOfWork) -> Task:
                created = await uow.tasks.create(task)
                created.assignee_ids = await uow.tasks.set_assignees(created.id, assignees)
                return created

            effects: list[Effect[Task]] = [
                self._notifications.assignment_effect(assignees, user_id),
                self._events.effect(
                    EventType.TASK_CREATED,
                    actor_id=user_id,
                    workspace_id=access.workspace_id,
                    project_id=project_id,
                    task_id=task.id,
                    describe=lambda t: f'Task "{t.title}" created',
                ),
            ]
            created = await self._coordinator.execute(
                uow, create, effects, operation="task.create"
            )
            logger.info(
                "task_created",
                task_id=str(created.id),
                project_id=str(project_id),
                order=created.order,
            )
            return created

    async def update(
        self,
        task_id: UUID,
        user_id: UUID,
        title: str | None = None,
        description: Any = UNSET,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        due_date: Any = UNSET,
        start_date: Any = UNSET,
        section_id: Any = UNSET,
        assignee_ids: list[UUID] | None = None,
    ) -> Task:
        """Partially update a task.

        ``description``, ``due_date``, ``start_date`` and ``section_id`` accept
        None to clear them. Moving to another section appends the task there. Passing
        ``assignee_ids`` replaces the assignee set and notifies every
        assignee in the new set except the actor.
        """
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_task(user_id, task_id)
            task = access.task
            old_state = self._snapshot(task)

            if section_id is not UNSET and section_id != task.section_id:
                if task.is_subtask:
                    raise ValidationFailedError(
                        "Subtasks cannot change section", field="section_id"
                    )
                if section_id is not None:
                    await self._ordering.require_section_in_project(
                        uow, cast(UUID, section_id), task.project_id
                    )
                task.order = await self._ordering.next_task_order(
                    uow, task.project_id, section_id
                )
                task.section_id = section_id

            assignees: list[UUID] | None = None
            if assignee_ids is not None:
                assignees = await self._validate_assignees(
                    uow, access.workspace_id, assignee_ids
                )

            if title is not None:
                task.title = title
            if description is not UNSET:
                task.description = description
            if priority is not None:
                task.priority = priority
            if due_date is not UNSET:
                task.due_date = due_date
            if start_date is not UNSET:
                task.start_date = start_date
            if status is not None:
                task.set_status(status)
            task.updated_at = datetime.utcnow()

            new_state = self._snapshot(task)
            if assignees is not None:
                new_state["assignee_ids"] = [str(uid) for uid in assignees]
            changes = EventLogService.compute_diff(old_state, new_state)

            async def update(uow: IUnitOfWork) -> Task:
                updated = await uow.tasks.update(task)
                if assignees is not None:
                    updated.assignee_ids = await uow.tasks.set_assignees(task_id, assignees)
                else:
                    updated.assignee_ids = task.assignee_ids
                return updated

            effects: list[Effect[Task]] = []
            if assignees:
                effects.append(self._notifications.assignment_effect(assignees, user_id))
            effects.append(
                self._events.effect(
                    EventType.TASK_UPDATED,
                    actor_id=user_id,
                    workspace_id=access.workspace_id,
                    project_id=task.project_id,
                    task_id=task_id,
                    describe=lambda t: f'Task "{t.title}" updated',
                    changes=changes,
                )
            )
            return await self._coordinator.execute(uow, update, effects, operation="task.update")

    async def reorder(
        self,
        task_id: UUID,
        user_id: UUID,
        order: int,
        section_id: UUID | None,
    ) -> Task:
        """Place a task at ``order`` in ``section_id`` (None = no section).

        Siblings are left untouched; the caller computes ``order``.
        """
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_task(user_id, task_id)
            task = access.task
            old_section_id = task.section_id

            async def reorder(uow: IUnitOfWork) -> Task:
                return await self._ordering.reorder_task(uow, task, order, section_id)

            effects: list[Effect[Task]] = []
            if section_id != old_section_id:
                effects.append(
                    self._events.effect(
                        EventType.TASK_MOVED,
                        actor_id=user_id,
                        workspace_id=access.workspace_id,
                        project_id=task.project_id,
                        task_id=task_id,
                        describe=lambda t: f'Task "{t.title}" moved',
                        changes={
                            "section_id": {
                                "old": str(old_section_id) if old_section_id else None,
                                "new": str(section_id) if section_id else None,
                            }
                        },
                    )
                )
            moved = await self._coordinator.execute(uow, reorder, effects, operation="task.reorder")
            moved.assignee_ids = task.assignee_ids
            return moved

    async def delete(self, task_id: UUID, user_id: UUID) -> bool:
        """Delete a task with its subtasks, assignees and comments."""
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_task(user_id, task_id)
            task = access.task

            async def delete(uow: IUnitOfWork) -> bool:
                return await uow.tasks.delete(task_id)

            return await self._coordinator.execute(
                uow,
                delete,
                [
                    self._events.effect(
                        EventType.TASK_DELETED,
                        actor_id=user_id,
                        workspace_id=access.workspace_id,
                        project_id=task.project_id,
                        task_id=task_id,
                        describe=lambda _deleted: f'Task "{task.title}" deleted',
                    )
                ],
                operation="task.delete",
            )

    # --- Validation helpers ---

    @staticmethod
    async def _require_parent(uow: IUnitOfWork, parent_id: UUID, project_id: UUID) -> Task:
        """Subtasks hang off a top-level task of the same project."""
        parent = await uow.tasks.get(parent_id)
        if not parent or parent.project_id != project_id:
            raise TaskNotFoundError(str(parent_id))
        if parent.is_subtask:
            raise ValidationFailedError(
                "Subtasks cannot have their own subtasks", field="parent_id"
            )
        return parent

    @staticmethod
    async def _validate_assignees(
        uow: IUnitOfWork, workspace_id: UUID, assignee_ids: list[UUID]
    ) -> list[UUID]:
        """Deduplicate assignees and require each one to be a workspace member."""
        unique = list(dict.fromkeys(assignee_ids))
        if not unique:
            return []
        members = await uow.workspaces.get_member_ids(workspace_id, unique)
        outsiders = [uid for uid in unique if uid not in members]
        if outsiders:
            raise ValidationFailedError(
                "Assignees must be members of the workspace", field="assignee_ids"
            )
        return unique

    @staticmethod
    def _snapshot(task: Task) -> dict[str, Any]:
        return {
            "title": task.title,
            "description": task.description,
            "status": task.status.value,
            "priority": task.priority.value,
            "due_date": task.due_date.isoformat() if task.due_date else None,
            "start_date": task.start_date.isoformat() if task.start_date else None,
            "section_id": str(task.section_id) if task.section_id else None,
            "assignee_ids": [str(uid) for uid in task.assignee_ids],
        }

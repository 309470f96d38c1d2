"""SQLAlchemy implementation of Task repository."""

from collections import defaultdict
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task import Task, TaskPriority, TaskStatus
from infrastructure.database.models import CommentModel, TaskAssigneeModel, TaskModel


class SQLAlchemyTaskRepository:
    """SQLAlchemy implementation of ITaskRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID, with its assignee IDs."""
        stmt = select(TaskModel).where(TaskModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None
        assignees = await self._assignees_batch([model.id])
        return self._to_entity(model, assignees.get(model.id, []))

    async def get_top_level(
        self, project_id: UUID, section_id: UUID | None = None
    ) -> list[Task]:
        """Get top-level tasks of a project, optionally limited to one section."""
        stmt = select(TaskModel).where(
            TaskModel.project_id == project_id,
            TaskModel.parent_id.is_(None),
        )
        if section_id is not None:
            stmt = stmt.where(TaskModel.section_id == section_id)
        stmt = stmt.order_by(TaskModel.order, TaskModel.created_at)
        return await self._fetch(stmt)

    async def get_subtasks(self, parent_id: UUID) -> list[Task]:
        """Get direct subtasks of a task."""
        stmt = (
            select(TaskModel)
            .where(TaskModel.parent_id == parent_id)
            .order_by(TaskModel.order, TaskModel.created_at)
        )
        return await self._fetch(stmt)

    async def max_order(self, project_id: UUID, section_id: UUID | None) -> int | None:
        """Highest order in the sibling scope, or None if the scope is empty."""
        stmt = select(func.max(TaskModel.order)).where(TaskModel.project_id == project_id)
        if section_id is None:
            stmt = stmt.where(TaskModel.section_id.is_(None))
        else:
            stmt = stmt.where(TaskModel.section_id == section_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_children(self, task_ids: list[UUID]) -> dict[UUID, tuple[int, int]]:
        """Get (subtask_count, comment_count) for multiple tasks in two queries."""
        if not task_ids:
            return {}

        subtask_stmt = (
            select(TaskModel.parent_id, func.count().label("subtask_count"))
            .where(TaskModel.parent_id.in_(task_ids))
            .group_by(TaskModel.parent_id)
        )
        comment_stmt = (
            select(CommentModel.task_id, func.count().label("comment_count"))
            .where(CommentModel.task_id.in_(task_ids))
            .group_by(CommentModel.task_id)
        )
        subtasks = {
            row.parent_id: row.subtask_count
            for row in await self._session.execute(subtask_stmt)
        }
        comments = {
            row.task_id: row.comment_count
            for row in await self._session.execute(comment_stmt)
        }
        return {
            task_id: (subtasks.get(task_id, 0), comments.get(task_id, 0))
            for task_id in task_ids
        }

    async def create(self, task: Task) -> Task:
        """Create a new task. Assignees are written with ``set_assignees``."""
        model = self._to_model(task)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model, [])

    async def update(self, task: Task) -> Task:
        """Update an existing task's own columns."""
        stmt = select(TaskModel).where(TaskModel.id == task.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Task {task.id} not found")

        model.section_id = task.section_id
        model.title = task.title
        model.description = task.description
        model.status = task.status.value
        model.priority = task.priority.value
        model.due_date = task.due_date
        model.start_date = task.start_date
        model.order = task.order
        model.updated_at = task.updated_at
        model.completed_at = task.completed_at

        await self._session.flush()
        return self._to_entity(model, list(task.assignee_ids))

    async def delete(self, id: UUID) -> bool:
        """Delete a task and its subtasks, assignees and comments (cascade)."""
        stmt = select(TaskModel).where(TaskModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def set_assignees(self, task_id: UUID, user_ids: list[UUID]) -> list[UUID]:
        """Replace the task's assignee set."""
        await self._session.execute(
            delete(TaskAssigneeModel).where(TaskAssigneeModel.task_id == task_id)
        )
        unique = list(dict.fromkeys(user_ids))
        self._session.add_all(
            [TaskAssigneeModel(task_id=task_id, user_id=user_id) for user_id in unique]
        )
        await self._session.flush()
        return unique

    async def _fetch(self, stmt) -> list[Task]:  # type: ignore[no-untyped-def]
        result = await self._session.execute(stmt)
        models = list(result.scalars())
        assignees = await self._assignees_batch([model.id for model in models])
        return [self._to_entity(model, assignees.get(model.id, [])) for model in models]

    async def _assignees_batch(self, task_ids: list[UUID]) -> dict[UUID, list[UUID]]:
        """Get assignee IDs for multiple tasks in a single query."""
        if not task_ids:
            return {}
        stmt = (
            select(TaskAssigneeModel.task_id, TaskAssigneeModel.user_id)
            .where(TaskAssigneeModel.task_id.in_(task_ids))
            .order_by(TaskAssigneeModel.assigned_at)
        )
        result = await self._session.execute(stmt)
        mapping: dict[UUID, list[UUID]] = defaultdict(list)
        for row in result:
            mapping[row.task_id].append(row.user_id)
        return mapping

    def _to_entity(self, model: TaskModel, assignee_ids: list[UUID]) -> Task:
        """Convert ORM model to domain entity."""
        return Task(
            id=model.id,
            project_id=model.project_id,
            section_id=model.section_id,
            parent_id=model.parent_id,
            created_by=model.created_by,
            title=model.title,
            description=model.description,
            status=TaskStatus(model.status),
            priority=TaskPriority(model.priority),
            due_date=model.due_date,
            start_date=model.start_date,
            order=model.order,
            assignee_ids=assignee_ids,
            created_at=model.created_at,
            updated_at=model.updated_at,
            completed_at=model.completed_at,
        )

    def _to_model(self, entity: Task) -> TaskModel:
        """Convert domain entity to ORM model."""
        return TaskModel(
            id=entity.id,
            project_id=entity.project_id,
            section_id=entity.section_id,
            parent_id=entity.parent_id,
            created_by=entity.created_by,
            title=entity.title,
            description=entity.description,
            status=entity.status.value,
            priority=entity.priority.value,
            due_date=entity.due_date,
            start_date=entity.start_date,
            order=entity.order,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            completed_at=entity.completed_at,
        )

"""Order keys for sibling collections (sections in a project, tasks in a section)."""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol, TypeVar
from uuid import UUID

from core.exceptions import SectionNotFoundError, ValidationFailedError
from domain.entities.project import Section
from domain.entities.task import Task
from domain.repositories.unit_of_work import IUnitOfWork


class _Ordered(Protocol):
    id: UUID
    order: int
    created_at: datetime


O = TypeVar("O", bound=_Ordered)


def sibling_sort_key(item: _Ordered) -> tuple[int, datetime, str]:
    """Display order: ``order``, then creation time, then id as a last resort."""
    return (item.order, item.created_at, str(item.id))


def sort_siblings(items: Iterable[O]) -> list[O]:
    return sorted(items, key=sibling_sort_key)


class OrderedCollectionManager:
    """Assigns and rewrites integer order keys.

    New siblings get ``max(order) + 1`` in their scope (0 when empty).
    Repositioning writes the caller's value as-is; siblings are never
    renumbered and duplicate values are allowed, so two inserts racing on an
    empty scope both succeed and tie on ``order``.
    """

    async def next_section_order(self, uow: IUnitOfWork, project_id: UUID) -> int:
        current = await uow.sections.max_order(project_id)
        return 0 if current is None else current + 1

    async def next_task_order(
        self, uow: IUnitOfWork, project_id: UUID, section_id: UUID | None
    ) -> int:
        current = await uow.tasks.max_order(project_id, section_id)
        return 0 if current is None else current + 1

    async def reorder_task(
        self,
        uow: IUnitOfWork,
        task: Task,
        new_order: int,
        new_section_id: UUID | None,
    ) -> Task:
        """Place ``task`` at ``new_order`` in ``(task.project_id, new_section_id)``.

        Passing a different section moves the task to that sibling scope;
        ``None`` moves it out of any section.
        """
        if new_section_id is not None and new_section_id != task.section_id:
            await self.require_section_in_project(uow, new_section_id, task.project_id)
        if task.is_subtask and new_section_id != task.section_id:
            raise ValidationFailedError("Subtasks cannot change section", field="section_id")

        task.order = new_order
        task.section_id = new_section_id
        task.updated_at = datetime.utcnow()
        return await uow.tasks.update(task)

    async def reorder_section(self, uow: IUnitOfWork, section: Section, new_order: int) -> Section:
        return await uow.sections.update_order(section.id, new_order)

    @staticmethod
    async def require_section_in_project(
        uow: IUnitOfWork, section_id: UUID, project_id: UUID
    ) -> Section:
        """A task's section must belong to the task's own project."""
        section = await uow.sections.get(section_id)
        if not section:
            raise SectionNotFoundError(str(section_id))
        if section.project_id != project_id:
            raise ValidationFailedError(
                "Section does not belong to this project", field="section_id"
            )
        return section

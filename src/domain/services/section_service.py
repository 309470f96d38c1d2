"""Section service layer."""

from collections.abc import Callable
from uuid import UUID

from domain.entities.event_log import EventType
from domain.entities.project import Section
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import AccessResolver
from domain.services.event_log_service import EventLogService
from domain.services.mutation import MutationCoordinator
from domain.services.ordering import OrderedCollectionManager, sort_siblings


class SectionService:
    """Service layer for Section business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        event_log_service: EventLogService,
        ordering: OrderedCollectionManager | None = None,
        coordinator: MutationCoordinator | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._events = event_log_service
        self._ordering = ordering or OrderedCollectionManager()
        self._coordinator = coordinator or MutationCoordinator()

    async def get_for_project(self, project_id: UUID, user_id: UUID) -> list[Section]:
        """Get a project's sections in display order."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_project(user_id, project_id)
            return sort_siblings(await uow.sections.get_for_project(project_id))

    async def create(self, project_id: UUID, user_id: UUID, name: str) -> Section:
        """Append a section after the project's existing ones."""
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_project(user_id, project_id)
            order = await self._ordering.next_section_order(uow, project_id)
            section = Section(project_id=project_id, name=name, order=order)

            async def create(uow: IUnitOfWork) -> Section:
                return await uow.sections.create(section)

            return await self._coordinator.execute(
                uow,
                create,
                [
                    self._events.effect(
                        EventType.SECTION_CREATED,
                        actor_id=user_id,
                        workspace_id=access.workspace_id,
                        project_id=project_id,
                        describe=lambda s: f'Section "{s.name}" created',
                    )
                ],
                operation="section.create",
            )

    async def reorder(self, section_id: UUID, user_id: UUID, order: int) -> Section:
        """Move a section to ``order`` without renumbering its siblings."""
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_section(user_id, section_id)

            async def reorder(uow: IUnitOfWork) -> Section:
                return await self._ordering.reorder_section(uow, access.section, order)

            return await self._coordinator.execute(uow, reorder, operation="section.reorder")

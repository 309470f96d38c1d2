"""Project service layer with business logic."""

from collections.abc import Callable
from datetime import datetime
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import TeamNotFoundError
from domain.entities.event_log import EventType
from domain.entities.project import DEFAULT_SECTION_NAMES, Project, Section
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import AccessResolver
from domain.services.event_log_service import EventLogService
from domain.services.mutation import MutationCoordinator
from domain.services.ordering import sort_siblings

logger = structlog.get_logger()

# Sentinel for "field not supplied" on partial updates where None is meaningful.
UNSET: Any = ...


class ProjectService:
    """Service layer for Project business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        event_log_service: EventLogService,
        coordinator: MutationCoordinator | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._events = event_log_service
        self._coordinator = coordinator or MutationCoordinator()

    async def get_all_for_workspace(
        self, workspace_id: UUID, user_id: UUID
    ) -> list[tuple[Project, int]]:
        """Active projects of a workspace (most recently updated first) with task counts."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_workspace(user_id, workspace_id)
            projects = await uow.projects.get_active_for_workspace(workspace_id)
            counts = await uow.projects.count_tasks([p.id for p in projects])
            return [(project, counts.get(project.id, 0)) for project in projects]

    async def get_by_id(self, project_id: UUID, user_id: UUID) -> tuple[Project, list[Section]]:
        """Get a project with its sections in display order.

        Archived projects stay readable by ID; they are only hidden from listings.
        """
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_project(user_id, project_id)
            sections = await uow.sections.get_for_project(project_id)
            return access.project, sort_siblings(sections)

    async def create(
        self,
        workspace_id: UUID,
        user_id: UUID,
        name: str,
        description: str | None = None,
        color: str | None = None,
        team_id: UUID | None = None,
    ) -> Project:
        """Create a project with the default "To do" / "In progress" / "Done" sections."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_workspace(user_id, workspace_id)
            if team_id is not None:
                await self._require_team_in_workspace(uow, team_id, workspace_id)

            project = Project(
                workspace_id=workspace_id,
                team_id=team_id,
                name=name,
                description=description,
                color=color,
            )

            async def create_with_sections(uow: IUnitOfWork) -> Project:
                created = await uow.projects.create(project)
                await uow.sections.create_batch(
                    [
                        Section(project_id=created.id, name=section_name, order=order)
                        for order, section_name in enumerate(DEFAULT_SECTION_NAMES)
                    ]
                )
                return created

            created = await self._coordinator.execute(
                uow,
                create_with_sections,
                [
                    self._events.effect(
                        EventType.PROJECT_CREATED,
                        actor_id=user_id,
                        workspace_id=workspace_id,
                        project_id=project.id,
                        describe=lambda p: f'Project "{p.name}" created',
                    )
                ],
                operation="project.create",
            )
            logger.info("project_created", project_id=str(created.id))
            return created

    async def update(
        self,
        project_id: UUID,
        user_id: UUID,
        name: str | None = None,
        description: Any = UNSET,
        color: str | None = None,
        team_id: Any = UNSET,
    ) -> Project:
        """Partially update a project.

        ``description=None`` clears the description; ``team_id=None``
        detaches the project from its team.
        """
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_project(user_id, project_id)
            project = access.project

            old_state = self._snapshot(project)

            if team_id is not UNSET and team_id != project.team_id:
                if team_id is not None:
                    await self._require_team_in_workspace(uow, team_id, project.workspace_id)
                project.team_id = team_id
            if name is not None:
                project.name = name
            if description is not UNSET:
                project.description = description
            if color is not None:
                project.color = color
            project.updated_at = datetime.utcnow()

            changes = EventLogService.compute_diff(old_state, self._snapshot(project))

            async def update(uow: IUnitOfWork) -> Project:
                return await uow.projects.update(project)

            return await self._coordinator.execute(
                uow,
                update,
                [
                    self._events.effect(
                        EventType.PROJECT_UPDATED,
                        actor_id=user_id,
                        workspace_id=project.workspace_id,
                        project_id=project.id,
                        describe=lambda p: f'Project "{p.name}" updated',
                        changes=changes,
                    )
                ],
                operation="project.update",
            )

    async def archive(self, project_id: UUID, user_id: UUID) -> Project:
        """Soft-archive a project. Its sections and tasks are kept."""
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_project(user_id, project_id)
            project = access.project
            project.archive()

            async def archive(uow: IUnitOfWork) -> Project:
                return await uow.projects.update(project)

            return await self._coordinator.execute(
                uow,
                archive,
                [
                    self._events.effect(
                        EventType.PROJECT_ARCHIVED,
                        actor_id=user_id,
                        workspace_id=project.workspace_id,
                        project_id=project.id,
                        describe=lambda p: f'Project "{p.name}" archived',
                    )
                ],
                operation="project.archive",
            )

    @staticmethod
    async def _require_team_in_workspace(
        uow: IUnitOfWork, team_id: UUID, workspace_id: UUID
    ) -> None:
        team = await uow.teams.get(team_id)
        if not team or team.workspace_id != workspace_id:
            raise TeamNotFoundError(str(team_id))

    @staticmethod
    def _snapshot(project: Project) -> dict[str, Any]:
        return {
            "name": project.name,
            "description": project.description,
            "color": project.color,
            "team_id": str(project.team_id) if project.team_id else None,
        }

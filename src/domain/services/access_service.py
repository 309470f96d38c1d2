"""Membership resolution through the workspace -> project -> task hierarchy."""

from dataclasses import dataclass
from uuid import UUID

import structlog

from core.exceptions import (
    AccessDeniedError,
    ProjectNotFoundError,
    SectionNotFoundError,
    TaskNotFoundError,
    WorkspaceNotFoundError,
)
from domain.entities.project import Project, Section
from domain.entities.task import Task
from domain.entities.workspace import Membership, Workspace
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class WorkspaceAccess:
    membership: Membership
    workspace: Workspace

    @property
    def workspace_id(self) -> UUID:
        return self.workspace.id


@dataclass(frozen=True, slots=True)
class ProjectAccess:
    membership: Membership
    project: Project

    @property
    def workspace_id(self) -> UUID:
        return self.project.workspace_id


@dataclass(frozen=True, slots=True)
class SectionAccess:
    membership: Membership
    project: Project
    section: Section


@dataclass(frozen=True, slots=True)
class TaskAccess:
    membership: Membership
    project: Project
    task: Task

    @property
    def workspace_id(self) -> UUID:
        return self.project.workspace_id


class AccessResolver:
    """Resolves a caller's membership for a target entity.

    An instance is bound to one Unit of Work and lives for one logical
    operation. Memberships and projects it has already loaded are memoized
    so nested checks (task -> project -> workspace) hit the store once;
    nothing is cached across operations.

    A missing target raises the entity's NotFound error; a present target
    without a membership row raises AccessDeniedError. The membership role is
    not consulted.
    """

    def __init__(self, uow: IUnitOfWork) -> None:
        self._uow = uow
        self._memberships: dict[tuple[UUID, UUID], Membership | None] = {}
        self._projects: dict[UUID, Project] = {}

    async def resolve_workspace(self, caller_id: UUID, workspace_id: UUID) -> WorkspaceAccess:
        workspace = await self._uow.workspaces.get(workspace_id)
        if not workspace:
            logger.info("access_not_found", entity="workspace", entity_id=str(workspace_id))
            raise WorkspaceNotFoundError(str(workspace_id))
        membership = await self._require_membership(caller_id, workspace_id)
        return WorkspaceAccess(membership=membership, workspace=workspace)

    async def resolve_project(self, caller_id: UUID, project_id: UUID) -> ProjectAccess:
        project = await self._load_project(project_id)
        membership = await self._require_membership(caller_id, project.workspace_id)
        return ProjectAccess(membership=membership, project=project)

    async def resolve_section(self, caller_id: UUID, section_id: UUID) -> SectionAccess:
        section = await self._uow.sections.get(section_id)
        if not section:
            logger.info("access_not_found", entity="section", entity_id=str(section_id))
            raise SectionNotFoundError(str(section_id))
        access = await self.resolve_project(caller_id, section.project_id)
        return SectionAccess(membership=access.membership, project=access.project, section=section)

    async def resolve_task(self, caller_id: UUID, task_id: UUID) -> TaskAccess:
        task = await self._uow.tasks.get(task_id)
        if not task:
            logger.info("access_not_found", entity="task", entity_id=str(task_id))
            raise TaskNotFoundError(str(task_id))
        access = await self.resolve_project(caller_id, task.project_id)
        return TaskAccess(membership=access.membership, project=access.project, task=task)

    async def _load_project(self, project_id: UUID) -> Project:
        cached = self._projects.get(project_id)
        if cached is not None:
            return cached
        project = await self._uow.projects.get(project_id)
        if not project:
            logger.info("access_not_found", entity="project", entity_id=str(project_id))
            raise ProjectNotFoundError(str(project_id))
        self._projects[project_id] = project
        return project

    async def _require_membership(self, caller_id: UUID, workspace_id: UUID) -> Membership:
        key = (caller_id, workspace_id)
        if key not in self._memberships:
            self._memberships[key] = await self._uow.workspaces.get_member(workspace_id, caller_id)
        membership = self._memberships[key]
        if membership is None:
            logger.info(
                "access_denied",
                caller_id=str(caller_id),
                workspace_id=str(workspace_id),
            )
            raise AccessDeniedError(str(workspace_id))
        return membership

"""SQLAlchemy implementations of Project and Section repositories."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.project import Project, Section
from infrastructure.database.models import ProjectModel, SectionModel, TaskModel


class SQLAlchemyProjectRepository:
    """SQLAlchemy implementation of IProjectRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Project | None:
        """Get a project by ID (archived projects included)."""
        stmt = select(ProjectModel).where(ProjectModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_active_for_workspace(self, workspace_id: UUID) -> list[Project]:
        """Get non-archived projects, most recently updated first."""
        stmt = (
            select(ProjectModel)
            .where(
                ProjectModel.workspace_id == workspace_id,
                ProjectModel.archived_at.is_(None),
            )
            .order_by(ProjectModel.updated_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_tasks(self, project_ids: list[UUID]) -> dict[UUID, int]:
        """Count tasks (subtasks included) per project in a single query."""
        if not project_ids:
            return {}
        stmt = (
            select(TaskModel.project_id, func.count().label("task_count"))
            .where(TaskModel.project_id.in_(project_ids))
            .group_by(TaskModel.project_id)
        )
        result = await self._session.execute(stmt)
        return {row.project_id: row.task_count for row in result}

    async def create(self, project: Project) -> Project:
        """Create a new project."""
        model = self._to_model(project)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, project: Project) -> Project:
        """Update an existing project."""
        stmt = select(ProjectModel).where(ProjectModel.id == project.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Project {project.id} not found")

        model.name = project.name
        model.description = project.description
        model.color = project.color
        model.team_id = project.team_id
        model.archived_at = project.archived_at
        model.updated_at = project.updated_at

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: ProjectModel) -> Project:
        """Convert ORM model to domain entity."""
        return Project(
            id=model.id,
            workspace_id=model.workspace_id,
            team_id=model.team_id,
            name=model.name,
            description=model.description,
            color=model.color,
            archived_at=model.archived_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Project) -> ProjectModel:
        """Convert domain entity to ORM model."""
        return ProjectModel(
            id=entity.id,
            workspace_id=entity.workspace_id,
            team_id=entity.team_id,
            name=entity.name,
            description=entity.description,
            color=entity.color,
            archived_at=entity.archived_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class SQLAlchemySectionRepository:
    """SQLAlchemy implementation of ISectionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Section | None:
        stmt = select(SectionModel).where(SectionModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_project(self, project_id: UUID) -> list[Section]:
        stmt = (
            select(SectionModel)
            .where(SectionModel.project_id == project_id)
            .order_by(SectionModel.order, SectionModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def max_order(self, project_id: UUID) -> int | None:
        stmt = select(func.max(SectionModel.order)).where(SectionModel.project_id == project_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, section: Section) -> Section:
        model = self._to_model(section)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def create_batch(self, sections: list[Section]) -> list[Section]:
        models = [self._to_model(section) for section in sections]
        self._session.add_all(models)
        await self._session.flush()
        return [self._to_entity(model) for model in models]

    async def update_order(self, section_id: UUID, order: int) -> Section:
        stmt = select(SectionModel).where(SectionModel.id == section_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Section {section_id} not found")

        model.order = order
        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: SectionModel) -> Section:
        return Section(
            id=model.id,
            project_id=model.project_id,
            name=model.name,
            order=model.order,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Section) -> SectionModel:
        return SectionModel(
            id=entity.id,
            project_id=entity.project_id,
            name=entity.name,
            order=entity.order,
            created_at=entity.created_at,
        )

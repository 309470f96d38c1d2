"""SQLAlchemy implementation of Team repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.team import Team
from infrastructure.database.models import ProjectModel, TeamModel


class SQLAlchemyTeamRepository:
    """SQLAlchemy implementation of ITeamRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Team | None:
        stmt = select(TeamModel).where(TeamModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all_for_workspace(self, workspace_id: UUID) -> list[Team]:
        stmt = (
            select(TeamModel)
            .where(TeamModel.workspace_id == workspace_id)
            .order_by(TeamModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_projects(self, team_ids: list[UUID]) -> dict[UUID, int]:
        """Count active projects per team in a single query."""
        if not team_ids:
            return {}
        stmt = (
            select(ProjectModel.team_id, func.count().label("project_count"))
            .where(ProjectModel.team_id.in_(team_ids), ProjectModel.archived_at.is_(None))
            .group_by(ProjectModel.team_id)
        )
        result = await self._session.execute(stmt)
        return {row.team_id: row.project_count for row in result}

    async def create(self, team: Team) -> Team:
        model = TeamModel(
            id=team.id,
            workspace_id=team.workspace_id,
            name=team.name,
            description=team.description,
            created_at=team.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: TeamModel) -> Team:
        return Team(
            id=model.id,
            workspace_id=model.workspace_id,
            name=model.name,
            description=model.description,
            created_at=model.created_at,
        )

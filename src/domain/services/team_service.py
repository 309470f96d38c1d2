"""Team service layer."""

from collections.abc import Callable
from uuid import UUID

from domain.entities.event_log import EventType
from domain.entities.team import Team
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import AccessResolver
from domain.services.event_log_service import EventLogService
from domain.services.mutation import MutationCoordinator


class TeamService:
    """Service layer for Team business logic."""

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
    ) -> list[tuple[Team, int]]:
        """Get a workspace's teams (newest first) with their project counts."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_workspace(user_id, workspace_id)
            teams = await uow.teams.get_all_for_workspace(workspace_id)
            counts = await uow.teams.count_projects([t.id for t in teams])
            return [(team, counts.get(team.id, 0)) for team in teams]

    async def create(
        self,
        workspace_id: UUID,
        user_id: UUID,
        name: str,
        description: str | None = None,
    ) -> Team:
        """Create a team in a workspace. Requires membership."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_workspace(user_id, workspace_id)

            team = Team(workspace_id=workspace_id, name=name, description=description)

            async def create(uow: IUnitOfWork) -> Team:
                return await uow.teams.create(team)

            return await self._coordinator.execute(
                uow,
                create,
                [
                    self._events.effect(
                        EventType.TEAM_CREATED,
                        actor_id=user_id,
                        workspace_id=workspace_id,
                        describe=lambda t: f'Team "{t.name}" created',
                    )
                ],
                operation="team.create",
            )

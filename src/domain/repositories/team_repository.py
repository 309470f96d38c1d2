"""Team repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.team import Team


class ITeamRepository(Protocol):
    """Repository interface for Team entities."""

    async def get(self, id: UUID) -> Team | None:
        """Get a team by ID."""
        ...

    async def get_all_for_workspace(self, workspace_id: UUID) -> list[Team]:
        """Get all teams of a workspace, newest first."""
        ...

    async def count_projects(self, team_ids: list[UUID]) -> dict[UUID, int]:
        """Count active projects per team."""
        ...

    async def create(self, team: Team) -> Team:
        """Create a new team."""
        ...

"""Workspace repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.workspace import Membership, Workspace


class IWorkspaceRepository(Protocol):
    """Repository interface for Workspace and Membership entities."""

    async def get(self, id: UUID) -> Workspace | None:
        """Get a workspace by ID."""
        ...

    async def get_by_slug(self, slug: str) -> Workspace | None:
        """Get a workspace by slug."""
        ...

    async def get_all_for_user(self, user_id: UUID) -> list[Workspace]:
        """Get all workspaces a user is a member of, newest membership first."""
        ...

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace."""
        ...

    async def get_member(self, workspace_id: UUID, user_id: UUID) -> Membership | None:
        """Get the single membership row for (workspace, user)."""
        ...

    async def get_members(self, workspace_id: UUID) -> list[Membership]:
        """Get all memberships of a workspace."""
        ...

    async def get_member_ids(self, workspace_id: UUID, user_ids: list[UUID]) -> set[UUID]:
        """Return which of ``user_ids`` are members of the workspace."""
        ...

    async def add_member(self, member: Membership) -> Membership:
        """Add a membership."""
        ...

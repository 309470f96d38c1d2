"""SQLAlchemy implementation of Workspace repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.workspace import Membership, MembershipRole, Workspace
from infrastructure.database.models import MembershipModel, WorkspaceModel


class SQLAlchemyWorkspaceRepository:
    """SQLAlchemy implementation of IWorkspaceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Workspace | None:
        """Get a workspace by ID."""
        stmt = select(WorkspaceModel).where(WorkspaceModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_slug(self, slug: str) -> Workspace | None:
        """Get a workspace by slug."""
        stmt = select(WorkspaceModel).where(WorkspaceModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all_for_user(self, user_id: UUID) -> list[Workspace]:
        """Get all workspaces a user is a member of, newest membership first."""
        stmt = (
            select(WorkspaceModel)
            .join(MembershipModel, MembershipModel.workspace_id == WorkspaceModel.id)
            .where(MembershipModel.user_id == user_id)
            .order_by(MembershipModel.joined_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace."""
        model = WorkspaceModel(
            id=workspace.id,
            name=workspace.name,
            slug=workspace.slug,
            description=workspace.description,
            created_by=workspace.created_by,
            created_at=workspace.created_at,
            updated_at=workspace.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_member(self, workspace_id: UUID, user_id: UUID) -> Membership | None:
        """Get the membership row for (workspace, user)."""
        stmt = select(MembershipModel).where(
            MembershipModel.workspace_id == workspace_id,
            MembershipModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._member_to_entity(model) if model else None

    async def get_members(self, workspace_id: UUID) -> list[Membership]:
        """Get all members of a workspace, oldest first."""
        stmt = (
            select(MembershipModel)
            .where(MembershipModel.workspace_id == workspace_id)
            .order_by(MembershipModel.joined_at)
        )
        result = await self._session.execute(stmt)
        return [self._member_to_entity(model) for model in result.scalars()]

    async def get_member_ids(self, workspace_id: UUID, user_ids: list[UUID]) -> set[UUID]:
        """Return the subset of ``user_ids`` that belong to the workspace."""
        if not user_ids:
            return set()
        stmt = select(MembershipModel.user_id).where(
            MembershipModel.workspace_id == workspace_id,
            MembershipModel.user_id.in_(user_ids),
        )
        result = await self._session.execute(stmt)
        return set(result.scalars())

    async def add_member(self, member: Membership) -> Membership:
        """Add a member to a workspace."""
        model = MembershipModel(
            workspace_id=member.workspace_id,
            user_id=member.user_id,
            role=member.role.value,
            joined_at=member.joined_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._member_to_entity(model)

    def _to_entity(self, model: WorkspaceModel) -> Workspace:
        """Convert ORM model to domain entity."""
        return Workspace(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _member_to_entity(self, model: MembershipModel) -> Membership:
        return Membership(
            workspace_id=model.workspace_id,
            user_id=model.user_id,
            role=MembershipRole(model.role),
            joined_at=model.joined_at,
        )

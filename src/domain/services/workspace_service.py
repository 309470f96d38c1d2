"""Workspace service layer with business logic."""

import re
from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyAMemberError,
    ValidationFailedError,
    WorkspaceSlugTakenError,
)
from domain.entities.event_log import EventType
from domain.entities.workspace import Membership, MembershipRole, Workspace
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import AccessResolver
from domain.services.event_log_service import EventLogService
from domain.services.mutation import MutationCoordinator

logger = structlog.get_logger()

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


class WorkspaceService:
    """Service layer for Workspace business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        event_log_service: EventLogService,
        coordinator: MutationCoordinator | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._events = event_log_service
        self._coordinator = coordinator or MutationCoordinator()

    async def get_all_for_user(self, user_id: UUID) -> list[Workspace]:
        """Get all workspaces a user is a member of."""
        async with self._uow_factory() as uow:
            return await uow.workspaces.get_all_for_user(user_id)  # type: ignore[no-any-return]

    async def get_by_id(self, workspace_id: UUID, user_id: UUID) -> Workspace:
        """Get a workspace by ID, verifying user membership."""
        async with self._uow_factory() as uow:
            access = await AccessResolver(uow).resolve_workspace(user_id, workspace_id)
            return access.workspace

    async def get_members(self, workspace_id: UUID, user_id: UUID) -> list[Membership]:
        """Get all memberships of a workspace. Requires membership."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_workspace(user_id, workspace_id)
            return await uow.workspaces.get_members(workspace_id)  # type: ignore[no-any-return]

    async def create(
        self,
        user_id: UUID,
        name: str,
        slug: str | None = None,
        description: str | None = None,
    ) -> Workspace:
        """Create a new workspace and make the creator its OWNER.

        When no slug is given one is derived from the name. An explicit slug
        that is already taken is a conflict; a derived one is suffixed with
        the creator's id prefix first.
        """
        if slug is not None and not SLUG_PATTERN.match(slug):
            raise ValidationFailedError(
                "Slug must contain only lowercase letters, numbers, and hyphens",
                field="slug",
            )

        async with self._uow_factory() as uow:
            if slug is None:
                slug = self._generate_slug(name)
                if await uow.workspaces.get_by_slug(slug):
                    slug = f"{slug}-{str(user_id)[:8]}"

            if await uow.workspaces.get_by_slug(slug):
                raise WorkspaceSlugTakenError(slug)

            workspace = Workspace(
                name=name,
                slug=slug,
                description=description,
                created_by=user_id,
            )

            async def create_with_owner(uow: IUnitOfWork) -> Workspace:
                created = await uow.workspaces.create(workspace)
                await uow.workspaces.add_member(
                    Membership(
                        workspace_id=created.id,
                        user_id=user_id,
                        role=MembershipRole.OWNER,
                    )
                )
                return created

            created = await self._coordinator.execute(
                uow,
                create_with_owner,
                [
                    self._events.effect(
                        EventType.MEMBER_ADDED,
                        actor_id=user_id,
                        workspace_id=workspace.id,
                        describe=lambda ws: f'Workspace "{ws.name}" created',
                    )
                ],
                operation="workspace.create",
            )
            logger.info("workspace_created", workspace_id=str(created.id), slug=created.slug)
            return created

    async def add_member(
        self,
        workspace_id: UUID,
        user_id: UUID,
        target_user_id: UUID,
    ) -> Membership:
        """Add an existing user to a workspace as MEMBER. Requires membership."""
        async with self._uow_factory() as uow:
            await AccessResolver(uow).resolve_workspace(user_id, workspace_id)

            if await uow.workspaces.get_member(workspace_id, target_user_id):
                raise AlreadyAMemberError(str(target_user_id))
            target = await uow.users.get(target_user_id)
            if not target:
                raise ValidationFailedError("Unknown user", field="user_id")

            async def add(uow: IUnitOfWork) -> Membership:
                return await uow.workspaces.add_member(
                    Membership(workspace_id=workspace_id, user_id=target_user_id)
                )

            return await self._coordinator.execute(
                uow,
                add,
                [
                    self._events.effect(
                        EventType.MEMBER_ADDED,
                        actor_id=user_id,
                        workspace_id=workspace_id,
                        describe=lambda _m: f"{target.display_name or target.email} joined the workspace",
                    )
                ],
                operation="workspace.add_member",
            )

    @staticmethod
    def _generate_slug(name: str) -> str:
        """Generate a URL-friendly slug from a workspace name."""
        slug = name.lower().strip()
        slug = re.sub(r"[^a-z0-9\s-]", "", slug)
        slug = re.sub(r"[\s_]+", "-", slug)
        slug = re.sub(r"-+", "-", slug)
        slug = slug.strip("-")
        return slug[:100] if slug else "workspace"

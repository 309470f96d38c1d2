"""Unit tests for WorkspaceService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AccessDeniedError,
    AlreadyAMemberError,
    ValidationFailedError,
    WorkspaceSlugTakenError,
)
from domain.entities.event_log import EventType
from domain.entities.user import User
from domain.entities.workspace import Membership, MembershipRole, Workspace
from domain.services.event_log_service import EventLogService
from domain.services.workspace_service import WorkspaceService
from tests.unit.conftest import FakeUnitOfWork, grant_membership


@pytest.fixture
def service(uow: FakeUnitOfWork) -> WorkspaceService:
    return WorkspaceService(lambda: uow, event_log_service=EventLogService(lambda: uow))


class TestCreateWorkspace:
    @pytest.mark.asyncio
    async def test_creator_becomes_owner(
        self, service: WorkspaceService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.workspaces.get_by_slug.return_value = None

        workspace = await service.create(user_id, "Acme Corp")

        assert workspace.slug == "acme-corp"
        membership = uow.workspaces.add_member.await_args.args[0]
        assert membership.workspace_id == workspace.id
        assert membership.user_id == user_id
        assert membership.role == MembershipRole.OWNER
        assert uow.committed

    @pytest.mark.asyncio
    async def test_creation_is_logged_in_the_new_workspace(
        self, service: WorkspaceService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.workspaces.get_by_slug.return_value = None

        workspace = await service.create(user_id, "Acme")

        entry = uow.events.append.await_args.args[0]
        assert entry.type == EventType.MEMBER_ADDED
        assert entry.workspace_id == workspace.id

    @pytest.mark.asyncio
    async def test_invalid_explicit_slug_is_rejected(
        self, service: WorkspaceService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        with pytest.raises(ValidationFailedError):
            await service.create(user_id, "Acme", slug="Not A Slug")

        uow.workspaces.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_taken_explicit_slug_conflicts(
        self,
        service: WorkspaceService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        user_id: UUID,
    ) -> None:
        uow.workspaces.get_by_slug.return_value = workspace

        with pytest.raises(WorkspaceSlugTakenError):
            await service.create(user_id, "Acme", slug="acme")

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_taken_derived_slug_gets_suffix(
        self,
        service: WorkspaceService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        user_id: UUID,
    ) -> None:
        uow.workspaces.get_by_slug.side_effect = [workspace, None]

        created = await service.create(user_id, "Acme")

        assert created.slug == f"acme-{str(user_id)[:8]}"

    @pytest.mark.parametrize(
        ("name", "slug"),
        [
            ("Hello   World", "hello-world"),
            ("  Trim me  ", "trim-me"),
            ("Crème brûlée!", "crme-brle"),
            ("!!!", "workspace"),
        ],
    )
    def test_generate_slug(self, name: str, slug: str) -> None:
        assert WorkspaceService._generate_slug(name) == slug


class TestMembers:
    @pytest.mark.asyncio
    async def test_add_member(
        self,
        service: WorkspaceService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        user_id: UUID,
    ) -> None:
        grant_membership(uow, workspace, user_id)
        newcomer = User(id=uuid4(), email="new@example.com", display_name="Newcomer")
        uow.users.get.return_value = newcomer

        membership = await service.add_member(workspace.id, user_id, newcomer.id)

        assert membership.user_id == newcomer.id
        assert membership.role == MembershipRole.MEMBER
        entry = uow.events.append.await_args.args[0]
        assert entry.type == EventType.MEMBER_ADDED
        assert "Newcomer" in entry.description

    @pytest.mark.asyncio
    async def test_existing_member_conflicts(
        self,
        service: WorkspaceService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        user_id: UUID,
        actor_id: UUID,
    ) -> None:
        grant_membership(uow, workspace, user_id, actor_id)

        with pytest.raises(AlreadyAMemberError):
            await service.add_member(workspace.id, user_id, actor_id)

    @pytest.mark.asyncio
    async def test_unknown_user_is_rejected(
        self,
        service: WorkspaceService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        user_id: UUID,
    ) -> None:
        grant_membership(uow, workspace, user_id)
        uow.users.get.return_value = None

        with pytest.raises(ValidationFailedError):
            await service.add_member(workspace.id, user_id, uuid4())

    @pytest.mark.asyncio
    async def test_outsider_cannot_list_members(
        self,
        service: WorkspaceService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        actor_id: UUID,
    ) -> None:
        grant_membership(uow, workspace)

        with pytest.raises(AccessDeniedError):
            await service.get_members(workspace.id, actor_id)

    @pytest.mark.asyncio
    async def test_member_lists_members(
        self,
        service: WorkspaceService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        user_id: UUID,
    ) -> None:
        grant_membership(uow, workspace, user_id)
        members = [Membership(workspace_id=workspace.id, user_id=user_id)]
        uow.workspaces.get_members.return_value = members

        assert await service.get_members(workspace.id, user_id) == members

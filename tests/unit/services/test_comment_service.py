"""Unit tests for CommentService and UserService."""

from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.event_log import EventType
from domain.entities.project import Project
from domain.entities.task import Task
from domain.entities.user import User
from domain.entities.workspace import Workspace
from domain.services.comment_service import CommentService
from domain.services.event_log_service import EventLogService
from domain.services.notification_service import NotificationService
from domain.services.user_service import UserService
from tests.unit.conftest import FakeUnitOfWork, grant_membership


@pytest.fixture
def service(uow: FakeUnitOfWork) -> CommentService:
    return CommentService(
        lambda: uow,
        event_log_service=EventLogService(lambda: uow),
        notification_service=NotificationService(lambda: uow),
    )


class TestCreateComment:
    @pytest.mark.asyncio
    async def test_notifies_assignees_and_logs(
        self,
        service: CommentService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        project: Project,
        task: Task,
        user_id: UUID,
        actor_id: UUID,
    ) -> None:
        grant_membership(uow, workspace, user_id, actor_id, project=project, task=task)
        task.assignee_ids = [user_id, actor_id]

        comment = await service.create(task.id, actor_id, "Looks good", actor_name="Grace")

        assert comment.content == "Looks good"
        notifications = uow.notifications.create_batch.await_args.args[0]
        assert [n.user_id for n in notifications] == [user_id]
        entry = uow.events.append.await_args.args[0]
        assert entry.type == EventType.COMMENT_ADDED
        assert entry.task_id == task.id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_unassigned_task_notifies_nobody(
        self,
        service: CommentService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        project: Project,
        task: Task,
        user_id: UUID,
        actor_id: UUID,
    ) -> None:
        grant_membership(uow, workspace, user_id, actor_id, project=project, task=task)

        await service.create(task.id, actor_id, "Anyone?")

        uow.notifications.create_batch.assert_not_awaited()


class TestUserSync:
    @pytest.mark.asyncio
    async def test_existing_user_is_returned(self, uow: FakeUnitOfWork) -> None:
        existing = User(email="ada@example.com")
        uow.users.get.return_value = existing

        assert await UserService(lambda: uow).sync(existing.id, "ada@example.com") is existing
        uow.users.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_user_is_created(self, uow: FakeUnitOfWork) -> None:
        uow.users.get.return_value = None
        user_id = uuid4()

        user = await UserService(lambda: uow).sync(user_id, "Ada@Example.com", "Ada")

        assert user.id == user_id
        assert user.email == "ada@example.com"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_concurrent_first_sync_returns_winning_row(self, uow: FakeUnitOfWork) -> None:
        user_id = uuid4()
        winner = User(id=user_id, email="ada@example.com")
        uow.users.get.side_effect = [None, winner]
        uow.users.create.side_effect = IntegrityError(
            "INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.id")
        )

        user = await UserService(lambda: uow).sync(user_id, "ada@example.com")

        assert user is winner
        assert uow.rolled_back

    @pytest.mark.asyncio
    async def test_email_owned_by_other_identity_is_rejected(
        self, uow: FakeUnitOfWork
    ) -> None:
        uow.users.get.side_effect = [None, None]
        uow.users.create.side_effect = IntegrityError(
            "INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.email")
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await UserService(lambda: uow).sync(uuid4(), "ada@example.com")

        assert exc_info.value.error_code == ErrorCode.IDENTITY_CONFLICT
        assert exc_info.value.status_code == 401

"""Unit tests for NotificationService."""

from uuid import UUID, uuid4

import pytest

from domain.entities.notification import Notification, NotificationType
from domain.entities.task import Task
from domain.services.notification_service import NotificationService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> NotificationService:
    return NotificationService(lambda: uow)


class TestAssignmentFanOut:
    def test_excludes_actor_and_keeps_order(self, task: Task, actor_id: UUID) -> None:
        a, b = uuid4(), uuid4()

        notifications = NotificationService.notify_assignment(task, [a, actor_id, b], actor_id)

        assert [n.user_id for n in notifications] == [a, b]
        assert all(n.type == NotificationType.TASK_ASSIGNED for n in notifications)
        assert all(n.task_id == task.id for n in notifications)
        assert all(n.project_id == task.project_id for n in notifications)

    def test_duplicates_notify_once(self, task: Task, actor_id: UUID) -> None:
        a = uuid4()

        notifications = NotificationService.notify_assignment(task, [a, a, a], actor_id)

        assert [n.user_id for n in notifications] == [a]

    def test_message_names_the_task(self, task: Task, actor_id: UUID) -> None:
        (notification,) = NotificationService.notify_assignment(task, [uuid4()], actor_id)

        assert task.title in notification.message
        assert notification.is_read is False

    @pytest.mark.asyncio
    async def test_effect_skips_store_when_only_actor_assigned(
        self, service: NotificationService, uow: FakeUnitOfWork, task: Task, actor_id: UUID
    ) -> None:
        effect = service.assignment_effect([actor_id], actor_id)

        assert await effect(uow, task) == []
        uow.notifications.create_batch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_effect_writes_one_batch(
        self, service: NotificationService, uow: FakeUnitOfWork, task: Task, actor_id: UUID
    ) -> None:
        a, b = uuid4(), uuid4()

        created = await service.assignment_effect([a, b], actor_id)(uow, task)

        assert [n.user_id for n in created] == [a, b]
        uow.notifications.create_batch.assert_awaited_once()


class TestCommentFanOut:
    def test_notifies_assignees_except_author(self, task: Task, actor_id: UUID) -> None:
        a = uuid4()
        task.assignee_ids = [a, actor_id]

        notifications = NotificationService.notify_comment(task, actor_id, "Grace")

        assert [n.user_id for n in notifications] == [a]
        assert notifications[0].type == NotificationType.COMMENT_ADDED
        assert notifications[0].message.startswith("Grace commented")

    def test_creator_is_not_notified_unless_assigned(
        self, task: Task, actor_id: UUID, user_id: UUID
    ) -> None:
        assert task.created_by == user_id
        task.assignee_ids = []

        assert NotificationService.notify_comment(task, actor_id) == []

    def test_anonymous_actor_name(self, task: Task, actor_id: UUID) -> None:
        task.assignee_ids = [uuid4()]

        (notification,) = NotificationService.notify_comment(task, actor_id)

        assert notification.message.startswith("Someone commented")


class TestInbox:
    @pytest.mark.asyncio
    async def test_returns_page_and_unread_count(
        self, service: NotificationService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        page = [
            Notification(
                user_id=user_id,
                type=NotificationType.TASK_ASSIGNED,
                title="Task assigned",
                message="m",
            )
        ]
        uow.notifications.get_for_user.return_value = page
        uow.notifications.get_unread_count.return_value = 3

        notifications, unread = await service.get_inbox(user_id, limit=10, offset=5)

        assert notifications == page
        assert unread == 3
        uow.notifications.get_for_user.assert_awaited_once_with(user_id, limit=10, offset=5)

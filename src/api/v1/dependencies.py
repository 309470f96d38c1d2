"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.comment_service import CommentService
from domain.services.event_log_service import EventLogService
from domain.services.notification_service import NotificationService
from domain.services.project_service import ProjectService
from domain.services.section_service import SectionService
from domain.services.task_service import TaskService
from domain.services.team_service import TeamService
from domain.services.workspace_service import WorkspaceService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_event_log_service() -> EventLogService:
    """Get Event Log service instance."""
    return EventLogService(get_uow_factory())


@lru_cache
def get_notification_service() -> NotificationService:
    """Get Notification service instance."""
    return NotificationService(get_uow_factory())


@lru_cache
def get_workspace_service() -> WorkspaceService:
    """Get Workspace service instance."""
    return WorkspaceService(get_uow_factory(), event_log_service=get_event_log_service())


@lru_cache
def get_team_service() -> TeamService:
    return TeamService(get_uow_factory(), event_log_service=get_event_log_service())


@lru_cache
def get_project_service() -> ProjectService:
    return ProjectService(get_uow_factory(), event_log_service=get_event_log_service())


@lru_cache
def get_section_service() -> SectionService:
    return SectionService(get_uow_factory(), event_log_service=get_event_log_service())


@lru_cache
def get_task_service() -> TaskService:
    """Get Task service instance."""
    return TaskService(
        get_uow_factory(),
        event_log_service=get_event_log_service(),
        notification_service=get_notification_service(),
    )


@lru_cache
def get_comment_service() -> CommentService:
    """Get Comment service instance."""
    return CommentService(
        get_uow_factory(),
        event_log_service=get_event_log_service(),
        notification_service=get_notification_service(),
    )

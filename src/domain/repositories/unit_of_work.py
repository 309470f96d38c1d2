"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.comment_repository import ICommentRepository
from domain.repositories.event_log_repository import IEventLogRepository
from domain.repositories.notification_repository import INotificationRepository
from domain.repositories.project_repository import IProjectRepository, ISectionRepository
from domain.repositories.task_repository import ITaskRepository
from domain.repositories.team_repository import ITeamRepository
from domain.repositories.user_repository import IUserRepository
from domain.repositories.workspace_repository import IWorkspaceRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    users: IUserRepository
    workspaces: IWorkspaceRepository
    teams: ITeamRepository
    projects: IProjectRepository
    sections: ISectionRepository
    tasks: ITaskRepository
    comments: ICommentRepository
    notifications: INotificationRepository
    events: IEventLogRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...

"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_comment_repo import (
    SQLAlchemyCommentRepository,
)
from infrastructure.database.repositories.sqlalchemy_event_log_repo import (
    SQLAlchemyEventLogRepository,
)
from infrastructure.database.repositories.sqlalchemy_notification_repo import (
    SQLAlchemyNotificationRepository,
)
from infrastructure.database.repositories.sqlalchemy_project_repo import (
    SQLAlchemyProjectRepository,
    SQLAlchemySectionRepository,
)
from infrastructure.database.repositories.sqlalchemy_task_repo import SQLAlchemyTaskRepository
from infrastructure.database.repositories.sqlalchemy_team_repo import SQLAlchemyTeamRepository
from infrastructure.database.repositories.sqlalchemy_user_repo import SQLAlchemyUserRepository
from infrastructure.database.repositories.sqlalchemy_workspace_repo import (
    SQLAlchemyWorkspaceRepository,
)


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    One instance wraps one session, and therefore one transaction. All
    repositories handed out share that session, so writes made through
    different repositories commit or roll back together.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def users(self) -> SQLAlchemyUserRepository:
        return SQLAlchemyUserRepository(self.session)

    @property
    def workspaces(self) -> SQLAlchemyWorkspaceRepository:
        return SQLAlchemyWorkspaceRepository(self.session)

    @property
    def teams(self) -> SQLAlchemyTeamRepository:
        return SQLAlchemyTeamRepository(self.session)

    @property
    def projects(self) -> SQLAlchemyProjectRepository:
        return SQLAlchemyProjectRepository(self.session)

    @property
    def sections(self) -> SQLAlchemySectionRepository:
        return SQLAlchemySectionRepository(self.session)

    @property
    def tasks(self) -> SQLAlchemyTaskRepository:
        return SQLAlchemyTaskRepository(self.session)

    @property
    def comments(self) -> SQLAlchemyCommentRepository:
        return SQLAlchemyCommentRepository(self.session)

    @property
    def notifications(self) -> SQLAlchemyNotificationRepository:
        return SQLAlchemyNotificationRepository(self.session)

    @property
    def events(self) -> SQLAlchemyEventLogRepository:
        """Get the append-only event log repository."""
        return SQLAlchemyEventLogRepository(self.session)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager. Uncommitted work is discarded."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None

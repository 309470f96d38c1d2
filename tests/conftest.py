"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Callable
from typing import Any
from uuid import uuid4

# Disable rate limiting and point the app at SQLite before settings load
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, UserModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one connection shared through StaticPool)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with the full schema for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def make_user(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Any]:
    """Insert a user row and return it as a TokenUser."""

    async def _make(email: str | None = None, display_name: str | None = None) -> TokenUser:
        user_id = uuid4()
        user = TokenUser(
            id=user_id,
            email=email or f"user-{user_id.hex[:8]}@example.com",
            display_name=display_name,
        )
        async with session_factory() as session:
            session.add(UserModel(id=user.id, email=user.email, display_name=display_name))
            await session.commit()
        return user

    return _make


@pytest.fixture
def test_user() -> TokenUser:
    """The default caller; synced into the database on its first request."""
    return TokenUser(id=uuid4(), email="test@example.com", display_name="Test User")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
        jwks_url="",
    )


@pytest.fixture
def headers_for(auth_provider: JWTAuthProvider) -> Callable[[TokenUser], dict[str, str]]:
    """Build Authorization headers for any user."""

    def _headers(user: TokenUser) -> dict[str, str]:
        return {"Authorization": f"Bearer {auth_provider.create_token(user)}"}

    return _headers


@pytest.fixture
def auth_headers(
    headers_for: Callable[[TokenUser], dict[str, str]], test_user: TokenUser
) -> dict[str, str]:
    """Create authorization headers for the default caller."""
    return headers_for(test_user)


@pytest.fixture
def app(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """Application with every service wired to the test database.

    Authentication stays real: requests carry HS256 tokens signed by the
    test provider, and callers are synced into ``users`` on first use.
    """
    from api.dependencies.auth import get_auth_provider, get_user_service
    from api.v1 import dependencies as deps
    from domain.services.comment_service import CommentService
    from domain.services.event_log_service import EventLogService
    from domain.services.notification_service import NotificationService
    from domain.services.project_service import ProjectService
    from domain.services.section_service import SectionService
    from domain.services.task_service import TaskService
    from domain.services.team_service import TeamService
    from domain.services.user_service import UserService
    from domain.services.workspace_service import WorkspaceService
    from main import create_app

    app = create_app()

    events = EventLogService(uow_factory)
    notifications = NotificationService(uow_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[deps.get_event_log_service] = lambda: events
    app.dependency_overrides[deps.get_notification_service] = lambda: notifications
    app.dependency_overrides[get_user_service] = lambda: UserService(uow_factory)
    app.dependency_overrides[deps.get_workspace_service] = lambda: WorkspaceService(
        uow_factory, event_log_service=events
    )
    app.dependency_overrides[deps.get_team_service] = lambda: TeamService(
        uow_factory, event_log_service=events
    )
    app.dependency_overrides[deps.get_project_service] = lambda: ProjectService(
        uow_factory, event_log_service=events
    )
    app.dependency_overrides[deps.get_section_service] = lambda: SectionService(
        uow_factory, event_log_service=events
    )
    app.dependency_overrides[deps.get_task_service] = lambda: TaskService(
        uow_factory, event_log_service=events, notification_service=notifications
    )
    app.dependency_overrides[deps.get_comment_service] = lambda: CommentService(
        uow_factory, event_log_service=events, notification_service=notifications
    )
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client (no default auth headers)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(
    app: FastAPI, auth_headers: dict[str, str]
) -> AsyncGenerator[AsyncClient, None]:
    """Async test client acting as ``test_user``."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c
    app.dependency_overrides.clear()

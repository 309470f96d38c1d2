"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.project import Project, Section
from domain.entities.task import Task
from domain.entities.workspace import Membership, MembershipRole, Workspace


class FakeUnitOfWork:
    """Fake Unit of Work with AsyncMock repositories for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.workspaces = AsyncMock()
        self.teams = AsyncMock()
        self.projects = AsyncMock()
        self.sections = AsyncMock()
        self.tasks = AsyncMock()
        self.comments = AsyncMock()
        self.notifications = AsyncMock()
        self.events = AsyncMock()
        self.committed = False
        self.rolled_back = False

        # Writes echo their argument back, like flush + refresh would.
        for repo, method in (
            (self.workspaces, "create"),
            (self.workspaces, "add_member"),
            (self.teams, "create"),
            (self.projects, "create"),
            (self.projects, "update"),
            (self.sections, "create"),
            (self.sections, "create_batch"),
            (self.tasks, "create"),
            (self.tasks, "update"),
            (self.comments, "create"),
            (self.notifications, "create_batch"),
            (self.events, "append"),
            (self.users, "create"),
        ):
            getattr(repo, method).side_effect = lambda entity: entity
        self.tasks.set_assignees.side_effect = lambda _task_id, user_ids: list(user_ids)

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def workspace_id() -> UUID:
    """A random workspace ID."""
    return uuid4()


@pytest.fixture
def actor_id() -> UUID:
    """A random actor ID (distinct from user_id)."""
    return uuid4()


@pytest.fixture
def workspace(workspace_id: UUID, user_id: UUID) -> Workspace:
    return Workspace(id=workspace_id, name="Acme", slug="acme", created_by=user_id)


@pytest.fixture
def project(workspace_id: UUID) -> Project:
    return Project(workspace_id=workspace_id, name="Launch")


@pytest.fixture
def section(project: Project) -> Section:
    return Section(project_id=project.id, name="To do", order=0)


@pytest.fixture
def task(project: Project, section: Section, user_id: UUID) -> Task:
    return Task(project_id=project.id, section_id=section.id, created_by=user_id, title="Ship it")


def grant_membership(
    uow: FakeUnitOfWork,
    workspace: Workspace,
    *member_ids: UUID,
    project: Project | None = None,
    section: Section | None = None,
    task: Task | None = None,
) -> None:
    """Make ``member_ids`` members of ``workspace`` and expose the given entities."""
    members = set(member_ids)

    async def get_member(ws_id: UUID, uid: UUID) -> Membership | None:
        if ws_id == workspace.id and uid in members:
            return Membership(workspace_id=ws_id, user_id=uid, role=MembershipRole.MEMBER)
        return None

    async def get_member_ids(ws_id: UUID, uids: list[UUID]) -> set[UUID]:
        return {uid for uid in uids if ws_id == workspace.id and uid in members}

    uow.workspaces.get.return_value = workspace
    uow.workspaces.get_member.side_effect = get_member
    uow.workspaces.get_member_ids.side_effect = get_member_ids
    uow.projects.get.return_value = project
    uow.sections.get.return_value = section
    uow.tasks.get.return_value = task

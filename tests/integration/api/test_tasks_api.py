"""Integration tests for Tasks, Sections and Comments API."""

from collections.abc import Callable
from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from infrastructure.auth.provider import TokenUser
from infrastructure.database.repositories.sqlalchemy_notification_repo import (
    SQLAlchemyNotificationRepository,
)


@pytest.fixture
async def project(authenticated_client: AsyncClient) -> dict[str, Any]:
    workspace = await authenticated_client.post(
        "/api/v1/workspaces", json={"name": "Tasks", "slug": "tasks"}
    )
    response = await authenticated_client.post(
        f"/api/v1/workspaces/{workspace.json()['data']['id']}/projects",
        json={"name": "Board"},
    )
    assert response.status_code == 201
    detail = await authenticated_client.get(f"/api/v1/projects/{response.json()['data']['id']}")
    return detail.json()["data"]


async def _create_task(client: AsyncClient, project: dict[str, Any], **body: Any) -> dict[str, Any]:
    response = await client.post(f"/api/v1/projects/{project['id']}/tasks", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateTask:
    @pytest.mark.asyncio
    async def test_tasks_append_within_their_section(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        todo, doing = project["sections"][0]["id"], project["sections"][1]["id"]

        a = await _create_task(authenticated_client, project, title="A", section_id=todo)
        b = await _create_task(authenticated_client, project, title="B", section_id=todo)
        c = await _create_task(authenticated_client, project, title="C", section_id=doing)

        assert (a["order"], b["order"], c["order"]) == (0, 1, 0)

    @pytest.mark.asyncio
    async def test_non_member_assignee_is_rejected(
        self,
        authenticated_client: AsyncClient,
        project: dict[str, Any],
        make_user: Callable[..., Any],
    ) -> None:
        stranger = await make_user()

        response = await authenticated_client.post(
            f"/api/v1/projects/{project['id']}/tasks",
            json={"title": "Nope", "assignee_ids": [str(stranger.id)]},
        )

        assert response.status_code == 422
        listing = await authenticated_client.get(f"/api/v1/projects/{project['id']}/tasks")
        assert listing.json()["data"] == []

    @pytest.mark.asyncio
    async def test_blank_title_is_rejected(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        response = await authenticated_client.post(
            f"/api/v1/projects/{project['id']}/tasks", json={"title": ""}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_failed_notification_rolls_back_task(
        self,
        authenticated_client: AsyncClient,
        project: dict[str, Any],
        make_user: Callable[..., Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        bob = await make_user(email="bob@example.com")
        await authenticated_client.post(
            f"/api/v1/workspaces/{project['workspace_id']}/members",
            json={"user_id": str(bob.id)},
        )

        async def failing_create_batch(self: Any, notifications: list[Any]) -> list[Any]:
            raise OperationalError("INSERT INTO notifications", {}, Exception("disk full"))

        monkeypatch.setattr(
            SQLAlchemyNotificationRepository, "create_batch", failing_create_batch
        )

        response = await authenticated_client.post(
            f"/api/v1/projects/{project['id']}/tasks",
            json={"title": "Doomed", "assignee_ids": [str(bob.id)]},
        )

        assert response.status_code == 500
        assert response.json()["error_code"] == "STORE_FAILURE"
        listing = await authenticated_client.get(f"/api/v1/projects/{project['id']}/tasks")
        assert listing.json()["data"] == []
        events = await authenticated_client.get(
            f"/api/v1/workspaces/{project['workspace_id']}/events"
        )
        assert "TASK_CREATED" not in [e["type"] for e in events.json()["data"]]


class TestSubtasks:
    @pytest.mark.asyncio
    async def test_subtasks_show_in_detail_not_listing(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        section_id = project["sections"][0]["id"]
        parent = await _create_task(
            authenticated_client, project, title="Parent", section_id=section_id
        )
        child = await _create_task(
            authenticated_client, project, title="Child", parent_id=parent["id"]
        )

        assert child["section_id"] == section_id

        listing = await authenticated_client.get(f"/api/v1/projects/{project['id']}/tasks")
        assert [t["id"] for t in listing.json()["data"]] == [parent["id"]]
        assert listing.json()["data"][0]["subtask_count"] == 1

        detail = await authenticated_client.get(f"/api/v1/tasks/{parent['id']}")
        assert [t["id"] for t in detail.json()["data"]["subtasks"]] == [child["id"]]

    @pytest.mark.asyncio
    async def test_subtasks_cannot_nest(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        parent = await _create_task(authenticated_client, project, title="Parent")
        child = await _create_task(
            authenticated_client, project, title="Child", parent_id=parent["id"]
        )

        response = await authenticated_client.post(
            f"/api/v1/projects/{project['id']}/tasks",
            json={"title": "Grandchild", "parent_id": child["id"]},
        )

        assert response.status_code == 422


class TestReorder:
    @pytest.mark.asyncio
    async def test_reorder_does_not_renumber_siblings(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        section_id = project["sections"][0]["id"]
        a = await _create_task(authenticated_client, project, title="A", section_id=section_id)
        b = await _create_task(authenticated_client, project, title="B", section_id=section_id)

        response = await authenticated_client.patch(
            f"/api/v1/tasks/{b['id']}/reorder", json={"order": 0, "section_id": section_id}
        )

        assert response.json()["data"]["order"] == 0
        unchanged = await authenticated_client.get(f"/api/v1/tasks/{a['id']}")
        assert unchanged.json()["data"]["order"] == 0

    @pytest.mark.asyncio
    async def test_move_to_other_section_is_logged(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        todo, done = project["sections"][0]["id"], project["sections"][2]["id"]
        task = await _create_task(authenticated_client, project, title="Move", section_id=todo)

        response = await authenticated_client.patch(
            f"/api/v1/tasks/{task['id']}/reorder", json={"order": 3, "section_id": done}
        )

        assert response.status_code == 200
        assert response.json()["data"]["section_id"] == done
        history = await authenticated_client.get(f"/api/v1/tasks/{task['id']}/history")
        moved = [e for e in history.json()["data"] if e["type"] == "TASK_MOVED"]
        assert len(moved) == 1
        assert moved[0]["changes"]["section_id"] == {"old": todo, "new": done}

    @pytest.mark.asyncio
    async def test_moved_task_leaves_old_section_listing(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        todo, done = project["sections"][0]["id"], project["sections"][2]["id"]
        stays = await _create_task(authenticated_client, project, title="Stay", section_id=todo)
        moves = await _create_task(authenticated_client, project, title="Go", section_id=todo)

        await authenticated_client.patch(
            f"/api/v1/tasks/{moves['id']}/reorder", json={"order": 5, "section_id": done}
        )

        base = f"/api/v1/projects/{project['id']}/tasks"
        old = await authenticated_client.get(base, params={"section_id": todo})
        new = await authenticated_client.get(base, params={"section_id": done})
        assert [t["id"] for t in old.json()["data"]] == [stays["id"]]
        assert [(t["id"], t["order"]) for t in new.json()["data"]] == [(moves["id"], 5)]

    @pytest.mark.asyncio
    async def test_section_of_another_project_is_rejected(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        other = await authenticated_client.post(
            f"/api/v1/workspaces/{project['workspace_id']}/projects", json={"name": "Other"}
        )
        other_detail = await authenticated_client.get(
            f"/api/v1/projects/{other.json()['data']['id']}"
        )
        foreign_section = other_detail.json()["data"]["sections"][0]["id"]
        task = await _create_task(authenticated_client, project, title="Stay")

        response = await authenticated_client.patch(
            f"/api/v1/tasks/{task['id']}/reorder",
            json={"order": 0, "section_id": foreign_section},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_section_reorder(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        done = project["sections"][2]

        response = await authenticated_client.patch(
            f"/api/v1/sections/{done['id']}/reorder", json={"order": 0}
        )

        assert response.status_code == 200
        sections = await authenticated_client.get(f"/api/v1/projects/{project['id']}/sections")
        orders = {s["name"]: s["order"] for s in sections.json()["data"]}
        assert orders == {"To do": 0, "In progress": 1, "Done": 0}
        assert sections.json()["data"][-1]["name"] == "In progress"


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_omitted_fields_are_kept_and_null_clears(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        task = await _create_task(
            authenticated_client,
            project,
            title="Dated",
            description="keep me",
            due_date="2030-01-01T00:00:00",
        )

        response = await authenticated_client.patch(
            f"/api/v1/tasks/{task['id']}", json={"due_date": None}
        )

        data = response.json()["data"]
        assert data["due_date"] is None
        assert data["description"] == "keep me"

    @pytest.mark.asyncio
    async def test_null_description_clears_it(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        task = await _create_task(
            authenticated_client, project, title="Described", description="d"
        )

        response = await authenticated_client.patch(
            f"/api/v1/tasks/{task['id']}", json={"description": None}
        )

        assert response.status_code == 200
        assert response.json()["data"]["description"] is None
        assert response.json()["data"]["title"] == "Described"

    @pytest.mark.asyncio
    async def test_delete_cascades_to_children(
        self, authenticated_client: AsyncClient, project: dict[str, Any]
    ) -> None:
        parent = await _create_task(authenticated_client, project, title="Parent")
        child = await _create_task(
            authenticated_client, project, title="Child", parent_id=parent["id"]
        )
        await authenticated_client.post(
            f"/api/v1/tasks/{parent['id']}/comments", json={"content": "hello"}
        )

        response = await authenticated_client.delete(f"/api/v1/tasks/{parent['id']}")

        assert response.status_code == 204
        assert (await authenticated_client.get(f"/api/v1/tasks/{parent['id']}")).status_code == 404
        assert (await authenticated_client.get(f"/api/v1/tasks/{child['id']}")).status_code == 404
        events = await authenticated_client.get(
            f"/api/v1/workspaces/{project['workspace_id']}/events"
        )
        assert "TASK_DELETED" in [e["type"] for e in events.json()["data"]]

    @pytest.mark.asyncio
    async def test_missing_task_is_not_accessible(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.delete(f"/api/v1/tasks/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_ACCESSIBLE"


class TestComments:
    @pytest.mark.asyncio
    async def test_comment_notifies_assignees_only(
        self,
        authenticated_client: AsyncClient,
        client: AsyncClient,
        project: dict[str, Any],
        make_user: Callable[..., Any],
        headers_for: Callable[[TokenUser], dict[str, str]],
        test_user: TokenUser,
    ) -> None:
        bob = await make_user(email="bob@example.com", display_name="Bob")
        carol = await make_user(email="carol@example.com", display_name="Carol")
        for member in (bob, carol):
            await authenticated_client.post(
                f"/api/v1/workspaces/{project['workspace_id']}/members",
                json={"user_id": str(member.id)},
            )
        # Created by the caller, assigned to Bob only.
        task = await _create_task(
            authenticated_client, project, title="Review", assignee_ids=[str(bob.id)]
        )

        response = await client.post(
            f"/api/v1/tasks/{task['id']}/comments",
            json={"content": "On it"},
            headers=headers_for(carol),
        )

        assert response.status_code == 201
        bob_inbox = await client.get("/api/v1/users/me/notifications", headers=headers_for(bob))
        types = [n["type"] for n in bob_inbox.json()["data"]]
        assert sorted(types) == ["COMMENT_ADDED", "TASK_ASSIGNED"]
        comment_note = next(n for n in bob_inbox.json()["data"] if n["type"] == "COMMENT_ADDED")
        assert comment_note["message"].startswith("Carol commented")

        creator_inbox = await authenticated_client.get("/api/v1/users/me/notifications")
        assert creator_inbox.json()["data"] == []

        comments = await authenticated_client.get(f"/api/v1/tasks/{task['id']}/comments")
        assert [c["content"] for c in comments.json()["data"]] == ["On it"]

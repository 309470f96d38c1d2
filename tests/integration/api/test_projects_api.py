"""Integration tests for Projects, Teams and the event log API."""

from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient


@pytest.fixture
async def workspace(authenticated_client: AsyncClient) -> dict[str, Any]:
    response = await authenticated_client.post(
        "/api/v1/workspaces", json={"name": "Projects", "slug": "projects"}
    )
    return response.json()["data"]


async def _create_project(
    client: AsyncClient, workspace: dict[str, Any], **body: Any
) -> dict[str, Any]:
    response = await client.post(f"/api/v1/workspaces/{workspace['id']}/projects", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestProjects:
    @pytest.mark.asyncio
    async def test_listing_carries_task_counts(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        project = await _create_project(authenticated_client, workspace, name="Counted")
        for title in ("one", "two"):
            await authenticated_client.post(
                f"/api/v1/projects/{project['id']}/tasks", json={"title": title}
            )

        listing = await authenticated_client.get(f"/api/v1/workspaces/{workspace['id']}/projects")

        assert [(p["name"], p["task_count"]) for p in listing.json()["data"]] == [("Counted", 2)]

    @pytest.mark.asyncio
    async def test_archived_project_is_hidden_but_readable(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        project = await _create_project(authenticated_client, workspace, name="Old")

        archived = await authenticated_client.post(f"/api/v1/projects/{project['id']}/archive")

        assert archived.status_code == 200
        assert archived.json()["data"]["archived_at"] is not None
        listing = await authenticated_client.get(f"/api/v1/workspaces/{workspace['id']}/projects")
        assert listing.json()["data"] == []
        detail = await authenticated_client.get(f"/api/v1/projects/{project['id']}")
        assert detail.status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_color_is_rejected(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        response = await authenticated_client.post(
            f"/api/v1/workspaces/{workspace['id']}/projects",
            json={"name": "Loud", "color": "red"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_is_diffed_in_event_log(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        project = await _create_project(authenticated_client, workspace, name="Before")

        response = await authenticated_client.patch(
            f"/api/v1/projects/{project['id']}", json={"name": "After", "color": "#00FF00"}
        )

        assert response.json()["data"]["name"] == "After"
        events = await authenticated_client.get(f"/api/v1/workspaces/{workspace['id']}/events")
        updated = [e for e in events.json()["data"] if e["type"] == "PROJECT_UPDATED"]
        assert updated[0]["changes"]["name"] == {"old": "Before", "new": "After"}
        assert updated[0]["project_id"] == project["id"]

    @pytest.mark.asyncio
    async def test_null_description_clears_it(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        project = await _create_project(
            authenticated_client, workspace, name="Docs", description="old notes"
        )

        response = await authenticated_client.patch(
            f"/api/v1/projects/{project['id']}", json={"description": None}
        )

        assert response.status_code == 200
        assert response.json()["data"]["description"] is None
        assert response.json()["data"]["name"] == "Docs"


class TestTeams:
    @pytest.mark.asyncio
    async def test_team_project_counts_and_detach(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        team = await authenticated_client.post(
            f"/api/v1/workspaces/{workspace['id']}/teams", json={"name": "Platform"}
        )
        assert team.status_code == 201
        team_id = team.json()["data"]["id"]
        project = await _create_project(
            authenticated_client, workspace, name="Infra", team_id=team_id
        )
        assert project["team_id"] == team_id

        teams = await authenticated_client.get(f"/api/v1/workspaces/{workspace['id']}/teams")
        assert teams.json()["data"][0]["project_count"] == 1

        detached = await authenticated_client.patch(
            f"/api/v1/projects/{project['id']}", json={"team_id": None}
        )
        assert detached.json()["data"]["team_id"] is None

        renamed = await authenticated_client.patch(
            f"/api/v1/projects/{project['id']}", json={"name": "Infra v2"}
        )
        assert renamed.json()["data"]["team_id"] is None

    @pytest.mark.asyncio
    async def test_unknown_team_is_rejected(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        response = await authenticated_client.post(
            f"/api/v1/workspaces/{workspace['id']}/projects",
            json={"name": "Orphan", "team_id": str(uuid4())},
        )

        assert response.status_code == 404


class TestEventLog:
    @pytest.mark.asyncio
    async def test_workspace_feed_records_each_mutation_once(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        project = await _create_project(authenticated_client, workspace, name="Feed")
        await authenticated_client.post(
            f"/api/v1/projects/{project['id']}/sections", json={"name": "QA"}
        )

        events = await authenticated_client.get(f"/api/v1/workspaces/{workspace['id']}/events")

        types = sorted(e["type"] for e in events.json()["data"])
        assert types == ["MEMBER_ADDED", "PROJECT_CREATED", "SECTION_CREATED"]

    @pytest.mark.asyncio
    async def test_feed_is_paginated(
        self, authenticated_client: AsyncClient, workspace: dict[str, Any]
    ) -> None:
        await _create_project(authenticated_client, workspace, name="A")
        await _create_project(authenticated_client, workspace, name="B")

        page = await authenticated_client.get(
            f"/api/v1/workspaces/{workspace['id']}/events", params={"limit": 2, "offset": 1}
        )

        assert len(page.json()["data"]) == 2
        assert page.json()["meta"] == {"limit": 2, "offset": 1}

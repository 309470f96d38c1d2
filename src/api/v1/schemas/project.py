"""Pydantic schemas for Project and Section API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ProjectCreate(BaseModel):
    """Schema for creating a Project."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    color: str | None = Field(None, pattern=COLOR_PATTERN)
    team_id: UUID | None = None


class ProjectUpdate(BaseModel):
    """Schema for updating a Project (all fields optional).

    Sending ``team_id: null`` detaches the project from its team; omitting
    it leaves the team unchanged.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    color: str | None = Field(None, pattern=COLOR_PATTERN)
    team_id: UUID | None = None


class SectionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class SectionReorder(BaseModel):
    order: int = Field(..., ge=0)


class SectionResponse(BaseModel):
    """Schema for Section response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    name: str
    order: int
    created_at: datetime


class ProjectResponse(BaseModel):
    """Schema for Project response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "workspace_id": "456e4567-e89b-12d3-a456-426614174000",
                "team_id": None,
                "name": "Website relaunch",
                "description": None,
                "color": "#6366F1",
                "archived_at": None,
                "task_count": 12,
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-03T16:20:00",
            }
        },
    )

    id: UUID
    workspace_id: UUID
    team_id: UUID | None
    name: str
    description: str | None
    color: str | None
    archived_at: datetime | None
    task_count: int | None = None
    sections: list[SectionResponse] | None = None
    created_at: datetime
    updated_at: datetime


class ProjectListResponse(BaseModel):
    data: list[ProjectResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class ProjectDetailResponse(BaseModel):
    data: ProjectResponse


class SectionListResponse(BaseModel):
    data: list[SectionResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class SectionDetailResponse(BaseModel):
    data: SectionResponse

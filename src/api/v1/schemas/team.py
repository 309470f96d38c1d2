"""Pydantic schemas for Team API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)


class TeamResponse(BaseModel):
    """Schema for Team response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workspace_id: UUID
    name: str
    description: str | None
    project_count: int = 0
    created_at: datetime


class TeamListResponse(BaseModel):
    data: list[TeamResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TeamDetailResponse(BaseModel):
    data: TeamResponse

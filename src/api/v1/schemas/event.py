"""Pydantic schemas for Event Log API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EventResponse(BaseModel):
    """Schema for an event log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    description: str
    user_id: UUID
    workspace_id: UUID
    project_id: UUID | None
    task_id: UUID | None
    changes: dict[str, Any] | None
    created_at: datetime


class EventListResponse(BaseModel):
    data: list[EventResponse]
    meta: dict[str, Any] = Field(default_factory=dict)

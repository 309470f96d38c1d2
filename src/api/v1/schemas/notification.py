"""Pydantic schemas for Notification API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class NotificationResponse(BaseModel):
    """Schema for Notification response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    title: str
    message: str
    task_id: UUID | None
    project_id: UUID | None
    is_read: bool
    created_at: datetime


class NotificationListResponse(BaseModel):
    """Inbox page; ``meta`` carries ``unread_count``."""

    data: list[NotificationResponse]
    meta: dict[str, Any] = Field(default_factory=dict)

"""Pydantic schemas for Task API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.comment import CommentResponse
from domain.entities.task import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """Schema for creating a Task."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10000)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    start_date: datetime | None = None
    section_id: UUID | None = None
    parent_id: UUID | None = None
    assignee_ids: list[UUID] = Field(default_factory=list, max_length=50)


class TaskUpdate(BaseModel):
    """Schema for updating a Task (all fields optional).

    ``due_date``, ``start_date`` and ``section_id`` may be sent as null to
    clear them. ``assignee_ids`` replaces the whole assignee set.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    start_date: datetime | None = None
    section_id: UUID | None = None
    assignee_ids: list[UUID] | None = Field(None, max_length=50)


class TaskReorder(BaseModel):
    """Target position of a task. ``section_id: null`` means no section."""

    order: int = Field(..., ge=0)
    section_id: UUID | None = None


class TaskResponse(BaseModel):
    """Schema for Task response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "project_id": "456e4567-e89b-12d3-a456-426614174000",
                "section_id": "789e4567-e89b-12d3-a456-426614174000",
                "parent_id": None,
                "title": "Draft landing page copy",
                "description": None,
                "status": "IN_PROGRESS",
                "priority": "HIGH",
                "due_date": "2026-03-01T00:00:00",
                "start_date": None,
                "order": 2,
                "assignee_ids": ["abce4567-e89b-12d3-a456-426614174000"],
                "created_by": "abce4567-e89b-12d3-a456-426614174000",
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-02T09:30:00",
                "completed_at": None,
                "subtask_count": 1,
                "comment_count": 3,
            }
        },
    )

    id: UUID
    project_id: UUID
    section_id: UUID | None
    parent_id: UUID | None
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    start_date: datetime | None
    order: int
    assignee_ids: list[UUID] = []
    created_by: UUID
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None
    subtask_count: int | None = None
    comment_count: int | None = None


class TaskDetailData(TaskResponse):
    """A task with its subtasks and comments."""

    subtasks: list[TaskResponse] = []
    comments: list[CommentResponse] = []


class TaskListResponse(BaseModel):
    data: list[TaskResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TaskDetailResponse(BaseModel):
    data: TaskResponse


class TaskFullResponse(BaseModel):
    data: TaskDetailData

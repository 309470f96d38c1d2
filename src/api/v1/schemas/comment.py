"""Pydantic schemas for Comment API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(BaseModel):
    """Schema for Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    task_id: UUID
    user_id: UUID
    content: str
    created_at: datetime


class CommentListResponse(BaseModel):
    data: list[CommentResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class CommentDetailResponse(BaseModel):
    data: CommentResponse

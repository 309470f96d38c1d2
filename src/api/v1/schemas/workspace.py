"""Pydantic schemas for Workspace API."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class WorkspaceCreate(BaseModel):
    """Schema for creating a Workspace."""

    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(
        None,
        min_length=1,
        max_length=100,
        description="Lowercase letters, digits and hyphens; derived from the name when omitted",
    )
    description: Optional[str] = Field(None, max_length=1000)


class WorkspaceResponse(BaseModel):
    """Schema for Workspace response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Acme",
                "slug": "acme",
                "description": "Product and engineering",
                "created_by": "456e4567-e89b-12d3-a456-426614174000",
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    slug: str
    description: Optional[str]
    created_by: UUID
    created_at: datetime
    updated_at: datetime


class MemberResponse(BaseModel):
    """Schema for a workspace membership."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    email: str = ""
    display_name: Optional[str] = None
    role: str
    joined_at: datetime


class WorkspaceListResponse(BaseModel):
    """Schema for list of Workspaces response."""

    data: List[WorkspaceResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class WorkspaceDetailResponse(BaseModel):
    """Schema for single Workspace response."""

    data: WorkspaceResponse


class MemberListResponse(BaseModel):
    data: List[MemberResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class MemberDetailResponse(BaseModel):
    data: MemberResponse


class AddMemberRequest(BaseModel):
    """Schema for adding an existing user to a workspace."""

    user_id: UUID

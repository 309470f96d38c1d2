"""Event log domain entity and event type constants."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4


class EventType(StrEnum):
    """Audit event types."""

    MEMBER_ADDED = "MEMBER_ADDED"
    TEAM_CREATED = "TEAM_CREATED"
    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_UPDATED = "PROJECT_UPDATED"
    PROJECT_ARCHIVED = "PROJECT_ARCHIVED"
    SECTION_CREATED = "SECTION_CREATED"
    TASK_CREATED = "TASK_CREATED"
    TASK_UPDATED = "TASK_UPDATED"
    TASK_MOVED = "TASK_MOVED"
    TASK_DELETED = "TASK_DELETED"
    COMMENT_ADDED = "COMMENT_ADDED"


@dataclass(frozen=True)
class EventLogEntry:
    """Append-only audit record. Never mutated or deleted."""

    type: EventType
    description: str
    user_id: UUID
    workspace_id: UUID
    id: UUID = field(default_factory=uuid4)
    project_id: UUID | None = None
    task_id: UUID | None = None
    changes: dict[str, Any] | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

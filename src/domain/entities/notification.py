"""Notification domain entity and type constants."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class NotificationType(StrEnum):
    """Notification kinds produced by the fan-out."""

    TASK_ASSIGNED = "TASK_ASSIGNED"
    COMMENT_ADDED = "COMMENT_ADDED"


@dataclass
class Notification:
    """A notification addressed to exactly one recipient."""

    user_id: UUID
    type: NotificationType
    title: str
    message: str
    id: UUID = field(default_factory=uuid4)
    task_id: UUID | None = None
    project_id: UUID | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

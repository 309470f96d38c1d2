"""Task domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

from domain.entities.comment import Comment


class TaskStatus(StrEnum):
    """Task status. Any status may move to any other."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    BLOCKED = "BLOCKED"


class TaskPriority(StrEnum):
    """Task priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


@dataclass
class Task:
    """Domain entity for a Task.

    ``order`` is meaningful among tasks sharing ``(project_id, section_id)``.
    ``assignee_ids`` mirrors the task's TaskAssignee rows.
    """

    project_id: UUID
    created_by: UUID
    title: str
    id: UUID = field(default_factory=uuid4)
    section_id: UUID | None = None
    parent_id: UUID | None = None
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    start_date: datetime | None = None
    order: int = 0
    assignee_ids: list[UUID] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_subtask(self) -> bool:
        return self.parent_id is not None

    def set_status(self, status: TaskStatus) -> None:
        """Move to ``status``, keeping ``completed_at`` in step.

        Entering DONE stamps the completion time, leaving DONE clears it,
        and staying in DONE keeps the original stamp.
        """
        if status == TaskStatus.DONE:
            if self.status != TaskStatus.DONE or self.completed_at is None:
                self.completed_at = datetime.utcnow()
        else:
            self.completed_at = None
        self.status = status
        self.updated_at = datetime.utcnow()


@dataclass(frozen=True, slots=True)
class TaskSummary:
    """Read-only value object: a task with its child counts for listings."""

    task: Task
    subtask_count: int = 0
    comment_count: int = 0


@dataclass(frozen=True, slots=True)
class TaskDetail:
    """Read-only value object: a task with its subtasks and comments."""

    task: Task
    subtasks: list[Task]
    comments: list[Comment]

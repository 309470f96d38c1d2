"""Project and Section domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

DEFAULT_SECTION_NAMES = ("To do", "In progress", "Done")


@dataclass
class Project:
    """Domain entity for a Project."""

    workspace_id: UUID
    name: str
    id: UUID = field(default_factory=uuid4)
    team_id: UUID | None = None
    description: str | None = None
    color: str | None = None
    archived_at: datetime | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    def archive(self) -> None:
        """Soft-archive the project. Tasks and sections are kept."""
        if self.archived_at is None:
            self.archived_at = datetime.utcnow()
        self.updated_at = datetime.utcnow()


@dataclass
class Section:
    """Ordered column/group of tasks inside a project."""

    project_id: UUID
    name: str
    order: int = 0
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

"""Project and Section repository protocols."""

from typing import Protocol
from uuid import UUID

from domain.entities.project import Project, Section


class IProjectRepository(Protocol):
    """Repository interface for Project entities."""

    async def get(self, id: UUID) -> Project | None:
        """Get a project by ID (archived projects included)."""
        ...

    async def get_active_for_workspace(self, workspace_id: UUID) -> list[Project]:
        """Get non-archived projects of a workspace, most recently updated first."""
        ...

    async def count_tasks(self, project_ids: list[UUID]) -> dict[UUID, int]:
        """Count tasks per project."""
        ...

    async def create(self, project: Project) -> Project:
        """Create a new project."""
        ...

    async def update(self, project: Project) -> Project:
        """Update an existing project."""
        ...


class ISectionRepository(Protocol):
    """Repository interface for Section entities."""

    async def get(self, id: UUID) -> Section | None:
        """Get a section by ID."""
        ...

    async def get_for_project(self, project_id: UUID) -> list[Section]:
        """Get the sections of a project in display order."""
        ...

    async def max_order(self, project_id: UUID) -> int | None:
        """Highest section order in the project, or None if it has none."""
        ...

    async def create(self, section: Section) -> Section:
        """Create a new section."""
        ...

    async def create_batch(self, sections: list[Section]) -> list[Section]:
        """Create several sections at once."""
        ...

    async def update_order(self, section_id: UUID, order: int) -> Section:
        """Write a new order value for a section."""
        ...

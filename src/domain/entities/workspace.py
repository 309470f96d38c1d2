"""Workspace domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class MembershipRole(StrEnum):
    """Workspace membership role.

    Stored on every membership but not consulted by any permission check:
    an OWNER and a MEMBER can perform the same operations.
    """

    OWNER = "OWNER"
    MEMBER = "MEMBER"


@dataclass
class Workspace:
    """Domain entity for a Workspace, the root of a tenancy boundary."""

    name: str
    slug: str
    created_by: UUID
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass
class Membership:
    """Domain entity proving a user belongs to a workspace."""

    workspace_id: UUID
    user_id: UUID
    role: MembershipRole = MembershipRole.MEMBER
    joined_at: datetime = field(default_factory=datetime.utcnow)

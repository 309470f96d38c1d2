"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """A user known to the identity provider.

    ``credential_hash`` belongs to the identity provider and is never read
    by the domain layer.
    """

    email: str
    id: UUID = field(default_factory=uuid4)
    display_name: str | None = None
    credential_hash: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

"""Domain models for accounts."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class AuthIdentity:
    """Authenticated identity supplied by the auth provider."""

    uid: str
    email: str | None = None
    display_name: str | None = None

    @property
    def label(self) -> str:
        """Name shown next to the user's photos."""
        return self.display_name or self.email or self.uid


@dataclass(frozen=True)
class UserRecord:
    """Represents a user profile stored in the database."""

    uid: str
    display_name: str | None
    email: str | None
    events_created: frozenset[UUID] = field(default_factory=frozenset)
    events_joined: frozenset[UUID] = field(default_factory=frozenset)

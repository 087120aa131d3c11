"""User profile business logic."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from event_snaps.domain.models import AuthIdentity, UserRecord


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_user(self, uid: str) -> UserRecord | None:
        """Return the profile for an auth uid, if present."""

    def get_users(self, uids: Iterable[str]) -> list[UserRecord]:
        """Return the profiles that exist for the given uids."""

    def create_user(self, identity: AuthIdentity) -> UserRecord:
        """Create and return a new profile."""

    def add_event_created(self, uid: str, event_id: UUID) -> None:
        """Append an event to the user's created-events index."""

    def add_event_joined(self, uid: str, event_id: UUID) -> None:
        """Append an event to the user's joined-events index."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def ensure_user(self, identity: AuthIdentity) -> UserRecord:
        """Ensure a profile exists for the authenticated identity and return it."""
        existing = self.repository.get_user(identity.uid)
        if existing:
            return existing
        return self.repository.create_user(identity)

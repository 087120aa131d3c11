"""Supabase-backed user profile repository."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from event_snaps.adapters.supabase_errors import storage_errors
from event_snaps.domain.errors import StorageError
from event_snaps.domain.models import AuthIdentity, UserRecord
from event_snaps.services.users import UserRepository

_USER_COLUMNS = "uid, display_name, email, events_created, events_joined"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_user(self, uid: str) -> UserRecord | None:
        """Return the profile for an auth uid, if present."""
        with storage_errors("Accessing user profiles"):
            response = (
                self.client.table("users")
                .select(_USER_COLUMNS)
                .eq("uid", uid)
                .limit(1)
                .execute()
            )
        if response.data:
            return _to_user(response.data[0])
        return None

    def get_users(self, uids: Iterable[str]) -> list[UserRecord]:
        """Return the profiles that exist for the given uids."""
        wanted = list(uids)
        if not wanted:
            return []
        with storage_errors("Accessing user profiles"):
            response = (
                self.client.table("users")
                .select(_USER_COLUMNS)
                .in_("uid", wanted)
                .execute()
            )
        return [_to_user(row) for row in response.data or []]

    def create_user(self, identity: AuthIdentity) -> UserRecord:
        """Create a profile row and return it."""
        with storage_errors("Accessing user profiles"):
            response = (
                self.client.table("users")
                .insert(
                    {
                        "uid": identity.uid,
                        "display_name": identity.display_name,
                        "email": identity.email,
                        "events_created": [],
                        "events_joined": [],
                    }
                )
                .execute()
            )
        if not response.data:
            raise StorageError("Failed to create user in Supabase")
        return _to_user(response.data[0])

    def add_event_created(self, uid: str, event_id: UUID) -> None:
        """Append an event to the created-events index."""
        with storage_errors("Updating user event index"):
            self.client.rpc(
                "user_add_event_created", {"p_uid": uid, "p_event_id": str(event_id)}
            ).execute()

    def add_event_joined(self, uid: str, event_id: UUID) -> None:
        """Append an event to the joined-events index."""
        with storage_errors("Updating user event index"):
            self.client.rpc(
                "user_add_event_joined", {"p_uid": uid, "p_event_id": str(event_id)}
            ).execute()


def _to_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        uid=str(row["uid"]),
        display_name=row.get("display_name"),
        email=row.get("email"),
        events_created=frozenset(UUID(str(v)) for v in row.get("events_created") or []),
        events_joined=frozenset(UUID(str(v)) for v in row.get("events_joined") or []),
    )

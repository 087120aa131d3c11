"""Supabase-backed event repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from event_snaps.adapters.supabase_errors import storage_errors
from event_snaps.domain.errors import StorageError
from event_snaps.domain.events import EventRecord, RevealAfter, RevealMode
from event_snaps.services.events import EventRepository

_EVENT_COLUMNS = (
    "id, owner_id, owner_name, name, start_time, end_time, event_code, "
    "require_approval, reveal_photos, reveal_after, custom_reveal_date, "
    "max_camera_roll_uploads, max_guests, participants, pending_approvals, "
    "total_photos, cover_image_url"
)
_REVEAL_MODES = {mode.value for mode in RevealMode}
_REVEAL_AFTER = {delay.value for delay in RevealAfter}


@dataclass
class SupabaseEventRepository(EventRepository):
    """Supabase implementation for event persistence.

    Set membership changes go through Postgres functions so each one is a
    single atomic statement.
    """

    client: Client

    def create_event(self, owner_id: str, payload: dict[str, object]) -> EventRecord:
        """Insert an event row with the owner as its first participant."""
        row = {
            **{key: _serialize(value) for key, value in payload.items()},
            "owner_id": owner_id,
            "participants": [owner_id],
            "pending_approvals": [],
            "total_photos": 0,
        }
        with storage_errors("Creating event"):
            response = self.client.table("events").insert(row).execute()
        if not response.data:
            raise StorageError("Failed to create event")
        return _to_event(response.data[0])

    def get_event(self, event_id: UUID) -> EventRecord | None:
        """Return an event by id, if present."""
        with storage_errors("Reading events"):
            response = (
                self.client.table("events")
                .select(_EVENT_COLUMNS)
                .eq("id", str(event_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _to_event(response.data[0])

    def find_by_code(self, event_code: str) -> list[EventRecord]:
        """Return every event holding a join code."""
        with storage_errors("Reading events"):
            response = (
                self.client.table("events")
                .select(_EVENT_COLUMNS)
                .eq("event_code", event_code)
                .execute()
            )
        return [_to_event(row) for row in response.data or []]

    def list_owned(self, owner_id: str) -> list[EventRecord]:
        """Return events created by a user, latest first."""
        with storage_errors("Reading events"):
            response = (
                self.client.table("events")
                .select(_EVENT_COLUMNS)
                .eq("owner_id", owner_id)
                .order("start_time", desc=True)
                .execute()
            )
        return [_to_event(row) for row in response.data or []]

    def list_participating(self, user_id: str) -> list[EventRecord]:
        """Return events whose participants array contains the user."""
        with storage_errors("Reading events"):
            response = (
                self.client.table("events")
                .select(_EVENT_COLUMNS)
                .contains("participants", [user_id])
                .order("start_time", desc=True)
                .execute()
            )
        return [_to_event(row) for row in response.data or []]

    def add_participant(self, event_id: UUID, user_id: str) -> None:
        """Add a user to the participants array."""
        self._call("event_add_participant", event_id, user_id)

    def add_pending(self, event_id: UUID, user_id: str) -> None:
        """Add a user to the pending approvals array."""
        self._call("event_add_pending", event_id, user_id)

    def approve_pending(self, event_id: UUID, user_id: str) -> None:
        """Move a user from pending approvals to participants."""
        self._call("event_approve_pending", event_id, user_id)

    def remove_pending(self, event_id: UUID, user_id: str) -> None:
        """Remove a user from the pending approvals array."""
        self._call("event_remove_pending", event_id, user_id)

    def increment_total_photos(self, event_id: UUID) -> None:
        """Add one to the event's photo counter."""
        with storage_errors("Counting photo"):
            self.client.rpc(
                "increment_total_photos", {"p_event_id": str(event_id)}
            ).execute()

    def _call(self, function: str, event_id: UUID, user_id: str) -> None:
        with storage_errors("Updating event membership"):
            self.client.rpc(
                function, {"p_event_id": str(event_id), "p_user_id": user_id}
            ).execute()


def _serialize(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _parse_time(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def _to_event(row: dict[str, object]) -> EventRecord:
    reveal_photos = row.get("reveal_photos")
    reveal_after = row.get("reveal_after")
    return EventRecord(
        id=UUID(str(row["id"])),
        owner_id=str(row["owner_id"]),
        owner_name=row.get("owner_name"),
        name=str(row.get("name", "")),
        start_time=datetime.fromisoformat(str(row["start_time"])),
        end_time=datetime.fromisoformat(str(row["end_time"])),
        event_code=str(row.get("event_code", "")),
        require_approval=bool(row.get("require_approval")),
        reveal_photos=(
            RevealMode(reveal_photos) if reveal_photos in _REVEAL_MODES else None
        ),
        reveal_after=(
            RevealAfter(reveal_after) if reveal_after in _REVEAL_AFTER else None
        ),
        custom_reveal_date=_parse_time(row.get("custom_reveal_date")),
        max_camera_roll_uploads=int(row.get("max_camera_roll_uploads", 5)),
        max_guests=int(row.get("max_guests", 7)),
        participants=frozenset(row.get("participants") or []),
        pending_approvals=frozenset(row.get("pending_approvals") or []),
        total_photos=int(row.get("total_photos", 0)),
        cover_image_url=row.get("cover_image_url"),
    )

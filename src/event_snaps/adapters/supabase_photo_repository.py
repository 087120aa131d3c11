"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from event_snaps.adapters.supabase_errors import storage_errors
from event_snaps.domain.errors import StorageError
from event_snaps.domain.photos import PhotoRecord, PhotoSource
from event_snaps.services.photos import PhotoRepository

_PHOTO_COLUMNS = "id, event_id, user_id, user_name, source, download_url, uploaded_at"


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo metadata persistence."""

    client: Client

    def create_photo(  # noqa: PLR0913
        self,
        photo_id: UUID,
        event_id: UUID,
        user_id: str,
        user_name: str | None,
        source: PhotoSource,
        download_url: str,
    ) -> PhotoRecord:
        """Create a photo metadata row and return it."""
        with storage_errors("Accessing photos"):
            response = (
                self.client.table("photos")
                .insert(
                    {
                        "id": str(photo_id),
                        "event_id": str(event_id),
                        "user_id": user_id,
                        "user_name": user_name,
                        "source": str(source),
                        "download_url": download_url,
                        "uploaded_at": datetime.now(tz=UTC).isoformat(),
                    }
                )
                .execute()
            )
        if not response.data:
            raise StorageError("Failed to create photo metadata")
        return _to_photo(response.data[0])

    def list_photos(self, event_id: UUID) -> list[PhotoRecord]:
        """Return an event's photos, newest first."""
        with storage_errors("Accessing photos"):
            response = (
                self.client.table("photos")
                .select(_PHOTO_COLUMNS)
                .eq("event_id", str(event_id))
                .order("uploaded_at", desc=True)
                .execute()
            )
        return [_to_photo(row) for row in response.data or []]

    def count_camera_roll(self, event_id: UUID, user_id: str) -> int:
        """Return the exact number of gallery uploads by a user for an event."""
        with storage_errors("Accessing photos"):
            response = (
                self.client.table("photos")
                .select("id", count="exact")
                .eq("event_id", str(event_id))
                .eq("user_id", user_id)
                .eq("source", str(PhotoSource.CAMERA_ROLL))
                .execute()
            )
        if response.count is not None:
            return response.count
        return len(response.data or [])


def _to_photo(row: dict[str, object]) -> PhotoRecord:
    return PhotoRecord(
        id=UUID(str(row["id"])),
        event_id=UUID(str(row["event_id"])),
        user_id=str(row["user_id"]),
        user_name=row.get("user_name"),
        source=PhotoSource(row["source"]),
        download_url=str(row["download_url"]),
        uploaded_at=datetime.fromisoformat(str(row["uploaded_at"])),
    )

"""Photo listing and uploads, gated by the reveal and quota policies."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID, uuid4

from event_snaps.domain.errors import (
    NotParticipantError,
    PhotosLockedError,
    StorageError,
    UploadLimitReachedError,
    UploadNotAllowedError,
    ValidationError,
)
from event_snaps.domain.events import EventRecord, EventStatus
from event_snaps.domain.membership import is_participant
from event_snaps.domain.photos import PhotoRecord, PhotoSource
from event_snaps.domain.quota import (
    UploadBatchDecision,
    decide_upload_batch,
    limit_message,
)
from event_snaps.domain.status import resolve_status
from event_snaps.domain.visibility import can_view_photos, reveal_message
from event_snaps.services.clock import Clock, utcnow
from event_snaps.services.events import EventService

_logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Persistence interface for photo metadata."""

    def create_photo(  # noqa: PLR0913
        self,
        photo_id: UUID,
        event_id: UUID,
        user_id: str,
        user_name: str | None,
        source: PhotoSource,
        download_url: str,
    ) -> PhotoRecord:
        """Create a photo row and return it."""

    def list_photos(self, event_id: UUID) -> list[PhotoRecord]:
        """Return an event's photos, newest first."""

    def count_camera_roll(self, event_id: UUID, user_id: str) -> int:
        """Return the exact number of gallery uploads by a user for an event."""


class BlobStorage(Protocol):
    """Binary storage for image files."""

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store bytes at ``path`` and return a retrievable URL."""

    def remove(self, path: str) -> None:
        """Delete the object at ``path``."""


def photo_path(event_id: UUID, photo_id: UUID) -> str:
    """Return the storage path of a photo's image file."""
    return f"events/{event_id}/photos/{photo_id}.jpg"


@dataclass
class PhotoService:
    """Application service for the event gallery."""

    event_service: EventService
    photo_repository: PhotoRepository
    blob_storage: BlobStorage
    clock: Clock = utcnow

    def list_photos(self, event_id: UUID, user_id: str) -> list[PhotoRecord]:
        """Return the gallery if the viewer is a participant and photos are revealed.

        The reveal check happens before any photo is read.
        """
        event = self.event_service.get_event(event_id)
        if not is_participant(event, user_id):
            raise NotParticipantError("Join the event to see its photos")
        now = self.clock()
        if not can_view_photos(event, now):
            raise PhotosLockedError(reveal_message(event, now))
        return self.photo_repository.list_photos(event.id)

    def plan_camera_roll_upload(
        self, event_id: UUID, user_id: str, requested_count: int
    ) -> UploadBatchDecision:
        """Decide how many gallery photos from a batch may be uploaded."""
        if requested_count < 1:
            raise ValidationError("Select at least one photo to upload")
        event = self.event_service.get_event(event_id)
        self._ensure_can_upload(event, user_id)
        return self._check_quota(event, user_id, requested_count)

    def upload_photo(  # noqa: PLR0913
        self,
        event_id: UUID,
        user_id: str,
        user_name: str | None,
        source: PhotoSource,
        content: bytes,
        content_type: str = "image/jpeg",
    ) -> PhotoRecord:
        """Store one photo and record it against the event."""
        if not content:
            raise ValidationError("Photo is empty")
        event = self.event_service.get_event(event_id)
        self._ensure_can_upload(event, user_id)
        if source == PhotoSource.CAMERA_ROLL:
            self._check_quota(event, user_id, 1)

        photo_id = uuid4()
        path = photo_path(event.id, photo_id)
        download_url = self.blob_storage.upload(path, content, content_type)
        try:
            photo = self.photo_repository.create_photo(
                photo_id=photo_id,
                event_id=event.id,
                user_id=user_id,
                user_name=user_name,
                source=PhotoSource(source),
                download_url=download_url,
            )
        except StorageError:
            self._discard_blob(path)
            raise
        try:
            self.event_service.repository.increment_total_photos(event.id)
        except StorageError:
            # The photo is stored; only the denormalised counter lags.
            _logger.warning(
                "Photo counter not updated: event_id=%s photo_id=%s",
                event.id,
                photo_id,
                exc_info=True,
            )
        _logger.info(
            "Photo uploaded: event_id=%s user=%s source=%s", event.id, user_id, source
        )
        return photo

    def _discard_blob(self, path: str) -> None:
        try:
            self.blob_storage.remove(path)
        except StorageError:
            _logger.warning("Orphaned photo file left at %s", path, exc_info=True)

    def _ensure_can_upload(self, event: EventRecord, user_id: str) -> None:
        if not is_participant(event, user_id):
            raise UploadNotAllowedError("Only participants can upload photos")
        status = resolve_status(event.start_time, event.end_time, self.clock())
        if status is not EventStatus.ACTIVE:
            raise UploadNotAllowedError(f"Uploads are closed: the event is {status}")

    def _check_quota(
        self, event: EventRecord, user_id: str, requested_count: int
    ) -> UploadBatchDecision:
        if event.is_unlimited:
            return decide_upload_batch(event.max_camera_roll_uploads, 0, requested_count)
        already = self.photo_repository.count_camera_roll(event.id, user_id)
        decision = decide_upload_batch(
            event.max_camera_roll_uploads, already, requested_count
        )
        if decision.limit_reached:
            raise UploadLimitReachedError(limit_message(event.max_camera_roll_uploads))
        return decision

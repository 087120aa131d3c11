"""Domain models for uploaded photos."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class PhotoSource(StrEnum):
    """Where an uploaded photo came from."""

    CAMERA = "camera"
    CAMERA_ROLL = "camera_roll"


@dataclass(frozen=True)
class PhotoRecord:
    """Represents an uploaded photo."""

    id: UUID
    event_id: UUID
    user_id: str
    user_name: str | None
    source: PhotoSource
    download_url: str
    uploaded_at: datetime

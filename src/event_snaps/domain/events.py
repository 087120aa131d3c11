"""Domain models for photo-sharing events."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

UNLIMITED_UPLOADS = -1


class EventStatus(StrEnum):
    """Lifecycle status of an event relative to the current time."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    ENDED = "ended"


class RevealMode(StrEnum):
    """When uploaded photos become visible to participants."""

    DURING = "during"
    AFTER = "after"


class RevealAfter(StrEnum):
    """Delay applied to an `after` reveal."""

    TWELVE_HOURS = "12h"
    TWENTY_FOUR_HOURS = "24h"
    CUSTOM = "custom"


@dataclass(frozen=True)
class EventRecord:
    """Represents a persisted photo-sharing event."""

    id: UUID
    owner_id: str
    name: str
    start_time: datetime
    end_time: datetime
    event_code: str
    require_approval: bool = False
    reveal_photos: RevealMode | None = RevealMode.DURING
    reveal_after: RevealAfter | None = None
    custom_reveal_date: datetime | None = None
    max_camera_roll_uploads: int = 5
    max_guests: int = 7
    participants: frozenset[str] = field(default_factory=frozenset)
    pending_approvals: frozenset[str] = field(default_factory=frozenset)
    total_photos: int = 0
    cover_image_url: str | None = None
    owner_name: str | None = None

    @property
    def is_unlimited(self) -> bool:
        """Return True when camera-roll uploads are not capped."""
        return self.max_camera_roll_uploads == UNLIMITED_UPLOADS


@dataclass(frozen=True)
class EventDraft:
    """Owner-supplied fields for a new event."""

    name: str
    start_time: datetime
    end_time: datetime
    require_approval: bool = False
    reveal_photos: RevealMode = RevealMode.DURING
    reveal_after: RevealAfter | None = None
    custom_reveal_date: datetime | None = None
    max_camera_roll_uploads: int | None = None
    max_guests: int | None = None
    cover_image_url: str | None = None

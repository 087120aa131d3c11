"""Pydantic models for API request payloads."""

from pydantic import AwareDatetime, BaseModel, Field

from event_snaps.domain.events import EventDraft, RevealAfter, RevealMode


class CreateEventRequest(BaseModel):
    """Payload for creating an event."""

    name: str = Field(min_length=1)
    start_time: AwareDatetime
    end_time: AwareDatetime
    require_approval: bool = False
    reveal_photos: RevealMode = RevealMode.DURING
    reveal_after: RevealAfter | None = None
    custom_reveal_date: AwareDatetime | None = None
    max_camera_roll_uploads: int | None = None
    max_guests: int | None = None
    cover_image_url: str | None = None

    def to_draft(self) -> EventDraft:
        """Convert the payload into a domain draft."""
        return EventDraft(
            name=self.name,
            start_time=self.start_time,
            end_time=self.end_time,
            require_approval=self.require_approval,
            reveal_photos=self.reveal_photos,
            reveal_after=self.reveal_after,
            custom_reveal_date=self.custom_reveal_date,
            max_camera_roll_uploads=self.max_camera_roll_uploads,
            max_guests=self.max_guests,
            cover_image_url=self.cover_image_url,
        )


class JoinByCodeRequest(BaseModel):
    """Payload for joining with a 6-digit code."""

    code: str


class UploadPlanRequest(BaseModel):
    """Payload asking how many gallery photos may be uploaded."""

    requested_count: int = Field(ge=1)

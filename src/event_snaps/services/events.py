"""Event creation and lookup."""

import logging
import random
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from event_snaps.domain.errors import (
    EventCodeUnavailableError,
    EventNotFoundError,
    ValidationError,
)
from event_snaps.domain.events import (
    EventDraft,
    EventRecord,
    EventStatus,
    RevealAfter,
    RevealMode,
)
from event_snaps.domain.membership import MemberRole, member_role
from event_snaps.domain.models import AuthIdentity
from event_snaps.domain.quota import validate_upload_cap
from event_snaps.domain.status import resolve_status, validate_event_window
from event_snaps.domain.visibility import can_view_photos, reveal_instant, reveal_message
from event_snaps.services.clock import Clock, utcnow
from event_snaps.services.users import UserRepository

_logger = logging.getLogger(__name__)

_CODE_PATTERN = re.compile(r"^\d{6}$")
_DEFAULT_CUSTOM_REVEAL_DELAY = timedelta(hours=24)
_MIN_CUSTOM_REVEAL_DELAY = timedelta(hours=1)


class EventRepository(Protocol):
    """Persistence interface for events and their membership sets."""

    def create_event(self, owner_id: str, payload: dict[str, object]) -> EventRecord:
        """Create an event with the owner as sole participant and return it."""

    def get_event(self, event_id: UUID) -> EventRecord | None:
        """Return an event by id, if present."""

    def find_by_code(self, event_code: str) -> list[EventRecord]:
        """Return every event holding the given join code."""

    def list_owned(self, owner_id: str) -> list[EventRecord]:
        """Return events created by a user."""

    def list_participating(self, user_id: str) -> list[EventRecord]:
        """Return events whose participants include the user."""

    def add_participant(self, event_id: UUID, user_id: str) -> None:
        """Add a user to the participants set."""

    def add_pending(self, event_id: UUID, user_id: str) -> None:
        """Add a user to the pending approvals set."""

    def approve_pending(self, event_id: UUID, user_id: str) -> None:
        """Move a user from pending approvals to participants."""

    def remove_pending(self, event_id: UUID, user_id: str) -> None:
        """Remove a user from the pending approvals set."""

    def increment_total_photos(self, event_id: UUID) -> None:
        """Atomically add one to the event's photo counter."""


def generate_event_code() -> str:
    """Return a random 6-digit join code."""
    return str(random.randint(100000, 999999))  # noqa: S311


def validate_event_code(code: str) -> str:
    """Return the stripped code, or raise if it is not six digits."""
    cleaned = code.strip()
    if not _CODE_PATTERN.match(cleaned):
        raise ValidationError("Event code must be 6 digits")
    return cleaned


@dataclass(frozen=True)
class EventView:
    """An event together with its policy state for one viewer."""

    event: EventRecord
    status: EventStatus
    role: MemberRole
    can_view_photos: bool
    reveal_message: str
    reveal_at: datetime | None


@dataclass
class EventService:
    """Application service for creating and reading events."""

    repository: EventRepository
    user_repository: UserRepository
    default_camera_roll_uploads: int = 5
    default_max_guests: int = 7
    code_attempts: int = 5
    clock: Clock = utcnow
    code_factory: Callable[[], str] = generate_event_code

    def create_event(self, owner: AuthIdentity, draft: EventDraft) -> EventRecord:
        """Validate a draft, persist it and index it under the owner."""
        payload = self._build_payload(draft)
        payload["event_code"] = self._unique_code()
        payload["owner_name"] = owner.label
        event = self.repository.create_event(owner.uid, payload)
        self.user_repository.add_event_created(owner.uid, event.id)
        _logger.info("Event created: event_id=%s owner=%s", event.id, owner.uid)
        return event

    def get_event(self, event_id: UUID) -> EventRecord:
        """Return an event or raise EventNotFoundError."""
        event = self.repository.get_event(event_id)
        if event is None:
            raise EventNotFoundError("Event not found")
        return event

    def describe(self, event_id: UUID, user_id: str) -> EventView:
        """Return the event with its status and reveal state for a viewer."""
        event = self.get_event(event_id)
        now = self.clock()
        return EventView(
            event=event,
            status=resolve_status(event.start_time, event.end_time, now),
            role=member_role(event, user_id),
            can_view_photos=can_view_photos(event, now),
            reveal_message=reveal_message(event, now),
            reveal_at=reveal_instant(event),
        )

    def list_owned(self, user_id: str) -> list[EventRecord]:
        """Return events the user created."""
        return self.repository.list_owned(user_id)

    def list_joined(self, user_id: str) -> list[EventRecord]:
        """Return events the user participates in but does not own."""
        return [
            event
            for event in self.repository.list_participating(user_id)
            if event.owner_id != user_id
        ]

    def resolve_code(self, code: str) -> EventRecord:
        """Resolve a join code to a single event.

        When several events share the code, events that have not ended win,
        then the latest start time.
        """
        matches = self.repository.find_by_code(validate_event_code(code))
        if not matches:
            raise EventNotFoundError("Event not found. Please check the code.")
        if len(matches) == 1:
            return matches[0]
        now = self.clock()
        _logger.warning(
            "Event code collision: code=%s matches=%s", code.strip(), len(matches)
        )
        return min(
            matches,
            key=lambda event: (
                resolve_status(event.start_time, event.end_time, now)
                is EventStatus.ENDED,
                -event.start_time.timestamp(),
            ),
        )

    def _unique_code(self) -> str:
        now = self.clock()
        for _ in range(self.code_attempts):
            code = self.code_factory()
            holders = [
                event
                for event in self.repository.find_by_code(code)
                if resolve_status(event.start_time, event.end_time, now)
                is not EventStatus.ENDED
            ]
            if not holders:
                return code
            _logger.info("Event code %s already in use, retrying", code)
        raise EventCodeUnavailableError(
            "Could not allocate a free event code. Please try again."
        )

    def _build_payload(self, draft: EventDraft) -> dict[str, object]:
        name = draft.name.strip()
        if not name:
            raise ValidationError("Event name is required")
        for value in (draft.start_time, draft.end_time, draft.custom_reveal_date):
            if value is not None and value.utcoffset() is None:
                raise ValidationError("Event times must include a timezone offset")
        validate_event_window(draft.start_time, draft.end_time)

        max_uploads = (
            draft.max_camera_roll_uploads
            if draft.max_camera_roll_uploads is not None
            else self.default_camera_roll_uploads
        )
        validate_upload_cap(max_uploads)
        max_guests = (
            draft.max_guests if draft.max_guests is not None else self.default_max_guests
        )
        if max_guests < 1:
            raise ValidationError("An event must allow at least one guest")

        reveal_after, custom_reveal_date = _normalize_reveal(draft)
        return {
            "name": name,
            "start_time": draft.start_time,
            "end_time": draft.end_time,
            "require_approval": draft.require_approval,
            "reveal_photos": draft.reveal_photos,
            "reveal_after": reveal_after,
            "custom_reveal_date": custom_reveal_date,
            "max_camera_roll_uploads": max_uploads,
            "max_guests": max_guests,
            "cover_image_url": draft.cover_image_url,
        }


def _normalize_reveal(draft: EventDraft) -> tuple[RevealAfter | None, datetime | None]:
    if draft.reveal_photos != RevealMode.AFTER:
        return None, None
    if draft.reveal_after != RevealAfter.CUSTOM:
        return draft.reveal_after, None
    custom = draft.custom_reveal_date
    if custom is None:
        return RevealAfter.CUSTOM, draft.end_time + _DEFAULT_CUSTOM_REVEAL_DELAY
    if custom < draft.end_time:
        return RevealAfter.CUSTOM, draft.end_time + _MIN_CUSTOM_REVEAL_DELAY
    return RevealAfter.CUSTOM, custom

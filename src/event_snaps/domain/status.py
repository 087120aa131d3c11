"""Event lifecycle status resolution."""

from datetime import datetime

from event_snaps.domain.errors import ValidationError
from event_snaps.domain.events import EventStatus


def resolve_status(start_time: datetime, end_time: datetime, now: datetime) -> EventStatus:
    """Classify an event window relative to ``now``.

    Both bounds are inclusive for ``active``.
    """
    if now < start_time:
        return EventStatus.UPCOMING
    if now <= end_time:
        return EventStatus.ACTIVE
    return EventStatus.ENDED


def validate_event_window(start_time: datetime, end_time: datetime) -> None:
    """Raise ValidationError unless the window ends after it starts."""
    if end_time <= start_time:
        raise ValidationError("Event end time must be after its start time")

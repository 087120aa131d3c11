"""Photo reveal policy.

Decides whether an event's photos may be shown to participants and builds
the message displayed while they are still hidden. Everything here is pure
and cheap: it runs on every photo-list request.
"""

from datetime import UTC, datetime, timedelta

from event_snaps.domain.events import EventRecord, RevealAfter, RevealMode

DURING_MESSAGE = "Photos are visible during and after the event."
AFTER_EVENT_MESSAGE = "Photos will appear after the event ends."
REVEAL_DATE_FORMAT = "%b %d, %Y %I:%M %p"

_REVEAL_DELAYS = {
    RevealAfter.TWELVE_HOURS: timedelta(hours=12),
    RevealAfter.TWENTY_FOUR_HOURS: timedelta(hours=24),
}


def reveal_instant(event: EventRecord) -> datetime | None:
    """Return when photos of an `after` event become visible.

    Returns None for `during` events and for `after` events whose delay is
    unset or unrecognised.
    """
    if _reveal_mode(event) is not RevealMode.AFTER:
        return None
    delay = _REVEAL_DELAYS.get(event.reveal_after)
    if delay is not None:
        return event.end_time + delay
    if event.reveal_after == RevealAfter.CUSTOM:
        return event.custom_reveal_date
    return None


def can_view_photos(event: EventRecord, now: datetime) -> bool:
    """Return True when participants may see the event's photos at ``now``."""
    if _reveal_mode(event) is RevealMode.DURING:
        return now >= event.start_time
    instant = reveal_instant(event)
    return instant is not None and now >= instant


def reveal_message(event: EventRecord, now: datetime) -> str:  # noqa: ARG001
    """Return the human-readable reveal rule for the event."""
    if _reveal_mode(event) is RevealMode.DURING:
        return DURING_MESSAGE
    instant = reveal_instant(event)
    if instant is None:
        return AFTER_EVENT_MESSAGE
    return f"Photos will be revealed on {format_instant(instant)}."


def format_instant(instant: datetime) -> str:
    """Format an instant for display, in UTC."""
    return instant.astimezone(UTC).strftime(REVEAL_DATE_FORMAT) + " UTC"


def _reveal_mode(event: EventRecord) -> RevealMode:
    # Events saved without a reveal choice default to `during`.
    if event.reveal_photos == RevealMode.AFTER:
        return RevealMode.AFTER
    return RevealMode.DURING

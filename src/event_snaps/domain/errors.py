"""Errors raised by the event policy and services."""


class EventSnapsError(Exception):
    """Base class for expected, user-facing failures."""


class ValidationError(EventSnapsError, ValueError):
    """Input violates an event invariant."""


class EventNotFoundError(EventSnapsError):
    """No event matches the given id or code."""


class NotEventOwnerError(EventSnapsError):
    """Action is reserved for the event owner."""


class NotParticipantError(EventSnapsError):
    """Caller is not a participant of the event."""


class PhotosLockedError(EventSnapsError):
    """Photos are not yet revealed to participants."""


class UploadNotAllowedError(EventSnapsError):
    """Event does not currently accept uploads from the caller."""


class UploadLimitReachedError(EventSnapsError):
    """Guest has used up their camera-roll allowance."""


class StorageError(EventSnapsError, RuntimeError):
    """A storage write failed and may be retried."""


class EventCodeUnavailableError(EventSnapsError):
    """Every generated join code was already held by a live event."""
